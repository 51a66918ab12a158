"""Authentication service for local passwords and external identities."""

from datetime import UTC, datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.crypto import FieldCipher, normalize_email
from app.core.exceptions import (
    DuplicateAccountException,
    ForbiddenException,
    InvalidCredentialsException,
    NotFoundException,
    ValidationException,
)
from app.core.identity import IdentityVerifier
from app.core.security import TokenSigner, get_password_hash, verify_password
from app.models.users import users
from app.schemas.auth import RegisterRequest
from app.schemas.users import UserUpdate
from app.services.reconciliation_service import AccountReconciler
from app.services.user_service import UserService

logger = structlog.get_logger(__name__)


class AuthService:
    """Registers users, checks passwords and issues local access tokens."""

    def __init__(
        self,
        cipher: FieldCipher,
        signer: TokenSigner,
        reconciler: AccountReconciler | None = None,
        kvkk_version: str | None = None,
    ):
        """Initialize auth service with its cipher and signer."""
        self.cipher = cipher
        self.signer = signer
        self.kvkk_version = kvkk_version
        self.users = UserService(cipher)
        self.reconciler = reconciler or AccountReconciler(cipher, kvkk_version=kvkk_version)

    def issue_token(self, user: dict) -> str:
        """Sign an access token for a stored user row."""
        return self.signer.issue(user["id"], self.cipher.decrypt(user["email"]))

    async def register(self, db: AsyncSession, data: RegisterRequest) -> tuple[dict, str]:
        """
        Create a local password account.

        Args:
            db: Database session
            data: Registration request

        Returns:
            Tuple of (user row, access token)

        Raises:
            ValidationException: A required field or the KVKK consent is missing
            DuplicateAccountException: The normalized email is already registered
        """
        full_name = (data.full_name or "").strip()
        email = normalize_email(data.email)
        phone = (data.mobile_number or "").strip()

        if not full_name or not email or not phone or not data.password:
            raise ValidationException("All fields are required")
        if not data.kvkk_consent:
            raise ValidationException("KVKK consent is required")
        if "@" not in email:
            raise ValidationException("Invalid email address")

        encrypted_email = self.cipher.encrypt(email)
        if await self.users.get_user_by_email(db, email):
            raise DuplicateAccountException()

        now = datetime.now(UTC)
        values = {
            "full_name": full_name,
            "email": encrypted_email,
            "phone": self.cipher.encrypt(phone),
            "address": self.cipher.encrypt((data.address or "").strip()),
            "password_hash": get_password_hash(data.password),
            "role": "patient",
            "auth_provider": "password",
            "kvkk_consent": True,
            "kvkk_accepted_at": now,
            "kvkk_version": self.kvkk_version,
            "is_active": True,
            "last_login_at": now,
        }

        try:
            result = await db.execute(users.insert().values(**values).returning(users))
            user = dict(result.mappings().one())
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise DuplicateAccountException() from e

        logger.info("user_registered", user_id=user["id"])
        return user, self.signer.issue(user["id"], email)

    async def login(self, db: AsyncSession, email: str, password: str) -> tuple[dict, str]:
        """
        Check a password login.

        Unknown email, deactivated account and wrong password all raise the
        same error.
        """
        normalized = normalize_email(email)
        user = await self.users.get_user_by_email(db, normalized)

        if (
            not user
            or not user["is_active"]
            or not verify_password(password, user["password_hash"])
        ):
            logger.info("login_failed")
            raise InvalidCredentialsException()

        user = await self.users.update_last_login(db, user["id"])
        logger.info("user_logged_in", user_id=user["id"])
        return user, self.signer.issue(user["id"], normalized)

    async def get_profile(self, db: AsyncSession, user_id: int) -> dict:
        """Load a user row or raise NotFoundException."""
        user = await self.users.get_user_by_id(db, user_id)
        if not user:
            raise NotFoundException("User not found")
        return user

    async def update_profile(self, db: AsyncSession, user_id: int, data: UserUpdate) -> dict:
        """Update name, mobile number and address."""
        user = await self.users.update_profile(db, user_id, data)
        logger.info("user_profile_updated", user_id=user_id)
        return user

    async def change_password(
        self, db: AsyncSession, user_id: int, current_password: str, new_password: str
    ) -> None:
        """Replace the password after checking the current one."""
        user = await self.get_profile(db, user_id)
        if not verify_password(current_password, user["password_hash"]):
            raise InvalidCredentialsException("Current password is incorrect")

        await self.users.set_password_hash(db, user_id, get_password_hash(new_password))
        logger.info("user_password_changed", user_id=user_id)

    async def sync_external_user(
        self, db: AsyncSession, bearer_token: str, verifier: IdentityVerifier
    ) -> tuple[dict, str]:
        """
        Verify an external token and resolve it to a local account.

        Returns:
            Tuple of (user row, local access token)
        """
        identity = await verifier.verify(bearer_token)
        user = await self.reconciler.reconcile(db, identity)
        if not user["is_active"]:
            raise ForbiddenException("User account is deactivated")
        return user, self.issue_token(user)
