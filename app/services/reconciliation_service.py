"""Reconciliation of external identities into local user accounts.

One external subject maps to exactly one local user. Lookups go by the
encrypted normalized email first and fall back to the provider's subject
binding, so a user who changes their email at the provider keeps their
account.
"""

from datetime import UTC, datetime

import structlog
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.crypto import FieldCipher, normalize_email
from app.core.exceptions import IncompleteIdentityException, StorageException
from app.core.identity import FIREBASE, SUPABASE, ExternalIdentity
from app.core.security import generate_unusable_password_hash
from app.models.users import users
from app.services.user_service import UserService

logger = structlog.get_logger(__name__)

# Local column holding each provider's subject id
SUBJECT_COLUMNS = {
    SUPABASE: "supabase_id",
    FIREBASE: "google_id",
}

DEFAULT_FULL_NAME = "Clinic User"


class AccountReconciler:
    """Maps a verified external identity to one local user, creating it if needed."""

    def __init__(
        self,
        cipher: FieldCipher,
        auto_consent: bool = True,
        kvkk_version: str | None = None,
    ):
        self.cipher = cipher
        self.auto_consent = auto_consent
        self.kvkk_version = kvkk_version
        self.users = UserService(cipher)

    @staticmethod
    def subject_column(provider: str) -> str:
        """Column that stores the subject id issued by ``provider``."""
        try:
            return SUBJECT_COLUMNS[provider]
        except KeyError:
            raise IncompleteIdentityException(f"Unknown identity provider: {provider}") from None

    async def reconcile(self, db: AsyncSession, identity: ExternalIdentity) -> dict:
        """
        Resolve an external identity to a local user row.

        Args:
            db: Database session
            identity: Verified claim

        Returns:
            The created or updated user row

        Raises:
            IncompleteIdentityException: Claim has neither email nor subject, or
                has no email and matches no existing account
            StorageException: The user could not be read or written
        """
        email = normalize_email(identity.email)
        subject = identity.subject or None
        if not email and not subject:
            raise IncompleteIdentityException("Identity is missing both email and subject")

        column = self.subject_column(identity.provider)

        try:
            user = await self._find(db, email, column, subject)
            if user is None:
                return await self._create(db, identity, email, column, subject)
            return await self._update(db, user, identity, column, subject)
        except (IncompleteIdentityException, StorageException):
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(
                "external_identity_storage_failed",
                provider=identity.provider,
                error=str(e),
            )
            raise StorageException("Failed to save user") from e

    async def _find(
        self, db: AsyncSession, email: str, column: str, subject: str | None
    ) -> dict | None:
        if email:
            user = await self.users.get_user_by_email(db, email)
            if user:
                return user
        if subject:
            return await self.users.get_user_by_subject(db, column, subject)
        return None

    async def _create(
        self,
        db: AsyncSession,
        identity: ExternalIdentity,
        email: str,
        column: str,
        subject: str | None,
    ) -> dict:
        if not email:
            raise IncompleteIdentityException("Email is required to create an account")

        now = datetime.now(UTC)
        values = {
            "full_name": identity.name or email.split("@")[0] or DEFAULT_FULL_NAME,
            "email": self.cipher.encrypt(email),
            "phone": "",
            "address": "",
            "password_hash": generate_unusable_password_hash(),
            "role": "patient",
            "auth_provider": identity.auth_provider,
            "avatar_url": identity.avatar_url,
            "kvkk_consent": self.auto_consent,
            "kvkk_accepted_at": now if self.auto_consent else None,
            "kvkk_version": self.kvkk_version if self.auto_consent else None,
            "is_active": True,
            "last_login_at": now,
            column: subject,
        }

        try:
            result = await db.execute(users.insert().values(**values).returning(users))
            user = result.mappings().first()
            await db.commit()
        except IntegrityError:
            # A concurrent first sign-in created the account
            await db.rollback()
            logger.info("external_identity_create_conflict", provider=identity.provider)
            existing = await self._find(db, email, column, subject)
            if existing is None:
                raise StorageException("Failed to create user") from None
            return await self._update(db, existing, identity, column, subject)

        if not user:
            raise StorageException("Failed to create user")

        logger.info(
            "external_identity_account_created",
            user_id=user["id"],
            provider=identity.provider,
        )
        return dict(user)

    async def _update(
        self,
        db: AsyncSession,
        user: dict,
        identity: ExternalIdentity,
        column: str,
        subject: str | None,
    ) -> dict:
        values: dict = {"last_login_at": datetime.now(UTC)}

        bound = user["supabase_id"] or user["google_id"]
        if subject and not bound:
            values[column] = subject
        elif subject and user[column] != subject:
            logger.warning(
                "external_identity_binding_mismatch",
                user_id=user["id"],
                provider=identity.provider,
            )

        if identity.auth_provider and identity.auth_provider != user["auth_provider"]:
            values["auth_provider"] = identity.auth_provider
        if identity.name and identity.name != user["full_name"]:
            values["full_name"] = identity.name
        if identity.avatar_url and identity.avatar_url != user["avatar_url"]:
            values["avatar_url"] = identity.avatar_url

        result = await db.execute(
            update(users).where(users.c.id == user["id"]).values(**values).returning(users)
        )
        updated = result.mappings().first()
        await db.commit()

        if not updated:
            raise StorageException("Failed to update user")

        logger.info(
            "external_identity_reconciled",
            user_id=updated["id"],
            provider=identity.provider,
            bound=column in values,
        )
        return dict(updated)
