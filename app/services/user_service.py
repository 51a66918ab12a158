"""User service for business logic."""

from datetime import UTC, datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.crypto import FieldCipher, normalize_email
from app.core.exceptions import NotFoundException
from app.models.users import users
from app.schemas.users import UserUpdate


class UserService:
    """Service for user records. Rows hold ciphertext; profiles hold plaintext."""

    def __init__(self, cipher: FieldCipher):
        """Initialize service with the field cipher."""
        self.cipher = cipher

    def to_profile(self, user: dict) -> dict:
        """Decrypt a stored user row into a profile view."""
        return {
            "id": user["id"],
            "full_name": user["full_name"],
            "email": self.cipher.decrypt(user["email"]),
            "mobile_number": self.cipher.decrypt(user["phone"]),
            "address": self.cipher.decrypt(user["address"]),
            "role": user["role"],
            "auth_provider": user["auth_provider"],
            "avatar_url": user["avatar_url"],
            "kvkk_consent": user["kvkk_consent"],
            "kvkk_accepted_at": user["kvkk_accepted_at"],
            "kvkk_version": user["kvkk_version"],
            "is_active": user["is_active"],
            "last_login_at": user["last_login_at"],
            "created_at": user["created_at"],
        }

    async def get_user_by_id(self, db: AsyncSession, user_id: int) -> dict | None:
        """Get user by internal ID."""
        result = await db.execute(select(users).where(users.c.id == user_id))
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_email(self, db: AsyncSession, email: str) -> dict | None:
        """Get user by email. The address is normalized and encrypted before lookup."""
        normalized = normalize_email(email)
        if not normalized:
            return None
        token = self.cipher.encrypt(normalized)
        result = await db.execute(select(users).where(users.c.email == token))
        user = result.mappings().first()
        return dict(user) if user else None

    async def get_user_by_subject(
        self, db: AsyncSession, column: str, subject: str
    ) -> dict | None:
        """Get user by an external identity binding column."""
        result = await db.execute(select(users).where(users.c[column] == subject))
        user = result.mappings().first()
        return dict(user) if user else None

    async def update_profile(self, db: AsyncSession, user_id: int, user_data: UserUpdate) -> dict:
        """Update the caller-editable profile fields, re-encrypting PII."""
        update_data = user_data.model_dump(exclude_unset=True)
        values: dict = {}
        if update_data.get("full_name"):
            values["full_name"] = update_data["full_name"].strip()
        if "mobile_number" in update_data:
            values["phone"] = self.cipher.encrypt(update_data["mobile_number"] or "")
        if "address" in update_data:
            values["address"] = self.cipher.encrypt(update_data["address"] or "")

        if not values:
            user = await self.get_user_by_id(db, user_id)
            if not user:
                raise NotFoundException("User not found")
            return user

        values["updated_at"] = datetime.now(UTC)
        return await self._update(db, user_id, values)

    async def update_last_login(self, db: AsyncSession, user_id: int) -> dict:
        """Refresh the user's last login timestamp."""
        return await self._update(db, user_id, {"last_login_at": datetime.now(UTC)})

    async def set_password_hash(self, db: AsyncSession, user_id: int, password_hash: str) -> dict:
        """Store a new password hash."""
        return await self._update(
            db, user_id, {"password_hash": password_hash, "updated_at": datetime.now(UTC)}
        )

    async def set_active(self, db: AsyncSession, user_id: int, is_active: bool) -> dict:
        """Activate or deactivate an account. Accounts are never hard-deleted."""
        return await self._update(
            db, user_id, {"is_active": is_active, "updated_at": datetime.now(UTC)}
        )

    async def set_role(self, db: AsyncSession, user_id: int, role: str) -> dict:
        """Assign a role."""
        return await self._update(db, user_id, {"role": role, "updated_at": datetime.now(UTC)})

    async def list_users(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 20,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> tuple[list[dict], int]:
        """
        List users for the admin panel.

        Args:
            db: Database session
            page: 1-based page number
            limit: Page size
            is_active: Filter by account state
            search: Case-insensitive substring of the full name

        Returns:
            Tuple of (rows, total matching rows)
        """
        conditions = []
        if is_active is not None:
            conditions.append(users.c.is_active == is_active)
        if search:
            conditions.append(users.c.full_name.ilike(f"%{search}%"))

        count_query = select(func.count()).select_from(users).where(*conditions)
        total = (await db.execute(count_query)).scalar_one()

        query = (
            select(users)
            .where(*conditions)
            .order_by(users.c.created_at.desc(), users.c.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await db.execute(query)
        return [dict(row) for row in result.mappings().all()], total

    async def _update(self, db: AsyncSession, user_id: int, values: dict) -> dict:
        query = update(users).where(users.c.id == user_id).values(**values).returning(users)
        result = await db.execute(query)
        user = result.mappings().first()
        await db.commit()

        if not user:
            raise NotFoundException("User not found")
        return dict(user)
