"""Legal document service for business logic."""

from datetime import UTC, datetime

import structlog
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestException, NotFoundException
from app.models.legal_documents import legal_documents
from app.schemas.legal import LegalDocumentCreate, LegalDocumentUpdate

logger = structlog.get_logger(__name__)

LEGAL_KEYS = ("kvkk", "privacy", "terms")

DEFAULT_KVKK_VERSION = "1.0.0"
DEFAULT_KVKK_TITLE = "Kişisel Verilerin Korunması Kanunu (KVKK) Aydınlatma Metni"
DEFAULT_KVKK_BODY = """Bu uygulama kapsamında kişisel verileriniz KVKK'ya uygun olarak işlenmektedir.

Toplanan Veriler:
- Ad, soyad
- E-posta adresi
- Telefon numarası
- Adres bilgileri

Veri İşleme Amaçları:
- Randevu yönetimi
- İletişim
- Hizmet kalitesinin artırılması

Verileriniz üçüncü taraflarla paylaşılmamaktadır ve güvenli şekilde saklanmaktadır.

Haklarınız:
- Verilerinize erişim
- Düzeltme
- Silme
- İşlemeye itiraz"""


def default_kvkk_document() -> dict:
    """Built-in KVKK notice served until an admin publishes one."""
    return {
        "id": None,
        "key": "kvkk",
        "version": DEFAULT_KVKK_VERSION,
        "title": DEFAULT_KVKK_TITLE,
        "body": DEFAULT_KVKK_BODY,
        "language": "tr",
        "is_active": True,
        "published_at": datetime.now(UTC),
    }


class LegalService:
    """Service for versioned legal documents. One version per key and language is active."""

    async def get_active(self, db: AsyncSession, key: str, language: str = "tr") -> dict:
        """
        Get the active document for a key and language.

        Raises:
            BadRequestException: Unknown key
            NotFoundException: Nothing published and no built-in default
        """
        if key not in LEGAL_KEYS:
            raise BadRequestException("Invalid document key")

        result = await db.execute(
            select(legal_documents)
            .where(
                legal_documents.c.key == key,
                legal_documents.c.language == language,
                legal_documents.c.is_active.is_(True),
            )
            .order_by(legal_documents.c.published_at.desc(), legal_documents.c.id.desc())
        )
        document = result.mappings().first()
        if document:
            return dict(document)

        if key == "kvkk":
            return default_kvkk_document()
        raise NotFoundException("Document not found")

    async def get_document(self, db: AsyncSession, document_id: int) -> dict:
        """Get a document version by ID."""
        result = await db.execute(
            select(legal_documents).where(legal_documents.c.id == document_id)
        )
        document = result.mappings().first()
        if not document:
            raise NotFoundException("Document not found")
        return dict(document)

    async def list_documents(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 20,
        key: str | None = None,
        language: str | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[dict], int]:
        """Every version for the admin panel, newest first."""
        conditions: list = []
        if key:
            conditions.append(legal_documents.c.key == key)
        if language:
            conditions.append(legal_documents.c.language == language)
        if is_active is not None:
            conditions.append(legal_documents.c.is_active == is_active)

        total = (
            await db.execute(
                select(func.count()).select_from(legal_documents).where(*conditions)
            )
        ).scalar_one()
        result = await db.execute(
            select(legal_documents)
            .where(*conditions)
            .order_by(legal_documents.c.created_at.desc(), legal_documents.c.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return [dict(d) for d in result.mappings().all()], total

    async def _deactivate_others(
        self, db: AsyncSession, key: str, language: str, keep_id: int | None = None
    ) -> None:
        query = update(legal_documents).where(
            legal_documents.c.key == key,
            legal_documents.c.language == language,
            legal_documents.c.is_active.is_(True),
        )
        if keep_id is not None:
            query = query.where(legal_documents.c.id != keep_id)
        await db.execute(query.values(is_active=False, updated_at=datetime.now(UTC)))

    async def create_document(
        self, db: AsyncSession, data: LegalDocumentCreate, created_by: int | None
    ) -> dict:
        """Create a version. An active version replaces the current one."""
        if data.is_active:
            await self._deactivate_others(db, data.key, data.language)

        values = data.model_dump()
        values.update(
            created_by=created_by,
            published_at=datetime.now(UTC) if data.is_active else None,
        )
        result = await db.execute(
            legal_documents.insert().values(**values).returning(legal_documents)
        )
        document = dict(result.mappings().one())
        await db.commit()

        logger.info(
            "legal_document_created",
            document_id=document["id"],
            key=document["key"],
            active=document["is_active"],
        )
        return document

    async def update_document(
        self, db: AsyncSession, document_id: int, data: LegalDocumentUpdate
    ) -> dict:
        """Edit a version's text."""
        update_data = data.model_dump(exclude_unset=True)
        update_data["updated_at"] = datetime.now(UTC)
        result = await db.execute(
            update(legal_documents)
            .where(legal_documents.c.id == document_id)
            .values(**update_data)
            .returning(legal_documents)
        )
        document = result.mappings().first()
        await db.commit()
        if not document:
            raise NotFoundException("Document not found")
        return dict(document)

    async def activate_document(self, db: AsyncSession, document_id: int) -> dict:
        """Make a version the active one for its key and language."""
        document = await self.get_document(db, document_id)
        await self._deactivate_others(db, document["key"], document["language"], document_id)

        now = datetime.now(UTC)
        result = await db.execute(
            update(legal_documents)
            .where(legal_documents.c.id == document_id)
            .values(is_active=True, published_at=document["published_at"] or now, updated_at=now)
            .returning(legal_documents)
        )
        activated = dict(result.mappings().one())
        await db.commit()

        logger.info("legal_document_activated", document_id=document_id, key=activated["key"])
        return activated

    async def delete_document(self, db: AsyncSession, document_id: int) -> None:
        """Delete a version."""
        result = await db.execute(
            delete(legal_documents).where(legal_documents.c.id == document_id)
        )
        await db.commit()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundException("Document not found")
