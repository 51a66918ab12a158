"""Promo card service for business logic."""

from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.models.promo_cards import promo_cards
from app.schemas.promo_cards import PromoCardCreate, PromoCardOrder, PromoCardUpdate


class PromoCardService:
    """Service for home screen promo cards."""

    async def create_card(
        self, db: AsyncSession, data: PromoCardCreate, created_by: int | None
    ) -> dict:
        """Create a promo card."""
        result = await db.execute(
            promo_cards.insert()
            .values(**data.model_dump(), created_by=created_by)
            .returning(promo_cards)
        )
        card = dict(result.mappings().one())
        await db.commit()
        return card

    async def get_card(self, db: AsyncSession, card_id: int) -> dict:
        """Get promo card by ID."""
        result = await db.execute(select(promo_cards).where(promo_cards.c.id == card_id))
        card = result.mappings().first()
        if not card:
            raise NotFoundException("Promo card not found")
        return dict(card)

    async def list_cards(self, db: AsyncSession, active_only: bool = True) -> list[dict]:
        """Cards in display order."""
        query = select(promo_cards).order_by(promo_cards.c.display_order, promo_cards.c.id)
        if active_only:
            query = query.where(promo_cards.c.is_active.is_(True))
        result = await db.execute(query)
        return [dict(c) for c in result.mappings().all()]

    async def update_card(self, db: AsyncSession, card_id: int, data: PromoCardUpdate) -> dict:
        """Update a promo card."""
        update_data = data.model_dump(exclude_unset=True)
        update_data["updated_at"] = datetime.now(UTC)
        return await self._update(db, card_id, update_data)

    async def toggle_status(self, db: AsyncSession, card_id: int) -> dict:
        """Flip the active flag."""
        card = await self.get_card(db, card_id)
        return await self._update(
            db, card_id, {"is_active": not card["is_active"], "updated_at": datetime.now(UTC)}
        )

    async def reorder(self, db: AsyncSession, orders: list[PromoCardOrder]) -> list[dict]:
        """Apply new display positions in one transaction."""
        now = datetime.now(UTC)
        for order in orders:
            result = await db.execute(
                update(promo_cards)
                .where(promo_cards.c.id == order.id)
                .values(display_order=order.display_order, updated_at=now)
            )
            if result.rowcount == 0:  # type: ignore[attr-defined]
                await db.rollback()
                raise NotFoundException(f"Promo card {order.id} not found")
        await db.commit()
        return await self.list_cards(db, active_only=False)

    async def delete_card(self, db: AsyncSession, card_id: int) -> None:
        """Delete a promo card."""
        result = await db.execute(delete(promo_cards).where(promo_cards.c.id == card_id))
        await db.commit()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise NotFoundException("Promo card not found")

    async def _update(self, db: AsyncSession, card_id: int, values: dict) -> dict:
        result = await db.execute(
            update(promo_cards).where(promo_cards.c.id == card_id).values(**values).returning(promo_cards)
        )
        card = result.mappings().first()
        await db.commit()
        if not card:
            raise NotFoundException("Promo card not found")
        return dict(card)
