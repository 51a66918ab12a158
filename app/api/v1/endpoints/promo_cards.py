"""Promo card endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.dependencies import AdminUser, DatabaseSession, log_action
from app.schemas.base import MessageResponse, SuccessResponse
from app.schemas.promo_cards import (
    PromoCardCreate,
    PromoCardReorder,
    PromoCardResponse,
    PromoCardUpdate,
)
from app.services.promo_card_service import PromoCardService

router = APIRouter()

PromoCardServiceDep = Annotated[PromoCardService, Depends(PromoCardService)]

CardList = SuccessResponse[list[PromoCardResponse]]
SingleCard = SuccessResponse[PromoCardResponse]


def _cards(items: list[dict]) -> SuccessResponse:
    return CardList(data=[PromoCardResponse.model_validate(c) for c in items])


@router.get("/", response_model=CardList)
async def list_promo_cards(db: DatabaseSession, service: PromoCardServiceDep):
    """Active cards in display order."""
    return _cards(await service.list_cards(db, active_only=True))


@router.get("/admin", response_model=CardList)
async def list_all_promo_cards(db: DatabaseSession, service: PromoCardServiceDep, admin: AdminUser):
    """Every card in display order."""
    return _cards(await service.list_cards(db, active_only=False))


@router.put(
    "/reorder",
    response_model=CardList,
    dependencies=[Depends(log_action("REORDER_PROMO_CARDS"))],
)
async def reorder_promo_cards(
    data: PromoCardReorder, db: DatabaseSession, service: PromoCardServiceDep, admin: AdminUser
):
    """Set new display positions for several cards at once."""
    return _cards(await service.reorder(db, data.orders))


@router.get("/{card_id}", response_model=SingleCard)
async def get_promo_card(card_id: int, db: DatabaseSession, service: PromoCardServiceDep):
    """Get a promo card by ID."""
    card = await service.get_card(db, card_id)
    return SingleCard(data=PromoCardResponse.model_validate(card))


@router.post(
    "/",
    response_model=SingleCard,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(log_action("CREATE_PROMO_CARD"))],
)
async def create_promo_card(
    data: PromoCardCreate, db: DatabaseSession, service: PromoCardServiceDep, admin: AdminUser
):
    """Create a promo card."""
    card = await service.create_card(db, data, created_by=admin["id"])
    return SingleCard(data=PromoCardResponse.model_validate(card))


@router.put(
    "/{card_id}",
    response_model=SingleCard,
    dependencies=[Depends(log_action("UPDATE_PROMO_CARD"))],
)
async def update_promo_card(
    card_id: int,
    data: PromoCardUpdate,
    db: DatabaseSession,
    service: PromoCardServiceDep,
    admin: AdminUser,
):
    """Update a promo card."""
    card = await service.update_card(db, card_id, data)
    return SingleCard(data=PromoCardResponse.model_validate(card))


@router.patch(
    "/{card_id}/toggle-status",
    response_model=SingleCard,
    dependencies=[Depends(log_action("TOGGLE_PROMO_CARD_STATUS"))],
)
async def toggle_promo_card_status(
    card_id: int, db: DatabaseSession, service: PromoCardServiceDep, admin: AdminUser
):
    """Activate or deactivate a promo card."""
    card = await service.toggle_status(db, card_id)
    return SingleCard(data=PromoCardResponse.model_validate(card))


@router.delete(
    "/{card_id}",
    response_model=MessageResponse,
    dependencies=[Depends(log_action("DELETE_PROMO_CARD"))],
)
async def delete_promo_card(
    card_id: int, db: DatabaseSession, service: PromoCardServiceDep, admin: AdminUser
):
    """Delete a promo card."""
    await service.delete_card(db, card_id)
    return MessageResponse(message="Promo card deleted successfully")
