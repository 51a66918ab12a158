"""Push notification endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.config import settings
from app.dependencies import AdminUser, DatabaseSession, OptionalUser, log_action
from app.schemas.base import MessageResponse
from app.schemas.push import PushBroadcast, PushBroadcastResult, PushTokenRegister
from app.services.push_service import PushService

router = APIRouter()


def get_push_service() -> PushService:
    """Get push service instance."""
    return PushService(settings.expo_push_url, access_token=settings.expo_access_token)


PushServiceDep = Annotated[PushService, Depends(get_push_service)]


@router.post("/register", response_model=MessageResponse)
async def register_push_token(
    data: PushTokenRegister,
    db: DatabaseSession,
    service: PushServiceDep,
    user: OptionalUser,
):
    """
    Register an Expo push token.

    Signed-in callers get the device linked to their account.
    """
    await service.register_token(
        db, data.token, data.platform, user_id=user["id"] if user else None
    )
    return MessageResponse(message="Push token registered")


@router.post(
    "/broadcast",
    response_model=PushBroadcastResult,
    dependencies=[Depends(log_action("SEND_PUSH_BROADCAST"))],
)
async def broadcast_push(
    data: PushBroadcast, db: DatabaseSession, service: PushServiceDep, admin: AdminUser
):
    """Send a notification to every registered device."""
    result = await service.broadcast(db, data.title, data.body, data.data)
    return PushBroadcastResult(**result)
