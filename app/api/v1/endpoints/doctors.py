"""Doctor endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.core.exceptions import NotFoundException
from app.dependencies import AdminUser, CacheManagerDep, DatabaseSession, log_action
from app.schemas.base import (
    MessageResponse,
    PaginatedResponse,
    SuccessResponse,
    build_pagination,
)
from app.schemas.doctors import DoctorCreate, DoctorResponse, DoctorUpdate
from app.services.doctor_service import DoctorService

router = APIRouter()


def get_doctor_service(cache_manager: CacheManagerDep) -> DoctorService:
    """Get doctor service instance."""
    return DoctorService(cache_manager=cache_manager)


DoctorServiceDep = Annotated[DoctorService, Depends(get_doctor_service)]


def _page(items: list[dict], total: int, page: int, limit: int) -> PaginatedResponse:
    return PaginatedResponse[DoctorResponse](
        items=[DoctorResponse.model_validate(d) for d in items],
        pagination=build_pagination(page, limit, total, len(items)),
    )


@router.get("/", response_model=PaginatedResponse[DoctorResponse])
async def list_doctors(
    db: DatabaseSession,
    doctor_service: DoctorServiceDep,
    specialty: str | None = Query(None, description="Filter by specialty"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """List active doctors, highest rated first."""
    items, total = await doctor_service.get_doctors(
        db, page=page, limit=limit, specialty=specialty, is_active=True
    )
    return _page(items, total, page, limit)


@router.get("/admin/all", response_model=PaginatedResponse[DoctorResponse])
async def list_doctors_admin(
    db: DatabaseSession,
    doctor_service: DoctorServiceDep,
    admin: AdminUser,
    active: bool | None = Query(None, description="Filter by active flag"),
    specialty: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
):
    """List doctors including inactive ones."""
    items, total = await doctor_service.get_doctors(
        db, page=page, limit=limit, specialty=specialty, is_active=active
    )
    return _page(items, total, page, limit)


@router.get("/{doctor_id}", response_model=SuccessResponse[DoctorResponse])
async def get_doctor(doctor_id: int, db: DatabaseSession, doctor_service: DoctorServiceDep):
    """Get a doctor by ID."""
    doctor = await doctor_service.get_doctor_by_id(db, doctor_id)
    if not doctor:
        raise NotFoundException("Doctor not found")
    return SuccessResponse[DoctorResponse](data=DoctorResponse.model_validate(doctor))


@router.post(
    "/",
    response_model=SuccessResponse[DoctorResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(log_action("CREATE_DOCTOR"))],
)
async def create_doctor(
    data: DoctorCreate, db: DatabaseSession, doctor_service: DoctorServiceDep, admin: AdminUser
):
    """Create a doctor profile."""
    doctor = await doctor_service.create_doctor(db, data)
    return SuccessResponse[DoctorResponse](data=DoctorResponse.model_validate(doctor))


@router.put(
    "/{doctor_id}",
    response_model=SuccessResponse[DoctorResponse],
    dependencies=[Depends(log_action("UPDATE_DOCTOR"))],
)
async def update_doctor(
    doctor_id: int,
    data: DoctorUpdate,
    db: DatabaseSession,
    doctor_service: DoctorServiceDep,
    admin: AdminUser,
):
    """Update a doctor profile."""
    doctor = await doctor_service.update_doctor(db, doctor_id, data)
    return SuccessResponse[DoctorResponse](data=DoctorResponse.model_validate(doctor))


@router.patch(
    "/{doctor_id}/toggle-status",
    response_model=SuccessResponse[DoctorResponse],
    dependencies=[Depends(log_action("TOGGLE_DOCTOR_STATUS"))],
)
async def toggle_doctor_status(
    doctor_id: int, db: DatabaseSession, doctor_service: DoctorServiceDep, admin: AdminUser
):
    """Activate or deactivate a doctor."""
    doctor = await doctor_service.toggle_status(db, doctor_id)
    return SuccessResponse[DoctorResponse](data=DoctorResponse.model_validate(doctor))


@router.delete(
    "/{doctor_id}",
    response_model=MessageResponse,
    dependencies=[Depends(log_action("DELETE_DOCTOR"))],
)
async def delete_doctor(
    doctor_id: int, db: DatabaseSession, doctor_service: DoctorServiceDep, admin: AdminUser
):
    """Delete a doctor."""
    await doctor_service.delete_doctor(db, doctor_id)
    return MessageResponse(message="Doctor deleted successfully")
