"""Appointment endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import (
    AdminUser,
    Cipher,
    CurrentUser,
    DatabaseSession,
    is_admin_user,
    log_action,
)
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatus,
    AppointmentStatusUpdate,
)
from app.schemas.base import PaginatedResponse, SuccessResponse, build_pagination
from app.services.appointment_service import AppointmentService

router = APIRouter()


def get_appointment_service(cipher: Cipher) -> AppointmentService:
    """Get appointment service instance."""
    return AppointmentService(cipher)


AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]


def _page(items: list[dict], total: int, page: int, limit: int) -> PaginatedResponse:
    return PaginatedResponse[AppointmentResponse](
        items=[AppointmentResponse.model_validate(a) for a in items],
        pagination=build_pagination(page, limit, total, len(items)),
    )


@router.post(
    "/",
    response_model=SuccessResponse[AppointmentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def book_appointment(
    data: AppointmentCreate,
    db: DatabaseSession,
    service: AppointmentServiceDep,
    current_user: CurrentUser,
):
    """
    Book an appointment for the signed-in patient.

    - **doctorId**: an active doctor
    - **appointmentDate** / **appointmentTime**: the slot must be free
    """
    appointment = await service.create_appointment(db, current_user["id"], data)
    return SuccessResponse[AppointmentResponse](
        data=AppointmentResponse.model_validate(appointment)
    )


@router.get("/my-appointments", response_model=PaginatedResponse[AppointmentResponse])
async def my_appointments(
    db: DatabaseSession,
    service: AppointmentServiceDep,
    current_user: CurrentUser,
    status: AppointmentStatus | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    """The caller's own appointments."""
    items, total = await service.list_appointments(
        db, page=page, limit=limit, patient_id=current_user["id"], status=status
    )
    return _page(items, total, page, limit)


@router.get("/admin", response_model=PaginatedResponse[AppointmentResponse])
async def list_appointments_admin(
    db: DatabaseSession,
    service: AppointmentServiceDep,
    admin: AdminUser,
    doctor_id: int | None = Query(None, alias="doctorId"),
    status: AppointmentStatus | None = Query(None),
    on_date: date | None = Query(None, alias="date"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """All appointments, filterable by doctor, status and date."""
    items, total = await service.list_appointments(
        db,
        page=page,
        limit=limit,
        doctor_id=doctor_id,
        status=status,
        on_date=on_date,
    )
    return _page(items, total, page, limit)


@router.get("/{appointment_id}", response_model=SuccessResponse[AppointmentResponse])
async def get_appointment(
    appointment_id: int,
    db: DatabaseSession,
    service: AppointmentServiceDep,
    current_user: CurrentUser,
    cipher: Cipher,
):
    """Get one appointment. Patients only see their own."""
    appointment = await service.get_appointment(
        db, appointment_id, current_user["id"], is_admin_user(current_user, cipher)
    )
    return SuccessResponse[AppointmentResponse](
        data=AppointmentResponse.model_validate(appointment)
    )


@router.patch(
    "/{appointment_id}/status",
    response_model=SuccessResponse[AppointmentResponse],
    dependencies=[Depends(log_action("UPDATE_APPOINTMENT_STATUS"))],
)
async def update_appointment_status(
    appointment_id: int,
    data: AppointmentStatusUpdate,
    db: DatabaseSession,
    service: AppointmentServiceDep,
    admin: AdminUser,
):
    """Set an appointment's status."""
    appointment = await service.update_status(db, appointment_id, data.status, data.notes)
    return SuccessResponse[AppointmentResponse](
        data=AppointmentResponse.model_validate(appointment)
    )


@router.patch("/{appointment_id}/cancel", response_model=SuccessResponse[AppointmentResponse])
async def cancel_appointment(
    appointment_id: int,
    db: DatabaseSession,
    service: AppointmentServiceDep,
    current_user: CurrentUser,
    cipher: Cipher,
):
    """Cancel an appointment. Completed appointments cannot be cancelled."""
    appointment = await service.cancel_appointment(
        db, appointment_id, current_user["id"], is_admin_user(current_user, cipher)
    )
    return SuccessResponse[AppointmentResponse](
        data=AppointmentResponse.model_validate(appointment)
    )
