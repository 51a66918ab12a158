"""Clinic info endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import AdminUser, DatabaseSession, log_action
from app.schemas.base import SuccessResponse
from app.schemas.clinic_info import (
    ClinicContact,
    ClinicInfoResponse,
    ClinicInfoUpsert,
    SocialLinksUpdate,
    WorkingHoursUpdate,
)
from app.services.clinic_info_service import ClinicInfoService

router = APIRouter()

ClinicInfoServiceDep = Annotated[ClinicInfoService, Depends(ClinicInfoService)]


@router.get("/", response_model=SuccessResponse[ClinicInfoResponse])
async def get_clinic_info(db: DatabaseSession, service: ClinicInfoServiceDep):
    """Clinic contact and about details."""
    info = await service.get_info(db)
    return SuccessResponse[ClinicInfoResponse](data=ClinicInfoResponse.model_validate(info))


@router.put(
    "/",
    response_model=SuccessResponse[ClinicInfoResponse],
    dependencies=[Depends(log_action("UPDATE_CLINIC_INFO"))],
)
async def upsert_clinic_info(
    data: ClinicInfoUpsert, db: DatabaseSession, service: ClinicInfoServiceDep, admin: AdminUser
):
    """Create or replace the clinic details."""
    info = await service.upsert_info(db, data)
    return SuccessResponse[ClinicInfoResponse](data=ClinicInfoResponse.model_validate(info))


@router.get("/contact", response_model=SuccessResponse[ClinicContact])
async def get_clinic_contact(db: DatabaseSession, service: ClinicInfoServiceDep):
    """Phone, email and address for the app's contact screen."""
    contact = await service.get_contact(db)
    return SuccessResponse[ClinicContact](data=ClinicContact(**contact))


@router.put(
    "/working-hours",
    response_model=SuccessResponse[ClinicInfoResponse],
    dependencies=[Depends(log_action("UPDATE_WORKING_HOURS"))],
)
async def update_working_hours(
    data: WorkingHoursUpdate, db: DatabaseSession, service: ClinicInfoServiceDep, admin: AdminUser
):
    """Replace the opening hours. The clinic details must exist already."""
    info = await service.update_working_hours(db, data.working_hours)
    return SuccessResponse[ClinicInfoResponse](data=ClinicInfoResponse.model_validate(info))


@router.put(
    "/social-links",
    response_model=SuccessResponse[ClinicInfoResponse],
    dependencies=[Depends(log_action("UPDATE_SOCIAL_LINKS"))],
)
async def update_social_links(
    data: SocialLinksUpdate, db: DatabaseSession, service: ClinicInfoServiceDep, admin: AdminUser
):
    """Replace the social media links. The clinic details must exist already."""
    info = await service.update_social_links(db, data.social_links)
    return SuccessResponse[ClinicInfoResponse](data=ClinicInfoResponse.model_validate(info))
