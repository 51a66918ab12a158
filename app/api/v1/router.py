"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    admin,
    announcements,
    appointments,
    auth,
    blogs,
    bookmarks,
    clinic_info,
    doctors,
    health,
    legal,
    notifications,
    promo_cards,
    push,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(doctors.router, prefix="/doctors", tags=["Doctors"])
api_router.include_router(blogs.router, prefix="/blogs", tags=["Blogs"])
api_router.include_router(announcements.router, prefix="/announcements", tags=["Announcements"])
api_router.include_router(promo_cards.router, prefix="/promo-cards", tags=["Promo Cards"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
api_router.include_router(legal.router, prefix="/legal", tags=["Legal"])
api_router.include_router(bookmarks.router, prefix="/bookmarks", tags=["Bookmarks"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["Notifications"]
)
api_router.include_router(push.router, prefix="/push", tags=["Push Notifications"])
api_router.include_router(clinic_info.router, prefix="/clinic-info", tags=["Clinic Info"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
