from fastapi import APIRouter

from src.saas_admin.api.v1 import admin, auth, impersonation, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(impersonation.router)
api_router.include_router(admin.router)
