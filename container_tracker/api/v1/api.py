"""API v1 router composition."""

from fastapi import APIRouter

from container_tracker.api.v1.endpoints import auth, container_types, containers, users

api_router: APIRouter = APIRouter()
api_router.include_router(containers.router, prefix="/containers", tags=["containers"])
api_router.include_router(container_types.router, prefix="/container-types", tags=["container-types"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
