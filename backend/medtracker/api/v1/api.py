from fastapi import APIRouter

from medtracker.api.v1.skill import router as skill_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(skill_router)
