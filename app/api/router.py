from fastapi import APIRouter
from app.api.endpoints import datasets

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(datasets.router)
