from fastapi import APIRouter

from malaria_chat.api.v1 import chat, health

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, tags=["Health"])
api_router.include_router(chat.router, tags=["Chat"])
