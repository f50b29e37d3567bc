# app/api/v1/api.py

from fastapi import APIRouter
from app.api.v1.endpoints import chat_rooms, inbox

# This is the main router for the v1 API.
api_router = APIRouter()

api_router.include_router(chat_rooms.router)
api_router.include_router(inbox.router)
