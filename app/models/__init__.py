# app/models/__init__.py
# Import all models to ensure SQLAlchemy can resolve relationships
# Order matters for dependencies - import base models first

from app.db.base_class import Base
from app.models.user import User
from app.models.listing import Listing, AdImage
from app.models.chat_room import ChatRoom
from app.models.message import Message

__all__ = [
    "Base",
    "User",
    "Listing",
    "AdImage",
    "ChatRoom",
    "Message",
]
