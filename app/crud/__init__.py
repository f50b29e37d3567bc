# app/crud/__init__.py

from .crud_chat_room import chat_room
from .crud_listing import listing
from .crud_message import message
from .crud_user import user
