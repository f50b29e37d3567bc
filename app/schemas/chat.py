# app/schemas/chat.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


# --- Collaborator projections ---

class ProfileSummary(BaseModel):
    id: str
    name: str
    avatar_url: Optional[str] = None

    model_config = {"from_attributes": True}


class AdSummary(BaseModel):
    id: str
    title: str
    price: Decimal
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


# --- Request bodies ---

class ChatRoomCreate(BaseModel):
    ad_id: str = Field(..., min_length=1)


class MessageCreate(BaseModel):
    # Emptiness after trimming and the optional length cap are business
    # rules checked by the ledger, so both surface as InvalidOperationError.
    content: str


# --- Responses ---

class ChatRoom(BaseModel):
    id: str
    ad_id: str
    buyer_id: str
    seller_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class Message(BaseModel):
    id: str
    chat_room_id: str
    sender_id: str
    content: str
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageWithSender(Message):
    sender: Optional[ProfileSummary] = None


class ChatRoomView(ChatRoom):
    """A room as seen by one of its members."""
    counterpart: ProfileSummary
    ad: Optional[AdSummary] = None


class ChatRoomThread(BaseModel):
    room: ChatRoomView
    # Newest first; clients reverse for chronological display
    messages: List[MessageWithSender]


class InboxEntry(BaseModel):
    room: ChatRoom
    counterpart: ProfileSummary
    ad: Optional[AdSummary] = None
    last_message: Optional[Message] = None
    unread_count: int = 0
