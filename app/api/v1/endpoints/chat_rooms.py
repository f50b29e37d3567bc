# app/api/v1/endpoints/chat_rooms.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api import deps
from app.db.session import get_db
from app.models.user import User
from app.schemas.chat import (
    ChatRoom,
    ChatRoomCreate,
    ChatRoomThread,
    Message,
    MessageCreate,
    MessageWithSender,
)
from app.services.chat import message_ledger, room_directory

router = APIRouter(prefix="/rooms", tags=["Chat"])


@router.post("", response_model=ChatRoom)
def open_chat_room(
    room_in: ChatRoomCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Contact the seller of an ad.

    Returns the caller's existing room for the ad, or creates it. The caller
    becomes the buyer; the ad's owner becomes the seller.

    **Errors**:
    - 404 if the ad does not exist
    - 400 if the caller owns the ad
    """
    return room_directory.get_or_create_room(db, caller_id=current_user.id, ad_id=room_in.ad_id)


@router.get("/{room_id}", response_model=ChatRoomThread)
def read_chat_room(
    room_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Open a conversation.

    Marks every message from the other participant as read, then returns the
    room and the full thread, newest message first.
    """
    room = room_directory.get_room(db, caller_id=current_user.id, room_id=room_id)
    messages = message_ledger.list_and_mark_read(db, caller_id=current_user.id, room_id=room_id)
    return ChatRoomThread(
        room=room,
        messages=[MessageWithSender.model_validate(m) for m in messages],
    )


@router.post(
    "/{room_id}/messages",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    room_id: str,
    message_in: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Send a message to the other participant of a room."""
    return message_ledger.append(
        db, caller_id=current_user.id, room_id=room_id, content=message_in.content
    )
