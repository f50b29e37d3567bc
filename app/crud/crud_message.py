# app/crud/crud_message.py
"""
CRUD operations for chat messages.

Messages are append-only; the only mutable column is is_read.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from .base import CRUDBase
from app.models.chat_room import ChatRoom
from app.models.message import Message
from app.utils.timestamps import as_utc

logger = logging.getLogger(__name__)

# Smallest step a timestamp column can represent on Postgres and SQLite
_CLOCK_TICK = timedelta(microseconds=1)


class CRUDMessage(CRUDBase[Message]):
    def get_latest(self, db: Session, *, chat_room_id: str) -> Optional[Message]:
        return (
            db.query(self.model)
            .filter(self.model.chat_room_id == chat_room_id)
            .order_by(self.model.created_at.desc())
            .first()
        )

    def create_and_touch_room(
        self,
        db: Session,
        *,
        room: ChatRoom,
        sender_id: str,
        content: str,
        now: datetime,
    ) -> Message:
        """
        Insert a message and bump the room's updated_at in one transaction.

        created_at is kept strictly increasing within the room so that
        ordering by it is insertion order even when the clock does not move.
        """
        latest = self.get_latest(db, chat_room_id=room.id)
        if latest is not None and as_utc(latest.created_at) >= now:
            now = as_utc(latest.created_at) + _CLOCK_TICK

        try:
            message = self.model(
                chat_room_id=room.id,
                sender_id=sender_id,
                content=content,
                is_read=False,
                created_at=now,
            )
            db.add(message)
            room.updated_at = now
            db.commit()
        except Exception:
            logger.error(
                f"Failed to append message to room {room.id}",
                exc_info=True,
                extra={"chat_room_id": room.id, "sender_id": sender_id},
            )
            db.rollback()
            raise

        db.refresh(message)
        return message

    def mark_read_from(self, db: Session, *, chat_room_id: str, sender_id: str) -> int:
        """Flip is_read on every unread message the given sender wrote in the room."""
        try:
            updated = (
                db.query(self.model)
                .filter(
                    self.model.chat_room_id == chat_room_id,
                    self.model.sender_id == sender_id,
                    self.model.is_read.is_(False),
                )
                .update({self.model.is_read: True}, synchronize_session=False)
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        return updated

    def get_multi_by_room(self, db: Session, *, chat_room_id: str) -> List[Message]:
        """All messages of a room, newest first, with senders loaded."""
        return (
            db.query(self.model)
            .options(joinedload(self.model.sender))
            .filter(self.model.chat_room_id == chat_room_id)
            .order_by(self.model.created_at.desc())
            .all()
        )

    def count_unread_from(self, db: Session, *, chat_room_id: str, sender_id: str) -> int:
        return (
            db.query(func.count(self.model.id))
            .filter(
                self.model.chat_room_id == chat_room_id,
                self.model.sender_id == sender_id,
                self.model.is_read.is_(False),
            )
            .scalar()
        )


message = CRUDMessage(Message)
