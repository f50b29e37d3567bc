# app/services/chat/ledger.py
"""
Message ledger: appends messages to rooms and tracks read state.

Read state is a flat boolean per message. Rooms always have exactly two
members, so "unread" always means "not yet seen by the party who did not
write it".
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidOperationError
from app.crud import crud_message
from app.models.message import Message
from app.services.chat.directory import get_member_room
from app.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


class MessageLedger:
    def __init__(self, max_length: Optional[int] = None):
        self._max_length = max_length

    @property
    def max_length(self) -> Optional[int]:
        if self._max_length is not None:
            return self._max_length
        return settings.MESSAGE_MAX_LENGTH

    def _clean_content(self, content: str) -> str:
        text = (content or "").strip()
        if not text:
            raise InvalidOperationError("Message must not be empty", field="content")
        limit = self.max_length
        if limit is not None and len(text) > limit:
            raise InvalidOperationError(
                f"Message must be at most {limit} characters", field="content"
            )
        return text

    def append(self, db: Session, *, caller_id: str, room_id: str, content: str) -> Message:
        """Store a message from the caller and mark the room as recently active."""
        room = get_member_room(db, caller_id=caller_id, room_id=room_id)
        text = self._clean_content(content)

        message = crud_message.message.create_and_touch_room(
            db, room=room, sender_id=caller_id, content=text, now=utcnow()
        )
        logger.info(f"Message {message.id} appended to room {room.id} by {caller_id}")
        return message

    def list_and_mark_read(self, db: Session, *, caller_id: str, room_id: str) -> List[Message]:
        """
        Return the whole thread, newest first, after marking the counterpart's
        messages as read. The caller's own messages are never touched.
        """
        room = get_member_room(db, caller_id=caller_id, room_id=room_id)

        flipped = crud_message.message.mark_read_from(
            db, chat_room_id=room.id, sender_id=room.counterpart_id(caller_id)
        )
        if flipped:
            logger.debug(f"Marked {flipped} message(s) read in room {room.id} for {caller_id}")

        return crud_message.message.get_multi_by_room(db, chat_room_id=room.id)

    def count_unread_from(
        self,
        db: Session,
        *,
        room_id: str,
        counterpart_id: str,
        recipient_id: Optional[str] = None,
    ) -> int:
        """
        Unread messages the counterpart sent in the room. Never writes.

        ``recipient_id`` is accepted for callers that name both parties; in a
        two-party room it is always the other member, so it does not change
        the count.
        """
        return crud_message.message.count_unread_from(
            db, chat_room_id=room_id, sender_id=counterpart_id
        )


message_ledger = MessageLedger()
