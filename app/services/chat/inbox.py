# app/services/chat/inbox.py
import logging
from typing import List

from sqlalchemy.orm import Session

from app.crud import crud_chat_room, crud_listing, crud_message
from app.schemas.chat import ChatRoom as ChatRoomSchema, InboxEntry, Message as MessageSchema
from app.services.chat.directory import counterpart_profile
from app.services.chat.ledger import MessageLedger, message_ledger

logger = logging.getLogger(__name__)


class InboxAggregator:
    """
    Builds a user's conversation list. Recomputed on every call and strictly
    read-only: listing the inbox never marks anything as read.
    """

    def __init__(self, ledger: MessageLedger = message_ledger):
        self.ledger = ledger

    def get_inbox(self, db: Session, *, caller_id: str) -> List[InboxEntry]:
        rooms = crud_chat_room.chat_room.get_multi_by_participant(db, user_id=caller_id)

        entries = []
        for room in rooms:
            other_id = room.counterpart_id(caller_id)
            last = crud_message.message.get_latest(db, chat_room_id=room.id)
            entries.append(
                InboxEntry(
                    room=ChatRoomSchema.model_validate(room),
                    counterpart=counterpart_profile(db, room, caller_id),
                    ad=crud_listing.listing.get_summary(db, ad_id=room.ad_id),
                    last_message=MessageSchema.model_validate(last) if last else None,
                    unread_count=self.ledger.count_unread_from(
                        db, room_id=room.id, recipient_id=caller_id, counterpart_id=other_id
                    ),
                )
            )

        logger.debug(f"Inbox for {caller_id}: {len(entries)} room(s)")
        return entries


inbox_aggregator = InboxAggregator()
