# app/crud/crud_chat_room.py
"""
CRUD operations for chat rooms.

Room identity is the (ad_id, buyer_id) pair, guarded by the
uq_chat_rooms_ad_buyer unique constraint.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.chat_room import ChatRoom

logger = logging.getLogger(__name__)


class CRUDChatRoom(CRUDBase[ChatRoom]):
    def get_by_ad_and_buyer(
        self, db: Session, *, ad_id: str, buyer_id: str
    ) -> Optional[ChatRoom]:
        return (
            db.query(self.model)
            .filter(self.model.ad_id == ad_id, self.model.buyer_id == buyer_id)
            .first()
        )

    def create(
        self,
        db: Session,
        *,
        ad_id: str,
        buyer_id: str,
        seller_id: str,
        now: datetime,
    ) -> Optional[ChatRoom]:
        """
        Insert a new room.
        Returns None if a room for (ad_id, buyer_id) already exists; any other
        integrity violation is re-raised.
        """
        db_obj = self.model(
            ad_id=ad_id,
            buyer_id=buyer_id,
            seller_id=seller_id,
            created_at=now,
            updated_at=now,
        )
        try:
            db.add(db_obj)
            db.commit()
        except IntegrityError:
            db.rollback()
            if self.get_by_ad_and_buyer(db, ad_id=ad_id, buyer_id=buyer_id) is None:
                raise
            # Another request created the same room first
            logger.debug(
                f"Duplicate chat room skipped: ad={ad_id}, buyer={buyer_id}"
            )
            return None
        db.refresh(db_obj)
        return db_obj

    def get_multi_by_participant(self, db: Session, *, user_id: str) -> List[ChatRoom]:
        """Rooms where the user is buyer or seller, most recently active first."""
        return (
            db.query(self.model)
            .filter(
                or_(
                    self.model.buyer_id == user_id,
                    self.model.seller_id == user_id,
                )
            )
            .order_by(self.model.updated_at.desc(), self.model.created_at.desc())
            .all()
        )


chat_room = CRUDChatRoom(ChatRoom)
