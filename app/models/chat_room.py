# app/models/chat_room.py
"""
Chat room model: one conversation per (ad, buyer) pair.

The seller is copied from the ad's owner when the room is created and is
never re-derived afterwards.
"""

import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base
from app.utils.timestamps import utcnow


class ChatRoom(Base):
    __tablename__ = "chat_rooms"

    id = Column(String, primary_key=True, default=lambda: f"room_{uuid.uuid4().hex[:12]}")
    ad_id = Column(String, ForeignKey("ads.id", ondelete="CASCADE"), nullable=False, index=True)
    buyer_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    seller_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    # Bumped on every new message; drives inbox ordering
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    ad = relationship("Listing")
    buyer = relationship("User", foreign_keys=[buyer_id])
    seller = relationship("User", foreign_keys=[seller_id])
    messages = relationship(
        "Message",
        back_populates="chat_room",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("ad_id", "buyer_id", name="uq_chat_rooms_ad_buyer"),
        CheckConstraint("buyer_id <> seller_id", name="ck_chat_rooms_buyer_not_seller"),
    )

    def is_member(self, user_id: str) -> bool:
        return user_id in (self.buyer_id, self.seller_id)

    def counterpart_id(self, user_id: str) -> str:
        """The other participant, relative to ``user_id``."""
        return self.seller_id if user_id == self.buyer_id else self.buyer_id
