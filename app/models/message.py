# app/models/message.py
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression, func

from app.db.base_class import Base
from app.utils.timestamps import utcnow


class Message(Base):
    __tablename__ = "messages"

    id = Column(String, primary_key=True, default=lambda: f"msg_{uuid.uuid4().hex[:12]}")
    chat_room_id = Column(
        String, ForeignKey("chat_rooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sender_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    # Only ever flips false -> true, when the non-author opens the thread
    is_read = Column(Boolean, nullable=False, default=False, server_default=expression.false())

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    chat_room = relationship("ChatRoom", back_populates="messages")
    sender = relationship("User")

    __table_args__ = (
        Index("idx_messages_room_created", "chat_room_id", "created_at"),
        Index("idx_messages_room_sender_read", "chat_room_id", "sender_id", "is_read"),
    )
