# app/models/listing.py
import uuid
from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base
from app.utils.timestamps import utcnow


class Listing(Base):
    """A classified ad. Stored in the ``ads`` table."""
    __tablename__ = "ads"

    id = Column(String, primary_key=True, default=lambda: f"ad_{uuid.uuid4().hex[:12]}")
    user_id = Column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(30), nullable=False)
    region = Column(String(30), nullable=False)
    status = Column(String(20), nullable=False, default="active", server_default="active")  # active, sold, flagged, deleted
    view_count = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    owner = relationship("User")
    images = relationship(
        "AdImage",
        back_populates="ad",
        order_by="AdImage.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AdImage(Base):
    __tablename__ = "ad_images"

    id = Column(String, primary_key=True, default=lambda: f"img_{uuid.uuid4().hex[:12]}")
    ad_id = Column(
        String, ForeignKey("ads.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url = Column(String, nullable=False)
    key = Column(String, nullable=False)  # object storage key
    order = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    ad = relationship("Listing", back_populates="images")
