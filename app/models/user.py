# app/models/user.py
import uuid
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import expression, func

from app.db.base_class import Base
from app.utils.timestamps import utcnow


class User(Base):
    """
    Marketplace account. Owned by the auth service; this service only reads
    it to resolve the caller and to show counterpart names and avatars.
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: f"usr_{uuid.uuid4().hex[:12]}")
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False, server_default="")
    name = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default="user", server_default="user")  # user, admin
    avatar_url = Column(String, nullable=True)
    is_banned = Column(Boolean, nullable=False, default=False, server_default=expression.false())

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
