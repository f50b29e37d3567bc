# app/api/v1/endpoints/inbox.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.db.session import get_db
from app.models.user import User
from app.schemas.chat import InboxEntry
from app.services.chat import inbox_aggregator

router = APIRouter(tags=["Chat"])


@router.get("/inbox", response_model=List[InboxEntry])
def read_inbox(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    List the caller's conversations, most recently active first, with the
    last message and the number of unread messages from the other side.
    Does not mark anything as read.
    """
    return inbox_aggregator.get_inbox(db, caller_id=current_user.id)
