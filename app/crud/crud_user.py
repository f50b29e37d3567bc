from typing import Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.user import User
from app.schemas.chat import ProfileSummary


class CRUDUser(CRUDBase[User]):
    def get_active(self, db: Session, *, user_id: str) -> Optional[User]:
        """Get a user who is allowed to act (exists and is not banned)."""
        return (
            db.query(self.model)
            .filter(self.model.id == user_id, self.model.is_banned.is_(False))
            .first()
        )

    def get_profile_summary(self, db: Session, *, user_id: str) -> Optional[ProfileSummary]:
        user = self.get(db, id=user_id)
        if not user:
            return None
        return ProfileSummary.model_validate(user)


user = CRUDUser(User)
