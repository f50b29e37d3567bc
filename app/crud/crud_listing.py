"""
Read-only access to ads for the chat subsystem.

Ad CRUD itself lives in the listings service; chat only needs to know who
owns an ad and how to show it next to a conversation.
"""

from typing import NamedTuple, Optional

from sqlalchemy.orm import Session, selectinload

from .base import CRUDBase
from app.models.listing import Listing
from app.schemas.chat import AdSummary


class ListingOwner(NamedTuple):
    id: str
    owner_id: str


class CRUDListing(CRUDBase[Listing]):
    def get_listing_owner(self, db: Session, *, ad_id: str) -> Optional[ListingOwner]:
        row = (
            db.query(self.model.id, self.model.user_id)
            .filter(self.model.id == ad_id)
            .first()
        )
        if not row:
            return None
        return ListingOwner(id=row.id, owner_id=row.user_id)

    def get_summary(self, db: Session, *, ad_id: str) -> Optional[AdSummary]:
        """Title, price and first image of an ad, for chat headers and inbox rows."""
        ad = (
            db.query(self.model)
            .options(selectinload(self.model.images))
            .filter(self.model.id == ad_id)
            .first()
        )
        if not ad:
            return None
        # images are ordered by AdImage.order on the relationship
        image_url = ad.images[0].url if ad.images else None
        return AdSummary(id=ad.id, title=ad.title, price=ad.price, image_url=image_url)


listing = CRUDListing(Listing)
