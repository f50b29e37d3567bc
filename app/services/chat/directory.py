# app/services/chat/directory.py
"""
Chat room directory: maps (ad, buyer) to exactly one room and gates access
to rooms by membership.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, InvalidOperationError, NotFoundError
from app.crud import crud_chat_room, crud_listing, crud_user
from app.models.chat_room import ChatRoom
from app.schemas.chat import ChatRoom as ChatRoomSchema, ChatRoomView, ProfileSummary
from app.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


def get_member_room(db: Session, *, caller_id: str, room_id: str) -> ChatRoom:
    """
    Load a room the caller belongs to.

    Raises:
        NotFoundError: the room id does not resolve
        ForbiddenError: the caller is neither buyer nor seller
    """
    room = crud_chat_room.chat_room.get(db, id=room_id)
    if not room:
        raise NotFoundError("Chat room", room_id)
    if not room.is_member(caller_id):
        raise ForbiddenError(
            "Not a member of this chat room", details={"chat_room_id": room_id}
        )
    return room


def counterpart_profile(db: Session, room: ChatRoom, caller_id: str) -> ProfileSummary:
    other_id = room.counterpart_id(caller_id)
    profile = crud_user.user.get_profile_summary(db, user_id=other_id)
    if profile is None:
        # Users cascade-delete their rooms, so this only happens mid-deletion
        raise NotFoundError("User", other_id)
    return profile


class ChatRoomDirectory:
    def get_or_create_room(self, db: Session, *, caller_id: str, ad_id: str) -> ChatRoom:
        """
        Return the caller's room for an ad, creating it on first contact.

        Idempotent: an existing room is returned untouched. Concurrent first
        contacts are resolved by the (ad_id, buyer_id) unique constraint; the
        losing insert re-fetches the winner's row.
        """
        ad = crud_listing.listing.get_listing_owner(db, ad_id=ad_id)
        if not ad:
            raise NotFoundError("Ad", ad_id)

        if ad.owner_id == caller_id:
            raise InvalidOperationError("You cannot start a chat on your own ad", field="ad_id")

        room = crud_chat_room.chat_room.get_by_ad_and_buyer(db, ad_id=ad_id, buyer_id=caller_id)
        if room:
            return room

        try:
            room = crud_chat_room.chat_room.create(
                db,
                ad_id=ad_id,
                buyer_id=caller_id,
                seller_id=ad.owner_id,
                now=utcnow(),
            )
        except IntegrityError:
            # The ad was deleted between the owner lookup and the insert
            if crud_listing.listing.get_listing_owner(db, ad_id=ad_id) is None:
                raise NotFoundError("Ad", ad_id)
            raise
        if room is None:
            room = crud_chat_room.chat_room.get_by_ad_and_buyer(db, ad_id=ad_id, buyer_id=caller_id)
            logger.info(f"Chat room for ad {ad_id} and buyer {caller_id} created concurrently, reusing {room.id}")
            return room

        logger.info(f"Chat room {room.id} created for ad {ad_id}, buyer {caller_id}, seller {ad.owner_id}")
        return room

    def get_room(self, db: Session, *, caller_id: str, room_id: str) -> ChatRoomView:
        """A member's view of a room: the room, the counterpart, and the ad."""
        room = get_member_room(db, caller_id=caller_id, room_id=room_id)
        return ChatRoomView(
            **ChatRoomSchema.model_validate(room).model_dump(),
            counterpart=counterpart_profile(db, room, caller_id),
            ad=crud_listing.listing.get_summary(db, ad_id=room.ad_id),
        )


room_directory = ChatRoomDirectory()
