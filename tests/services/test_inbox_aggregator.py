"""
Tests for the inbox aggregator.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.orm import Session

from app.services.chat import inbox_aggregator, message_ledger, room_directory
from tests.utils.listing import create_random_listing
from tests.utils.user import create_random_user


@pytest.fixture
def two_conversations(db_session: Session):
    """
    The buyer talks to two sellers about two different ads.
    """
    buyer = create_random_user(db_session, name="Buyer")
    seller_a = create_random_user(db_session, name="Anna")
    seller_b = create_random_user(db_session, name="Ben")
    ad_a = create_random_listing(db_session, owner_id=seller_a.id, title="Bike")
    ad_b = create_random_listing(db_session, owner_id=seller_b.id, title="Sofa", with_images=False)
    room_a = room_directory.get_or_create_room(db_session, caller_id=buyer.id, ad_id=ad_a.id)
    room_b = room_directory.get_or_create_room(db_session, caller_id=buyer.id, ad_id=ad_b.id)
    return {
        "buyer": buyer,
        "seller_a": seller_a,
        "seller_b": seller_b,
        "room_a": room_a,
        "room_b": room_b,
    }


def _set_updated_at(db_session, room, value):
    room.updated_at = value
    db_session.commit()


def test_empty_inbox(db_session):
    loner = create_random_user(db_session)
    assert inbox_aggregator.get_inbox(db_session, caller_id=loner.id) == []


def test_room_without_messages(db_session, two_conversations):
    seller_b = two_conversations["seller_b"]

    entries = inbox_aggregator.get_inbox(db_session, caller_id=seller_b.id)

    assert len(entries) == 1
    entry = entries[0]
    assert entry.room.id == two_conversations["room_b"].id
    assert entry.last_message is None
    assert entry.unread_count == 0
    assert entry.counterpart.id == two_conversations["buyer"].id
    assert entry.ad.title == "Sofa"
    assert entry.ad.image_url is None


def test_ordered_by_most_recent_activity(db_session, two_conversations):
    buyer = two_conversations["buyer"]
    room_a, room_b = two_conversations["room_a"], two_conversations["room_b"]
    base = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    _set_updated_at(db_session, room_a, base)
    _set_updated_at(db_session, room_b, base + timedelta(minutes=5))

    ids = [e.room.id for e in inbox_aggregator.get_inbox(db_session, caller_id=buyer.id)]
    assert ids == [room_b.id, room_a.id]

    # A new message in the older room moves it to the top
    message_ledger.append(db_session, caller_id=buyer.id, room_id=room_a.id, content="still there?")

    ids = [e.room.id for e in inbox_aggregator.get_inbox(db_session, caller_id=buyer.id)]
    assert ids == [room_a.id, room_b.id]


def test_entry_carries_last_message_and_directional_unread(db_session, two_conversations):
    buyer, seller_a = two_conversations["buyer"], two_conversations["seller_a"]
    room_a = two_conversations["room_a"]
    message_ledger.append(db_session, caller_id=buyer.id, room_id=room_a.id, content="Is it available?")
    message_ledger.append(db_session, caller_id=seller_a.id, room_id=room_a.id, content="Yes")
    message_ledger.append(db_session, caller_id=seller_a.id, room_id=room_a.id, content="Pickup only")

    buyer_entry = next(
        e for e in inbox_aggregator.get_inbox(db_session, caller_id=buyer.id) if e.room.id == room_a.id
    )
    seller_entry = inbox_aggregator.get_inbox(db_session, caller_id=seller_a.id)[0]

    assert buyer_entry.last_message.content == "Pickup only"
    assert buyer_entry.unread_count == 2
    assert buyer_entry.counterpart.name == "Anna"
    assert buyer_entry.ad.title == "Bike"
    assert buyer_entry.ad.image_url == "https://cdn.example.com/ads/first.jpg"

    assert seller_entry.last_message.content == "Pickup only"
    assert seller_entry.unread_count == 1
    assert seller_entry.counterpart.name == "Buyer"


def test_listing_inbox_does_not_mark_read(db_session, two_conversations):
    buyer, seller_a = two_conversations["buyer"], two_conversations["seller_a"]
    room_a = two_conversations["room_a"]
    message_ledger.append(db_session, caller_id=seller_a.id, room_id=room_a.id, content="Hi")

    inbox_aggregator.get_inbox(db_session, caller_id=buyer.id)
    inbox_aggregator.get_inbox(db_session, caller_id=buyer.id)

    assert (
        message_ledger.count_unread_from(db_session, room_id=room_a.id, counterpart_id=seller_a.id)
        == 1
    )


def test_unread_resets_after_opening_room(db_session, two_conversations):
    buyer, seller_a = two_conversations["buyer"], two_conversations["seller_a"]
    room_a = two_conversations["room_a"]
    message_ledger.append(db_session, caller_id=seller_a.id, room_id=room_a.id, content="Hi")

    message_ledger.list_and_mark_read(db_session, caller_id=buyer.id, room_id=room_a.id)

    entry = next(
        e for e in inbox_aggregator.get_inbox(db_session, caller_id=buyer.id) if e.room.id == room_a.id
    )
    assert entry.unread_count == 0
    assert entry.last_message.is_read is True


def test_only_member_rooms_listed(db_session, two_conversations):
    outsider = create_random_user(db_session)
    assert inbox_aggregator.get_inbox(db_session, caller_id=outsider.id) == []
    assert len(inbox_aggregator.get_inbox(db_session, caller_id=two_conversations["buyer"].id)) == 2
