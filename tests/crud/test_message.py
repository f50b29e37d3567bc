from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.orm import Session

from app.crud import crud_chat_room, crud_message
from app.crud.crud_message import CRUDMessage
from app.models.message import Message
from app.utils.timestamps import as_utc
from tests.utils.listing import create_random_listing
from tests.utils.user import create_random_user

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def room_setup(db_session: Session):
    seller = create_random_user(db_session, name="Seller")
    buyer = create_random_user(db_session, name="Buyer")
    ad = create_random_listing(db_session, owner_id=seller.id)
    room = crud_chat_room.chat_room.create(
        db_session, ad_id=ad.id, buyer_id=buyer.id, seller_id=seller.id, now=NOW
    )
    return room, buyer, seller


def test_create_and_touch_room(db_session: Session, room_setup):
    room, buyer, _ = room_setup
    sent_at = NOW + timedelta(minutes=5)

    msg = crud_message.message.create_and_touch_room(
        db_session, room=room, sender_id=buyer.id, content="Is it still available?", now=sent_at
    )

    db_session.refresh(room)
    assert msg.is_read is False
    assert msg.sender_id == buyer.id
    assert as_utc(msg.created_at) == sent_at
    assert as_utc(room.updated_at) == sent_at


def test_timestamps_strictly_increase_when_clock_stalls(db_session: Session, room_setup):
    room, buyer, seller = room_setup

    first = crud_message.message.create_and_touch_room(
        db_session, room=room, sender_id=buyer.id, content="one", now=NOW
    )
    second = crud_message.message.create_and_touch_room(
        db_session, room=room, sender_id=seller.id, content="two", now=NOW
    )
    third = crud_message.message.create_and_touch_room(
        db_session, room=room, sender_id=buyer.id, content="three", now=NOW - timedelta(seconds=1)
    )

    assert as_utc(first.created_at) < as_utc(second.created_at) < as_utc(third.created_at)
    thread = crud_message.message.get_multi_by_room(db_session, chat_room_id=room.id)
    assert [m.content for m in thread] == ["three", "two", "one"]


def test_mark_read_from_only_touches_given_sender(db_session: Session, room_setup):
    room, buyer, seller = room_setup
    for i, sender in enumerate([buyer, seller, seller]):
        crud_message.message.create_and_touch_room(
            db_session, room=room, sender_id=sender.id, content=f"m{i}", now=NOW + timedelta(minutes=i)
        )

    flipped = crud_message.message.mark_read_from(db_session, chat_room_id=room.id, sender_id=seller.id)

    assert flipped == 2
    assert crud_message.message.count_unread_from(db_session, chat_room_id=room.id, sender_id=seller.id) == 0
    assert crud_message.message.count_unread_from(db_session, chat_room_id=room.id, sender_id=buyer.id) == 1
    # Second call has nothing left to flip
    assert crud_message.message.mark_read_from(db_session, chat_room_id=room.id, sender_id=seller.id) == 0


def test_get_latest_empty_room(db_session: Session, room_setup):
    room, _, _ = room_setup
    assert crud_message.message.get_latest(db_session, chat_room_id=room.id) is None


def test_create_and_touch_room_rolls_back_on_failure():
    db_session = MagicMock()
    db_session.query.return_value.filter.return_value.order_by.return_value.first.return_value = None
    db_session.commit.side_effect = RuntimeError("connection lost")
    room = MagicMock(id="room_abc")

    with pytest.raises(RuntimeError):
        CRUDMessage(Message).create_and_touch_room(
            db_session, room=room, sender_id="usr_1", content="hi", now=NOW
        )

    db_session.rollback.assert_called_once()
