"""Buyer/seller chat: room directory, message ledger and inbox."""

from app.services.chat.directory import ChatRoomDirectory, room_directory
from app.services.chat.ledger import MessageLedger, message_ledger
from app.services.chat.inbox import InboxAggregator, inbox_aggregator

__all__ = [
    "ChatRoomDirectory",
    "MessageLedger",
    "InboxAggregator",
    "room_directory",
    "message_ledger",
    "inbox_aggregator",
]
