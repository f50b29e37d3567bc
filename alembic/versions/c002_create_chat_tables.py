"""Create chat_rooms and messages tables

Revision ID: c002_chat_tables
Revises: c001_users_and_ads
Create Date: 2026-10-19

One chat room per (ad, buyer); messages cascade with their room, rooms
cascade with their ad.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'c002_chat_tables'
down_revision = 'c001_users_and_ads'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'chat_rooms',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('ad_id', sa.String(), sa.ForeignKey('ads.id', ondelete='CASCADE'), nullable=False),
        sa.Column('buyer_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('seller_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.CheckConstraint('buyer_id <> seller_id', name='ck_chat_rooms_buyer_not_seller'),
    )

    # Exactly one room per buyer per ad; concurrent first contacts rely on this
    op.create_unique_constraint(
        'uq_chat_rooms_ad_buyer',
        'chat_rooms',
        ['ad_id', 'buyer_id']
    )

    op.create_index('ix_chat_rooms_ad_id', 'chat_rooms', ['ad_id'])
    op.create_index('ix_chat_rooms_buyer_id', 'chat_rooms', ['buyer_id'])
    op.create_index('ix_chat_rooms_seller_id', 'chat_rooms', ['seller_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('chat_room_id', sa.String(), sa.ForeignKey('chat_rooms.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
    )

    op.create_index('ix_messages_chat_room_id', 'messages', ['chat_room_id'])
    op.create_index('idx_messages_room_created', 'messages', ['chat_room_id', 'created_at'])
    op.create_index(
        'idx_messages_room_sender_read',
        'messages',
        ['chat_room_id', 'sender_id', 'is_read'],
    )


def downgrade() -> None:
    op.drop_index('idx_messages_room_sender_read', table_name='messages')
    op.drop_index('idx_messages_room_created', table_name='messages')
    op.drop_index('ix_messages_chat_room_id', table_name='messages')
    op.drop_table('messages')
    op.drop_index('ix_chat_rooms_seller_id', table_name='chat_rooms')
    op.drop_index('ix_chat_rooms_buyer_id', table_name='chat_rooms')
    op.drop_index('ix_chat_rooms_ad_id', table_name='chat_rooms')
    op.drop_constraint('uq_chat_rooms_ad_buyer', 'chat_rooms', type_='unique')
    op.drop_table('chat_rooms')
