"""Create users, ads and ad_images tables

Revision ID: c001_users_and_ads
Revises:
Create Date: 2026-10-19

Mirror of the marketplace's user and ad tables, reduced to the columns
the chat service reads.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'c001_users_and_ads'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False, server_default=''),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('is_banned', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'ads',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('category', sa.String(30), nullable=False),
        sa.Column('region', sa.String(30), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
    )
    op.create_index('ix_ads_user_id', 'ads', ['user_id'])

    op.create_table(
        'ad_images',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('ad_id', sa.String(), sa.ForeignKey('ads.id', ondelete='CASCADE'), nullable=False),
        sa.Column('url', sa.String(), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
    )
    op.create_index('ix_ad_images_ad_id', 'ad_images', ['ad_id'])


def downgrade() -> None:
    op.drop_index('ix_ad_images_ad_id', table_name='ad_images')
    op.drop_table('ad_images')
    op.drop_index('ix_ads_user_id', table_name='ads')
    op.drop_table('ads')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
