"""Initial migration: users, refresh_token, moments tables

Revision ID: 3f1a9c2e7b10
Revises: 
Create Date: 2026-10-19 10:12:41.218305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users 테이블 생성
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('provider_id', sa.String(length=64), nullable=False),
        sa.Column('provider', sa.String(length=10), nullable=False),
        sa.Column('username', sa.String(length=10), nullable=False),
        sa.Column('image_url', sa.String(length=255), nullable=True),
        sa.Column('introduction', sa.String(length=70), nullable=True),
        sa.Column('is_privacy_agreed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_location_agreed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('privacy_agreed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('provider', 'provider_id', name='uq_users_provider_provider_id'),
        sa.UniqueConstraint('username'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    # Refresh token 테이블 생성
    op.create_table(
        'refresh_token',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('token', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('expired_at', sa.DateTime(), nullable=False),
        sa.Column('is_revoked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_refresh_token_id'), 'refresh_token', ['id'], unique=False)
    op.create_index(op.f('ix_refresh_token_user_id'), 'refresh_token', ['user_id'], unique=False)
    op.create_index(op.f('ix_refresh_token_token'), 'refresh_token', ['token'], unique=False)

    # Moments 테이블 생성
    op.create_table(
        'moments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('place_id', sa.Integer(), nullable=False),
        sa.Column('place_name', sa.String(length=100), nullable=False),
        sa.Column('title', sa.String(length=50), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_moments_id'), 'moments', ['id'], unique=False)
    op.create_index(op.f('ix_moments_user_id'), 'moments', ['user_id'], unique=False)
    op.create_index(op.f('ix_moments_place_id'), 'moments', ['place_id'], unique=False)
    op.create_index(op.f('ix_moments_created_at'), 'moments', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_moments_created_at'), table_name='moments')
    op.drop_index(op.f('ix_moments_place_id'), table_name='moments')
    op.drop_index(op.f('ix_moments_user_id'), table_name='moments')
    op.drop_index(op.f('ix_moments_id'), table_name='moments')
    op.drop_table('moments')

    op.drop_index(op.f('ix_refresh_token_token'), table_name='refresh_token')
    op.drop_index(op.f('ix_refresh_token_user_id'), table_name='refresh_token')
    op.drop_index(op.f('ix_refresh_token_id'), table_name='refresh_token')
    op.drop_table('refresh_token')

    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
