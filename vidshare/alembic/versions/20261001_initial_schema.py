"""initial schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-01 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import advanced_alchemy.types


# revision identifiers, used by Alembic.
revision: str = '1a2b3c4d5e6f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column('id', advanced_alchemy.types.GUID(length=16), nullable=False),
        sa.Column('sa_orm_sentinel', sa.Integer(), nullable=True),
        sa.Column('created_at', advanced_alchemy.types.DateTimeUTC(timezone=True), nullable=False),
        sa.Column('updated_at', advanced_alchemy.types.DateTimeUTC(timezone=True), nullable=False),
    ]


def _owner_column(name: str = 'owner_id') -> sa.Column:
    return sa.Column(name, advanced_alchemy.types.GUID(length=16), nullable=False)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('avatar', sa.String(length=1024), nullable=False),
        sa.Column('cover_image', sa.String(length=1024), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'videos',
        _owner_column(),
        sa.Column('video_file', sa.String(length=1024), nullable=False),
        sa.Column('thumbnail', sa.String(length=1024), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=True),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name=op.f('fk_videos_owner_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_videos')),
    )
    op.create_index(op.f('ix_videos_owner_id'), 'videos', ['owner_id'])
    op.create_index(op.f('ix_videos_title'), 'videos', ['title'])
    op.create_index(op.f('ix_videos_is_published'), 'videos', ['is_published'])

    op.create_table(
        'comments',
        sa.Column('video_id', advanced_alchemy.types.GUID(length=16), nullable=False),
        _owner_column(),
        sa.Column('content', sa.Text(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], name=op.f('fk_comments_video_id_videos'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name=op.f('fk_comments_owner_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_comments')),
    )
    op.create_index(op.f('ix_comments_video_id'), 'comments', ['video_id'])
    op.create_index(op.f('ix_comments_owner_id'), 'comments', ['owner_id'])

    op.create_table(
        'tweets',
        _owner_column(),
        sa.Column('content', sa.String(length=280), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name=op.f('fk_tweets_owner_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tweets')),
    )
    op.create_index(op.f('ix_tweets_owner_id'), 'tweets', ['owner_id'])

    op.create_table(
        'playlists',
        _owner_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name=op.f('fk_playlists_owner_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_playlists')),
    )
    op.create_index(op.f('ix_playlists_owner_id'), 'playlists', ['owner_id'])
    op.create_index(op.f('ix_playlists_name'), 'playlists', ['name'])

    op.create_table(
        'playlist_videos',
        sa.Column('playlist_id', advanced_alchemy.types.GUID(length=16), nullable=False),
        sa.Column('video_id', advanced_alchemy.types.GUID(length=16), nullable=False),
        sa.Column('added_at', advanced_alchemy.types.DateTimeUTC(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['playlist_id'], ['playlists.id'], name=op.f('fk_playlist_videos_playlist_id_playlists'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], name=op.f('fk_playlist_videos_video_id_videos'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('playlist_id', 'video_id', name=op.f('pk_playlist_videos')),
    )

    op.create_table(
        'subscriptions',
        sa.Column('subscriber_id', advanced_alchemy.types.GUID(length=16), nullable=False),
        sa.Column('channel_id', advanced_alchemy.types.GUID(length=16), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['subscriber_id'], ['users.id'], name=op.f('fk_subscriptions_subscriber_id_users'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['channel_id'], ['users.id'], name=op.f('fk_subscriptions_channel_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_subscriptions')),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscriptions_subscriber_channel'),
    )
    op.create_index(op.f('ix_subscriptions_subscriber_id'), 'subscriptions', ['subscriber_id'])
    op.create_index(op.f('ix_subscriptions_channel_id'), 'subscriptions', ['channel_id'])

    op.create_table(
        'likes',
        sa.Column('liked_by_id', advanced_alchemy.types.GUID(length=16), nullable=False),
        sa.Column(
            'target_kind',
            sa.Enum('video', 'comment', 'tweet', name='like_target_kind', native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column('target_id', sa.Uuid(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(['liked_by_id'], ['users.id'], name=op.f('fk_likes_liked_by_id_users'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_likes')),
        sa.UniqueConstraint('liked_by_id', 'target_kind', 'target_id', name='uq_likes_user_kind_target'),
    )
    op.create_index(op.f('ix_likes_liked_by_id'), 'likes', ['liked_by_id'])
    op.create_index(op.f('ix_likes_target_id'), 'likes', ['target_id'])


def downgrade() -> None:
    op.drop_index(op.f('ix_likes_target_id'), table_name='likes')
    op.drop_index(op.f('ix_likes_liked_by_id'), table_name='likes')
    op.drop_table('likes')
    op.drop_index(op.f('ix_subscriptions_channel_id'), table_name='subscriptions')
    op.drop_index(op.f('ix_subscriptions_subscriber_id'), table_name='subscriptions')
    op.drop_table('subscriptions')
    op.drop_table('playlist_videos')
    op.drop_index(op.f('ix_playlists_name'), table_name='playlists')
    op.drop_index(op.f('ix_playlists_owner_id'), table_name='playlists')
    op.drop_table('playlists')
    op.drop_index(op.f('ix_tweets_owner_id'), table_name='tweets')
    op.drop_table('tweets')
    op.drop_index(op.f('ix_comments_owner_id'), table_name='comments')
    op.drop_index(op.f('ix_comments_video_id'), table_name='comments')
    op.drop_table('comments')
    op.drop_index(op.f('ix_videos_is_published'), table_name='videos')
    op.drop_index(op.f('ix_videos_title'), table_name='videos')
    op.drop_index(op.f('ix_videos_owner_id'), table_name='videos')
    op.drop_table('videos')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
