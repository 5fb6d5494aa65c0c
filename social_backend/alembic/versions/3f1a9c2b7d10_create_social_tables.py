"""Create users, follows, feeds, comments, reactions, chat tables

Revision ID: 3f1a9c2b7d10
Revises:
Create Date: 2025-06-02 10:14:51.228417

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
        sa.Column('deleted_at', sa.DateTime, nullable=True),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('fullname', sa.String(255), nullable=False),
        sa.Column('username', sa.String(100), nullable=False, unique=True),
        sa.Column('email', sa.String(100), nullable=False, unique=True),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('photo_profile', sa.String(255), nullable=True),
        sa.Column('gender', sa.String(50), nullable=True),
        sa.Column('birth_date', sa.Date, nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_deleted_at', 'users', ['deleted_at'])

    op.create_table(
        'follows',
        sa.Column('follower_id', sa.Integer, sa.ForeignKey('users.id'), primary_key=True),
        sa.Column('following_id', sa.Integer, sa.ForeignKey('users.id'), primary_key=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_follows_following_id', 'follows', ['following_id'])

    op.create_table(
        'feeds',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_feeds_id', 'feeds', ['id'])
    op.create_index('ix_feeds_user_id', 'feeds', ['user_id'])
    op.create_index('ix_feeds_deleted_at', 'feeds', ['deleted_at'])

    op.create_table(
        'feed_attachments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('feed_id', sa.Integer, sa.ForeignKey('feeds.id'), nullable=False),
        sa.Column('position', sa.Integer, nullable=False),
        sa.Column('path', sa.String(255), nullable=False),
        sa.UniqueConstraint('feed_id', 'position', name='uq_feed_attachment_position'),
    )
    op.create_index('ix_feed_attachments_feed_id', 'feed_attachments', ['feed_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('feed_id', sa.Integer, sa.ForeignKey('feeds.id'), nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('file', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_comments_id', 'comments', ['id'])
    op.create_index('ix_comments_feed_id', 'comments', ['feed_id'])
    op.create_index('ix_comments_user_id', 'comments', ['user_id'])
    op.create_index('ix_comments_deleted_at', 'comments', ['deleted_at'])

    op.create_table(
        'reactions',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('feed_id', sa.Integer, sa.ForeignKey('feeds.id'), nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('reaction', sa.String(16), nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.UniqueConstraint('feed_id', 'user_id', name='uq_reaction_feed_user'),
    )
    op.create_index('ix_reactions_id', 'reactions', ['id'])
    op.create_index('ix_reactions_feed_id', 'reactions', ['feed_id'])

    op.create_table(
        'chatrooms',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('owner_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('is_group', sa.Boolean, nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_chatrooms_id', 'chatrooms', ['id'])
    op.create_index('ix_chatrooms_deleted_at', 'chatrooms', ['deleted_at'])

    op.create_table(
        'chatroom_users',
        sa.Column('chatroom_id', sa.Integer, sa.ForeignKey('chatrooms.id'), primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), primary_key=True),
        sa.Column('joined_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_chatroom_users_user_id', 'chatroom_users', ['user_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('chatroom_id', sa.Integer, sa.ForeignKey('chatrooms.id'), nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('file', sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_messages_id', 'messages', ['id'])
    op.create_index('ix_messages_chatroom_id', 'messages', ['chatroom_id'])
    op.create_index('ix_messages_deleted_at', 'messages', ['deleted_at'])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'messages', 'chatroom_users', 'chatrooms', 'reactions',
        'comments', 'feed_attachments', 'feeds', 'follows', 'users',
    ):
        op.drop_table(table)
