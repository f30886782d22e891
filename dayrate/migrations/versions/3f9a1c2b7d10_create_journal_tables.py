"""create_journal_tables

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-09-28 21:14:03.512087

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from dayrate.migrations.util import get_empty_json_default, get_timestamp_default


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, entries, review assignments, ratings, guesses and badges."""
    now = get_timestamp_default()

    op.create_table('users',
        sa.Column('user_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=80), nullable=False),
        sa.Column('discord_id', sa.String(length=32), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.PrimaryKeyConstraint('user_id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('discord_id'),
    )

    op.create_table('entries',
        sa.Column('entry_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.String(length=1000), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False, server_default=get_empty_json_default()),
        sa.Column('gif_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('entry_id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_entries_user_date'),
        sa.CheckConstraint('rating >= 0 AND rating <= 20', name='ck_entries_rating_range'),
    )
    op.create_index('ix_entries_date', 'entries', ['date'], unique=False)

    op.create_table('review_assignments',
        sa.Column('assignment_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reviewer_id', sa.Integer(), nullable=False),
        sa.Column('reviewee_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.ForeignKeyConstraint(['reviewer_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reviewee_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('assignment_id'),
        sa.UniqueConstraint('reviewer_id', 'date', name='uq_review_assignments_reviewer_date'),
        sa.UniqueConstraint('reviewee_id', 'date', name='uq_review_assignments_reviewee_date'),
        sa.CheckConstraint('reviewer_id <> reviewee_id', name='ck_review_assignments_not_self'),
    )

    op.create_table('ratings',
        sa.Column('rating_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('from_user_id', sa.Integer(), nullable=False),
        sa.Column('to_user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.ForeignKeyConstraint(['from_user_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['to_user_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('rating_id'),
        sa.UniqueConstraint('from_user_id', 'date', name='uq_ratings_from_user_date'),
        sa.CheckConstraint('rating >= 0 AND rating <= 20', name='ck_ratings_rating_range'),
    )
    op.create_index('ix_ratings_date', 'ratings', ['date'], unique=False)

    op.create_table('guesses',
        sa.Column('guess_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('guesser_id', sa.Integer(), nullable=False),
        sa.Column('entry_user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('guessed_user_id', sa.Integer(), nullable=True),
        sa.Column('is_correct', sa.Boolean(), nullable=True),
        sa.Column('guessed_rating', sa.Integer(), nullable=True),
        sa.Column('actual_rating', sa.Integer(), nullable=True),
        sa.Column('rating_correct', sa.Boolean(), nullable=True),
        sa.Column('rating_exact', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.ForeignKeyConstraint(['guesser_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['entry_user_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['guessed_user_id'], ['users.user_id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('guess_id'),
        sa.UniqueConstraint('guesser_id', 'date', name='uq_guesses_guesser_date'),
    )
    op.create_index('ix_guesses_guesser_date', 'guesses', ['guesser_id', 'date'], unique=False)

    op.create_table('user_badges',
        sa.Column('badge_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('badge_type', sa.String(length=50), nullable=False),
        sa.Column('badge_metadata', sa.JSON(), nullable=True),
        sa.Column('earned_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('badge_id'),
        sa.UniqueConstraint('user_id', 'badge_type', name='uq_user_badges_user_type'),
    )
    op.create_index('ix_user_badges_user_id', 'user_badges', ['user_id'], unique=False)


def downgrade() -> None:
    """Drop all journal tables."""
    op.drop_index('ix_user_badges_user_id', table_name='user_badges')
    op.drop_table('user_badges')
    op.drop_index('ix_guesses_guesser_date', table_name='guesses')
    op.drop_table('guesses')
    op.drop_index('ix_ratings_date', table_name='ratings')
    op.drop_table('ratings')
    op.drop_table('review_assignments')
    op.drop_index('ix_entries_date', table_name='entries')
    op.drop_table('entries')
    op.drop_table('users')
