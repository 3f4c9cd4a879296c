"""Profiles and readings

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000+00:00

Creates the profiles table (indexed by creation time for latest-reading
lookups) and the readings table keyed 1:1 by profile id.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('time_of_birth', sa.Text(), nullable=False),
        sa.Column('gender', sa.Text(), nullable=False),
        sa.Column('state', sa.Text(), nullable=False),
        sa.Column('city', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('idx_profiles_created_at', 'profiles', ['created_at'])

    op.create_table(
        'readings',
        sa.Column(
            'profile_id',
            sa.Uuid(),
            sa.ForeignKey('profiles.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column('kundali_section', sa.Text(), nullable=False),
        sa.Column('recommendations_section', sa.Text(), nullable=False),
        sa.Column('practice_section', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table('readings')
    op.drop_index('idx_profiles_created_at', table_name='profiles')
    op.drop_table('profiles')
