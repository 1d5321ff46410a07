"""create shows

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'shows',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('show_id', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('region', sa.String(length=50), nullable=False),
        sa.Column('venue_name', sa.String(length=300), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('seat_count', sa.Integer(), nullable=True),
        sa.Column('cast', sa.Text(), nullable=True),
        sa.Column('creator', sa.Text(), nullable=True),
        sa.Column('runtime', sa.String(length=100), nullable=True),
        sa.Column('age_rating', sa.String(length=100), nullable=True),
        sa.Column('company', sa.Text(), nullable=True),
        sa.Column('price', sa.Text(), nullable=True),
        sa.Column('min_price', sa.Integer(), nullable=True),
        sa.Column('max_price', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('schedule', sa.Text(), nullable=True),
        sa.Column(
            'lifecycle_state',
            sa.Enum('UPCOMING', 'RUNNING', 'FINISHED', name='lifecyclestate', native_enum=False, length=20),
            nullable=False,
            server_default='UPCOMING',
        ),
        sa.Column('poster_url', sa.String(length=1000), nullable=True),
        sa.Column('detail_image_urls', JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('rank', sa.Integer(), nullable=True),
        sa.Column('avg_rating', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_shows_show_id'), 'shows', ['show_id'], unique=True)
    op.create_index(op.f('ix_shows_start_date'), 'shows', ['start_date'], unique=False)
    op.create_index(op.f('ix_shows_end_date'), 'shows', ['end_date'], unique=False)
    op.create_index(op.f('ix_shows_region'), 'shows', ['region'], unique=False)
    op.create_index(op.f('ix_shows_lifecycle_state'), 'shows', ['lifecycle_state'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_shows_lifecycle_state'), table_name='shows')
    op.drop_index(op.f('ix_shows_region'), table_name='shows')
    op.drop_index(op.f('ix_shows_end_date'), table_name='shows')
    op.drop_index(op.f('ix_shows_start_date'), table_name='shows')
    op.drop_index(op.f('ix_shows_show_id'), table_name='shows')
    op.drop_table('shows')
