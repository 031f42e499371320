"""Create episodes and parts tables

Revision ID: 001_create_episodes_and_parts
Revises: 
Create Date: 2024-11-26

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_create_episodes_and_parts'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'episodes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title', name='episodes_title_key'),
    )

    # Part titles are unique across every episode
    op.create_table(
        'parts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('episode_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('position', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['episode_id'], ['episodes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title', name='parts_title_key'),
    )
    op.create_index('ix_parts_episode_id', 'parts', ['episode_id'])
    op.create_index('ix_parts_episode_id_position', 'parts', ['episode_id', 'position'])


def downgrade() -> None:
    op.drop_index('ix_parts_episode_id_position', table_name='parts')
    op.drop_index('ix_parts_episode_id', table_name='parts')
    op.drop_table('parts')
    op.drop_table('episodes')
