"""Initial migration: create flashcard table

Revision ID: 001_flashcard
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_flashcard'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'flashcard',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('spanish_word', sa.String(), nullable=False),
        sa.Column('english_word', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False, server_default='General'),
        sa.Column('times_seen', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('percentage_correct', sa.Float(), nullable=False, server_default='0'),
        sa.Column('date_last_seen', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('favorite', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id')
    )
    # Not unique: duplicates are removed by the deduplication maintenance task
    op.create_index(op.f('ix_flashcard_spanish_word'), 'flashcard', ['spanish_word'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_flashcard_spanish_word'), table_name='flashcard')
    op.drop_table('flashcard')
