"""Create note and visibility term tables

Revision ID: 5a1f0c3e9d21
Revises:
Create Date: 2025-09-20 18:04:11.512204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5a1f0c3e9d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'diaryx_note',
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('markdown', sa.Text(), nullable=False),
        sa.Column('source_name', sa.Text(), nullable=True),
        sa.Column(
            'last_modified', sa.BigInteger(), nullable=False,
            server_default=sa.text("(EXTRACT(EPOCH FROM NOW()) * 1000)::bigint"),
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('user_id', 'id'),
    )
    op.create_index('diaryx_note_user_updated_idx', 'diaryx_note', ['user_id', sa.text('updated_at DESC')])

    op.create_table(
        'diaryx_visibility_term',
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('term', sa.Text(), nullable=False),
        sa.Column('emails', postgresql.ARRAY(sa.Text()), nullable=False, server_default='{}'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('user_id', 'term'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('diaryx_visibility_term')
    op.drop_index('diaryx_note_user_updated_idx', table_name='diaryx_note')
    op.drop_table('diaryx_note')
