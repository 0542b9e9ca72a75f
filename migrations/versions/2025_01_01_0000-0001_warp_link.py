"""Create warp_link table

Revision ID: 0001_warp_link
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_warp_link'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the warp_link table:
    - id: auto-incrementing key, never reused
    - short_code: unique, the public lookup key
    - long_url: destination URL
    - created_at: assigned by the database on insert
    """
    op.create_table(
        'warp_link',
        sa.Column(
            'id',
            sa.BigInteger().with_variant(sa.Integer(), 'sqlite'),
            nullable=False,
            autoincrement=True,
        ),
        sa.Column('short_code', sa.String(length=7), nullable=False),
        sa.Column('long_url', sa.Text(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_code', name='uq_warp_link_short_code'),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table('warp_link')
