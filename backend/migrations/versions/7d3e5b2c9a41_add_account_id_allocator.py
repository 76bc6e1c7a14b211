"""add shared account id allocator

Revision ID: 7d3e5b2c9a41
Revises: 4f1c2a9e7b10
Create Date: 2026-10-19 15:10:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7d3e5b2c9a41'
down_revision = '4f1c2a9e7b10'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'account_ids',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('allocated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_account_ids')),
        sqlite_autoincrement=True,
    )

    # Reserve ids already in use so new allocations start above them.
    op.execute(
        'INSERT INTO account_ids (id) '
        'SELECT id FROM accounts UNION SELECT id FROM pending_accounts'
    )
    if op.get_bind().dialect.name == 'postgresql':
        op.execute(
            "SELECT setval(pg_get_serial_sequence('account_ids', 'id'), "
            "COALESCE((SELECT MAX(id) FROM account_ids), 0) + 1, false)"
        )


def downgrade():
    op.drop_table('account_ids')
