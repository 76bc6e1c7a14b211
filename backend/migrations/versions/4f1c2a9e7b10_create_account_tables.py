"""create account, profile and pending tables

Revision ID: 4f1c2a9e7b10
Revises:
Create Date: 2026-10-19 09:30:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4f1c2a9e7b10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def _identity_columns():
    return [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=True),
    ]


def _organization_columns():
    return [
        sa.Column('organization_name', sa.String(length=150), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('website', sa.String(length=255), nullable=True),
    ]


def upgrade():
    op.create_table(
        'accounts',
        *_identity_columns(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_accounts')),
        sa.UniqueConstraint('email', name='uq_accounts_email'),
        sa.UniqueConstraint('username', name='uq_accounts_username'),
    )
    op.create_index('ix_accounts_email', 'accounts', ['email'], unique=False)

    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['id'], ['accounts.id'], name=op.f('fk_user_profiles_id_accounts'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_user_profiles')),
    )

    op.create_table(
        'donation_center_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        *_organization_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(['id'], ['accounts.id'], name=op.f('fk_donation_center_profiles_id_accounts'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_donation_center_profiles')),
    )

    op.create_table(
        'pending_accounts',
        *_identity_columns(),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_pending_accounts')),
        sa.UniqueConstraint('email', name='uq_pending_accounts_email'),
        sa.UniqueConstraint('username', name='uq_pending_accounts_username'),
    )

    op.create_table(
        'pending_donation_center_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        *_organization_columns(),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['id'], ['pending_accounts.id'],
            name=op.f('fk_pending_donation_center_profiles_id_pending_accounts'),
            deferrable=True, initially='DEFERRED',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_pending_donation_center_profiles')),
    )


def downgrade():
    op.drop_table('pending_donation_center_profiles')
    op.drop_table('pending_accounts')
    op.drop_table('donation_center_profiles')
    op.drop_table('user_profiles')
    op.drop_index('ix_accounts_email', table_name='accounts')
    op.drop_table('accounts')
