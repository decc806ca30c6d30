"""initial ton swap schema

Revision ID: 3b1f9c2e7a41
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b1f9c2e7a41'
down_revision = None
branch_labels = None
depends_on = None

voucher_status = sa.Enum('active', 'exhausted', 'replaced', name='voucherstatus')
transaction_kind = sa.Enum('swap', 'voucher', name='transactionkind')


def upgrade() -> None:
    # Users and referral settings
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_superuser', sa.Boolean(), nullable=False),
        sa.Column('referral_code', sa.String(length=50), nullable=False),
        sa.Column('referrals', sa.Integer(), nullable=False),
        sa.Column('total_commission', sa.Numeric(precision=24, scale=9), nullable=False),
        sa.Column('commission_rate', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_referral_code'), 'users', ['referral_code'], unique=True)

    # One row per currency pair
    op.create_table(
        'exchange_rates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('pair', sa.String(length=32), nullable=False),
        sa.Column('rate', sa.Numeric(precision=18, scale=8), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_exchange_rates')),
    )
    op.create_index(op.f('ix_exchange_rates_pair'), 'exchange_rates', ['pair'], unique=True)

    # Voucher rate cards and purchased vouchers
    op.create_table(
        'voucher_rates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('bonus', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('price', sa.Numeric(precision=18, scale=9), nullable=False),
        sa.Column('transaction_limit', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_voucher_rates')),
        sa.UniqueConstraint('name', name=op.f('uq_voucher_rates_name')),
    )
    op.create_table(
        'active_vouchers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('wallet_address', sa.String(length=128), nullable=False),
        sa.Column('voucher_rate_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('bonus', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('price', sa.Numeric(precision=18, scale=9), nullable=False),
        sa.Column('used_transactions', sa.Integer(), nullable=False),
        sa.Column('transaction_limit', sa.Integer(), nullable=False),
        sa.Column('status', voucher_status, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ['voucher_rate_id'],
            ['voucher_rates.id'],
            name=op.f('fk_active_vouchers_voucher_rate_id_voucher_rates'),
            ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_active_vouchers')),
    )
    op.create_index(op.f('ix_active_vouchers_wallet_address'), 'active_vouchers', ['wallet_address'], unique=False)
    op.create_index('ix_active_vouchers_wallet_status', 'active_vouchers', ['wallet_address', 'status'], unique=False)

    # Wallet directory
    op.create_table(
        'wallets',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('address', sa.String(length=128), nullable=False),
        sa.Column('last_active', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_swapped', sa.Numeric(precision=24, scale=9), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_wallets')),
    )
    op.create_index(op.f('ix_wallets_address'), 'wallets', ['address'], unique=True)

    # Append-only logs
    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('wallet_address', sa.String(length=128), nullable=False),
        sa.Column('amount', sa.Numeric(precision=24, scale=9), nullable=False),
        sa.Column('kind', transaction_kind, nullable=False),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_transactions')),
    )
    op.create_index(op.f('ix_transactions_wallet_address'), 'transactions', ['wallet_address'], unique=False)
    op.create_index(op.f('ix_transactions_kind'), 'transactions', ['kind'], unique=False)
    op.create_index('ix_transactions_created_at', 'transactions', ['created_at'], unique=False)

    op.create_table(
        'referral_transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('referral_code', sa.String(length=50), nullable=False),
        sa.Column('referred_wallet', sa.String(length=128), nullable=False),
        sa.Column('amount', sa.Numeric(precision=24, scale=9), nullable=False),
        sa.Column('commission', sa.Numeric(precision=24, scale=9), nullable=False),
        sa.Column('commission_rate', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['users.id'],
            name=op.f('fk_referral_transactions_user_id_users'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_referral_transactions')),
    )
    op.create_index(op.f('ix_referral_transactions_user_id'), 'referral_transactions', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_referral_transactions_user_id'), table_name='referral_transactions')
    op.drop_table('referral_transactions')
    op.drop_index('ix_transactions_created_at', table_name='transactions')
    op.drop_index(op.f('ix_transactions_kind'), table_name='transactions')
    op.drop_index(op.f('ix_transactions_wallet_address'), table_name='transactions')
    op.drop_table('transactions')
    op.drop_index(op.f('ix_wallets_address'), table_name='wallets')
    op.drop_table('wallets')
    op.drop_index('ix_active_vouchers_wallet_status', table_name='active_vouchers')
    op.drop_index(op.f('ix_active_vouchers_wallet_address'), table_name='active_vouchers')
    op.drop_table('active_vouchers')
    op.drop_table('voucher_rates')
    op.drop_index(op.f('ix_exchange_rates_pair'), table_name='exchange_rates')
    op.drop_table('exchange_rates')
    op.drop_index(op.f('ix_users_referral_code'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
    transaction_kind.drop(op.get_bind(), checkfirst=True)
    voucher_status.drop(op.get_bind(), checkfirst=True)
