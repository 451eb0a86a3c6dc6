"""Initial schema: accounts, catalog, cards, reviews, change requests

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade() -> None:
    # Create account table
    op.create_table(
        'account',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='client'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_account_username'), 'account', ['username'], unique=True)

    # Create card_type table
    op.create_table(
        'card_type',
        sa.Column('code', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('updated_by', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('code')
    )

    # Create catalog_item table
    op.create_table(
        'catalog_item',
        sa.Column('code', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False, server_default=''),
        sa.Column('metadata', JSON_TYPE, nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('updated_by', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('code')
    )
    op.create_index('ix_catalog_item_created_at', 'catalog_item', ['created_at'], unique=False)

    # Create card table
    op.create_table(
        'card',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('item_code', sa.String(), nullable=False),
        sa.Column('card_type_code', sa.String(), nullable=False),
        sa.Column('ease_factor', sa.Numeric(precision=5, scale=2), nullable=False, server_default='2.50'),
        sa.Column('interval_days', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('repetitions', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('next_review_at', sa.DateTime(), nullable=False),
        sa.Column('last_reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['account_id'], ['account.id'], ),
        sa.ForeignKeyConstraint(['item_code'], ['catalog_item.code'], ),
        sa.ForeignKeyConstraint(['card_type_code'], ['card_type.code'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('account_id', 'item_code', 'card_type_code', name='uq_card_account_item_type'),
        sa.CheckConstraint('ease_factor >= 1.3', name='ck_card_ease_factor_min'),
        sa.CheckConstraint('interval_days >= 1', name='ck_card_interval_days_min'),
        sa.CheckConstraint('repetitions >= 0', name='ck_card_repetitions_min')
    )
    op.create_index(op.f('ix_card_account_id'), 'card', ['account_id'], unique=False)
    op.create_index(op.f('ix_card_item_code'), 'card', ['item_code'], unique=False)
    op.create_index('ix_card_account_next_review', 'card', ['account_id', 'next_review_at'], unique=False)

    # Create review_event table
    op.create_table(
        'review_event',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('card_id', sa.Integer(), nullable=False),
        sa.Column('quality', sa.Integer(), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['card_id'], ['card.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('quality >= 0 AND quality <= 5', name='ck_review_event_quality_range')
    )
    op.create_index(op.f('ix_review_event_card_id'), 'review_event', ['card_id'], unique=False)

    # Create change_request table
    op.create_table(
        'change_request',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('kind', sa.String(), nullable=False),
        sa.Column('target_code', sa.String(), nullable=True),
        sa.Column('payload', JSON_TYPE, nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='PENDING'),
        sa.Column('submitter_id', sa.Integer(), nullable=False),
        sa.Column('reviewer_id', sa.Integer(), nullable=True),
        sa.Column('review_comment', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['submitter_id'], ['account.id'], ),
        sa.ForeignKeyConstraint(['reviewer_id'], ['account.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("kind IN ('CREATE', 'UPDATE', 'DELETE')", name='ck_change_request_kind'),
        sa.CheckConstraint("status IN ('PENDING', 'APPROVED', 'REJECTED')", name='ck_change_request_status')
    )
    op.create_index(op.f('ix_change_request_submitter_id'), 'change_request', ['submitter_id'], unique=False)
    op.create_index('ix_change_request_status_created', 'change_request', ['status', 'created_at'], unique=False)

    # Create code_sequence table and seed one counter per prefix
    code_sequence = op.create_table(
        'code_sequence',
        sa.Column('prefix', sa.String(length=2), nullable=False),
        sa.Column('last_value', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('prefix')
    )
    op.bulk_insert(code_sequence, [
        {'prefix': 'ST', 'last_value': 0},
        {'prefix': 'CS', 'last_value': 0},
    ])


def downgrade() -> None:
    op.drop_table('code_sequence')
    op.drop_index('ix_change_request_status_created', table_name='change_request')
    op.drop_index(op.f('ix_change_request_submitter_id'), table_name='change_request')
    op.drop_table('change_request')
    op.drop_index(op.f('ix_review_event_card_id'), table_name='review_event')
    op.drop_table('review_event')
    op.drop_index('ix_card_account_next_review', table_name='card')
    op.drop_index(op.f('ix_card_item_code'), table_name='card')
    op.drop_index(op.f('ix_card_account_id'), table_name='card')
    op.drop_table('card')
    op.drop_index('ix_catalog_item_created_at', table_name='catalog_item')
    op.drop_table('catalog_item')
    op.drop_table('card_type')
    op.drop_index(op.f('ix_account_username'), table_name='account')
    op.drop_table('account')
