"""Create commitment and inventory_assignment tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# INTEGER PRIMARY KEY on SQLite so the column aliases rowid and autoincrements
SEQUENCE_KEY = sa.BigInteger().with_variant(sa.Integer(), "sqlite")

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Open order demand; seq breaks created_at ties in FIFO order
    op.create_table(
        'commitment',
        sa.Column('seq', SEQUENCE_KEY, autoincrement=True, nullable=False),
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('sku', sa.Text(), nullable=False),
        sa.Column('universal_sku', sa.Text(), nullable=False),
        sa.Column('order_id', sa.Text(), nullable=False),
        sa.Column('order_number', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('seq'),
        sa.UniqueConstraint('id', name='uq_commitment_id'),
        sa.CheckConstraint('quantity >= 1', name='ck_commitment_quantity'),
    )

    op.create_index('idx_commitment_order', 'commitment', ['order_id'])
    op.create_index('idx_commitment_universal_sku', 'commitment', ['universal_sku'])
    op.create_index('idx_commitment_created_at', 'commitment', ['created_at', 'seq'])

    # One row per allocated inventory unit
    op.create_table(
        'inventory_assignment',
        sa.Column('seq', SEQUENCE_KEY, autoincrement=True, nullable=False),
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('inventory_item_id', sa.Text(), nullable=False),
        sa.Column('order_id', sa.Text(), nullable=False),
        sa.Column('order_number', sa.Integer(), nullable=False),
        sa.Column('sku', sa.Text(), nullable=False),
        sa.Column('assigned_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('seq'),
        sa.UniqueConstraint('id', name='uq_inventory_assignment_id'),
        sa.UniqueConstraint('inventory_item_id', name='uq_inventory_assignment_item'),
    )

    op.create_index('idx_inventory_assignment_order', 'inventory_assignment', ['order_id'])


def downgrade():
    op.drop_index('idx_inventory_assignment_order', table_name='inventory_assignment')
    op.drop_table('inventory_assignment')

    op.drop_index('idx_commitment_created_at', table_name='commitment')
    op.drop_index('idx_commitment_universal_sku', table_name='commitment')
    op.drop_index('idx_commitment_order', table_name='commitment')
    op.drop_table('commitment')
