"""Create initial schema

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '20261019_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def _has_table(bind, name: str) -> bool:
    try:
        insp = inspect(bind)
        return insp.has_table(name)
    except Exception:
        return False

def upgrade() -> None:
    bind = op.get_bind()

    # Create users table
    if not _has_table(bind, 'users'):
        op.create_table('users',
            sa.Column('id', sa.String(length=24), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('hashed_password', sa.String(length=255), nullable=True),
            sa.Column('role', sa.String(length=20), server_default='owner', nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # Create room_types table
    if not _has_table(bind, 'room_types'):
        op.create_table('room_types',
            sa.Column('id', sa.String(length=24), nullable=False),
            sa.Column('type_name', sa.String(length=50), nullable=False),
            sa.Column('status', sa.String(length=20), server_default='active', nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_room_types_type_name'), 'room_types', ['type_name'], unique=True)

    # Create room_listings table; room_type_id deliberately carries no foreign key
    if not _has_table(bind, 'room_listings'):
        op.create_table('room_listings',
            sa.Column('id', sa.String(length=24), nullable=False),
            sa.Column('owner_id', sa.String(length=24), nullable=False),
            sa.Column('owner_contact_number', sa.String(length=50), nullable=False),
            sa.Column('room_title', sa.String(length=200), nullable=False),
            sa.Column('monthly_price', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.Column('location', sa.String(length=300), nullable=False),
            sa.Column('room_type_id', sa.String(length=24), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('images', sa.JSON(), nullable=False),
            sa.Column('videos', sa.JSON(), nullable=False),
            sa.Column('is_available', sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.Column('approval_status', sa.String(length=20), server_default='pending', nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_room_listings_owner_id'), 'room_listings', ['owner_id'], unique=False)
        op.create_index(op.f('ix_room_listings_room_type_id'), 'room_listings', ['room_type_id'], unique=False)
        op.create_index(op.f('ix_room_listings_is_available'), 'room_listings', ['is_available'], unique=False)
        op.create_index(op.f('ix_room_listings_approval_status'), 'room_listings', ['approval_status'], unique=False)
        op.create_index(op.f('ix_room_listings_created_at'), 'room_listings', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_table('room_listings')
    op.drop_table('room_types')
    op.drop_table('users')
