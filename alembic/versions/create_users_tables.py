"""create users and authorities tables

Revision ID: 3c1f7a9e2b64
Revises:
Create Date: 2026-10-19 17:05:12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f7a9e2b64'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('birthday', sa.Date(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_birthday', 'users', ['birthday'])

    op.create_table(
        'authorities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_authorities_name', 'authorities', ['name'], unique=True)

    op.create_table(
        'user_authorities',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('authority_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['authority_id'], ['authorities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'authority_id'),
    )


def downgrade() -> None:
    op.drop_table('user_authorities')
    op.drop_index('ix_authorities_name', table_name='authorities')
    op.drop_table('authorities')
    op.drop_index('ix_users_birthday', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
