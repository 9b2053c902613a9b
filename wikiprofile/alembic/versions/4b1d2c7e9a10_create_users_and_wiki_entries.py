"""Create users and wiki_entries tables

Revision ID: 4b1d2c7e9a10
Revises:
Create Date: 2026-10-18 09:12:31.418205

"""
from alembic import op
import sqlalchemy as sa
import sqlmodel.sql.sqltypes


# revision identifiers, used by Alembic.
revision = '4b1d2c7e9a10'
down_revision = None
branch_labels = None
depends_on = None


# Enum types for PostgreSQL (SQLModel stores enum member names)
role_enum = sa.Enum('USER', 'MODERATOR', 'ADMIN', name='role')
entry_status_enum = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='entrystatus')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('bio', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('profile_image_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('role', role_enum, nullable=False),
        sa.Column('hashed_password', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'wiki_entries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('image_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('status', entry_status_enum, nullable=False),
        sa.Column('moderation_note', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('moderated_by', sa.Uuid(), nullable=True),
        sa.Column('moderated_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['moderated_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_wiki_entries_user_id'), 'wiki_entries', ['user_id'], unique=False)
    op.create_index(op.f('ix_wiki_entries_status'), 'wiki_entries', ['status'], unique=False)
    op.create_index(op.f('ix_wiki_entries_created_at'), 'wiki_entries', ['created_at'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_wiki_entries_created_at'), table_name='wiki_entries')
    op.drop_index(op.f('ix_wiki_entries_status'), table_name='wiki_entries')
    op.drop_index(op.f('ix_wiki_entries_user_id'), table_name='wiki_entries')
    op.drop_table('wiki_entries')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
    # Drop the enum types
    entry_status_enum.drop(op.get_bind(), checkfirst=True)
    role_enum.drop(op.get_bind(), checkfirst=True)
