"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('username', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username')
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=False)

    op.create_table('groups',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('poker_tables',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('small_blind', sa.Integer(), nullable=False),
        sa.Column('big_blind', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('food', sa.String(length=36), nullable=True),
        sa.Column('group_id', sa.String(length=36), nullable=False),
        sa.Column('creator_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_poker_tables_created_at'), 'poker_tables', ['created_at'], unique=False)
    op.create_index(op.f('ix_poker_tables_group_id'), 'poker_tables', ['group_id'], unique=False)

    op.create_table('players',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('table_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('nickname', sa.String(length=255), nullable=True),
        sa.Column('chips', sa.Integer(), nullable=False),
        sa.Column('total_buy_in', sa.Integer(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('show_me', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['table_id'], ['poker_tables.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_players_table_id'), 'players', ['table_id'], unique=False)

    op.create_table('buyins',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('player_id', sa.String(length=36), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['player_id'], ['players.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_buyins_player_id'), 'buyins', ['player_id'], unique=False)

    op.create_table('cashouts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('player_id', sa.String(length=36), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['player_id'], ['players.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('player_id', name='uq_cashouts_player_id')
    )
    op.create_index(op.f('ix_cashouts_player_id'), 'cashouts', ['player_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_cashouts_player_id'), table_name='cashouts')
    op.drop_table('cashouts')
    op.drop_index(op.f('ix_buyins_player_id'), table_name='buyins')
    op.drop_table('buyins')
    op.drop_index(op.f('ix_players_table_id'), table_name='players')
    op.drop_table('players')
    op.drop_index(op.f('ix_poker_tables_group_id'), table_name='poker_tables')
    op.drop_index(op.f('ix_poker_tables_created_at'), table_name='poker_tables')
    op.drop_table('poker_tables')
    op.drop_table('groups')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
