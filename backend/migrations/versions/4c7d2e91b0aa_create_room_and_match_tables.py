"""create room, match and match_player tables

Revision ID: 4c7d2e91b0aa
Revises:
Create Date: 2026-10-16 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c7d2e91b0aa'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'room' not in existing_tables:
        op.create_table(
            'room',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('room_key', sa.String(length=32), nullable=False),
            sa.Column('passcode_hash', sa.String(length=128), nullable=False),
            sa.Column('owner_name', sa.String(length=64), nullable=False),
            sa.Column('owner_email', sa.String(length=254), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('expires_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_room_room_key', 'room', ['room_key'], unique=True)

    if 'match' not in existing_tables:
        op.create_table(
            'match',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('room_key', sa.String(length=32), nullable=True),
            sa.Column('winner_name', sa.String(length=64), nullable=True),
            sa.Column('reason', sa.String(length=64), nullable=False),
            sa.Column('rounds', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_match_room_key', 'match', ['room_key'])

    if 'match_player' not in existing_tables:
        op.create_table(
            'match_player',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('match_id', sa.Integer(), sa.ForeignKey('match.id'), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('email', sa.String(length=254), nullable=True),
            sa.Column('score', sa.Integer(), nullable=True),
        )


def downgrade():
    op.drop_table('match_player')
    op.drop_index('ix_match_room_key', table_name='match')
    op.drop_table('match')
    op.drop_index('ix_room_room_key', table_name='room')
    op.drop_table('room')
