"""create user, question, game and game_question tables

Revision ID: 5a1c9e7d2b10
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5a1c9e7d2b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('name', sa.String(length=64), nullable=True),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
            sa.Column('balance', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('created_at', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)

    if 'question' not in existing_tables:
        op.create_table(
            'question',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('level', sa.Integer(), nullable=False),
            sa.Column('answer1', sa.String(length=255), nullable=False),
            sa.Column('answer2', sa.String(length=255), nullable=False),
            sa.Column('answer3', sa.String(length=255), nullable=False),
            sa.Column('answer4', sa.String(length=255), nullable=False),
        )
        op.create_index('ix_question_level', 'question', ['level'])

    if 'game' not in existing_tables:
        op.create_table(
            'game',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('current_level', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('prize', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('is_failed', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('finished_at', sa.DateTime(), nullable=True),
            sa.Column('fifty_fifty_used', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('audience_help_used', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('friend_call_used', sa.Boolean(), nullable=False, server_default=sa.false()),
        )
        op.create_index('ix_game_user_id', 'game', ['user_id'])
        op.create_index(
            'ux_game_user_in_progress', 'game', ['user_id'], unique=True,
            sqlite_where=sa.text('finished_at IS NULL'),
            postgresql_where=sa.text('finished_at IS NULL'),
        )

    if 'game_question' not in existing_tables:
        op.create_table(
            'game_question',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('game_id', sa.Integer(), sa.ForeignKey('game.id'), nullable=False),
            sa.Column('question_id', sa.Integer(), sa.ForeignKey('question.id'), nullable=False),
            sa.Column('a', sa.Integer(), nullable=False),
            sa.Column('b', sa.Integer(), nullable=False),
            sa.Column('c', sa.Integer(), nullable=False),
            sa.Column('d', sa.Integer(), nullable=False),
            sa.Column('help_hash_json', sa.Text(), nullable=False, server_default='{}'),
        )
        op.create_index('ix_game_question_game_id', 'game_question', ['game_id'])


def downgrade():
    op.drop_table('game_question')
    op.drop_table('game')
    op.drop_table('question')
    op.drop_table('user')
