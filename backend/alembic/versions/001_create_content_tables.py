"""Create production and staging content tables

Revision ID: 001
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

DIFFICULTIES = "'beginner', 'intermediate', 'expert', 'scholar'"
QUESTION_TYPES = "'multiple_choice', 'true_false', 'fill_blank'"


def _create_categories(table: str) -> None:
    op.create_table(
        table,
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('sort_order', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('name', name=f'uq_{table}_name'),
    )


def _create_questions(table: str, categories: str, staging: bool) -> None:
    columns = [
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('category_id', sa.Uuid(), sa.ForeignKey(f'{categories}.id', ondelete='CASCADE'), nullable=True),
        sa.Column('difficulty', sa.String(20), nullable=False),
        sa.Column('question_type', sa.String(20), nullable=False),
        sa.Column('question_text', sa.Text, nullable=False),
        sa.Column('correct_answer', sa.Text, nullable=False),
        sa.Column('option_a', sa.Text, nullable=True),
        sa.Column('option_b', sa.Text, nullable=True),
        sa.Column('option_c', sa.Text, nullable=True),
        sa.Column('option_d', sa.Text, nullable=True),
        sa.Column('bible_reference', sa.Text, nullable=True),
        sa.Column('explanation', sa.Text, nullable=True),
        sa.Column('teaching_notes', sa.Text, nullable=True),
        sa.Column('tags', sa.JSON, nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('times_answered', sa.Integer, nullable=False, server_default='0'),
        sa.Column('times_correct', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]
    if staging:
        columns.append(sa.Column('ready_for_prod', sa.Boolean, nullable=False, server_default=sa.false()))

    op.create_table(
        table,
        *columns,
        sa.CheckConstraint(f'difficulty IN ({DIFFICULTIES})', name=f'ck_{table}_difficulty'),
        sa.CheckConstraint(f'question_type IN ({QUESTION_TYPES})', name=f'ck_{table}_question_type'),
    )

    op.create_index(f'ix_{table}_category_id', table, ['category_id'])
    op.create_index(f'ix_{table}_difficulty', table, ['difficulty'])
    op.create_index(f'ix_{table}_question_text', table, ['question_text'])
    if staging:
        op.create_index('ix_questions_dev_ready_for_prod', table, ['ready_for_prod'])


def upgrade() -> None:
    _create_categories('categories')
    _create_categories('categories_dev')
    _create_questions('questions', 'categories', staging=False)
    _create_questions('questions_dev', 'categories_dev', staging=True)


def downgrade() -> None:
    op.drop_table('questions_dev')
    op.drop_table('questions')
    op.drop_table('categories_dev')
    op.drop_table('categories')
