"""departments, sections, programs and lead responses

Revision ID: 0002_organization_and_responses
Revises: 0001_initial_schema
Create Date: 2025-11-03 14:27:05.918344

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002_organization_and_responses'
down_revision: Union[str, None] = '0001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def audit_columns():
    return [
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('created_by', sa.String(36)),
        sa.Column('updated_by', sa.String(36)),
    ]


def upgrade() -> None:
    op.create_table(
        'department',
        *audit_columns(),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('description', sa.String(500)),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true(), index=True),
    )

    op.create_table(
        'section',
        *audit_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(500)),
        sa.Column('department_id', sa.String(36), sa.ForeignKey('department.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true(), index=True),
    )
    op.create_index('section_name_department_key', 'section', ['name', 'department_id'])

    op.create_table(
        'program',
        *audit_columns(),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('description', sa.String(500)),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true(), index=True),
    )

    op.add_column('lead', sa.Column('department_id', sa.String(36), sa.ForeignKey('department.id', ondelete='RESTRICT')))
    op.add_column('lead', sa.Column('section_id', sa.String(36), sa.ForeignKey('section.id', ondelete='RESTRICT')))
    op.add_column('lead', sa.Column('program_id', sa.String(36), sa.ForeignKey('program.id', ondelete='RESTRICT')))
    op.create_index('ix_lead_department_id', 'lead', ['department_id'])

    op.create_table(
        'lead_response',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('lead_id', sa.String(36), sa.ForeignKey('lead.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('user.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('target_user_id', sa.String(36), sa.ForeignKey('user.id', ondelete='SET NULL'), index=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_internal', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_read_by_creator', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('read_by_creator_at', sa.DateTime(timezone=True)),
        sa.Column('is_read_by_target', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('read_by_target_at', sa.DateTime(timezone=True)),
    )
    op.create_index('lead_response_lead_created_key', 'lead_response', ['lead_id', 'created_at'])


def downgrade() -> None:
    op.drop_table('lead_response')

    op.drop_index('ix_lead_department_id', table_name='lead')
    op.drop_column('lead', 'program_id')
    op.drop_column('lead', 'section_id')
    op.drop_column('lead', 'department_id')

    op.drop_table('program')
    op.drop_table('section')
    op.drop_table('department')
