"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-10-19 09:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RESOURCES = ('users', 'leads', 'departments', 'sections', 'programs', 'roles', 'permissions', 'inbox', 'madaris')
ACTIONS = ('create', 'read', 'update', 'delete', 'manage')
LEAD_STATUSES = ('new', 'contacted', 'qualified', 'proposal', 'negotiation', 'closed-won', 'closed-lost')
LEAD_PRIORITIES = ('low', 'medium', 'high', 'urgent')

ASSIGNMENTS = [
    ('madrasa_curriculum_assignment', 'madrasa', 'curriculum'),
    ('curriculum_subject_assignment', 'curriculum', 'subject'),
    ('lead_user_assignment', 'lead', 'user'),
]


def audit_columns():
    return [
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('created_by', sa.String(36)),
        sa.Column('updated_by', sa.String(36)),
    ]


def active_column(**kwargs):
    return sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true(), **kwargs)


def upgrade() -> None:
    op.create_table(
        'role',
        *audit_columns(),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        sa.Column('description', sa.String(200)),
        active_column(),
    )

    op.create_table(
        'permission',
        *audit_columns(),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        sa.Column('description', sa.String(200)),
        sa.Column('resource', sa.Enum(*RESOURCES, name='permission_resource'), nullable=False),
        sa.Column('action', sa.Enum(*ACTIONS, name='permission_action'), nullable=False),
        active_column(index=True),
    )
    op.create_index('permission_resource_action_key', 'permission', ['resource', 'action'], unique=True)

    op.create_table(
        'role_permission',
        sa.Column('role_id', sa.String(36), sa.ForeignKey('role.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('permission_id', sa.String(36), sa.ForeignKey('permission.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'user',
        *audit_columns(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(320), nullable=False, unique=True),
        sa.Column('password', sa.String(1024)),
        sa.Column('role_id', sa.String(36), sa.ForeignKey('role.id', ondelete='RESTRICT', onupdate='CASCADE'), nullable=False, index=True),
        active_column(),
        sa.Column('last_login', sa.DateTime(timezone=True)),
    )

    op.create_table(
        'madrasa',
        *audit_columns(),
        sa.Column('name', sa.String(200), nullable=False, index=True),
        sa.Column('reg_no', sa.String(50)),
        sa.Column('address', sa.String(1024)),
        sa.Column('remarks', sa.String(4096)),
        active_column(),
    )

    op.create_table(
        'curriculum',
        *audit_columns(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.String(4096)),
        sa.Column('status', sa.Enum('active', 'inactive', 'draft', name='curriculum_status'), nullable=False, server_default='draft'),
        sa.Column('remarks', sa.String(4096)),
        active_column(),
    )
    op.create_index('curriculum_title_status_key', 'curriculum', ['title', 'status', 'is_active'])

    op.create_table(
        'subject',
        *audit_columns(),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('added_on_date', sa.Date()),
        sa.Column('added_for_class', sa.String(255), nullable=False),
        sa.Column('added_for_agegroup', sa.String(255), nullable=False),
        sa.Column('remarks', sa.String(4096)),
        active_column(),
    )
    op.create_index('subject_subject_class_key', 'subject', ['subject', 'added_for_class', 'is_active'])

    op.create_table(
        'lead',
        *audit_columns(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('response', sa.Text()),
        sa.Column('status', sa.Enum(*LEAD_STATUSES, name='lead_status'), nullable=False, server_default='new'),
        sa.Column('priority', sa.Enum(*LEAD_PRIORITIES, name='lead_priority'), nullable=False, server_default='medium'),
        sa.Column('source', sa.String(100)),
        active_column(),
    )
    op.create_index('ix_lead_created_at', 'lead', ['created_at'])

    for table, side_a, side_b in ASSIGNMENTS:
        op.create_table(
            table,
            *audit_columns(),
            sa.Column(f'{side_a}_id', sa.String(36), sa.ForeignKey(f'{side_a}.id', ondelete='RESTRICT'), nullable=False, index=True),
            sa.Column(f'{side_b}_id', sa.String(36), sa.ForeignKey(f'{side_b}.id', ondelete='RESTRICT'), nullable=False, index=True),
            active_column(),
            sa.Column('assigned_date', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        )
        op.create_index(f'ix_{table}_created_at', table, ['created_at'])
        # At most one active row per pair; inactive history is unrestricted
        op.create_index(
            f'{table}_active_key',
            table,
            [f'{side_a}_id', f'{side_b}_id'],
            unique=True,
            postgresql_where=sa.text('is_active'),
            sqlite_where=sa.text('is_active = 1'),
        )


def downgrade() -> None:
    for table, _, _ in reversed(ASSIGNMENTS):
        op.drop_table(table)

    op.drop_table('lead')
    op.drop_table('subject')
    op.drop_table('curriculum')
    op.drop_table('madrasa')
    op.drop_table('user')
    op.drop_table('role_permission')
    op.drop_table('permission')
    op.drop_table('role')

    for enum_name in ('lead_priority', 'lead_status', 'curriculum_status', 'permission_action', 'permission_resource'):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
