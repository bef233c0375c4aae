"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Enum columns store member names
    user_role = sa.Enum('USER', 'ADMIN', name='userrole')
    project_status = sa.Enum('DRAFT', 'ACTIVE', 'PAUSED', 'COMPLETED', name='projectstatus')
    submission_status = sa.Enum('SUCCESS', 'PENDING', 'REJECTED', 'FAILED', name='submissionstatus')
    backlink_status = sa.Enum('ACTIVE', 'LOST', 'PENDING', 'DISAVOWED', name='backlinkstatus')

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('username', sa.String(30), nullable=False, unique=True),
        sa.Column('name', sa.String(100)),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False, server_default='USER'),
        sa.Column('plan', sa.String(50), nullable=False, server_default='free'),
        sa.Column('is_banned', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('last_login_at', sa.DateTime(timezone=True)),
        sa.Column('usage_projects', sa.Integer, nullable=False, server_default='0'),
        sa.Column('usage_submissions', sa.Integer, nullable=False, server_default='0'),
        sa.Column('usage_seo_tools', sa.Integer, nullable=False, server_default='0'),
        sa.Column('usage_backlinks', sa.Integer, nullable=False, server_default='0'),
        sa.Column('usage_reports', sa.Integer, nullable=False, server_default='0'),
        sa.Column('usage_version', sa.Integer, nullable=False, server_default='1'),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    # Create projects table
    op.create_table(
        'projects',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('project_name', sa.String(100), nullable=False),
        sa.Column('website_url', sa.String(500), nullable=False),
        sa.Column('category', sa.String(100)),
        sa.Column('description', sa.Text),
        sa.Column('status', project_status, nullable=False, server_default='DRAFT'),
        *_timestamps(),
    )
    op.create_index('ix_projects_id', 'projects', ['id'])
    op.create_index('ix_projects_user_id', 'projects', ['user_id'])
    op.create_index('ix_projects_status', 'projects', ['status'])
    op.create_index('ix_projects_created_at', 'projects', ['created_at'])

    # Create submissions table
    op.create_table(
        'submissions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('project_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('directory', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('status', submission_status, nullable=False, server_default='PENDING'),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True)),
        sa.Column('notes', sa.Text),
        *_timestamps(),
    )
    op.create_index('ix_submissions_id', 'submissions', ['id'])
    op.create_index('ix_submissions_user_id', 'submissions', ['user_id'])
    op.create_index('ix_submissions_project_id', 'submissions', ['project_id'])
    op.create_index('ix_submissions_status', 'submissions', ['status'])
    op.create_index('ix_submissions_submitted_at', 'submissions', ['submitted_at'])
    op.create_index('ix_submissions_created_at', 'submissions', ['created_at'])

    # Create seo_tool_usage table
    op.create_table(
        'seo_tool_usage',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('project_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('projects.id', ondelete='SET NULL')),
        sa.Column('tool_type', sa.String(100), nullable=False),
        sa.Column('url', sa.String(2048), nullable=False),
        sa.Column('score', sa.Integer),
        sa.Column('result', sa.JSON),
        *_timestamps(),
    )
    op.create_index('ix_seo_tool_usage_id', 'seo_tool_usage', ['id'])
    op.create_index('ix_seo_tool_usage_user_id', 'seo_tool_usage', ['user_id'])
    op.create_index('ix_seo_tool_usage_project_id', 'seo_tool_usage', ['project_id'])
    op.create_index('ix_seo_tool_usage_tool_type', 'seo_tool_usage', ['tool_type'])
    op.create_index('ix_seo_tool_usage_created_at', 'seo_tool_usage', ['created_at'])

    # Create backlinks table
    op.create_table(
        'backlinks',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('project_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('projects.id', ondelete='SET NULL')),
        sa.Column('source_url', sa.String(2048), nullable=False),
        sa.Column('target_url', sa.String(2048), nullable=False),
        sa.Column('status', backlink_status, nullable=False, server_default='ACTIVE'),
        *_timestamps(),
    )
    op.create_index('ix_backlinks_id', 'backlinks', ['id'])
    op.create_index('ix_backlinks_user_id', 'backlinks', ['user_id'])
    op.create_index('ix_backlinks_project_id', 'backlinks', ['project_id'])
    op.create_index('ix_backlinks_status', 'backlinks', ['status'])
    op.create_index('ix_backlinks_created_at', 'backlinks', ['created_at'])

    # Create reports table
    op.create_table(
        'reports',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('user_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('project_id', sa.Uuid(as_uuid=True),
                  sa.ForeignKey('projects.id', ondelete='SET NULL')),
        sa.Column('url', sa.String(2048), nullable=False),
        sa.Column('format', sa.String(10), nullable=False, server_default='html'),
        sa.Column('filename', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_reports_id', 'reports', ['id'])
    op.create_index('ix_reports_user_id', 'reports', ['user_id'])
    op.create_index('ix_reports_created_at', 'reports', ['created_at'])

    # Create pricing_plans table
    op.create_table(
        'pricing_plans',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        sa.Column('price', sa.Integer, nullable=False, server_default='0'),
        sa.Column('features', sa.JSON),
        sa.Column('active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('description', sa.Text),
        sa.Column('max_projects', sa.Integer),
        sa.Column('max_submissions', sa.Integer),
        sa.Column('max_seo_tools', sa.Integer),
        sa.Column('max_backlinks', sa.Integer),
        sa.Column('max_reports', sa.Integer),
        *_timestamps(),
    )
    op.create_index('ix_pricing_plans_id', 'pricing_plans', ['id'])
    op.create_index('ix_pricing_plans_name', 'pricing_plans', ['name'])
    op.create_index('ix_pricing_plans_created_at', 'pricing_plans', ['created_at'])


def downgrade() -> None:
    # Drop tables in reverse order
    op.drop_table('pricing_plans')
    op.drop_table('reports')
    op.drop_table('backlinks')
    op.drop_table('seo_tool_usage')
    op.drop_table('submissions')
    op.drop_table('projects')
    op.drop_table('users')

    for enum_name in ('backlinkstatus', 'submissionstatus', 'projectstatus', 'userrole'):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
