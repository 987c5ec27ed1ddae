"""create authorities issues issue_history

Initial schema: municipal authority accounts, reported issues and the
append-only issue_history ledger.

Revision ID: create_issue_tracking_tables
Revises:
Create Date: 2024-03-02 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'create_issue_tracking_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ISSUE_STATUS = ('NEW', 'ACKNOWLEDGED', 'IN_PROGRESS', 'RESOLVED', 'REJECTED')
ISSUE_CATEGORY = ('POTHOLES', 'GARBAGE', 'STREETLIGHTS', 'WATER', 'SEWAGE', 'OTHER')
DEPARTMENT = ('ROADS', 'SANITATION', 'WATER', 'ELECTRICITY', 'OTHER')
MUNICIPALITY_TYPE = ('municipal_corporation', 'municipal_council', 'nagar_panchayat')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'authorities',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False),
        sa.Column('city', sa.String(length=120), nullable=False),
        sa.Column('municipality_type', sa.Enum(*MUNICIPALITY_TYPE, name='municipalitytype'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_authorities_email', 'authorities', ['email'], unique=True)
    op.create_index('ix_authorities_city', 'authorities', ['city'])

    op.create_table(
        'issues',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=4000), nullable=False),
        sa.Column('category', sa.Enum(*ISSUE_CATEGORY, name='issuecategory'), nullable=False),
        sa.Column('status', sa.Enum(*ISSUE_STATUS, name='issuestatus'), nullable=False),
        sa.Column('address', sa.String(length=300), nullable=True),
        sa.Column('ward', sa.String(length=120), nullable=True),
        sa.Column('city', sa.String(length=120), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('reporter_name', sa.String(length=120), nullable=True),
        sa.Column('reporter_phone', sa.String(length=30), nullable=True),
        sa.Column('assigned_department', sa.Enum(*DEPARTMENT, name='department'), nullable=True),
        sa.Column('assigned_officer_name', sa.String(length=120), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('authority_id', sa.Integer(), sa.ForeignKey('authorities.id', ondelete='SET NULL'), nullable=True),
        sa.Column('reported_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_date', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_issues_title', 'issues', ['title'])
    op.create_index('ix_issues_category', 'issues', ['category'])
    op.create_index('ix_issues_status', 'issues', ['status'])
    op.create_index('ix_issues_city', 'issues', ['city'])
    op.create_index('ix_issues_assigned_department', 'issues', ['assigned_department'])
    op.create_index('ix_issues_reported_date', 'issues', ['reported_date'])
    op.create_index('ix_issues_status_category_city', 'issues', ['status', 'category', 'city'])

    # status reuses the issuestatus type created above
    op.create_table(
        'issue_history',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('issue_id', sa.String(length=32), sa.ForeignKey('issues.id'), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.Enum(*ISSUE_STATUS, name='issuestatus', create_type=False), nullable=False),
        sa.Column('updated_by', sa.String(length=255), nullable=False),
        sa.Column('department', sa.String(length=50), nullable=False),
        sa.Column('notes', sa.String(length=2000), nullable=True),
    )
    op.create_index('ix_issue_history_issue_id', 'issue_history', ['issue_id'])
    op.create_index('ix_issue_history_timestamp', 'issue_history', ['timestamp'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('issue_history')
    op.drop_table('issues')
    op.drop_table('authorities')
    bind = op.get_bind()
    for name in ('department', 'issuestatus', 'issuecategory', 'municipalitytype'):
        sa.Enum(name=name).drop(bind, checkfirst=True)
