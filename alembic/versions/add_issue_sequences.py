"""add issue_sequences counter

Adds the per-year id counter used to allocate ISS-<year>-<n> identifiers and
seeds it from the ids already present, so existing rows are never reused.

Revision ID: add_issue_sequences
Revises: create_issue_tracking_tables
Create Date: 2024-03-09 09:30:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'add_issue_sequences'
down_revision: Union[str, Sequence[str], None] = 'create_issue_tracking_tables'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'issue_sequences',
        sa.Column('prefix', sa.String(length=20), primary_key=True),
        sa.Column('last_value', sa.Integer(), nullable=False, server_default='0'),
    )

    conn = op.get_bind()
    highest: dict[str, int] = {}
    for (issue_id,) in conn.execute(sa.text("SELECT id FROM issues")):
        prefix, _, suffix = issue_id.rpartition("-")
        if prefix and suffix.isdigit():
            highest[prefix] = max(highest.get(prefix, 0), int(suffix))
    for prefix, value in highest.items():
        conn.execute(
            sa.text("INSERT INTO issue_sequences (prefix, last_value) VALUES (:p, :v)"),
            {"p": prefix, "v": value},
        )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('issue_sequences')
