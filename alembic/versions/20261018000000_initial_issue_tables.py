"""Repositories, insight types and issues with code server ticket columns.

Revision ID: 20261018000000
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "repositories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("df_scm_url", sa.String(length=2048), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_repositories_df_scm_url"),
        "repositories",
        ["df_scm_url"],
        unique=True,
    )
    op.create_table(
        "insight_types",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_insight_types_code"),
        "insight_types",
        ["code"],
        unique=True,
    )
    op.create_table(
        "issues",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("repository_id", sa.Integer(), nullable=False),
        sa.Column("insight_type_id", sa.Integer(), nullable=False),
        sa.Column("issue_hash", sa.String(length=255), nullable=False),
        sa.Column("cs_ticket_export_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cs_ticket_id", sa.String(length=255), nullable=True),
        sa.Column("cs_ticket_url", sa.String(length=2048), nullable=True),
        sa.ForeignKeyConstraint(["repository_id"], ["repositories.id"]),
        sa.ForeignKeyConstraint(["insight_type_id"], ["insight_types.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "repository_id",
            "insight_type_id",
            "issue_hash",
            name="uq_issues_repository_insight_type_hash",
        ),
    )
    op.create_index(op.f("ix_issues_repository_id"), "issues", ["repository_id"], unique=False)
    op.create_index(op.f("ix_issues_issue_hash"), "issues", ["issue_hash"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_issues_issue_hash"), table_name="issues")
    op.drop_index(op.f("ix_issues_repository_id"), table_name="issues")
    op.drop_table("issues")
    op.drop_index(op.f("ix_insight_types_code"), table_name="insight_types")
    op.drop_table("insight_types")
    op.drop_index(op.f("ix_repositories_df_scm_url"), table_name="repositories")
    op.drop_table("repositories")
