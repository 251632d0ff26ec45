"""initial schema

Revision ID: 3c1f9a7e2b04
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3c1f9a7e2b04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _media(prefix: str, nullable: bool = True) -> list[sa.Column]:
    return [
        sa.Column(f"{prefix}_id", sa.Text, nullable=nullable),
        sa.Column(f"{prefix}_url", sa.Text, nullable=nullable),
    ]


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp())]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()))
    return columns


def upgrade() -> None:
    op.create_table(
        "courses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("code", sa.Text, nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("level", sa.Text, nullable=False, server_default=""),
        sa.Column("department", sa.Text, nullable=False),
        sa.Column("instructor", sa.Text, nullable=False, server_default=""),
        *_media("thumbnail"),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_courses_department_level", "courses", ["department", "level"])

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("department", sa.Text, nullable=False),
        sa.Column("level", sa.Text, nullable=False),
        sa.Column("subject", sa.Text, nullable=False),
        sa.Column("year", sa.Text, nullable=False),
        *_media("pdf", nullable=False),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index("ix_questions_department_level", "questions", ["department", "level"])

    op.create_table(
        "books",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("author", sa.Text, nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        *_media("pdf", nullable=False),
        *_media("thumbnail"),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        *_media("thumbnail"),
        *_media("video"),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "scholarships",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("organization_name", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("location", sa.Text, nullable=False),
        sa.Column("website_link", sa.Text, nullable=False),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "scholarship_images",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "scholarship_id",
            sa.Integer,
            sa.ForeignKey("scholarships.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("storage_id", sa.Text, nullable=False),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_scholarship_images_scholarship_id", "scholarship_images", ["scholarship_id"])


def downgrade() -> None:
    op.drop_index("ix_scholarship_images_scholarship_id", table_name="scholarship_images")
    op.drop_table("scholarship_images")
    op.drop_table("scholarships")
    op.drop_table("notifications")
    op.drop_table("books")
    op.drop_index("ix_questions_department_level", table_name="questions")
    op.drop_table("questions")
    op.drop_index("ix_courses_department_level", table_name="courses")
    op.drop_table("courses")
