"""skills, concours, solutions and contestants

Revision ID: 8a4d2c6e1f53
Revises: 3c1f9a7e2b04
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "8a4d2c6e1f53"
down_revision: Union[str, Sequence[str], None] = "3c1f9a7e2b04"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _media(prefix: str, nullable: bool = True) -> list[sa.Column]:
    return [
        sa.Column(f"{prefix}_id", sa.Text, nullable=nullable),
        sa.Column(f"{prefix}_url", sa.Text, nullable=nullable),
    ]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
    ]


def upgrade() -> None:
    op.create_table(
        "skills",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("category", sa.Text, nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        *_media("thumbnail"),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_skills_category_name", "skills", ["category", "name"])

    op.create_table(
        "concours",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("year", sa.Text, nullable=False),
        sa.Column("department", sa.Text, nullable=False),
        *_media("pdf", nullable=False),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_concours_department_year", "concours", ["department", "year"])

    op.create_table(
        "solutions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column(
            "question_id",
            sa.Integer,
            sa.ForeignKey("questions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("youtube_url", sa.Text, nullable=True),
        *_media("pdf"),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_solutions_question_id", "solutions", ["question_id"])

    op.create_table(
        "contestants",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("contest", sa.Text, nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("bio", sa.Text, nullable=False, server_default=""),
        *_media("image"),
        sa.Column("created_by", sa.Integer, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_contestants_contest", "contestants", ["contest"])


def downgrade() -> None:
    op.drop_index("ix_contestants_contest", table_name="contestants")
    op.drop_table("contestants")
    op.drop_index("ix_solutions_question_id", table_name="solutions")
    op.drop_table("solutions")
    op.drop_index("ix_concours_department_year", table_name="concours")
    op.drop_table("concours")
    op.drop_index("ix_skills_category_name", table_name="skills")
    op.drop_table("skills")
