"""Initial schema: hosts, fact names and fact values.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "host",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_host")),
        sa.UniqueConstraint("name", name=op.f("uq_host_host_name")),
    )
    op.create_table(
        "fact_name",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("taxonomy", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_fact_name")),
        sa.UniqueConstraint("taxonomy", "name", name="uq_fact_name_taxonomy_name"),
    )
    op.create_table(
        "fact_value",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("host_id", sa.Uuid(), nullable=False),
        sa.Column("fact_name_id", sa.Uuid(), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["host_id"],
            ["host.id"],
            name=op.f("fk_fact_value_fact_value_host_id_host"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["fact_name_id"],
            ["fact_name.id"],
            name=op.f("fk_fact_value_fact_value_fact_name_id_fact_name"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_fact_value")),
        sa.UniqueConstraint("host_id", "fact_name_id", name="uq_fact_value_host_fact_name"),
    )
    op.create_index("ix_fact_value_fact_name_id", "fact_value", ["fact_name_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_fact_value_fact_name_id", table_name="fact_value")
    op.drop_table("fact_value")
    op.drop_table("fact_name")
    op.drop_table("host")
