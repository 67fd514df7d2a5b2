"""Initial schema: users, json_documents and generations tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    # Create json_documents table
    op.create_table(
        "json_documents",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("owner_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_json_documents_owner_id"), "json_documents", ["owner_id"])
    op.create_index("ix_json_documents_owner_id_created_at", "json_documents", ["owner_id", "created_at"])

    # Create generations table
    op.create_table(
        "generations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("owner_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("result", sa.Text(), nullable=True),
        sa.Column("error", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'completed', 'error')",
            name="ck_generations_status",
        ),
        sa.CheckConstraint(
            "(status = 'pending' AND result IS NULL AND error IS NULL)"
            " OR (status = 'completed' AND result IS NOT NULL AND error IS NULL)"
            " OR (status = 'error' AND error IS NOT NULL AND result IS NULL)",
            name="ck_generations_outcome",
        ),
    )
    op.create_index(op.f("ix_generations_owner_id"), "generations", ["owner_id"])
    op.create_index(op.f("ix_generations_status"), "generations", ["status"])
    op.create_index("ix_generations_owner_id_created_at", "generations", ["owner_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_generations_owner_id_created_at", table_name="generations")
    op.drop_index(op.f("ix_generations_status"), table_name="generations")
    op.drop_index(op.f("ix_generations_owner_id"), table_name="generations")
    op.drop_table("generations")

    op.drop_index("ix_json_documents_owner_id_created_at", table_name="json_documents")
    op.drop_index(op.f("ix_json_documents_owner_id"), table_name="json_documents")
    op.drop_table("json_documents")

    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
