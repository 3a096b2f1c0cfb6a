"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

Users, emails, projects, components, releases and the user_projects
membership table.
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_name", sa.String, nullable=False),
        sa.Column("type", sa.String, nullable=False, server_default="user"),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_user_name", "users", ["user_name"], unique=True)
    op.create_index("ix_users_deleted_at", "users", ["deleted_at"])

    # --- emails ---
    op.create_table(
        "emails",
        sa.Column("email_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("subscribed", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_emails_user_id", "emails", ["user_id"])
    op.create_index("ix_emails_email", "emails", ["email"], unique=True)

    # --- projects ---
    op.create_table(
        "projects",
        sa.Column("project_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("author", sa.String, nullable=False),
        sa.Column("project_name", sa.String, nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
    )
    op.create_index("ix_projects_author", "projects", ["author"])
    op.create_index(
        "ix_projects_project_name", "projects", ["project_name"], unique=True
    )

    # --- components ---
    op.create_table(
        "components",
        sa.Column("component_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "project_id",
            sa.Integer,
            sa.ForeignKey("projects.project_id"),
            nullable=False,
        ),
        sa.Column("component_name", sa.String, nullable=False),
        sa.Column("project_name", sa.String, nullable=False),
    )
    op.create_index("ix_components_project_id", "components", ["project_id"])
    op.create_index("ix_components_component_name", "components", ["component_name"])

    # --- releases ---
    op.create_table(
        "releases",
        sa.Column("release_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "component_id",
            sa.Integer,
            sa.ForeignKey("components.component_id"),
            nullable=False,
        ),
        sa.Column("created_at", sa.String, nullable=True),
        sa.Column("url", sa.String, nullable=True),
        sa.Column("version", sa.String, nullable=False),
    )
    op.create_index("ix_releases_component_id", "releases", ["component_id"])

    # --- user_projects (many-to-many) ---
    op.create_table(
        "user_projects",
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), primary_key=True),
        sa.Column(
            "project_id",
            sa.Integer,
            sa.ForeignKey("projects.project_id"),
            primary_key=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now()
        ),
    )


def downgrade() -> None:
    op.drop_table("user_projects")
    op.drop_table("releases")
    op.drop_table("components")
    op.drop_table("projects")
    op.drop_table("emails")
    op.drop_table("users")
