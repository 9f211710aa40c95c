"""001_initial_tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates all initial tables for RenoFeed:
  - users
  - projects, project_members
  - tasks, materials, rooms
  - floor_map_plans, floor_map_shapes
  - comments, comment_mentions
  - activity_log
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

ENUM_NAMES = (
    "project_member_role_enum",
    "task_status_enum",
    "activity_action_enum",
    "activity_entity_type_enum",
)


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def _fk(table: str, column: str, target: str, ondelete: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column], [f"{target}.id"],
        name=f"fk_{table}_{column}_{target}",
        ondelete=ondelete,
    )


def upgrade() -> None:
    # ── users ─────────────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_name", "users", ["name"])

    # ── projects ──────────────────────────────────────────────────────────────
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=True),
        _created_at(),
        _fk("projects", "owner_id", "users", "SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_projects"),
    )
    op.create_index("ix_projects_owner_id", "projects", ["owner_id"])

    op.create_table(
        "project_members",
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column(
            "role",
            sa.Enum("owner", "editor", "viewer", name="project_member_role_enum"),
            nullable=False,
            server_default="viewer",
        ),
        _created_at("joined_at"),
        _fk("project_members", "project_id", "projects", "CASCADE"),
        _fk("project_members", "user_id", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("project_id", "user_id", name="pk_project_members"),
    )
    op.create_index("ix_project_members_user_id", "project_members", ["user_id"])

    # ── tasks / materials / rooms ─────────────────────────────────────────────
    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "to_do", "in_progress", "waiting", "completed", "cancelled",
                name="task_status_enum",
            ),
            nullable=False,
            server_default="to_do",
        ),
        sa.Column("assigned_to_id", sa.Uuid(), nullable=True),
        _created_at(),
        _fk("tasks", "project_id", "projects", "CASCADE"),
        _fk("tasks", "assigned_to_id", "users", "SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_tasks"),
    )
    op.create_index("ix_tasks_project_id", "tasks", ["project_id"])
    op.create_index("ix_tasks_assigned_to_id", "tasks", ["assigned_to_id"])

    op.create_table(
        "materials",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(500), nullable=False),
        sa.Column("assigned_to_user_id", sa.Uuid(), nullable=True),
        _created_at(),
        _fk("materials", "project_id", "projects", "CASCADE"),
        _fk("materials", "assigned_to_user_id", "users", "SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_materials"),
    )
    op.create_index("ix_materials_project_id", "materials", ["project_id"])
    op.create_index("ix_materials_assigned_to_user_id", "materials", ["assigned_to_user_id"])

    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        _created_at(),
        _fk("rooms", "project_id", "projects", "CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_rooms"),
    )
    op.create_index("ix_rooms_project_id", "rooms", ["project_id"])

    # ── floor plans ───────────────────────────────────────────────────────────
    op.create_table(
        "floor_map_plans",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False, server_default=""),
        _created_at(),
        _fk("floor_map_plans", "project_id", "projects", "CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_floor_map_plans"),
    )
    op.create_index("ix_floor_map_plans_project_id", "floor_map_plans", ["project_id"])

    op.create_table(
        "floor_map_shapes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("plan_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("shape_type", sa.String(50), nullable=False, server_default="object"),
        _fk("floor_map_shapes", "plan_id", "floor_map_plans", "CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_floor_map_shapes"),
    )
    op.create_index("ix_floor_map_shapes_plan_id", "floor_map_shapes", ["plan_id"])

    # ── comments ──────────────────────────────────────────────────────────────
    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("images", postgresql.JSONB(), nullable=True),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=False),
        _created_at(),
        sa.Column("task_id", sa.Uuid(), nullable=True),
        sa.Column("material_id", sa.Uuid(), nullable=True),
        sa.Column("entity_id", sa.Uuid(), nullable=True),
        sa.Column("entity_type", sa.String(50), nullable=True),
        sa.Column("drawing_object_id", sa.Uuid(), nullable=True),
        sa.Column("project_id", sa.Uuid(), nullable=True),
        _fk("comments", "created_by_user_id", "users", "CASCADE"),
        _fk("comments", "task_id", "tasks", "CASCADE"),
        _fk("comments", "material_id", "materials", "CASCADE"),
        _fk("comments", "project_id", "projects", "CASCADE"),
        sa.CheckConstraint(
            "(CASE WHEN task_id IS NOT NULL THEN 1 ELSE 0 END"
            " + CASE WHEN material_id IS NOT NULL THEN 1 ELSE 0 END"
            " + CASE WHEN entity_id IS NOT NULL THEN 1 ELSE 0 END"
            " + CASE WHEN drawing_object_id IS NOT NULL THEN 1 ELSE 0 END"
            " + CASE WHEN project_id IS NOT NULL THEN 1 ELSE 0 END) = 1",
            name="ck_comments_one_context",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_comments"),
    )
    op.create_index("ix_comments_task_id", "comments", ["task_id"])
    op.create_index("ix_comments_material_id", "comments", ["material_id"])
    op.create_index("ix_comments_entity", "comments", ["entity_type", "entity_id"])
    op.create_index("ix_comments_drawing_object_id", "comments", ["drawing_object_id"])
    op.create_index("ix_comments_project_id", "comments", ["project_id"])
    op.create_index("ix_comments_created_at", "comments", ["created_at"])

    op.create_table(
        "comment_mentions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("comment_id", sa.Uuid(), nullable=False),
        sa.Column("mentioned_user_id", sa.Uuid(), nullable=False),
        _created_at(),
        _fk("comment_mentions", "comment_id", "comments", "CASCADE"),
        _fk("comment_mentions", "mentioned_user_id", "users", "CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_comment_mentions"),
        sa.UniqueConstraint(
            "comment_id", "mentioned_user_id", name="uq_comment_mentions_comment_user"
        ),
    )
    op.create_index(
        "ix_comment_mentions_mentioned_user_id", "comment_mentions", ["mentioned_user_id"]
    )

    # ── activity_log ──────────────────────────────────────────────────────────
    op.create_table(
        "activity_log",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("actor_id", sa.Uuid(), nullable=True),
        sa.Column(
            "action",
            sa.Enum(
                "created", "status_changed", "assigned", "deleted",
                "member_added", "member_removed",
                name="activity_action_enum",
            ),
            nullable=False,
        ),
        sa.Column(
            "entity_type",
            sa.Enum(
                "task", "room", "material", "floor_plan", "team_member",
                name="activity_entity_type_enum",
            ),
            nullable=False,
        ),
        sa.Column("entity_id", sa.Uuid(), nullable=True),
        sa.Column("entity_name", sa.String(500), nullable=True),
        sa.Column("changes", postgresql.JSONB(), nullable=False, server_default="{}"),
        _created_at(),
        _fk("activity_log", "project_id", "projects", "CASCADE"),
        _fk("activity_log", "actor_id", "users", "SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_activity_log"),
    )
    op.create_index(
        "ix_activity_log_project_created", "activity_log", ["project_id", "created_at"]
    )
    op.create_index(
        "ix_activity_log_entity_type_id", "activity_log", ["entity_type", "entity_id"]
    )


def downgrade() -> None:
    for table in (
        "activity_log",
        "comment_mentions",
        "comments",
        "floor_map_shapes",
        "floor_map_plans",
        "rooms",
        "materials",
        "tasks",
        "project_members",
        "projects",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_name in ENUM_NAMES:
        postgresql.ENUM(name=enum_name).drop(bind, checkfirst=True)
