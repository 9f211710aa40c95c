"""
ORM model package. Import all models here so Alembic autogenerate
can discover every table through the shared Base metadata.
"""
from app.models.user import User  # noqa: F401
from app.models.project import Project, ProjectMember  # noqa: F401
from app.models.task import Task  # noqa: F401
from app.models.material import Material  # noqa: F401
from app.models.room import Room  # noqa: F401
from app.models.floor_map import FloorMapPlan, FloorMapShape  # noqa: F401
from app.models.comment import Comment, CommentMention  # noqa: F401
from app.models.activity_log import ActivityLog  # noqa: F401
