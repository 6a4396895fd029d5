"""SQLAlchemy ORM models."""

from codefix.models.base import Base
from codefix.models.issue import InsightType, Issue, Repository

__all__ = ["Base", "InsightType", "Issue", "Repository"]
