"""ORM models for analysed repositories, insight types and the issues found in them."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from codefix.models.base import Base


class Repository(Base):
    """Repository known to the code server, addressed by its SCM reference URL."""

    __tablename__ = "repositories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Full reference as reported by the analysers; may carry ?branch=...
    df_scm_url = Column(String(2048), nullable=False, unique=True, index=True)

    issues = relationship("Issue", back_populates="repository")


class InsightType(Base):
    """Category of a detected issue (e.g. code SQLI, name SQL Injection)."""

    __tablename__ = "insight_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)


class Issue(Base):
    """
    Persisted code-quality issue, unique per (repository, insight type, issue hash).

    The cs_ticket_* columns are filled in when the issue is exported as a
    code server ticket; they stay null until then.
    """

    __tablename__ = "issues"
    __table_args__ = (
        UniqueConstraint(
            "repository_id",
            "insight_type_id",
            "issue_hash",
            name="uq_issues_repository_insight_type_hash",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    repository_id = Column(Integer, ForeignKey("repositories.id"), nullable=False, index=True)
    insight_type_id = Column(Integer, ForeignKey("insight_types.id"), nullable=False)
    issue_hash = Column(String(255), nullable=False, index=True)
    cs_ticket_export_date = Column(DateTime(timezone=True), nullable=True)
    cs_ticket_id = Column(String(255), nullable=True)
    cs_ticket_url = Column(String(2048), nullable=True)

    repository = relationship("Repository", back_populates="issues")
    insight_type = relationship("InsightType")
