"""Declarative base shared by the repository, insight type and issue tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
