"""Redmine project model."""

from pydantic import BaseModel


class Project(BaseModel):
    """
    A Redmine project. Nested references (e.g. the project of an issue) only carry id and name.
    """
    id: int
    name: str | None = None
    identifier: str | None = None
    description: str | None = None
    is_public: bool = False

    def __str__(self) -> str:
        return f"{self.id:<5d} {self.identifier or ''} {self.name or ''}"
