"""Redmine issue model."""

from pydantic import BaseModel

from shared.clients.tracker.models.Project import Project


class Issue(BaseModel):
    """
    A Redmine issue. When referenced from a time entry only id and subject are set.
    """
    id: int
    subject: str | None = None
    description: str | None = None
    project: Project | None = None

    def __str__(self) -> str:
        project_name = self.project.name if self.project and self.project.name else ""
        return f"{self.id:<5d} {project_name} {self.subject or ''}"
