"""Redmine time entry model."""

from datetime import date

from pydantic import BaseModel

from shared.clients.tracker.models.Issue import Issue
from shared.clients.tracker.models.Project import Project
from shared.clients.tracker.models.User import User


class TimeEntry(BaseModel):
    """
    Hours a user spent on a project or issue on one day.
    spent_on is sent by Redmine as "YYYY-MM-DD".
    """
    id: int
    project: Project | None = None
    issue: Issue | None = None
    user: User | None = None
    hours: float = 0.0
    comments: str = ""
    spent_on: date

    def __str__(self) -> str:
        issue_id = self.issue.id if self.issue else 0
        user_name = self.user.name if self.user and self.user.name else ""
        return f"{issue_id:<5d} {self.hours:5.2f} {self.spent_on.isoformat()} {user_name:<15s} {self.comments}"
