"""Typed listing pages, one model per entity kind.

Every listing endpoint returns the same envelope, only the key of the item list differs:

    {"projects": [...], "offset": 0, "limit": 25, "total_count": 110}
    {"issues": [...], ...}
    {"time_entries": [...], ...}

Each page model maps its kind's key onto the uniform ``items`` field, so the scroll
engine only ever deals with ``PageResponse.items`` and the pagination metadata.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from shared.clients.tracker.models.EntityKind import EntityKind
from shared.clients.tracker.models.Issue import Issue
from shared.clients.tracker.models.Pagination import Pagination
from shared.clients.tracker.models.Project import Project
from shared.clients.tracker.models.TimeEntry import TimeEntry

E = TypeVar("E", bound=BaseModel)


class PageResponse(Pagination, Generic[E]):
    """
    One listing page: the decoded items plus the page's offset/limit/total.
    """
    items: list[E]


class ProjectsPage(PageResponse[Project]):
    items: list[Project] = Field(alias=EntityKind.PROJECT.collection_key)


class IssuesPage(PageResponse[Issue]):
    items: list[Issue] = Field(alias=EntityKind.ISSUE.collection_key)


class TimeEntriesPage(PageResponse[TimeEntry]):
    items: list[TimeEntry] = Field(alias=EntityKind.TIME_ENTRY.collection_key)


PAGE_MODELS: dict[EntityKind, type[PageResponse]] = {
    EntityKind.PROJECT: ProjectsPage,
    EntityKind.ISSUE: IssuesPage,
    EntityKind.TIME_ENTRY: TimeEntriesPage,
}


def get_page_model(kind: EntityKind) -> type[PageResponse]:
    """
    Returns the page model decoding listings of the given entity kind.

    Raises:
        ValueError: If the kind has no page model.
    """
    try:
        return PAGE_MODELS[EntityKind(kind)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported entity kind: {kind!r}")
