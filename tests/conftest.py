"""Shared pytest fixtures for the tracker scroll tests.

The Redmine server is simulated with ``httpx.MockTransport``. Like a real Redmine
instance it serves 110 entities of every kind, 25 per page, and derives the offset
of a page from the ``page`` query parameter.
"""

import json
import logging
from collections.abc import Callable

import httpx
import pytest
import pytest_asyncio

from shared.clients.tracker.redmine.TrackerClientRedmine import TrackerClientRedmine
from shared.helper.HelperConfig import HelperConfig
from shared.models.ScrollConfig import ScrollConfig

PAGINATION_LIMIT = 25
TOTAL_COUNT = 110
BASE_URL = "http://redmine.test"


def make_project(i: int) -> dict:
    return {
        "id": i,
        "name": f"Project{i}",
        "description": f"Project {i} Description",
        "is_public": False,
        "identifier": f"Xlab-Project-{i}",
        "created_on": "Sat Sep 29 12:03:04 +0200 2007",
        "updated_on": "Sun Mar 15 12:35:11 +0100 2009",
    }


def make_issue(i: int) -> dict:
    return {
        "id": i,
        "subject": f"Subject {i}",
        "description": f"Issue {i} Description",
        "project": {"id": 1, "name": "Project1"},
    }


def make_time_entry(i: int) -> dict:
    return {
        "id": i,
        "comments": f"Time Entry {i} Comment",
        "project": {"id": 1, "name": "Project1"},
        "issue": {"id": i, "subject": f"Subject {i}"},
        "user": {"id": 1, "name": "User1"},
        "hours": 7.35,
        "spent_on": "2006-01-02",
    }


ENDPOINTS: dict[str, tuple[str, Callable[[int], dict]]] = {
    "/projects.json": ("projects", make_project),
    "/issues.json": ("issues", make_issue),
    "/time_entries.json": ("time_entries", make_time_entry),
}


def page_payload(key: str, make_item: Callable[[int], dict], offset: int, limit: int = PAGINATION_LIMIT, total: int = TOTAL_COUNT) -> dict:
    """Build a listing page holding the items offset+1 .. min(offset+limit, total)."""
    last = min(offset + limit, total)
    return {
        key: [make_item(i) for i in range(offset + 1, last + 1)],
        "offset": offset,
        "limit": limit,
        "total_count": total,
    }


class FakeRedmine:
    """Request handler for httpx.MockTransport mimicking Redmine listing endpoints."""

    def __init__(self, total: int = TOTAL_COUNT, limit: int = PAGINATION_LIMIT) -> None:
        self.total = total
        self.limit = limit
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path not in ENDPOINTS:
            return httpx.Response(404, text="<html><body>Not Found</body></html>")
        key, make_item = ENDPOINTS[request.url.path]
        page = int(request.url.params.get("page", "1"))
        offset = self.limit * (page - 1)
        payload = page_payload(key, make_item, offset, self.limit, self.total)
        return httpx.Response(200, content=json.dumps(payload).encode())

    @property
    def offsets(self) -> list[int]:
        return [self.limit * (int(r.url.params.get("page", "1")) - 1) for r in self.requests]


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests.tracker_scroll")


@pytest.fixture
def helper_config(logger) -> HelperConfig:
    return HelperConfig(logger=logger)


@pytest.fixture
def fake_redmine() -> FakeRedmine:
    return FakeRedmine()


def make_config(**overrides) -> ScrollConfig:
    values = {
        "base_url": BASE_URL,
        "api_token": "ababab",
        "log_enabled": True,
        "retry_backoff": 0,
        "retry_backoff_max": 0,
    }
    values.update(overrides)
    return ScrollConfig(**values)


@pytest_asyncio.fixture
async def client_factory(helper_config):
    """Create booted Redmine clients served by the given handler. Closed after the test."""
    clients: list[TrackerClientRedmine] = []

    async def factory(handler: Callable | None = None, **overrides) -> TrackerClientRedmine:
        client = TrackerClientRedmine(helper_config=helper_config, config=make_config(**overrides))
        transport = httpx.MockTransport(handler) if handler is not None else None
        await client.boot(transport=transport)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.close()
