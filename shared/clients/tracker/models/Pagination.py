"""Offset/limit pagination metadata as reported with every listing page."""

from pydantic import BaseModel, ConfigDict, Field


def next_page(offset: int, limit: int, total: int) -> int | None:
    """
    Compute the 1-based index of the page following the one described by offset/limit/total.

    Redmine paginates by offset and limit but accepts ``?page=`` in the URL. For 53 issues
    and limit 25 that is three requests:

        offset  limit  total
        0       25     53     /issues.json (page 1)
        25      25     53     /issues.json?page=2
        50      25     53     /issues.json?page=3

    Args:
        offset (int): Zero-based index of the first item of the current page.
        limit (int): Page size reported for the current page.
        total (int): Total number of items in the collection.

    Returns:
        int | None: The next page index, or None if the current page is the last one.
    """
    if total - offset < limit:
        return None
    if limit <= 0:
        return None
    return (offset + limit) // limit + 1


class Pagination(BaseModel):
    """
    Pagination metadata of a single listing page.
    """
    model_config = ConfigDict(populate_by_name=True)

    offset: int = Field(ge=0)
    limit: int = Field(ge=0)
    total: int = Field(alias="total_count", ge=0)

    def next_page(self) -> int | None:
        return next_page(self.offset, self.limit, self.total)
