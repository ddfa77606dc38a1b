from pydantic import BaseModel


class User(BaseModel):
    """A Redmine user reference."""
    id: int
    name: str | None = None
