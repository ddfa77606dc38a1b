from enum import Enum


class EntityKind(str, Enum):
    """
    The entity kinds a tracker can be scrolled for.
    The value is the top-level JSON key under which a listing page carries its items.
    """
    PROJECT = "projects"
    ISSUE = "issues"
    TIME_ENTRY = "time_entries"

    @property
    def collection_key(self) -> str:
        return self.value
