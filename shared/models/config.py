from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Describes one environment setting a tracker client reads at startup.

    Attributes:
        env_key (str): Key without the client prefix, e.g. "BASE_URL" for TRACKER_REDMINE_BASE_URL.
        val_type (str): Expected value type: "string", "number", "bool" or "date".
        default (str | int | float | bool | None): Fallback when the variable is unset. None marks the setting as required.
        required (bool): Whether a missing value is an error. Optional settings without a default resolve to None.
    """

    env_key: str
    val_type: str
    default: str | int | float | bool | None = None
    required: bool = True
