"""Central configuration helper for the tracker scroll bridge."""

import logging
import os
from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"


class HelperConfig:
    """Reads all settings from environment variables and hands out the shared logger."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _get_raw_val(self, key: str) -> str | None:
        # empty string counts as unset
        return os.getenv(key.upper()) or None

    def is_set(self, key: str) -> bool:
        """Return True if the environment variable is set to a non-empty value."""
        return self._get_raw_val(key) is not None

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Read a string environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (str | None): Fallback value if the variable is not set.

        Returns:
            str: The resolved value, stripped of surrounding whitespace.

        Raises:
            ValueError: If the variable is not set and no default is provided.
        """
        val = self._get_raw_val(key)
        if val is None and default is None:
            raise ValueError(f"Environment variable '{key.upper()}' is not set.")
        return val.strip() if val is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Read a numeric environment variable.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (float | int | None): Fallback value if the variable is not set.

        Returns:
            float | int: An int when the raw value has no decimal point, a float otherwise.

        Raises:
            ValueError: If the variable is not set and no default is provided,
                or if the value cannot be parsed as a number.
        """
        raw = self._get_raw_val(key)
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key.upper()}' is not set.")
            return default
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key.upper()}' is not a valid number: '{raw}'.")

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        """Read a boolean environment variable. "true", "1" and "yes" are truthy."""
        raw = self._get_raw_val(key)
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key.upper()}' is not set.")
            return default
        return raw.strip().lower() in ("true", "1", "yes")

    def get_date_val(self, key: str, default: date | None = None) -> date:
        """Read a date environment variable in Redmine's ``YYYY-MM-DD`` format.

        Args:
            key (str): Environment variable name (case-insensitive).
            default (date | None): Fallback value if the variable is not set.

        Returns:
            date: The parsed date.

        Raises:
            ValueError: If the variable is not set and no default is provided,
                or if the value is not a valid ``YYYY-MM-DD`` date.
        """
        raw = self._get_raw_val(key)
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key.upper()}' is not set.")
            return default
        try:
            return datetime.strptime(raw.strip(), DATE_FORMAT).date()
        except ValueError:
            raise ValueError(f"Environment variable '{key.upper()}' is not a valid date (YYYY-MM-DD): '{raw}'.")

    def get_logger(self) -> logging.Logger:
        """Return the application logger."""
        return self._logger
