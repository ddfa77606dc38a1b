from abc import ABC, abstractmethod

import httpx
from httpx._types import QueryParamTypes
from typing import Any
from shared.models.config import EnvConfig
from shared.models.ScrollConfig import ScrollConfig

from shared.helper.HelperConfig import HelperConfig


class ClientInterface(ABC):
    def __init__(self, helper_config: HelperConfig, config: ScrollConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self._config = config
        self.timeout = config.timeout

        # created in boot()
        self._client: httpx.AsyncClient | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    @classmethod
    def get_client_type(cls) -> str:
        """
        Returns the type of the client in lowercase. E.g. "tracker"
        """
        return cls._get_client_type().lower()

    @classmethod
    @abstractmethod
    def _get_client_type(cls) -> str:
        """
        Returns the type of the client. E.g. "tracker"
        """
        pass

    @classmethod
    def get_engine_name(cls) -> str:
        """
        Returns the name of the engine used by the client in lowercase. E.g. "redmine"
        """
        return cls._get_engine_name().lower()

    @classmethod
    @abstractmethod
    def _get_engine_name(cls) -> str:
        """
        Returns the name of the engine used by the client. E.g. "Redmine"
        """
        pass

    def get_config(self) -> ScrollConfig:
        """
        Returns the read-only configuration the client was created with.
        """
        return self._config

    ################ CONFIG ##################
    @classmethod
    @abstractmethod
    def _get_required_config(cls) -> list[EnvConfig]:
        """
        Returns all environment settings of the client.

        Returns:
            list[EnvConfig]: A list containing the details of each configuration key.
        """
        pass

    @classmethod
    def _get_config_key_name(cls, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name for the client. E.g. "TRACKER_REDMINE_API_KEY"
        """
        key_prefix = f"{cls.get_client_type().upper()}_{cls.get_engine_name().upper()}"
        return f"{key_prefix}_{raw_key.upper()}"

    @classmethod
    def get_config_val(cls, helper_config: HelperConfig, raw_key: str, default: Any = None, val_type: str = "string", required: bool = True) -> Any:
        """
        Retrieves the value of a configuration key for the client.

        Args:
            helper_config (HelperConfig): The configuration reader.
            raw_key (str): The raw configuration key name, without client prefix
            default (Any): The default value to return if the configuration key is not set
            val_type (str): The type of the configuration value ("string", "number", "bool", "date")
            required (bool): If False, an unset key without default resolves to None instead of raising

        Raises:
            ValueError: If the value is required but missing, cannot be parsed or the type is unsupported.
        """
        key = cls._get_config_key_name(raw_key)
        if not required and default is None and not helper_config.is_set(key):
            return None
        if val_type == "string":
            return helper_config.get_string_val(key, default=default)
        elif val_type == "number":
            return helper_config.get_number_val(key, default=default)
        elif val_type == "bool":
            return helper_config.get_bool_val(key, default=default)
        elif val_type == "date":
            return helper_config.get_date_val(key, default=default)
        else:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{raw_key}' in {cls.get_client_type().upper()} client '{cls.get_engine_name()}'.")

    @classmethod
    def read_env_config(cls, helper_config: HelperConfig) -> dict[str, Any]:
        """
        Reads every setting listed by _get_required_config() from the environment.

        Returns:
            dict[str, Any]: The resolved values keyed by their raw key, e.g. {"BASE_URL": "..."}

        Raises:
            ValueError: If a required value is missing or invalid.
        """
        return {
            config.env_key: cls.get_config_val(
                helper_config,
                raw_key=config.env_key,
                default=config.default,
                val_type=config.val_type,
                required=config.required,
            )
            for config in cls._get_required_config()
        }

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the backend server, if an API key is set.

        Returns:
            dict: A dictionary containing the auth data
        """
        pass

    def _get_default_headers(self) -> dict:
        """
        Returns headers sent with every request besides the auth header.
        """
        return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the backend server (e.g. "http://localhost:3000")
        """
        return self._config.base_url

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        """
        Returns the endpoint path for healthcheck requests (e.g. "/projects.json").

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_healthcheck(self) -> httpx.Response:
        """Check if the backend is reachable by sending a test request.

        Returns:
            httpx.Response: The response from the healthcheck request.

        Raises:
            Exception: If the backend answers with a non-2xx status.
        """
        return await self.do_request(method="GET", endpoint=self._get_endpoint_healthcheck(), raise_on_error=True)

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialise the HTTP client.

        Args:
            transport: Optional transport replacing the network, e.g. an httpx.MockTransport.
        """
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise Exception("HTTP client not initialised. Call boot() before making requests.")
        return self._client

    def _get_request_headers(self, additional_headers: dict | None = None) -> dict:
        headers: dict = {}
        headers.update(self._get_default_headers())
        headers.update(self._get_auth_header())
        if additional_headers:
            headers.update(additional_headers)
        return headers

    async def do_request(
        self,
        method: str = "GET",
        params: QueryParamTypes | None = None,
        endpoint: str = "",
        additional_headers: dict | None = None,
        raise_on_error: bool = False,
    ) -> httpx.Response:
        """Send a plain (non-streaming) HTTP request to the backend.

        Args:
            method: HTTP method.
            params: URL query parameters.
            endpoint: Path to append to the base URL (leading slash optional).
            additional_headers: Extra headers that override the defaults.
            raise_on_error: Raise on a non-2xx status.

        Returns:
            The raw httpx.Response.

        Raises:
            Exception: If the client is not initialised, or the response has a non-2xx status and raise_on_error is set.
        """
        client = self._get_http_client()
        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""
        url = f"{self._get_base_url().rstrip('/')}{endpoint}"

        response = await client.request(
            method,
            url,
            headers=self._get_request_headers(additional_headers),
            params=params,
            timeout=self.timeout,
        )

        if raise_on_error and not response.is_success:
            self.logging.error(
                "Request to %s failed with status %d: %s",
                url,
                response.status_code,
                response.text,
            )
            raise Exception(f"Request to {url} failed with status {response.status_code}")

        return response
