from abc import abstractmethod

import httpx
from pydantic import ValidationError

from shared.clients.ClientInterface import ClientInterface
from shared.clients.tracker.TrackerErrors import ApiEndpointUrlFatalError, HttpError, IoReadError, JsonDecodeError
from shared.clients.tracker.models.EntityKind import EntityKind
from shared.clients.tracker.models.PageResponse import PageResponse, get_page_model
from shared.helper.HelperConfig import HelperConfig
from shared.models.ScrollConfig import ScrollConfig, TimeEntriesFilter


class TrackerClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig, config: ScrollConfig):
        super().__init__(helper_config=helper_config, config=config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    @classmethod
    def _get_client_type(cls) -> str:
        return "tracker"

    ################ CONFIG ##################
    @classmethod
    def load_config(cls, helper_config: HelperConfig) -> ScrollConfig:
        """
        Builds the scroll configuration of this engine from the environment.

        The time entry filter is only built when user id, start and end date are all set.
        A retry attempt count of 0 means retrying forever.

        Returns:
            ScrollConfig: The immutable configuration for the client.

        Raises:
            ValueError: If a required setting is missing or a value is invalid.
        """
        env = cls.read_env_config(helper_config)

        time_entries_filter = None
        filter_values = (env.get("TIME_ENTRIES_USER_ID"), env.get("TIME_ENTRIES_FROM"), env.get("TIME_ENTRIES_TO"))
        if all(v is not None for v in filter_values):
            user_id, start_date, end_date = filter_values
            time_entries_filter = TimeEntriesFilter(start_date=start_date, end_date=end_date, user_id=str(user_id))
        elif any(v is not None for v in filter_values):
            helper_config.get_logger().warning(
                "Incomplete time entries filter for %s, it needs user id, from and to. Ignoring it.", cls.get_engine_name()
            )

        retry_attempts = env["RETRY_ATTEMPTS"]
        if not isinstance(retry_attempts, int) or retry_attempts < 0:
            raise ValueError(
                f"Environment variable '{cls._get_config_key_name('RETRY_ATTEMPTS')}' must be a non-negative integer: '{retry_attempts}'."
            )
        return ScrollConfig(
            base_url=env["BASE_URL"],
            api_token=env["API_KEY"],
            log_enabled=env["LOG_ENABLED"],
            time_entries_filter=time_entries_filter,
            timeout=env["TIMEOUT"],
            retry_attempts=retry_attempts if retry_attempts > 0 else None,
            retry_backoff=env["RETRY_BACKOFF"],
            retry_backoff_max=env["RETRY_BACKOFF_MAX"],
        )

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_projects(self) -> str:
        """
        Returns the endpoint path for project listing requests (e.g. "/projects.json").
        """
        pass

    @abstractmethod
    def _get_endpoint_issues(self) -> str:
        """
        Returns the endpoint path for issue listing requests (e.g. "/issues.json").
        """
        pass

    @abstractmethod
    def _get_endpoint_time_entries(self) -> str:
        """
        Returns the endpoint path for time entry listing requests (e.g. "/time_entries.json").
        """
        pass

    def _get_endpoint_listing(self, kind: EntityKind) -> str:
        """
        Returns the listing endpoint path of the given entity kind.

        Raises:
            ValueError: If the kind is not supported.
        """
        endpoints = {
            EntityKind.PROJECT: self._get_endpoint_projects,
            EntityKind.ISSUE: self._get_endpoint_issues,
            EntityKind.TIME_ENTRY: self._get_endpoint_time_entries,
        }
        try:
            return endpoints[EntityKind(kind)]()
        except (KeyError, ValueError):
            raise ValueError(f"Unsupported entity kind: {kind!r}")

    @abstractmethod
    def _get_listing_params(self, kind: EntityKind, page: int | None) -> dict[str, str]:
        """
        Returns the query parameters of a listing request: pagination and filters.

        Args:
            kind (EntityKind): The entity kind that is listed.
            page (int | None): The 1-based page index. None or 1 request the first page.

        Returns:
            dict[str, str]: The query parameters, empty if none are needed.
        """
        pass

    def build_endpoint_url(self, kind: EntityKind, page: int | None = None) -> str:
        """
        Builds the full URL of one listing page: the base URL path joined with the kind's
        endpoint path, plus pagination and filter query parameters.

        Args:
            kind (EntityKind): The entity kind that is listed.
            page (int | None): The 1-based page index.

        Returns:
            str: The endpoint URL.

        Raises:
            ApiEndpointUrlFatalError: If the base URL cannot be parsed or lacks scheme or host.
        """
        base_url = self._get_base_url()
        try:
            base = httpx.URL(base_url)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise ApiEndpointUrlFatalError(f"Cannot build API endpoint url from base url {base_url!r}: {e}") from e
        if not base.scheme or not base.host:
            raise ApiEndpointUrlFatalError(f"Cannot build API endpoint url from base url {base_url!r}: scheme and host are required")

        try:
            url = base.copy_with(path=base.path.rstrip("/") + self._get_endpoint_listing(kind))
        except httpx.InvalidURL as e:
            raise ApiEndpointUrlFatalError(f"Cannot join base url {base_url!r} with endpoint of {kind.value}: {e}") from e

        params = self._get_listing_params(kind, page)
        if params:
            url = url.copy_merge_params(params)
        return str(url)

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_fetch_page(self, kind: EntityKind, page: int | None = None, page_model: type[PageResponse] | None = None) -> PageResponse:
        """
        Fetches and decodes one listing page.

        Non-2xx responses are not rejected here: their body goes to the decoder like any other
        and, not matching the page schema, ends up as a JsonDecodeError carrying the status code.

        Args:
            kind (EntityKind): The entity kind that is listed.
            page (int | None): The 1-based page index. None requests the first page without page parameter.
            page_model (type[PageResponse] | None): The page model to decode with. Looked up from the kind if not given.

        Returns:
            PageResponse: The decoded page.

        Raises:
            ApiEndpointUrlFatalError: If the endpoint URL cannot be built.
            HttpError: If the request fails on the transport level.
            IoReadError: If reading the response body fails.
            JsonDecodeError: If the body does not match the page schema.
        """
        client = self._get_http_client()
        page_model = page_model or get_page_model(kind)
        url = self.build_endpoint_url(kind, page)

        try:
            request = client.build_request("GET", url, headers=self._get_request_headers(), timeout=self.timeout)
        except httpx.InvalidURL as e:
            raise ApiEndpointUrlFatalError(f"Cannot create a request for {url!r}: {e}") from e

        if self._config.log_enabled:
            self.logging.info("> %s %s", request.method, request.url)
        try:
            response = await client.send(request, stream=True)
        except httpx.TransportError as e:
            raise HttpError(f"{request.method} {request.url} failed: {e!r}") from e
        if self._config.log_enabled:
            self.logging.info("< %d %s", response.status_code, response.reason_phrase)

        if not response.is_success:
            self.logging.warning("%s %s answered with status %d", request.method, request.url, response.status_code)

        return await self.decode_page(response, page_model)

    async def decode_page(self, response: httpx.Response, page_model: type[PageResponse]) -> PageResponse:
        """
        Reads the whole response body and decodes it into a typed page.
        The response is closed on every path.

        Args:
            response (httpx.Response): A response whose body has not been read yet.
            page_model (type[PageResponse]): The page model of the listed entity kind.

        Returns:
            PageResponse: The decoded page.

        Raises:
            IoReadError: If the body stream fails before it is complete or cannot be decompressed.
            JsonDecodeError: If the body is not valid JSON or does not match the page schema.
        """
        try:
            try:
                body = await response.aread()
            except (httpx.StreamError, httpx.RequestError) as e:
                raise IoReadError(f"Reading the {page_model.__name__} response body failed: {e!r}") from e

            try:
                return page_model.model_validate_json(body)
            except ValidationError as e:
                raise JsonDecodeError(
                    f"Cannot decode {page_model.__name__} from response with status {response.status_code}: {e}",
                    status_code=response.status_code,
                ) from e
        finally:
            await response.aclose()
