from shared.clients.tracker.TrackerClientInterface import TrackerClientInterface
from shared.clients.tracker.models.EntityKind import EntityKind
from shared.helper.HelperConfig import DATE_FORMAT, HelperConfig
from shared.models.ScrollConfig import ScrollConfig
from shared.models.config import EnvConfig


class TrackerClientRedmine(TrackerClientInterface):
    USER_AGENT = "redmine python client v0.1"

    def __init__(self, helper_config: HelperConfig, config: ScrollConfig):
        super().__init__(helper_config=helper_config, config=config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    @classmethod
    def _get_engine_name(cls) -> str:
        return "Redmine"

    ################ CONFIG ##################
    @classmethod
    def _get_required_config(cls) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="API_KEY", val_type="string", default=""),
            EnvConfig(env_key="LOG_ENABLED", val_type="bool", default=False),
            EnvConfig(env_key="TIMEOUT", val_type="number", default=30.0),
            EnvConfig(env_key="RETRY_ATTEMPTS", val_type="number", default=5),
            EnvConfig(env_key="RETRY_BACKOFF", val_type="number", default=0.5),
            EnvConfig(env_key="RETRY_BACKOFF_MAX", val_type="number", default=10.0),
            EnvConfig(env_key="TIME_ENTRIES_USER_ID", val_type="string", required=False),
            EnvConfig(env_key="TIME_ENTRIES_FROM", val_type="date", required=False),
            EnvConfig(env_key="TIME_ENTRIES_TO", val_type="date", required=False),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._config.api_token:
            return {"X-Redmine-API-Key": self._config.api_token}
        else:
            return {}

    def _get_default_headers(self) -> dict:
        return {"User-Agent": self.USER_AGENT}

    ################ ENDPOINTS ##################
    def _get_endpoint_healthcheck(self) -> str:
        return "/projects.json"

    def _get_endpoint_projects(self) -> str:
        return "/projects.json"

    def _get_endpoint_issues(self) -> str:
        return "/issues.json"

    def _get_endpoint_time_entries(self) -> str:
        return "/time_entries.json"

    def _get_listing_params(self, kind: EntityKind, page: int | None) -> dict[str, str]:
        params: dict[str, str] = {}

        # time entries of one user within a range of dates
        time_entries_filter = self._config.time_entries_filter
        if kind == EntityKind.TIME_ENTRY and time_entries_filter is not None:
            params["user_id"] = time_entries_filter.user_id
            params["from"] = time_entries_filter.start_date.strftime(DATE_FORMAT)
            params["to"] = time_entries_filter.end_date.strftime(DATE_FORMAT)

        # the first page is requested without page parameter
        if page is not None and page > 1:
            params["page"] = str(page)
        return params
