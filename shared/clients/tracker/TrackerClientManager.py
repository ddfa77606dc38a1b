from shared.helper.HelperConfig import HelperConfig
from shared.clients.tracker.TrackerClientInterface import TrackerClientInterface

class TrackerClientManager:
    """
    Manager class to create the tracker client selected by configuration.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """
        Reads the tracker engine name from ENV configuration (TRACKER_ENGINE, default "redmine").

        Returns:
            str: The engine name with the first letter uppercased, e.g. "Redmine".
        """
        engine = self.helper_config.get_string_val("TRACKER_ENGINE", default="redmine")
        return engine.strip().lower().capitalize()

    def _get_client_class(self, engine: str) -> type[TrackerClientInterface]:
        """
        Imports the client class shared.clients.tracker.{engine}.TrackerClient{Engine}.

        Raises:
            ValueError: If there is no client for the engine.
        """
        className = f"TrackerClient{engine}"
        try:
            module = __import__(
                f"shared.clients.tracker.{engine.lower()}.{className}",
                fromlist=[className],
            )
            return getattr(module, className)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported tracker engine specified: '{engine}'. Error: {e}")

    def _initialize_client(self) -> TrackerClientInterface:
        """
        Instantiates the tracker client of the configured engine with its configuration read from ENV.

        Returns:
            TrackerClientInterface: The tracker client instance.

        Raises:
            ValueError: If the engine is unsupported or its configuration is invalid.
        """
        engine = self._get_engine_from_env()
        client_class = self._get_client_class(engine)
        config = client_class.load_config(self.helper_config)
        client = client_class(helper_config=self.helper_config, config=config)
        self.logging.debug("Instantiated tracker client for engine: %s (%s)", engine, config.base_url)
        return client

    def get_client(self) -> TrackerClientInterface:
        """
        Returns the instantiated tracker client.
        """
        return self.client
