from dataclasses import dataclass
import os
import logging
import yaml
from dotenv import load_dotenv
from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Config:
    root_endpoint: str = "http://localhost:2525"
    request_timeout: float = 10.0
    debug: bool = False
    rich_logging: bool = True


def setup_logging(config: "Config") -> None:
    """Configure logging level based on ``config.debug``."""
    level = logging.DEBUG if config.debug else logging.INFO
    if config.rich_logging:
        install_rich_traceback()
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            handlers=[RichHandler(rich_tracebacks=True)],
        )
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.debug("Logging initialized at level %s", logging.getLevelName(level))
    # Suppress noisy connection pool output from the HTTP transport
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_config(path: str = None) -> Config:
    """Load configuration from YAML file and environment variables."""
    load_dotenv()
    logger.debug("Loading configuration from %s", path or "default config.yml")

    # If no path provided, use default relative to this config.py file
    if path is None:
        config_dir = os.path.dirname(os.path.abspath(__file__))
        path = os.path.join(config_dir, "config.yml")

    data = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.debug("Loaded YAML configuration from %s", path)

    defaults = Config()

    def _env_bool(name: str, key: str, default: bool) -> bool:
        val = os.getenv(name)
        if val is None:
            return bool(data.get(key, default))
        return val.lower() in {"1", "true", "yes", "on"}

    def _env_float(name: str, key: str, default: float) -> float:
        val = os.getenv(name)
        if val is None:
            val = data.get(key, default)
        try:
            return float(val)
        except (TypeError, ValueError):
            logger.debug("Ignoring invalid %s value %r", name, val)
            return default

    return Config(
        root_endpoint=os.getenv("MB_ROOT_ENDPOINT", data.get("root_endpoint", defaults.root_endpoint)),
        request_timeout=_env_float("MB_REQUEST_TIMEOUT", "request_timeout", defaults.request_timeout),
        debug=_env_bool("DEBUG", "debug", defaults.debug),
        rich_logging=_env_bool("RICH_LOGGING", "rich_logging", defaults.rich_logging),
    )
