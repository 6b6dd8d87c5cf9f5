import os
from typing import Optional

from dotenv import load_dotenv

from processing.errors import ConfigurationError

# config/.env, if present; real environment variables take precedence
dotenv_path = os.path.join(os.path.dirname(__file__), '.env')
load_dotenv(dotenv_path=dotenv_path)

CONNECTION_STRING_ENV = "BLOCKCHAIN_INDEX_DB_CONNECTION_STRING"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "text").strip().lower()


def resolve_connection_string(cli_value: Optional[str] = None) -> str:
    """
    CLI argument first, then BLOCKCHAIN_INDEX_DB_CONNECTION_STRING.

    Raises:
        ConfigurationError: if neither is set
    """
    if cli_value:
        return cli_value
    env_value = os.getenv(CONNECTION_STRING_ENV, "").strip()
    if env_value:
        return env_value
    raise ConfigurationError(
        f"No connection string. Pass it as the first argument or set {CONNECTION_STRING_ENV}."
    )


def use_ssl() -> bool:
    """SSL is on unless DEBUG is set to any non-empty value."""
    return not os.getenv("DEBUG")
