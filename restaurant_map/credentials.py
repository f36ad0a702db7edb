from pathlib import Path
from typing import Union

from dotenv import dotenv_values
from loguru import logger

from restaurant_map.config import API_ENV_FILE, API_KEY_VAR

REMEDIATION = f"""Please:
  1. Copy api.example.env to api.env
  2. Add your Google Places API key to api.env as {API_KEY_VAR}=...
  3. Get a key at: https://console.cloud.google.com/
"""


class CredentialsError(RuntimeError):
    """The API key file is missing or does not define the key."""


def load_api_key(path: Union[str, Path] = API_ENV_FILE, var_name: str = API_KEY_VAR) -> str:
    """
    Read the Places API key from a key=value file.

    Args:
        path: Location of the env-style credentials file.
        var_name: Variable holding the key.

    Returns:
        str: The API key, stripped of surrounding whitespace.

    Raises:
        CredentialsError: If the file is missing or the key is absent or blank.
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise CredentialsError(f"Credentials file not found: {env_path}")

    values = dotenv_values(env_path)
    api_key = (values.get(var_name) or "").strip()
    if not api_key:
        raise CredentialsError(f"{var_name} not found in {env_path}")

    logger.debug(f"🔑 Loaded {var_name} from {env_path}")
    return api_key
