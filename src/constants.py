"""Constants used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NOT_FOUND = 3
    RESOLUTION_ERROR = 4


class HashAlgorithms(Enum):
    """Digest algorithms accepted for tree hashing.

    Args:
        Enum (string): hashlib algorithm names.
    """

    SHA256 = "sha256"
    SHA512 = "sha512"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    SUPPORTED_ALGORITHMS = [
        HashAlgorithms.SHA256.value,
        HashAlgorithms.SHA512.value,
    ]
    DEFAULT_ALGORITHM = HashAlgorithms.SHA256.value
    DEFAULT_MAX_DEPTH = 10
    DEFAULT_MAX_TREES = 1000
    BRANCHING_FACTOR = 3  # top-N matching versions explored per dependency edge
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    NPM_ACCEPT_HEADER = "application/json"

    ENV_LOG_LEVEL = "HASHLOCK_LOG_LEVEL"
    ENV_REGISTRY = "HASHLOCK_REGISTRY"
    ENV_MAX_DEPTH = "HASHLOCK_MAX_DEPTH"
    ENV_MAX_TREES = "HASHLOCK_MAX_TREES"
    ENV_ALGORITHM = "HASHLOCK_ALGORITHM"
    CONFIG_FILE_NAMES = ["hashlock.yml", "hashlock.yaml"]


def _default_config_paths():
    """Candidate config file locations, highest priority first."""
    paths = [os.path.join(os.getcwd(), name) for name in Constants.CONFIG_FILE_NAMES]
    xdg = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    paths.extend(os.path.join(xdg, "hashlock", name) for name in Constants.CONFIG_FILE_NAMES)
    return paths


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the YAML config from an explicit path or the default locations.

    Returns an empty dict when no file is found. A file that exists but cannot
    be parsed raises ``yaml.YAMLError`` or ``OSError`` to the caller.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = [path] if path else _default_config_paths()
    for candidate in candidates:
        if not candidate or not os.path.isfile(candidate):
            continue
        with open(candidate, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        logger.debug("Loaded configuration from %s", candidate)
        return data if isinstance(data, dict) else {}
    if path:
        raise OSError(f"Config file not found: {path}")
    return {}


def _coerce_int(key: str, value: Any) -> Optional[int]:
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer value for %s: %r", key, value)
        return None
    if number < 0:
        logger.warning("Ignoring negative value for %s: %r", key, value)
        return None
    return number


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply a config mapping (YAML keys) onto Constants."""
    registry = cfg.get("registry")
    if isinstance(registry, str) and registry.strip():
        Constants.REGISTRY_URL_NPM = registry.strip()

    for key, attr in (
        ("max_depth", "DEFAULT_MAX_DEPTH"),
        ("max_trees", "DEFAULT_MAX_TREES"),
        ("request_timeout", "REQUEST_TIMEOUT"),
    ):
        if cfg.get(key) is not None:
            number = _coerce_int(key, cfg[key])
            if number is not None:
                setattr(Constants, attr, number)

    algorithm = cfg.get("algorithm")
    if algorithm is not None:
        if str(algorithm).lower() in Constants.SUPPORTED_ALGORITHMS:
            Constants.DEFAULT_ALGORITHM = str(algorithm).lower()
        else:
            logger.warning("Ignoring unsupported algorithm in config: %r", algorithm)


def apply_env_overrides() -> None:
    """Apply HASHLOCK_* environment overrides onto Constants."""
    env_cfg = {
        "registry": os.environ.get(Constants.ENV_REGISTRY),
        "max_depth": os.environ.get(Constants.ENV_MAX_DEPTH),
        "max_trees": os.environ.get(Constants.ENV_MAX_TREES),
        "algorithm": os.environ.get(Constants.ENV_ALGORITHM),
    }
    apply_config({k: v for k, v in env_cfg.items() if v not in (None, "")})
