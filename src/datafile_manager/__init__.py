"""On-disk blob store keyed by optional folder and identifier."""

from .config import StoreConfig, load_store_config
from .constants import PACKAGE_VERSION
from .errors import ConfigError, DataFileError
from .store import DataFileManager, log_failure

__version__ = PACKAGE_VERSION

__all__ = [
    "ConfigError",
    "DataFileError",
    "DataFileManager",
    "StoreConfig",
    "load_store_config",
    "log_failure",
]
