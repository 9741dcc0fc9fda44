"""Store configuration helpers."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import platformdirs
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    APP_AUTHOR,
    APP_NAME,
    CONFIG_FILE,
    ENV_BASE_DIR,
    ENV_NAMESPACE,
    ROOT_FOLDER_NAME,
)
from .errors import ConfigError
from .paths import is_single_segment

logger = logging.getLogger(__name__)


def default_base_dir() -> Path:
    """Platform user-documents directory (e.g. ~/Documents)."""
    return Path(platformdirs.user_documents_dir())


def default_config_path() -> Path:
    """Platform config file location for datafile-manager."""
    return Path(platformdirs.user_config_dir(APP_NAME, APP_AUTHOR)) / CONFIG_FILE


class StoreConfig(BaseModel):
    """
    Where a store keeps its data.

    The store root is ``base_dir / namespace``. Nothing here touches the
    filesystem; directories are created by the store on first write.
    """
    base_dir: Path = Field(default_factory=default_base_dir)
    namespace: str = ROOT_FOLDER_NAME

    @field_validator("base_dir", mode="before")
    @classmethod
    def expand_base_dir(cls, v: Any) -> Any:
        """Expand ~ so config files can use home-relative paths."""
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Namespace must be exactly one path segment."""
        if not is_single_segment(v):
            raise ConfigError(f"Invalid namespace {v!r}: must be a single directory name")
        return v

    @property
    def root(self) -> Path:
        """Root directory owned by the store."""
        return self.base_dir / self.namespace


def _read_config_file(path: Path) -> Dict[str, Any]:
    """Read store settings from a YAML file.

    A missing file yields no settings. A file that can't be read or parsed is
    logged and ignored.
    """
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a mapping", path)
        return {}

    section = data.get("store", data)
    if not isinstance(section, dict):
        logger.warning("Ignoring config file %s: 'store' must be a mapping", path)
        return {}

    return {k: section[k] for k in ("base_dir", "namespace") if section.get(k) is not None}


def load_store_config(
    path: Optional[Union[str, Path]] = None,
    base_dir: Optional[Union[str, Path]] = None,
    namespace: Optional[str] = None,
) -> StoreConfig:
    """
    Build a StoreConfig from layered sources.

    Resolution order, last wins: defaults, config file, environment
    (DATAFILE_MANAGER_BASE_DIR, DATAFILE_MANAGER_NAMESPACE), explicit
    arguments.

    Args:
        path: Config file to read (default: platform config directory)
        base_dir: Explicit base directory override
        namespace: Explicit namespace override

    Returns:
        Validated StoreConfig

    Raises:
        ConfigError: If the resulting configuration is invalid
    """
    cfg_path = Path(path) if path else default_config_path()
    settings = _read_config_file(cfg_path)
    origins = {key: str(cfg_path) for key in settings}

    for key, env_var in (("base_dir", ENV_BASE_DIR), ("namespace", ENV_NAMESPACE)):
        if os.environ.get(env_var):
            settings[key] = os.environ[env_var]
            origins[key] = env_var

    for key, value in (("base_dir", base_dir), ("namespace", namespace)):
        if value is not None:
            settings[key] = value
            origins[key] = "arguments"

    try:
        config = StoreConfig(**settings)
    except ConfigError as e:
        # Only namespace is checked by a ConfigError-raising validator
        raise ConfigError(str(e), source=origins.get("namespace")) from e
    except ValidationError as e:
        raise ConfigError(f"Invalid store configuration: {e}", source=str(cfg_path)) from e
    logger.debug("Store root resolved to %s", config.root)
    return config
