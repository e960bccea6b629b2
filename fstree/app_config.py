import logging
import os
from typing import Any

import config

from fstree.constants import DEFAULT_CONFIG_FILE_NAME, PROJECT_DIR_TOKEN, RESOURCES_DIR_NAME
from fstree.error import ConfigError

logger = logging.getLogger(__name__)


def get_default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), RESOURCES_DIR_NAME, DEFAULT_CONFIG_FILE_NAME)


class ConfigRequest:
    def __init__(self, cfg_path: str, default_val: Any = None, is_required: bool = True):
        self.cfg_path: str = cfg_path
        self.default_val: Any = default_val
        self.is_required: bool = is_required


class TreeConfig:
    """
    ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼
    CLASS TreeConfig

    Read-only access to a CFG config file. Entries are addressed by dotted path, e.g. 'logging.console.level'.
    ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼
    """
    def __init__(self, config_file_path: str = None):
        if not config_file_path:
            config_file_path = get_default_config_path()
        self.config_file_path: str = config_file_path
        self._project_dir: str = os.path.dirname(os.path.abspath(config_file_path))

        try:
            logger.debug(f'Reading config file: "{config_file_path}"')
            self._cfg = config.Config(config_file_path)
        except Exception as err:
            raise ConfigError(msg=f'Could not read config file ({config_file_path})') from err

    def get_config_from_request(self, request: ConfigRequest):
        return self.get_config(cfg_path=request.cfg_path, default_val=request.default_val, is_required=request.is_required)

    def get_config(self, cfg_path: str, default_val=None, is_required: bool = True):
        try:
            val = self._cfg.get(cfg_path, None)
        except (KeyError, config.ConfigError):
            val = None

        if val is None:
            logger.debug(f'Path not found: {cfg_path}')
            if is_required and default_val is None:
                raise ConfigError(cfg_path=cfg_path)
            return default_val

        if type(val) == str:
            val = val.replace(PROJECT_DIR_TOKEN, self._project_dir)
        logger.debug(f'Read config entry "{cfg_path}" = "{val}"')
        return val
