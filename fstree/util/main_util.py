import logging
import os
from typing import Optional

from fstree.app_config import TreeConfig
from fstree.logging_config import configure_logging
from fstree.logging_constants import SUPER_DEBUG_ENABLED, TRACE_ENABLED

logger = logging.getLogger(__name__)


def do_main_boilerplate(config_file_path: Optional[str] = None) -> TreeConfig:
    """Entry point for an application which embeds fstree: reads the config file (the bundled default if none is given),
    sets up logging from it, and returns the config so that it can be passed on to TreeRoot and describe()."""
    tree_config = TreeConfig(config_file_path)
    configure_logging(tree_config)

    # -- logger is now available --

    if TRACE_ENABLED:
        logger.info('TRACE_ENABLED is true')
    elif SUPER_DEBUG_ENABLED:
        logger.info('SUPER_DEBUG_ENABLED is true')

    logger.debug(f'Using config file: "{tree_config.config_file_path}"')
    logger.debug(f'Working dir is: {os.getcwd()}')
    return tree_config
