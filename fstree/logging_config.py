import logging
import os
from datetime import datetime, timezone
from logging import handlers

from fstree.util.ensure import ensure_bool, ensure_list

logger = logging.getLogger(__name__)


class TimeOfLaunchRotatingFileHandler(handlers.RotatingFileHandler):

    def __init__(self, log_dir: str, filename_base: str, mode='a', maxbytes=0, backupcount=0, encoding=None, delay=False):
        """Each launch writes to its own file: filename_base + launch timestamp + '.log'"""
        self.log_dir = log_dir
        self.filename_base = filename_base

        self.logfile_path = self._generate_logfile_path()

        handlers.RotatingFileHandler.__init__(self, self.logfile_path, mode, maxbytes, backupcount, encoding, delay)

    def _generate_logfile_path(self):
        timestamp_str = datetime.now(tz=timezone.utc).strftime("%Y-%m-%d_%H%M%S")
        filename = f'{self.filename_base}{timestamp_str}.log'
        return os.path.join(self.log_dir, filename)

    def shouldRollover(self, record):
        """Never rollover: a new file is started on every launch instead"""
        return 0


def configure_logging(tree_config):
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # --- DEBUG LOG FILE ---
    debug_log_enabled = ensure_bool(tree_config.get_config('logging.debug_log.enable', False, is_required=False))
    if debug_log_enabled:
        log_dir = tree_config.get_config('logging.debug_log.log_dir')
        filename_base: str = tree_config.get_config('logging.debug_log.filename_base')
        debug_log_mode = tree_config.get_config('logging.debug_log.filemode', 'a', is_required=False)
        debug_log_fmt = tree_config.get_config('logging.debug_log.format')
        debug_log_datetime_fmt = tree_config.get_config('logging.debug_log.datetime_format')

        try:
            os.makedirs(name=log_dir, exist_ok=True)
        except Exception:
            logger.error(f'Exception while making log dir: {log_dir}')
            raise

        debug_file_handler = TimeOfLaunchRotatingFileHandler(log_dir=log_dir, filename_base=filename_base, mode=debug_log_mode)
        debug_file_level = logging.getLevelName(tree_config.get_config('logging.debug_log.level', 'DEBUG', is_required=False))
        debug_file_handler.setLevel(debug_file_level)

        debug_file_formatter = logging.Formatter(fmt=debug_log_fmt, datefmt=debug_log_datetime_fmt)
        debug_file_handler.setFormatter(debug_file_formatter)

        root_logger.addHandler(debug_file_handler)

    # --- CONSOLE ---
    console_enabled = ensure_bool(tree_config.get_config('logging.console.enable', True, is_required=False))
    if console_enabled:
        console_fmt = tree_config.get_config('logging.console.format')
        console_datetime_fmt = tree_config.get_config('logging.console.datetime_format')

        console_handler = logging.StreamHandler()
        console_level = logging.getLevelName(tree_config.get_config('logging.console.level', 'INFO', is_required=False))
        console_handler.setLevel(console_level)

        console_formatter = logging.Formatter(fmt=console_fmt, datefmt=console_datetime_fmt)
        console_handler.setFormatter(console_formatter)

        root_logger.addHandler(console_handler)

    for logger_name in ensure_list(tree_config.get_config('logging.loglevel_info', None, is_required=False)):
        logging.getLogger(logger_name).setLevel(logging.INFO)

    for logger_name in ensure_list(tree_config.get_config('logging.loglevel_warning', None, is_required=False)):
        logging.getLogger(logger_name).setLevel(logging.WARNING)
