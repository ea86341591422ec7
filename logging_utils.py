# logging_utils.py
"""
Logging setup: rotating file log plus console output
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from trivia.settings import get_config_value


class LoggingConfig:
    """Configuration for logging system"""

    def __init__(self, config_module=None):
        self.config = config_module

        self.log_level = get_config_value(config_module, 'LOG_LEVEL', logging.INFO)
        self.max_bytes = get_config_value(config_module, 'MAX_LOG_SIZE', 5*1024*1024)  # 5MB
        self.backup_count = get_config_value(config_module, 'LOG_BACKUP_COUNT', 3)
        self.logs_dir = get_config_value(config_module, 'LOGS_DIR', 'logs')
        self.log_file = get_config_value(config_module, 'LOG_FILE', 'trivia.log')

        self.enable_file_logging = get_config_value(config_module, 'ENABLE_FILE_LOGGING', True)
        self.enable_console_logging = get_config_value(config_module, 'ENABLE_CONSOLE_LOGGING', True)

        # Third-party library log levels
        self.third_party_levels = {
            'aiohttp': get_config_value(config_module, 'AIOHTTP_LOG_LEVEL', logging.WARNING),
            'asyncio': get_config_value(config_module, 'ASYNCIO_LOG_LEVEL', logging.WARNING),
        }


DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
SIMPLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _create_file_handler(config: LoggingConfig) -> Optional[RotatingFileHandler]:
    """Create file handler with rotation"""
    try:
        os.makedirs(config.logs_dir, exist_ok=True)
        log_path = os.path.join(config.logs_dir, config.log_file)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        return file_handler

    except OSError as e:
        logging.getLogger(__name__).warning(f"Could not setup file logging: {e}")
        return None


def setup_logging(config_module=None) -> logging.Logger:
    """Install handlers on the root logger and return the package logger"""
    config = LoggingConfig(config_module)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if config.enable_console_logging:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
        console_handler.setLevel(config.log_level)
        root_logger.addHandler(console_handler)

    if config.enable_file_logging:
        file_handler = _create_file_handler(config)
        if file_handler:
            root_logger.addHandler(file_handler)

    for logger_name, level in config.third_party_levels.items():
        logging.getLogger(logger_name).setLevel(level)

    return logging.getLogger('trivia')
