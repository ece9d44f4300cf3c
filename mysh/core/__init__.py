"""
MySh Core Module

Core components shared by the shell engine:
- Configuration Loader
"""

from .config_loader import (
    ConfigLoader,
    Config,
    ShellConfig,
    LoggingConfig,
    DEFAULT_SEARCH_PATHS,
    get_config,
)

__all__ = [
    'ConfigLoader',
    'Config',
    'ShellConfig',
    'LoggingConfig',
    'DEFAULT_SEARCH_PATHS',
    'get_config',
]
