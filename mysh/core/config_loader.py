"""
MySh Configuration Loader

Configuration for the shell engine:
- JSON configuration file loading
- Default value handling
- Runtime configuration updates
- Typed access to configuration values

The executable search path is part of the configuration and is fixed once
loaded; the ``PATH`` environment variable is never consulted.
"""

import json
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, List

from mysh.exceptions import ConfigError


CONFIG_ENV_VAR = 'MYSH_CONFIG'

# Priority order: local-bin, system-bin, root-bin.
DEFAULT_SEARCH_PATHS = ("/usr/local/bin", "/usr/bin", "/bin")


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    prompt: str = "mysh> "
    banner: str = "Welcome to MyShell!"
    goodbye: str = "Goodbye!"
    farewell: str = "Exiting my shell."
    max_args: int = 63
    search_paths: List[str] = field(default_factory=lambda: list(DEFAULT_SEARCH_PATHS))


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the shell.
    """
    shell: ShellConfig = field(default_factory=ShellConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('mysh.json')
        >>> print(config.shell.prompt)
        mysh>
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigError: If the file cannot be loaded or parsed
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}", config_path)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file: {e}", config_path)
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file: {e}", config_path)

        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be an object", config_path)

        self._config = self._parse_config(data)
        self._loaded = True
        return self._config

    def load_from_env(self, environ=None) -> Config:
        """Load the file named by ``MYSH_CONFIG`` if set, else keep defaults."""
        environ = os.environ if environ is None else environ
        config_path = environ.get(CONFIG_ENV_VAR)
        if config_path:
            return self.load(config_path)
        return self.config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        if 'shell' in data:
            shell_data = data['shell']
            config.shell = ShellConfig(
                prompt=shell_data.get('prompt', config.shell.prompt),
                banner=shell_data.get('banner', config.shell.banner),
                goodbye=shell_data.get('goodbye', config.shell.goodbye),
                farewell=shell_data.get('farewell', config.shell.farewell),
                max_args=int(shell_data.get('max_args', config.shell.max_args)),
                search_paths=list(shell_data.get('search_paths', config.shell.search_paths)),
            )

        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
            )

        return config

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if not self._loaded:
            return Config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'shell.prompt')
            default: Default value if key not found
        """
        obj: Any = self.config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Note:
            This modifies configuration at runtime but does not
            persist changes to disk.
        """
        if not self._loaded:
            self._config = Config()
            self._loaded = True

        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigError(f"Invalid configuration key: {key}", key)

        final_key = parts[-1]
        if hasattr(obj, final_key):
            setattr(obj, final_key, value)
        else:
            raise ConfigError(f"Invalid configuration key: {key}", key)

    def reset(self) -> None:
        """Drop any loaded configuration and return to defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            return obj

        return dataclass_to_dict(self.config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
