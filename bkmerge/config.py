"""
Configuration management for bkmerge.

Provides a hierarchical configuration system with sensible defaults.
Supports both global (~/.config/bkmerge/config.toml) and local (bkmerge.toml)
configurations.
"""
import os
import tomli
import tomli_w
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field, asdict

from bkmerge.constants import (
    ACCEPTED_EXTENSIONS,
    DEFAULT_DOCUMENT_TITLE,
    DEFAULT_ENCODING,
    DEFAULT_HEADING,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_FILE,
)


@dataclass
class MergerConfig:
    """
    bkmerge configuration with sensible defaults.

    Configuration hierarchy (highest to lowest priority):
    1. Command-line arguments
    2. Environment variables (BKMERGE_*)
    3. Specific config file (--config)
    4. Local config file (./bkmerge.toml or ./.bkmergerc)
    5. User config file (~/.config/bkmerge/config.toml)
    6. System defaults
    """

    # Input
    accepted_extensions: List[str] = field(default_factory=lambda: list(ACCEPTED_EXTENSIONS))
    encoding: str = field(default=DEFAULT_ENCODING)
    strict_parsing: bool = field(default=False)

    # Output
    output_file: str = field(default=DEFAULT_OUTPUT_FILE)
    escape_output: bool = field(default=True)
    document_title: str = field(default=DEFAULT_DOCUMENT_TITLE)
    heading: str = field(default=DEFAULT_HEADING)

    # Ingest
    max_workers: int = field(default=DEFAULT_MAX_WORKERS)
    ordered_ingest: bool = field(default=True)

    # Interaction
    assume_yes: bool = field(default=False)
    color_output: bool = field(default=True)
    log_level: str = field(default="INFO")

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "MergerConfig":
        """
        Load configuration from files and environment.

        Args:
            config_file: Specific config file to load (overrides search)

        Returns:
            Merged configuration object
        """
        config = cls()

        user_config_path = cls.user_config_path()
        if user_config_path.exists():
            config._merge(cls._load_toml(user_config_path))

        # First local config found wins
        local_paths = [
            Path.cwd() / "bkmerge.toml",
            Path.cwd() / ".bkmergerc",
            Path.cwd() / ".bkmerge" / "config.toml"
        ]

        for path in local_paths:
            if path.exists():
                config._merge(cls._load_toml(path))
                break

        if config_file and Path(config_file).exists():
            config._merge(cls._load_toml(Path(config_file)))

        config._apply_env_vars()
        config._expand_paths()

        return config

    @staticmethod
    def user_config_path() -> Path:
        return Path.home() / ".config" / "bkmerge" / "config.toml"

    @staticmethod
    def _load_toml(path: Path) -> Dict[str, Any]:
        """Load TOML configuration file."""
        with open(path, "rb") as f:
            return tomli.load(f)

    def _merge(self, data: Dict[str, Any]):
        """Merge configuration data into this instance."""
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def _apply_env_vars(self):
        """Apply environment variables with BKMERGE_ prefix."""
        prefix = "BKMERGE_"
        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                if hasattr(self, config_key):
                    self.set(config_key, value)

    def _expand_paths(self):
        """Expand ~ and environment variables in paths."""
        value = self.output_file
        if isinstance(value, str):
            self.output_file = os.path.expanduser(os.path.expandvars(value))

    def set(self, key: str, value: str):
        """
        Set a field from its string form, converting to the field's type.

        Raises:
            KeyError: If the key is not a configuration field
        """
        if not hasattr(self, key):
            raise KeyError(f"Unknown config key: {key}")

        current_value = getattr(self, key)
        if isinstance(current_value, bool):
            setattr(self, key, value.lower() in ("true", "1", "yes"))
        elif isinstance(current_value, int):
            setattr(self, key, int(value))
        elif isinstance(current_value, list):
            setattr(self, key, [v.strip() for v in value.split(",") if v.strip()])
        else:
            setattr(self, key, value)

    def save(self, path: Optional[Path] = None):
        """
        Save current configuration to TOML file.

        Args:
            path: Path to save to (defaults to user config)
        """
        if path is None:
            path = self.user_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            tomli_w.dump(asdict(self), f)

    def get_output_path(self) -> Path:
        """Get the resolved output path."""
        path = Path(self.output_file)
        if not path.is_absolute():
            path = Path.cwd() / path
        return path

    def accepts(self, name: str) -> bool:
        """Check whether a file name carries an accepted extension."""
        return name.endswith(tuple(self.accepted_extensions))


# Global configuration instance
_config: Optional[MergerConfig] = None


def get_config(reload: bool = False, config_file: Optional[Path] = None) -> MergerConfig:
    """
    Get the global configuration instance.

    Args:
        reload: Force reload configuration from files
        config_file: Specific config file to load

    Returns:
        Global configuration instance
    """
    global _config
    if _config is None or reload:
        _config = MergerConfig.load(config_file)
    return _config


def init_config(config_file: Optional[Path] = None, **kwargs) -> MergerConfig:
    """
    Initialize configuration with command-line overrides.

    Args:
        config_file: Specific config file to load
        **kwargs: Configuration overrides (None values are ignored)

    Returns:
        Configured instance
    """
    config = get_config(reload=config_file is not None, config_file=config_file)

    for key, value in kwargs.items():
        if hasattr(config, key) and value is not None:
            setattr(config, key, value)

    return config
