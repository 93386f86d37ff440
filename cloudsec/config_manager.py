"""YAML configuration file handling."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from cloudsec.base import CloudsecConfig, Environment
from cloudsec.base.exceptions import ConfigNotFoundError, InvalidConfigError
from cloudsec.base.logger import cs_logger

DEFAULT_CONFIG_PATH = ".cloudsec.yaml"
CONFIG_PATH_ENV = "CLOUDSEC_CONFIG"


def resolve_config_path(explicit: str | None = None) -> Path:
    """
    Resolve the config file path.

    Priority order:
    1. Explicit path (``--config``)
    2. ``CLOUDSEC_CONFIG`` environment variable
    3. ``.cloudsec.yaml`` in the current directory
    """
    path = explicit or os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
    return Path(path).expanduser().resolve()


def default_config() -> CloudsecConfig:
    """Template configuration with dev, staging and prod environments."""
    environments = []
    for name, label in (("dev", "development"), ("staging", "staging"), ("prod", "production")):
        environments.append(
            Environment(
                name=name,
                provider="gcp",
                project_id=f"your-{name}-project-id",
                region="us-central1",
                prefix=f"{name}-",
                labels={"environment": label, "managed_by": "cloudsec"},
            )
        )
    return CloudsecConfig(
        environments=environments,
        default_environment="dev",
        default_project="your-default-project-id",
        default_region="us-central1",
    )


class ConfigManager:
    """Loads, validates and saves ``.cloudsec.yaml``.

    The file is read at most once per instance; later calls reuse the
    parsed config.
    """

    def __init__(self, config_path: str | Path | None = None):
        self.config_path = resolve_config_path(str(config_path) if config_path else None)
        self._config: CloudsecConfig | None = None

    def config_exists(self) -> bool:
        return self.config_path.exists()

    def load_config(self) -> CloudsecConfig:
        """
        Load and validate the configuration file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            InvalidConfigError: If the file cannot be parsed or fails validation.
        """
        if self._config is not None:
            return self._config

        if not self.config_exists():
            raise ConfigNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Run 'cloudsec init' to create one."
            )

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigError(f"Failed to parse YAML config at {self.config_path}: {e}") from e
        except (UnicodeDecodeError, OSError) as e:
            raise InvalidConfigError(f"Failed to read config file at {self.config_path}: {e}") from e

        if not isinstance(raw, dict) or not isinstance(raw.get("environments"), list):
            raise InvalidConfigError(
                f"Invalid configuration at {self.config_path}: environments must be a list"
            )

        try:
            self._config = CloudsecConfig.model_validate(raw)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid configuration at {self.config_path}:\n{e}") from e

        cs_logger.debug(f"Configuration loaded from {self.config_path}", operation="load_config")
        return self._config

    def save_config(self, config: CloudsecConfig) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.dump_config(config))
        except OSError as e:
            raise InvalidConfigError(f"Failed to save configuration to {self.config_path}: {e}") from e
        self._config = config
        cs_logger.debug(f"Configuration saved to {self.config_path}", operation="save_config")

    def create_default_config(self) -> None:
        self.save_config(default_config())

    def validate_config(self) -> CloudsecConfig:
        """Load the config, surfacing any validation error."""
        return self.load_config()

    @staticmethod
    def dump_config(config: CloudsecConfig) -> str:
        return yaml.safe_dump(config.to_yaml_dict(), sort_keys=False, indent=2)

    def get_environment(self, name: str) -> Environment | None:
        config = self.load_config()
        return next((env for env in config.environments if env.name == name), None)

    def get_default_environment(self) -> Environment | None:
        config = self.load_config()
        if config.default_environment:
            return self.get_environment(config.default_environment)
        return config.environments[0] if config.environments else None

    def get_all_environments(self) -> list[Environment]:
        return list(self.load_config().environments)
