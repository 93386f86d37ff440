"""Shared command setup: config, environment, secret store."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable

from cloudsec.base import Environment
from cloudsec.base.exceptions import ConnectionTestError, EnvironmentNotFoundError
from cloudsec.config_manager import ConfigManager
from cloudsec.secrets_manager import SecretsManager

ENVIRONMENT_ENV = "CLOUDSEC_ENVIRONMENT"


@dataclass
class CommandSetup:
    environment: Environment
    secrets_manager: SecretsManager


def resolve_environment(
    config_manager: ConfigManager,
    environment_name: str | None = None,
    project: str | None = None,
    region: str | None = None,
) -> Environment:
    """
    Pick the environment for a command.

    Priority order: explicit name, ``CLOUDSEC_ENVIRONMENT``, the configured
    default, the first environment. *project* / *region* override the
    chosen environment for this invocation only.

    Raises:
        EnvironmentNotFoundError: If no matching environment is configured.
    """
    name = environment_name or os.environ.get(ENVIRONMENT_ENV)
    environment = (
        config_manager.get_environment(name) if name else config_manager.get_default_environment()
    )
    if environment is None:
        raise EnvironmentNotFoundError(f"Environment '{name or 'default'}' not found")

    overrides = {}
    if project:
        overrides["project_id"] = project
    if region:
        overrides["region"] = region
    if overrides:
        environment = environment.model_copy(update=overrides)
    return environment


def setup_command(
    config_manager: ConfigManager,
    environment_name: str | None = None,
    project: str | None = None,
    region: str | None = None,
    store_factory: Callable[[Environment], SecretsManager] = SecretsManager,
) -> CommandSetup:
    """Resolve the environment, build its secret store and test the connection.

    Raises:
        ConnectionTestError: If the provider's connection test fails.
    """
    environment = resolve_environment(config_manager, environment_name, project, region)
    secrets_manager = store_factory(environment)
    if not secrets_manager.test_connection():
        raise ConnectionTestError(
            f"Failed to connect to the {environment.provider} secret manager "
            f"for project '{environment.project_id}'"
        )
    return CommandSetup(environment=environment, secrets_manager=secrets_manager)
