"""Common plumbing for command classes."""

from __future__ import annotations

from typing import Callable

from cloudsec.base import Environment
from cloudsec.config_manager import ConfigManager
from cloudsec.output import OutputWriter
from cloudsec.prompts import Prompter
from cloudsec.secrets_manager import SecretsManager

from .helpers import CommandSetup, setup_command


class Command:
    """Holds the collaborators every command needs.

    Attributes:
        config_manager: Source of environments.
        writer: Output boundary for results and diagnostics.
        prompter: Interactive prompts.
        store_factory: Builds the secret store for an environment.
        project: Per-invocation project override.
        region: Per-invocation region override.
    """

    def __init__(
        self,
        config_manager: ConfigManager,
        writer: OutputWriter | None = None,
        prompter: Prompter | None = None,
        store_factory: Callable[[Environment], SecretsManager] = SecretsManager,
        project: str | None = None,
        region: str | None = None,
    ) -> None:
        self.config_manager = config_manager
        self.writer = writer or OutputWriter()
        self.prompter = prompter or Prompter()
        self.store_factory = store_factory
        self.project = project
        self.region = region

    def setup(self, environment: str | None) -> CommandSetup:
        return setup_command(
            self.config_manager,
            environment,
            project=self.project,
            region=self.region,
            store_factory=self.store_factory,
        )
