"""CLI command implementations."""

from .env import EnvCommand
from .init import InitCommand
from .secrets import SecretsCommand
from .config import show_config

__all__ = ["EnvCommand", "InitCommand", "SecretsCommand", "show_config"]
