"""Cloudsec CLI — manage environment secrets from the command line.

Usage examples::

    cloudsec init
    cloudsec set DATABASE_URL postgres://... -e dev
    cloudsec get DATABASE_URL
    eval "$(cloudsec env --export)"
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable

from pydantic import ValidationError

from cloudsec import __version__
from cloudsec.base.exceptions import CloudsecError
from cloudsec.base.logger import cs_logger
from cloudsec.commands import EnvCommand, InitCommand, SecretsCommand, show_config
from cloudsec.config_manager import ConfigManager
from cloudsec.formatting import SUPPORTED_SHELLS
from cloudsec.output import OutputWriter
from cloudsec.prompts import Prompter


def _environment_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--environment", "-e",
        dest="command_environment",
        help="Environment to use (dev, staging, prod)",
    )
    return parent


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``cloudsec`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="cloudsec",
        description="CLI tool for managing cloud secrets across multiple environments",
    )
    parser.add_argument("--version", action="version", version=f"cloudsec {__version__}")
    parser.add_argument(
        "--environment", "-e",
        help="Environment to use (dev, staging, prod)",
    )
    parser.add_argument(
        "--project", "-p",
        help="Cloud project ID override for this invocation",
    )
    parser.add_argument(
        "--region", "-r",
        help="Cloud region override for this invocation",
    )
    parser.add_argument(
        "--config",
        help="Path to config file (default: $CLOUDSEC_CONFIG or .cloudsec.yaml)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    env_parent = _environment_parent()
    sub = parser.add_subparsers(dest="command", metavar="command")

    p = sub.add_parser("init", help="Initialize cloudsec configuration")
    p.add_argument("--force", "-f", action="store_true", help="Overwrite existing configuration")

    sub.add_parser("config", help="Validate and show the current configuration")

    sub.add_parser(
        "list", aliases=["ls"], parents=[env_parent],
        help="List all secrets of an environment",
    )

    p = sub.add_parser("get", parents=[env_parent], help="Get the value of a secret")
    p.add_argument("key")

    p = sub.add_parser("set", parents=[env_parent], help="Set or update a secret value")
    p.add_argument("key")
    p.add_argument("value", nargs="?", help="Secret value (prompted for when omitted)")

    p = sub.add_parser("delete", aliases=["rm"], parents=[env_parent], help="Delete a secret")
    p.add_argument("key")
    p.add_argument("--force", action="store_true", help="Skip confirmation prompt")

    p = sub.add_parser("import", parents=[env_parent], help="Import secrets from a JSON file")
    p.add_argument("file")
    p.add_argument("--force", action="store_true", help="Skip confirmation prompts")

    p = sub.add_parser(
        "download", aliases=["pull"], parents=[env_parent],
        help="Download secrets to a JSON file",
    )
    p.add_argument("output", nargs="?", help="Output file path")
    p.add_argument("--output", "-o", dest="output_option", help="Output file path")

    p = sub.add_parser(
        "env", parents=[env_parent],
        help="Print shell assignments for an environment's secrets",
    )
    p.add_argument("--filter", help="Only include keys containing this substring")
    p.add_argument("--prefix", help="Prefix to remove from secret names")
    p.add_argument("--shell", choices=SUPPORTED_SHELLS, default="bash", help="Shell syntax")
    p.add_argument("--export", action="store_true", help="Include 'export' in the output")
    p.add_argument(
        "--verbose", dest="env_verbose", action="store_true", help="Show verbose output"
    )

    return parser


_COMMAND_NAMES = {
    "ls": "list",
    "rm": "delete",
    "pull": "download",
}

_FAILURE_CONTEXT = {
    "init": "initializing configuration",
    "config": "reading configuration",
    "list": "listing secrets",
    "get": "getting secret",
    "set": "setting secret",
    "delete": "deleting secret",
    "import": "importing secrets",
    "download": "downloading secrets",
    "env": "setting environment variables",
}


def _dispatch(
    command: str,
    ns: argparse.Namespace,
    config_manager: ConfigManager,
    writer: OutputWriter,
    prompter: Prompter,
) -> None:
    if command == "init":
        InitCommand(config_manager, writer, prompter).execute(force=ns.force)
        return
    if command == "config":
        show_config(config_manager, writer)
        return

    environment = ns.command_environment or ns.environment
    common = dict(writer=writer, prompter=prompter, project=ns.project, region=ns.region)

    if command == "env":
        EnvCommand(config_manager, **common).execute(
            environment=environment,
            pattern=ns.filter,
            prefix=ns.prefix,
            shell=ns.shell,
            export=ns.export,
            verbose=ns.env_verbose or ns.verbose,
        )
        return

    secrets = SecretsCommand(config_manager, **common)
    actions: dict[str, Callable[[], None]] = {
        "list": lambda: secrets.list(environment),
        "get": lambda: secrets.get(ns.key, environment),
        "set": lambda: secrets.set(ns.key, ns.value, environment),
        "delete": lambda: secrets.delete(ns.key, environment, force=ns.force),
        "import": lambda: secrets.import_file(ns.file, environment, force=ns.force),
        "download": lambda: secrets.download(ns.output_option or ns.output, environment),
    }
    actions[command]()


def main(
    argv: list[str] | None = None,
    writer: OutputWriter | None = None,
    prompter: Prompter | None = None,
) -> int:
    """CLI entry point.

    Every command failure prints ``Error <context>: <message>`` to stderr
    and returns 1, as does an interrupted prompt. Success returns 0.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
        writer: Output boundary (defaults to stdout/stderr).
        prompter: Interactive prompts (defaults to the terminal).

    Returns:
        Process exit code.
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)
    writer = writer or OutputWriter()

    if ns.command is None:
        parser.print_help()
        return 0

    cs_logger.set_verbose(ns.verbose)
    command = _COMMAND_NAMES.get(ns.command, ns.command)
    config_manager = ConfigManager(ns.config)

    try:
        _dispatch(command, ns, config_manager, writer, prompter or Prompter())
    except (CloudsecError, ValidationError) as e:
        writer.error(f"Error {_FAILURE_CONTEXT[command]}: {e}")
        return 1
    except (EOFError, KeyboardInterrupt):
        writer.error("\nOperation cancelled")
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
