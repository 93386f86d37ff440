"""Render the environment's secrets as shell variable assignments."""

from __future__ import annotations

from cloudsec.base.logger import cs_logger
from cloudsec.blob import read_secrets
from cloudsec.formatting import format_env_lines

from .base import Command

# Pagination warning the Google client libraries print during listing.
NOISY_MARKERS = ("AutopaginateTrueWarning",)


class EnvCommand(Command):

    def execute(
        self,
        environment: str | None = None,
        pattern: str | None = None,
        prefix: str | None = None,
        shell: str = "bash",
        export: bool = False,
        verbose: bool = False,
    ) -> None:
        writer = self.writer.suppressing(*NOISY_MARKERS)
        with cs_logger.suppressing(*NOISY_MARKERS):
            setup = self.setup(environment)
            env = setup.environment
            if verbose:
                writer.error(f"Setting local environment variables from: {env.name}")

            secrets = read_secrets(setup.secrets_manager, env)
            if not secrets and verbose:
                writer.error("No secrets stored yet. Run: cloudsec set <key> <value> to add secrets")

            lines = format_env_lines(
                secrets, pattern=pattern, prefix=prefix, shell=shell, export=export
            )
            if not lines:
                return

            if verbose:
                writer.error(f"Found {len(lines)} secret(s)")
            writer.write("\n".join(lines))

            if verbose:
                writer.error(f"Generated {len(lines)} environment variable(s)")
                writer.error("\nTo apply these variables:")
                if shell == "fish":
                    writer.error("  cloudsec env --shell fish | source")
                else:
                    writer.error('  eval "$(cloudsec env)"')
                    writer.error("  # or")
                    writer.error("  source <(cloudsec env)")
