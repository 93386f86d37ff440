"""Secret CRUD commands operating on the environment's secret blob."""

from __future__ import annotations

import json
from pathlib import Path

from cloudsec.base.exceptions import InvalidInputError, SecretNotFoundError
from cloudsec.base.naming import blob_secret_name
from cloudsec.blob import encode_secrets, merge_secrets, read_secrets, write_secrets
from cloudsec.formatting import mask_value

from .base import Command

KEY_WIDTH = 40


def load_import_file(file_path: str | Path) -> dict[str, str]:
    """Read a flat JSON object of string values.

    Raises:
        InvalidInputError: If the file is missing, not JSON, not an object,
            or holds non-string values.
    """
    path = Path(file_path).expanduser().resolve()
    if not path.exists():
        raise InvalidInputError(f"File not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid JSON file: {e}") from e
    except (UnicodeDecodeError, OSError) as e:
        raise InvalidInputError(f"Cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidInputError("JSON file must contain an object with key-value pairs")
    bad = [key for key, value in data.items() if not isinstance(value, str)]
    if bad:
        raise InvalidInputError(f"Values must be strings; offending keys: {', '.join(bad)}")
    return data


class SecretsCommand(Command):
    """list / get / set / delete / import / download."""

    def list(self, environment: str | None = None) -> None:
        setup = self.setup(environment)
        env = setup.environment
        self.writer.write(f"\nSecrets in {env.name} environment:")
        self.writer.write(f"Secret: {blob_secret_name(env)}\n")

        secrets = read_secrets(setup.secrets_manager, env)
        if not secrets:
            self.writer.write("No secrets found")
            return

        self.writer.write("Key".ljust(KEY_WIDTH) + "Value")
        self.writer.write("-" * 80)
        for key in sorted(secrets):
            self.writer.write(key.ljust(KEY_WIDTH) + mask_value(secrets[key]))
        self.writer.write(f"\nTotal: {len(secrets)} secret(s)")

    def get(self, key: str, environment: str | None = None) -> None:
        setup = self.setup(environment)
        secrets = read_secrets(setup.secrets_manager, setup.environment)
        if key not in secrets:
            raise SecretNotFoundError(f'Secret "{key}" not found')
        self.writer.write(secrets[key])

    def set(self, key: str, value: str | None = None, environment: str | None = None) -> None:
        if not key:
            raise InvalidInputError("Secret key must not be empty")
        setup = self.setup(environment)
        secrets = read_secrets(setup.secrets_manager, setup.environment)

        if not value:
            value = self.prompter.secret(f"Enter value for {key}")

        is_update = key in secrets
        secrets[key] = value
        write_secrets(setup.secrets_manager, setup.environment, secrets)
        self.writer.write(f"{'Updated' if is_update else 'Added'} secret: {key}")

    def delete(self, key: str, environment: str | None = None, force: bool = False) -> None:
        setup = self.setup(environment)
        secrets = read_secrets(setup.secrets_manager, setup.environment)
        if key not in secrets:
            raise SecretNotFoundError(f'Secret "{key}" not found')

        if not force and not self.prompter.confirm(
            f'Are you sure you want to delete "{key}"?', default=False
        ):
            self.writer.write("Operation cancelled")
            return

        del secrets[key]
        write_secrets(setup.secrets_manager, setup.environment, secrets)
        self.writer.write(f"Deleted secret: {key}")

    def import_file(
        self, file_path: str, environment: str | None = None, force: bool = False
    ) -> None:
        setup = self.setup(environment)
        env = setup.environment
        imported = load_import_file(file_path)
        if not imported:
            self.writer.write("No secrets found in file")
            return

        self.writer.write(f"\nImporting {len(imported)} secrets to {env.name} environment...\n")
        existing = read_secrets(setup.secrets_manager, env)
        updated_keys = [key for key in imported if key in existing]
        new_keys = [key for key in imported if key not in existing]

        if existing and not force:
            self.writer.write(f"Found {len(existing)} existing secrets")
            if updated_keys:
                self.writer.write(
                    f"{len(updated_keys)} secrets will be updated: {', '.join(updated_keys)}"
                )
            if new_keys:
                self.writer.write(f"{len(new_keys)} new secrets will be added: {', '.join(new_keys)}")
            if not self.prompter.confirm("Continue with import?", default=True):
                self.writer.write("Operation cancelled")
                return

        write_secrets(setup.secrets_manager, env, merge_secrets(existing, imported))

        for key in imported:
            self.writer.write(f"{'Updated' if key in existing else 'Added'} secret: {key}")
        self.writer.write(
            f"\nSuccessfully imported {len(imported)} secret(s) to {env.name} environment"
        )

    def download(self, output: str | None = None, environment: str | None = None) -> None:
        setup = self.setup(environment)
        env = setup.environment
        secrets = read_secrets(setup.secrets_manager, env)
        if not secrets:
            self.writer.write("No secrets found to download")
            return

        path = Path(output or f"{env.name}-secrets.json").expanduser().resolve()
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(encode_secrets(secrets))
        except OSError as e:
            raise InvalidInputError(f"Cannot write {path}: {e}") from e
        self.writer.write(
            f"Successfully downloaded {len(secrets)} secret(s) from {env.name} environment to {path}"
        )
