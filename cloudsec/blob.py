"""
Secret blob codec.

All logical secrets of an environment live in one JSON object stored as
the payload of the ``<prefix>secrets`` resource. Commands read the blob,
change it in memory and write the whole object back as a new version.

The read-modify-write is not atomic: two concurrent writers to the same
environment race and the last :func:`write_secrets` wins.
"""

from __future__ import annotations

import json

from cloudsec.base import Environment
from cloudsec.base.exceptions import CorruptBlobError, SecretNotFoundError
from cloudsec.base.naming import blob_secret_name
from cloudsec.secrets_manager import SecretsManager


def decode_secrets(payload: str, name: str = "secrets") -> dict[str, str]:
    """Parse a blob payload into a key/value mapping.

    An empty payload decodes to an empty mapping.

    Raises:
        CorruptBlobError: If the payload is not a JSON object of strings.
    """
    if not payload.strip():
        return {}
    try:
        secrets = json.loads(payload)
    except json.JSONDecodeError as e:
        raise CorruptBlobError(f"Secret '{name}' does not contain valid JSON: {e}") from e
    if not isinstance(secrets, dict):
        raise CorruptBlobError(f"Secret '{name}' must contain a JSON object")
    for key, value in secrets.items():
        if not isinstance(value, str):
            raise CorruptBlobError(
                f"Secret '{name}' has a non-string value for key '{key}'"
            )
    return secrets


def encode_secrets(secrets: dict[str, str]) -> str:
    return json.dumps(secrets, indent=2, ensure_ascii=False)


def read_secrets(store: SecretsManager, environment: Environment) -> dict[str, str]:
    """Fetch the environment's blob; a missing blob reads as empty."""
    name = blob_secret_name(environment)
    try:
        payload = store.get_secret(name)
    except SecretNotFoundError:
        return {}
    return decode_secrets(payload, name)


def write_secrets(
    store: SecretsManager, environment: Environment, secrets: dict[str, str]
) -> None:
    """Store the full mapping as a new version of the environment's blob."""
    store.set_secret(
        blob_secret_name(environment), encode_secrets(secrets), dict(environment.labels)
    )


def merge_secrets(existing: dict[str, str], imported: dict[str, str]) -> dict[str, str]:
    """Overlay *imported* on *existing*; keys absent from *imported* are kept."""
    return {**existing, **imported}
