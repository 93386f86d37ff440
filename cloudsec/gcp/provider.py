"""GCP Secret Manager implementation of the provider blueprint."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from google.cloud import secretmanager_v1
from google.api_core.exceptions import NotFound

from cloudsec.base import ProviderBlueprint, Environment, SecretMetadata, SecretVersion
from cloudsec.base.exceptions import (
    CorruptBlobError,
    InvalidInputError,
    ProviderError,
    SecretNotFoundError,
)
from cloudsec.base.logger import cs_logger
from cloudsec.base.naming import project_path, resolve_secret_id, secret_path, short_name


def _timestamp(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _state(value: Any) -> str:
    if value is None:
        return ""
    return str(getattr(value, "name", value))


def _load_credentials(credentials_path: str | None) -> Any:
    """Load service account credentials, or None to use ADC."""
    if not credentials_path:
        return None
    path = Path(credentials_path).expanduser()
    if not path.exists():
        raise InvalidInputError(f"Credentials file not found: {credentials_path}")
    from google.auth.exceptions import GoogleAuthError  # lazy import
    from google.oauth2 import service_account

    try:
        return service_account.Credentials.from_service_account_file(str(path))
    except (GoogleAuthError, ValueError, OSError) as e:
        raise InvalidInputError(f"Invalid credentials file {credentials_path}: {e}") from e


class GCPProvider(ProviderBlueprint):
    """GCP Secret Manager backend.

    Secrets live under ``projects/<projectId>/secrets/<prefix><name>``; every
    write appends a new immutable version and reads take ``versions/latest``.

    Attributes:
        client: Google Cloud Secret Manager client.
        project_id: The GCP project ID where secrets are stored.
        prefix: Environment prefix applied to logical names.
    """

    def __init__(self, environment: Environment):
        """Initialize the GCP Secret Manager client.

        Args:
            environment: Environment supplying project ID, prefix, labels and
                an optional service account key path.
        """
        super().__init__(environment)
        credentials = _load_credentials(environment.credentials_path)
        try:
            self.client = secretmanager_v1.SecretManagerServiceClient(credentials=credentials)
        except Exception as e:
            raise ProviderError(f"Failed to initialize GCP Secret Manager client: {str(e)}") from e
        self.project_id = environment.project_id
        self.prefix = environment.prefix or ""

    def _path(self, name: str) -> str:
        return secret_path(self.project_id, name, self.prefix)

    def _log(self, message: str, operation: str) -> None:
        cs_logger.debug(
            message, provider="gcp", environment=self.environment.name, operation=operation
        )

    def list_secrets(self) -> list[SecretMetadata]:
        """List secrets in the project whose id starts with the environment prefix.

        Raises:
            ProviderError: If listing fails.
        """
        parent = project_path(self.project_id)
        self._log(f"Listing secrets under {parent}", "list_secrets")
        try:
            secrets = []
            for secret in self.client.list_secrets(request={"parent": parent}):
                secret_id = short_name(secret.name)
                if self.prefix and not secret_id.startswith(self.prefix):
                    continue
                latest = next(
                    iter(
                        self.client.list_secret_versions(
                            request={
                                "parent": secret.name,
                                "filter": "state:ENABLED",
                                "page_size": 1,
                            }
                        )
                    ),
                    None,
                )
                created = _timestamp(secret.create_time)
                secrets.append(
                    SecretMetadata(
                        name=secret_id,
                        create_time=created,
                        update_time=created,
                        labels=dict(secret.labels or {}),
                        latest_version=short_name(latest.name) if latest is not None else None,
                    )
                )
            return secrets
        except Exception as e:
            raise ProviderError(f"Failed to list secrets: {str(e)}") from e

    def get_secret(self, name: str) -> str:
        """Retrieve the latest version of a secret.

        Raises:
            SecretNotFoundError: If the secret or an enabled version does not exist.
            ProviderError: If retrieval fails for any other reason.
        """
        version_name = f"{self._path(name)}/versions/latest"
        self._log(f"Accessing {version_name}", "get_secret")
        try:
            response = self.client.access_secret_version(name=version_name)
        except NotFound as e:
            raise SecretNotFoundError(f"Secret '{name}' not found.") from e
        except Exception as e:
            raise ProviderError(f"Failed to get secret '{name}': {str(e)}") from e
        data = response.payload.data if response.payload else None
        try:
            return data.decode("UTF-8") if data else ""
        except UnicodeDecodeError as e:
            raise CorruptBlobError(f"Secret '{name}' is not valid UTF-8") from e

    def set_secret(self, name: str, value: str, labels: dict[str, str] | None = None) -> None:
        """Create the secret if needed and add *value* as a new version.

        Labels are only applied when the secret is created; existing
        secrets keep their labels.

        Raises:
            ProviderError: If creation or the version append fails.
        """
        secret_name = self._path(name)
        try:
            try:
                self.client.get_secret(name=secret_name)
            except NotFound:
                self._log(f"Creating {secret_name}", "set_secret")
                self.client.create_secret(
                    request={
                        "parent": project_path(self.project_id),
                        "secret_id": resolve_secret_id(name, self.prefix),
                        "secret": {
                            "replication": {"automatic": {}},
                            "labels": {**self.environment.labels, **(labels or {})},
                        },
                    }
                )
            self._log(f"Adding version to {secret_name}", "set_secret")
            self.client.add_secret_version(
                request={
                    "parent": secret_name,
                    "payload": {"data": value.encode("UTF-8")},
                }
            )
        except Exception as e:
            raise ProviderError(f"Failed to set secret '{name}': {str(e)}") from e

    def delete_secret(self, name: str, all_versions: bool = False) -> None:
        """Delete a secret, optionally destroying every version first.

        Raises:
            SecretNotFoundError: If the secret does not exist.
            ProviderError: If deletion fails for any other reason.
        """
        secret_name = self._path(name)
        try:
            if all_versions:
                for version in self.client.list_secret_versions(request={"parent": secret_name}):
                    if version.name:
                        self._log(f"Destroying {version.name}", "delete_secret")
                        self.client.destroy_secret_version(name=version.name)
            self._log(f"Deleting {secret_name}", "delete_secret")
            self.client.delete_secret(name=secret_name)
        except NotFound as e:
            raise SecretNotFoundError(f"Secret '{name}' not found.") from e
        except Exception as e:
            raise ProviderError(f"Failed to delete secret '{name}': {str(e)}") from e

    def secret_exists(self, name: str) -> bool:
        """Return True if the secret resource exists.

        Raises:
            ProviderError: If the lookup fails for a reason other than NotFound.
        """
        try:
            self.client.get_secret(name=self._path(name))
            return True
        except NotFound:
            return False
        except Exception as e:
            raise ProviderError(f"Failed to check secret '{name}': {str(e)}") from e

    def get_secret_versions(self, name: str) -> list[SecretVersion]:
        """List the versions of a secret as returned by the API.

        Raises:
            SecretNotFoundError: If the secret does not exist.
            ProviderError: If listing fails for any other reason.
        """
        try:
            return [
                SecretVersion(
                    name=version.name or "",
                    create_time=_timestamp(version.create_time),
                    state=_state(version.state),
                    version=short_name(version.name or ""),
                )
                for version in self.client.list_secret_versions(
                    request={"parent": self._path(name)}
                )
            ]
        except NotFound as e:
            raise SecretNotFoundError(f"Secret '{name}' not found.") from e
        except Exception as e:
            raise ProviderError(
                f"Failed to get secret versions for '{name}': {str(e)}"
            ) from e

    def test_connection(self) -> bool:
        try:
            pager = self.client.list_secrets(
                request={"parent": project_path(self.project_id), "page_size": 1}
            )
            next(iter(pager), None)
            return True
        except Exception as e:
            cs_logger.error(
                f"Connection test failed: {e}",
                provider="gcp",
                environment=self.environment.name,
                operation="test_connection",
            )
            return False
