"""Secret provider blueprint."""

from abc import ABC, abstractmethod

from .models import Environment, SecretMetadata, SecretVersion


class ProviderBlueprint(ABC):
    """Abstract interface for a cloud secret backend bound to one environment.

    Names passed to the per-secret operations are logical names; each
    implementation resolves them against the environment prefix with
    :func:`cloudsec.base.naming.resolve_secret_id`.
    """

    def __init__(self, environment: Environment):
        self.environment = environment

    def get_environment(self) -> Environment:
        return self.environment

    @abstractmethod
    def list_secrets(self) -> list[SecretMetadata]:
        """List secret resources whose id starts with the environment prefix.

        Returns:
            Metadata for each matching resource, including its latest enabled version.
        """
        pass

    @abstractmethod
    def get_secret(self, name: str) -> str:
        """Retrieve the latest payload of a secret.

        Args:
            name: Logical secret name.

        Returns:
            The payload decoded as UTF-8 ('' if the payload is absent).
        """
        pass

    @abstractmethod
    def set_secret(self, name: str, value: str, labels: dict[str, str] | None = None) -> None:
        """Create the secret if missing, then append *value* as a new version.

        Args:
            name: Logical secret name.
            value: Payload to store.
            labels: Labels overlaid on the environment labels when creating.
        """
        pass

    @abstractmethod
    def delete_secret(self, name: str, all_versions: bool = False) -> None:
        """Delete a secret resource.

        Args:
            name: Logical secret name.
            all_versions: Destroy every version before deleting the resource.
        """
        pass

    @abstractmethod
    def secret_exists(self, name: str) -> bool:
        """Return whether the secret resource exists."""
        pass

    @abstractmethod
    def get_secret_versions(self, name: str) -> list[SecretVersion]:
        """List every version of a secret, in backend order (newest first)."""
        pass

    @abstractmethod
    def test_connection(self) -> bool:
        """Issue a minimal listing call; report success instead of raising."""
        pass
