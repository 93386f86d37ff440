"""Secret store facade.

Keeps command code provider-agnostic: the provider is chosen once, at
construction, and every call is forwarded to it unchanged.
"""

from cloudsec.base import ProviderBlueprint, Environment, SecretMetadata, SecretVersion
from cloudsec.factory import create_provider


class SecretsManager:
    """Delegates secret operations to the environment's provider."""

    def __init__(self, environment: Environment):
        self.provider: ProviderBlueprint = create_provider(environment)

    def get_environment(self) -> Environment:
        return self.provider.get_environment()

    def list_secrets(self) -> list[SecretMetadata]:
        return self.provider.list_secrets()

    def get_secret(self, name: str) -> str:
        return self.provider.get_secret(name)

    def set_secret(self, name: str, value: str, labels: dict[str, str] | None = None) -> None:
        self.provider.set_secret(name, value, labels)

    def delete_secret(self, name: str, all_versions: bool = False) -> None:
        self.provider.delete_secret(name, all_versions)

    def secret_exists(self, name: str) -> bool:
        return self.provider.secret_exists(name)

    def get_secret_versions(self, name: str) -> list[SecretVersion]:
        return self.provider.get_secret_versions(name)

    def test_connection(self) -> bool:
        return self.provider.test_connection()
