"""AWS placeholder implementation of the provider blueprint.

AWS is a selectable provider kind but is not implemented: every operation
except :meth:`get_environment` raises :class:`ProviderNotImplementedError`.
"""

from __future__ import annotations

from cloudsec.base import ProviderBlueprint, SecretMetadata, SecretVersion
from cloudsec.base.exceptions import ProviderNotImplementedError

NOT_IMPLEMENTED_MESSAGE = (
    "AWS provider support is not yet implemented. "
    "Please use 'gcp' as the provider for now."
)


class AWSProvider(ProviderBlueprint):
    """AWS Secrets Manager stub."""

    def _fail(self):
        raise ProviderNotImplementedError(NOT_IMPLEMENTED_MESSAGE)

    def list_secrets(self) -> list[SecretMetadata]:
        self._fail()

    def get_secret(self, name: str) -> str:
        self._fail()

    def set_secret(self, name: str, value: str, labels: dict[str, str] | None = None) -> None:
        self._fail()

    def delete_secret(self, name: str, all_versions: bool = False) -> None:
        self._fail()

    def secret_exists(self, name: str) -> bool:
        self._fail()

    def get_secret_versions(self, name: str) -> list[SecretVersion]:
        self._fail()

    def test_connection(self) -> bool:
        self._fail()
