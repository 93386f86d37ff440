from unittest.mock import patch
import pytest
import yaml

from cloudsec.base import ProviderBlueprint, Environment, SecretMetadata, SecretVersion
from cloudsec.base.exceptions import SecretNotFoundError
from cloudsec.base.naming import resolve_secret_id
from cloudsec.factory import create_provider as real_create_provider


class InMemoryProvider(ProviderBlueprint):
    """Provider backed by a dict of secret id -> list of payload versions."""

    def __init__(self, environment, store=None, labels=None, connected=True):
        super().__init__(environment)
        self.store = store if store is not None else {}
        self.labels = labels if labels is not None else {}
        self.connected = connected

    def _id(self, name):
        return resolve_secret_id(name, self.environment.prefix)

    def list_secrets(self):
        prefix = self.environment.prefix or ""
        return [
            SecretMetadata(name=sid, labels=self.labels.get(sid, {}), latest_version=str(len(v)))
            for sid, v in self.store.items()
            if sid.startswith(prefix)
        ]

    def get_secret(self, name):
        versions = self.store.get(self._id(name))
        if not versions:
            raise SecretNotFoundError(f"Secret '{name}' not found.")
        return versions[-1]

    def set_secret(self, name, value, labels=None):
        sid = self._id(name)
        if sid not in self.store:
            self.store[sid] = []
            self.labels[sid] = {**self.environment.labels, **(labels or {})}
        self.store[sid].append(value)

    def delete_secret(self, name, all_versions=False):
        sid = self._id(name)
        if sid not in self.store:
            raise SecretNotFoundError(f"Secret '{name}' not found.")
        del self.store[sid]

    def secret_exists(self, name):
        return self._id(name) in self.store

    def get_secret_versions(self, name):
        sid = self._id(name)
        return [
            SecretVersion(name=f"{sid}/versions/{i}", state="ENABLED", version=str(i))
            for i in range(len(self.store.get(sid, [])), 0, -1)
        ]

    def test_connection(self):
        return self.connected


@pytest.fixture
def dev_env():
    return Environment(
        name="dev",
        provider="gcp",
        projectId="dev-project",
        region="us-central1",
        prefix="dev-",
        labels={"environment": "development", "managed_by": "cloudsec"},
    )


@pytest.fixture
def backend():
    """Shared in-memory secret store; providers created via the factory write here."""
    state = {"store": {}, "labels": {}, "connected": True, "providers": []}

    def make(environment):
        if environment.provider != "gcp":
            return real_create_provider(environment)
        provider = InMemoryProvider(
            environment, state["store"], state["labels"], state["connected"]
        )
        state["providers"].append(provider)
        return provider

    with patch("cloudsec.secrets_manager.create_provider", side_effect=make):
        yield state


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / ".cloudsec.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "environments": [
                    {
                        "name": "dev",
                        "provider": "gcp",
                        "projectId": "dev-project",
                        "region": "us-central1",
                        "prefix": "dev-",
                        "labels": {"environment": "development", "managed_by": "cloudsec"},
                    },
                    {
                        "name": "prod",
                        "provider": "gcp",
                        "projectId": "prod-project",
                        "region": "europe-west1",
                        "prefix": "prod-",
                    },
                    {
                        "name": "legacy",
                        "provider": "aws",
                        "projectId": "123456789012",
                        "region": "us-east-1",
                    },
                ],
                "defaultEnvironment": "dev",
            },
            sort_keys=False,
        )
    )
    return path
