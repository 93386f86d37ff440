from unittest.mock import patch, MagicMock
import pytest

from cloudsec.factory import create_provider
from cloudsec.secrets_manager import SecretsManager
from cloudsec.aws.provider import AWSProvider
from cloudsec.gcp.provider import GCPProvider
from cloudsec.base import Environment, ProviderBlueprint
from cloudsec.base.exceptions import UnsupportedProviderError


class TestCreateProvider:
    @patch("cloudsec.gcp.provider.secretmanager_v1")
    def test_gcp(self, mock_sm, dev_env):
        mock_sm.SecretManagerServiceClient.return_value = MagicMock()
        result = create_provider(dev_env)
        assert isinstance(result, GCPProvider)
        assert isinstance(result, ProviderBlueprint)

    def test_aws(self):
        env = Environment(name="legacy", provider="aws", projectId="1", region="us-east-1")
        assert isinstance(create_provider(env), AWSProvider)

    def test_unsupported_provider(self):
        env = Environment.model_construct(
            name="x", provider="azure", project_id="p", region="r", prefix=None, labels={}
        )
        with pytest.raises(UnsupportedProviderError, match="Unsupported provider: azure"):
            create_provider(env)


class TestSecretsManager:
    @pytest.fixture
    def facade(self, dev_env):
        provider = MagicMock(spec=ProviderBlueprint)
        with patch("cloudsec.secrets_manager.create_provider", return_value=provider) as factory:
            manager = SecretsManager(dev_env)
            factory.assert_called_once_with(dev_env)
            yield manager, provider

    def test_forwards_reads(self, facade):
        manager, provider = facade
        provider.get_secret.return_value = "payload"
        provider.secret_exists.return_value = True
        provider.list_secrets.return_value = []
        provider.get_secret_versions.return_value = []
        assert manager.get_secret("secrets") == "payload"
        assert manager.secret_exists("secrets") is True
        assert manager.list_secrets() == []
        assert manager.get_secret_versions("secrets") == []
        provider.get_secret.assert_called_once_with("secrets")

    def test_forwards_writes(self, facade):
        manager, provider = facade
        manager.set_secret("secrets", "{}", {"a": "b"})
        manager.delete_secret("secrets", all_versions=True)
        provider.set_secret.assert_called_once_with("secrets", "{}", {"a": "b"})
        provider.delete_secret.assert_called_once_with("secrets", True)

    def test_forwards_connection_test(self, facade):
        manager, provider = facade
        provider.test_connection.return_value = False
        assert manager.test_connection() is False

    def test_environment(self, facade, dev_env):
        manager, provider = facade
        provider.get_environment.return_value = dev_env
        assert manager.get_environment() is dev_env

    def test_unsupported_provider_fails_fast(self):
        env = Environment.model_construct(
            name="x", provider="azure", project_id="p", region="r", prefix=None, labels={}
        )
        with pytest.raises(UnsupportedProviderError):
            SecretsManager(env)
