"""Provider factory.

Provides :func:`create_provider`, the single entry-point for turning an
:class:`~cloudsec.base.Environment` into a provider instance. Dispatch is
keyed on ``environment.provider``.
"""

from cloudsec.base import ProviderBlueprint, Environment
from cloudsec.base.exceptions import UnsupportedProviderError
from cloudsec.aws.provider import AWSProvider
from cloudsec.gcp.provider import GCPProvider


# Provider registry: provider kind -> implementation
PROVIDER_REGISTRY: dict[str, type[ProviderBlueprint]] = {
    "gcp": GCPProvider,
    "aws": AWSProvider,
}


def create_provider(environment: Environment) -> ProviderBlueprint:
    """
    Create the provider implementation for an environment.
    Args:
        environment: The environment whose ``provider`` selects the backend.
    Returns:
        A provider bound to the environment.
    Raises:
        UnsupportedProviderError: If no implementation is registered for the provider.
    """
    provider_class = PROVIDER_REGISTRY.get(environment.provider)
    if provider_class is None:
        supported = ", ".join(f"'{kind}'" for kind in PROVIDER_REGISTRY)
        raise UnsupportedProviderError(
            f"Unsupported provider: {environment.provider}. Supported providers are: {supported}"
        )
    return provider_class(environment)
