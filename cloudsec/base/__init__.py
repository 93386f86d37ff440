"""Abstract provider blueprint and core utilities.

Every secret backend inherits from :class:`ProviderBlueprint`.
Import it to type-hint your own code or to create custom providers.
"""

from .provider import ProviderBlueprint
from .models import Environment, CloudsecConfig, SecretMetadata, SecretVersion
from .supported_providers import existing_cloud_providers


__all__ = [
    "ProviderBlueprint",
    "Environment",
    "CloudsecConfig",
    "SecretMetadata",
    "SecretVersion",
    "existing_cloud_providers",
]
