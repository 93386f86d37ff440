"""Cloudsec — environment-scoped secrets on cloud secret managers.

Each environment's secrets are kept as one JSON object in a single
provider secret named ``<prefix>secrets``::

    from cloudsec import SecretsManager
    from cloudsec.base import Environment

    env = Environment(name="dev", provider="gcp", projectId="my-proj", region="us-central1")
    store = SecretsManager(env)
"""

__version__ = "1.0.0"

from .base import ProviderBlueprint, Environment
from .factory import create_provider
from .secrets_manager import SecretsManager

__all__ = [
    "ProviderBlueprint",
    "Environment",
    "SecretsManager",
    "create_provider",
    "__version__",
]
