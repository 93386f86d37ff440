"""
Cloudsec exception hierarchy.

Every failure surfaced by the CLI inherits from :class:`CloudsecError`.
Provider-side failures share :class:`ProviderError` so callers can tell a
transport problem apart from bad input or a broken config file.
"""


# ── Base ──────────────────────────────────────────────────────────────
class CloudsecError(Exception):
    """Root exception for all Cloudsec errors."""


# ── Configuration ─────────────────────────────────────────────────────
class ConfigNotFoundError(CloudsecError):
    """Configuration file does not exist."""


class InvalidInputError(CloudsecError):
    """User-supplied input (arguments, files, config values) is malformed."""


class InvalidConfigError(InvalidInputError):
    """Configuration file could not be parsed or failed validation."""


class EnvironmentNotFoundError(CloudsecError):
    """Requested environment is not defined in the configuration."""


class UnsupportedProviderError(CloudsecError):
    """No provider implementation is registered for the environment's kind."""


# ── Provider ──────────────────────────────────────────────────────────
class ProviderError(CloudsecError):
    """Base exception for cloud provider operations."""


class SecretNotFoundError(ProviderError):
    """Secret resource, version, or logical key not found."""


class ProviderNotImplementedError(ProviderError):
    """Provider is selectable but has no working implementation."""


class ConnectionTestError(ProviderError):
    """Pre-flight connection test against the provider failed."""


# ── Secret blob ───────────────────────────────────────────────────────
class CorruptBlobError(CloudsecError):
    """Stored secret blob is not a JSON object of string values."""
