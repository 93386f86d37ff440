"""Secret name resolution.

A logical name is namespaced by the environment prefix unless it already
carries it. Resolution is idempotent: a resolved name resolves to itself.
A name that merely happens to start with the prefix is never re-prefixed.
"""

from __future__ import annotations

from .models import Environment

BLOB_SECRET_ID = "secrets"


def resolve_secret_id(name: str, prefix: str | None) -> str:
    """Return the provider-side secret id for *name* under *prefix*."""
    if not prefix or name.startswith(prefix):
        return name
    return f"{prefix}{name}"


def project_path(project_id: str) -> str:
    return f"projects/{project_id}"


def secret_path(project_id: str, name: str, prefix: str | None = None) -> str:
    """Fully-qualified resource path ``projects/<p>/secrets/<id>``."""
    return f"{project_path(project_id)}/secrets/{resolve_secret_id(name, prefix)}"


def blob_secret_name(environment: Environment) -> str:
    """Name of the resource holding the environment's secret blob."""
    return f"{environment.prefix or ''}{BLOB_SECRET_ID}"


def short_name(resource_name: str) -> str:
    """Last path segment of a resource name (``.../versions/3`` -> ``3``)."""
    return resource_name.rsplit("/", 1)[-1]
