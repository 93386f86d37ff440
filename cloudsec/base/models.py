"""
Pydantic models for the Cloudsec configuration file and provider listings.

YAML keys are camelCase (``projectId``, ``defaultEnvironment``); Python
attributes are snake_case. Environments are frozen once loaded.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .supported_providers import existing_cloud_providers


class Environment(BaseModel):
    """Named binding of a cloud project, region and secret-name prefix."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str = Field(description="Unique, user-chosen environment name")
    provider: existing_cloud_providers = Field(description="Cloud provider kind")
    project_id: str = Field(alias="projectId", description="Cloud project ID")
    region: str = Field(description="Cloud region")
    prefix: str | None = Field(default=None, description="Secret name prefix")
    labels: dict[str, str] = Field(default_factory=dict, description="Labels for created secrets")
    credentials_path: str | None = Field(
        default=None,
        alias="credentialsPath",
        description="Path to a service account JSON key file",
    )

    @field_validator("name", "project_id", "region")
    @classmethod
    def not_blank(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return value.strip()


class CloudsecConfig(BaseModel):
    """Contents of ``.cloudsec.yaml``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    environments: list[Environment]
    default_environment: str | None = Field(default=None, alias="defaultEnvironment")
    default_project: str | None = Field(default=None, alias="defaultProject")
    default_region: str | None = Field(default=None, alias="defaultRegion")

    @model_validator(mode="after")
    def check_environment_names(self) -> CloudsecConfig:
        """Environment names are unique and the default names one of them."""
        seen: set[str] = set()
        for env in self.environments:
            if env.name in seen:
                raise ValueError(f"Duplicate environment name: {env.name}")
            seen.add(env.name)
        if self.default_environment is not None and self.default_environment not in seen:
            raise ValueError(
                f"defaultEnvironment '{self.default_environment}' is not a configured environment"
            )
        return self

    def to_yaml_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class SecretMetadata(BaseModel):
    """Provider-native description of one secret resource."""

    name: str
    create_time: str = ""
    update_time: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    version_count: int | None = None
    latest_version: str | None = None


class SecretVersion(BaseModel):
    """One immutable revision of a secret resource's payload."""

    name: str
    create_time: str = ""
    state: str = ""
    version: str = ""


__all__ = [
    "Environment",
    "CloudsecConfig",
    "SecretMetadata",
    "SecretVersion",
]
