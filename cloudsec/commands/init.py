"""Interactive creation of ``.cloudsec.yaml``."""

from __future__ import annotations

from cloudsec.base import CloudsecConfig, Environment
from cloudsec.base.supported_providers import PROVIDER_DISPLAY_NAMES
from cloudsec.config_manager import DEFAULT_CONFIG_PATH, ConfigManager
from cloudsec.factory import PROVIDER_REGISTRY
from cloudsec.output import OutputWriter
from cloudsec.prompts import Prompter

PROVIDER_CHOICES = [(kind, PROVIDER_DISPLAY_NAMES[kind]) for kind in PROVIDER_REGISTRY]
# Listed so users can see them, but not selectable.
DISABLED_PROVIDERS = ("aws",)
DEFAULT_REGIONS = {"gcp": "us-central1", "aws": "us-east-1"}


class InitCommand:
    """Walks the user through defaults and environments, then saves the config."""

    def __init__(
        self,
        config_manager: ConfigManager,
        writer: OutputWriter | None = None,
        prompter: Prompter | None = None,
    ) -> None:
        self.config_manager = config_manager
        self.writer = writer or OutputWriter()
        self.prompter = prompter or Prompter()

    def _provider(self, message: str, default: str) -> str:
        return self.prompter.choice(
            message, PROVIDER_CHOICES, default=default, disabled=DISABLED_PROVIDERS
        )

    def _environment(self, defaults: dict[str, str]) -> Environment:
        name = self.prompter.text("Environment name")
        provider = self._provider("Cloud provider for this environment", defaults["provider"])
        project_id = self.prompter.text(
            "Project ID for this environment", default=defaults["project"]
        )
        region = self.prompter.text("Region for this environment", default=defaults["region"])
        prefix = self.prompter.text(
            "Secret name prefix (optional)", default=f"{name}-", required=False
        )
        return Environment(
            name=name,
            provider=provider,
            project_id=project_id,
            region=region,
            prefix=prefix or None,
            labels={"environment": name, "managed_by": "cloudsec"},
        )

    def execute(self, force: bool = False) -> None:
        if self.config_manager.config_exists() and not force:
            self.writer.write("Configuration file already exists. Use --force to overwrite.")
            return

        self.writer.write("Initializing cloudsec configuration...\n")
        provider = self._provider("Default cloud provider", "gcp")
        project = self.prompter.text("Default project ID")
        region = self.prompter.text("Default region", default=DEFAULT_REGIONS[provider])
        current = self.config_manager.config_path
        config_path = self.prompter.text(
            "Configuration file path",
            default=DEFAULT_CONFIG_PATH if current.name == DEFAULT_CONFIG_PATH else str(current),
        )

        defaults = {"provider": provider, "project": project, "region": region}
        environments: list[Environment] = []
        while True:
            environment = self._environment(defaults)
            if any(env.name == environment.name for env in environments):
                self.writer.error(f"Environment '{environment.name}' already added")
            else:
                environments.append(environment)
            if not self.prompter.confirm("Add another environment?", default=False):
                break

        config = CloudsecConfig(
            environments=environments,
            default_environment=environments[0].name,
            default_project=project,
            default_region=region,
        )
        target = ConfigManager(config_path)
        target.save_config(config)

        self.writer.write("\nConfiguration created successfully!")
        self.writer.write(f"Configuration saved to: {target.config_path}")
        self.writer.write("\nNext steps:")
        self.writer.write("1. Update the configuration file with your actual project IDs")
        self.writer.write("2. Ensure you have the necessary GCP permissions")
        self.writer.write("3. Run `cloudsec list` to test the connection")
