"""Show the current configuration."""

from cloudsec.config_manager import ConfigManager
from cloudsec.output import OutputWriter


def show_config(config_manager: ConfigManager, writer: OutputWriter) -> None:
    config = config_manager.validate_config()
    writer.write(f"Current configuration ({config_manager.config_path}):")
    writer.write(ConfigManager.dump_config(config).rstrip("\n"))
