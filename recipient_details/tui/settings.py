"""TUI project settings loader.

Reads project-specific configuration from .recipient-details.yaml in the
project root. Command-line flags override values from the file.

Example .recipient-details.yaml:
    form:
      output_format: json        # yaml (default) or json
      show_help: true            # Show the help panel on start
      log_file: ./form.log       # Write logs here while the TUI runs
      json_logs: false
      verbose: false
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from recipient_details.lib.errors import ConfigurationError
from recipient_details.lib.logging import get_form_logger

logger = get_form_logger(__name__)

SETTINGS_FILENAME = ".recipient-details.yaml"
OUTPUT_FORMATS = ("yaml", "json")
BOOL_KEYS = ("show_help", "json_logs", "verbose")


@dataclass
class FormSettings:
    """Form configuration settings."""

    # How the submitted payload is printed on exit
    output_format: str = "yaml"

    # Whether the help panel is visible when the screen opens
    show_help: bool = True

    # Log destination while the full-screen app runs (None disables logging)
    log_file: str | None = None

    json_logs: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output_format '{self.output_format}'",
                key="output_format",
                suggestion=f"Use one of: {', '.join(OUTPUT_FORMATS)}",
            )

    @classmethod
    def load(cls, project_root: Path | None = None, config_path: Path | None = None) -> "FormSettings":
        """Load settings from .recipient-details.yaml.

        Args:
            project_root: Project root directory. Defaults to cwd.
            config_path: Explicit settings file, overrides project_root.

        Returns:
            FormSettings with values from the config file or defaults.

        Raises:
            ConfigurationError: If the file is readable but holds invalid values.
        """
        if config_path is None:
            root = project_root or Path.cwd()
            config_path = root / SETTINGS_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", config_path, e)
            return cls()

        if not isinstance(config, dict):
            logger.warning("Ignoring settings file %s: top level is not a mapping", config_path)
            return cls()

        form_config = config.get("form")
        if form_config is None:
            form_config = {}
        if not isinstance(form_config, dict):
            raise ConfigurationError(
                "'form' must be a mapping",
                config_path=str(config_path),
                key="form",
            )

        defaults = cls()
        output_format = str(form_config.get("output_format", defaults.output_format)).lower()
        if output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output_format '{output_format}'",
                config_path=str(config_path),
                key="output_format",
                suggestion=f"Use one of: {', '.join(OUTPUT_FORMATS)}",
            )

        flags: dict[str, bool] = {}
        for key in BOOL_KEYS:
            value = form_config.get(key, getattr(defaults, key))
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"'{key}' must be true or false, got {value!r}",
                    config_path=str(config_path),
                    key=key,
                )
            flags[key] = value

        log_file = form_config.get("log_file", defaults.log_file)
        return cls(
            output_format=output_format,
            log_file=str(log_file) if log_file else None,
            **flags,
        )


# Global settings instance (loaded on first access)
_settings: FormSettings | None = None


def get_settings(reload: bool = False) -> FormSettings:
    """Get the global form settings.

    Args:
        reload: Force reload from config file.
    """
    global _settings
    if _settings is None or reload:
        _settings = FormSettings.load()
    return _settings
