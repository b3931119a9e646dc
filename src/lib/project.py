"""
Project configuration loader for docweave.

A project may carry a docweave.yaml next to its annotated sources:

    examples:
      web_root_url: https://example.org/examples
      package_header: "# Example from {source}"
    media:
      dir: media
    sources:
      pattern: "**/*.py"

Every key is optional; command-line options take precedence.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional


class ProjectConfigError(Exception):
    """Raised when the project configuration cannot be loaded"""
    pass


class ProjectConfig:
    """
    Configuration of one documentation project.

    Attributes:
        path: Configuration file, None when the project has none
        config: Parsed configuration mapping
    """

    def __init__(self, path: Optional[Path] = None):
        """
        Load the configuration file if given.

        Args:
            path: Path to a YAML configuration file

        Raises:
            ProjectConfigError: If the file is missing, unreadable or not a mapping
        """
        self.path = path
        self.config: Dict[str, Any] = {}

        if path is not None:
            if not path.exists():
                raise ProjectConfigError(f"Configuration file not found: {path}")
            self.config = self._config_load()

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse the YAML file"""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProjectConfigError(f"Failed to parse {self.path.name}: {e}")
        except OSError as e:
            raise ProjectConfigError(f"Failed to load {self.path.name}: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ProjectConfigError(f"{self.path.name} must contain a mapping")
        return config

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Supports nested keys with dot notation:
          project.config_get('examples.web_root_url')

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys: list[str] = key.split('.')
        value: Any = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def __repr__(self) -> str:
        return f"ProjectConfig(path='{self.path}')"


def projectConfig_find(inputdir: Path, filename: str) -> ProjectConfig:
    """
    Load the project configuration of an input directory.

    Args:
        inputdir: Directory holding the annotated sources
        filename: Configuration file name, relative to inputdir

    Returns:
        ProjectConfig, empty when the directory has no such file
    """
    candidate: Path = inputdir / filename
    if candidate.exists():
        return ProjectConfig(candidate)
    return ProjectConfig()
