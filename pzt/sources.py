"""Project options provider backed by a .pdd.yml file."""

import logging
from pathlib import Path

import yaml

from pzt.exceptions import ConfigError
from pzt.models import SourceConfig

logger = logging.getLogger("pzt.sources")


class Sources:
    """Reads format and alert options from the project's YAML file.

    The file is re-read on every call so edits are picked up between runs
    of a long-lived process.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def config(self) -> SourceConfig | None:
        """Return the parsed options, or None when the file is missing or empty.

        Raises:
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        if not self.path.exists():
            logger.debug("No project options at %s", self.path)
            return None

        try:
            with open(self.path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.path}: {e}") from e

        if data is None:
            return None
        if not isinstance(data, dict):
            raise ConfigError(f"{self.path} must be a YAML mapping, got {type(data).__name__}")

        return SourceConfig.from_mapping(data)
