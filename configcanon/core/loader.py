# configcanon/core/loader.py

"""File-identity table loader for the canonicalizer."""

import re
import threading
import yaml
import logging
from pathlib import Path
from typing import Dict, List, Any, Optional

from configcanon.core.definitions import Format, ServerType
from configcanon.core.domain import ConfigFile
from configcanon.core.exceptions import ConfigurationError, UnknownFileIdentity

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "configs.yaml"

# Browsers rename repeated downloads to "paper (1).yml"
DUPLICATE_MARKER = re.compile(r"\s*\(\d+\)")


def normalize_filename(filename: str) -> str:
    """Normalizes an observed filename before alias lookup."""
    name = filename.replace("\\", "/")
    return DUPLICATE_MARKER.sub("", name).strip()


class ConfigRegistry:
    """Loader for the known config files and their redaction rules.

    The default instance reads configs.yaml from the module directory once
    and is shared for the application lifecycle. Lookups are read-only and
    safe for concurrent requests.
    """

    _instance: Optional["ConfigRegistry"] = None
    _lock = threading.Lock()

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._files: Dict[str, ConfigFile] = {}
        self._aliases: Dict[str, ConfigFile] = {}
        self._redactions: List[Dict[str, Any]] = []
        self._load_config()

    def _load_config(self) -> None:
        """Loads and indexes the file-identity table.

        Raises:
            ConfigurationError: If file is missing, invalid, or inconsistent.
        """
        try:
            if not self.config_path.exists():
                error_msg = f"Configuration file not found: {self.config_path}"
                logger.error(error_msg)
                raise ConfigurationError(error_msg)

            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)

            if not config or not isinstance(config, dict):
                raise ConfigurationError("Configuration file is empty or invalid")

            self._validate_config(config)

            for location, entry in config["configs"].items():
                self._register(self._build_file(str(location), entry))

            self._redactions = list(config.get("redactions") or [])

            logger.info(
                "Configuration loaded successfully",
                extra={
                    "config_path": str(self.config_path),
                    "file_count": len(self._files),
                    "alias_count": len(self._aliases),
                    "redaction_count": len(self._redactions),
                },
            )

        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}", exc_info=True)
            raise ConfigurationError(
                f"Failed to parse {self.config_path.name}: {e}"
            ) from e
        except Exception as e:
            if isinstance(e, ConfigurationError):
                raise
            logger.error(f"Configuration loading failed: {e}", exc_info=True)
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validates required configuration sections exist.

        Raises:
            ConfigurationError: If required sections are missing.
        """
        required_sections = ["configs"]
        missing = [s for s in required_sections if s not in config]

        if missing:
            error_msg = f"Missing required configuration sections: {missing}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        if not isinstance(config["configs"], dict):
            raise ConfigurationError("Section 'configs' must be a mapping")

    @staticmethod
    def _build_file(location: str, entry: Dict[str, Any]) -> ConfigFile:
        try:
            server_type = ServerType(entry["type"])
            fmt = Format(entry["format"])
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid entry for {location}: {e}") from e

        aliases = tuple(str(a) for a in entry.get("aliases") or ())
        return ConfigFile(
            location=location, server_type=server_type, format=fmt, aliases=aliases
        )

    def _register(self, config_file: ConfigFile) -> None:
        """Indexes a config file by its location and aliases.

        Raises:
            ConfigurationError: If a name already refers to another file.
        """
        names = {config_file.location, *config_file.aliases}

        for name in sorted(names):
            existing = self._aliases.get(name)
            if existing is not None and existing.location != config_file.location:
                error_msg = (
                    f"Alias '{name}' of {config_file.location} "
                    f"already refers to {existing.location}"
                )
                logger.error(error_msg)
                raise ConfigurationError(error_msg)
            self._aliases[name] = config_file

        self._files[config_file.location] = config_file

    @classmethod
    def get_instance(cls) -> "ConfigRegistry":
        """Returns the shared registry built from the packaged table."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get(self, location: str) -> Optional[ConfigFile]:
        """Returns the config file with this canonical path, if any."""
        return self._files.get(location)

    def by_alias(self, filename: str) -> Optional[ConfigFile]:
        """Resolves an observed filename to at most one known config file.

        The full normalized path is tried first, then leading directories
        are dropped one at a time.

        Args:
            filename: Observed filename or path (e.g. '/srv/config/paper-global.yml')

        Returns:
            Matching ConfigFile, or None if no alias matches
        """
        name = normalize_filename(filename)
        parts = [p for p in name.split("/") if p not in ("", ".")]

        for start in range(len(parts)):
            candidate = "/".join(parts[start:])
            config_file = self._aliases.get(candidate)
            if config_file is not None:
                return config_file

        return None

    def resolve(self, identity: str) -> ConfigFile:
        """Resolves a file identity or raises UnknownFileIdentity."""
        config_file = self.by_alias(identity)
        if config_file is None:
            raise UnknownFileIdentity(identity)
        return config_file

    def files(self) -> List[ConfigFile]:
        """Returns every known config file in table order."""
        return list(self._files.values())

    def redaction_rules(self) -> List[Dict[str, Any]]:
        """Returns raw redaction rule definitions in table order."""
        return list(self._redactions)
