# configcanon/engine/canonicalizer.py

"""Config canonicalization engine."""

import logging
from typing import Iterable, List, Optional, Tuple

from configcanon.core.definitions import DIGEST_ALGORITHMS, Format
from configcanon.core.domain import CanonicalConfig
from configcanon.core.exceptions import (
    InitializationError,
    ParseError,
    UnknownFileIdentity,
)
from configcanon.core.loader import ConfigRegistry
from configcanon.engine.digests import compute_digests
from configcanon.engine.redactors import RedactionRule, create_all_redactors, redact
from configcanon.logic.formats import FormatLogic, get_formatter
from configcanon.logic.markers import extract_version_marker

logger = logging.getLogger(__name__)


class ConfigCanonicalizer:
    """Turns raw server config text into canonical, redacted text.

    Holds the file-identity table and the compiled redaction rules. Both
    are read-only after construction, so one instance can serve concurrent
    requests; every call keeps its working state on its own stack.
    """

    def __init__(self, registry: Optional[ConfigRegistry] = None) -> None:
        """Initialize canonicalizer.

        Args:
            registry: File-identity table (the packaged one by default)

        Raises:
            InitializationError: If the table or rules cannot be loaded.
        """
        try:
            self.registry = registry or ConfigRegistry.get_instance()
            self._rules: List[RedactionRule] = create_all_redactors(self.registry)
        except Exception as e:
            logger.error("Canonicalizer initialization failed", exc_info=True)
            raise InitializationError("Failed to initialize canonicalizer") from e

        logger.info(
            "Canonicalizer initialized",
            extra={
                "file_count": len(self.registry.files()),
                "rule_count": len(self._rules),
            },
        )

    def resolve(self, file_identity: str) -> Tuple[Optional[str], Format]:
        """Finds the canonical path and format for a file identity.

        Unknown names fall back to their filename suffix, in which case only
        the global redaction rules apply.

        Raises:
            UnknownFileIdentity: If neither an alias nor the suffix matches.
        """
        config_file = self.registry.by_alias(file_identity)
        if config_file is not None:
            return config_file.location, config_file.format

        config_format = Format.from_filename(file_identity)
        if config_format is None:
            raise UnknownFileIdentity(file_identity)

        logger.debug(
            "No alias matched, using suffix format",
            extra={"identity": file_identity, "format": config_format.value},
        )
        return None, config_format

    def canonicalize(self, file_identity: str, raw_text: str) -> str:
        """Produces the canonical form of a config file.

        Args:
            file_identity: Canonical path or alias of the file
            raw_text: Untouched file content

        Returns:
            Canonical text

        Raises:
            ParseError: If a YAML or JSON5 payload cannot be parsed
            UnknownFileIdentity: If the file identity cannot be resolved
        """
        location, config_format = self.resolve(file_identity)
        return self._canonicalize(location, config_format, raw_text)

    def _canonicalize(
        self, location: Optional[str], config_format: Format, raw_text: str
    ) -> str:
        formatter = get_formatter(config_format)
        stripped = FormatLogic.strip_comments(raw_text)
        value = formatter.canonicalize(stripped)
        return redact(value, self._rules, location, config_format)

    def process(
        self,
        file_identity: str,
        raw_text: str,
        algorithms: Iterable[str] = DIGEST_ALGORITHMS,
    ) -> CanonicalConfig:
        """Canonicalizes a config file and fingerprints the result.

        Args:
            file_identity: Canonical path or alias of the file
            raw_text: Untouched file content
            algorithms: Digest algorithms to compute

        Returns:
            CanonicalConfig with canonical text, digests and version marker
        """
        location, config_format = self.resolve(file_identity)

        try:
            value = self._canonicalize(location, config_format, raw_text)
        except ParseError:
            logger.warning(
                "Config failed to parse",
                extra={"location": location, "format": config_format.value},
            )
            raise

        marker = extract_version_marker(
            config_format, FormatLogic.strip_comments(raw_text), location
        )
        digests = compute_digests(value, algorithms)

        logger.info(
            "Canonicalization completed",
            extra={
                "location": location,
                "format": config_format.value,
                "text_length": len(raw_text),
                "canonical_length": len(value),
            },
        )

        return CanonicalConfig(
            location=location,
            format=config_format,
            value=value,
            version_marker=marker,
            digests=digests,
            metadata={"identity": file_identity, "resolved": location is not None},
        )
