# configcanon/service/pipeline.py

"""Main canonicalization service pipeline."""

import logging
import threading
from typing import Any, Optional

from configcanon.service.config import settings
from configcanon.engine.canonicalizer import ConfigCanonicalizer
from configcanon.core.domain import CanonicalConfig
from configcanon.core.loader import ConfigRegistry
from configcanon.core.exceptions import (
    InitializationError,
    ParseError,
    UnknownFileIdentity,
    ValidationError,
)

logger = logging.getLogger(__name__)


class CanonicalizerService:
    """Singleton service wrapper for the canonicalizer.

    Manages engine lifecycle and provides thread-safe access to
    the canonicalization functionality.
    """

    _instance: Optional[ConfigCanonicalizer] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> ConfigCanonicalizer:
        """Returns singleton canonicalizer instance.

        Returns:
            Initialized ConfigCanonicalizer

        Raises:
            InitializationError: If engine initialization fails
        """
        if cls._instance is None:
            with cls._lock:
                # Double-checked locking pattern
                if cls._instance is None:
                    try:
                        logger.info("Initializing canonicalizer")
                        if settings.registry_path:
                            registry = ConfigRegistry(settings.registry_path)
                        else:
                            registry = ConfigRegistry.get_instance()
                        cls._instance = ConfigCanonicalizer(registry)
                        logger.info("Canonicalizer initialized successfully")

                    except Exception as e:
                        logger.error("Failed to initialize canonicalizer", exc_info=True)
                        if isinstance(e, InitializationError):
                            raise
                        raise InitializationError(
                            "Canonicalizer initialization failed"
                        ) from e

        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drops the cached instance so the next call rebuilds it."""
        with cls._lock:
            cls._instance = None


def _validate_input(raw_text: Any) -> None:
    """Rejects non-text and oversized input.

    Raises:
        ValidationError: If the input cannot be canonicalized.
    """
    if not isinstance(raw_text, str):
        raise ValidationError(f"Invalid input type: {type(raw_text).__name__}")

    size = len(raw_text.encode("utf-8"))
    if size > settings.max_input_bytes:
        raise ValidationError(
            f"Input of {size} bytes exceeds limit of {settings.max_input_bytes}"
        )


def canonicalize(file_identity: str, raw_text: str) -> str:
    """Main entry point for config canonicalization.

    Args:
        file_identity: Canonical path or alias (e.g. 'paper-global.yml')
        raw_text: Untouched file content

    Returns:
        Canonical text

    Raises:
        ValidationError: If the input is not text or too large
        ParseError: If a YAML or JSON5 payload cannot be parsed
        UnknownFileIdentity: If the file identity cannot be resolved
    """
    _validate_input(raw_text)
    return CanonicalizerService.get_instance().canonicalize(file_identity, raw_text)


def fingerprint(file_identity: str, raw_text: str) -> CanonicalConfig:
    """Canonicalizes a config and computes its digests and version marker.

    Raises:
        ValidationError: If the input is not text or too large
        ParseError: If a YAML or JSON5 payload cannot be parsed
        UnknownFileIdentity: If the file identity cannot be resolved
    """
    _validate_input(raw_text)
    return CanonicalizerService.get_instance().process(
        file_identity, raw_text, settings.digest_algorithms
    )


def lookup_config(filename: str, raw_text: str) -> CanonicalConfig:
    """Fingerprints an uploaded config for matching against stored hashes.

    Only files matching a known alias are accepted.

    Args:
        filename: Name of the uploaded file
        raw_text: Uploaded file content

    Returns:
        CanonicalConfig ready for lookup.
        On failure, returns a result with no value or digests and the error
        in its metadata, so the caller can report the file as unmatched.
    """
    if not raw_text:
        logger.warning("Empty config provided for lookup")
        return CanonicalConfig(
            location=None,
            format=None,
            value="",
            metadata={"error": "Empty input provided", "status": "failed"},
        )

    try:
        _validate_input(raw_text)
        engine = CanonicalizerService.get_instance()
        config_file = engine.registry.resolve(filename)

        logger.info(
            "Starting config lookup",
            extra={"upload_name": filename, "location": config_file.location},
        )

        result = engine.process(
            config_file.location, raw_text, settings.digest_algorithms
        )
        result.metadata["identity"] = filename
        return result

    except (UnknownFileIdentity, ParseError, ValidationError) as e:
        logger.warning(
            f"Config rejected: {type(e).__name__}",
            extra={"upload_name": filename},
        )
        return CanonicalConfig(
            location=None,
            format=getattr(e, "format", None),
            value="",
            metadata={
                "error": str(e),
                "status": "failed",
                "error_type": type(e).__name__,
            },
        )

    except InitializationError as e:
        # Known error, log with context but hide internal details in response
        logger.error(
            f"Known error during lookup: {type(e).__name__}",
            exc_info=True,
            extra={"upload_name": filename},
        )
        return CanonicalConfig(
            location=None,
            format=None,
            value="",
            metadata={
                "error": "The canonicalization service encountered a processing error.",
                "status": "failed",
                "error_type": type(e).__name__,
            },
        )
