# configcanon/core/exceptions.py

"""Custom exception hierarchy for the config canonicalizer.

This module defines the specific error types used throughout the application
to differentiate between configuration, initialization, parsing and input
errors.
"""


class CanonicalizationError(Exception):
    """Base exception for all application-specific errors."""

    pass


class ConfigurationError(CanonicalizationError):
    """Raised when the file-identity table or settings fail to load or validate."""

    pass


class InitializationError(CanonicalizationError):
    """Raised when the canonicalizer cannot be constructed."""

    pass


class ValidationError(CanonicalizationError):
    """Raised when input validation fails (e.g., oversized or non-text input)."""

    pass


class ParseError(CanonicalizationError):
    """Raised when a structured config payload cannot be parsed."""

    def __init__(self, config_format, cause: Exception):
        self.format = config_format
        self.cause = cause
        name = getattr(config_format, "value", config_format)
        super().__init__(f"File is not valid {name}: {cause}")


class UnknownFileIdentity(CanonicalizationError):
    """Raised when a filename matches no known config file."""

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"Unrecognized config file: {identity}")
