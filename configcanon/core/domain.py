# configcanon/core/domain.py

"""Domain models for config file identities and canonicalization results."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from configcanon.core.definitions import Format, ServerType


@dataclass(frozen=True)
class ConfigFile:
    """A logical config file known to the system.

    Attributes:
        location: Canonical path (e.g. config/paper-global.yml)
        server_type: Server family the file belongs to
        format: Declared format driving canonicalization
        aliases: Alternate paths/filenames referring to the same file
    """

    location: str
    server_type: ServerType
    format: Format
    aliases: Tuple[str, ...] = ()


@dataclass
class CanonicalConfig:
    """Result object returned by the canonicalization service.

    Attributes:
        location: Canonical path, or None if only the suffix was recognized
        format: Format used to canonicalize the text
        value: Canonical text (empty on failure)
        version_marker: Config version hint such as "config-version: 29"
        digests: Hex digests of the canonical text keyed by algorithm
        metadata: Additional processing information
    """

    location: Optional[str]
    format: Optional[Format]
    value: str
    version_marker: Optional[str] = None
    digests: Dict[str, str] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
