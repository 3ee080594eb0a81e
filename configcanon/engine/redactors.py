# configcanon/engine/redactors.py

"""Text redaction rules applied to canonical config output."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional

from configcanon.core.definitions import Format
from configcanon.core.exceptions import ConfigurationError
from configcanon.core.loader import ConfigRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedactionRule:
    """A regex substitution scoped to some files and formats.

    Attributes:
        name: Rule identifier used in logs
        pattern: Compiled pattern matched against the reserialized text
        replacement: re.sub replacement template
        files: Canonical paths the rule applies to (empty for every file)
        count: Maximum replacements (0 replaces every match)
        exclude_formats: Formats the rule never applies to
    """

    name: str
    pattern: re.Pattern
    replacement: str
    files: FrozenSet[str] = frozenset()
    count: int = 0
    exclude_formats: FrozenSet[Format] = frozenset()

    def applies_to(self, location: Optional[str], config_format: Format) -> bool:
        if config_format in self.exclude_formats:
            return False
        if not self.files:
            return True
        return location in self.files

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text, count=self.count)


def build_rule(definition: Dict[str, Any]) -> RedactionRule:
    """Creates a RedactionRule from a configs.yaml entry.

    Raises:
        ConfigurationError: If the entry is incomplete or its regex is invalid.
    """
    try:
        name = definition["name"]
        pattern = re.compile(definition["regex"])
        exclude = frozenset(Format(f) for f in definition.get("exclude_formats", []))
        return RedactionRule(
            name=name,
            pattern=pattern,
            replacement=definition["replacement"],
            files=frozenset(definition.get("files", [])),
            count=int(definition.get("count", 0)),
            exclude_formats=exclude,
        )
    except (KeyError, TypeError, ValueError, re.error) as e:
        raise ConfigurationError(f"Invalid redaction rule {definition!r}: {e}") from e


def create_all_redactors(
    registry: Optional[ConfigRegistry] = None,
) -> List[RedactionRule]:
    """Create the ordered set of redaction rules from the file-identity table."""
    loader = registry or ConfigRegistry.get_instance()
    rules = [build_rule(definition) for definition in loader.redaction_rules()]

    logger.info(f"Initialized {len(rules)} redaction rules")
    return rules


def redact(
    text: str,
    rules: List[RedactionRule],
    location: Optional[str],
    config_format: Format,
) -> str:
    """Applies every matching rule to the text, in order."""
    for rule in rules:
        if rule.applies_to(location, config_format):
            text = rule.apply(text)
    return text
