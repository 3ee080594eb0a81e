# configcanon/engine/placeholders.py

"""Decimal literal protection for YAML reserialization."""

import logging
import re
from typing import Dict, Any

logger = logging.getLogger(__name__)

QUOTED_DECIMAL = re.compile(r": '([-+]?[0-9]*\.[0-9]+)'")
UNQUOTED_DECIMAL = re.compile(r": ([-+]?[0-9]*\.[0-9]+)(\s|$)")


class DecimalPlaceholders:
    """Call-scoped storage for decimal literals swapped out of a YAML text.

    A YAML round trip re-spells `1.50` as `1.5` and may change the quoting
    of `'0.5'`. Swapping each literal for a
    unique token before parsing and back after dumping keeps the author's
    exact spelling while the structure is still sorted. Create one instance
    per canonicalization call.
    """

    def __init__(self):
        self.quoted: Dict[str, str] = {}
        self.unquoted: Dict[str, str] = {}

    def protect(self, text: str) -> str:
        """Replaces quoted, then unquoted, mapping-value decimals with tokens."""

        def _quoted(match: re.Match) -> str:
            placeholder = f"__QUOTED_DECIMAL_{len(self.quoted)}__"
            self.quoted[placeholder] = match.group(1)
            return f": {placeholder}"

        def _unquoted(match: re.Match) -> str:
            placeholder = f"__UNQUOTED_DECIMAL_{len(self.unquoted)}__"
            self.unquoted[placeholder] = match.group(1)
            return f": {placeholder}{match.group(2)}"

        text = QUOTED_DECIMAL.sub(_quoted, text)
        text = UNQUOTED_DECIMAL.sub(_unquoted, text)

        if self.quoted or self.unquoted:
            logger.debug("Protected decimal literals", extra=self.get_summary())

        return text

    def restore(self, text: str) -> str:
        """Puts the original literals back in place of their tokens."""
        for placeholder, value in self.quoted.items():
            text = text.replace(placeholder, f"'{value}'")

        for placeholder, value in self.unquoted.items():
            text = text.replace(placeholder, value)

        return text

    def get_summary(self) -> Dict[str, Any]:
        """Returns placeholder counts for logging and debugging."""
        return {
            "quoted_count": len(self.quoted),
            "unquoted_count": len(self.unquoted),
        }

    def __repr__(self):
        return (
            f"<DecimalPlaceholders "
            f"quoted={len(self.quoted)} "
            f"unquoted={len(self.unquoted)}>"
        )
