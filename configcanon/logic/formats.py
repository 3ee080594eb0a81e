# configcanon/logic/formats.py

"""Canonicalization strategies for each supported config format."""

import json
import re
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import json5
import yaml

from configcanon.core.definitions import Format, JSON_SEED_PREFIX, REDACTED
from configcanon.core.exceptions import ParseError
from configcanon.engine.placeholders import DecimalPlaceholders

logger = logging.getLogger(__name__)


class CoreSchemaLoader(yaml.SafeLoader):
    """SafeLoader limited to the YAML 1.2 core schema.

    PyYAML resolves YAML 1.1 scalars, so `on`, `yes`, `0644` and `12:30`
    would load as booleans or integers and be written back changed. Here
    they stay strings. Only decimal integers without leading zeros are
    integers, and floats need a dot.
    """

    yaml_implicit_resolvers: Dict[str, list] = {}


class CoreSchemaDumper(yaml.SafeDumper):
    """SafeDumper that quotes exactly what CoreSchemaLoader would not read back as a string."""

    yaml_implicit_resolvers: Dict[str, list] = {}


CORE_SCHEMA_RESOLVERS = [
    (
        "tag:yaml.org,2002:bool",
        re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
        list("tTfF"),
    ),
    (
        "tag:yaml.org,2002:int",
        re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$"),
        list("-+0123456789"),
    ),
    (
        "tag:yaml.org,2002:float",
        re.compile(
            r"^(?:[-+]?(?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?"
            r"|[-+]?\.(?:inf|Inf|INF)"
            r"|\.(?:nan|NaN|NAN))$"
        ),
        list("-+0123456789."),
    ),
    (
        "tag:yaml.org,2002:null",
        re.compile(r"^(?:~|null|Null|NULL|)$"),
        ["~", "n", "N", ""],
    ),
    ("tag:yaml.org,2002:merge", re.compile(r"^(?:<<)$"), ["<"]),
]

for _tag, _regexp, _first in CORE_SCHEMA_RESOLVERS:
    CoreSchemaLoader.add_implicit_resolver(_tag, _regexp, _first)
    CoreSchemaDumper.add_implicit_resolver(_tag, _regexp, _first)


def _sort_key(key: Any):
    return (str(key), type(key).__name__)


def _represent_sorted_set(dumper: CoreSchemaDumper, data: set) -> yaml.Node:
    # Set members are emitted in hash order unless sorted here
    members = {member: None for member in sorted(data, key=_sort_key)}
    return dumper.represent_mapping("tag:yaml.org,2002:set", members)


CoreSchemaDumper.add_representer(set, _represent_sorted_set)
CoreSchemaDumper.add_representer(frozenset, _represent_sorted_set)


class FormatLogic:
    """Utility methods shared by the format strategies."""

    LINE_BREAK = re.compile(r"\r?\n")

    @staticmethod
    def strip_comments(text: str) -> str:
        """Drops '#' comment lines and blank lines.

        A leading byte-order mark is removed with the surrounding whitespace.

        Args:
            text: Raw config text

        Returns:
            Kept lines, each followed by a single newline
        """
        kept = []

        for line in FormatLogic.LINE_BREAK.split(text.lstrip("\ufeff").strip()):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            kept.append(line + "\n")

        return "".join(kept)

    @staticmethod
    def sort_mappings(value: Any) -> Any:
        """Rebuilds a parsed YAML tree with every mapping's keys sorted.

        Non-string keys sort by their text form, then by type name, so the
        order stays total for mixed keys.
        """
        if isinstance(value, dict):
            return {
                key: FormatLogic.sort_mappings(value[key])
                for key in sorted(value, key=_sort_key)
            }
        if isinstance(value, list):
            return [FormatLogic.sort_mappings(item) for item in value]
        return value

    @staticmethod
    def redact_seeds(value: Any) -> Any:
        """Rebuilds a parsed JSON5 tree with sorted keys and redacted seeds."""
        if isinstance(value, dict):
            return {
                key: (
                    REDACTED
                    if key.startswith(JSON_SEED_PREFIX)
                    else FormatLogic.redact_seeds(value[key])
                )
                for key in sorted(value)
            }
        if isinstance(value, list):
            return [FormatLogic.redact_seeds(item) for item in value]
        return value


class FormatStrategy(ABC):
    """Base class for format-specific canonicalization."""

    format: Format

    @abstractmethod
    def canonicalize(self, text: str) -> str:
        """Reserializes comment-stripped config text deterministically.

        Args:
            text: Config text with comments and blank lines removed

        Returns:
            Canonical text

        Raises:
            ParseError: If the text is not valid for this format
        """
        pass


class PropertiesFormatter(FormatStrategy):
    """Java .properties files.

    Lines are sorted as whole strings, not parsed as key=value pairs.
    """

    format = Format.PROPERTIES

    def canonicalize(self, text: str) -> str:
        return "\n".join(sorted(line for line in text.split("\n") if line))


class YamlFormatter(FormatStrategy):
    """YAML files, reserialized with sorted keys and original decimals."""

    format = Format.YAML

    def canonicalize(self, text: str) -> str:
        placeholders = DecimalPlaceholders()
        protected = placeholders.protect(text)

        try:
            document = yaml.load(protected, Loader=CoreSchemaLoader)
        except yaml.YAMLError as e:
            raise ParseError(self.format, e) from e

        if document is None:
            return ""

        dumped = yaml.dump(
            FormatLogic.sort_mappings(document),
            Dumper=CoreSchemaDumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            width=float("inf"),
        )

        return placeholders.restore(dumped)


class Json5Formatter(FormatStrategy):
    """JSON and JSON5 files, reserialized as indented JSON."""

    format = Format.JSON5

    def canonicalize(self, text: str) -> str:
        try:
            document = json5.loads(text)
        except ValueError as e:
            raise ParseError(self.format, e) from e

        return json.dumps(
            FormatLogic.redact_seeds(document), indent=2, ensure_ascii=False
        )


class PassthroughFormatter(FormatStrategy):
    """TOML and HOCON-like .conf files.

    These are not parsed; only comment stripping and the text redaction
    rules apply. Stored hashes depend on this form.
    """

    def __init__(self, config_format: Format):
        self.format = config_format

    def canonicalize(self, text: str) -> str:
        return text


# Cache for formatter instances to avoid repeated construction
_formatter_cache: Dict[Format, FormatStrategy] = {}


def get_formatter(config_format: Format) -> Optional[FormatStrategy]:
    """Factory method to retrieve the strategy for a format.

    Strategies are stateless, so instances are shared.

    Args:
        config_format: Declared format of the config file

    Returns:
        FormatStrategy instance or None if the format is not supported
    """
    if config_format in _formatter_cache:
        return _formatter_cache[config_format]

    lookup = {
        Format.PROPERTIES: PropertiesFormatter,
        Format.YAML: YamlFormatter,
        Format.JSON5: Json5Formatter,
        Format.TOML: lambda: PassthroughFormatter(Format.TOML),
        Format.CONF: lambda: PassthroughFormatter(Format.CONF),
    }

    formatter_factory = lookup.get(config_format)

    if formatter_factory:
        instance = formatter_factory()
        _formatter_cache[config_format] = instance
        return instance

    logger.warning(f"No formatter found for format: {config_format}")
    return None
