# configcanon/core/definitions.py

"""Enumerations and constants for Minecraft server config canonicalization."""

from enum import Enum
from typing import Optional


class Format(str, Enum):
    """Config file formats, each selecting one canonicalization strategy."""

    PROPERTIES = "PROPERTIES"
    YAML = "YAML"
    CONF = "CONF"
    TOML = "TOML"
    JSON5 = "JSON5"

    @classmethod
    def from_filename(cls, filename: str) -> Optional["Format"]:
        """Guesses the format from a filename suffix.

        Args:
            filename: Observed filename or path

        Returns:
            Matching Format, or None if the suffix is not recognized
        """
        name = filename.lower()
        for suffix, fmt in _SUFFIXES:
            if name.endswith(suffix):
                return fmt
        return None


_SUFFIXES = (
    (".properties", Format.PROPERTIES),
    (".yml", Format.YAML),
    (".yaml", Format.YAML),
    (".conf", Format.CONF),
    (".toml", Format.TOML),
    (".json5", Format.JSON5),
    (".json", Format.JSON5),
)


class ServerType(str, Enum):
    """Server software families a config file can belong to."""

    VANILLA = "VANILLA"
    PAPER = "PAPER"
    PUFFERFISH = "PUFFERFISH"
    SPIGOT = "SPIGOT"
    FOLIA = "FOLIA"
    PURPUR = "PURPUR"
    WATERFALL = "WATERFALL"
    VELOCITY = "VELOCITY"
    FABRIC = "FABRIC"
    BUNGEECORD = "BUNGEECORD"
    QUILT = "QUILT"
    FORGE = "FORGE"
    NEOFORGE = "NEOFORGE"
    MOHIST = "MOHIST"
    ARCLIGHT = "ARCLIGHT"
    SPONGE = "SPONGE"
    LEAVES = "LEAVES"
    CANVAS = "CANVAS"
    ASPAPER = "ASPAPER"
    LEGACY_FABRIC = "LEGACY_FABRIC"
    LOOHP_LIMBO = "LOOHP_LIMBO"
    NANOLIMBO = "NANOLIMBO"
    DIVINEMC = "DIVINEMC"
    MAGMA = "MAGMA"
    LEAF = "LEAF"
    VELOCITY_CTD = "VELOCITY_CTD"
    YOUER = "YOUER"


# Value written in place of secrets and world seeds
REDACTED = "xxx"

# JSON5 object keys with this prefix have their value redacted
JSON_SEED_PREFIX = "seed"

# Digests stored alongside each canonical config value
DIGEST_ALGORITHMS = ("sha1", "sha224", "sha256", "sha384", "sha512", "md5")
