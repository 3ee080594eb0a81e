"""Tests for redaction rules and digests."""

import pytest

from configcanon.core.definitions import Format
from configcanon.core.exceptions import ConfigurationError
from configcanon.engine.digests import compute_digests
from configcanon.engine.redactors import build_rule, create_all_redactors, redact


def test_packaged_rules_load_in_order(registry):
    """The packaged table defines file-specific rules before the seed rules."""
    names = [rule.name for rule in create_all_redactors(registry)]

    assert names == [
        "velocity_forwarding_secret",
        "bungeecord_stats_uuid",
        "bungeecord_stats",
        "leaves_server_id",
        "seed_assignment",
        "seed_mapping",
    ]


def test_rule_scoping_by_file_and_format():
    """Rules apply only to their files and not to excluded formats."""
    rule = build_rule(
        {
            "name": "demo",
            "regex": "token: (.*)",
            "replacement": "token: xxx",
            "files": ["demo.yml"],
            "exclude_formats": ["JSON5"],
        }
    )

    assert rule.applies_to("demo.yml", Format.YAML)
    assert not rule.applies_to("other.yml", Format.YAML)
    assert not rule.applies_to("demo.yml", Format.JSON5)


def test_rule_count_limits_replacements():
    """count=1 replaces only the first match."""
    rule = build_rule(
        {"name": "first", "regex": "stats: (.*)", "replacement": "stats: xxx", "count": 1}
    )

    assert rule.apply("stats: a\nstats: b\n") == "stats: xxx\nstats: b\n"


def test_seed_rules_keep_the_key_suffix(registry):
    """Seed rules redact the value of every seed-<suffix> line."""
    rules = create_all_redactors(registry)
    text = "seed-a=1\nseed-b: 2\nlevel-seed=3\n"

    assert redact(text, rules, None, Format.PROPERTIES) == "seed-a=xxx\nseed-b: xxx\nlevel-seed=3\n"


def test_seed_rules_skip_json5(registry):
    """JSON5 output is left to the structural seed redaction."""
    rules = create_all_redactors(registry)
    text = '{\n  "seed-level": "xxx",\n  "other": 1\n}'

    assert redact(text, rules, None, Format.JSON5) == text


@pytest.mark.parametrize(
    "definition",
    [
        {"name": "bad", "regex": "(unclosed", "replacement": "x"},
        {"name": "missing-replacement", "regex": "a"},
        {"name": "bad-format", "regex": "a", "replacement": "b", "exclude_formats": ["INI"]},
    ],
)
def test_invalid_rules_are_rejected(definition):
    """Broken rule definitions raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        build_rule(definition)


def test_compute_digests_known_values():
    """Digests match the reference values for 'abc'."""
    digests = compute_digests("abc")

    assert list(digests) == ["sha1", "sha224", "sha256", "sha384", "sha512", "md5"]
    assert digests["sha1"] == "a9993e364706816aba3e25717850c26c9cd0d89d"
    assert digests["sha256"] == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert digests["md5"] == "900150983cd24fb0d6963f7d28e17f72"


def test_compute_digests_subset_and_unicode():
    """Only the requested algorithms are computed, over UTF-8 bytes."""
    digests = compute_digests("motd: §aHello", ["sha256"])

    assert list(digests) == ["sha256"]
    assert len(digests["sha256"]) == 64


def test_compute_digests_rejects_unknown_algorithm():
    """Unsupported algorithms raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        compute_digests("abc", ["sha3_256"])
