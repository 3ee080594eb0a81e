"""Tests for the service entry points."""

import pytest

from configcanon.core.definitions import Format
from configcanon.core.exceptions import ParseError, UnknownFileIdentity, ValidationError
from configcanon.service import pipeline
from configcanon.service.pipeline import (
    CanonicalizerService,
    canonicalize,
    fingerprint,
    lookup_config,
)


def test_canonicalize_entry_point():
    """The module-level function uses the shared canonicalizer."""
    assert canonicalize("server.properties", "b=2\na=1\n#comment\n") == "a=1\nb=2"


def test_service_instance_is_shared():
    """The canonicalizer is built once."""
    assert CanonicalizerService.get_instance() is CanonicalizerService.get_instance()


def test_canonicalize_propagates_parse_errors():
    """Parse failures reach the caller."""
    with pytest.raises(ParseError):
        canonicalize("paper.yml", "a: b: c\n")


def test_canonicalize_propagates_unknown_identity():
    """Unknown identities reach the caller."""
    with pytest.raises(UnknownFileIdentity):
        canonicalize("readme.md", "# title\n")


def test_canonicalize_rejects_non_text():
    """Bytes are not accepted."""
    with pytest.raises(ValidationError):
        canonicalize("paper.yml", b"a: 1\n")


def test_canonicalize_rejects_oversized_input(monkeypatch):
    """Input above max_input_bytes is rejected."""
    monkeypatch.setattr(pipeline.settings, "max_input_bytes", 8)

    with pytest.raises(ValidationError, match="exceeds"):
        canonicalize("paper.yml", "motd: a long enough value\n")


def test_fingerprint_uses_configured_algorithms(monkeypatch):
    """Only the configured digests are computed."""
    monkeypatch.setattr(pipeline.settings, "digest_algorithms", ["sha512"])

    result = fingerprint("velocity.toml", 'config-version = "2.7"\nforwarding-secret = "abc"\n')

    assert list(result.digests) == ["sha512"]
    assert result.version_marker == 'config-version = "2.7"'
    assert 'forwarding-secret = "xxx"' in result.value


def test_lookup_config_success():
    """Uploaded files resolve through their aliases."""
    result = lookup_config("paper-global (1).yml", "# c\n_version: 29\nproxies:\n  velocity:\n    secret: ''\n")

    assert result.location == "config/paper-global.yml"
    assert result.format == Format.YAML
    assert result.value.startswith("_version: 29\n")
    assert "error" not in result.metadata
    assert result.metadata["identity"] == "paper-global (1).yml"
    assert len(result.digests["sha256"]) == 64


def test_lookup_config_requires_known_alias():
    """Files outside the table are reported as unmatched."""
    result = lookup_config("custom.yml", "a: 1\n")

    assert result.value == ""
    assert result.digests == {}
    assert result.metadata["status"] == "failed"
    assert result.metadata["error_type"] == "UnknownFileIdentity"


def test_lookup_config_reports_parse_errors():
    """Invalid content is reported without raising."""
    result = lookup_config("canvas-server.json5", "{broken")

    assert result.value == ""
    assert result.format == Format.JSON5
    assert result.metadata["error_type"] == "ParseError"
    assert "JSON5" in result.metadata["error"]


def test_lookup_config_reports_empty_input():
    """Empty uploads are reported without raising."""
    result = lookup_config("paper.yml", "")

    assert result.metadata == {"error": "Empty input provided", "status": "failed"}


def test_registry_path_setting_replaces_table(monkeypatch, write_table, fresh_service):
    """An alternate table is used when registry_path is set."""
    path = write_table(
        "configs:\n"
        "  custom.yml:\n"
        "    type: PAPER\n"
        "    format: YAML\n"
        "    aliases: [custom.yml]\n"
    )
    monkeypatch.setattr(pipeline.settings, "registry_path", path)

    result = lookup_config("custom.yml", "b: 1\na: 2\n")

    assert result.location == "custom.yml"
    assert result.value == "a: 2\nb: 1\n"
