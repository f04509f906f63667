"""Unit tests for YAML/environment configuration loader behavior."""

from __future__ import annotations

from pathlib import Path

import pytest

from signwash.config import ConfigLoader, SanitizerConfig
from signwash.errors import ConfigError


def test_config_loader_from_yaml_loads_valid_config_and_normalizes_values(
    tmp_path: Path,
) -> None:
    """YAML loader should parse valid payloads and normalize typed/blank values."""

    config_path = tmp_path / "signwash.yml"
    config_path.write_text(
        """
canonical_marker: "¤"
malformed_line_policy: " RAISE "
text_encoding: " latin-1 "
serialize_replacements: " no "
log_level: " debug "
""".strip(),
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config == SanitizerConfig(
        canonical_marker="¤",
        malformed_line_policy="raise",
        text_encoding="latin-1",
        serialize_replacements=False,
        log_level="DEBUG",
    )


def test_config_loader_from_yaml_uses_defaults_for_empty_file(tmp_path: Path) -> None:
    """An empty YAML document should produce the default config."""

    config_path = tmp_path / "empty.yml"
    config_path.write_text("", encoding="utf-8")

    assert ConfigLoader.from_yaml(config_path) == SanitizerConfig()


def test_config_loader_from_yaml_rejects_unknown_keys_and_non_mapping(tmp_path: Path) -> None:
    """YAML loader should fail clearly on unknown fields or a non-mapping root."""

    unknown_path = tmp_path / "unknown.yml"
    unknown_path.write_text("trigger: '#'\n", encoding="utf-8")

    with pytest.raises(ConfigError, match=r"unsupported key\(s\): trigger"):
        ConfigLoader.from_yaml(unknown_path)

    list_path = tmp_path / "list.yml"
    list_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="top-level mapping"):
        ConfigLoader.from_yaml(list_path)


def test_config_loader_from_yaml_rejects_invalid_typed_values(tmp_path: Path) -> None:
    """YAML loader should reject invalid values with actionable errors."""

    invalid_bool_path = tmp_path / "invalid-bool.yml"
    invalid_bool_path.write_text("serialize_replacements: maybe\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="`serialize_replacements` must be a boolean"):
        ConfigLoader.from_yaml(invalid_bool_path)

    invalid_policy_path = tmp_path / "invalid-policy.yml"
    invalid_policy_path.write_text("malformed_line_policy: ignore\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Unsupported `malformed_line_policy` value `ignore`"):
        ConfigLoader.from_yaml(invalid_policy_path)


def test_config_loader_from_env_loads_values_and_normalizes_blanks() -> None:
    """Environment loader should parse `SIGNWASH_*` keys and ignore blank values."""

    env = {
        "SIGNWASH_CANONICAL_MARKER": " ",
        "SIGNWASH_MALFORMED_LINE_POLICY": "raise",
        "SIGNWASH_TEXT_ENCODING": "",
        "SIGNWASH_SERIALIZE_REPLACEMENTS": "off",
        "SIGNWASH_LOG_LEVEL": "warning",
        "UNRELATED": "x",
    }

    config = ConfigLoader.from_env(env)

    assert config.canonical_marker == "§"
    assert config.malformed_line_policy == "raise"
    assert config.text_encoding == "utf-8"
    assert config.serialize_replacements is False
    assert config.log_level == "WARNING"


def test_config_loader_from_env_defaults_when_unset() -> None:
    """An environment without signwash keys yields the default config."""

    assert ConfigLoader.from_env({}) == SanitizerConfig()


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"canonical_marker": "§§"}, "exactly one character"),
        ({"canonical_marker": "&"}, "non-ASCII"),
        ({"text_encoding": "no-such-codec"}, "Unknown `text_encoding`"),
        ({"log_level": "LOUD"}, "Unsupported `log_level`"),
    ],
)
def test_sanitizer_config_validate_rejects_invalid_values(
    overrides: dict[str, str], message: str
) -> None:
    """Validation should reject malformed marker, codec, and level values."""

    with pytest.raises(ConfigError, match=message):
        SanitizerConfig(**overrides).validate()


@pytest.mark.parametrize(
    ("token", "expected"),
    [("TrUe", True), (" ON ", True), ("1", True), ("FALSE", False), (" oFf ", False), ("0", False)],
)
def test_config_loader_accepts_mixed_case_boolean_tokens(token: str, expected: bool) -> None:
    """Boolean settings accept the usual tokens case-insensitively."""

    config = ConfigLoader.from_env({"SIGNWASH_SERIALIZE_REPLACEMENTS": token})

    assert config.serialize_replacements is expected


def test_config_loader_accepts_native_yaml_booleans(tmp_path: Path) -> None:
    """YAML booleans are used as-is."""

    config_path = tmp_path / "native.yml"
    config_path.write_text("serialize_replacements: false\n", encoding="utf-8")

    assert ConfigLoader.from_yaml(config_path).serialize_replacements is False


@pytest.mark.parametrize("value", ["5", "true", "[a]"])
def test_config_loader_from_yaml_rejects_non_string_marker(tmp_path: Path, value: str) -> None:
    """A marker that YAML parses to a non-string value is rejected, not defaulted."""

    config_path = tmp_path / "marker.yml"
    config_path.write_text(f"canonical_marker: {value}\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="`canonical_marker` must be a string"):
        ConfigLoader.from_yaml(config_path)
