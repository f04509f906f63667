"""Configuration model and loaders for signwash.

Responsibilities:
- Define sanitizer settings as a typed dataclass with explicit validation.
- Provide loader entry points for YAML- and environment-based configuration.

Key types:
- `SanitizerConfig`: normalized settings for a sanitizer instance.
- `ConfigLoader`: static construction helpers for `SanitizerConfig`.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError
from .text.escapes import CANONICAL_MARKER, CODE_ALPHABET, TRIGGER

MALFORMED_SKIP = "skip"
MALFORMED_RAISE = "raise"
_MALFORMED_POLICIES = frozenset({MALFORMED_SKIP, MALFORMED_RAISE})
_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})
_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})


def _blank_to_none(value: object) -> str | None:
    """Return `value` as stripped text, or `None` when missing or blank."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_boolean(value: object, field_name: str) -> bool:
    """Parse `true`/`false`, `1`/`0`, `yes`/`no`, or `on`/`off` case-insensitively."""

    if isinstance(value, bool):
        return value
    token = (_blank_to_none(value) or "").lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ConfigError(
        f"`{field_name}` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
    )


@dataclass(frozen=True, slots=True)
class SanitizerConfig:
    """Settings for one sanitizer instance.

    Attributes:
        canonical_marker: Display-layer escape marker written in place of the trigger.
        malformed_line_policy: `skip` leaves undecodable lines untouched,
            `raise` aborts the invocation with `MalformedLineError`.
        text_encoding: Codec used to decode host buffers.
        serialize_replacements: Whether buffer replacements run under a lock.
        log_level: Minimum loguru level for sanitizer logs.
    """

    canonical_marker: str = CANONICAL_MARKER
    malformed_line_policy: str = MALFORMED_SKIP
    text_encoding: str = "utf-8"
    serialize_replacements: bool = True
    log_level: str = "INFO"

    def validate(self) -> None:
        """Validate configuration values before a sanitizer is built."""

        marker = self.canonical_marker
        if not isinstance(marker, str) or len(marker) != 1:
            raise ConfigError("`canonical_marker` must be exactly one character.")
        if marker.isascii():
            raise ConfigError(
                "`canonical_marker` must be a non-ASCII character.",
                hint=f"The display layer marker is usually `{CANONICAL_MARKER}`.",
            )
        if marker == TRIGGER or marker.lower() in CODE_ALPHABET:
            raise ConfigError("`canonical_marker` must not be the trigger or a code character.")

        if self.malformed_line_policy not in _MALFORMED_POLICIES:
            supported = ", ".join(sorted(_MALFORMED_POLICIES))
            raise ConfigError(
                f"Unsupported `malformed_line_policy` value `{self.malformed_line_policy}`; "
                f"supported: {supported}."
            )

        try:
            codecs.lookup(self.text_encoding)
        except LookupError as exc:
            raise ConfigError(f"Unknown `text_encoding` value `{self.text_encoding}`.") from exc

        if self.log_level not in _LOG_LEVELS:
            supported = ", ".join(sorted(_LOG_LEVELS))
            raise ConfigError(
                f"Unsupported `log_level` value `{self.log_level}`; supported: {supported}."
            )


class ConfigLoader:
    """Factory methods for creating `SanitizerConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "canonical_marker",
            "malformed_line_policy",
            "text_encoding",
            "serialize_replacements",
            "log_level",
        }
    )
    _ENV_KEYS = {
        "canonical_marker": "SIGNWASH_CANONICAL_MARKER",
        "malformed_line_policy": "SIGNWASH_MALFORMED_LINE_POLICY",
        "text_encoding": "SIGNWASH_TEXT_ENCODING",
        "serialize_replacements": "SIGNWASH_SERIALIZE_REPLACEMENTS",
        "log_level": "SIGNWASH_LOG_LEVEL",
    }

    @staticmethod
    def from_yaml(path: Path) -> SanitizerConfig:
        """Create a validated config from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ConfigError(f"YAML config `{path}` must contain a top-level mapping/object.")

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(str(key) for key in unknown)
            raise ConfigError(f"YAML `{path}` includes unsupported key(s): {key_list}.")

        return ConfigLoader._build_config(payload, key_map=None)

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> SanitizerConfig:
        """Create a validated config from `SIGNWASH_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        return ConfigLoader._build_config(env_map, key_map=ConfigLoader._ENV_KEYS)

    @staticmethod
    def _build_config(
        payload: Mapping[str, Any], key_map: Mapping[str, str] | None
    ) -> SanitizerConfig:
        """Build a validated config, falling back to defaults for blank values."""

        def lookup(key: str) -> Any:
            source_key = key if key_map is None else key_map[key]
            return payload.get(source_key)

        defaults = SanitizerConfig()
        marker_value = lookup("canonical_marker")
        marker = defaults.canonical_marker
        if marker_value is not None and not isinstance(marker_value, str):
            raise ConfigError(
                f"`canonical_marker` must be a string, got `{marker_value!r}`.",
                hint=(
                    "Quote the marker in YAML, for example "
                    f'`canonical_marker: "{CANONICAL_MARKER}"`.'
                ),
            )
        if marker_value is not None and marker_value.strip():
            marker = marker_value.strip()
        policy = _blank_to_none(lookup("malformed_line_policy"))
        encoding = _blank_to_none(lookup("text_encoding"))
        log_level = _blank_to_none(lookup("log_level"))
        serialize_value = lookup("serialize_replacements")
        serialize = defaults.serialize_replacements
        if _blank_to_none(serialize_value) is not None:
            serialize = _parse_boolean(serialize_value, "serialize_replacements")

        config = SanitizerConfig(
            canonical_marker=marker,
            malformed_line_policy=(policy or defaults.malformed_line_policy).lower(),
            text_encoding=encoding or defaults.text_encoding,
            serialize_replacements=serialize,
            log_level=(log_level or defaults.log_level).upper(),
        )
        config.validate()
        return config
