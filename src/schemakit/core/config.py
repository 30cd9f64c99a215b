# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Process-wide configuration and YAML message catalogs.

The global configuration carries the two lowest-priority customizers of the
message chain: a custom error map and a locale error map. A locale error map
is usually built from a YAML message catalog::

    invalid_type: "Expected {expected}, got {received}"
    too_small:
      string: "Needs at least {minimum} characters"
      default: "Value is too small"

Templates are rendered with :meth:`str.format_map` against the issue's
properties plus ``code``, ``origin`` and ``input``. Placeholders that the
issue does not provide are left untouched.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from schemakit.core.issues import ErrorMap, RawIssue
from schemakit.core.types import IssueCode

# ###############
# Public Interface
# ###############


class ConfigError(Exception):
    """Raised when a configuration file or message catalog is invalid or cannot be loaded."""


@dataclass(frozen=True)
class SchemaKitConfig:
    """Global message customization.

    Attributes:
        custom_error: Error map consulted after the per-schema customizer.
        locale_error: Error map consulted after ``custom_error``, typically a
            message catalog.
    """

    custom_error: ErrorMap | None = None
    locale_error: ErrorMap | None = None


def configure(
    config: SchemaKitConfig | None = None,
    *,
    custom_error: ErrorMap | None = None,
    locale_error: ErrorMap | None = None,
    reset: bool = False,
) -> SchemaKitConfig:
    """Update the global configuration and return the new snapshot.

    Non-None fields of *config* and the keyword arguments are merged into the
    current configuration; fields left as None keep their current value.

    Args:
        config: A configuration whose non-None fields are applied.
        custom_error: Replacement global custom error map.
        locale_error: Replacement global locale error map.
        reset: Start from the empty configuration instead of the current one.

    Returns:
        The configuration now in effect.
    """
    global _current
    with _lock:
        updated = SchemaKitConfig() if reset else _current
        changes: dict[str, Any] = {}
        if config is not None:
            if config.custom_error is not None:
                changes["custom_error"] = config.custom_error
            if config.locale_error is not None:
                changes["locale_error"] = config.locale_error
        if custom_error is not None:
            changes["custom_error"] = custom_error
        if locale_error is not None:
            changes["locale_error"] = locale_error
        _current = replace(updated, **changes)
        return _current


def get_config() -> SchemaKitConfig:
    """Return the configuration currently in effect."""
    return _current


def load_message_catalog(path: Path) -> ErrorMap:
    """Load a YAML message catalog and return it as an error map.

    Args:
        path: Path to the catalog file.

    Returns:
        An error map rendering the catalog's templates; it returns None for
        issues the catalog does not cover.

    Raises:
        ConfigError: If the file cannot be read or the catalog is invalid.
    """
    data = _load_yaml(path)
    return _build_catalog(data, source_label=str(path))


def load_config(path: Path) -> SchemaKitConfig:
    """Load a SchemaKit configuration file.

    The file is a YAML mapping with an optional ``messages`` entry: either the
    path of a message catalog (relative to the configuration file) or an
    inline catalog mapping.

    Args:
        path: Path to the configuration file.

    Returns:
        A SchemaKitConfig; pass it to :func:`configure` to activate it.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    data = _load_yaml(path)
    source_label = str(path)
    if data is None:
        return SchemaKitConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: configuration must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key != "messages")
    if unknown:
        raise ConfigError(f"{source_label}: unknown configuration field(s): {', '.join(unknown)}")

    messages = data.get("messages")
    if messages is None:
        return SchemaKitConfig()
    if isinstance(messages, str):
        return SchemaKitConfig(locale_error=load_message_catalog(path.parent / messages))
    if isinstance(messages, dict):
        return SchemaKitConfig(locale_error=_build_catalog(messages, source_label=f"{source_label}: messages"))
    raise ConfigError(f"{source_label}: 'messages' must be a catalog path or a mapping")


# ################
# Implementation
# ################

_lock = threading.Lock()
_current = SchemaKitConfig()

_CODES: dict[str, IssueCode] = {code.value: code for code in IssueCode}


def _load_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file: {exc}") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc


def _build_catalog(data: Any, source_label: str) -> ErrorMap:
    """Validate catalog data and return the error map rendering it."""
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: message catalog must be a YAML mapping")

    templates: dict[IssueCode, dict[str, str]] = {}
    for key, entry in data.items():
        code = _CODES.get(str(key))
        if code is None:
            raise ConfigError(f"{source_label}: unknown issue code '{key}'")
        if isinstance(entry, str):
            templates[code] = {"default": entry}
        elif isinstance(entry, dict):
            by_origin: dict[str, str] = {}
            for origin, template in entry.items():
                if not isinstance(template, str):
                    raise ConfigError(f"{source_label}: template for '{key}.{origin}' must be a string")
                by_origin[str(origin)] = template
            templates[code] = by_origin
        else:
            raise ConfigError(f"{source_label}: entry for '{key}' must be a string or a mapping")

    def error_map(issue: RawIssue) -> str | None:
        by_origin = templates.get(issue.code)
        if by_origin is None:
            return None
        template = by_origin.get(issue.origin or "", by_origin.get("default"))
        if template is None:
            return None
        return template.format_map(_TemplateFields(issue))

    return error_map


class _TemplateFields(dict):
    """Template namespace that leaves unknown placeholders in place."""

    def __init__(self, issue: RawIssue) -> None:
        super().__init__(issue.properties)
        self["code"] = issue.code.value
        self["origin"] = issue.origin
        self["input"] = issue.input

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"
