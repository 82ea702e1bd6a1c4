"""Utility helpers shared by the Jobel configuration loader."""

from __future__ import annotations

import re
import typing as typ
from urllib.parse import urlsplit

from .models import Severity, SiteConfigError

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
SEVERITY_ALIASES: dict[str, Severity] = {
    "fail": Severity.FAIL,
    "throw": Severity.FAIL,
    "warn": Severity.WARN,
    "ignore": Severity.IGNORE,
}


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, context: str) -> str:
    """Return ``payload[key]`` as a non-empty string or raise SiteConfigError."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"{context} is missing '{key}'."
        raise SiteConfigError(msg)
    return value


def _as_mapping(value: object, context: str) -> dict[str, typ.Any]:
    """Return ``value`` as a dict, treating None as empty."""
    match value:
        case None:
            return {}
        case dict():
            return dict(value)
        case _:
            msg = f"{context} must be a mapping."
            raise SiteConfigError(msg)


def _as_list(value: object, context: str) -> list[typ.Any]:
    """Return ``value`` as a list, treating None as empty."""
    match value:
        case None:
            return []
        case list():
            return value
        case _:
            msg = f"{context} must be a list."
            raise SiteConfigError(msg)


def _parse_bool(value: object, *, default: bool, context: str) -> bool:
    """Return a boolean flag, rejecting values YAML did not parse as bools."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    msg = f"{context} must be true or false."
    raise SiteConfigError(msg)


def _parse_severity(
    value: object, *, default: Severity, allowed: typ.Collection[Severity], context: str
) -> Severity:
    """Map a policy keyword (``fail``/``throw``/``warn``/``ignore``) to a Severity."""
    text = _optional_str(value)
    if text is None:
        return default
    severity = SEVERITY_ALIASES.get(text.lower())
    if severity is None or severity not in allowed:
        choices = ", ".join(sorted(item.value for item in allowed))
        msg = f"{context} must be one of: {choices} (got {text!r})."
        raise SiteConfigError(msg)
    return severity


def _is_absolute_url(value: str) -> bool:
    """Return True when ``value`` carries both a scheme and a host."""
    parsed = urlsplit(value)
    return bool(parsed.scheme and parsed.netloc)


def _check_hex_color(value: str, context: str) -> str:
    """Return ``value`` when it is a ``#rgb`` or ``#rrggbb`` colour."""
    if not HEX_COLOR_PATTERN.match(value):
        msg = f"{context} must be a hex colour like '#6366f1' (got {value!r})."
        raise SiteConfigError(msg)
    return value


__all__ = [
    "HEX_COLOR_PATTERN",
    "SEVERITY_ALIASES",
    "_as_list",
    "_as_mapping",
    "_check_hex_color",
    "_is_absolute_url",
    "_optional_str",
    "_parse_bool",
    "_parse_severity",
    "_require_str",
]
