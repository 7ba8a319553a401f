"""DMFR JSON decoding into typed registry records.

This module maps registry JSON payloads onto Feed and Operator models.
It is the structural validation boundary for every registry document.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Mapping

from core.errors import DmfrDecodeError
from core.types import AssociatedFeedReference, Feed, Operator, RegistryDocument

_FEED_FIELDS = ("id", "spec", "name", "urls", "operators")
_OPERATOR_FIELDS = ("onestop_id", "name", "short_name", "website", "associated_feeds")


def decode_registry_document(text: str, source_path: str, origin: str) -> RegistryDocument:
    """Decode a registry document holding feeds and top-level operators.

    Args:
        text: Raw JSON document text.
        source_path: File path used for error context.
        origin: Registry source name.

    Returns:
        Decoded registry document.

    Raises:
        DmfrDecodeError: If the document does not match the DMFR schema.
    """
    payload = _load_object(text, source_path)
    feeds = tuple(
        feed_from_payload(item, f"{source_path}:feeds[{index}]")
        for index, item in enumerate(_optional_list(payload, "feeds", source_path))
    )
    operators = tuple(
        operator_from_payload(item, f"{source_path}:operators[{index}]")
        for index, item in enumerate(_optional_list(payload, "operators", source_path))
    )
    return RegistryDocument(
        source_path=source_path,
        origin=origin,
        feeds=feeds,
        operators=operators,
    )


def decode_operator_document(text: str, source_path: str, origin: str) -> RegistryDocument:
    """Decode a standalone operator file into a one-operator document.

    Args:
        text: Raw JSON document text.
        source_path: File path used for error context.
        origin: Registry source name.

    Returns:
        Registry document with a single top-level operator.

    Raises:
        DmfrDecodeError: If the document is not a valid operator object.
    """
    payload = _load_object(text, source_path)
    operator = operator_from_payload(payload, source_path)
    return RegistryDocument(source_path=source_path, origin=origin, operators=(operator,))


def feed_from_payload(payload: Any, path: str) -> Feed:
    """Build a Feed from a decoded JSON object.

    Args:
        payload: Decoded JSON value.
        path: Location of the value, for error messages.

    Returns:
        Typed feed record with embedded operators.

    Raises:
        DmfrDecodeError: If required fields are missing or mistyped.
    """
    feed_payload = _require_object(payload, path)
    operators = tuple(
        operator_from_payload(item, f"{path}.operators[{index}]")
        for index, item in enumerate(_optional_list(feed_payload, "operators", path))
    )
    urls = feed_payload.get("urls") or {}
    if not isinstance(urls, dict):
        raise DmfrDecodeError(f"Invalid DMFR feed at {path}: 'urls' must be an object.")
    return Feed(
        feed_id=_require_string(feed_payload, "id", path),
        spec=_optional_string(feed_payload, "spec", path),
        name=_optional_string(feed_payload, "name", path),
        urls=_freeze_payload(urls, path),
        operators=operators,
        attributes=_remaining_fields(feed_payload, _FEED_FIELDS, path),
    )


def operator_from_payload(payload: Any, path: str) -> Operator:
    """Build an Operator from a decoded JSON object.

    Args:
        payload: Decoded JSON value.
        path: Location of the value, for error messages.

    Returns:
        Typed operator record.

    Raises:
        DmfrDecodeError: If required fields are missing or mistyped.
    """
    operator_payload = _require_object(payload, path)
    references = tuple(
        _reference_from_payload(item, f"{path}.associated_feeds[{index}]")
        for index, item in enumerate(
            _optional_list(operator_payload, "associated_feeds", path)
        )
    )
    return Operator(
        operator_id=_require_string(operator_payload, "onestop_id", path),
        name=_optional_string(operator_payload, "name", path),
        short_name=_optional_string(operator_payload, "short_name", path),
        website=_optional_string(operator_payload, "website", path),
        associated_feeds=references,
        attributes=_remaining_fields(operator_payload, _OPERATOR_FIELDS, path),
    )


def feed_to_payload(feed: Feed) -> dict[str, Any]:
    """Serialize a Feed back into DMFR field names.

    Args:
        feed: Feed record.

    Returns:
        JSON-safe dictionary payload.
    """
    payload: dict[str, Any] = _thaw(feed.attributes)
    payload["id"] = feed.feed_id
    _set_if_present(payload, "spec", feed.spec)
    _set_if_present(payload, "name", feed.name)
    if feed.urls:
        payload["urls"] = _thaw(feed.urls)
    if feed.operators:
        payload["operators"] = [operator_to_payload(item) for item in feed.operators]
    return payload


def operator_to_payload(operator: Operator) -> dict[str, Any]:
    """Serialize an Operator back into DMFR field names.

    Args:
        operator: Operator record.

    Returns:
        JSON-safe dictionary payload.
    """
    payload: dict[str, Any] = _thaw(operator.attributes)
    payload["onestop_id"] = operator.operator_id
    _set_if_present(payload, "name", operator.name)
    _set_if_present(payload, "short_name", operator.short_name)
    _set_if_present(payload, "website", operator.website)
    if operator.associated_feeds:
        references: list[dict[str, str]] = []
        for reference in operator.associated_feeds:
            reference_payload: dict[str, str] = {}
            _set_if_present(reference_payload, "feed_onestop_id", reference.feed_id)
            _set_if_present(reference_payload, "gtfs_agency_id", reference.agency_id)
            references.append(reference_payload)
        payload["associated_feeds"] = references
    return payload


def _reference_from_payload(payload: Any, path: str) -> AssociatedFeedReference:
    """Build an associated feed reference from a JSON object."""
    reference_payload = _require_object(payload, path)
    return AssociatedFeedReference(
        feed_id=_optional_string(reference_payload, "feed_onestop_id", path),
        agency_id=_optional_string(reference_payload, "gtfs_agency_id", path),
    )


def _load_object(text: str, source_path: str) -> dict[str, Any]:
    """Parse document text and require a top-level JSON object.

    Args:
        text: Raw JSON text.
        source_path: File path for error context.

    Returns:
        Parsed JSON object.

    Raises:
        DmfrDecodeError: If text is not valid JSON or not an object.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise DmfrDecodeError(
            f"Failed to parse DMFR document at {source_path}: {error.msg} "
            f"(line {error.lineno}, column {error.colno})."
        ) from error
    except (ValueError, RecursionError) as error:
        raise DmfrDecodeError(
            f"Failed to parse DMFR document at {source_path}: {error}."
        ) from error
    return _require_object(payload, source_path)


def _require_object(payload: Any, path: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise DmfrDecodeError(f"Invalid DMFR value at {path}: expected JSON object.")
    return payload


def _require_string(payload: dict[str, Any], key: str, path: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise DmfrDecodeError(
            f"Invalid DMFR value at {path}: expected non-empty string field '{key}'."
        )
    return value


def _optional_string(payload: dict[str, Any], key: str, path: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DmfrDecodeError(f"Invalid DMFR value at {path}: field '{key}' must be a string.")
    return value


def _optional_list(payload: dict[str, Any], key: str, path: str) -> list[Any]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DmfrDecodeError(f"Invalid DMFR value at {path}: field '{key}' must be an array.")
    return value


def _remaining_fields(
    payload: dict[str, Any],
    known_fields: tuple[str, ...],
    path: str,
) -> Mapping[str, Any]:
    """Return fields not mapped onto typed attributes, frozen."""
    remaining = {key: value for key, value in payload.items() if key not in known_fields}
    return _freeze_payload(remaining, path)


def _freeze_payload(value: dict[str, Any], path: str) -> Mapping[str, Any]:
    try:
        return _freeze(value)
    except RecursionError as error:
        raise DmfrDecodeError(f"Invalid DMFR value at {path}: nesting is too deep.") from error


def _freeze(value: Any) -> Any:
    """Convert decoded JSON into read-only mappings and tuples."""
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    """Convert frozen values back into JSON-encodable dicts and lists."""
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


def _set_if_present(payload: dict[str, Any], key: str, value: str | None) -> None:
    if value is not None:
        payload[key] = value
