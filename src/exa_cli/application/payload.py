"""Payload construction – flags + raw override → the literal request body.

Steps, all local (nothing here touches the network):

1. canonical object from the command's structured flags (unset → omitted)
2. raw fragment from ``--body`` or ``--body-file``
3. shallow merge, raw fragment wins on every colliding key
4. required-field check on the merged result
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from exa_cli.application.ports import Logger
from exa_cli.domain.commands import ApiCommand, BodyOverride
from exa_cli.domain.errors import InvalidRawBody, MissingField
from exa_cli.domain.json_value import JsonKind, JsonValue, parse_json, shallow_merge


def load_raw_body(body: BodyOverride, logger: Logger | None = None) -> JsonValue:
    """Read and parse the raw override; an absent override is ``{}``."""
    if body.inline is not None and body.file is not None and logger is not None:
        logger.warn("Both --body and --body-file given; using --body")

    if body.inline is not None:
        raw, source = body.inline, "--body"
    elif body.file is not None:
        source = f"--body-file {body.file}"
        try:
            raw = Path(body.file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidRawBody(f"read body file {body.file}: {exc}") from exc
    else:
        return JsonValue.empty_object()

    try:
        value = parse_json(raw)
    except (ValueError, TypeError) as exc:
        raise InvalidRawBody(f"parse body json ({source}): {exc}") from exc

    if value.kind is JsonKind.NULL:
        return JsonValue.empty_object()
    if not value.is_object:
        raise InvalidRawBody(f"{source} must be a JSON object, got {value.kind.value}")
    return value


def merge(structured: dict[str, Any], raw: dict[str, Any]) -> dict[str, Any]:
    """Top-level merge of plain dicts, *raw* taking precedence."""
    return shallow_merge(JsonValue.from_python(structured), JsonValue.from_python(raw)).to_python()


def _has_text(body: dict[str, Any], key: str) -> bool:
    value = body.get(key)
    return isinstance(value, str) and bool(value.strip())


def ensure_required(command: ApiCommand, body: dict[str, Any]) -> None:
    for key in command.REQUIRED:
        if not _has_text(body, key):
            raise MissingField(key)
    if command.ANY_OF and not any(k in body for k in command.ANY_OF):
        raise MissingField(*command.ANY_OF)


def build_payload(command: ApiCommand, logger: Logger | None = None) -> dict[str, Any]:
    """Build the merged request body for *command*.

    Raises ``InvalidRawBody`` or ``MissingField`` before any request is made.
    """
    canonical = JsonValue.from_python(command.structured_fields())
    raw = load_raw_body(command.body, logger)
    merged = shallow_merge(canonical, raw).to_python()
    ensure_required(command, merged)
    if logger is not None:
        logger.debug(f"{command.name} payload keys: {', '.join(sorted(merged)) or '(none)'}")
    return merged
