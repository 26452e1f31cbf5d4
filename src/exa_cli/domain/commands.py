"""Domain commands – one frozen dataclass per CLI operation.

Each API command knows two things about its request body:

* ``FIELDS`` maps attribute name → JSON key for the structured flags.
* ``DEFAULTS`` holds endpoint-specific keys that are always sent.

``REQUIRED`` lists the keys that must be present after the raw body has been
merged (``ANY_OF`` means at least one of the group).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class BodyOverride:
    """Raw JSON supplied by the user. ``inline`` wins when both are set."""

    inline: str | None = None
    file: str | None = None


def normalize_list(items: list[str] | tuple[str, ...] | None) -> list[str]:
    """Trim entries and drop blanks."""
    if not items:
        return []
    return [s.strip() for s in items if s and s.strip()]


@dataclass(frozen=True)
class ApiCommand:
    name: ClassVar[str] = ""
    FIELDS: ClassVar[dict[str, str]] = {}
    DEFAULTS: ClassVar[dict[str, Any]] = {}
    REQUIRED: ClassVar[tuple[str, ...]] = ()
    ANY_OF: ClassVar[tuple[str, ...]] = ()

    def structured_fields(self) -> dict[str, Any]:
        """Flag-derived body members; unset values are left out entirely."""
        out: dict[str, Any] = dict(self.DEFAULTS)
        for attr, key in self.FIELDS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                value = normalize_list(value)
                if not value:
                    continue
            out[key] = value
        return out


@dataclass(frozen=True)
class SearchCommand(ApiCommand):
    name: ClassVar[str] = "search"
    FIELDS: ClassVar[dict[str, str]] = {"query": "query"}
    REQUIRED: ClassVar[tuple[str, ...]] = ("query",)

    query: str | None = None
    body: BodyOverride = field(default_factory=BodyOverride)


@dataclass(frozen=True)
class ContentsCommand(ApiCommand):
    name: ClassVar[str] = "contents"
    FIELDS: ClassVar[dict[str, str]] = {"urls": "urls", "ids": "ids"}
    ANY_OF: ClassVar[tuple[str, ...]] = ("urls", "ids")

    urls: tuple[str, ...] = ()
    ids: tuple[str, ...] = ()
    body: BodyOverride = field(default_factory=BodyOverride)


@dataclass(frozen=True)
class FindSimilarCommand(ApiCommand):
    name: ClassVar[str] = "find-similar"
    FIELDS: ClassVar[dict[str, str]] = {"url": "url"}
    REQUIRED: ClassVar[tuple[str, ...]] = ("url",)

    url: str | None = None
    body: BodyOverride = field(default_factory=BodyOverride)


@dataclass(frozen=True)
class AnswerCommand(ApiCommand):
    name: ClassVar[str] = "answer"
    FIELDS: ClassVar[dict[str, str]] = {"query": "query"}
    # the CLI prints one response; never ask for SSE
    DEFAULTS: ClassVar[dict[str, Any]] = {"stream": False}
    REQUIRED: ClassVar[tuple[str, ...]] = ("query",)

    query: str | None = None
    body: BodyOverride = field(default_factory=BodyOverride)


@dataclass(frozen=True)
class ContextCommand(ApiCommand):
    name: ClassVar[str] = "context"
    FIELDS: ClassVar[dict[str, str]] = {"query": "query"}
    REQUIRED: ClassVar[tuple[str, ...]] = ("query",)

    query: str | None = None
    body: BodyOverride = field(default_factory=BodyOverride)


@dataclass(frozen=True)
class ResearchStartCommand(ApiCommand):
    name: ClassVar[str] = "research-start"
    FIELDS: ClassVar[dict[str, str]] = {"instructions": "instructions"}
    REQUIRED: ClassVar[tuple[str, ...]] = ("instructions",)

    instructions: str | None = None
    body: BodyOverride = field(default_factory=BodyOverride)


@dataclass(frozen=True)
class ResearchCheckCommand:
    name: ClassVar[str] = "research-check"

    task_id: str | None = None


@dataclass(frozen=True)
class McpToolsCommand:
    name: ClassVar[str] = "mcp-tools"


@dataclass(frozen=True)
class McpUrlCommand:
    name: ClassVar[str] = "mcp-url"

    tools: str | None = None
