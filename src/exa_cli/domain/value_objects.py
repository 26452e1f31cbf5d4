"""Domain value objects – small immutable types with validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_API_BASE = "https://api.exa.ai"


@dataclass(frozen=True)
class Credentials:
    """API key plus the origin every request is sent to."""

    api_key: str = field(repr=False)
    base_url: str = DEFAULT_API_BASE

    def __post_init__(self) -> None:
        if not self.api_key.strip():
            raise ValueError("api_key must be non-empty")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"


@dataclass(frozen=True)
class Route:
    """HTTP method + path template for one API operation."""

    method: str
    path: str

    def format(self, **params: str) -> "Route":
        return Route(self.method, self.path.format(**params))


class ResearchStatus(str, Enum):
    """Lifecycle of a remote research task, as reported by the service."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        return self in (ResearchStatus.COMPLETED, ResearchStatus.FAILED, ResearchStatus.CANCELED)


@dataclass(frozen=True)
class ResearchTask:
    task_id: str
    status: ResearchStatus
