"""GraphQL client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GraphQlClientConfig:
    """Configuration for the HTTP GraphQL client."""

    url: str
    timeout_seconds: float = 10.0
    api_key: str = ""
    headers: dict[str, str] = field(default_factory=dict)
