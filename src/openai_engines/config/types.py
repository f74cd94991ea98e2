"""Configuration data types.

Configuration is resolved once from all sources, then frozen and handed to
the client. The resolved form keeps an audit of where each value came from.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, NamedTuple

ConfigOrigin = Literal["programmatic", "env", "env_file", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

FIELD_ORDER = ("api_key", "organization", "base_url", "timeout_seconds")


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing."""

    api_key: str | None
    organization: str | None
    base_url: str
    timeout_seconds: float

    # Where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"ResolvedConfig(api_key={api_key_display!r}, "
            f"organization={self.organization!r}, base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        return FrozenConfig(
            api_key=self.api_key,
            organization=self.organization,
            base_url=self.base_url,
            timeout_seconds=self.timeout_seconds,
        )

    def audit(self) -> str:
        """Report the origin of each field, with the API key redacted."""
        lines = []
        for field in FIELD_ORDER:
            value = getattr(self, field)
            if field == "api_key" and value:
                value = "[REDACTED]"
            lines.append(f"{field}: {value!r} (from {self.origin.get(field, 'default')})")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Immutable configuration consumed by the client."""

    api_key: str | None
    organization: str | None
    base_url: str
    timeout_seconds: float

    def __repr__(self) -> str:
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, "
            f"organization={self.organization!r}, base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )
