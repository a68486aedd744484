"""Error types raised by the frustration analysis.

Every failure carries a machine-readable ``kind`` and a ``context`` dict so
callers can decide what to do with it. Nothing in the package terminates
the process; only the CLI turns these into exit codes.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FrustrationError(Exception):
    """Base class for all analysis errors."""

    kind: str = "frustration-error"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return f"[{self.kind}] {self.message}"
        details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.kind}] {self.message} ({details})"


class MalformedInputError(FrustrationError):
    """An input file could not be parsed."""

    kind = "malformed-input"


class NonSimpleCycleError(FrustrationError):
    """An edge set does not decompose into exactly one simple loop."""

    kind = "non-simple-cycle"


class InternalConsistencyError(FrustrationError):
    """A structural invariant of the analysis was broken."""

    kind = "internal-consistency"


class EnumerationLimitError(FrustrationError):
    """Elementary-cycle enumeration exceeded its deadline or size cap."""

    kind = "enumeration-limit"


class ConfigError(FrustrationError):
    """Configuration values are invalid."""

    kind = "invalid-config"
