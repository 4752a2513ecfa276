"""
Command results returned by every engine mutation.

Exactly one of `value` / `error` is meaningful: a successful command carries
its payload, a rejected one carries the typed PosError that caused it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import PosError


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    value: Any = None
    error: PosError | None = None

    def __post_init__(self):
        if self.ok and self.error is not None:
            raise ValueError("A successful result must not carry an error.")
        if not self.ok and self.error is None:
            raise ValueError("A failed result must carry an error.")

    @classmethod
    def success(cls, value: Any = None) -> "CommandResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: PosError) -> "CommandResult":
        return cls(ok=False, error=error)

    def unwrap(self) -> Any:
        if not self.ok:
            raise self.error
        return self.value

    def to_dict(self) -> dict:
        if self.ok:
            value = self.value.to_dict() if hasattr(self.value, "to_dict") else self.value
            return {"ok": True, "value": value}
        return {"ok": False, **self.error.to_dict()}
