# opcount/errors.py
"""
Exception types for the opcount package.

Hierarchy
─────────
    OpcountError (base)
    ├── IncomparableValuesError  - total-order test on unordered values
    ├── ReleasedValueError       - counted operation on a released wrapper
    ├── SessionReusedError       - second run on a counting session
    ├── UnknownAlgorithmError    - algorithm name not in the registry
    ├── UnknownBatchKindError    - batch generator name not recognised
    ├── SweepSpecError           - malformed or non-terminating size range
    └── ConfigError              - unusable configuration value

Each subclass also derives from the closest built-in exception so callers
that only know about ``TypeError`` / ``KeyError`` / ``ValueError`` still
catch it.  Every class carries a stable ``code`` (``OPC-XXXX``) used by the
CLI in its log output.
"""

from __future__ import annotations

from typing import Any, ClassVar


class OpcountError(Exception):
    """Base class of every error raised by opcount itself."""

    code: ClassVar[str] = "OPC-0000"

    def __str__(self) -> str:
        message = str(self.args[0]) if self.args else ""
        return f"[{self.code}] {message}" if message else f"[{self.code}]"


class IncomparableValuesError(OpcountError, TypeError):
    """A total-order test was asked of two values with no defined order."""

    code: ClassVar[str] = "OPC-1001"

    def __init__(self, left: Any, right: Any) -> None:
        self.left = left
        self.right = right
        super().__init__(f"values {left!r} and {right!r} are not totally ordered")


class ReleasedValueError(OpcountError, RuntimeError):
    """A counted operation was invoked on a wrapper that was already released."""

    code: ClassVar[str] = "OPC-1002"


class SessionReusedError(OpcountError, RuntimeError):
    """A counting session was asked to run a second time."""

    code: ClassVar[str] = "OPC-1003"


class UnknownAlgorithmError(OpcountError, KeyError):
    code: ClassVar[str] = "OPC-2001"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown algorithm: {name!r}")


class UnknownBatchKindError(OpcountError, KeyError):
    code: ClassVar[str] = "OPC-2002"

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"unknown batch kind: {kind!r}")


class SweepSpecError(OpcountError, ValueError):
    """A size-range expression could not be parsed or would never terminate."""

    code: ClassVar[str] = "OPC-3001"

    def __init__(self, spec: str, reason: str) -> None:
        self.spec = spec
        self.reason = reason
        super().__init__(f"invalid size range {spec!r}: {reason}")


class ConfigError(OpcountError, ValueError):
    code: ClassVar[str] = "OPC-3002"

    def __init__(self, key: str, value: str, reason: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"{key}={value!r}: {reason}")


__all__ = [
    "OpcountError",
    "IncomparableValuesError",
    "ReleasedValueError",
    "SessionReusedError",
    "UnknownAlgorithmError",
    "UnknownBatchKindError",
    "SweepSpecError",
    "ConfigError",
]
