from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from freestore.utils import CreationContext


class FreeStoreError(Exception):
    """Base class for errors raised by freestore."""


class TypeMismatchError(FreeStoreError, TypeError):
    """Raised when a stored value is not an instance of the type a Get expects."""

    def __init__(
        self,
        key: str,
        expected: type,
        actual: Any,
        created_at: CreationContext | None = None,
    ) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        self.created_at = created_at
        message = (
            f"Value stored under {key!r} is {type(actual).__name__}, "
            f"expected {expected.__name__}"
        )
        if created_at is not None:
            message += f"\nGet created at {created_at.format_location()}"
        super().__init__(message)


class UnhandledCommandError(FreeStoreError, TypeError):
    """Raised when an interpreter receives something that is not a command."""

    def __init__(self, command: Any) -> None:
        self.command = command
        super().__init__(
            f"Not a command: {command!r}\n"
            f"Hint: build programs with put(), get() and delete() from freestore.dsl"
        )


class StepLimitExceededError(FreeStoreError, RuntimeError):
    """Raised when a fold dispatches more commands than its step budget allows."""

    def __init__(self, max_steps: int) -> None:
        self.max_steps = max_steps
        super().__init__(
            f"Program exceeded max_steps={max_steps}\n"
            f"Hint: check recursive programs for a missing pure() base case"
        )


class ContinuationReuseError(FreeStoreError, RuntimeError):
    """Raised when a @do program's continuation is resumed more than once."""

    def __init__(self, function_name: str) -> None:
        self.function_name = function_name
        super().__init__(
            f"Continuation of @do program {function_name!r} was resumed twice\n"
            f"Hint: generators are one-shot; build multi-shot programs with and_then()"
        )


__all__ = [
    "ContinuationReuseError",
    "FreeStoreError",
    "StepLimitExceededError",
    "TypeMismatchError",
    "UnhandledCommandError",
]
