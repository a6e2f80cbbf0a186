"""Key-value store grammar.

The closed set of commands a program can issue against a keyed store:

- Put(key, value): store a value under key (result: None)
- Get(key): look a key up (result: Maybe, ``NOTHING`` when absent)
- Delete(key): remove a key (result: None)

Commands are frozen values; building one never touches a store. Adding a
variant means extending ``Command`` and every interpreter, which type
checkers enforce through ``unhandled_command`` at the end of each dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

if TYPE_CHECKING:
    from freestore._vendor import Maybe
    from freestore.utils import CreationContext

A = TypeVar("A")


@dataclass(frozen=True)
class CommandBase(Generic[A]):
    """Base of every command; ``A`` is the type the command resolves to."""

    created_at: CreationContext | None = field(
        default=None, compare=False, repr=False, kw_only=True
    )

    def with_created_at(self, created_at: CreationContext | None) -> CommandBase[A]:
        return replace(self, created_at=created_at)


@dataclass(frozen=True)
class Put(CommandBase[None]):
    """Stores ``value`` under ``key``, overwriting any previous value."""

    key: str
    value: Any

    def __str__(self) -> str:
        return f"put({self.key}, {self.value!r})"


@dataclass(frozen=True)
class Get(CommandBase["Maybe[Any]"]):
    """Looks ``key`` up.

    ``expected_type`` is optional; when given, interpreters fail with
    TypeMismatch if the stored value is not an instance of it.
    """

    key: str
    expected_type: type | None = None

    def __str__(self) -> str:
        return f"get({self.key})"


@dataclass(frozen=True)
class Delete(CommandBase[None]):
    """Removes ``key``; deleting an absent key is not an error."""

    key: str

    def __str__(self) -> str:
        return f"delete({self.key})"


Command = Union[Put, Get, Delete]

COMMAND_TYPES: tuple[type, ...] = (Put, Get, Delete)


def is_command(value: Any) -> bool:
    return isinstance(value, COMMAND_TYPES)


__all__ = [
    "COMMAND_TYPES",
    "Command",
    "CommandBase",
    "Delete",
    "Get",
    "Put",
    "is_command",
]
