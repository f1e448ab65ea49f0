"""Node identity types.

Anything that exposes a deterministic ``key()`` can be stored in a
``DependencyGraph``. The graph only ever looks at the key; the value itself
is carried around untouched.
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class Keyer(Protocol):
    """A value that can produce a unique, stable string key."""

    def key(self) -> str: ...


class StringNode(str):
    """A plain string used as its own key."""

    __slots__ = ()

    def key(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return f"StringNode({str(self)!r})"


class TaskNode(BaseModel):
    """A structured node record keyed by its name.

    Example:
        >>> TaskNode(name="compile", description="Build the sources").key()
        'compile'

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    description: str = ""
    tags: tuple[str, ...] = ()

    def key(self) -> str:
        return self.name


def as_keyer(value: Keyer | str) -> Keyer:
    """Wrap plain strings in ``StringNode``; pass other keyers through."""
    if isinstance(value, Keyer):
        return value
    if isinstance(value, str):
        return StringNode(value)
    msg = f"Expected a str or an object with a key() method, got {type(value).__name__}"
    raise TypeError(msg)
