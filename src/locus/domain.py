"""Domain models used throughout the registry."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Union

__all__ = [
    "CapabilityKey",
    "Factory",
    "Singleton",
    "Binding",
    "capability_identity",
    "describe",
]


CapabilityKey = Union[str, type]
"""Type alias for keys identifying a capability.

A capability is usually a class, ABC or protocol, but an explicit string key
may be used where no suitable type exists.

Example:
    >>> registry.resolve(Greeter)        # Lookup by type
    >>> registry.resolve("greeter")      # Lookup by explicit key
"""


@dataclass(frozen=True)
class Factory:
    """A binding that produces a fresh value on every resolution.

    Attributes:
        produce: Zero-argument callable invoked each time the capability is resolved.
    """

    produce: Callable[[], Any]

    def materialise(self) -> Any:
        return self.produce()


@dataclass(frozen=True)
class Singleton:
    """A binding holding a single pre-computed value.

    Attributes:
        value: The instance returned for every resolution.
    """

    value: Any

    def materialise(self) -> Any:
        return self.value


Binding = Union[Factory, Singleton]


def capability_identity(capability: Any) -> Hashable:
    """Derive the lookup identity for a capability.

    Types are their own identity, so two distinct classes sharing a name never
    collide. Strings and other hashable typing objects are used verbatim.

    Unhashable capabilities are rejected here, before any binding is stored.

    Raises:
        TypeError: If the capability is not hashable.
    """
    if not isinstance(capability, Hashable):
        raise TypeError(f"Capability {capability!r} is not hashable")
    return capability


def describe(capability: Any) -> str:
    """Return a readable name for a capability, used in messages.

    Example:
        >>> describe(Greeter)       # Returns "app.services.Greeter"
        >>> describe("greeter")     # Returns "greeter"
    """
    if isinstance(capability, str):
        return capability
    if inspect.isclass(capability):
        return f"{capability.__module__}.{capability.__qualname__}"
    return repr(capability)
