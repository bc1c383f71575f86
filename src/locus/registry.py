"""Registration and resolution of capability bindings."""

import inspect
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

from locus.domain import (
    Binding,
    CapabilityKey,
    Factory,
    Singleton,
    capability_identity,
    describe,
)
from locus.errors import UnresolvedCapability

__all__ = ["Registry", "UNSET"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNSET = object()
"""Sentinel marking an omitted ``instance`` argument to ``override``."""


class Registry:
    """Registry mapping capabilities to factory or singleton bindings.

    Each capability has at most one binding. Registering a capability again
    replaces its previous binding without warning.

    Example:
        >>> registry = Registry()
        >>> registry.register(Greeter, lambda: ConsoleGreeter("Hello"), singleton=True)
        >>> greeter = registry.resolve(Greeter)
    """

    def __init__(self, name: str = "registry"):
        self.name = name
        self._bindings: dict[Any, Binding] = {}
        self._lock = threading.RLock()

    def register(
        self,
        capability: CapabilityKey,
        producer: Callable[[], Any],
        singleton: bool = False,
    ) -> None:
        """Bind a capability to a producer.

        Args:
            capability: The class, protocol or key the producer satisfies.
            producer: Zero-argument callable returning an instance of the capability.
            singleton: If True, the producer is invoked once, immediately, and its
                result is returned on every resolution. Otherwise the producer is
                invoked on every resolution.
        """
        with self._lock:
            binding = Singleton(producer()) if singleton else Factory(producer)
            self._bind(capability, binding)

    def register_instance(self, capability: CapabilityKey, instance: Any) -> None:
        """Bind a capability to an already-constructed instance.

        An instance cannot be re-created, so the binding is always a singleton:
        every resolution returns this same object.
        """
        with self._lock:
            self._bind(capability, Singleton(instance))

    def provides(self, capability: CapabilityKey, singleton: bool = False) -> Callable:
        """Decorator to register a zero-argument function or class as a producer.

        Args:
            capability: The capability the decorated producer satisfies.
            singleton: Whether to build a single shared instance at registration.

        Returns:
            A decorator that registers its target and returns it unchanged.

        Example:
            @registry.provides(Greeter, singleton=True)
            def make_greeter() -> Greeter:
                return ConsoleGreeter("Hello")
        """

        def decorator(producer):
            if not callable(producer):
                raise TypeError(f"{producer!r} is not a class or function")
            self.register(capability, producer, singleton)
            return producer

        return decorator

    def resolve(self, capability: CapabilityKey) -> Any:
        """Resolve a capability to an instance.

        Factory bindings produce a fresh instance on each call; singleton
        bindings always return the same instance.

        Raises:
            UnresolvedCapability: If the capability has no binding, or the bound
                value is not an instance of the capability type.
        """
        with self._lock:
            binding = self._bindings.get(capability_identity(capability))

        if binding is None:
            raise UnresolvedCapability(capability)

        value = binding.materialise()
        if not _conforms(value, capability):
            raise UnresolvedCapability(
                capability,
                f"is bound to {type(value).__name__}, which does not satisfy it",
            )
        return value

    def is_registered(self, capability: CapabilityKey) -> bool:
        with self._lock:
            return capability_identity(capability) in self._bindings

    def unregister(self, capability: CapabilityKey) -> None:
        """Remove the binding for a capability, if there is one."""
        with self._lock:
            if self._bindings.pop(capability_identity(capability), None) is not None:
                logger.debug("%s: unregistered %s", self.name, describe(capability))

    def clear(self) -> None:
        """Remove every binding."""
        with self._lock:
            self._bindings.clear()
        logger.debug("%s: cleared", self.name)

    @contextmanager
    def override(
        self,
        capability: CapabilityKey,
        producer: Optional[Callable[[], Any]] = None,
        *,
        instance: Any = UNSET,
        singleton: bool = False,
    ) -> Iterator[None]:
        """Temporarily replace the binding for a capability.

        Exactly one of ``producer`` or ``instance`` must be given. The previous
        binding (or the absence of one) is restored when the block exits.

        Example:
            with registry.override(Greeter, instance=FakeGreeter()):
                assert view_model().text() == "fake"
        """
        if (producer is None) == (instance is UNSET):
            raise TypeError("override() takes exactly one of producer or instance")

        identity = capability_identity(capability)
        with self._lock:
            previous = self._bindings.get(identity)
            if producer is not None:
                self.register(capability, producer, singleton)
            else:
                self.register_instance(capability, instance)
        try:
            yield
        finally:
            with self._lock:
                if previous is None:
                    self._bindings.pop(identity, None)
                else:
                    self._bindings[identity] = previous
            logger.debug("%s: restored %s", self.name, describe(capability))

    def __contains__(self, capability: CapabilityKey) -> bool:
        return self.is_registered(capability)

    def __len__(self) -> int:
        with self._lock:
            return len(self._bindings)

    def _bind(self, capability: CapabilityKey, binding: Binding):
        identity = capability_identity(capability)
        replaced = identity in self._bindings
        self._bindings[identity] = binding
        logger.debug(
            "%s: %s %s as %s",
            self.name,
            "replaced" if replaced else "registered",
            describe(capability),
            type(binding).__name__.lower(),
        )


def _conforms(value: Any, capability: Any) -> bool:
    """Check that a resolved value can be used as the requested capability.

    Only runtime classes can be checked. String keys, typing aliases and
    protocols that are not ``runtime_checkable`` are accepted as-is.

    Example:
        >>> _conforms(ConsoleGreeter(), Greeter)   # True
        >>> _conforms("text", Greeter)             # False
        >>> _conforms("text", "greeter")           # True
    """
    if not inspect.isclass(capability):
        return True
    try:
        return isinstance(value, capability)
    except TypeError:
        # non-runtime protocols and subscripted generics
        return True
