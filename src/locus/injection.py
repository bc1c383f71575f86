"""Injection points: class attributes populated by resolving a capability."""

import functools
from typing import Any, Optional

from locus import locator
from locus.domain import CapabilityKey, describe
from locus.registry import Registry

__all__ = ["Inject", "injectable"]


class Inject:
    """Descriptor declaring an injection point on a class.

    Declaring an injection point hooks the owning class's ``__init__`` so the
    capability is resolved once, when each instance is constructed, and the
    result is stored on that instance. A missing binding therefore raises from
    the constructor, and re-registering the capability afterwards does not
    affect instances already built.

    Subclasses that define their own ``__init__`` without calling the base
    initialiser fall back to resolving on first access, unless they are
    decorated with :func:`injectable`.

    Example:
        >>> class ViewModel:
        ...     greeter = Inject(Greeter)
        ...
        ...     def text(self) -> str:
        ...         return self.greeter.text()
    """

    def __init__(self, capability: CapabilityKey, registry: Optional[Registry] = None):
        self.capability = capability
        self._registry = registry
        self.attribute_name: Optional[str] = None

    def __set_name__(self, owner: type, name: str):
        self.attribute_name = name
        _resolve_on_init(owner)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        value = self.resolve()
        # instance attribute shadows this non-data descriptor from now on
        instance.__dict__[self.attribute_name] = value
        return value

    def resolve(self) -> Any:
        return self.registry.resolve(self.capability)

    @property
    def registry(self) -> Registry:
        if self._registry is not None:
            return self._registry
        return locator.default_registry

    def __repr__(self) -> str:
        return f"Inject({describe(self.capability)})"


def injectable(cls: type) -> type:
    """Class decorator resolving every :class:`Inject` field at construction.

    Classes declaring :class:`Inject` fields get this behaviour already. The
    decorator is for subclasses whose own ``__init__`` does not call the base
    initialiser, and for classes whose ``__init__`` is generated after the
    class body runs, such as dataclasses.

    Fields declared on base classes are included. A missing binding raises
    :class:`locus.errors.UnresolvedCapability` from the constructor, before
    the class's own ``__init__`` body runs.
    """
    _resolve_on_init(cls)
    return cls


def _resolve_on_init(cls: type):
    original_init = cls.__init__
    if cls.__dict__.get("__init__") is not None and getattr(
        original_init, "__resolves_injections__", False
    ):
        return

    @functools.wraps(original_init)
    def __init__(self, *args, **kwargs):
        for name, injection in _injection_points(type(self)):
            if name not in self.__dict__:
                self.__dict__[name] = injection.resolve()
        original_init(self, *args, **kwargs)

    __init__.__resolves_injections__ = True
    cls.__init__ = __init__


def _injection_points(cls: type) -> list[tuple[str, Inject]]:
    seen = {}
    for klass in reversed(cls.__mro__):
        for name, attribute in vars(klass).items():
            if isinstance(attribute, Inject):
                seen[name] = attribute
            elif name in seen:
                del seen[name]
    return list(seen.items())
