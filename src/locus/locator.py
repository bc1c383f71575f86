"""Process-wide service locator.

Applications that prefer a single shared registry can register their
capabilities here at startup and resolve them anywhere, including through
:class:`locus.injection.Inject` fields that name no explicit registry.

Example:
    >>> from locus import locator
    >>> locator.register(Greeter, lambda: ConsoleGreeter("Hello"), singleton=True)
    >>> locator.resolve(Greeter).text()
    'Hello'
"""

from typing import Any, Callable, ContextManager, Optional

from locus.domain import CapabilityKey
from locus.registry import UNSET, Registry

__all__ = [
    "default_registry",
    "register",
    "register_instance",
    "provides",
    "resolve",
    "override",
]


default_registry = Registry("default")


def register(
    capability: CapabilityKey, producer: Callable[[], Any], singleton: bool = False
) -> None:
    default_registry.register(capability, producer, singleton)


def register_instance(capability: CapabilityKey, instance: Any) -> None:
    default_registry.register_instance(capability, instance)


def provides(capability: CapabilityKey, singleton: bool = False) -> Callable:
    return default_registry.provides(capability, singleton)


def resolve(capability: CapabilityKey) -> Any:
    """Resolve a capability from the default registry.

    Raises:
        UnresolvedCapability: If nothing usable is registered for the capability.
    """
    return default_registry.resolve(capability)


def override(
    capability: CapabilityKey,
    producer: Optional[Callable[[], Any]] = None,
    *,
    instance: Any = UNSET,
    singleton: bool = False,
) -> ContextManager[None]:
    """Temporarily replace a binding in the default registry.

    See :meth:`locus.registry.Registry.override`.
    """
    return default_registry.override(
        capability, producer, instance=instance, singleton=singleton
    )
