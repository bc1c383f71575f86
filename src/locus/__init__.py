"""Locus service locator.

Locus is a minimal dependency-injection registry. A capability (a class, ABC,
protocol or explicit string key) is bound to either a factory, invoked on every
resolution, or a singleton, built once at registration. Consumers resolve the
capability by identity and stay decoupled from concrete implementations, which
makes substituting test doubles trivial.

Key Features:
    - Factory and singleton bindings, replaced silently on re-registration
    - Explicit, isolated registries as well as a process-wide default
    - Injection points declared as class attributes
    - Temporary overrides for test doubles
    - Resolution fails fast with UnresolvedCapability

Basic Usage:
    >>> from locus.registry import Registry
    >>> from locus.injection import Inject
    >>>
    >>> registry = Registry()
    >>> registry.register(Greeter, lambda: ConsoleGreeter("Hello"), singleton=True)
    >>>
    >>> class ViewModel:
    ...     greeter = Inject(Greeter, registry)
    >>>
    >>> ViewModel().greeter.text()
    'Hello'

The package consists of these modules:
    - registry: Registry of capability bindings and resolution
    - locator: Process-wide default registry and module-level shortcuts
    - injection: Injection point descriptor and class decorator
    - domain: Core domain models (Factory, Singleton, capability identity)
    - errors: Library-specific exceptions
"""
