from typing import Any

from locus.domain import describe

__all__ = ["UnresolvedCapability"]


class UnresolvedCapability(Exception):
    """Raised when a capability has no binding or its binding produces the wrong type."""

    def __init__(self, capability: Any, reason: str = "is not registered"):
        self.capability = capability
        super().__init__(f"Capability <{describe(capability)}> {reason}")
