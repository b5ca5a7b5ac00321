"""Factory implementations for creating Idgate components."""

from idgate.factories.google import GoogleFactory
from idgate.factories.static import StaticFactory

__all__ = [
    "GoogleFactory",
    "StaticFactory",
]
