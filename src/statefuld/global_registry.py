"""
Process default registry.

Code that owns its StatefuldRegistry should pass it around explicitly. The
lifecycle decorator needs a registry without a caller to hand one over, so
this module holds a default that the application's composition root can
replace at startup (and tests can reset).
"""
import logging
from typing import Optional

from statefuld.config import RegistryConfig
from statefuld.registry import StatefuldRegistry

logger = logging.getLogger(__name__)

_default_registry: Optional[StatefuldRegistry] = None


def get_default_registry() -> StatefuldRegistry:
    """Get the process default registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = StatefuldRegistry()
        logger.debug("Created default StatefuldRegistry")
    return _default_registry


def set_default_registry(registry: StatefuldRegistry) -> None:
    """Install registry as the process default.

    Called by the composition root at startup, before any lifecycle-managed
    object is constructed.
    """
    global _default_registry
    _default_registry = registry


def reset_default_registry(config: Optional[RegistryConfig] = None) -> StatefuldRegistry:
    """Replace the default registry with a fresh one and return it."""
    registry = StatefuldRegistry(config)
    set_default_registry(registry)
    return registry
