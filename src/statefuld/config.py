"""
Configuration dataclasses for statefuld.

RegistryConfig tunes a StatefuldRegistry (default branch, default key property,
None handling, locking). TrackingConfig describes what a lifecycle-managed
class persists (see statefuld.lifecycle).
"""
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from statefuld.registry import StatefuldRegistry

DEFAULT_BRANCH = "*"
DEFAULT_KEY_PROP = "id"
LIFECYCLE_KEY_PROP = "statefuld_key"

SourceLookup = Callable[[Any], Any]


@dataclass(frozen=True)
class RegistryConfig:
    """Behaviour switches for a StatefuldRegistry.

    Attributes:
        default_branch: Branch active at construction and after switch() with no argument.
        default_key_prop: Key property used when register_class() gets no key_prop.
        skip_none_values: Treat None like a missing property (not stashed, not an id).
        thread_safe: Guard every operation with a single re-entrant lock.
    """
    default_branch: str = DEFAULT_BRANCH
    default_key_prop: str = DEFAULT_KEY_PROP
    skip_none_values: bool = True
    thread_safe: bool = False


@dataclass(frozen=True)
class TrackingConfig:
    """What a lifecycle-managed class persists between destroy/recreate cycles.

    Attributes:
        props: Names of the properties to stash on destroy and reassign on init.
        key_prop: Property holding the instance id.
        class_id: Explicit class identifier (defaults to the runtime type name).
        source_lookup: Callback returning the live object for an instance id,
            used by StatefuldRegistry.stash_by_key().
        registry: Registry to use; None means the process default registry.
    """
    props: Iterable[str]
    key_prop: str = LIFECYCLE_KEY_PROP
    class_id: Optional[str] = None
    source_lookup: Optional[SourceLookup] = None
    registry: Optional['StatefuldRegistry'] = None

    @classmethod
    def coerce(cls, config: Any) -> 'TrackingConfig':
        """Accept either a TrackingConfig or a plain list of property names."""
        if isinstance(config, cls):
            return config
        if isinstance(config, (list, tuple, set, frozenset)):
            return cls(props=tuple(config))
        raise TypeError(
            f"Expected TrackingConfig or a list of property names, got {type(config).__name__}"
        )
