"""
Lifecycle integration: make a class stash its tracked properties when it is
destroyed and get them back when it is recreated.

Two equivalent forms:

Decorator (wraps an existing class):
    @statefuld(['filter_text', 'sort_column'])
    class HeroList:
        def __init__(self, project):
            self.statefuld_key = project

Base class (when decorating is not an option):
    class HeroList(statefuld_base(TrackingConfig(props=['filter_text'], key_prop='project'))):
        ...

The host framework calls on_init() after the object is set up (key property
assigned) and on_destroy() before dropping it. lifecycle() does both around a
with-block:

    with lifecycle(HeroList('apollo')) as view:
        view.filter_text = 'ada'
    # filter_text stashed; the next HeroList('apollo') gets it back in on_init()

The class's own on_init/on_destroy, if any, still run: after reassign and
after stash respectively. Subclasses of statefuld_base() that override them
must call super().
"""
from contextlib import contextmanager
import logging
from typing import Any, Generator, Optional, Union

from statefuld.config import TrackingConfig
from statefuld.global_registry import get_default_registry
from statefuld.property_access import MISSING, read_prop
from statefuld.registry import StatefuldRegistry

logger = logging.getLogger(__name__)


class StatefuldMixin:
    """Behaviour shared by decorated classes and statefuld_base() subclasses.

    Reads its settings from the class attribute __statefuld__ (a TrackingConfig).
    """
    __statefuld__: TrackingConfig
    # Watchdog: on_init is expected before on_destroy
    _statefuld_destroyed = False

    def __init__(self, *args, **kwargs):
        tracking = type(self).__statefuld__
        # Registered before the wrapped __init__ so it may call on_init() itself
        self.statefuld_registry.register_class(
            self.statefuld_class_id,
            tracking.props,
            tracking.key_prop,
            tracking.source_lookup,
        )
        super().__init__(*args, **kwargs)
        if read_prop(self, tracking.key_prop) is MISSING:
            setattr(self, tracking.key_prop, None)

    @property
    def statefuld_class_id(self) -> str:
        return type(self).__statefuld__.class_id or type(self).__name__

    @property
    def statefuld_registry(self) -> StatefuldRegistry:
        registry = type(self).__statefuld__.registry
        return registry if registry is not None else get_default_registry()

    def statefuld_stash(self) -> bool:
        """Stash this object's tracked properties (see StatefuldRegistry.stash)."""
        return self.statefuld_registry.stash(self, self.statefuld_class_id)

    def statefuld_reassign(self) -> bool:
        """Restore this object's tracked properties (see StatefuldRegistry.reassign)."""
        return self.statefuld_registry.reassign(self, self.statefuld_class_id)

    def statefuld_switch(self, branch_id: Optional[str] = None) -> bool:
        """Switch the registry branch (see StatefuldRegistry.switch)."""
        return self.statefuld_registry.switch(branch_id)

    def on_init(self) -> None:
        if self._statefuld_destroyed:
            logger.warning(f"Unexpected order of init/destroy, class: {self.statefuld_class_id}")

        self.statefuld_reassign()
        parent_hook = getattr(super(), 'on_init', None)
        if parent_hook is not None:
            parent_hook()

    def on_destroy(self) -> None:
        self._statefuld_destroyed = True

        self.statefuld_stash()
        parent_hook = getattr(super(), 'on_destroy', None)
        if parent_hook is not None:
            parent_hook()


def statefuld(config: Union[TrackingConfig, list, tuple]):
    """
    Class decorator: persist the configured properties across destroy/recreate.

    Args:
        config: TrackingConfig, or just the list of property names to persist
            (key property 'statefuld_key', default registry)

    Returns:
        Decorator producing a subclass with the same name that mixes in
        StatefuldMixin.
    """
    tracking = TrackingConfig.coerce(config)

    def decorator(cls: type) -> type:
        namespace = {
            '__statefuld__': tracking,
            '__module__': cls.__module__,
            '__qualname__': cls.__qualname__,
            '__doc__': cls.__doc__,
        }
        if issubclass(cls, StatefuldMixin):
            # Already tracked through a decorated base: only the config changes
            return type(cls.__name__, (cls,), namespace)
        return type(cls.__name__, (StatefuldMixin, cls), namespace)
    return decorator


def statefuld_base(config: Union[TrackingConfig, list, tuple]) -> type:
    """
    Base class factory, alternative to the @statefuld decorator.

    The class id is the concrete subclass name unless TrackingConfig.class_id
    is set.
    """
    tracking = TrackingConfig.coerce(config)
    return type('StatefuldBase', (StatefuldMixin,), {'__statefuld__': tracking})


@contextmanager
def lifecycle(obj: Any) -> Generator[Any, None, None]:
    """Run obj.on_init() on entry and obj.on_destroy() on exit.

    on_destroy() runs even when the block raises, so edits made so far are
    stashed.
    """
    obj.on_init()
    try:
        yield obj
    finally:
        obj.on_destroy()
