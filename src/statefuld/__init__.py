"""
In-memory property cache for objects that are destroyed and recreated.

statefuld keeps a chosen subset of an object's properties when the object
goes away and puts them back when an equivalent object (same class id, same
instance key) is created again, e.g. a detail panel that is closed and
reopened, or a list row scrolled out of view and back.

Key Features:
- Four-level store: class -> branch -> instance -> property
- Field-level merge on stash (partial payloads never clear stored values)
- Branches isolating pools of instances per workspace/context
- Non-raising API: every operation returns a bool and logs why it failed
- Lifecycle decorator / base class wiring stash and reassign to on_destroy / on_init

Quick Start:
    >>> from statefuld import StatefuldRegistry
    >>>
    >>> registry = StatefuldRegistry()
    >>> registry.register_class('Hero', ['name', 'bio'])
    True
    >>> registry.stash({'id': 'h1', 'name': 'Ada', 'bio': 'Analyst'}, 'Hero')
    True
    >>> hero = {'id': 'h1'}
    >>> registry.reassign(hero, 'Hero')
    True
    >>> hero['name']
    'Ada'

Modules:
    - registry: StatefuldRegistry, the store and its operations
    - store_model: ClassNode / Branch / InstanceRecord node dataclasses
    - property_access: named property access over mappings and objects
    - config: RegistryConfig and TrackingConfig
    - failures: Failure enum recorded on unsuccessful operations
    - global_registry: process default registry for the lifecycle layer
    - lifecycle: @statefuld decorator, statefuld_base() and lifecycle()
"""

from statefuld.config import (
    RegistryConfig,
    TrackingConfig,
    DEFAULT_BRANCH,
    DEFAULT_KEY_PROP,
    LIFECYCLE_KEY_PROP,
)
from statefuld.failures import Failure
from statefuld.store_model import ClassNode, Branch, InstanceRecord
from statefuld.registry import StatefuldRegistry
from statefuld.global_registry import (
    get_default_registry,
    set_default_registry,
    reset_default_registry,
)
from statefuld.lifecycle import StatefuldMixin, statefuld, statefuld_base, lifecycle

__all__ = [
    # Configuration
    'RegistryConfig',
    'TrackingConfig',
    'DEFAULT_BRANCH',
    'DEFAULT_KEY_PROP',
    'LIFECYCLE_KEY_PROP',
    # Failures
    'Failure',
    # Store
    'ClassNode',
    'Branch',
    'InstanceRecord',
    'StatefuldRegistry',
    # Default registry
    'get_default_registry',
    'set_default_registry',
    'reset_default_registry',
    # Lifecycle
    'StatefuldMixin',
    'statefuld',
    'statefuld_base',
    'lifecycle',
]

__version__ = '1.0.0'
__description__ = 'In-memory property cache for destroyed and recreated objects'
