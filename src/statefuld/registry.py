"""
StatefuldRegistry: in-memory cache of object property values keyed by
class, branch and instance.

Objects that get destroyed and recreated (editor panels, view models, list
rows) stash a chosen subset of their properties before going away and have
them reassigned when an equivalent object shows up again.

    registry = StatefuldRegistry()
    registry.register_class('Hero', ['name', 'bio'])
    registry.stash({'id': 'h1', 'name': 'Ada'}, 'Hero')
    hero = {'id': 'h1'}
    registry.reassign(hero, 'Hero')   # hero == {'id': 'h1', 'name': 'Ada'}

Branches isolate pools of instances (one per workspace/project). The current
branch is registry-wide and selected with switch().

Failures never raise: every operation returns a bool, logs the reason and
records it in last_failure.
"""
from contextlib import nullcontext
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from statefuld.config import RegistryConfig, SourceLookup
from statefuld.failures import Failure
from statefuld.property_access import read_defined, type_name_of, write_prop
from statefuld.store_model import ClassNode

logger = logging.getLogger(__name__)


class StatefuldRegistry:
    """Registry of tracked classes and their branch-scoped instance records.

    Thread safety: lock-free unless RegistryConfig.thread_safe is set, in which
    case every public operation runs under one re-entrant lock.
    """

    def __init__(self, config: Optional[RegistryConfig] = None):
        self.config = config or RegistryConfig()
        self._classes: Dict[str, ClassNode] = {}
        self._current_branch: str = self.config.default_branch
        self._lock = threading.RLock() if self.config.thread_safe else nullcontext()
        self.last_failure: Optional[Failure] = None

    # ========== REGISTRATION ==========

    def register_class(
        self,
        subject: Any,
        tracked_props: Optional[Iterable[str]],
        key_prop: Optional[str] = None,
        source_lookup: Optional[SourceLookup] = None,
    ) -> bool:
        """Create the storage node for a class.

        Args:
            subject: Class id string, a class, or an instance whose type name is used
            tracked_props: Names of the properties to persist (must be non-empty)
            key_prop: Property holding the instance id (default from config, 'id')
            source_lookup: Optional callback instance_id -> live object, used by stash_by_key()

        Returns:
            True if the class was registered; False if it already was or
            tracked_props is empty. The first registration always wins.
        """
        class_id = type_name_of(subject)
        with self._lock:
            if class_id in self._classes:
                logger.debug(f"Class already registered, keeping first registration: {class_id}")
                return self._fail(Failure.DUPLICATE_REGISTRATION)

            if isinstance(tracked_props, str):
                tracked_props = [tracked_props]
            props = tuple(dict.fromkeys(tracked_props or ()))
            if not props:
                logger.warning(f"Refusing to register class with empty props specification: {class_id}")
                return self._fail(Failure.INVALID_REGISTRATION)

            self._classes[class_id] = ClassNode(
                class_id=class_id,
                tracked_props=props,
                key_prop=key_prop if key_prop is not None else self.config.default_key_prop,
                source_lookup=source_lookup,
            )
            logger.debug(f"Registered class: {class_id} (props={list(props)}, key_prop={self._classes[class_id].key_prop})")
            return self._succeed()

    # ========== STASH / REASSIGN ==========

    def stash(self, payload: Any, forced_class_id: Optional[str] = None,
              forced_instance_id: Any = None) -> bool:
        """Store the tracked properties of payload in the current branch.

        Merges field by field: tracked properties undefined on payload keep
        their previously stored value.

        Args:
            payload: Mapping or object to read tracked properties from
            forced_class_id: Class id, if payload's type name is not it
            forced_instance_id: Instance id, if payload has no usable key property

        Returns:
            True if stored
        """
        with self._lock:
            class_node = self._resolve_class(payload, forced_class_id, "store")
            if class_node is None:
                return False
            instance_id = self._resolve_instance_id(payload, class_node, forced_instance_id, "store")
            if instance_id is None:
                return False

            branch = class_node.ensure_branch(self._current_branch)
            record = branch.ensure_record(instance_id)
            for prop in class_node.tracked_props:
                defined, value = read_defined(payload, prop, self.config.skip_none_values)
                if defined:
                    record.merge(prop, value)

            logger.debug(f"Stashed {class_node.class_id}/{self._current_branch}/{instance_id}: {sorted(record.values)}")
            return self._succeed()

    def reassign(self, target: Any, forced_class_id: Optional[str] = None,
                 forced_instance_id: Any = None) -> bool:
        """Write stored property values from the current branch onto target.

        Read-only against the registry. On any miss target is left unchanged.

        Args:
            target: Mapping or object to write stored values into
            forced_class_id: Class id, if target's type name is not it
            forced_instance_id: Instance id, if target has no usable key property

        Returns:
            True if a record was found and applied
        """
        with self._lock:
            class_node = self._resolve_class(target, forced_class_id, "assign")
            if class_node is None:
                return False
            instance_id = self._resolve_instance_id(target, class_node, forced_instance_id, "assign")
            if instance_id is None:
                return False

            branch = class_node.get_branch(self._current_branch)
            if branch is None:
                logger.debug(f"Nothing stored yet for {class_node.class_id} in branch {self._current_branch!r}")
                return self._fail(Failure.CACHE_MISS)
            record = branch.get_record(instance_id)
            if record is None:
                logger.debug(
                    f"Nothing stored yet for {class_node.class_id}/{instance_id} in branch {self._current_branch!r}"
                )
                return self._fail(Failure.CACHE_MISS)

            for prop in class_node.tracked_props:
                if prop in record.values:
                    write_prop(target, prop, record.values[prop])

            logger.debug(f"Reassigned {class_node.class_id}/{self._current_branch}/{instance_id}")
            return self._succeed()

    def stash_by_key(self, class_id: str, instance_id: Any, forced_payload: Any = None) -> bool:
        """Stash an instance the caller does not hold, fetched via the class's source_lookup.

        Args:
            class_id: Registered class id
            instance_id: Instance id; also the argument passed to source_lookup
            forced_payload: Object to stash instead of calling source_lookup

        Returns:
            Result of stash(); False if the class is unknown or no payload is available
        """
        with self._lock:
            class_node = self._classes.get(class_id)
            if class_node is None:
                logger.info(f"Cannot stash by key, class not registered: {class_id}")
                return self._fail(Failure.UNKNOWN_CLASS)

            payload = forced_payload
            if payload is None:
                if class_node.source_lookup is None:
                    logger.warning(f"Cannot stash by key, no payload given and no source_lookup registered: {class_id}")
                    return self._fail(Failure.NO_SOURCE)
                payload = class_node.source_lookup(instance_id)
                if payload is None:
                    logger.warning(f"source_lookup returned nothing for {class_id}/{instance_id}")
                    return self._fail(Failure.NO_SOURCE)

            return self.stash(payload, class_id, instance_id)

    # ========== BRANCHES ==========

    @property
    def current_branch(self) -> str:
        return self._current_branch

    @property
    def default_branch(self) -> str:
        return self.config.default_branch

    def switch(self, branch_id: Optional[str] = None) -> bool:
        """Select the branch used by subsequent stash/reassign calls.

        Calling without a branch returns to the default branch. Switching never
        creates branch records; a fresh branch starts empty until stashed into.
        """
        with self._lock:
            if branch_id is None:
                branch_id = self.config.default_branch
            if branch_id != self._current_branch:
                logger.debug(f"Switched branch: {self._current_branch!r} -> {branch_id!r}")
                self._current_branch = branch_id
            return self._succeed()

    # ========== INSPECTION ==========

    def is_registered(self, class_id: str) -> bool:
        with self._lock:
            return class_id in self._classes

    def get_class_node(self, class_id: str) -> Optional[ClassNode]:
        with self._lock:
            return self._classes.get(class_id)

    def list_classes(self) -> List[str]:
        with self._lock:
            return list(self._classes)

    def list_branches(self, class_id: str) -> List[str]:
        """Branches materialized so far for a class (empty if unknown)."""
        with self._lock:
            class_node = self._classes.get(class_id)
            return list(class_node.branches) if class_node else []

    def get_record(self, class_id: str, instance_id: Any,
                   branch_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Copy of the values stored for an instance, or None.

        Args:
            class_id: Registered class id
            instance_id: Instance id
            branch_id: Branch to look in (default: current branch)
        """
        with self._lock:
            class_node = self._classes.get(class_id)
            if class_node is None:
                return None
            branch = class_node.get_branch(branch_id if branch_id is not None else self._current_branch)
            record = branch.get_record(instance_id) if branch else None
            return record.to_dict() if record else None

    def to_dict(self) -> Dict[str, Any]:
        """Export the whole store as nested plain dicts (debugging only)."""
        with self._lock:
            return {
                'current_branch': self._current_branch,
                'classes': {
                    class_id: node.to_dict()
                    for class_id, node in self._classes.items()
                },
            }

    def clear(self) -> None:
        """Drop every class and return to the default branch. For testing only."""
        with self._lock:
            self._classes.clear()
            self._current_branch = self.config.default_branch
            self.last_failure = None
            logger.debug("Cleared all classes from registry")

    # ========== INTERNALS ==========

    def _resolve_class(self, subject: Any, forced_class_id: Optional[str], action: str) -> Optional[ClassNode]:
        class_id = forced_class_id if forced_class_id is not None else type_name_of(subject)
        class_node = self._classes.get(class_id)
        if class_node is None:
            logger.info(f"Cannot {action} values, class not registered: {class_id}")
            self._fail(Failure.UNKNOWN_CLASS)
        return class_node

    def _resolve_instance_id(self, subject: Any, class_node: ClassNode,
                             forced_instance_id: Any, action: str) -> Any:
        if forced_instance_id is not None:
            return forced_instance_id
        # An id is never None, whatever skip_none_values says
        defined, instance_id = read_defined(subject, class_node.key_prop, skip_none=True)
        if not defined:
            logger.warning(
                f"Cannot {action} values without an instance id. Class/keyProp: "
                f"{class_node.class_id}/{class_node.key_prop}"
            )
            self._fail(Failure.MISSING_IDENTIFIER)
            return None
        return instance_id

    def _fail(self, failure: Failure) -> bool:
        self.last_failure = failure
        return False

    def _succeed(self) -> bool:
        self.last_failure = None
        return True
