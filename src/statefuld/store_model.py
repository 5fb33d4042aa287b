"""
Node dataclasses for the StatefuldRegistry storage hierarchy.

Storage is four levels of dicts, each keyed by the id of its child:

    registry.classes[class_id]          -> ClassNode
    class_node.branches[branch_id]      -> Branch
    branch.instances[instance_id]       -> InstanceRecord
    record.values[prop_name]            -> stored value (opaque)

Branches and records are created lazily by stash(); nothing here creates
them on its own.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple


@dataclass
class InstanceRecord:
    """Persisted property values of one object instance within one branch."""
    instance_id: Any
    values: Dict[str, Any] = field(default_factory=dict)

    def merge(self, prop: str, value: Any) -> None:
        """Upsert a single property value."""
        self.values[prop] = value

    def to_dict(self) -> Dict:
        """Export to a plain dict (values are not copied)."""
        return dict(self.values)


@dataclass
class Branch:
    """Isolated pool of instance records for one class."""
    branch_id: str
    instances: Dict[Any, InstanceRecord] = field(default_factory=dict)

    def get_record(self, instance_id: Any) -> Optional[InstanceRecord]:
        return self.instances.get(instance_id)

    def ensure_record(self, instance_id: Any) -> InstanceRecord:
        """Return the record for instance_id, creating an empty one if missing."""
        record = self.instances.get(instance_id)
        if record is None:
            record = InstanceRecord(instance_id=instance_id)
            self.instances[instance_id] = record
        return record

    def to_dict(self) -> Dict:
        return {
            instance_id: record.to_dict()
            for instance_id, record in self.instances.items()
        }


@dataclass
class ClassNode:
    """Registration of one class: which props to persist and how to key instances.

    tracked_props, key_prop and source_lookup are fixed at registration.
    Only branches grows over time.
    """
    class_id: str
    tracked_props: Tuple[str, ...]
    key_prop: str
    source_lookup: Optional[Callable[[Any], Any]] = None
    branches: Dict[str, Branch] = field(default_factory=dict)

    def get_branch(self, branch_id: str) -> Optional[Branch]:
        return self.branches.get(branch_id)

    def ensure_branch(self, branch_id: str) -> Branch:
        """Return the branch, creating an empty one if missing."""
        branch = self.branches.get(branch_id)
        if branch is None:
            branch = Branch(branch_id=branch_id)
            self.branches[branch_id] = branch
        return branch

    def to_dict(self) -> Dict:
        """Export to a plain dict for debugging and tests."""
        return {
            'class_id': self.class_id,
            'tracked_props': list(self.tracked_props),
            'key_prop': self.key_prop,
            'has_source_lookup': self.source_lookup is not None,
            'branches': {
                branch_id: branch.to_dict()
                for branch_id, branch in self.branches.items()
            },
        }
