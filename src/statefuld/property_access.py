"""
Uniform named-property access over mappings and plain objects.

The registry reads and writes arbitrary named properties on arbitrary
subjects. Mappings are accessed by item, everything else by attribute.
"""
from collections.abc import Mapping
from typing import Any, Tuple

# Returned by read_prop() when a property is absent
MISSING = object()


def read_prop(obj: Any, name: str) -> Any:
    """Return obj's property value, or MISSING if it has none."""
    if isinstance(obj, Mapping):
        return obj.get(name, MISSING)
    try:
        return getattr(obj, name)
    except AttributeError:
        return MISSING


def read_defined(obj: Any, name: str, skip_none: bool = True) -> Tuple[bool, Any]:
    """Read a property and tell whether it counts as defined.

    Args:
        obj: Mapping or object to read from
        name: Property name
        skip_none: If True, a None value counts as undefined

    Returns:
        (defined, value) tuple; value is None when undefined
    """
    value = read_prop(obj, name)
    if value is MISSING or (skip_none and value is None):
        return False, None
    return True, value


def write_prop(obj: Any, name: str, value: Any) -> None:
    """Set obj's property. Errors from read-only targets propagate."""
    if isinstance(obj, Mapping):
        obj[name] = value
    else:
        setattr(obj, name, value)


def type_name_of(subject: Any) -> str:
    """Class identifier for a subject: a str as-is, a class by name, else its type name."""
    if isinstance(subject, str):
        return subject
    if isinstance(subject, type):
        return subject.__name__
    return type(subject).__name__
