"""Failure taxonomy for registry operations.

Registry operations never raise for these conditions; they return False and
record the reason in StatefuldRegistry.last_failure.
"""
from enum import Enum


class Failure(Enum):
    """Why the last registry operation returned False."""
    DUPLICATE_REGISTRATION = "duplicate_registration"
    INVALID_REGISTRATION = "invalid_registration"
    UNKNOWN_CLASS = "unknown_class"
    MISSING_IDENTIFIER = "missing_identifier"
    CACHE_MISS = "cache_miss"
    NO_SOURCE = "no_source"
