"""Testing utilities for ipldtree consumers."""

from .fixtures import TokenRecorder

__all__ = ['TokenRecorder']
