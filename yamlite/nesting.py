"""Bounded stack of open mapping and sequence scopes."""

import os

from .error import YAMLError

DEFAULT_MAX_DEPTH = 32
MAX_DEPTH_ENV = 'YAMLITE_MAX_DEPTH'


def default_max_depth():
    """Return the capacity used when none is given, honouring ``YAMLITE_MAX_DEPTH``."""
    value = os.environ.get(MAX_DEPTH_ENV)
    if value is None:
        return DEFAULT_MAX_DEPTH
    try:
        return int(value)
    except ValueError:
        raise ValueError("%s must be an integer, got %r" % (MAX_DEPTH_ENV, value)) from None


class NestingError(YAMLError):
    """Raised when a push would exceed the stack's fixed capacity."""
    pass


class NestingContext:
    """One open mapping or sequence.

    Attributes:
        level: Column offset the scope was opened at
        is_sequence: True for sequences, False for mappings
        is_flow: True when opened by '[' or '{' rather than by indentation
    """

    __slots__ = ('level', 'is_sequence', 'is_flow')

    def __init__(self, level=0, is_sequence=False, is_flow=False):
        self.level = level
        self.is_sequence = is_sequence
        self.is_flow = is_flow

    def __eq__(self, other):
        if not isinstance(other, NestingContext):
            return NotImplemented
        return (self.level, self.is_sequence, self.is_flow) == \
               (other.level, other.is_sequence, other.is_flow)

    def __repr__(self):
        kind = 'sequence' if self.is_sequence else 'mapping'
        if self.is_flow:
            kind = 'flow ' + kind
        return 'NestingContext(%s at %d)' % (kind, self.level)


class NestingStack:
    """Fixed-capacity stack that always holds the synthetic root context.

    The root sits at level 0 and is never popped by :meth:`pop`; levels grow
    strictly from the root upwards.
    """

    def __init__(self, max_depth=None):
        if max_depth is None:
            max_depth = default_max_depth()
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1, got %r" % max_depth)
        self.max_depth = max_depth
        self._contexts = [NestingContext()]

    def __len__(self):
        return len(self._contexts)

    def __iter__(self):
        return iter(self._contexts)

    @property
    def top(self):
        return self._contexts[-1]

    @property
    def at_root(self):
        return len(self._contexts) == 1

    def push(self, context):
        if len(self._contexts) >= self.max_depth:
            raise NestingError("nesting too deep (limit is %d levels)" % self.max_depth)
        self._contexts.append(context)

    def pop(self):
        if self.at_root:
            raise IndexError("cannot pop the root context")
        return self._contexts.pop()
