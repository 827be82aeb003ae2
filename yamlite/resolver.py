"""Implicit typing of scalar text (YAML 1.2 core schema)."""

import re

from .error import YAMLError


class ResolverError(YAMLError):
    pass


def _construct_null(value):
    return None


def _construct_bool(value):
    return value.lower() == 'true'


def _construct_int(value):
    sign = 1
    if value[0] in '+-':
        if value[0] == '-':
            sign = -1
        value = value[1:]
    if value.startswith('0o'):
        return sign * int(value[2:], 8)
    if value.startswith('0x'):
        return sign * int(value[2:], 16)
    return sign * int(value)


def _construct_float(value):
    lowered = value.lower()
    if lowered.endswith('.inf'):
        return float('-inf') if lowered.startswith('-') else float('inf')
    if lowered == '.nan':
        return float('nan')
    return float(value)


class BaseResolver:
    """Maps scalar text to a tag, and a tag to a Python value.

    Resolvers are looked up by the first character of the scalar, then
    tried in registration order; text nothing matches stays a string.
    """
    yaml_implicit_resolvers = {}
    yaml_constructors = {}

    DEFAULT_SCALAR_TAG = 'tag:yaml.org,2002:str'

    @classmethod
    def add_implicit_resolver(cls, tag, regexp, first, constructor=None):
        """Register ``regexp`` for ``tag``; ``first`` lists the possible leading characters."""
        if 'yaml_implicit_resolvers' not in cls.__dict__:
            cls.yaml_implicit_resolvers = {
                key: list(value) for key, value in cls.yaml_implicit_resolvers.items()}
        if 'yaml_constructors' not in cls.__dict__:
            cls.yaml_constructors = cls.yaml_constructors.copy()
        if first is None:
            first = [None]
        for ch in first:
            cls.yaml_implicit_resolvers.setdefault(ch, []).append((tag, regexp))
        if constructor is not None:
            cls.yaml_constructors[tag] = constructor

    def resolve(self, value):
        """Return the tag implied by plain scalar text ``value``."""
        first = value[0] if value else ''
        for ch in (first, None):
            for tag, regexp in self.yaml_implicit_resolvers.get(ch, ()):
                if regexp.match(value):
                    return tag
        return self.DEFAULT_SCALAR_TAG

    def construct_scalar(self, value):
        """Return the Python value of scalar text ``value``."""
        tag = self.resolve(value)
        constructor = self.yaml_constructors.get(tag)
        if constructor is None:
            return value
        try:
            return constructor(value)
        except ValueError as e:
            raise ResolverError("cannot construct %s from %r: %s" % (tag, value, e))


class Resolver(BaseResolver):
    """Resolver with the core schema's null, bool, int and float rules."""
    pass


Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:null',
    re.compile(r'^(?:~|null|Null|NULL|)$'),
    ['~', 'n', 'N', ''],
    _construct_null)

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:bool',
    re.compile(r'^(?:true|True|TRUE|false|False|FALSE)$'),
    list('tTfF'),
    _construct_bool)

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:int',
    re.compile(r'^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$'),
    list('-+0123456789'),
    _construct_int)

Resolver.add_implicit_resolver(
    'tag:yaml.org,2002:float',
    re.compile(r'''^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
                |[-+]?\.(?:inf|Inf|INF)
                |\.(?:nan|NaN|NAN))$''', re.X),
    list('-+0123456789.'),
    _construct_float)
