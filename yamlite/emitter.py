"""Writing scalars, key/value lines and flow sequences.

Scalars are quoted only when they have to be: a character outside the
``' '``..``'z'`` range or one of the YAML indicators makes
:func:`create_safe_scalar` wrap the text in quotes. No escaping is done, so
the output can be read back by :mod:`yamlite.scanner` unchanged.

Example:
    >>> create_key_value('url', 'http://example.com')
    "url: 'http://example.com'\\n"
    >>> create_key_value_seq('ports', [80, 443])
    'ports: [80, 443]\\n'
"""

import math
import numbers

from .error import YAMLError
from .resolver import Resolver

TABLE_SIZE = 256
LOWER_BOUND = ' '
UPPER_BOUND = 'z'
SPECIAL_CHARS = frozenset('!"#$%&\'*,-/:<=>?@[\\]`')
QUOTES = '\'"'


class EmitterError(YAMLError):
    """A value cannot be written in the supported subset."""
    pass


class SpecialChars:
    """What :func:`get_special_chars` found in a scalar.

    Positions are character offsets, or None when there is no such character.

    Attributes:
        has_special_chars: True if the scalar needs quotes
        first_special_pos: Position of the earliest special character
        first_single_quote: Position of the first "'"
        first_double_quote: Position of the first '"'
        special_char: The character at ``first_special_pos``
    """

    __slots__ = ('has_special_chars', 'first_special_pos', 'first_single_quote',
                 'first_double_quote', 'special_char')

    def __init__(self, has_special_chars=False, first_special_pos=None,
                 first_single_quote=None, first_double_quote=None, special_char=None):
        self.has_special_chars = has_special_chars
        self.first_special_pos = first_special_pos
        self.first_single_quote = first_single_quote
        self.first_double_quote = first_double_quote
        self.special_char = special_char

    def __bool__(self):
        return self.has_special_chars

    def __repr__(self):
        if not self.has_special_chars:
            return 'SpecialChars(none)'
        return 'SpecialChars(%r at %d)' % (self.special_char, self.first_special_pos)


def _is_special(code):
    ch = chr(code)
    return ch < LOWER_BOUND or ch > UPPER_BOUND or ch in SPECIAL_CHARS


def get_special_chars(scalar):
    """Classify ``scalar`` for writing; see :class:`SpecialChars`."""
    if not scalar:
        return SpecialChars()
    # already quoted
    if len(scalar) >= 2 and scalar[0] in QUOTES and scalar[0] == scalar[-1]:
        return SpecialChars()

    # first occurrence of every code; code points past 0xff share the last slot
    first_pos = [None] * TABLE_SIZE
    for i, ch in enumerate(scalar):
        code = min(ord(ch), TABLE_SIZE - 1)
        if first_pos[code] is None:
            first_pos[code] = i

    lowest = None
    for code, pos in enumerate(first_pos):
        if pos is not None and _is_special(code) and (lowest is None or pos < lowest):
            lowest = pos

    if lowest is None:
        return SpecialChars()
    return SpecialChars(True, lowest, first_pos[ord("'")], first_pos[ord('"')],
                        scalar[lowest])


def create_safe_scalar(scalar):
    """Return ``scalar`` quoted if needed so it reads back as the same text.

    Raises:
        EmitterError: ``scalar`` contains both kinds of quote
    """
    special = get_special_chars(scalar)
    if not special.has_special_chars:
        return scalar
    return _quote(scalar)


def _quote(scalar):
    has_single = "'" in scalar
    if has_single and '"' in scalar:
        raise EmitterError("cannot write %r: it contains both ' and \" and escapes "
                           "are not supported" % (scalar,))
    quote = '"' if has_single else "'"
    return quote + scalar + quote


_RESOLVER = Resolver()


def _format_text(text):
    # text a reader would type as null, bool or a number keeps its quotes
    if _RESOLVER.resolve(text) != _RESOLVER.DEFAULT_SCALAR_TAG:
        return _quote(text)
    return create_safe_scalar(text)


def _format_scalar(value):
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return 'null'
    if isinstance(value, float):
        if math.isnan(value):
            return '.nan'
        if math.isinf(value):
            return '.inf' if value > 0 else '-.inf'
    if isinstance(value, numbers.Number):
        return str(value)
    return _format_text(str(value))


def create_key_value(tag, scalar):
    """Return the line ``tag: scalar`` with ``scalar`` made safe."""
    return '%s: %s\n' % (tag, create_safe_scalar(scalar))


def create_sequence(items):
    """Return a flow sequence such as ``[1, 2, 'a:b']``.

    Numbers are written as they are (``.inf``/``.nan`` for the special
    floats); other values go through :func:`create_safe_scalar`, and text
    that would read back as another type is quoted.
    """
    return '[' + ', '.join(_format_scalar(item) for item in items) + ']'


def create_key_value_seq(tag, items):
    """Return the line ``tag: [item, ...]``."""
    return '%s: %s\n' % (tag, create_sequence(items))


def _is_sequence(value):
    return isinstance(value, (list, tuple, set, frozenset))


def _dump_lines(data, indent, depth):
    prefix = ' ' * (indent * depth)
    for key, value in data.items():
        tag = prefix + _format_text(str(key))
        if isinstance(value, dict):
            if value:
                yield '%s:\n' % tag
                yield from _dump_lines(value, indent, depth + 1)
            else:
                yield '%s: {}\n' % tag
        elif _is_sequence(value):
            for item in value:
                if isinstance(item, dict) or _is_sequence(item):
                    raise EmitterError("cannot write %r: sequence items must be scalars"
                                       % (key,))
            yield create_key_value_seq(tag, value)
        else:
            yield '%s: %s\n' % (tag, _format_scalar(value))


def dumps(data, indent=2):
    """Serialize a mapping as block-style text.

    Values may be scalars, sequences of scalars (written in flow style) or
    nested mappings. Strings that would read back as null, a boolean or a
    number are quoted, so ``loads(dumps(data)) == data`` for such values.
    """
    if not isinstance(data, dict):
        raise EmitterError("expected a mapping at the document root, got %s"
                           % type(data).__name__)
    if indent < 1:
        raise ValueError("indent must be positive, got %r" % indent)
    return ''.join(_dump_lines(data, indent, 0))


def dump(data, stream, **kwargs):
    """Write :func:`dumps` output to the text stream ``stream``."""
    stream.write(dumps(data, **kwargs))
