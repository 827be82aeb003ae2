"""
yamlite - streaming reader and writer for a small YAML subset

The reader makes one forward pass over the text and reports what it finds
to a handler object; nothing is buffered beyond the current token. The writer
produces ``key: value`` lines and flow sequences, quoting scalars only when
they would otherwise be misread.

Supported: block and flow mappings and sequences, plain and quoted scalars,
comments, ``%`` directive lines and ``---`` markers. Not supported: block
scalars (``|``, ``>``), anchors, aliases, tags, complex keys and escape
sequences inside quotes.

Example:
    >>> import yamlite
    >>> yamlite.loads("name: Alice\\nports: [80, 443]\\n")
    {'name': 'Alice', 'ports': [80, 443]}
    >>> yamlite.dumps({'name': 'Alice', 'ports': [80, 443]})
    'name: Alice\\nports: [80, 443]\\n'

Event-level access:
    >>> class Keys(yamlite.YamlHandler):
    ...     def __init__(self):
    ...         self.keys = []
    ...     def on_key(self, text):
    ...         self.keys.append(text)
    ...         return True
    >>> handler = Keys()
    >>> yamlite.parse("a: 1\\nb: 2\\n", handler)
    True
    >>> handler.keys
    ['a', 'b']
"""

from yamlite.error import YAMLError, MarkedYAMLError, Mark
from yamlite.handler import YamlHandler
from yamlite.nesting import NestingContext, NestingStack, NestingError
from yamlite.scanner import YamlParser, ScannerError, QuotedScalar, parse
from yamlite.events import (
    Event,
    DocumentStartEvent,
    DocumentEndEvent,
    SequenceStartEvent,
    SequenceEndEvent,
    MappingStartEvent,
    MappingEndEvent,
    KeyEvent,
    ScalarEvent,
    ErrorEvent,
    EventRecorder,
    parse_events,
)
from yamlite.resolver import Resolver, ResolverError
from yamlite.composer import Composer, ComposerError, load, loads
from yamlite.emitter import (
    EmitterError,
    SpecialChars,
    get_special_chars,
    create_safe_scalar,
    create_key_value,
    create_sequence,
    create_key_value_seq,
    dump,
    dumps,
)

__version__ = "0.3.0"

__all__ = [
    "YAMLError",
    "MarkedYAMLError",
    "Mark",
    "YamlHandler",
    "NestingContext",
    "NestingStack",
    "NestingError",
    "YamlParser",
    "ScannerError",
    "QuotedScalar",
    "parse",
    "Event",
    "DocumentStartEvent",
    "DocumentEndEvent",
    "SequenceStartEvent",
    "SequenceEndEvent",
    "MappingStartEvent",
    "MappingEndEvent",
    "KeyEvent",
    "ScalarEvent",
    "ErrorEvent",
    "EventRecorder",
    "parse_events",
    "Resolver",
    "ResolverError",
    "Composer",
    "ComposerError",
    "load",
    "loads",
    "EmitterError",
    "SpecialChars",
    "get_special_chars",
    "create_safe_scalar",
    "create_key_value",
    "create_sequence",
    "create_key_value_seq",
    "dump",
    "dumps",
]
