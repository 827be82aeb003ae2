"""Event objects for the reader's callbacks, and a handler that records them.

``str(event)`` gives a compact one-line form in the style of the YAML test
suite's event trees (``+MAP``, ``=KEY name``, ``-DOC``, ...).
"""

from .handler import YamlHandler
from .scanner import YamlParser


class Event:
    """Base class for all events."""
    code = None

    def _payload(self):
        return ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._payload() == other._payload()

    def __hash__(self):
        return hash((type(self).__name__,) + self._payload())

    def __repr__(self):
        args = ', '.join(repr(value) for value in self._payload())
        return '%s(%s)' % (self.__class__.__name__, args)

    def __str__(self):
        return self.code


class DocumentStartEvent(Event):
    code = '+DOC'


class DocumentEndEvent(Event):
    code = '-DOC'


class SequenceStartEvent(Event):
    code = '+SEQ'


class SequenceEndEvent(Event):
    code = '-SEQ'


class MappingStartEvent(Event):
    code = '+MAP'


class MappingEndEvent(Event):
    code = '-MAP'


class _TextEvent(Event):

    def __init__(self, value):
        self.value = value

    def _payload(self):
        return (self.value,)

    def __str__(self):
        return '%s %s' % (self.code, self.value)


class KeyEvent(_TextEvent):
    """A mapping key."""
    code = '=KEY'


class ScalarEvent(_TextEvent):
    """A value, including the synthesized 'null' of a key without one."""
    code = '=VAL'


class ErrorEvent(Event):
    """The error reported by a failed parse; line and column are 1-based."""
    code = '!ERR'

    def __init__(self, message, line, column):
        self.message = message
        self.line = line
        self.column = column

    def _payload(self):
        return (self.message, self.line, self.column)

    def __str__(self):
        return '%s %d:%d %s' % (self.code, self.line, self.column, self.message)


class EventRecorder(YamlHandler):
    """Handler that appends every callback to ``self.events``.

    Args:
        stop_after: Optional number of keys plus scalars to accept; the next
            one is refused, which stops the parse.
    """

    def __init__(self, stop_after=None):
        self.events = []
        self.stop_after = stop_after
        self._content = 0

    def _accept(self):
        self._content += 1
        return self.stop_after is None or self._content <= self.stop_after

    def on_start_document(self):
        self.events.append(DocumentStartEvent())

    def on_end_document(self):
        self.events.append(DocumentEndEvent())

    def on_start_sequence(self):
        self.events.append(SequenceStartEvent())

    def on_end_sequence(self):
        self.events.append(SequenceEndEvent())

    def on_start_mapping(self):
        self.events.append(MappingStartEvent())

    def on_end_mapping(self):
        self.events.append(MappingEndEvent())

    def on_key(self, text):
        if not self._accept():
            return False
        self.events.append(KeyEvent(text))
        return True

    def on_scalar(self, text):
        if not self._accept():
            return False
        self.events.append(ScalarEvent(text))
        return True

    def on_error(self, message, line, column):
        self.events.append(ErrorEvent(message, line, column))


def parse_events(text, **kwargs):
    """Parse ``text`` and return ``(ok, events)``.

    Keyword arguments are passed to :class:`~yamlite.scanner.YamlParser`.
    """
    recorder = EventRecorder()
    ok = YamlParser(text, recorder, **kwargs).parse()
    return ok, recorder.events
