"""Single-pass reader for the supported YAML subset.

:class:`YamlParser` walks the input once, front to back, with at most one
character of lookahead. While it walks it keeps a :class:`NestingStack` of
open mappings and sequences (driven by indentation and by ``[`` / ``{``),
cuts out plain and quoted scalars, and reports everything it finds to a
:class:`~yamlite.handler.YamlHandler`.

Example:
    >>> from yamlite.events import EventRecorder
    >>> recorder = EventRecorder()
    >>> YamlParser("key: value\\n", recorder).parse()
    True
    >>> [str(e) for e in recorder.events]
    ['+DOC', '=KEY key', '=VAL value', '-DOC']
"""

import codecs
import logging

from .error import Mark, MarkedYAMLError, YAMLError
from .nesting import NestingContext, NestingError, NestingStack

_LOGGER = logging.getLogger(__name__)

PLAIN_END = ',:\t\r\n]}#'
QUOTED_END = ':\t\r\n,]}#'
INDICATOR_FOLLOWERS = ' \r\n\0'
LINE_BREAKS = '\r\n'
UNSUPPORTED = '|>?&*!@`'
ERROR_SNIPPET_LENGTH = 12


class ScannerError(MarkedYAMLError):
    """Lexical or structural error found while reading."""
    pass


class QuotedScalar(str):
    """Text of a quoted scalar, as passed to ``on_key`` / ``on_scalar``.

    It compares equal to the plain text; ``style`` is the quote character
    that enclosed it. Consumers use it to leave quoted text untyped.
    """

    def __new__(cls, value, style="'"):
        self = super().__new__(cls, value)
        self.style = style
        return self


def decode_input(data):
    """Return the text to read from ``data``.

    Accepts text, UTF-8 bytes (a UTF-8 or UTF-16 BOM is honoured) or any
    object with a ``read()`` method returning either of those.
    """
    if hasattr(data, 'read'):
        data = data.read()
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data)
        try:
            if data.startswith(codecs.BOM_UTF16_BE):
                return data[len(codecs.BOM_UTF16_BE):].decode('utf-16-be')
            elif data.startswith(codecs.BOM_UTF16_LE):
                return data[len(codecs.BOM_UTF16_LE):].decode('utf-16-le')
            elif data.startswith(codecs.BOM_UTF8):
                return data[len(codecs.BOM_UTF8):].decode('utf-8')
            return data.decode('utf-8')
        except UnicodeError as e:
            raise YAMLError("failed to decode input: %s" % e)
    if not isinstance(data, str):
        raise TypeError("expected str, bytes or a readable stream, got %s"
                        % type(data).__name__)
    return data


class YamlParser:
    """Reads one input text and reports it to one handler.

    A parser is single-use: construct it, call :meth:`parse` once. The
    handler is borrowed, never copied; it must live as long as the call.

    Args:
        text: The input (see :func:`decode_input` for accepted types)
        handler: A :class:`~yamlite.handler.YamlHandler` (or any object with
            the same methods)
        name: Name of the input used in error marks
        max_depth: Capacity of the nesting stack, root context included

    Attributes:
        error: The :class:`ScannerError` of a failed parse, else None
    """

    def __init__(self, text, handler, name='<unicode string>', max_depth=None):
        self.text = decode_input(text)
        self.handler = handler
        self.name = name
        self.stack = NestingStack(max_depth)
        self.error = None

        self.pos = 0
        self.end = len(self.text)
        self.line = 1
        self.line_start = 0
        self.at_line_start = True
        # True while the last key still waits for its value
        self.key_pending = False
        self._used = False

    def parse(self):
        """Scan the whole input.

        Returns True on success. Returns False when the input is invalid
        (after calling ``handler.on_error``) or when the handler asked to
        stop; in both cases ``on_end_document`` is not called.
        """
        if self._used:
            raise RuntimeError("a YamlParser can only parse once")
        self._used = True

        self.handler.on_start_document()
        try:
            if not self._scan():
                _LOGGER.debug("parse of %s stopped by handler at line %d",
                              self.name, self.line)
                return False
        except ScannerError as exc:
            self.error = exc
            _LOGGER.debug("parse of %s failed: %s (line %s, column %s)",
                          self.name, exc.problem, exc.line, exc.column)
            self.handler.on_error(exc.problem, exc.line, exc.column)
            return False
        self.handler.on_end_document()
        return True

    # Main loop

    def _scan(self):
        text = self.text
        while self.pos < self.end:
            if self.at_line_start:
                self.at_line_start = False
                if not self.stack.top.is_flow and not self._check_indent():
                    return False
                if self.pos >= self.end:
                    break

            ch = text[self.pos]
            if ch == '-':
                following = self._peek_next()
                if following == ' ':
                    self._open_entry_mapping()
                elif following == '-':
                    self._skip_document_marker()
                elif not self._parse_node():
                    return False
            elif ch in ':,':
                self._skip_spaces()
            elif ch == '[' or ch == '{':
                self._open_flow(ch == '[')
            elif ch == ']' or ch == '}':
                if not self._close_flow(ch == ']'):
                    return False
            elif ch in '#%':
                self._skip_line()
            elif ch == '\n':
                self._new_line()
            elif ch in '\r ':
                self.pos += 1
            elif ch == '\0':
                self.end = self.pos
            elif ch == '\t':
                raise self._error("tab characters are not allowed")
            elif ch in UNSUPPORTED:
                raise self._error("'%s' is not supported" % ch)
            elif not self._parse_node():
                return False

        while not self.stack.at_root:
            if not self._pop():
                return False
        return self._resolve_pending_key()

    # Indentation

    def _check_indent(self):
        level, is_sequence = self._measure_indent()
        if level is None:
            return True
        if level > self.stack.top.level:
            self._push(NestingContext(level, is_sequence))
        else:
            while level < self.stack.top.level:
                if not self._pop():
                    return False
        if is_sequence and self.stack.top.is_sequence:
            return self._start_entry()
        return True

    def _start_entry(self):
        # a new "- " line completes the previous entry's key
        if not self._resolve_pending_key():
            return False
        on_entry = getattr(self.handler, 'on_sequence_entry', None)
        if on_entry is not None:
            on_entry()
        return True

    def _measure_indent(self):
        """Skip leading spaces and entry dashes; return (level, is_sequence).

        The level is None for lines with nothing to nest: blank lines,
        comment lines and '---' markers.
        """
        text, start, end = self.text, self.pos, self.end
        if text.startswith('---', start) and \
                (start + 3 >= end or text[start + 3] in INDICATOR_FOLLOWERS):
            return None, False

        pos = start
        is_sequence = False
        while pos < end:
            ch = text[pos]
            if ch == '-' and (pos + 1 >= end or text[pos + 1] in INDICATOR_FOLLOWERS):
                is_sequence = True
            elif ch != ' ':
                break
            pos += 1
        self.pos = pos

        if pos >= end or text[pos] in '\r\n#\0':
            return None, is_sequence
        return pos - start, is_sequence

    def _push(self, context):
        try:
            self.stack.push(context)
        except NestingError as exc:
            raise self._error(str(exc))
        self.key_pending = False
        if context.is_sequence:
            self.handler.on_start_sequence()
        else:
            self.handler.on_start_mapping()

    def _pop(self):
        if self.stack.at_root:
            raise self._error("too many closing braces or brackets")
        if not self._resolve_pending_key():
            return False
        if self.stack.top.is_sequence:
            self.handler.on_end_sequence()
        else:
            self.handler.on_end_mapping()
        self.stack.pop()
        return True

    def _resolve_pending_key(self):
        if not self.key_pending:
            return True
        self.key_pending = False
        return self.handler.on_scalar('null') is not False

    # Punctuation

    def _open_entry_mapping(self):
        # A "- " that indentation did not consume, e.g. after "key: "
        level = max(self.pos - self.line_start, self.stack.top.level + 1)
        self._push(NestingContext(level, is_sequence=False))
        self._skip_spaces()

    def _open_flow(self, is_sequence):
        level = self.stack.top.level + 1
        self._push(NestingContext(level, is_sequence, is_flow=True))
        self._skip_spaces()

    def _close_flow(self, is_sequence):
        top = self.stack.top
        if not any(context.is_flow for context in self.stack):
            raise self._error("too many closing braces or brackets")
        if not top.is_flow or top.is_sequence != is_sequence:
            raise self._error("mismatched closing bracket '%s'" % self.text[self.pos])
        if not self._pop():
            return False
        self._skip_spaces()
        return True

    def _skip_document_marker(self):
        count = 0
        while self.pos < self.end and self.text[self.pos] == '-' and count < 3:
            self.pos += 1
            count += 1
        if count < 3:
            _LOGGER.debug("%s: incomplete document marker at line %d", self.name, self.line)
        else:
            _LOGGER.debug("%s: document marker at line %d", self.name, self.line)

    def _skip_spaces(self):
        self.pos += 1
        while self.pos < self.end and self.text[self.pos] == ' ':
            self.pos += 1

    def _skip_line(self):
        while self.pos < self.end and self.text[self.pos] not in LINE_BREAKS:
            self.pos += 1

    def _new_line(self):
        self.pos += 1
        self.line += 1
        self.line_start = self.pos
        self.at_line_start = True

    def _peek_next(self):
        if self.pos + 1 >= self.end:
            return '\0'
        return self.text[self.pos + 1]

    # Scalars

    def _parse_node(self):
        ch = self.text[self.pos]
        if ch == "'" or ch == '"':
            return self._parse_quoted(ch)
        return self._parse_plain()

    def _parse_plain(self):
        text, end = self.text, self.end
        start = pos = self.pos
        while pos < end:
            ch = text[pos]
            if ch in PLAIN_END:
                # ':' and ',' only end a scalar when whitespace follows
                if ch in ':,' and pos + 1 < end and text[pos + 1] not in INDICATOR_FOLLOWERS:
                    pos += 1
                    continue
                break
            pos += 1
        self.pos = pos
        return self._emit_scalar(text[start:pos].rstrip(' '))

    def _parse_quoted(self, quote):
        text, end = self.text, self.end
        start_mark = self._mark()
        start = self.pos + 1
        close = text.find(quote, start, end)
        if close < 0:
            self._advance_to(end)
            raise ScannerError(
                "while scanning a quoted scalar", start_mark,
                "unterminated quoted scalar <%s...>"
                % text[start - 1:min(end, start + ERROR_SNIPPET_LENGTH)],
                self._mark())

        value = QuotedScalar(text[start:close], quote)
        self._advance_to(close + 1)
        pos = self.pos
        while pos < end and text[pos] not in QUOTED_END:
            pos += 1
        self.pos = pos
        return self._emit_scalar(value)

    def _advance_to(self, target):
        """Move to ``target``, keeping line bookkeeping for skipped breaks."""
        breaks = self.text.count('\n', self.pos, target)
        if breaks:
            self.line += breaks
            self.line_start = self.text.rfind('\n', self.pos, target) + 1
        self.pos = target

    def _emit_scalar(self, value):
        # The terminator stays unread; the main loop looks at it next
        if self.pos < self.end and self.text[self.pos] == ':':
            if not self._resolve_pending_key():
                return False
            self.key_pending = True
            return self.handler.on_key(value) is not False
        self.key_pending = False
        return self.handler.on_scalar(value) is not False

    # Errors

    def _mark(self, index=None):
        if index is None:
            index = self.pos
        return Mark(self.name, index, self.line - 1, index - self.line_start,
                    self.text, index)

    def _error(self, problem):
        return ScannerError(None, None, problem, self._mark())


def parse(text, handler, **kwargs):
    """Parse ``text``, sending events to ``handler``. Returns True on success."""
    return YamlParser(text, handler, **kwargs).parse()
