"""Build Python objects from the reader's events.

:class:`Composer` is a handler that turns mappings into ``dict``, sequences
into ``list`` and scalars into ``None``/``bool``/``int``/``float``/``str``.
:func:`loads` and :func:`load` are the usual entry points.

Only plain scalars are typed: a quoted ``'123'`` stays the string ``'123'``.
Pass ``resolve=False`` to keep all scalars as strings.
"""

import os

from .error import YAMLError
from .handler import YamlHandler
from .resolver import Resolver
from .scanner import QuotedScalar, YamlParser


class ComposerError(YAMLError):
    """The event stream does not describe a single document tree."""
    pass


_EXPLICIT = 'explicit'  # opened by a start event
_ROOT = 'root'          # top-level mapping implied by a leading key
_ITEM = 'item'          # mapping implied by keys directly inside a sequence

_NO_KEY = object()


class _Frame:
    __slots__ = ('container', 'kind', 'key')

    def __init__(self, container, kind):
        self.container = container
        self.kind = kind
        self.key = _NO_KEY


class Composer(YamlHandler):
    """Handler composing the document into Python objects.

    Args:
        resolve: Type plain scalars with ``resolver`` (default True)
        resolver: Resolver instance; a :class:`~yamlite.resolver.Resolver`
            by default

    Attributes:
        document: The composed document (None until something is read)
        complete: True once the end of the document has been seen
    """

    def __init__(self, resolve=True, resolver=None):
        if resolve and resolver is None:
            resolver = Resolver()
        self.resolver = resolver if resolve else None
        self.document = None
        self.complete = False
        self._frames = []
        self._has_root = False

    def on_start_document(self):
        self.document = None
        self.complete = False
        self._frames = []
        self._has_root = False

    def on_end_document(self):
        self.complete = True

    def on_start_sequence(self):
        self._open([])

    def on_start_mapping(self):
        self._open({})

    def on_end_sequence(self):
        self._close()

    def on_end_mapping(self):
        self._close()

    def on_sequence_entry(self):
        # the previous "- key: value" item is complete
        if self._frames and self._frames[-1].kind == _ITEM:
            self._frames.pop()

    def on_key(self, text):
        text = str(text)
        if not self._frames:
            if self._has_root:
                raise ComposerError("found a key after the document root %r" % (self.document,))
            self.document = {}
            self._has_root = True
            self._frames.append(_Frame(self.document, _ROOT))

        frame = self._frames[-1]
        if frame.kind == _ITEM and text in frame.container:
            # a repeated key starts the next item of the sequence
            self._frames.pop()
            frame = self._frames[-1]
        if isinstance(frame.container, list):
            item = {}
            frame.container.append(item)
            frame = _Frame(item, _ITEM)
            self._frames.append(frame)
        frame.key = text
        return True

    def on_scalar(self, text):
        value = str(text)
        if self.resolver is not None and not isinstance(text, QuotedScalar):
            value = self.resolver.construct_scalar(value)
        self._finish_item()
        frame = self._frames[-1] if self._frames else None
        if frame is not None and isinstance(frame.container, dict) and frame.key is _NO_KEY:
            # a bare entry such as the 'a' in '{a, b: 1}'
            frame.container[str(text)] = None
            return True
        self._attach(value)
        return True

    def _open(self, container):
        self._finish_item()
        self._attach(container)
        self._frames.append(_Frame(container, _EXPLICIT))

    def _close(self):
        while self._frames and self._frames[-1].kind == _ITEM:
            self._frames.pop()
        if not self._frames or self._frames[-1].kind != _EXPLICIT:
            raise ComposerError("found an end event with no open collection")
        self._frames.pop()

    def _finish_item(self):
        # a value with no key pending closes an implied sequence item
        if self._frames and self._frames[-1].kind == _ITEM \
                and self._frames[-1].key is _NO_KEY:
            self._frames.pop()

    def _attach(self, value):
        if not self._frames:
            if self._has_root:
                raise ComposerError("found more than one document root")
            self.document = value
            self._has_root = True
            return
        frame = self._frames[-1]
        if isinstance(frame.container, list):
            frame.container.append(value)
        elif frame.key is _NO_KEY:
            raise ComposerError("found a collection where a mapping key was expected")
        else:
            frame.container[frame.key] = value
            frame.key = _NO_KEY


def loads(text, resolve=True, name='<unicode string>', max_depth=None):
    """Parse ``text`` and return the composed document.

    Raises:
        ScannerError: The text is not valid in the supported subset
        ComposerError: The events do not form one document tree
    """
    composer = Composer(resolve=resolve)
    parser = YamlParser(text, composer, name=name, max_depth=max_depth)
    if not parser.parse():
        raise parser.error
    return composer.document


def load(stream, **kwargs):
    """Like :func:`loads`, reading from a path or a file-like object."""
    if isinstance(stream, (str, os.PathLike)):
        kwargs.setdefault('name', os.fspath(stream))
        with open(stream, 'rb') as f:
            return loads(f.read(), **kwargs)
    kwargs.setdefault('name', getattr(stream, 'name', '<file>'))
    return loads(stream.read(), **kwargs)
