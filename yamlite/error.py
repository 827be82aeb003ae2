"""Error types shared by the reader and the writer.

Reader errors carry :class:`Mark` objects so that a failure can be reported
with the offending line, column and a snippet of the source text.
"""


class Mark:
    """A position in the text being read.

    Attributes:
        name: The name of the input (a filename or '<unicode string>')
        index: Character offset from the start of the input
        line: Line number (0-indexed)
        column: Column number (0-indexed)
        buffer: Optional text the mark points into
        pointer: Offset of the mark within ``buffer``
    """

    def __init__(self, name, index, line, column, buffer=None, pointer=None):
        self.name = name
        self.index = index
        self.line = line
        self.column = column
        self.buffer = buffer
        self.pointer = pointer

    def get_snippet(self, indent=4, width=76):
        """Return the line holding the mark with a caret under the marked column.

        A line longer than ``width`` is cut to a window around the mark;
        ``...`` replaces the text left out on either side.
        """
        if self.buffer is None:
            return None

        text, pointer = self.buffer, self.pointer
        begin = max(text.rfind('\n', 0, pointer), text.rfind('\r', 0, pointer)) + 1
        stop = len(text)
        for brk in '\r\n\0':
            found = text.find(brk, pointer)
            if found >= 0:
                stop = min(stop, found)

        line = text[begin:stop]
        caret = pointer - begin
        if len(line) > width:
            left = max(0, min(caret - width // 2, len(line) - width))
            clipped = line[left:left + width]
            if left + width < len(line):
                clipped += '...'
            if left:
                clipped = '...' + clipped
                caret += 3
            line = clipped
            caret -= left

        pad = ' ' * indent
        return '%s%s\n%s%s^' % (pad, line, pad, ' ' * caret)

    def __repr__(self):
        return 'Mark(%r, line=%d, column=%d)' % (self.name, self.line + 1, self.column + 1)

    def __str__(self):
        where = '  in "%s", line %d, column %d' % (self.name, self.line + 1, self.column + 1)
        snippet = self.get_snippet()
        if snippet is None:
            return where
        return '%s:\n%s' % (where, snippet)


class YAMLError(Exception):
    """Base class for every error raised by yamlite."""
    pass


class MarkedYAMLError(YAMLError):
    """Error with positions in the source text.

    Attributes:
        context: What the reader was doing (e.g. 'while scanning a quoted scalar')
        context_mark: Mark where that context started
        problem: Description of the problem
        problem_mark: Mark pointing at the problem
        note: Additional note about the error
    """

    def __init__(self, context=None, context_mark=None,
                 problem=None, problem_mark=None, note=None):
        super().__init__(problem)
        self.context = context
        self.context_mark = context_mark
        self.problem = problem
        self.problem_mark = problem_mark
        self.note = note

    @property
    def line(self):
        """1-based line of the problem, or None."""
        if self.problem_mark is None:
            return None
        return self.problem_mark.line + 1

    @property
    def column(self):
        """1-based column of the problem, or None."""
        if self.problem_mark is None:
            return None
        return self.problem_mark.column + 1

    def __str__(self):
        lines = []
        if self.context is not None:
            lines.append(self.context)
        if self.context_mark is not None \
                and (self.problem is None or self.problem_mark is None
                     or self.context_mark.line != self.problem_mark.line
                     or self.context_mark.column != self.problem_mark.column):
            lines.append(str(self.context_mark))
        if self.problem is not None:
            lines.append(self.problem)
        if self.problem_mark is not None:
            lines.append(str(self.problem_mark))
        if self.note is not None:
            lines.append(self.note)
        return '\n'.join(lines)
