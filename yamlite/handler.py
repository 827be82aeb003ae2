"""Event sink interface for :class:`yamlite.scanner.YamlParser`.

The parser drives a handler the caller supplies. Subclass
:class:`YamlHandler` and override the callbacks you care about; every method
defaults to doing nothing.
"""


class YamlHandler:
    """Receives the structural and content events of one parse.

    ``on_key`` and ``on_scalar`` return True to keep going; returning False
    stops the parse immediately. Events delivered before the stop are final.
    Text of quoted scalars arrives as :class:`~yamlite.scanner.QuotedScalar`.
    """

    def on_start_document(self):
        pass

    def on_end_document(self):
        pass

    def on_start_sequence(self):
        pass

    def on_end_sequence(self):
        pass

    def on_start_mapping(self):
        pass

    def on_end_mapping(self):
        pass

    def on_sequence_entry(self):
        """A ``- `` line starts the next entry of the innermost block sequence.

        Optional: handlers without this method are not called.
        """
        pass

    def on_key(self, text):
        return True

    def on_scalar(self, text):
        return True

    def on_error(self, message, line, column):
        """Called at most once, right before a failed parse returns.

        ``line`` and ``column`` are 1-based.
        """
        pass
