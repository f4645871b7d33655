"""
Commandeer invocation: the structured result of parsing one unit of raw input.

An Invocation is built incrementally by the parser, consumed once by the
dispatcher and then discarded. It is deliberately mutable and plain:

- name: command name (first token); "" for empty input.
- positionals: ordered positional arguments.
- options: key → value (last occurrence wins).
- flags: set of boolean switches (no value).
- metadata: free-form key → value annotations for handlers and hosts.

Keys are stored without their dashes ("port" for --port, "x" for -x).
"""
from .utils import *


class Invocation:
    __slots__ = ("name", "positionals", "options", "flags", "metadata")

    def __init__(self, name="", positionals=(), options=Unset, flags=(), metadata=Unset):
        if not isinstance(name, str):
            raise TypeError("invocation 'name' must be a string")
        self.name = name
        self.positionals = list(positionals)
        self.options = dict(coalesce(options, {}))
        self.flags = set(flags)
        self.metadata = dict(coalesce(metadata, {}))

    def argument(self, index, default=None, /):
        """
        Return the positional at index, or default when it was not supplied.
        """
        try:
            return self.positionals[index]
        except IndexError:
            return default

    def option(self, key, default=None, /):
        return self.options.get(key, default)

    def flagged(self, *names):
        """
        True when any of the given names was passed as a flag (e.g. "h", "help").
        """
        return any(name in self.flags for name in names)

    def clear(self):
        self.name = ""
        self.positionals.clear()
        self.options.clear()
        self.flags.clear()
        self.metadata.clear()

    def __len__(self):
        return len(self.positionals)

    def __bool__(self):
        return bool(self.name)

    def __eq__(self, other):
        if not isinstance(other, Invocation):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    __hash__ = None

    def __rich_repr__(self):
        yield "name", self.name
        yield "positionals", self.positionals
        yield "options", self.options
        yield "flags", self.flags
        if self.metadata:
            yield "metadata", self.metadata

    def __repr__(self):
        return "invocation(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


__all__ = (
    "Invocation",
)
