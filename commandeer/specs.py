r"""
Commandeer argument specifications.

Overview
- Specs
  • Parameter: positional slot declared by a command (name, required?, default, type tag).
    The sentinel name "..." declares a variadic trailing parameter.
  • Option: named switch declared by a command, with a long name (--name), a
    one-character short name (-n) or both; it may require a value.
- TypeTag: documentation-only label for the kind of value a slot expects.
  Values are never coerced or checked against it.

Introspection & representation
- SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields listed in __introspectable__ as read-only properties (via mirror()).

Metadata (sanitized on construction)
- name: non-empty str (Parameter); long/short names given without dashes (Option).
- descr: Unset | str, trimmed; Unset becomes None.
- default: Unset | str; Unset becomes None (no default).
- type / metavar: TypeTag (Parameter) or free-form label (Option).

Validation highlights
- Parameter names must be non-empty.
- Option needs at least one of long/short; short is exactly one character.
- Option names must not carry their dashes ("verbose", not "--verbose").

Quick example:
    >>> Parameter("path", "directory to list", default=".", type="path").usage
    '[path]'
    >>> Option("long", "l", "use a long listing format").usage
    '-l, --long'
"""
import builtins
import functools
import operator
import re
from enum import StrEnum

from .utils import *

VARIADIC = "..."


class TypeTag(StrEnum):
    """
    kind of value a parameter or option expects (help output only).
    """
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    FILE = "file"
    PATH = "path"
    COMMAND = "command"


class SpecType(type):
    """
    Metaclass that turns spec classes into introspectable, read-only records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_<name>" backing field.
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize(cls, field, object, *, empty=True):
    """
    Validate a scalar string field and resolve Unset to None.

    - TypeError when the value is neither str nor Unset.
    - ValueError when the trimmed string is empty and empty=False.
    """
    if object is Unset:
        return None
    if not isinstance(object, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    if not empty and not object.strip():
        raise ValueError(f"{cls.__typename__} {field!r} must be a non-empty string")
    return object


class Parameter(metaclass=SpecType):
    """
    Positional parameter declared by a command.

    Fields
    - name: label shown in usage and messages ("..." marks the variadic tail).
    - descr: one-line description or None.
    - required: whether dispatch fails when the position is not supplied.
    - default: default shown in help, or None. It is not injected into invocations.
    - type: TypeTag used for help output.
    """
    __introspectable__ = (
        "name",
        "descr",
        "required",
        "default",
        "type",
    )

    def __init__(self, name, descr=Unset, /, required=False, default=Unset, type=TypeTag.STRING):
        cls = builtins.type(self)
        if name is Unset:
            raise TypeError(f"{cls.__typename__} 'name' is required")
        self._name = _sanitize(cls, "name", name, empty=False)
        self._descr = _sanitize(cls, "descr", descr)
        if not isinstance(required, bool):
            raise TypeError(f"{cls.__typename__} 'required' must be a boolean")
        self._required = required
        self._default = _sanitize(cls, "default", default)
        try:
            self._type = TypeTag(type)
        except ValueError:
            raise ValueError(f"{cls.__typename__} 'type' must be one of {", ".join(TypeTag)}") from None

    @property
    def variadic(self):
        """
        True when this is the "..." trailing parameter.
        """
        return self._name == VARIADIC

    @property
    def usage(self):
        return ("<%s>" if self._required else "[%s]") % self._name


class Option(metaclass=SpecType):
    """
    Named option declared by a command.

    Fields
    - name: long name without the leading "--" (may be None).
    - short: single character without the leading "-" (may be None).
    - descr: one-line description or None.
    - value: whether the option expects a value (help output only).
    - default: default shown in help, or None.
    - metavar: label of the expected value in usage, or None.

    The parser does not consult option specs: values and flags are collected
    purely from the token shapes, so declared options document a command while
    undeclared ones are still accepted.
    """
    __introspectable__ = (
        "name",
        "short",
        "descr",
        "value",
        "default",
        "metavar",
    )

    def __init__(self, name=Unset, short=Unset, descr=Unset, /, value=False, default=Unset, metavar=Unset):
        cls = type(self)
        name = _sanitize(cls, "name", name) or None
        short = _sanitize(cls, "short", short) or None

        if name is None and short is None:
            raise TypeError(f"{cls.__typename__} requires a long or a short name")
        if short is not None and len(short) != 1:
            raise ValueError(f"{cls.__typename__} 'short' must be a single character")
        if any(x.startswith("-") for x in (name, short) if x):
            raise ValueError(f"{cls.__typename__} names must be given without their leading dashes")
        if not isinstance(value, bool):
            raise TypeError(f"{cls.__typename__} 'value' must be a boolean")

        self._name = name
        self._short = short
        self._descr = _sanitize(cls, "descr", descr)
        self._value = value
        self._default = _sanitize(cls, "default", default)
        self._metavar = _sanitize(cls, "metavar", metavar) or None

    @property
    def keys(self):
        """
        Keys under which this option appears in an invocation's options/flags.
        """
        return tuple(x for x in (self._short, self._name) if x)

    @property
    def names(self):
        """
        Spellings accepted on the command line ("-s", "--long").
        """
        return tuple(prefix + x for prefix, x in (("-", self._short), ("--", self._name)) if x)

    @property
    def usage(self):
        usage = ", ".join(self.names)
        if self._value:
            usage += " <%s>" % (self._metavar or "value")
        return usage


__all__ = (
    "VARIADIC",
    "TypeTag",
    "Parameter",
    "Option",
)
