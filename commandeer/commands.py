"""
Commandeer command layer: describe a command and check invocations against it.

What this module provides
- Command: the static description of one command (name, aliases, category,
  parameters, options, help metadata) bound to a handler callable.
  • validate(invocation): arity check against the declared parameters.
  • __call__(invocation): run the handler.
- command(...): create a Command, or a decorator that produces one.

Handler contract
- A handler receives the Invocation and returns success/failure. Returning
  None (no return statement) counts as success; any other value is judged by
  its truthiness. A handler may raise; the dispatcher turns that into a failure.

Declaration rules (checked on construction)
- Parameters are Parameter specs; only the last may be variadic ("...").
- A required parameter cannot follow an optional one.
- Options are Option specs. They document the command; they are not enforced.

Quick start
    from commandeer import command, Parameter, Option

    @command(parameters=[Parameter("...", "words to print")], aliases=["say"])
    def echo(invocation):
        \"\"\"print the arguments back\"\"\"
        print(" ".join(invocation.positionals))
"""
import functools
import inspect
import operator
import re

from .faults import *
from .specs import Parameter, Option, VARIADIC
from .utils import *

DEFAULT_CATEGORY = "General"


class CommandType(type):
    """
    Metaclass that gives Command its introspection surface.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _process_strings(cls, metadata):
    """
    Normalize scalar string metadata fields.

    - name must be a string (possibly empty; registration rejects empty names).
    - descr, usage, version, author, help: str | Unset; trimmed-empty and Unset become None.
    - category: str | Unset; Unset becomes DEFAULT_CATEGORY.
    """
    if not isinstance(metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")

    for name in ("descr", "usage", "version", "author", "help"):
        object = metadata[name]
        if object is Unset:
            metadata[name] = None
            continue
        if not isinstance(object, str):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        metadata[name] = object.strip() or None

    category = coalesce(metadata["category"], DEFAULT_CATEGORY)
    if not isinstance(category, str):
        raise TypeError(f"{cls.__typename__} 'category' must be a string")
    metadata["category"] = category


def _process_iterables(cls, metadata):
    """
    Materialize collection fields as lists and check their element types.

    - aliases, examples: Iterable[str] (order kept, duplicates allowed).
    - options: Iterable[Option].
    """
    for name, kind in (("aliases", str), ("examples", str), ("options", Option)):
        object = metadata[name]
        if isinstance(object, str):
            raise TypeError(f"{cls.__typename__} {name!r} must be an iterable, not a string")
        try:
            object = list(object)
        except TypeError:
            raise TypeError(f"{cls.__typename__} {name!r} must be an iterable") from None
        if not all(isinstance(x, kind) for x in object):
            raise TypeError(f"{cls.__typename__} {name!r} items must be {kind.__name__.lower()} instances")
        metadata[name] = object


def _process_parameters(cls, metadata):
    """
    Check parameter specs and their ordering.

    - items must be Parameter instances.
    - the variadic "..." parameter must be the last one.
    - a required parameter cannot follow an optional one.
    """
    try:
        parameters = list(metadata["parameters"])
    except TypeError:
        raise TypeError(f"{cls.__typename__} 'parameters' must be an iterable") from None

    optional = None
    for index, parameter in enumerate(parameters):
        if not isinstance(parameter, Parameter):
            raise TypeError(f"{cls.__typename__} 'parameters' items must be parameter instances")
        if parameter.variadic and index != len(parameters) - 1:
            raise TypeError(f"{cls.__typename__} variadic parameter {VARIADIC!r} must be the last parameter")
        if parameter.required and optional is not None:
            raise TypeError(
                f"{cls.__typename__} required parameter {parameter.name!r} cannot follow optional parameter {optional!r}"
            )
        if not parameter.required and optional is None:
            optional = parameter.name

    metadata["parameters"] = parameters


class Command(metaclass=CommandType):
    """
    Static description of a command bound to a handler.

    Fields
    - name, descr, category, usage (explicit usage line or None), aliases,
      parameters, options, examples, version, author, help (explicit help
      text or None).

    Lifecycle
    - Built once, then owned by a Registry. The registry never mutates it;
      re-registering a name swaps the whole entry.
    """
    __introspectable__ = (
        "name",
        "descr",
        "category",
        "usage",
        "aliases",
        "parameters",
        "options",
        "examples",
        "version",
        "author",
        "help",
    )

    __displayable__ = (
        "name",
        "descr",
        "category",
        "aliases",
        "parameters",
        "options",
    )

    def __init__(
            self,
            handler,
            /,
            name=Unset,
            descr=Unset,
            category=Unset,
            usage=Unset,
            aliases=(),
            parameters=(),
            options=(),
            examples=(),
            version=Unset,
            author=Unset,
            help=Unset,
    ):
        """
        Build a command description around handler.

        name defaults to handler.__name__ and descr to the handler docstring.

        Raises
        - TypeError/ValueError on a non-callable handler, wrong metadata types,
          or bad parameter ordering.
        """
        if not callable(handler):
            raise TypeError(f"{type(self).__typename__} handler must be callable")

        metadata = {
            "name": coalesce(name, getattr(handler, "__name__", "")),
            "descr": coalesce(descr, inspect.getdoc(handler) or Unset),
            "category": category,
            "usage": usage,
            "aliases": aliases,
            "parameters": parameters,
            "options": options,
            "examples": examples,
            "version": version,
            "author": author,
            "help": help,
        }
        _process_strings(type(self), metadata)
        _process_iterables(type(self), metadata)
        _process_parameters(type(self), metadata)

        self._handler = handler
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def handler(self):
        return self._handler

    @property
    def variadic(self):
        """
        True when the last declared parameter is the variadic "..." slot.
        """
        return bool(self._parameters) and self._parameters[-1].variadic

    def validate(self, invocation, /):
        """
        Check the invocation's positionals against the declared parameters.

        Raises
        - MissingParameterError: a required parameter has no positional.
        - TooManyArgumentsError: more positionals than parameters, unless variadic.

        Options and flags are not checked.
        """
        count = len(invocation.positionals)
        hint = "run '%s --help' to see the expected usage" % self._name

        for index, parameter in enumerate(self._parameters):
            if parameter.required and count <= index:
                raise MissingParameterError(
                    "missing required parameter: %s" % parameter.name,
                    title="missing parameter",
                    code=FaultCode.MISSING_PARAMETER,
                    command=self._name,
                    parameter=parameter.name,
                    index=index,
                    hint=hint,
                    docs=getdoc(FaultCode.MISSING_PARAMETER),
                )

        if not self.variadic and count > len(self._parameters):
            raise TooManyArgumentsError(
                "too many arguments, at most %d allowed" % len(self._parameters),
                title="too many arguments",
                code=FaultCode.TOO_MANY_ARGUMENTS,
                command=self._name,
                count=count,
                hint=hint,
                docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS),
            )

    def __call__(self, invocation, /):
        """
        Run the handler and normalize its answer to a boolean.
        """
        result = self._handler(invocation)
        return True if result is None else bool(result)


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct:     cmd = command(func, name="x", ...)
    - Decorator:  @command(name="x", ...)
                  def func(invocation): ...
                  (a bare @command also works)

    Returns
    - Command | Callable[[Callable], Command]
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(source, *args, **kwargs)

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "DEFAULT_CATEGORY",
    "Command",
    "command",
)
