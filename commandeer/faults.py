"""
Commandeer faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so logs and searches stay predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a short, lowercased, actionable way.
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- RegistrationError   → EmptyNameError              (command rejected)
- CommandWarning      → CommandOverwriteWarning     (name collision, entry replaced)
- ResolutionError     → UnknownCommandError         (carries suggestions)
- ValidationError     → MissingParameterError, TooManyArgumentsError
- HandlerFaultError   (the handler raised; message is the raised exception's message)
- HandlerDeclinedError (the handler returned false)

Propagation
- Faults are plain exceptions/warnings, so library code may raise them; the
  dispatcher catches them at its boundary and calls trigger(fault, **ctx), which
  renders them onto the diagnostic console (unless quiet). Nothing is re-raised.

Integration
- The host application may define __styles__, __prog__, __codes__ and __docs__
  in __main__ to restyle, relabel or document faults.
"""
import copy
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the dispatcher (stable identifiers).

    grouping (by high-level domain)
    - registration (1115x)
      • EMPTY_COMMAND_NAME
    - resolution (1110x)
      • UNKNOWN_COMMAND
    - validation (1112x)
      • TOO_MANY_ARGUMENTS, MISSING_PARAMETER
    - handlers (1113x)
      • HANDLER_FAULT, HANDLER_DECLINED
    - warnings (12xxx)
      • COMMAND_OVERWRITE

    normalize() allows the host to remap codes to custom labels while the
    numeric identity stays stable.
    """
    # --- resolution errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101

    # --- validation errors (11xxx) ---
    TOO_MANY_ARGUMENTS          = 11121
    MISSING_PARAMETER           = 11125

    # --- handler errors (11xxx) ---
    HANDLER_FAULT               = 11131
    HANDLER_DECLINED            = 11132

    # --- registration errors (11xxx) ---
    EMPTY_COMMAND_NAME          = 11151

    # --- warnings (12xxx) ---
    COMMAND_OVERWRITE           = 12151

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, *, kind):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: [ prog — code | title ]
    - body:   message
    - hint:   → hint
    - extras: one "name - description" line per suggestion, when present
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", options.get("prog", "commandeer")), styler("prog-name"))

    try:
        code = options["code"].normalize()
    except KeyError:
        code = "?"

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code, styler("code")),
        " | ",
        text(str(options.get("title", kind)).title(), styler("%s-title" % kind)),
        " ]"
    )
    message = text(_message(fault), styler("%s-message" % kind))
    renders = [message]

    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    for name, descr in options.get("suggestions", ()):
        line = Text.assemble("   ", text(name, styler("suggestion")))
        if descr:
            line.append(" - ").append(text(descr, styler("suggestion-description")))
        renders.append(line)

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left")

    return Group(header, *renders)


def _message(fault):
    return "" if fault.message is Unset else fault.message


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return _message(self)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "suggestion": "bold #36C5F0",
            "suggestion-description": "#9CA3AF",
        }, kind="error")

    def __trigger__(self) -> None:
        if self.options.get("quiet", False):
            return
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(CommandException): ...
class EmptyNameError(RegistrationError): ...

class ResolutionError(CommandException): ...
class UnknownCommandError(ResolutionError): ...

class ValidationError(CommandException): ...
class MissingParameterError(ValidationError): ...
class TooManyArgumentsError(ValidationError): ...

class HandlerFaultError(CommandException): ...
class HandlerDeclinedError(CommandException): ...


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return _message(self)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, kind="warning")

    def __trigger__(self) -> None:
        if self.options.get("quiet", False):
            return
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandOverwriteWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - the merged fault is returned so callers can keep a record of it.

    typical options
    - prog, console, colorful, fancy, quiet, title, code, hint, suggestions and
      any context the reporter may want to keep (command, index, name, ...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault = copy.replace(fault, **options)
    fault.__trigger__()
    return fault


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "RegistrationError",
    "EmptyNameError",
    "ResolutionError",
    "UnknownCommandError",
    "ValidationError",
    "MissingParameterError",
    "TooManyArgumentsError",
    "HandlerFaultError",
    "HandlerDeclinedError",
    "CommandWarning",
    "CommandOverwriteWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
