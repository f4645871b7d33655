"""
Commandeer dispatcher: resolve, validate and run one invocation at a time.

State machine (one invocation per call, terminal on the first outcome)
1. empty name      → success, nothing happens.
2. resolve         → miss reports UnknownCommandError with suggestions, failure.
3. help request    → "-h"/"--help" renders detailed help, success; the
                     handler is not called and nothing is validated.
4. validate        → ValidationError is reported (plus help when autohelp), failure.
5. invoke          → a raising handler is reported as HandlerFaultError, a
                     false answer as HandlerDeclinedError (plus help when
                     autohelp); otherwise success.

Nothing raised by a handler or by validation escapes execute(); callers only
ever see the boolean outcome, and every reported fault is kept in the bounded
fault history of the registry (see faults).

Built-ins
- help / ?  [command]   detailed help for one command, or the global overview.
- list      [-c]        every command, flat and sorted, or grouped by category.

Quick start
    from commandeer import Dispatcher, Parameter

    dispatcher = Dispatcher(prog="demo")

    @dispatcher.command(parameters=[Parameter("...", "words to print")])
    def echo(invocation):
        \"\"\"print the arguments back\"\"\"
        print(" ".join(invocation.positionals))

    dispatcher.dispatch("echo hello world")
"""
import os
import sys
from collections import deque
from collections.abc import Iterable

from rich.console import Console

from . import rendering
from .commands import Command, command
from .faults import *
from .invocation import Invocation
from .parsing import parse
from .registry import Registry
from .specs import Option, Parameter, TypeTag
from .suggestions import suggest
from .utils import *


class Dispatcher:
    """
    Entry point tying the registry, the parser and the renderers together.

    Configuration (keyword-only, read-only afterwards)
    - prog: program label in diagnostics and the overview.
    - prompt: prompt used by the interactive shell.
    - autohelp: render short help after a validation failure or a failed handler.
    - verbose: let the interactive shell print a hint after a failed line.
    - colorful, fancy: rich styling and panel chrome.
    - suggestions: maximum number of "did you mean" candidates.
    - quiet: record faults without rendering them.
    - console, errors: rich consoles for regular and diagnostic output.
    """
    prog = mirror("prog")
    prompt = mirror("prompt")
    autohelp = mirror("autohelp")
    verbose = mirror("verbose")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    suggestions = mirror("suggestions")
    quiet = mirror("quiet")
    console = mirror("console")
    errors = mirror("errors")
    registry = mirror("registry")

    def __init__(
            self,
            registry=Unset,
            /,
            *,
            prog=Unset,
            prompt="> ",
            autohelp=True,
            verbose=True,
            colorful=False,
            fancy=False,
            suggestions=5,
            quiet=False,
            console=Unset,
            errors=Unset,
    ):
        prog = coalesce(prog, os.path.basename(sys.argv[0]) or "commandeer")
        if not isinstance(prog, str):
            raise TypeError("dispatcher 'prog' must be a string")
        if not isinstance(prompt, str):
            raise TypeError("dispatcher 'prompt' must be a string")
        if isinstance(suggestions, bool) or not isinstance(suggestions, int) or suggestions < 0:
            raise ValueError("dispatcher 'suggestions' must be a non-negative integer")
        for name, object in (("console", console), ("errors", errors)):
            if object is not Unset and not isinstance(object, Console):
                raise TypeError(f"dispatcher {name!r} must be a rich console")

        self._prog = prog
        self._prompt = prompt
        self._autohelp = bool(autohelp)
        self._verbose = bool(verbose)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._suggestions = suggestions
        self._quiet = bool(quiet)
        self._console = coalesce(console, Console())
        self._errors = coalesce(errors, Console(stderr=True))
        self._reporting = {
            "prog": self._prog,
            "console": self._errors,
            "colorful": self._colorful,
            "fancy": self._fancy,
            "quiet": self._quiet,
        }

        if registry is Unset:
            registry = Registry(**self._reporting)
        elif not isinstance(registry, Registry):
            raise TypeError("dispatcher 'registry' must be a registry")
        self._registry = registry

        self._builtins()

    def _builtins(self):
        """
        Seed the help/? and list commands.
        """
        def help(invocation):
            self.help(invocation.argument(0, Unset))

        def list(invocation):
            self.listing(by_category=invocation.flagged("c", "category"))

        self.register(Command(
            help,
            descr="show help for a command, or the global help",
            aliases=["?"],
            parameters=[Parameter("command", "name of the command to describe", type=TypeTag.COMMAND)],
            examples=["help              global help", "help <command>    help of one command"],
        ))
        self.register(Command(
            list,
            descr="list every available command",
            options=[Option("category", "c", "group commands by category")],
            examples=["list              every command, sorted by name", "list -c           grouped by category"],
        ))

    @property
    def faults(self):
        """
        Faults reported so far, oldest first (bounded history).
        """
        return self._registry.faults

    def trigger(self, fault, /, **options):
        return self._registry.trigger(fault, **self._reporting | options)

    def register(self, command, /):
        return self._registry.register(command)

    def command(self, source=Unset, /, *args, **kwargs):
        """
        Create a Command and register it in one step.

        Same invocation modes as commandeer.command(...):
        - Direct:     dispatcher.command(func, name="x", ...)
        - Decorator:  @dispatcher.command(name="x", ...) or a bare @dispatcher.command

        Returns the Command (registered, or rejected with a reported fault).
        """
        @rename("command")
        def wrapper(source, /):
            entry = command(source, *args, **kwargs)
            self.register(entry)
            return entry

        return wrapper(source) if source is not Unset else wrapper

    def lookup(self, name, /):
        return self._registry.lookup(name)

    def exists(self, name, /):
        """
        True when name is a registered command name or alias.
        """
        return self._registry.lookup(name) is not None

    def names(self):
        return self._registry.names()

    def categories(self):
        return self._registry.categories()

    def _help(self, command, *, detailed):
        self._console.print(rendering.helper(command, detailed=detailed, colorful=self._colorful, fancy=self._fancy))

    def _unknown(self, name):
        candidates = suggest(name, self._registry.names(), self._suggestions)
        suggestions = tuple(
            (candidate, getattr(self._registry.lookup(candidate), "descr", None))
            for candidate in candidates
        )
        try:
            hint = "did you mean %r?" % candidates[0]
        except IndexError:
            hint = "run 'list' to see all available commands"
        self.trigger(UnknownCommandError(
            "unknown command %r" % name,
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            name=name,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND),
        ))

    def execute(self, invocation, /):
        """
        Run one parsed invocation through the dispatch state machine.

        Returns
        - True on success (including an empty name or a help request), False
          after any reported fault.
        """
        if not isinstance(invocation, Invocation):
            raise TypeError("execute() argument must be an invocation")

        if not invocation.name:
            return True

        if (command := self._registry.lookup(invocation.name)) is None:
            self._unknown(invocation.name)
            return False

        if invocation.flagged("h", "help"):
            self._help(command, detailed=True)
            return True

        try:
            command.validate(invocation)
        except ValidationError as fault:
            self.trigger(fault)
            if self._autohelp:
                self._help(command, detailed=False)
            return False

        try:
            result = command(invocation)
        except Exception as exception:
            self.trigger(HandlerFaultError(
                str(exception) or type(exception).__name__.lower(),
                title="command failed",
                code=FaultCode.HANDLER_FAULT,
                command=command.name,
                exception=exception,
                hint="run '%s --help' to check the expected usage" % command.name,
                docs=getdoc(FaultCode.HANDLER_FAULT),
            ))
            if self._autohelp:
                self._help(command, detailed=False)
            return False

        if not result:
            self.trigger(HandlerDeclinedError(
                "command %r did not complete successfully" % command.name,
                title="command declined",
                code=FaultCode.HANDLER_DECLINED,
                command=command.name,
                hint="run '%s --help' to check the expected usage" % command.name,
                docs=getdoc(FaultCode.HANDLER_DECLINED),
            ))
            if self._autohelp:
                self._help(command, detailed=False)
            return False

        return True

    def dispatch(self, source=Unset, /):
        """
        Parse source (see commandeer.parse) and execute the result.
        """
        return self.execute(parse(source))

    __invoke__ = dispatch

    def batch(self, tokens=Unset, /):
        """
        Run several commands from one argument vector.

        Each token that does not start with '-' starts a command; the following
        non-dash tokens are its positionals. Dash tokens are skipped. Every
        command runs; the result is True only when all of them succeed.
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("batch() argument must be an iterable of strings")

        tokens = deque(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("batch() argument must be an iterable of strings")

        success = True
        while tokens:
            token = tokens.popleft()
            if token.startswith("-"):
                continue
            invocation = Invocation(token)
            while tokens and not tokens[0].startswith("-"):
                invocation.positionals.append(tokens.popleft())
            success = self.execute(invocation) and success

        return success

    def help(self, name=Unset, /):
        """
        Print detailed help for name, or the global overview without a name.

        An unknown name prints a not-found line followed by the listing.
        Returns True when the requested help was found.
        """
        if name is Unset:
            self._console.print(rendering.overview(
                rendering.GLOBAL_OPTIONS,
                prog=getattr(__import__("__main__"), "__prog__", self._prog),
                colorful=self._colorful,
                fancy=self._fancy,
            ))
            return True

        if (command := self._registry.lookup(name)) is None:
            self._console.print("command not found: %s" % name, markup=False, highlight=False)
            self.listing()
            return False

        self._help(command, detailed=True)
        return True

    def listing(self, by_category=True):
        """
        Print every registered command with its description.
        """
        self._console.print(rendering.listing(
            self._registry,
            by_category=by_category,
            colorful=self._colorful,
            fancy=self._fancy,
        ))

    def __contains__(self, name):
        return self.exists(name)

    def __len__(self):
        return len(self._registry)


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for dispatchers and plain callables.

    - object providing __invoke__(prompt) (a Dispatcher): called with prompt.
    - plain callable: wrapped as a Command in a fresh dispatcher, which then
      runs prompt (its first token should be the callable's name).

    Returns the boolean outcome of the dispatch.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    if callable(object):
        dispatcher = Dispatcher()
        dispatcher.command(object)
        return dispatcher.dispatch(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Dispatcher",
    "invoke",
)
