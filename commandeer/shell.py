"""
Commandeer interactive shell: a read-eval loop over a dispatcher.

Reserved words (handled here, never dispatched)
- exit, quit   leave the loop.
- help         global overview.
- list         every command, grouped by category.

Any other non-blank line goes to dispatcher.dispatch(line). "help <command>"
and "list -c" therefore reach the built-in commands of the same name.
"""
from collections.abc import Iterable

from .utils import *

EXIT = frozenset(("exit", "quit"))


class Shell:
    def __init__(self, dispatcher, /, *, banner=True):
        if not hasattr(dispatcher, "dispatch") or not callable(dispatcher.dispatch):
            raise TypeError("shell argument must be a dispatcher")
        self._dispatcher = dispatcher
        self._banner = bool(banner)

    @property
    def dispatcher(self):
        return self._dispatcher

    def _lines(self):
        """
        Read lines from the dispatcher console until end of input or interrupt.
        """
        console = self._dispatcher.console
        while True:
            try:
                yield console.input(self._dispatcher.prompt, markup=False)
            except (EOFError, KeyboardInterrupt):
                console.print()
                return

    def run(self, lines=Unset, /):
        """
        Run the loop over lines (an iterable of strings), or over the console
        prompt when lines is not given.

        Returns the number of lines whose dispatch failed.
        """
        if lines is Unset:
            lines = self._lines()
        elif isinstance(lines, str) or not isinstance(lines, Iterable):
            raise TypeError("run() argument must be an iterable of strings")

        dispatcher = self._dispatcher
        console = dispatcher.console

        if self._banner:
            console.print(
                "%s interactive mode: type 'help' for help, 'list' for commands, 'exit' to leave" % dispatcher.prog,
                markup=False,
                highlight=False,
            )

        failures = 0
        for line in lines:
            if not isinstance(line, str):
                raise TypeError("run() argument must be an iterable of strings")

            match line.strip():
                case "":
                    continue
                case word if word in EXIT:
                    console.print("goodbye!", markup=False, highlight=False)
                    break
                case "help":
                    dispatcher.help()
                    continue
                case "list":
                    dispatcher.listing()
                    continue

            if not dispatcher.dispatch(line):
                failures += 1
                if dispatcher.verbose:
                    console.print("command failed, type 'help' for help", markup=False, highlight=False)

        return failures


__all__ = (
    "Shell",
)
