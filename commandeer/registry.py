"""
Commandeer registry: the set of known commands and its lookup indices.

State
- by name:      primary name → Command (source of truth)
- by alias:     alias → primary name
- by category:  category → primary names, in registration order

All three are mutated only by register() and always together, under one lock,
so concurrent registrations and lookups observe a consistent view.

Overwrites
- Registering a name that already exists replaces the entry and reports a
  CommandOverwriteWarning. The previous entry's aliases (those still pointing
  to it) and its category membership are retracted first, so no alias or
  category listing refers to a replaced entry.
"""
from collections import defaultdict
from threading import RLock

from .commands import Command
from .faults import *
from .utils import *

_HISTORY = 64


class Registry:
    """
    Owner of registered commands.

    Reporting options (forwarded to every triggered fault)
    - prog: program label in fault headers.
    - console: rich console for diagnostics (stderr by default).
    - colorful, fancy: styling of rendered faults.
    - quiet: record faults without rendering them.
    """

    def __init__(self, *, prog="commandeer", console=Unset, colorful=False, fancy=False, quiet=False):
        self._commands = {}
        self._aliases = {}
        self._categories = defaultdict(list)
        self._lock = RLock()
        self._faults = []
        self._reporting = {
            "prog": prog,
            "colorful": colorful,
            "fancy": fancy,
            "quiet": quiet,
        } | ({"console": console} if console is not Unset else {})

    @property
    def faults(self):
        """
        Faults reported by this registry, oldest first (bounded history).
        """
        return tuple(self._faults)

    def trigger(self, fault, /, **options):
        fault = trigger(fault, **self._reporting | options)
        self._faults.append(fault)
        del self._faults[:-_HISTORY]
        return fault

    def _retract(self, name):
        """
        Drop the alias and category entries of the command registered as name.
        """
        previous = self._commands[name]
        for alias in previous.aliases:
            if self._aliases.get(alias) == name:
                del self._aliases[alias]
        try:
            self._categories[previous.category].remove(name)
        except ValueError:
            pass
        if not self._categories[previous.category]:
            del self._categories[previous.category]

    def register(self, command, /):
        """
        Add command to the registry; return True when it was accepted.

        - an empty name is rejected (EmptyNameError is reported, False returned).
        - an existing name is replaced (CommandOverwriteWarning is reported).
        - aliases are indexed except empty ones and the command's own name.
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")

        if not (name := command.name):
            self.trigger(EmptyNameError(
                "command name cannot be empty",
                title="empty command name",
                code=FaultCode.EMPTY_COMMAND_NAME,
                command=command,
                hint="give the command a name (for example: Command(handler, name='status'))",
                docs=getdoc(FaultCode.EMPTY_COMMAND_NAME),
            ))
            return False

        with self._lock:
            if name in self._commands:
                self.trigger(CommandOverwriteWarning(
                    "command %r already exists and will be replaced" % name,
                    title="command replaced",
                    code=FaultCode.COMMAND_OVERWRITE,
                    command=command,
                    hint="pick a different name if both commands should stay available",
                    docs=getdoc(FaultCode.COMMAND_OVERWRITE),
                ))
                self._retract(name)

            self._commands[name] = command
            for alias in command.aliases:
                if alias and alias != name:
                    self._aliases[alias] = name
            self._categories[command.category].append(name)

        return True

    def lookup(self, name, /):
        """
        Return the command registered under name or one of its aliases, or None.
        """
        with self._lock:
            try:
                return self._commands[name]
            except KeyError:
                pass
            try:
                return self._commands[self._aliases[name]]
            except KeyError:
                return None

    def names(self):
        """
        Primary names in registration order.
        """
        with self._lock:
            return list(self._commands)

    def aliases(self):
        """
        Snapshot of the alias → primary name index.
        """
        with self._lock:
            return dict(self._aliases)

    def categories(self):
        """
        Snapshot of the category → primary names index.
        """
        with self._lock:
            return {category: list(names) for category, names in self._categories.items()}

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __iter__(self):
        return iter(self.names())

    def __len__(self):
        with self._lock:
            return len(self._commands)


__all__ = (
    "Registry",
)
