import os
import sys

from rich.console import Console

from commandeer import *

__prog__ = "files"

console = Console()
dispatcher = Dispatcher(prog=__prog__, colorful=True, console=console)


@dispatcher.command(
    category="Files",
    aliases=["dir"],
    parameters=[Parameter("path", "directory to list", default=".", type=TypeTag.PATH)],
    options=[Option("all", "a", "show hidden entries"), Option("long", "l", "one entry per line")],
    examples=["ls", "ls -a /tmp"],
)
def ls(invocation):
    """list a directory"""
    entries = sorted(os.listdir(invocation.argument(0, ".")))
    if not invocation.flagged("a", "all"):
        entries = [entry for entry in entries if not entry.startswith(".")]
    console.print(*entries, sep="\n" if invocation.flagged("l", "long") else "  ", markup=False)


@dispatcher.command(
    category="Files",
    parameters=[Parameter("file", "file to print", required=True, type=TypeTag.FILE)],
    options=[Option("number", "n", "number the lines")],
)
def cat(invocation):
    """print a file"""
    with open(invocation.argument(0), encoding="utf-8") as file:
        for number, line in enumerate(file, 1):
            prefix = "%6d  " % number if invocation.flagged("n", "number") else ""
            console.print(prefix + line.rstrip("\n"), markup=False, highlight=False)


@dispatcher.command(
    category="Files",
    parameters=[Parameter("path", "directory to create", required=True, type=TypeTag.PATH)],
    options=[Option("parents", "p", "create missing parents")],
)
def mkdir(invocation):
    """create a directory"""
    if invocation.flagged("p", "parents"):
        os.makedirs(invocation.argument(0), exist_ok=True)
    else:
        os.mkdir(invocation.argument(0))


@dispatcher.command(aliases=["say"], parameters=[Parameter("...", "words to print")])
def echo(invocation):
    """print the arguments back"""
    console.print(" ".join(invocation.positionals), markup=False, highlight=False)


@dispatcher.command(
    category="Math",
    parameters=[Parameter("...", "numbers to add", type=TypeTag.FLOAT)],
    examples=["add 1 2 3.5"],
)
def add(invocation):
    """add numbers"""
    try:
        console.print(sum(map(float, invocation.positionals)))
    except ValueError:
        return False


if __name__ == '__main__':
    if len(sys.argv) > 1:
        sys.exit(0 if dispatcher.dispatch() else 1)
    Shell(dispatcher).run()
