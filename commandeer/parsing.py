r"""
Commandeer tokenizer and parser.

Two entry shapes feed the same grammar:
- vector mode: an argv-like sequence; element 0 is the command name.
- line mode: a single string, split on whitespace with light double-quote
  grouping (see split()), then parsed as a vector.

Grammar (left to right, after the command name)
- "--"               every remaining token is positional, verbatim.
- "--key=value"      option key → value (split at the first '=').
- "--key value"      option key → value, only when value does not start with '-'.
- "--key"            flag "key" otherwise.
- "-k value"/"-k"    same value-or-flag rule for a single short character.
- "-xyz"             bundled flags x, y, z (never take a value).
- anything else      positional (a lone "-" included).

Nothing is rejected here: unknown options are kept, duplicates overwrite
(last wins), and an empty input yields an invocation with an empty name.

Examples
    >>> parse(["serve", "app", "--port=8080", "-v"]).options
    {'port': '8080'}
    >>> parse('say "hello world" -n 2').positionals
    ['hello world']
"""
import sys
from collections import deque
from collections.abc import Iterable

from .invocation import Invocation
from .utils import *

TERMINATOR = "--"


def split(line, /):
    """
    Split a command line on whitespace, grouping double-quoted runs.

    - A token starting with '"' but not ending with it absorbs the following
      tokens (joined by one space) until a token ending with '"' is reached.
    - Surrounding quotes are then removed from any token that both starts and
      ends with '"'. An unterminated quote keeps its leading '"'.
    - No escapes, no single quotes, no other shell syntax.
    """
    if not isinstance(line, str):
        raise TypeError("split() argument must be a string")

    tokens = []
    for token in line.split():
        if tokens and tokens[-1].startswith('"') and not tokens[-1].endswith('"'):
            tokens[-1] += " " + token
        else:
            tokens.append(token)

    return [token[1:-1] if token.startswith('"') and token.endswith('"') else token for token in tokens]


def _sanitized(iterable):
    """
    Yield the items of an argv-like iterable, validating element types.

    Tokens are passed through untouched; empty strings are legitimate positionals.
    """
    for item in iterable:
        if not isinstance(item, str):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        yield item


def _value_or_flag(invocation, key, tokens):
    """
    Consume the next token as the value of key when it is not dash-prefixed,
    otherwise record key as a flag.
    """
    if tokens and not tokens[0].startswith("-"):
        invocation.options[key] = tokens.popleft()
    else:
        invocation.flags.add(key)


def _parseargs(tokens):
    invocation = Invocation()

    if not tokens:
        return invocation

    invocation.name = tokens.popleft()

    while tokens:
        token = tokens.popleft()

        if token == TERMINATOR:
            invocation.positionals.extend(tokens)
            tokens.clear()
        elif len(token) > 2 and token.startswith("--"):
            key, equals, value = token[2:].partition("=")
            if equals:
                invocation.options[key] = value
            else:
                _value_or_flag(invocation, key, tokens)
        elif len(token) > 1 and token.startswith("-"):
            if len(keys := token[1:]) == 1:
                _value_or_flag(invocation, keys, tokens)
            else:
                invocation.flags.update(keys)
        else:
            invocation.positionals.append(token)

    return invocation


def parse(source=Unset, /):
    """
    Parse raw input into an Invocation.

    Parameters
    - source:
      • Unset: the process arguments after the program name (sys.argv[1:]).
      • str: a command line; tokenized with split() first.
      • Iterable[str]: pre-tokenized argv; element 0 is the command name.

    Raises
    - TypeError: when source is not Unset/str/Iterable[str], or when an
      iterable contains a non-string element.
    """
    if source is Unset:
        tokens = sys.argv[1:]
    elif isinstance(source, str):
        tokens = split(source)
    elif isinstance(source, Iterable):
        tokens = list(_sanitized(source))
    else:
        raise TypeError("parse() argument must be a string or an iterable of strings")

    return _parseargs(deque(tokens))


__all__ = (
    "TERMINATOR",
    "split",
    "parse",
)
