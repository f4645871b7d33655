"""
Commandeer suggestions: “did you mean …?” candidates for unknown command names.

A candidate b is similar to the query a when either
- b starts with a (literal, case-sensitive prefix), or
- their lengths differ by at most 2 and more than 60% of the positions
  (index-aligned, over the longer length) hold the same character.

Empty strings are never similar to anything. Candidates are scanned in the
order given and collection stops at the limit, so the result is stable for a
stable candidate order.
"""
from itertools import islice

THRESHOLD = 0.6
SLACK = 2


def similar(a, b, /):
    """
    Return True when b is close enough to a to be suggested for it.
    """
    if not a or not b:
        return False
    if b.startswith(a):
        return True
    if abs(len(a) - len(b)) > SLACK:
        return False
    matches = sum(x == y for x, y in zip(a, b))
    return matches / max(len(a), len(b)) > THRESHOLD


def suggest(name, candidates, /, limit=5):
    """
    Return up to limit candidates similar to name, in candidate order.
    """
    if not isinstance(limit, int) or limit < 0:
        raise ValueError("suggest() limit must be a non-negative integer")
    return list(islice((candidate for candidate in candidates if similar(name, candidate)), limit))


__all__ = (
    "similar",
    "suggest",
)
