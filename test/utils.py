"""
Tests for the shared helpers.

This module verifies:
- Unset sentinel semantics (singleton identity, falsiness, finality, copying).
- coalesce() resolution of Unset while keeping legitimate falsey values.
- rename() in both function and decorator forms.
- mirror() read-only properties handing out detached container copies.
"""
import copy
import unittest
from unittest import TestCase

from commandeer.utils import *


class Holder:
    items = mirror("items")
    table = mirror("table")

    def __init__(self):
        self._items = ["a", ["b"]]
        self._table = {"k": {"v"}}


class UtilsTest(TestCase):
    """
    Test suite for Unset, coalesce, rename and mirror.
    """

    def testUnsetSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testUnsetFalsyAndRepr(self) -> None:
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertNotEqual(Unset, None)

    def testUnsetIsFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnsetInUnion(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "General"), "General")
        self.assertIsNone(coalesce(Unset))
        for value in ("", 0, None, []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "General"), value)

    def testRenameFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual(f.__name__, "g")
        self.assertEqual(f.__qualname__, "g")

    def testRenameDecoratorForm(self) -> None:
        @rename("h")
        def f():
            pass

        self.assertEqual(f.__name__, "h")

    def testRenameChecks(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorReturnsDetachedCopies(self) -> None:
        holder = Holder()
        items = holder.items
        items[1].append("c")
        items.append("d")
        self.assertEqual(holder.items, ["a", ["b"]])
        table = holder.table
        table["k"].add("w")
        self.assertEqual(holder.table, {"k": {"v"}})

    def testMirrorIsReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            Holder().items = []


if __name__ == "__main__":
    unittest.main()
