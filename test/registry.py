"""
Registry module behavioral tests (registration, lookup, indices).

Scope
- Validate name and alias lookup, category indexing and registration order.
- Validate rejection of empty names and replacement on re-registration,
  including retraction of the replaced entry's aliases and category.
- Validate the bounded fault history and concurrent registration.

Conventions
- Test method names follow CamelCase per project convention.
- Diagnostics are captured with a rich Console writing to a StringIO.
"""

from __future__ import annotations

import io
import threading
import unittest
from unittest import TestCase

from rich.console import Console

from commandeer import Command, Registry
from commandeer.faults import CommandOverwriteWarning, EmptyNameError


def first(invocation):
    return True


def second(invocation):
    return True


class TestRegistry(TestCase):
    """Behavioral tests for Registry."""

    def setUp(self):
        self.console = Console(file=io.StringIO(), width=200)
        self.registry = Registry(prog="demo", console=self.console)

    def output(self):
        return self.console.file.getvalue()

    def testAliasResolution(self):
        self.assertTrue(self.registry.register(Command(first, name="list", aliases=["ls"])))
        self.assertIs(self.registry.lookup("ls"), self.registry.lookup("list"))
        self.assertIn("ls", self.registry)

    def testLookupMiss(self):
        self.assertIsNone(self.registry.lookup("missing"))
        self.assertNotIn("missing", self.registry)

    def testNamesInRegistrationOrder(self):
        for name in ("zeta", "alpha", "mid"):
            self.registry.register(Command(first, name=name))
        self.assertEqual(self.registry.names(), ["zeta", "alpha", "mid"])
        self.assertEqual(list(self.registry), ["zeta", "alpha", "mid"])
        self.assertEqual(len(self.registry), 3)

    def testCategories(self):
        self.registry.register(Command(first, name="cp", category="Files"))
        self.registry.register(Command(first, name="echo"))
        self.registry.register(Command(first, name="mv", category="Files"))
        self.assertEqual(self.registry.categories(), {"Files": ["cp", "mv"], "General": ["echo"]})

    def testEmptyAndSelfAliasesSkipped(self):
        self.registry.register(Command(first, name="echo", aliases=["", "echo", "say"]))
        self.assertEqual(self.registry.aliases(), {"say": "echo"})

    def testEmptyNameRejected(self):
        self.assertFalse(self.registry.register(Command(first, name="")))
        self.assertEqual(len(self.registry), 0)
        self.assertIsInstance(self.registry.faults[-1], EmptyNameError)
        self.assertIn("command name cannot be empty", self.output())

    def testReRegistrationKeepsSecondHandlerOnly(self):
        self.registry.register(Command(first, name="run"))
        self.assertTrue(self.registry.register(Command(second, name="run")))
        self.assertIs(self.registry.lookup("run").handler, second)
        self.assertEqual(self.registry.names(), ["run"])
        self.assertIsInstance(self.registry.faults[-1], CommandOverwriteWarning)
        self.assertIn("already exists", self.output())

    def testReRegistrationRetractsOldAliasesAndCategory(self):
        self.registry.register(Command(first, name="run", aliases=["r", "go"], category="Old"))
        self.registry.register(Command(second, name="run", aliases=["go"], category="New"))
        self.assertIsNone(self.registry.lookup("r"))
        self.assertIs(self.registry.lookup("go").handler, second)
        self.assertEqual(self.registry.categories(), {"New": ["run"]})

    def testRetractionSparesAliasTakenOver(self):
        self.registry.register(Command(first, name="run", aliases=["x"]))
        self.registry.register(Command(first, name="exec", aliases=["x"]))
        self.registry.register(Command(second, name="run"))
        self.assertEqual(self.registry.lookup("x").name, "exec")

    def testQuietStillRecords(self):
        registry = Registry(console=self.console, quiet=True)
        registry.register(Command(first, name=""))
        self.assertEqual(len(registry.faults), 1)
        self.assertEqual(self.output(), "")

    def testFaultHistoryIsBounded(self):
        registry = Registry(console=self.console, quiet=True)
        for _ in range(100):
            registry.register(Command(first, name=""))
        self.assertEqual(len(registry.faults), 64)

    def testRejectsNonCommand(self):
        with self.assertRaises(TypeError):
            self.registry.register(first)

    def testConcurrentRegistration(self):
        def worker(index):
            for number in range(50):
                self.registry.register(Command(first, name="c%d-%d" % (index, number), category="T%d" % index))

        threads = [threading.Thread(target=worker, args=(index,)) for index in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(self.registry), 400)
        self.assertEqual(sum(map(len, self.registry.categories().values())), 400)


if __name__ == "__main__":
    unittest.main()
