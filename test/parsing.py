"""
Parsing module behavioral tests (tokenizer and grammar).

Scope
- Validate vector-mode grammar: positionals, long/short options, bundled flags,
  value-or-flag resolution and the "--" terminator.
- Validate line-mode preprocessing: whitespace split and double-quote grouping.
- Validate edge cases: empty input, last-wins duplicates, input types.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (parse, split, Invocation).
"""

from __future__ import annotations

import sys
import unittest
from unittest import TestCase, mock

from commandeer import parse, split, Invocation


class TestVectorMode(TestCase):
    """Behavioral tests for argv-like input."""

    def testPositionalsRoundTrip(self):
        argv = ["cmd", "alpha", "beta", "gamma"]
        invocation = parse(argv)
        self.assertEqual(invocation.name, "cmd")
        self.assertEqual(invocation.positionals, argv[1:])
        self.assertEqual(invocation.options, {})
        self.assertEqual(invocation.flags, set())

    def testLongOptionWithEquals(self):
        self.assertEqual(parse(["cmd", "--port=8080"]).options["port"], "8080")

    def testLongOptionEqualsSplitsAtFirstEquals(self):
        self.assertEqual(parse(["cmd", "--define=a=b"]).options, {"define": "a=b"})

    def testLongOptionWithEmptyInlineValue(self):
        self.assertEqual(parse(["cmd", "--name="]).options, {"name": ""})

    def testLongOptionWithSeparateValue(self):
        invocation = parse(["cmd", "--port", "8080"])
        self.assertEqual(invocation.options["port"], "8080")
        self.assertEqual(invocation.positionals, [])

    def testLongOptionFollowedByOptionBecomesFlag(self):
        invocation = parse(["cmd", "--port", "--verbose"])
        self.assertIn("port", invocation.flags)
        self.assertIn("verbose", invocation.flags)
        self.assertNotIn("port", invocation.options)

    def testTrailingLongOptionBecomesFlag(self):
        self.assertEqual(parse(["cmd", "--force"]).flags, {"force"})

    def testShortOptionWithValue(self):
        invocation = parse(["cmd", "-p", "8080", "file"])
        self.assertEqual(invocation.options, {"p": "8080"})
        self.assertEqual(invocation.positionals, ["file"])

    def testShortOptionNeverConsumesDashValue(self):
        invocation = parse(["cmd", "-n", "-5"])
        self.assertEqual(invocation.flags, {"n", "5"})
        self.assertEqual(invocation.options, {})

    def testBundledShortFlags(self):
        self.assertEqual(parse(["cmd", "-xyz"]).flags, {"x", "y", "z"})

    def testBundledShortFlagsDoNotConsumeValues(self):
        invocation = parse(["cmd", "-xy", "value"])
        self.assertEqual(invocation.flags, {"x", "y"})
        self.assertEqual(invocation.positionals, ["value"])

    def testTerminator(self):
        self.assertEqual(parse(["cmd", "--", "-a", "-b"]).positionals, ["-a", "-b"])

    def testTerminatorKeepsEverythingVerbatim(self):
        invocation = parse(["cmd", "first", "--", "--port=1", "--", "x"])
        self.assertEqual(invocation.positionals, ["first", "--port=1", "--", "x"])
        self.assertEqual(invocation.options, {})

    def testLoneDashIsPositional(self):
        self.assertEqual(parse(["cat", "-"]).positionals, ["-"])

    def testDuplicateOptionLastWins(self):
        invocation = parse(["cmd", "--level=1", "--level", "2", "--level=3"])
        self.assertEqual(invocation.options, {"level": "3"})

    def testEmptyStringsAreKept(self):
        self.assertEqual(parse(["cmd", "", "x"]).positionals, ["", "x"])

    def testEmptyVector(self):
        invocation = parse([])
        self.assertEqual(invocation.name, "")
        self.assertFalse(invocation)

    def testDefaultsToProcessArguments(self):
        with mock.patch.object(sys, "argv", ["prog", "greet", "world", "--loud"]):
            invocation = parse()
        self.assertEqual(invocation.name, "greet")
        self.assertEqual(invocation.positionals, ["world"])
        self.assertEqual(invocation.flags, {"loud"})

    def testNonStringItemRejected(self):
        with self.assertRaises(TypeError):
            parse(["cmd", 1])

    def testNonIterableRejected(self):
        with self.assertRaises(TypeError):
            parse(42)


class TestLineMode(TestCase):
    """Behavioral tests for single-string input."""

    def testSplitOnWhitespace(self):
        self.assertEqual(split("  echo   hello \t world "), ["echo", "hello", "world"])

    def testQuotedRunIsOneToken(self):
        self.assertEqual(split('say "hello big world" now'), ["say", "hello big world", "now"])

    def testSingleQuotedWordIsStripped(self):
        self.assertEqual(split('say "hello"'), ["say", "hello"])

    def testUnterminatedQuoteKeepsLeadingQuote(self):
        self.assertEqual(split('say "hello world'), ["say", '"hello world'])

    def testEmptyLine(self):
        self.assertEqual(split(""), [])
        self.assertEqual(parse("   ").name, "")

    def testLineFeedsVectorGrammar(self):
        invocation = parse('say "hello world" -n 2 --loud')
        self.assertEqual(invocation.name, "say")
        self.assertEqual(invocation.positionals, ["hello world"])
        self.assertEqual(invocation.options, {"n": "2"})
        self.assertEqual(invocation.flags, {"loud"})

    def testSplitRejectsNonString(self):
        with self.assertRaises(TypeError):
            split(["a"])


class TestInvocation(TestCase):
    """Behavioral tests for the Invocation accessors."""

    def testAccessors(self):
        invocation = parse(["copy", "a.txt", "--mode=fast", "-v"])
        self.assertEqual(invocation.argument(0), "a.txt")
        self.assertIsNone(invocation.argument(1))
        self.assertEqual(invocation.argument(1, "b.txt"), "b.txt")
        self.assertEqual(invocation.option("mode"), "fast")
        self.assertEqual(invocation.option("level", "1"), "1")
        self.assertTrue(invocation.flagged("v", "verbose"))
        self.assertFalse(invocation.flagged("q"))
        self.assertEqual(len(invocation), 1)

    def testEquality(self):
        self.assertEqual(parse("a b --c=d -e"), Invocation("a", ["b"], {"c": "d"}, {"e"}))

    def testClear(self):
        invocation = parse("a b --c=d -e")
        invocation.clear()
        self.assertEqual(invocation, Invocation())

    def testRepr(self):
        self.assertTrue(repr(parse("a b")).startswith("invocation(name='a'"))

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Invocation(1)


if __name__ == "__main__":
    unittest.main()
