"""
Suggestions module behavioral tests ("did you mean" candidates).

Scope
- Validate the similarity predicate (prefix rule, length slack, aligned ratio).
- Validate ordering and limits of suggest().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commandeer import similar, suggest


class TestSimilar(TestCase):
    """Behavioral tests for the similarity predicate."""

    def testPrefixIgnoresLength(self):
        self.assertTrue(similar("conf", "configuration"))

    def testAlignedRatioMustExceedThreshold(self):
        self.assertTrue(similar("stats", "stat"))  # 4/5
        self.assertFalse(similar("stats", "start"))  # exactly 3/5

    def testLengthSlack(self):
        self.assertFalse(similar("configuration", "conf"))

    def testCaseSensitive(self):
        self.assertFalse(similar("STAT", "stat"))

    def testEmptyNeverSimilar(self):
        self.assertFalse(similar("", "stat"))
        self.assertFalse(similar("stat", ""))


class TestSuggest(TestCase):
    """Behavioral tests for suggest()."""

    def testOrderAndLimit(self):
        candidates = ["status", "stat", "start", "stop"]
        result = suggest("stats", candidates, 2)
        self.assertLessEqual(len(result), 2)
        self.assertTrue(all(similar("stats", x) for x in result))
        self.assertEqual(result, ["status", "stat"])

    def testKeepsCandidateOrder(self):
        self.assertEqual(suggest("st", ["stop", "list", "status"]), ["stop", "status"])

    def testDefaultLimit(self):
        self.assertEqual(len(suggest("a", ["a%d" % i for i in range(10)])), 5)

    def testZeroLimit(self):
        self.assertEqual(suggest("stat", ["status"], 0), [])

    def testNegativeLimitRejected(self):
        with self.assertRaises(ValueError):
            suggest("stat", ["status"], -1)


if __name__ == "__main__":
    unittest.main()
