"""
Utils module behavioral tests (sentinel, environment snapshots, helpers).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argvoy.utils import Unset, UnsetType, coalesce, dashed, environ, ordinal


class TestUnset(TestCase):

    def testSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testCoalescePreservesFalseyValues(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestEnviron(TestCase):

    def testMapping(self):
        env = environ({"HOME": "/root"})
        self.assertEqual(env["HOME"], "/root")
        with self.assertRaises(TypeError):
            env["HOME"] = "/tmp"

    def testKeyValueStrings(self):
        env = environ(["A=1", "B=x=y", "NOEQUALS", "=hidden", "A=2"])
        self.assertEqual(dict(env), {"A": "2", "B": "x=y"})

    def testUnsetIsEmpty(self):
        self.assertEqual(dict(environ()), {})

    def testRejectsStringsAndOtherShapes(self):
        for env in ("A=1", 42, [1]):
            with self.assertRaises(TypeError):
                environ(env)


class TestHelpers(TestCase):

    def testDashed(self):
        self.assertEqual(dashed("n"), "-n")
        self.assertEqual(dashed("name"), "--name")

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")


if __name__ == "__main__":
    unittest.main()
