"""
Faults module behavioral tests (payload, trigger policy, rendering).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from argvoy import (
    CommandException,
    ConversionError,
    FaultCode,
    MissingArgumentError,
    MissingRequiredError,
    trigger,
)


class TestCommandException(TestCase):

    def testMessageAndOptions(self):
        fault = ConversionError("invalid value 'x' for option '--port'", input="--port", value="x")
        self.assertEqual(str(fault), "invalid value 'x' for option '--port'")
        self.assertEqual(fault.options["value"], "x")
        with self.assertRaises(TypeError):
            fault.options["value"] = "y"

    def testReplaceMergesOptions(self):
        fault = MissingArgumentError("missing", input="FILE")
        copy = fault.__replace__(hint="try --help")
        self.assertIsInstance(copy, MissingArgumentError)
        self.assertEqual(dict(copy.options), {"input": "FILE", "hint": "try --help"})
        self.assertNotIn("hint", fault.options)

    def testHierarchy(self):
        self.assertTrue(issubclass(MissingArgumentError, MissingRequiredError))
        self.assertTrue(issubclass(MissingRequiredError, CommandException))

    def testNormalizedCode(self):
        self.assertEqual(FaultCode.CONVERSION_FAILED.normalize(), "11131")


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(ConversionError) as context:
            trigger(ConversionError("bad"), hint="try --help")
        self.assertEqual(context.exception.options["hint"], "try --help")

    def testRendersInShell(self):
        console = Console(file=io.StringIO(), width=120)
        trigger(
            ConversionError("bad value", title="invalid value", code=FaultCode.CONVERSION_FAILED),
            shell=True,
            console=console,
            hint="try 'app --help' for more information",
        )
        rendered = console.file.getvalue()
        self.assertIn("11131", rendered)
        self.assertIn("Invalid Value", rendered)
        self.assertIn("bad value", rendered)
        self.assertIn("→ try 'app --help' for more information", rendered)

    def testFancyRendersPanel(self):
        console = Console(file=io.StringIO(), width=120)
        trigger(ConversionError("bad value"), shell=True, fancy=True, colorful=True, console=console)
        self.assertIn("╭", console.file.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
