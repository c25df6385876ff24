"""
Parsing module behavioral tests (schema-free and schema-aware tokenizing).

Scope
- Validate classification of arguments, long options and short clusters.
- Validate the "--" terminator and folding of short clusters.
- Validate next-token consumption for value-required options.
- Validate the Input lookup helpers.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argvoy import BoolValue, Definition, Input, InputArgument, InputOption, StringValue, parse_input


class TestSchemaFreeParsing(TestCase):

    def testPlainWordsAreArguments(self):
        input = parse_input(["a", "b", "c"])
        self.assertEqual(input.options, ())
        self.assertEqual([token.value for token in input.arguments], ["a", "b", "c"])

    def testLongOption(self):
        self.assertEqual(parse_input(["--name=value"]).tokens, (InputOption("name", "value"),))
        self.assertEqual(parse_input(["--flag"]).tokens, (InputOption("flag", None),))

    def testLongOptionSplitsOnFirstEquals(self):
        self.assertEqual(parse_input(["--query=a=b"]).tokens, (InputOption("query", "a=b"),))

    def testEmptyValueIsKept(self):
        self.assertEqual(parse_input(["--name="]).tokens, (InputOption("name", ""),))

    def testShortClusterFolding(self):
        self.assertEqual(parse_input(["-xyz=v"]).tokens, (
            InputOption("x"),
            InputOption("y"),
            InputOption("z", "v"),
        ))

    def testShortSingle(self):
        self.assertEqual(parse_input(["-v"]).tokens, (InputOption("v"),))

    def testLoneDashesAreArguments(self):
        self.assertEqual(parse_input(["-"]).tokens, (InputArgument("-"),))
        self.assertEqual(parse_input(["a", "--", "--"]).tokens, (InputArgument("a"), InputArgument("--")))

    def testTerminatorStopsOptions(self):
        input = parse_input(["a", "--", "-b", "--c=d"])
        self.assertEqual(input.options, ())
        self.assertEqual([token.value for token in input.arguments], ["a", "-b", "--c=d"])

    def testInterleavedOrderIsPreserved(self):
        self.assertEqual(parse_input(["one", "-a", "two", "--b=3"]).tokens, (
            InputArgument("one"),
            InputOption("a"),
            InputArgument("two"),
            InputOption("b", "3"),
        ))

    def testSchemaFreeNeverConsumesNextToken(self):
        self.assertEqual(parse_input(["--name", "World"]).tokens, (
            InputOption("name"),
            InputArgument("World"),
        ))

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            parse_input(["--port", 8080])


class TestSchemaAwareParsing(TestCase):

    def setUp(self):
        self.definition = Definition()
        self.definition.add_option(StringValue(), "-n, --name=NAME")
        self.definition.add_option(StringValue(), "-g, --greeting[=TEXT]")
        self.definition.add_option(BoolValue(), "-v, --verbose")

    def testRequiredValueConsumesNextToken(self):
        self.assertEqual(parse_input(["--name", "World"], self.definition).tokens, (InputOption("name", "World"),))

    def testInlineValueDoesNotConsume(self):
        self.assertEqual(parse_input(["--name=World", "rest"], self.definition).tokens, (
            InputOption("name", "World"),
            InputArgument("rest"),
        ))

    def testConsumedTokenIsTakenVerbatim(self):
        self.assertEqual(parse_input(["--name", "--verbose"], self.definition).tokens, (InputOption("name", "--verbose"),))
        self.assertEqual(parse_input(["--name", "--"], self.definition).tokens, (InputOption("name", "--"),))

    def testShortClusterLastOptionConsumes(self):
        self.assertEqual(parse_input(["-vn", "World"], self.definition).tokens, (
            InputOption("v"),
            InputOption("n", "World"),
        ))

    def testOptionalValueDoesNotConsume(self):
        self.assertEqual(parse_input(["--greeting", "Hi"], self.definition).tokens, (
            InputOption("greeting"),
            InputArgument("Hi"),
        ))

    def testUnknownOptionDoesNotConsume(self):
        self.assertEqual(parse_input(["--other", "x", "--name", "y"], self.definition).tokens, (
            InputOption("other"),
            InputArgument("x"),
            InputOption("name", "y"),
        ))

    def testMissingNextTokenLeavesValueAbsent(self):
        self.assertEqual(parse_input(["--name"], self.definition).tokens, (InputOption("name"),))

    def testTerminatorDisablesConsumption(self):
        self.assertEqual(parse_input(["--", "--name", "x"], self.definition).tokens, (
            InputArgument("--name"),
            InputArgument("x"),
        ))


class TestInput(TestCase):

    def testLookupHelpers(self):
        input = parse_input(["a", "-n", "--name=first", "b", "--name=last", "--flag"])
        self.assertEqual(input.argument(0), "a")
        self.assertEqual(input.argument(1), "b")
        self.assertIsNone(input.argument(2))
        self.assertEqual(input.argument(5, "x"), "x")
        self.assertEqual(input.option("n", "name"), "last")
        self.assertIsNone(input.option("flag"))
        self.assertEqual(input.option("missing", default="d"), "d")
        self.assertIn("flag", input)
        self.assertNotIn("missing", input)

    def testSequenceBehaviour(self):
        input = parse_input(["a", "-b"])
        self.assertEqual(len(input), 2)
        self.assertEqual(list(input), [InputArgument("a"), InputOption("b")])
        self.assertEqual(input, Input([InputArgument("a"), InputOption("b")]))
        self.assertEqual(repr(input), "input('a' -b)")


if __name__ == "__main__":
    unittest.main()
