# python
"""
Arguments module behavioral tests (spec grammar, slots, environment naming).

Scope
- Validate option spec parsing: spellings, value modes, display names, errors.
- Validate argument spec parsing: required and optional slots.
- Validate Option/Argument construction: read-only fields, canonical spelling,
  implicit environment variable names.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argvoy import (
    Argument,
    ConfigurationError,
    Option,
    StringValue,
    BoolValue,
    ValueMode,
    parse_argument_spec,
    parse_option_spec,
)


class TestOptionSpec(TestCase):

    def testOptionalValue(self):
        self.assertEqual(parse_option_spec("-n, --name[=NAME]"), (("n", "name"), ValueMode.OPTIONAL, "NAME"))

    def testRequiredValue(self):
        self.assertEqual(parse_option_spec("--port=PORT"), (("port",), ValueMode.REQUIRED, "PORT"))

    def testNoValue(self):
        self.assertEqual(parse_option_spec("-v, --verbose"), (("v", "verbose"), ValueMode.NONE, None))

    def testWhitespaceAroundCommasIgnored(self):
        self.assertEqual(parse_option_spec(" -d ,--dry-run "), (("d", "dry-run"), ValueMode.NONE, None))

    def testRepeatedAgreeingClauses(self):
        self.assertEqual(parse_option_spec("-p=PORT, --port=PORT"), (("p", "port"), ValueMode.REQUIRED, "PORT"))

    def testConflictingClausesRejected(self):
        with self.assertRaises(ConfigurationError):
            parse_option_spec("-p=PORT, --port[=PORT]")

    def testRepeatedSpellingRejected(self):
        with self.assertRaises(ConfigurationError):
            parse_option_spec("-n, -n")

    def testMalformedSpellingsRejected(self):
        for spec in ("", "name", "---name", "-ab", "--x", "--name=", "--name[=]", "-n,", "--na me"):
            with self.assertRaises(ConfigurationError, msg=spec):
                parse_option_spec(spec)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            parse_option_spec(["--name"])


class TestArgumentSpec(TestCase):

    def testRequired(self):
        self.assertEqual(parse_argument_spec("FILE"), ("FILE", True))

    def testOptional(self):
        self.assertEqual(parse_argument_spec("[FILE]"), ("FILE", False))

    def testMalformedRejected(self):
        for spec in ("", "[FILE", "FILE]", "[]", "1FILE", "TWO WORDS"):
            with self.assertRaises(ConfigurationError, msg=spec):
                parse_argument_spec(spec)


class TestOption(TestCase):

    def testFieldsAreReadOnly(self):
        option = Option(("n", "name"), ValueMode.OPTIONAL, StringValue(), "a name", metavar="NAME")
        self.assertEqual(option.names, ("n", "name"))
        self.assertIs(option.mode, ValueMode.OPTIONAL)
        self.assertEqual(option.metavar, "NAME")
        self.assertEqual(option.descr, "a name")
        with self.assertRaises(AttributeError):
            option.names = ("x",)

    def testCanonicalAndSpellings(self):
        option = Option(("name", "n"), ValueMode.NONE, BoolValue())
        self.assertEqual(option.canonical, "--name")
        self.assertEqual(option.spellings, ("-n", "--name"))

    def testImplicitEnvironmentName(self):
        self.assertEqual(Option(("H", "db-host"), ValueMode.REQUIRED, StringValue()).env, "DB_HOST")
        self.assertEqual(Option(("dh", "database-host"), ValueMode.REQUIRED, StringValue()).env, "DATABASE_HOST")

    def testShortOnlyHasNoEnvironmentName(self):
        self.assertIsNone(Option(("v",), ValueMode.NONE, BoolValue()).env)

    def testOnlyRequiredValuesGetImplicitName(self):
        self.assertIsNone(Option(("d", "debug"), ValueMode.NONE, BoolValue()).env)
        self.assertIsNone(Option(("u", "user"), ValueMode.OPTIONAL, StringValue()).env)
        self.assertEqual(Option(("user",), ValueMode.OPTIONAL, StringValue(), env="APP_USER").env, "APP_USER")

    def testExplicitEnvironmentName(self):
        self.assertEqual(Option(("name",), ValueMode.REQUIRED, StringValue(), env="GREETING_NAME").env, "GREETING_NAME")
        self.assertIsNone(Option(("name",), ValueMode.REQUIRED, StringValue(), env=None).env)

    def testMetavarDroppedWithoutValue(self):
        self.assertIsNone(Option(("v",), ValueMode.NONE, BoolValue(), metavar="X").metavar)

    def testDuplicateNamesRejected(self):
        with self.assertRaises(ConfigurationError):
            Option(("n", "n"), ValueMode.NONE, BoolValue())

    def testValueMustBeAnAdapter(self):
        with self.assertRaises(TypeError):
            Option(("name",), ValueMode.REQUIRED, "World")

    def testEmptyDescrRejected(self):
        with self.assertRaises(ValueError):
            Option(("name",), ValueMode.REQUIRED, StringValue(), "   ")

    def testRepr(self):
        self.assertTrue(repr(Option(("v",), ValueMode.NONE, BoolValue())).startswith("option(names=('v',)"))


class TestArgument(TestCase):

    def testDefaults(self):
        argument = Argument("FILE", StringValue())
        self.assertEqual(argument.name, "FILE")
        self.assertIsNone(argument.descr)
        self.assertTrue(argument.required)

    def testOptional(self):
        self.assertFalse(Argument("FILE", StringValue(), "input file", required=False).required)

    def testNameMustBeNonEmpty(self):
        with self.assertRaises(TypeError):
            Argument("", StringValue())


if __name__ == "__main__":
    unittest.main()
