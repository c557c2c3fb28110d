# python
"""
Binder module behavioral tests.

Scope
- Validate token classification (positional, switch, negation, assignment).
- Validate binding: positional Required values, flag tokens by name or
  alternate name, defaults for untouched Optional parameters.
- Validate the input faults and that every check runs before any conversion.

Conventions
- Test method names follow CamelCase per project convention.
- Actions are taken from module-level targets through discover().
"""

import datetime
import unittest
from unittest import TestCase

from slashargs import (
    Optional,
    action,
    discover,
    DuplicatedFlagError,
    MalformedTokenError,
    MissingRequiredError,
    UnconvertibleValueError,
    UnknownFlagError,
)
from slashargs.binder import Token, TokenKind, bind, classify


class Program:
    @action
    def run(
            self,
            name,
            count: int,
            verbose: bool = Optional(False, "v"),
            output: str = Optional("out.txt", "o", "out"),
            tags: list[str] = Optional([], "t"),
            since: datetime.date = Optional(datetime.date(2020, 1, 1)),
    ):
        pass


class Flags:
    @action
    def run(self, enabled: bool = Optional(True, "e"), level: int = Optional(0)):
        pass


def _run(target):
    return discover(target)[0]


class TestClassify(TestCase):
    """Behavioral tests for classify()."""

    def testPositional(self):
        self.assertEqual(classify("file"), Token("file", TokenKind.POSITIONAL))
        self.assertFalse(classify("file").flagged)

    def testSwitch(self):
        self.assertEqual(classify("/debug"), Token("/debug", TokenKind.SWITCH, "debug", "true"))

    def testNegation(self):
        self.assertEqual(classify("/-debug"), Token("/-debug", TokenKind.NEGATION, "debug", "false"))

    def testNegationIgnoresValue(self):
        token = classify("/-debug:true")
        self.assertEqual((token.kind, token.name, token.value), (TokenKind.NEGATION, "debug", "false"))

    def testAssignment(self):
        self.assertEqual(classify("/out:a.txt"), Token("/out:a.txt", TokenKind.ASSIGNMENT, "out", "a.txt"))

    def testAssignmentKeepsLaterColons(self):
        self.assertEqual(classify("/url:http://x").value, "http://x")

    def testAssignmentEmptyValue(self):
        self.assertEqual(classify("/out:").value, "")

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            classify(1)


class TestBind(TestCase):
    """Behavioral tests for bind()."""

    def setUp(self):
        self.action = _run(Program)

    def testRequiredOnlyKeepsDefaults(self):
        self.assertEqual(
            bind(self.action, ["x", "3"]),
            ["x", 3, False, "out.txt", [], datetime.date(2020, 1, 1)],
        )

    def testFlagsByNameAndAlternateName(self):
        values = bind(self.action, ["x", "3", "/v", "/out:a.txt", "/t:a+b", "/since:02-03-2021"])
        self.assertEqual(values, ["x", 3, True, "a.txt", ["a", "b"], datetime.date(2021, 3, 2)])

    def testParameterNameIsAnAlias(self):
        self.assertEqual(bind(self.action, ["x", "3", "/output:b"])[3], "b")

    def testFlagOrderDoesNotMatter(self):
        self.assertEqual(
            bind(self.action, ["x", "3", "/o:c", "/verbose"]),
            bind(self.action, ["x", "3", "/verbose", "/o:c"]),
        )

    def testOffsetSkipsSelector(self):
        self.assertEqual(bind(self.action, ["run", "x", "3"], offset=1)[:2], ["x", 3])

    def testNegationSetsFalse(self):
        self.assertEqual(bind(_run(Flags), ["/-e"]), [False, 0])

    def testSwitchOnNonBooleanFailsConversion(self):
        with self.assertRaises(UnconvertibleValueError) as context:
            bind(_run(Flags), ["/level"])
        self.assertEqual(str(context.exception), 'Could not convert "true" to integer')

    def testExplicitBooleanValue(self):
        self.assertEqual(bind(_run(Flags), ["/enabled:FALSE"]), [False, 0])

    def testDefaultsAreFreshCopies(self):
        first = bind(self.action, ["x", "3"])
        first[4].append("mutated")
        self.assertEqual(bind(self.action, ["x", "3"])[4], [])


class TestBindFaults(TestCase):
    """Input faults raised by bind()."""

    def setUp(self):
        self.action = _run(Program)

    def testMissingRequired(self):
        with self.assertRaises(MissingRequiredError) as context:
            bind(self.action, ["x"])
        self.assertEqual(str(context.exception), "Not all required parameters are set")
        self.assertIs(context.exception.options["action"], self.action)

    def testExtraPositional(self):
        with self.assertRaises(MalformedTokenError) as context:
            bind(self.action, ["x", "3", "extra"])
        self.assertEqual(str(context.exception), "Unknown parameter extra")

    def testDuplicatedFlag(self):
        with self.assertRaises(DuplicatedFlagError) as context:
            bind(self.action, ["x", "3", "/v", "/v"])
        self.assertEqual(str(context.exception), "Parameter with name v passed two times")

    def testDuplicatedThroughAlias(self):
        with self.assertRaises(DuplicatedFlagError) as context:
            bind(self.action, ["x", "3", "/o:a", "/out:b"])
        self.assertEqual(str(context.exception), "Parameter with name out passed two times")

    def testUnknownFlag(self):
        with self.assertRaises(UnknownFlagError) as context:
            bind(self.action, ["x", "3", "/outpt:a"])
        self.assertEqual(str(context.exception), "Unknown parameter name /outpt:a")
        self.assertIn("output", context.exception.options["suggestions"])

    def testFlagNamesAreCaseSensitive(self):
        with self.assertRaises(UnknownFlagError):
            bind(self.action, ["x", "3", "/V"])

    def testRequiredCannotBePassedAsFlag(self):
        with self.assertRaises(UnknownFlagError):
            bind(self.action, ["x", "3", "/name:y"])

    def testStructuralChecksRunBeforeConversion(self):
        # "abc" is not an integer, but the stray token is reported first.
        with self.assertRaises(MalformedTokenError):
            bind(self.action, ["x", "abc", "stray"])

    def testUnknownFlagReportedBeforeBadValue(self):
        with self.assertRaises(UnknownFlagError):
            bind(self.action, ["x", "3", "/since:bad", "/nope"])

    def testBadRequiredValue(self):
        with self.assertRaises(UnconvertibleValueError) as context:
            bind(self.action, ["x", "abc"])
        self.assertEqual(str(context.exception), 'Could not convert "abc" to integer')


if __name__ == "__main__":
    unittest.main()
