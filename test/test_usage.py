# python
"""
Usage module behavioral tests.

Scope
- Validate usage-line tokens for Required and Optional parameters.
- Validate the per-parameter entries: padding, descriptions, default values.
- Validate the sub-command overview of multi-command targets.

Conventions
- Test method names follow CamelCase per project convention.
- Expected lines are spelled out verbatim, including indentation.
"""

import datetime
import unittest
from unittest import TestCase

from slashargs import Optional, Registry, Required, action, discover
from slashargs.usage import describe, display, overview


class ManyParametersProgram:
    @action
    def run(
            self,
            rs: str,
            ri: int,
            os: str = Optional("0"),
            oi: int = Optional(0),
            ob: bool = Optional(False),
    ):
        pass


class DescribedProgram:
    @action
    def run(
            self,
            parameter1: str = Optional("", descr="param1 desc"),
            parameter2: int = Optional(0, "param2", descr="desc2"),
    ):
        pass


class RequiredDescriptionProgram:
    @action
    def run(self, path: str = Required(descr="project path"), jobs: list[int] = Optional([1, 2], "j")):
        pass


class DateProgram:
    @action
    def run(self, since: datetime.date = Optional(datetime.date(2021, 4, 3))):
        pass


class TwoActions:
    @action
    def Test1(self, parameter):
        pass

    @action
    def Test2(self, parameter):
        pass


class LongRequiredProgram:
    @action
    def run(self, verylongrequired, a: str = Optional("", descr="x")):
        pass


class Maintenance:
    @action(descr="remove build outputs")
    def clean(self):
        pass

    @action(name="Rebuild", descr="clean, then build")
    def rebuild(self, path):
        pass

    @action
    def status(self):
        pass


class TestDisplay(TestCase):
    """Usage-line tokens."""

    def testTokens(self):
        rs, ri, os, oi, ob = discover(ManyParametersProgram)[0].parameters
        self.assertEqual(display(rs), "rs")
        self.assertEqual(display(ri), "ri")
        self.assertEqual(display(os), "[/os:value]")
        self.assertEqual(display(oi), "[/oi:number]")
        self.assertEqual(display(ob), "[/ob]")

    def testFirstAlternateNameIsPreferred(self):
        _, parameter2 = discover(DescribedProgram)[0].parameters
        self.assertEqual(display(parameter2), "[/param2:number]")


class TestDescribe(TestCase):
    """Usage of one action."""

    def testOptionalEntriesWithDefaults(self):
        self.assertEqual(describe(discover(ManyParametersProgram)[0], "manyparametersprogram"), [
            "usage: manyparametersprogram rs ri [/os:value] [/oi:number] [/ob]",
            "    [/os:value]",
            "        default value: '0'",
            "    [/oi:number]",
            "        default value: 0",
            "    [/ob]",
            "        default value: False",
        ])

    def testDescriptionsArePadded(self):
        lines = describe(discover(DescribedProgram)[0], "describedprogram")
        self.assertEqual(lines[0], "usage: describedprogram [/parameter1:value] [/param2:number]")
        self.assertEqual(lines[1], "    [/parameter1:value]  param1 desc")
        self.assertEqual(lines[2], "        default value: ''")
        self.assertEqual(lines[3], "    [/param2:number]     desc2")
        self.assertEqual(lines[4], "        default value: 0")

    def testDescribedRequiredIsListed(self):
        self.assertEqual(describe(discover(RequiredDescriptionProgram)[0], "tool"), [
            "usage: tool path [/j:number[+number]]",
            "    path" + " " * 18 + "project path",
            "    [/j:number[+number]]",
            "        default value: 1+2",
        ])

    def testDateDefault(self):
        self.assertEqual(describe(discover(DateProgram)[0], "tool")[1:], [
            "    [/since:dd-mm-yyyy]",
            "        default value: 03-04-2021",
        ])

    def testPaddingCountsUndescribedRequireds(self):
        self.assertEqual(describe(discover(LongRequiredProgram)[0], "tool"), [
            "usage: tool verylongrequired [/a:value]",
            "    [/a:value]" + " " * 8 + "x",
            "        default value: ''",
        ])

    def testParameterlessActionInMultiMode(self):
        self.assertEqual(describe(discover(Maintenance)[0], "tool", multi=True), ["usage: tool clean"])

    def testMultiModeNamesTheAction(self):
        self.assertEqual(
            describe(discover(TwoActions)[1], "twoactionsprogram", multi=True),
            ["usage: twoactionsprogram test2 parameter"],
        )


class TestOverview(TestCase):
    """Usage of a multi-command target."""

    def testOverview(self):
        self.assertEqual(overview(Registry(TwoActions), "twoactionsprogram"), [
            "usage: twoactionsprogram <subcommand> [args]",
            "Type 'twoactionsprogram help <subcommand>' for help on a specific subcommand.",
            "",
            "Available subcommands:",
            "test1",
            "test2",
        ])

    def testDescriptionsArePaddedToTheLongestName(self):
        self.assertEqual(overview(Registry(Maintenance), "tool")[4:], [
            "clean    remove build outputs",
            "rebuild  clean, then build",
            "status",
        ])


if __name__ == "__main__":
    unittest.main()
