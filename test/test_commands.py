# python
"""
Commands module behavioral tests (construction, binding, faults, help).

Scope
- Validate callback introspection rules and derived metadata.
- Validate binding of cardinals, options, and flags, including "--" and greedy input.
- Validate friendly faults: unknown, malformed, duplicated, missing, uncastable.
- Validate help, synopsis, and the two failure renderings.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (command, Command, Cardinal, Option, Flag).
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from parsables import (
    Command,
    Invocation,
    command,
    Cardinal,
    Option,
    Flag,
    FaultCode,
    BindingError,
    HelpRequest,
    MalformedTokenError,
    UnknownSwitchError,
    FlagAssignmentError,
    DuplicatedSwitchError,
    OptionValueRequiredError,
    InlineExtraValuesError,
    UnexpectedCardinalError,
    NotEnoughValuesError,
    InvalidChoiceError,
    MissingCardinalsError,
    UncastableValueError,
)


@command
def tool(
        context,
        path=Cardinal(descr="the file to work on"),
        rest=Cardinal(nargs="*"),
        /,
        count=Option("-c", "--count", type=int, default=1, descr="how many times"),
        mode=Option("--mode", choices=("fast", "slow"), default="fast"),
        tags=Option("--tags", nargs="+"),
        pair=Option("--pair", nargs=2),
        *,
        verbose=Flag("-v", "--verbose", descr="talk more"),
):
    """
    Work on a file.

    Longer explanation of the work.
    """
    return context, path, rest, count, mode, tags, pair, verbose


@command
def greet(
        context,
        who=Cardinal(descr="who to greet"),
        /,
        times=Option("-t", "--times", type=int, default=1, descr="how many times"),
        *,
        loud=Flag("-l", "--loud", descr="shout"),
):
    """Say hello."""
    return who, times, loud


@command
def run(context, program=Cardinal(), args=Cardinal(nargs="..."), /, *, verbose=Flag("-v")):
    """Run a program."""
    return program, args, verbose


class TestConstruction(TestCase):
    """Callback introspection."""

    def testNameAndAbstractFromCallback(self):
        @command
        def list_all(context, /):
            """List everything.

            With details.
            """

        self.assertEqual(list_all.name, "list-all")
        self.assertEqual(list_all.abstract, "List everything.")

    def testExplicitMetadata(self):
        @command(name="ls", descr="Show files.", epilog="See also: tree.")
        def listing(context, /):
            pass

        self.assertEqual(listing.name, "ls")
        self.assertEqual(listing.abstract, "Show files.")
        self.assertEqual(listing.epilog, "See also: tree.")

    def testMissingDescriptionHasEmptyAbstract(self):
        self.assertEqual(Command(lambda context, /: None, name="quiet").abstract, "")

    def testContextSlotRequired(self):
        with self.assertRaises(TypeError):
            Command(lambda: None, name="x")
        with self.assertRaises(TypeError):
            Command(lambda context: None, name="x")
        with self.assertRaises(TypeError):
            Command(lambda context=None, /: None, name="x")

    def testParameterKindsEnforced(self):
        with self.assertRaises(TypeError):
            Command(lambda context, /, x=Cardinal(): None, name="x")
        with self.assertRaises(TypeError):
            Command(lambda context, /, *, x=Option("-x"): None, name="x")
        with self.assertRaises(TypeError):
            Command(lambda context, /, x=Flag("-x"): None, name="x")

    def testDefaultsMustBeSpecs(self):
        with self.assertRaises(TypeError):
            Command(lambda context, x, /: None, name="x")
        with self.assertRaises(TypeError):
            Command(lambda context, /, x=3: None, name="x")
        with self.assertRaises(TypeError):
            Command(lambda context, /, *args: None, name="x")

    def testGreedyMustBeLast(self):
        with self.assertRaises(TypeError):
            Command(lambda context, a=Cardinal(nargs="..."), b=Cardinal(), /: None, name="x")

    def testSwitchNamesMustBeUnique(self):
        with self.assertRaises(TypeError):
            Command(lambda context, /, a=Option("-x"), *, b=Flag("-x"): None, name="x")

    def testSharedSpecRejected(self):
        shared = Cardinal()
        with self.assertRaises(TypeError):
            Command(lambda context, a=shared, b=shared, /: None, name="x")

    def testNameValidation(self):
        with self.assertRaises(ValueError):
            Command(lambda context, /: None, name="two words")
        with self.assertRaises(ValueError):
            Command(lambda context, /: None, name="  ")
        with self.assertRaises(TypeError):
            Command(lambda context, /: None, name=3)

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            command(42)

    def testHelpFlagIsAutomatic(self):
        self.assertIn("-h", tool.switches)
        self.assertIn("--help", tool.switches)

    def testOwnHelpFlagWins(self):
        @command
        def custom(context, /, *, human=Flag("-h", "--human")):
            return human

        self.assertNotIn("--help", custom.switches)
        self.assertTrue(custom.bind(["-h"]).run(None))

    def testRepr(self):
        self.assertEqual(repr(greet), "command(name='greet', descr='Say hello.')")

    def testDirectCallForwardsToCallback(self):
        self.assertEqual(greet("ctx", "you", 2, loud=True), ("you", 2, True))


class TestBinding(TestCase):
    """Successful binds."""

    def testDefaults(self):
        invocation = tool.bind(["a.txt"])
        self.assertIsInstance(invocation, Invocation)
        self.assertIs(invocation.command, tool)
        self.assertEqual(dict(invocation.arguments), {
            "path": "a.txt",
            "rest": [],
            "count": 1,
            "mode": "fast",
            "tags": [],
            "pair": [],
            "verbose": False,
        })

    def testMixedInput(self):
        arguments = tool.bind(["a.txt", "b", "c", "-c", "3", "-v", "--mode", "slow"]).arguments
        self.assertEqual(arguments["path"], "a.txt")
        self.assertEqual(arguments["rest"], ["b", "c"])
        self.assertEqual(arguments["count"], 3)
        self.assertEqual(arguments["mode"], "slow")
        self.assertTrue(arguments["verbose"])

    def testInlineValues(self):
        arguments = tool.bind(["--count=4", "--tags=x,y", "--pair=p,q", "a.txt"]).arguments
        self.assertEqual(arguments["count"], 4)
        self.assertEqual(arguments["tags"], ["x", "y"])
        self.assertEqual(arguments["pair"], ["p", "q"])

    def testSpacedListValuesStopAtSwitches(self):
        arguments = tool.bind(["a.txt", "--tags", "x", "y", "-v"]).arguments
        self.assertEqual(arguments["tags"], ["x", "y"])
        self.assertTrue(arguments["verbose"])

    def testNegativeNumbersAreValues(self):
        self.assertEqual(tool.bind(["a.txt", "--count", "-5"]).arguments["count"], -5)

    def testDoubleDashEndsSwitches(self):
        arguments = tool.bind(["--", "-v", "--count"]).arguments
        self.assertEqual(arguments["path"], "-v")
        self.assertEqual(arguments["rest"], ["--count"])
        self.assertFalse(arguments["verbose"])

    def testGreedyTakesEverythingAfterItsProgram(self):
        arguments = run.bind(["-v", "ls", "-l", "--all", "--"]).arguments
        self.assertEqual(arguments["program"], "ls")
        self.assertEqual(arguments["args"], ["-l", "--all", "--"])
        self.assertTrue(arguments["verbose"])

    def testRunPassesContextFirst(self):
        result = tool.bind(["a.txt", "-v"]).run("CTX")
        self.assertEqual(result, ("CTX", "a.txt", [], 1, "fast", [], [], True))

    def testBindDoesNotRun(self):
        calls = []

        @command
        def probe(context, /):
            calls.append(context)

        invocation = probe.bind([])
        self.assertEqual(calls, [])
        invocation.run("ctx")
        self.assertEqual(calls, ["ctx"])

    def testTokensMustBeStrings(self):
        with self.assertRaises(TypeError):
            tool.bind("a.txt")
        with self.assertRaises(TypeError):
            tool.bind(["a.txt", 3])


class TestFaults(TestCase):
    """Binding failures."""

    def assertFault(self, cls, tokens, code, target=tool):
        with self.assertRaises(cls) as context:
            target.bind(tokens)
        self.assertIsInstance(context.exception, BindingError)
        self.assertIs(context.exception.options["code"], code)
        return context.exception

    def testUnknownSwitchSuggestsCloseMatch(self):
        error = self.assertFault(UnknownSwitchError, ["a.txt", "--cuont=2"], FaultCode.UNKNOWN_SWITCH)
        self.assertEqual(error.message, "unknown option or flag '--cuont' at second position")
        self.assertIn("--count", error.options["suggestions"])
        self.assertIn("did you mean", error.options["hint"])

    def testMalformedSwitch(self):
        self.assertFault(MalformedTokenError, ["---x"], FaultCode.MALFORMED_TOKEN)

    def testFlagCannotTakeValue(self):
        self.assertFault(FlagAssignmentError, ["a.txt", "--verbose=yes"], FaultCode.FLAG_ASSIGNMENT)

    def testDuplicatedSwitch(self):
        error = self.assertFault(DuplicatedSwitchError, ["-v", "a.txt", "--verbose"], FaultCode.DUPLICATED_SWITCH)
        self.assertEqual(error.message, "flag '--verbose' at third position is given more than once")

    def testOptionValueRequired(self):
        self.assertFault(OptionValueRequiredError, ["a.txt", "--count"], FaultCode.OPTION_VALUE_REQUIRED)
        self.assertFault(OptionValueRequiredError, ["a.txt", "--count", "-v"], FaultCode.OPTION_VALUE_REQUIRED)

    def testNotEnoughValues(self):
        self.assertFault(NotEnoughValuesError, ["a.txt", "--pair", "p"], FaultCode.NOT_ENOUGH_VALUES)
        self.assertFault(NotEnoughValuesError, ["a.txt", "--tags"], FaultCode.NOT_ENOUGH_VALUES)

    def testInlineExtraValues(self):
        self.assertFault(InlineExtraValuesError, ["a.txt", "--pair=a,b,c"], FaultCode.INLINE_EXTRA_VALUES)

    def testUncastableValueKeepsCause(self):
        error = self.assertFault(UncastableValueError, ["a.txt", "--count=abc"], FaultCode.UNCASTABLE_VALUE)
        self.assertIsInstance(error.__cause__, ValueError)
        self.assertEqual(error.options["token"], "abc")

    def testInvalidChoice(self):
        error = self.assertFault(InvalidChoiceError, ["a.txt", "--mode", "turbo"], FaultCode.INVALID_CHOICE)
        self.assertEqual(
            error.message,
            "option '--mode' at third position got 'turbo', expected one of 'fast', 'slow'",
        )

    def testMissingCardinals(self):
        error = self.assertFault(MissingCardinalsError, [], FaultCode.MISSING_CARDINALS)
        self.assertEqual(error.message, "missing required argument: <path>")

    def testUnexpectedCardinal(self):
        error = self.assertFault(UnexpectedCardinalError, ["you", "me"], FaultCode.UNEXPECTED_CARDINAL, greet)
        self.assertEqual(error.message, "unexpected argument 'me' at second position")

    def testFaultsCarryUsage(self):
        with self.assertRaises(UnexpectedCardinalError) as context:
            greet.bind(["you", "me"])
        self.assertEqual(
            context.exception.full_message,
            "unexpected argument 'me' at second position\n\nusage: greet [-h] [-l] [-t <times>] <who>",
        )

    def testHelpRequest(self):
        with self.assertRaises(HelpRequest) as context:
            greet.bind(["you", "--help"])
        self.assertEqual(context.exception.message, greet.help())
        self.assertEqual(greet.message(context.exception, 30), greet.help(30))
        self.assertEqual(greet.full_message(context.exception, 30), greet.help(30))


GREET_HELP = (
    "usage: greet [-h] [-l] [-t <times>] <who>\n"
    "\n"
    "Say hello.\n"
    "\n"
    "arguments:\n"
    "  <who>        who to greet\n"
    "\n"
    "options:\n"
    "  -t | --times <times>\n"
    "               how many times\n"
    "\n"
    "flags:\n"
    "  -h | --help  show this help message and exit\n"
    "  -l | --loud  shout"
)


class TestHelp(TestCase):
    """Help, synopsis, and failure renderings."""

    def testHelpLayout(self):
        self.assertEqual(greet.help(), GREET_HELP)

    def testSynopsisWrapsWithHangingIndent(self):
        self.assertEqual(
            greet.synopsis(30),
            "usage: greet [-h] [-l]\n"
            "             [-t <times>]\n"
            "             <who>",
        )

    def testArityShapes(self):
        self.assertEqual(
            tool.synopsis(),
            "usage: tool [-h] [-v] [-c <count>] [--mode {fast,slow}] [--tags <tags> [<tags> ...]]"
            " [--pair <pair> <pair>] <path> [<rest> ...]",
        )
        self.assertEqual(run.synopsis(), "usage: run [-h] [-v] <program> [<args> ...]")

    def testExplicitUsage(self):
        @command(usage="quiet [anything]")
        def quiet(context, /):
            pass

        self.assertEqual(quiet.synopsis(), "usage: quiet [anything]")

    def testHiddenArgumentsAreLeftOut(self):
        @command
        def secret(context, /, *, debug=Flag("--debug", hidden=True)):
            pass

        self.assertNotIn("--debug", secret.help())

    def testDescriptionParagraphsAndEpilog(self):
        text = tool.help()
        self.assertIn("\n\nWork on a file.\n\nLonger explanation of the work.\n\n", text)

        @command(epilog="That is all.")
        def short(context, /):
            pass

        self.assertTrue(short.help().endswith("\n\nThat is all."))

    def testMessages(self):
        error = UnknownSwitchError("unknown option or flag '-x' at first position")
        self.assertEqual(greet.message(error), "unknown option or flag '-x' at first position")
        self.assertEqual(
            greet.full_message(error),
            "unknown option or flag '-x' at first position\n\nusage: greet [-h] [-l] [-t <times>] <who>",
        )
        self.assertEqual(greet.message(ValueError("odd")), "Error: odd")
        self.assertEqual(greet.full_message(ValueError("odd")), "Error: odd")

    def testRichRendering(self):
        console = Console(file=io.StringIO(), width=80, color_system=None)
        console.print(greet)
        self.assertEqual(console.file.getvalue(), GREET_HELP + "\n")


if __name__ == "__main__":
    unittest.main()
