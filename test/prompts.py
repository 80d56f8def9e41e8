"""
Prompts module behavioral tests (answer loop, defaults, booleans).

Conventions
- Test method names follow CamelCase per project convention.
- Input comes from an in-memory stream; output goes to an uncolored console.
"""

from __future__ import annotations

import io
import unittest
import unittest.mock
from unittest import TestCase, IsolatedAsyncioTestCase

from rich.console import Console

from acclimate import PositionalArg, Option
from acclimate.prompts import request_terminal_input, ask


def terminal():
    output = io.StringIO()
    return output, Console(file=output, width=200, color_system=None)


class TestRequestTerminalInput(TestCase):
    """Behavioral tests for the terminal prompt loop."""

    def testAnswerIsReturnedVerbatim(self):
        output, console = terminal()
        answer = request_terminal_input("Name", required=True, console=console, stream=io.StringIO(" bob \n"))
        self.assertEqual(answer, " bob ")
        self.assertIn("Name", output.getvalue())

    def testRequiredReprompts(self):
        output, console = terminal()
        answer = request_terminal_input("Name", required=True, console=console, stream=io.StringIO("\n  \nbob\n"))
        self.assertEqual(answer, "bob")
        self.assertEqual(output.getvalue().count("This value is required. Please enter a value."), 2)

    def testOptionalEmptyAnswerIsNone(self):
        output, console = terminal()
        answer = request_terminal_input("Name", required=False, console=console, stream=io.StringIO("\n"))
        self.assertIsNone(answer)
        self.assertIn("(press Enter to leave empty)", output.getvalue())

    def testDefaultOnEmptyAnswer(self):
        output, console = terminal()
        answer = request_terminal_input(
            "Count", required=False, type="number", default=3, console=console, stream=io.StringIO("\n")
        )
        self.assertEqual(answer, "3")
        self.assertIn("[default: 3]", output.getvalue())
        self.assertIn("(press Enter to use default)", output.getvalue())

    def testBooleanDefaultIsStringified(self):
        _, console = terminal()
        answer = request_terminal_input(
            "Confirm", required=False, type="boolean", default=False, console=console, stream=io.StringIO("\n")
        )
        self.assertEqual(answer, "false")

    def testBooleanAnswers(self):
        for raw, expected in (("y", "true"), ("YES", "true"), ("n", "false"), ("No", "false")):
            _, console = terminal()
            answer = request_terminal_input(
                "Confirm", required=True, type="boolean", console=console, stream=io.StringIO(raw + "\n")
            )
            self.assertEqual(answer, expected)

    def testBooleanRepromptsOnInvalidAnswer(self):
        output, console = terminal()
        answer = request_terminal_input(
            "Confirm", required=True, type="boolean", console=console, stream=io.StringIO("maybe\ny\n")
        )
        self.assertEqual(answer, "true")
        self.assertIn("(y/n)", output.getvalue())
        self.assertIn("That was not a valid response. Please enter y or n.", output.getvalue())

    def testParamsAreInterpolated(self):
        output, console = terminal()
        request_terminal_input(
            "Deploy $service$?", required=True, params={"service": "api"}, console=console, stream=io.StringIO("x\n")
        )
        self.assertIn("Deploy api?", output.getvalue())

    def testEndOfInputRaises(self):
        _, console = terminal()
        with self.assertRaises(EOFError):
            request_terminal_input("Name", required=True, console=console, stream=io.StringIO(""))


class TestAsk(IsolatedAsyncioTestCase):
    """Behavioral tests for the asynchronous prompter adapter."""

    async def testAskForwardsDeclaration(self):
        param = Option("--mode", default="standard", description="Execution mode", ask_if_empty=True)
        with unittest.mock.patch("acclimate.prompts.request_terminal_input", return_value="fast") as prompt:
            self.assertEqual(await ask(param), "fast")
        prompt.assert_called_once_with(
            "Please enter a value for --mode (Execution mode)",
            required=False,
            type="string",
            default="standard",
            console=None,
            suffix=": ",
        )

    async def testAskOmitsDefaultOfRequiredParam(self):
        param = PositionalArg("target", ask_if_empty="What target should I run?")
        with unittest.mock.patch("acclimate.prompts.request_terminal_input", return_value="api") as prompt:
            await ask(param)
        _, options = prompt.call_args
        self.assertTrue(options["required"])
        self.assertEqual(options["suffix"], " ")
        self.assertEqual(prompt.call_args.args, ("What target should I run?",))

    async def testAskReadsFromStream(self):
        output, console = terminal()
        param = PositionalArg("target", ask_if_empty=True)
        with unittest.mock.patch("sys.stdin", io.StringIO("api\n")):
            answer = await ask(param, console=console)
        self.assertEqual(answer, "api")


if __name__ == '__main__':
    unittest.main()
