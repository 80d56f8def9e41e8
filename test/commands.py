"""
Commands module behavioral tests (builder, immutability, lookups).

Scope
- Validate that every builder call returns a new node and leaves the receiver intact.
- Validate positional ordering rules, alias tables and sub-command lookups.
- Validate read-only views and copy.replace support.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (create_cli, CLI, PositionalArg, Option).
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from acclimate import create_cli, CLI, PositionalArg, Option
from acclimate.faults import InvalidPositionalArgConfigError, UnknownCommandError


class TestBuilder(TestCase):
    """Behavioral tests for the persistent builder operations."""

    def testCreateCliIsEmpty(self):
        cli = create_cli("tool")
        self.assertEqual(cli.name, "tool")
        self.assertIsNone(cli.description)
        self.assertEqual(cli.positional_args, ())
        self.assertEqual(dict(cli.options), {})
        self.assertEqual(dict(cli.commands), {})
        self.assertIsNone(cli.action)

    def testEmptyNameRejected(self):
        with self.assertRaises(ValueError):
            create_cli("  ")

    def testBuilderLeavesReceiverIntact(self):
        base = create_cli("tool")
        described = base.with_description("Tooling")
        extended = described.add_positional_arg("service")
        self.assertIsNone(base.description)
        self.assertEqual(described.description, "Tooling")
        self.assertEqual(described.positional_args, ())
        self.assertEqual([arg.name for arg in extended.positional_args], ["service"])

    def testAcceptsReadyMadeDeclarations(self):
        port = Option("--port", aliases=("-p",), type="number")
        cli = create_cli("tool").add_option(port)
        self.assertIs(cli.options["--port"], port)

    def testMixingDeclarationAndArgumentsRejected(self):
        with self.assertRaises(TypeError):
            create_cli("tool").add_positional_arg(PositionalArg("service"), "number")

    def testRequiredAfterOptionalRejected(self):
        cli = create_cli("tool").add_positional_arg("region", required=False)
        with self.assertRaises(InvalidPositionalArgConfigError) as context:
            cli.add_positional_arg("service")
        self.assertEqual(context.exception.options["param"], "service")
        self.assertEqual(context.exception.cli, "tool")

    def testDuplicatePositionalRejected(self):
        cli = create_cli("tool").add_positional_arg("service")
        with self.assertRaises(ValueError):
            cli.add_positional_arg("service")

    def testAliasesJoinTheTable(self):
        cli = (
            create_cli("tool")
            .add_option("--port", aliases=("-p",))
            .add_global_option("--env", aliases=("-e",))
        )
        self.assertEqual(dict(cli.aliases), {"-p": "--port", "-e": "--env"})
        self.assertIn("--env", cli.global_options)
        self.assertNotIn("--env", cli.options)

    def testLaterAliasDeclarationWins(self):
        cli = (
            create_cli("tool")
            .add_option("--port", aliases=("-p",))
            .add_global_option("--profile", aliases=("-p",))
        )
        self.assertEqual(cli.aliases["-p"], "--profile")

    def testActionMustBeCallable(self):
        with self.assertRaises(TypeError):
            create_cli("tool").with_action("run")

    def testCommandNameValidated(self):
        with self.assertRaises(ValueError):
            create_cli("tool").add_command("--deploy", create_cli("deploy"))
        with self.assertRaises(TypeError):
            create_cli("tool").add_command("deploy", object())


class TestImmutability(TestCase):
    """Behavioral tests for the read-only surface of command nodes."""

    def testAssignmentRejected(self):
        cli = create_cli("tool")
        with self.assertRaises(AttributeError):
            cli.name = "other"
        with self.assertRaises(AttributeError):
            del cli.name

    def testViewsAreReadOnly(self):
        cli = create_cli("tool").add_option("--port")
        with self.assertRaises(TypeError):
            cli.options["--other"] = Option("--other")

    def testCopyReplace(self):
        cli = create_cli("tool").add_positional_arg("service")
        renamed = copy.replace(cli, name="other")
        self.assertIsInstance(renamed, CLI)
        self.assertEqual(renamed.name, "other")
        self.assertEqual(renamed.positional_args, cli.positional_args)
        self.assertEqual(cli.name, "tool")


class TestCommandLookup(TestCase):
    """Behavioral tests for get_command_cli."""

    def setUp(self):
        self.deploy = create_cli("deploy")
        self.tool = create_cli("tool").add_command("deploy", self.deploy)

    def testDirectLookup(self):
        self.assertIs(self.tool.get_command_cli("deploy"), self.deploy)

    def testUnknownCommandSuggestsCloseName(self):
        with self.assertRaises(UnknownCommandError) as context:
            self.tool.get_command_cli("deplyo")
        fault = context.exception
        self.assertEqual(fault.options["command"], "deplyo")
        self.assertIn("deploy", fault.options["suggestions"])
        self.assertEqual(fault.options["hint"], "did you mean 'deploy'?")
        self.assertEqual(str(fault), "error running tool: command 'deplyo' not found")

    def testUnknownCommandWithoutSuggestion(self):
        with self.assertRaises(UnknownCommandError) as context:
            self.tool.get_command_cli("zzz")
        self.assertEqual(context.exception.options["hint"], "available commands: deploy")


if __name__ == '__main__':
    unittest.main()
