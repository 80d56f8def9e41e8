"""
Acclimate help text.

generate_help_text(cli) renders a command node as a rich Text:

    tool
      Deployment tooling

    Positional Arguments
      service (string) required - Service to deploy

    Options
      --region, -r (string) optional - No description [default: "eu-west-1"]

    Global Options
      None

    Commands
      deploy - Deploy a service

        deploy
          Deploy a service
        ...
        Commands
          Available Commands: None

Sub-commands are rendered one level deep, indented, with their own commands
collapsed into a single line.
"""
import json

from rich.text import Text

from .utils import Unset

SECTIONS = (
    "Positional Arguments",
    "Options",
    "Global Options",
    "Commands",
)

INDENT = "    "


def _title(title):
    return Text(title, "bright_yellow")


def _none():
    return Text.assemble("  ", ("None", "bright_black"))


def _param_line(param):
    name = ", ".join((param.name, *getattr(param, "aliases", ())))
    line = Text.assemble(
        "  ",
        (name, "bright_white"),
        " ",
        "(%s)" % param.type,
        " ",
        ("required", "red") if param.required else ("optional", "bright_black"),
        " - ",
        (param.description or "No description", "bright_black"),
    )
    if param.choices:
        line.append(" ")
        line.append("[choices: %s]" % ", ".join(map(str, param.choices)), "bright_black")
    if param.default is not Unset:
        line.append(" ")
        line.append("[default: %s]" % json.dumps(param.default, ensure_ascii=False), "bright_black")
    return line


def _section(title, params):
    if not params:
        return [_title(title), _none()]
    return [_title(title), *map(_param_line, params)]


def _lines(cli, level):
    commands = sorted(cli.commands.items())

    lines = [Text(cli.name, "bright_cyan")]
    if cli.description is not None:
        lines.append(Text.assemble("  ", (cli.description, "bright_black")))
    lines.append(Text())

    if level > 1:
        commands_section = [
            _title("Commands"),
            Text.assemble(
                "  ",
                ("Available Commands:", "bright_yellow"),
                " ",
                (", ".join(name for name, _ in commands) or "None", "bright_black"),
            ),
        ]
    elif not commands:
        commands_section = [_title("Commands"), _none()]
    else:
        commands_section = [_title("Commands")]
        for name, command in commands:
            commands_section.append(Text.assemble(
                "  ",
                (name, "bright_white"),
                " - ",
                (command.description or "No description", "bright_black"),
            ))

    sections = [
        _section("Positional Arguments", cli.positional_args),
        _section("Options", tuple(cli.options.values())),
        _section("Global Options", tuple(cli.global_options.values())),
        commands_section,
    ]
    for index, section in enumerate(sections):
        if index:
            lines.append(Text())
        lines.extend(section)

    if level == 1:
        for _, command in commands:
            lines.append(Text())
            lines.extend(_lines(command, level + 1))

    indent = INDENT * (level - 1)
    return [Text.assemble(indent, line) if line.plain and indent else line for line in lines]


def generate_help_text(cli, /):
    """
    Render the help of `cli` (and one level of its sub-commands) as a rich Text.
    """
    return Text("\n").join(_lines(cli, 1))


__all__ = (
    "generate_help_text",
)
