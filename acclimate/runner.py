"""
Acclimate runner: resolve, bind and invoke.

Pipeline (one dispatch)
    tokens ─► tokenize ─► descend ─► bind ─► action(record)
                            │          │
                            │          └─ awaits the prompter for ask_if_empty values
                            └─ consumes leading positionals naming sub-commands,
                               inheriting global options one level at a time

- dispatch(cli, tokens): the engine, a coroutine. Failures propagate as
  CLIError subclasses; nothing is printed on error. A target without an action
  prints its help text instead.
- run(cli, prompt): process entry point. Reads sys.argv by default, runs the
  dispatch on a fresh event loop and, in shell mode, renders faults on
  standard error and exits with status 1.

The declared tree is never modified: inheriting global options derives new
nodes for the duration of one dispatch only.
"""
import asyncio
import difflib
import functools
import inspect
import shlex
import sys
import weakref
from collections.abc import Iterable
from typing import NamedTuple

from .faults import (
    AlreadyRunError,
    CLIError,
    MissingRequiredOptionError,
    MissingRequiredPositionalArgError,
    TooManyPositionalArgsError,
    trigger,
)
from .helptext import generate_help_text
from .prompts import ask
from .terminal import console as stdout
from .tokens import tokenize, resolve_aliases
from .utils import *

# Command nodes already handed to run(), by identity.
_ran = weakref.WeakSet()


class Descent(NamedTuple):
    cli: object
    positionals: tuple
    options: dict
    global_options: dict


def inherit(child, parent, /):
    """
    Return `child` extended with every global option of `parent`.

    Inherited declarations are added after the child's own, so an inherited
    alias overrides a clashing alias of the child.
    """
    return functools.reduce(
        lambda command, option: command.add_global_option(option),
        parent.global_options.values(),
        child,
    )


def _partition(cli, aliased):
    resolved = resolve_aliases(cli.aliases, aliased)
    global_options = {name: value for name, value in resolved.items() if name in cli.global_options}
    options = {name: value for name, value in resolved.items() if name not in global_options}
    return options, global_options


def descend(cli, positionals, aliased, /):
    """
    Walk the tree along the leading positionals that name sub-commands.

    Returns the Descent of the target node: the node itself, the positionals
    left for it, and the raw option / global option values resolved against
    its alias table. A leading token that names no sub-command stops the walk
    and is left as a positional value.
    """
    positionals = tuple(positionals)
    while positionals and positionals[0] in cli.commands:
        cli = inherit(cli.get_command_cli(positionals[0]), cli)
        positionals = positionals[1:]
    return Descent(cli, positionals, *_partition(cli, aliased))


async def _bind_one(cli, param, raw, missing, prompter, hint):
    if raw is None and param.ask_if_empty:
        raw = await prompter(param)
    if raw is None:
        if param.required:
            raise missing(cli=cli.name, param=param.name, hint=hint)
        if param.default is Unset:
            return None
        return param.validate(param.default, cli=cli.name)
    return param.evaluate(raw, cli=cli.name)


async def bind(cli, positionals, options, global_options, /, *, prompter=ask):
    """
    Build the argument record of `cli` from raw values.

    Order is fixed: positionals, then options, then global options, each in
    declaration order; a prompt for one value completes before the next value
    is looked at. The first failure aborts binding.

    Raises
    - TooManyPositionalArgsError: more positionals than declared (checked first).
    - MissingRequiredPositionalArgError / MissingRequiredOptionError.
    - InvalidParamValueError: a parser or validator rejected a value.
    """
    declared = cli.positional_args
    if len(positionals) > len(declared):
        extra = positionals[len(declared)]
        suggestions = difflib.get_close_matches(extra, cli.commands.keys(), 1)
        if suggestions:
            hint = "%r is not a command of %s; did you mean %r?" % (extra, cli.name, suggestions[0])
        elif declared:
            hint = "%s takes %s positional argument%s: %s" % (
                cli.name,
                len(declared),
                "" if len(declared) == 1 else "s",
                ", ".join(param.name for param in declared),
            )
        else:
            hint = "%s takes no positional arguments" % cli.name
        raise TooManyPositionalArgsError(
            cli=cli.name,
            count=len(positionals),
            expected=len(declared),
            value=extra,
            hint=hint,
        )

    record = {}
    for index, param in enumerate(declared, 1):
        raw = positionals[index - 1] if index <= len(positionals) else None
        hint = "%s expects %s as its %s positional argument" % (cli.name, param.name, ordinal(index))
        record[param.key] = await _bind_one(cli, param, raw, MissingRequiredPositionalArgError, prompter, hint)
    for params, group in ((cli.options, options), (cli.global_options, global_options)):
        for param in params.values():
            hint = "pass %s followed by a %s value" % (" or ".join((param.name, *param.aliases)), param.type)
            record[param.key] = await _bind_one(
                cli, param, group.get(param.name), MissingRequiredOptionError, prompter, hint
            )
    return record


async def dispatch(cli, tokens, /, *, prompter=Unset, console=Unset):
    """
    Dispatch raw tokens against the command tree rooted at `cli`.

    Parameters
    - tokens: list of raw strings (e.g. sys.argv[1:]).
    - prompter: coroutine function (param) -> str | None used for ask_if_empty
      values; defaults to the terminal prompter.
    - console: rich console receiving the help text of an action-less target
      (and the default prompter's output).

    Returns the action's result (awaited when it is awaitable), or None when
    the help text was printed instead.
    """
    console = coalesce(console, stdout)
    prompter = coalesce(prompter, functools.partial(ask, console=console))

    positionals, aliased = tokenize(tokens)
    target, positionals, options, global_options = descend(cli, positionals, aliased)
    record = await bind(target, positionals, options, global_options, prompter=prompter)

    if target.action is None:
        console.print(generate_help_text(target))
        return None
    result = target.action(record)
    if inspect.isawaitable(result):
        return await result
    return result


def _tokens(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = []
        for item in prompt:
            if not isinstance(item, str):
                raise TypeError("run() prompt must be a string or an iterable of strings")
            if item := item.strip():
                tokens.append(item)
        return tokens
    raise TypeError("run() prompt must be a string or an iterable of strings")


def run(cli, prompt=Unset, /, *, shell=False, colorful=True, fancy=False):
    """
    Run `cli` once as the program entry point.

    Parameters
    - prompt:
      • Unset: read tokens from sys.argv[1:].
      • str: shell-like string, split with shlex.split.
      • Iterable[str]: pre-tokenized input; items are trimmed, blanks dropped.
    - shell: render faults on standard error and exit with status 1 instead of
      raising them.
    - colorful / fancy: fault rendering options (see CLIError.__rich__).

    Raises
    - AlreadyRunError: this cli has been run before.
    - CLIError: any dispatch failure, outside shell mode.
    """
    tokens = _tokens(prompt)
    try:
        if cli in _ran:
            raise AlreadyRunError(cli=cli.name)
        _ran.add(cli)
        return asyncio.run(dispatch(cli, tokens))
    except CLIError as fault:
        trigger(fault, shell=shell, colorful=colorful, fancy=fancy)


__all__ = (
    "Descent",
    "inherit",
    "descend",
    "bind",
    "dispatch",
    "run",
)
