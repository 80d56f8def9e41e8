"""
Acclimate command layer: declare immutable command trees.

What this module provides
- CLI: one node of a command tree. A node holds its own positional arguments,
  options, global options (inherited by every descendant at dispatch time), an
  alias table, named sub-commands and an optional action.
- create_cli(name): the empty node every tree starts from.

Core ideas
- Persistent values: every builder call returns a new node built from the
  previous one (copy.replace); nothing is ever modified in place, so a declared
  tree can be shared by any number of dispatches.
- Read-only surface: collections are exposed as tuples / mapping proxies and
  attribute assignment is rejected once a node is built.

Quick start
    from acclimate import create_cli, run

    deploy = (
        create_cli("deploy")
        .with_description("Deploy a service")
        .add_positional_arg("service")
        .add_positional_arg("region", required=False, default="us-east-1")
        .with_action(lambda args: print(args))
    )
    tool = create_cli("tool").add_command("deploy", deploy)

    if __name__ == "__main__":
        run(tool)

See also
- acclimate.params for parameter semantics.
- acclimate.runner for dispatch.
"""
import copy
import difflib
import functools
import operator
import re

from .faults import InvalidPositionalArgConfigError, UnknownCommandError
from .params import PositionalArg, Option
from .utils import *


class CommandType(type):
    """
    Metaclass of command nodes.

    Same contract as the parameter metaclass (read-only mirrors, __typename__,
    __repr__ / __rich_repr__), with __displayable__ narrowing what the
    representations show.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _resolve_param(cls, kind, source, args, kwargs):
    """
    Accept either a ready-made declaration or the arguments to build one.
    """
    if isinstance(source, kind):
        if args or kwargs:
            raise TypeError(f"{cls.__typename__} cannot combine a {kind.__typename__} with extra arguments")
        return source
    return kind(source, *args, **kwargs)


def _alias_table(option):
    return dict.fromkeys(option.aliases, option.name)


class CLI(metaclass=CommandType):
    """
    Immutable command node.

    Responsibilities
    - Holds the declarations of one level of the command tree.
    - Builder methods (with_*, add_*) return a new node; the receiver is left
      untouched.
    - get_command_cli(name) looks a direct sub-command up by name.

    Invariants
    - A required positional argument never follows an optional one.
    - Parameter names are unique per kind; aliases map to the canonical name of
      an option or global option of this node.
    """

    __introspectable__ = (
        "name",
        "description",
        "positional_args",
        "options",
        "global_options",
        "aliases",
        "commands",
        "action",
    )

    __displayable__ = (
        "name",
        "description",
        "positional_args",
        "options",
        "global_options",
        "commands",
    )

    def __new__(
            cls,
            name,
            /,
            description=Unset,
            positional_args=(),
            options=None,
            global_options=None,
            aliases=None,
            commands=None,
            action=Unset
    ):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")

        if not isinstance(description := coalesce(description), str | None):
            raise TypeError(f"{cls.__typename__} 'description' must be a string")
        elif isinstance(description, str) and not (description := description.strip()):
            raise ValueError(f"{cls.__typename__} 'description' cannot be empty")

        if (action := coalesce(action)) is not None and not callable(action):
            raise TypeError(f"{cls.__typename__} 'action' must be callable")

        self = super().__new__(cls)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_description", description)
        object.__setattr__(self, "_positional_args", tuple(positional_args))
        object.__setattr__(self, "_options", dict(options or {}))
        object.__setattr__(self, "_global_options", dict(global_options or {}))
        object.__setattr__(self, "_aliases", dict(aliases or {}))
        object.__setattr__(self, "_commands", dict(commands or {}))
        object.__setattr__(self, "_action", action)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is immutable; use the builder methods instead")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is immutable; use the builder methods instead")

    def __replace__(self, /, **overrides):
        """
        Return a new node with the given fields replaced (copy.replace protocol).
        """
        name = overrides.pop("name", self._name)
        fields = {
            "description": self._description,
            "positional_args": self._positional_args,
            "options": self._options,
            "global_options": self._global_options,
            "aliases": self._aliases,
            "commands": self._commands,
            "action": self._action,
        } | overrides
        return type(self)(name, **fields)

    def with_description(self, description, /):
        """
        Return a copy of this node with the given description.
        """
        return copy.replace(self, description=description)

    def with_action(self, action, /):
        """
        Return a copy of this node that runs `action` with the bound argument record.

        The action receives a single dict mapping camel-cased parameter names to
        their typed values. Coroutine functions are awaited by the dispatcher.
        """
        if not callable(action):
            raise TypeError(f"{type(self).__typename__} 'action' must be callable")
        return copy.replace(self, action=action)

    def add_positional_arg(self, source, /, *args, **kwargs):
        """
        Return a copy of this node with one more positional argument.

        Accepts a PositionalArg or the arguments to build one.

        Raises
        - InvalidPositionalArgConfigError: a required positional argument after
          an optional one.
        - ValueError: a positional argument with the same name already exists.
        """
        param = _resolve_param(type(self), PositionalArg, source, args, kwargs)
        if any(declared.name == param.name for declared in self._positional_args):
            raise ValueError(f"{type(self).__typename__} positional argument {param.name!r} is already declared")
        if param.required and any(not declared.required for declared in self._positional_args):
            raise InvalidPositionalArgConfigError(
                "required positional arguments must be before optional positional arguments",
                cli=self._name,
                param=param.name,
            )
        return copy.replace(self, positional_args=self._positional_args + (param,))

    def add_option(self, source, /, *args, **kwargs):
        """
        Return a copy of this node with one more option; its aliases join the alias table.
        """
        option = _resolve_param(type(self), Option, source, args, kwargs)
        return copy.replace(
            self,
            options=self._options | {option.name: option},
            aliases=self._aliases | _alias_table(option),
        )

    def add_global_option(self, source, /, *args, **kwargs):
        """
        Return a copy of this node with one more global option.

        Global options are inherited by every sub-command reached during
        dispatch; their aliases join the alias table (later declarations win).
        """
        option = _resolve_param(type(self), Option, source, args, kwargs)
        return copy.replace(
            self,
            global_options=self._global_options | {option.name: option},
            aliases=self._aliases | _alias_table(option),
        )

    def add_command(self, name, command, /):
        """
        Return a copy of this node with `command` mounted as sub-command `name`.
        """
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} command name must be a string")
        elif not name or name.startswith("-") or name != name.strip():
            raise ValueError(f"{type(self).__typename__} command name {name!r} is not a valid command name")
        if not isinstance(command, CLI):
            raise TypeError(f"{type(self).__typename__} command must be a cli")
        return copy.replace(self, commands=self._commands | {name: command})

    def get_command_cli(self, name, /):
        """
        Return the direct sub-command registered as `name`.

        Raises
        - UnknownCommandError: no such sub-command; the hint suggests the closest
          declared name when there is one.
        """
        try:
            return self._commands[name]
        except KeyError:
            pass
        suggestions = difflib.get_close_matches(str(name), self._commands.keys(), 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "available commands: %s" % (", ".join(sorted(self._commands)) or "none")
        raise UnknownCommandError(
            cli=self._name,
            command=name,
            suggestions=suggestions,
            hint=hint,
        ) from None


def create_cli(name, /):
    """
    Create a new, empty command node called `name`.
    """
    return CLI(name)


__all__ = (
    "CLI",
    "create_cli",
)

# Keep the metaclass out of star-imports.
del CommandType
