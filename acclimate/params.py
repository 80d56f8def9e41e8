r"""
Acclimate parameter declarations.

Overview
- Declarations
  • PositionalArg: a value identified by its position in the input (e.g., SERVICE).
  • Option: a named value introduced by a "--name" token or one of its aliases
    (e.g., -p/--port). The same shape is used for global options; whether an
    option is global is decided by the command node that registers it.

- Contract (shared by every declaration)
  • parse(raw): raw string → typed value, through the declared parser or the
    default parser of the declared type.
  • validate(value): run the declared validator on an already-typed value.
  • key: camel-cased name used in the bound argument record.
  • prompt_message: text shown when the value is asked for interactively.

- Introspection & representation
  • ParamType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields declared in __introspectable__ via read-only properties.

Metadata (sanitized on construction)
- name: positional → a Python identifier; option → "--long-name".
- type: "string" | "number" | "boolean" (default "string").
- required: positionals default to True, options to False.
- default: typed default (must match type); dropped when required.
- aliases (Option only): "-x" / "--long" forms, unique, distinct from name.
- description: non-empty string when provided.
- choices: iterable without duplicates (display only).
- validator / parser: callables when provided.
- ask_if_empty: False | True | message string | mapping with a "message" key.

Default parsers
- boolean: False only for the literal "false"; anything else (including the empty
  value of a bare flag) is True.
- number: base-10 integer from the leading signed digits ("42px" → 42).
- string: passed through unchanged.

Quick example:
    >>> from acclimate.params import PositionalArg, Option
    >>> service = PositionalArg("service", description="service to deploy")
    >>> port = Option("--port", aliases=("-p",), type="number", default=8080)
    >>> port.parse("3000")
    3000

Public API
- Classes: PositionalArg, Option
"""
import functools
import operator
import re
from collections.abc import Iterable, Mapping

from .faults import InvalidParamValueError
from .utils import *

TYPES = ("string", "number", "boolean")


def _parse_boolean(raw):
    return raw != "false"


def _parse_number(raw):
    # Mirrors the usual parseInt(raw, 10) semantics: leading whitespace, optional
    # sign, then as many digits as there are; trailing text is ignored.
    if not (match := re.match(r"\s*([+-]?\d+)", raw)):
        raise ValueError("%r is not a base-10 integer" % raw)
    return int(match[1])


def _parse_string(raw):
    return raw


_PARSERS = {
    "boolean": _parse_boolean,
    "number": _parse_number,
    "string": _parse_string,
}

_CHECKS = {
    "boolean": lambda value: isinstance(value, bool),
    "number": lambda value: isinstance(value, int | float) and not isinstance(value, bool),
    "string": lambda value: isinstance(value, str),
}


class ParamType(type):
    """
    Metaclass of parameter declarations.

    - Every name in __introspectable__ becomes a read-only property (mirror).
    - __repr__ / __rich_repr__ list the declared fields that are set.
    - __typename__ ("positional-arg", "option") prefixes builder messages.
    """
    __introspectable__ = ()

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
            for name in type(self).__introspectable__:
                if (object := getattr(self, name)) is not Unset:
                    yield name, object
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata shared by every declaration.

    Responsibilities
    - type: one of TYPES.
    - required: coerced to bool; the class decides the default.
    - default: must match the declared type; dropped when required, since a
      required value must always come from the user.
    - description: non-empty string after trimming, or Unset.
    - choices: iterable without duplicates, normalized to a tuple.
    - validator / parser: callables or Unset.
    - ask_if_empty: normalized to False, True, or a message string.

    Side effects
    - Mutates the provided metadata dict in place.
    """
    if metadata["type"] not in TYPES:
        raise ValueError(f"{cls.__typename__} 'type' must be one of {", ".join(map(repr, TYPES))}")

    metadata["required"] = bool(coalesce(metadata["required"], cls.__required__))

    if (default := metadata["default"]) is not Unset and not _CHECKS[metadata["type"]](default):
        raise TypeError(f"{cls.__typename__} 'default' must be a {metadata["type"]} value")
    if metadata["required"]:
        metadata["default"] = Unset

    if not isinstance(description := metadata["description"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")
    elif isinstance(description, str) and not (description := description.strip()):
        raise ValueError(f"{cls.__typename__} 'description' cannot be empty")
    metadata["description"] = description

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be iterable")
    sanitized = []
    for choice in choices:
        if choice in sanitized:
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    metadata["choices"] = tuple(sanitized)

    for name in ("validator", "parser"):
        if metadata[name] is not Unset and not callable(metadata[name]):
            raise TypeError(f"{cls.__typename__} {name!r} must be callable")

    match ask := metadata["ask_if_empty"]:
        case bool():
            pass
        case str() if ask.strip():
            ask = ask.strip()
        case Mapping() if isinstance(ask.get("message"), str) and ask["message"].strip():
            ask = ask["message"].strip()
        case _:
            raise TypeError(f"{cls.__typename__} 'ask_if_empty' must be a boolean, a message or a mapping with a message")
    metadata["ask_if_empty"] = ask


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate the name and aliases of an Option.

    - name: "--" followed by a shell-style identifier; matches
      r"--[^\W\d_](-?[^\W_]+)*" (unicode letters allowed).
    - aliases: each matches r"--?[^\W\d_](-?[^\W_]+)*" ("-p", "--port-number");
      duplicates and repeating the canonical name are rejected.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"--[^\W\d_](-?[^\W_]+)*", name):
        raise ValueError(f"{cls.__typename__} 'name' must start with '--' and be a valid shell-style option name")

    if isinstance(metadata["aliases"], str) or not isinstance(metadata["aliases"], Iterable):
        raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")

    aliases = []
    for alias in metadata["aliases"]:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} aliases must be strings")
        elif not re.fullmatch(r"--?[^\W\d_](-?[^\W_]+)*", alias):
            raise ValueError(f"{cls.__typename__} aliases must be valid shell-style option names")
        elif alias in aliases or alias == name:
            raise ValueError(f"{cls.__typename__} aliases cannot contain duplicates")
        aliases.append(alias)
    metadata["aliases"] = tuple(aliases)


class Param(metaclass=ParamType):
    """
    Shared parse/validate contract of positional arguments and options.

    Not meant to be instantiated directly; see PositionalArg and Option.
    """
    __required__ = False

    @property
    def key(self):
        """
        Name of this parameter in the bound argument record.
        """
        return camelize(self.name)

    @property
    def prompt_message(self):
        """
        Message presented by the interactive prompter.

        A custom ask_if_empty message wins; otherwise the message is built from
        the name and, when present, the description.
        """
        if isinstance(self.ask_if_empty, str):
            return self.ask_if_empty
        if self.description:
            return "Please enter a value for %s (%s)" % (self.name, self.description)
        return "Please enter a value for %s" % self.name

    def parse(self, raw, /, *, cli=Unset):
        """
        Convert a raw input string into the typed value of this parameter.

        Uses the declared parser when present, otherwise the default parser for
        the declared type. ValueError/TypeError raised while parsing are
        reported as InvalidParamValueError (chained).
        """
        parser = coalesce(self.parser, _PARSERS[self.type])
        try:
            return parser(raw)
        except (ValueError, TypeError) as exception:
            raise InvalidParamValueError(
                cli=coalesce(cli),
                param=self.name,
                value=raw,
                hint="expected a %s value for %s" % (self.type, self.name),
            ) from exception

    def validate(self, value, /, *, cli=Unset):
        """
        Run the declared validator against an already-typed value.

        - True passes and returns the value unchanged.
        - A non-empty string becomes the error message.
        - Anything else fails with the generic message.
        """
        if self.validator is Unset:
            return value
        if (result := self.validator(value)) is True:
            return value
        raise InvalidParamValueError(
            result if isinstance(result, str) and result else Unset,
            cli=coalesce(cli),
            param=self.name,
            value=value,
            hint="check the accepted values for %s" % self.name,
        )

    def evaluate(self, raw, /, *, cli=Unset):
        """
        Parse then validate a raw string (the path taken by user input).
        """
        return self.validate(self.parse(raw, cli=cli), cli=cli)


class PositionalArg(Param):
    """
    Positional, value-bearing parameter.

    Positional arguments are matched to the leading non-option tokens by index.
    They are required by default; an optional positional may only be followed by
    other optional positionals (enforced when added to a command).
    """
    __required__ = True

    __introspectable__ = (
        "name",
        "type",
        "required",
        "default",
        "description",
        "choices",
        "validator",
        "parser",
        "ask_if_empty",
    )

    def __new__(
            cls,
            name,
            /,
            type="string",
            required=Unset,
            default=Unset,
            description=Unset,
            choices=(),
            *,
            validator=Unset,
            parser=Unset,
            ask_if_empty=False
    ):
        metadata = {
            "name": name,
            "type": type,
            "required": required,
            "default": default,
            "description": description,
            "choices": choices,
            "validator": validator,
            "parser": parser,
            "ask_if_empty": ask_if_empty,
        }
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not name.isidentifier():
            raise ValueError(f"{cls.__typename__} 'name' must be a valid identifier")
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


class Option(Param):
    """
    Named, value-bearing parameter (also used for global options).

    Options are matched by canonical name after alias resolution. The raw value
    is every token following the option (or one of its aliases) up to the next
    option-like token, joined by single spaces; a bare option has the empty
    string as raw value, which the default boolean parser reads as True.
    """
    __required__ = False

    __introspectable__ = (
        "name",
        "aliases",
        "type",
        "required",
        "default",
        "description",
        "choices",
        "validator",
        "parser",
        "ask_if_empty",
    )

    def __new__(
            cls,
            name,
            /,
            aliases=(),
            type="string",
            required=Unset,
            default=Unset,
            description=Unset,
            choices=(),
            *,
            validator=Unset,
            parser=Unset,
            ask_if_empty=False
    ):
        metadata = {
            "name": name,
            "aliases": aliases,
            "type": type,
            "required": required,
            "default": default,
            "description": description,
            "choices": choices,
            "validator": validator,
            "parser": parser,
            "ask_if_empty": ask_if_empty,
        }
        _sanitize_named_metadata(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


__all__ = (
    "PositionalArg",
    "Option",
)

# Keep the metaclass and the shared base out of star-imports.
del ParamType
