"""
Acclimate faults.

Every error the builder or the dispatch engine reports is a CLIError carrying:
- a message (explicit, or the class template filled from the options),
- read-only options: cli (command name), code, title, hint, and details such
  as param, value, count or command,
- a rich rendering used when the program runs in shell mode:

    [ tool — 11122 | Missing Positional Argument ]
    required positional argument 'service' is missing
     → tool expects service as its first positional argument

Host hooks (optional attributes of __main__, read at render time)
- __prog__: program name shown in the header (defaults to the cli name).
- __styles__: overrides for PALETTE entries.
- __codes__: FaultCode → label shown instead of the numeric code.
- __docs__: FaultCode → documentation returned by getdoc().

The engine never prints faults itself: run(..., shell=True) hands caught
faults to trigger(), which prints them on standard error and exits with 1.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)

PALETTE = {
    "prog-name": "bold #E6E6F0",
    "code": "bold #00E5FF",
    "error-title": "bold #FF4DA6",
    "error-message": "#C8C8D0",
    "hint-arrow": "#9CE19C dim",
    "hint": "italic #9CE19C",
}


def _host(name, default):
    return getattr(sys.modules.get("__main__"), name, default)


class FaultCode(IntEnum):
    """
    stable numeric identifiers of every fault.

    ranges
    - 101xx lifecycle: ALREADY_RUN
    - 102xx declarations: INVALID_POSITIONAL_ARG_CONFIG
    - 1110x routing: UNKNOWN_COMMAND
    - 1111x options: MISSING_REQUIRED_OPTION
    - 1112x positionals: TOO_MANY_POSITIONAL_ARGS, MISSING_REQUIRED_POSITIONAL_ARG
    - 1113x values: INVALID_PARAM_VALUE
    """
    # --- lifecycle ---
    ALREADY_RUN                     = 10101

    # --- declarations ---
    INVALID_POSITIONAL_ARG_CONFIG   = 10201

    # --- routing ---
    UNKNOWN_COMMAND                 = 11101

    # --- options ---
    MISSING_REQUIRED_OPTION         = 11111

    # --- positionals ---
    TOO_MANY_POSITIONAL_ARGS        = 11121
    MISSING_REQUIRED_POSITIONAL_ARG = 11122

    # --- values ---
    INVALID_PARAM_VALUE             = 11131

    def normalize(self):
        """
        label of this code: the host's __codes__ entry, else the number as a string.
        """
        return str(_host("__codes__", {}).get(self, self.value))


class CLIError(Exception):
    """
    base of every acclimate fault.

    CLIError(message=Unset, /, **options)
    - message: overrides the class template.
    - options: context of the fault. code, title and hint default to the class
      values; the remaining keys fill the template ({param!r}, {count}, ...).

    rendering options, read by __rich__ / __trigger__
    - shell: print and exit instead of raising.
    - colorful: apply PALETTE styles (default True).
    - fancy: frame the message and hint in a panel (default False).
    """
    __code__ = Unset
    __title__ = "cli error"
    __template__ = "something went wrong"
    __hint__ = "check the command help text for the expected usage"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        kind = type(self)
        options = {"code": kind.__code__, "title": kind.__title__, "hint": kind.__hint__} | options
        self.message = coalesce(message, kind.__template__.format_map(defaultdict(str, options)))
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    @property
    def code(self):
        return self.options["code"]

    @property
    def cli(self):
        return self.options.get("cli")

    def __str__(self):
        if not self.cli:
            return self.message
        return "error running %s: %s" % (self.cli, self.message)

    def __rich__(self):
        colorful = self.options.get("colorful", True)
        styles = PALETTE | _host("__styles__", {})

        def styled(fragment, role):
            return Text(str(fragment), styles.get(role, "") if colorful else "")

        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"
        header = Text.assemble(
            "[ ",
            styled(_host("__prog__", self.cli or "cli"), "prog-name"),
            " — ",
            styled(code, "code"),
            " | ",
            styled(self.options["title"].title(), "error-title"),
            " ]",
        )
        body = styled(self.message, "error-message")
        hint = Text.assemble(styled(" → ", "hint-arrow"), styled(self.options["hint"], "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(body, hint), title=header, title_align="left")
        return Group(header, body, hint)

    def __trigger__(self):
        if self.options.get("shell", False):
            console.print(self)
            sys.exit(1)
        raise self from self.__cause__

    def __replace__(self, /, **overrides):
        fault = type(self)(self.message, **(dict(self.options) | overrides))
        fault.__cause__ = self.__cause__
        return fault


class AlreadyRunError(CLIError):
    __code__ = FaultCode.ALREADY_RUN
    __title__ = "already run"
    __template__ = "cli has already been run"
    __hint__ = "build a new cli or call dispatch() to handle input more than once"


class UnknownCommandError(CLIError):
    __code__ = FaultCode.UNKNOWN_COMMAND
    __title__ = "unknown command"
    __template__ = "command {command!r} not found"


class InvalidPositionalArgConfigError(CLIError):
    __code__ = FaultCode.INVALID_POSITIONAL_ARG_CONFIG
    __title__ = "invalid positional configuration"
    __template__ = "positional argument configuration for {param!r} is invalid"
    __hint__ = "declare required positional arguments before optional ones"


class TooManyPositionalArgsError(CLIError):
    __code__ = FaultCode.TOO_MANY_POSITIONAL_ARGS
    __title__ = "too many positional arguments"
    __template__ = "too many positional arguments provided ({count} given, {expected} expected)"


class MissingRequiredPositionalArgError(CLIError):
    __code__ = FaultCode.MISSING_REQUIRED_POSITIONAL_ARG
    __title__ = "missing positional argument"
    __template__ = "required positional argument {param!r} is missing"


class MissingRequiredOptionError(CLIError):
    __code__ = FaultCode.MISSING_REQUIRED_OPTION
    __title__ = "missing option"
    __template__ = "required option {param!r} is missing"


class InvalidParamValueError(CLIError):
    __code__ = FaultCode.INVALID_PARAM_VALUE
    __title__ = "invalid value"
    __template__ = "invalid value for cli param {param!r}"


def trigger(fault, /, **options):
    """
    Surface `fault` with extra options merged in (shell, colorful, fancy, ...).

    Outside shell mode the fault is raised; in shell mode it is printed on
    standard error and the process exits with status 1.
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    Documentation the host registered for `code` in __main__.__docs__, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return _host("__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "CLIError",
    "AlreadyRunError",
    "UnknownCommandError",
    "InvalidPositionalArgConfigError",
    "TooManyPositionalArgsError",
    "MissingRequiredPositionalArgError",
    "MissingRequiredOptionError",
    "InvalidParamValueError",
    "trigger",
    "getdoc",
)
