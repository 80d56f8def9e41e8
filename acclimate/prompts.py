"""
Acclimate interactive prompting.

When a parameter declared with ask_if_empty is missing from the input, the
binder awaits the prompter for a raw value. The default prompter asks on the
terminal through rich.prompt, in a worker thread so the dispatch coroutine is
never blocked by standard input.

Answer handling
- empty (whitespace-only) answer: the default as a string when there is one,
  a re-prompt when the value is required, None otherwise.
- booleans: y/yes → "true", n/no → "false" (case-insensitive), anything else
  re-prompts.
- everything else is returned verbatim.
"""
import asyncio

from rich.prompt import PromptBase, InvalidResponse

from .terminal import console as stdout, generate_terminal_message
from .utils import Unset


def _stringify(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TerminalPrompt(PromptBase):
    """
    rich prompt implementing the acclimate answer rules.

    Defaults are resolved here rather than by PromptBase so that boolean
    defaults come back as "true"/"false" and whitespace-only answers count as
    empty.
    """

    def __init__(self, prompt, /, *, required, type=Unset, default=Unset, console=None, suffix=" "):
        super().__init__(prompt, console=console or stdout, show_default=False, show_choices=False)
        self.required = required
        self.type = type
        self.default = default
        self.prompt_suffix = suffix

    @classmethod
    def get_input(cls, console, prompt, password, stream=None):
        value = console.input(prompt, password=password, stream=stream)
        if stream is None:
            return value
        # stream.readline() keeps the newline and yields "" only at end of input
        if not value:
            raise EOFError("end of input while waiting for an answer")
        return value.removesuffix("\n").removesuffix("\r")

    def process_response(self, value):
        if not (trimmed := value.strip()):
            if self.default is not Unset:
                return _stringify(self.default)
            if self.required:
                raise InvalidResponse(
                    generate_terminal_message("|red|This value is required.|reset| Please enter a value.")
                )
            return None

        if self.type == "boolean":
            match trimmed.lower():
                case "y" | "yes":
                    return "true"
                case "n" | "no":
                    return "false"
            raise InvalidResponse(
                generate_terminal_message("|red|That was not a valid response.|reset| Please enter y or n.")
            )

        return value


def request_terminal_input(
        message,
        /,
        *,
        required,
        type=Unset,
        default=Unset,
        params=None,
        console=None,
        stream=None,
        suffix=" "
):
    """
    Ask for one value on the terminal and return the raw answer (or None).

    Parameters
    - message: marked-up prompt text (see acclimate.terminal); $name$ tokens
      are filled from params.
    - required: re-prompt on empty answers when there is no default.
    - type: "boolean" switches to the y/n answer rules.
    - default: returned (stringified) on empty answers.
    - console / stream: rich console to write to and file to read from
      (defaults: stdout console, standard input).
    """
    notice = ""
    if default is not Unset:
        message += " [default: %s]" % _stringify(default)
        notice = " |gray|(press Enter to use default)|reset|"
    elif not required:
        notice = " |gray|(press Enter to leave empty)|reset|"
    if type == "boolean":
        message += " |reset|(y/n)"

    prompt = TerminalPrompt(
        generate_terminal_message(f"|bright_cyan|{message}|reset|{notice}", params),
        required=required,
        type=type,
        default=default,
        console=console,
        suffix=suffix,
    )
    return prompt(stream=stream)


async def ask(param, /, *, console=None):
    """
    Default prompter: ask for the value of `param` without blocking the loop.

    The generated message is followed by ": "; a custom ask_if_empty message
    is followed by a single space.
    """
    return await asyncio.to_thread(
        request_terminal_input,
        param.prompt_message,
        required=param.required,
        type=param.type,
        default=Unset if param.required else param.default,
        console=console,
        suffix=": " if param.ask_if_empty is True else " ",
    )


__all__ = (
    "request_terminal_input",
    "ask",
)
