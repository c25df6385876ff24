"""
Argvoy faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- ConfigurationError: programmer errors raised while a definition or a command
  tree is being declared (never raised for user input).
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

UX goals
- One-line messages that name the offending option/argument and the raw input.
- A single clear hint, scoped to the deepest resolved command ("try 'app greet --help'").
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The mapper and the resolver raise faults directly (fail-fast).
- The application catches them and calls trigger(fault, **ctx): in non-shell mode the
  fault is raised again for the caller, in shell mode it is rendered via rich.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the cli (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND
    - options (1111x)
      • UNKNOWN_OPTION, MISSING_OPTION_VALUE, MISSING_OPTION
    - positionals (1112x)
      • MISSING_ARGUMENT
    - values (1113x)
      • CONVERSION_FAILED
    - delegated (1114x)
      • EXECUTION_FAILED

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired (e.g., to shorter labels).
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND         = 11101

    # --- option errors (11xxx) ---
    UNKNOWN_OPTION          = 11111
    MISSING_OPTION_VALUE    = 11112
    MISSING_OPTION          = 11113

    # --- positional errors (11xxx) ---
    MISSING_ARGUMENT        = 11121

    # --- value errors (11xxx) ---
    CONVERSION_FAILED       = 11131

    # --- delegated errors (11xxx) ---
    EXECUTION_FAILED        = 11141

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    base type for every user-facing fault.

    contract
    - message: the one-line, lowercased description of what went wrong.
    - options: read-only mapping with rendering context and structured payload
      (title, code, hint, and fields such as input/value/argument).
    - __replace__(**overrides): copy with merged options (used by trigger()).
    - __trigger__(): raise outside shell mode; print via rich in shell mode.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        tool = self.options.get("tool")
        prog = text(getattr(main, "__prog__", getattr(tool, "usage", None) or "argvoy"), styler("prog-name"))

        header = Text.assemble("[ ", prog)
        if code := self.options.get("code"):
            header.append_text(Text.assemble(" — ", text(code.normalize(), styler("code"))))
        if title := self.options.get("title"):
            header.append_text(Text.assemble(" | ", text(title.title(), styler("error-title"))))
        header.append(" ]")

        message = text(str(self), styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        self.options.get("console", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ConversionError(CommandException):
    """a raw string could not be converted by the bound value adapter."""


class MissingRequiredError(CommandException):
    """a required option, option value or argument was not supplied."""


class MissingOptionError(MissingRequiredError): ...
class MissingValueError(MissingRequiredError): ...
class MissingArgumentError(MissingRequiredError): ...
class UnknownOptionError(CommandException): ...
class UnknownCommandError(CommandException): ...
class ExecutionError(CommandException): ...


class ConfigurationError(ValueError):
    """
    programmer error found while declaring options, arguments or commands.

    examples: duplicated option spellings, conflicting value modes, a required
    argument declared after an optional one, or sibling commands sharing a name.
    this is a construction-time fault and is never rendered as user feedback.
    """


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised.

    typical options
    - tool, shell, fancy, colorful, console, title, code, hint, and any other
      context the reporter may want to show (e.g., input/value/argument).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "CommandException",
    "ConversionError",
    "MissingRequiredError",
    "MissingOptionError",
    "MissingValueError",
    "MissingArgumentError",
    "UnknownOptionError",
    "UnknownCommandError",
    "ExecutionError",
    "ConfigurationError",
    "trigger",
)
