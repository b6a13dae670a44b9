"""
Backdrop faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
- ParseError: base type for the three ways parse() can fail. Each error carries
  the offending token/option/values as attributes, a plain description through
  str(), and knows how to render itself with rich (header, message, hint).
  • InvalidArgumentError         strict mode, an unrecognized flag-shaped token
  • InvalidValueForOptionError   an option rejected its collected values
  • MissingRequiredOptionsError  required options never seen by end of scan
- ParseWarning: base type for non-fatal diagnostics, surfaced with warnings.warn.
  • OverlappingFlagWarning       a flag registered by more than one option
- EX_USAGE: process exit status for command-line usage errors (sysexits.h).

Integration
- CommandLine.parse() raises the errors; in shell mode it prints the usage
  preceded by str(error) and exits with EX_USAGE instead.
- Host applications may define, in __main__:
  • __prog__: program name shown in fault headers.
  • __codes__: mapping FaultCode -> label, to replace numeric ids in headers.
  • __styles__: palette overrides (see ParseError.__rich__).

Construction mistakes (a numeric short flag, a missing flag...) are not faults:
they raise TypeError/ValueError from the option constructors.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset, coalesce

EX_USAGE = 64


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - errors (21xxx)
      • INVALID_ARGUMENT, INVALID_VALUE_FOR_OPTION, MISSING_REQUIRED_OPTIONS
    - warnings (22xxx)
      • OVERLAPPING_FLAG

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- errors (21xxx) ---
    INVALID_ARGUMENT         = 21101
    INVALID_VALUE_FOR_OPTION = 21111
    MISSING_REQUIRED_OPTIONS = 21121

    # --- warnings (22xxx) ---
    OVERLAPPING_FLAG         = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels. when no mapping is present,
        the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, kind, styles):
    """
    Internal: shared rich rendering of faults.

    Layout
        [ prog — code | Title ]
        message
         → hint
    """
    main = __import__("__main__")
    styles = defaultdict(str, styles | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = coalesce(fault.options.get("prog", Unset), getattr(main, "__prog__", "backdrop"))

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(fault.options["code"].normalize(), "code"),
        " | ",
        text(fault.options["title"].title(), kind + "-title"),
        " ]",
    )
    message = text(fault.message, kind + "-message")

    if not (hint := fault.options.get("hint")):
        return Group(header, message)
    return Group(header, message, Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))


class ParseError(Exception):
    """
    Base class for errors raised by CommandLine.parse().

    Attributes
    - message: str, the plain description (also what str() returns).
    - options: read-only mapping with rendering context: title, code, hint and,
      optionally, prog and colorful.
    """

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, "error", {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    @property
    def code(self):
        return self.options["code"]


class InvalidArgumentError(ParseError):
    """
    Raised in strict mode when a flag-shaped argument matched no option, neither
    exactly nor as a bundle of short flags.
    """

    def __init__(self, argument, /, **options):
        super().__init__("Invalid argument: %s" % argument, **{
            "title": "invalid argument",
            "code": FaultCode.INVALID_ARGUMENT,
            "hint": "remove %r or check the spelling against the usage below" % argument,
        } | options)
        self.argument = argument


class InvalidValueForOptionError(ParseError):
    """
    Raised when an option rejected the values collected after its flag (e.g. a
    string given to an IntOption, or no value at all for a StringOption).
    """

    def __init__(self, option, values, /, **options):
        values = list(values)
        super().__init__("Invalid value(s) for option %s: %s" % (option.flag_description, ", ".join(values)), **{
            "title": "invalid value for option",
            "code": FaultCode.INVALID_VALUE_FOR_OPTION,
            "hint": option.help_message or "check the value given to %s" % option.flag_description,
        } | options)
        self.option = option
        self.values = values


class MissingRequiredOptionsError(ParseError):
    """
    Raised after a complete scan when required options were never matched.
    Carries all of them, in registration order.
    """

    def __init__(self, missing, /, **options):
        missing = list(missing)
        descriptions = [option.flag_description for option in missing]
        super().__init__("Missing required options: %s" % descriptions, **{
            "title": "missing required options",
            "code": FaultCode.MISSING_REQUIRED_OPTIONS,
            "hint": "add %s" % " and ".join(descriptions),
        } | options)
        self.missing = missing


class ParseWarning(Warning):
    """
    Base class for non-fatal diagnostics; emitted with warnings.warn, so the
    usual warning filters apply.
    """

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, "warning", {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    @property
    def code(self):
        return self.options["code"]


class OverlappingFlagWarning(ParseWarning):
    """
    Emitted when an option is registered with a flag that an already registered
    option uses. Matching stops at the first registered option, so the newer
    one can never be selected through that flag.
    """

    def __init__(self, flag, option, shadowing, /, **options):
        super().__init__("flag %r of option %s is already used by option %s" % (
            flag, option.flag_description, shadowing.flag_description
        ), **{
            "title": "overlapping flag",
            "code": FaultCode.OVERLAPPING_FLAG,
            "hint": "give one of the options a different flag",
        } | options)
        self.flag = flag
        self.option = option
        self.shadowing = shadowing


__all__ = (
    "EX_USAGE",
    "FaultCode",
    "ParseError",
    "InvalidArgumentError",
    "InvalidValueForOptionError",
    "MissingRequiredOptionsError",
    "ParseWarning",
    "OverlappingFlagWarning",
)
