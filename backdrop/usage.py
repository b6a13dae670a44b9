"""
Usage rendering for CommandLine.

Layout (plain form)

    Invalid argument: --bogus           <- only when an error is given
                                        <- blank line after the error
    Usage: prog [options]
      -e, --envFile:
          Custom EnvFile to use.
      -n, --newVersion:
          Increments the build number.

Every label is "  <flag description>:" padded to the widest label, followed by
a line break and the help message indented by six spaces.

Palette keys (only applied when colorful=True)
- error-message, usage-label, program-name, option-name, required-name,
  help-message
Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.text import Text

from .strings import padded_to_width
from .utils import Unset

_PALETTE = {
    "error-message": "bold #FF4DA6",  # friendly pinky error line
    "usage-label": "bold #00E6FF",  # CYAN → signature info color
    "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
    "option-name": "bold #00E6FF",  # CYAN for flags
    "required-name": "bold #FFD600",  # AMBER for required flags
    "help-message": "#9CA3AF",  # Muted gray
}

_LABEL_INDENT = "  "
_HELP_INDENT = " " * 6


def label_width(options, /):
    """
    Width of the flag column: the longest "  <flag description>:" label.
    """
    return max((len(f"{_LABEL_INDENT}{option.flag_description}:") for option in options), default=0)


def render_usage(program, options, /, error=Unset, *, colorful=False):
    """
    Build the usage message as a rich Text.

    Parameters
    - program: str
      Name shown in the "Usage:" banner.
    - options: Iterable[Option]
      Registered options, rendered in the given order.
    - error: Unset | BaseException
      When given, str(error) and a blank line precede the usage.
    - colorful: bool
      Apply the palette; otherwise the Text carries no styles at all.

    Returns
    - Text without a trailing newline (console.print adds it).
    """
    styles = defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    options = list(options)
    width = label_width(options)

    lines = []

    if error is not Unset:
        lines.append(Text(str(error), styler("error-message")))
        lines.append(Text(""))

    lines.append(Text.assemble(
        ("Usage", styler("usage-label")),
        ": ",
        (program, styler("program-name")),
        " [options]",
    ))

    for option in options:
        label = f"{_LABEL_INDENT}{option.flag_description}:"
        lines.append(Text.assemble(
            _LABEL_INDENT,
            (option.flag_description, styler("required-name" if option.required else "option-name")),
            ":",
            padded_to_width(label, width)[len(label):],
        ))
        lines.append(Text.assemble(_HELP_INDENT, (option.help_message, styler("help-message"))))

    return Text("\n").join(lines)


__all__ = (
    "label_width",
    "render_usage",
)
