"""
Backdrop command-line engine: register options, parse argv, print usage.

What this module provides
- CommandLine: owns the raw argument vector and the registered options.
  • add_option / add_options / set_options: registration (no removal).
  • parse(strict=False): scan the arguments once, left to right, and populate
    every matched option in place; raise a ParseError on failure.
  • print_usage([error], file=...): aligned usage message through rich.
  • format_usage([error]): the same message as a plain string.

Token grammar
- "-x" / "--name": a flag. Anything after the prefix is the flag body.
- "--name=value" / "-x=value": value attached to the flag (split on the first '=').
- "-xvf": bundle of short flags when no option matches "xvf" as a whole; only the
  last flag of the bundle receives the values that follow.
- "--": argument stopper. Everything after it is a plain value, never a flag.
- "-5", "-1.5": negative numbers are values, not flags.
- anything else: a plain value, collected by the preceding flag.

Values of a flag (its value span) are the tokens that follow it up to the next
flag-shaped token. An attached value comes first. A "--" inside the span is
dropped and turns the rest of the arguments into values of that flag.

Quick start
    from backdrop import CommandLine, BoolOption, StringOption, ParseError

    cli = CommandLine()
    path = StringOption(short_flag="e", long_flag="envFile", help_message="Custom EnvFile to use.")
    help = BoolOption(short_flag="h", long_flag="help", help_message="Prints this message.")
    cli.add_options(path, help)

    try:
        cli.parse()
    except ParseError as error:
        cli.print_usage(error)
        raise SystemExit(EX_USAGE)

Or let the engine do the last three steps: CommandLine(shell=True).parse().
"""
import itertools
import locale
import os.path
import shlex
import sys
import warnings
from collections.abc import Iterable

from rich.console import Console

from .faults import *
from .options import *
from .options import _is_numeric
from .strings import split_by_character
from .usage import render_usage
from .utils import *


def _flatten(function, options):
    """
    Accept both f(a, b, c) and f([a, b, c]); validate the items are options.
    """
    if len(options) == 1 and not isinstance(options[0], Option) and isinstance(options[0], Iterable):
        options = tuple(options[0])
    for option in options:
        if not isinstance(option, Option):
            raise TypeError(f"{function}() arguments must be options")
    return options


class CommandLine:
    """
    The command-line interface of an application.

    Define one or more options (see backdrop.options), add them to a
    CommandLine, then call parse(). Each option is populated with the value
    given by the user. If a required option is missing or a value is invalid,
    parse() raises a ParseError; print_usage(error) then shows what went wrong
    followed by an automatically generated usage message.

    Properties
    - arguments: list[str], a copy of the argument vector (index 0 is the
      program name and is never parsed).
    - options: list[Option], the registered options in registration order.
    - shell: bool, print-and-exit instead of raising on parse errors.
    - colorful: bool, style the usage message.
    """

    arguments = mirror("arguments")
    options = mirror("options")
    shell = mirror("shell")
    colorful = mirror("colorful")

    def __init__(self, arguments=Unset, /, *, shell=False, colorful=False):
        """
        Initialize a CommandLine.

        Parameters
        - arguments:
          • Unset: use sys.argv.
          • str: shell-like string, split with shlex.split (first word is the program name).
          • Iterable[str]: pre-tokenized arguments, taken as they are.
        - shell: bool
          On a parse error, print the usage to standard error and exit with
          EX_USAGE instead of raising.
        - colorful: bool
          Style the usage message (only visible on terminals).

        Raises
        - TypeError: when arguments is not Unset/str/Iterable[str].
        """
        if arguments is Unset:
            arguments = list(sys.argv)
        elif isinstance(arguments, str):
            arguments = shlex.split(arguments)
        elif isinstance(arguments, Iterable):
            arguments = list(arguments)
            if not all(isinstance(argument, str) for argument in arguments):
                raise TypeError("CommandLine() argument must be a string or an iterable of strings")
        else:
            raise TypeError("CommandLine() argument must be a string or an iterable of strings")

        self._arguments = arguments
        self._options = []
        self._shell = bool(shell)
        self._colorful = bool(colorful)

        # Initialize locale settings from the environment; the decimal separator
        # used for numeric values follows LC_NUMERIC. An unsupported environment
        # locale leaves the C locale (and its ".") in place.
        try:
            locale.setlocale(locale.LC_ALL, "")
        except locale.Error:
            pass

    def __repr__(self):
        return "command-line(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "arguments", self.arguments
        yield "options", self.options
        yield "shell", self.shell
        yield "colorful", self.colorful

    @property
    def program(self):
        """
        Program name for the usage banner: __main__.__prog__ when the host
        defines it, otherwise the first argument.
        """
        try:
            default = self._arguments[0]
        except IndexError:
            default = os.path.basename(sys.argv[0]) if sys.argv else ""
        return getattr(__import__("__main__"), "__prog__", default)

    def add_option(self, option, /):
        """
        Add an option to the command line.

        Warns with OverlappingFlagWarning when one of its flags is already used
        by a registered option (the earlier option keeps matching that flag).
        """
        if not isinstance(option, Option):
            raise TypeError("add_option() argument must be an option")
        self._register(option)

    def _register(self, option):
        # Called straight from the public methods: stacklevel 3 is their caller
        for flag in filter(None, (option.short_flag, option.long_flag)):
            for registered in self._options:
                if registered.flag_match(flag):
                    warnings.warn(OverlappingFlagWarning(flag, option, registered), stacklevel=3)
                    break

        self._options.append(option)

    def add_options(self, *options):
        """
        Add one or more options: add_options(a, b) or add_options([a, b]).
        """
        for option in _flatten("add_options", options):
            self._register(option)

    def set_options(self, *options):
        """
        Replace the registered options: set_options(a, b) or set_options([a, b]).
        """
        options = _flatten("set_options", options)
        self._options = []
        for option in options:
            self._register(option)

    def _match(self, flag):
        return next(filter(lambda option: option.flag_match(flag), self._options), None)

    def _get_flag_values(self, index):
        """
        Collect the value span of the flag at the given index.

        The span is the value attached with '=' (if any) followed by every
        argument up to the next flag-shaped argument or the end of input.
        Negative numbers are values. The first "--" is dropped and disables the
        flag check for the remaining arguments.
        """
        values = []
        skip_flag_checks = False

        # Grab attached value, if any
        attached = split_by_character(self._arguments[index], ARGUMENT_ATTACHER, 1)
        if len(attached) > 1:
            values.append(attached[1])

        for argument in itertools.islice(self._arguments, index + 1, None):
            if not skip_flag_checks:
                if argument == ARGUMENT_STOPPER:
                    skip_flag_checks = True
                    continue

                if argument.startswith(SHORT_OPTION_PREFIX) and not _is_numeric(argument):
                    break

            values.append(argument)

        return values

    def _set_value(self, option, values):
        if not option.set_value(values):
            raise InvalidValueForOptionError(option, values, prog=self.program, colorful=self._colorful)

    def _parse(self, strict):
        stopped = False

        for index, argument in enumerate(itertools.islice(self._arguments, 1, None), start=1):
            if stopped or not argument.startswith(SHORT_OPTION_PREFIX):
                continue

            if argument == ARGUMENT_STOPPER:
                stopped = True
                continue

            # Negative numbers can only be values
            if _is_numeric(argument):
                continue

            long = argument.startswith(LONG_OPTION_PREFIX)
            body = argument[len(LONG_OPTION_PREFIX if long else SHORT_OPTION_PREFIX):]

            # The argument contained nothing but the prefix
            if not body:
                continue

            # Remove attached value from flag
            flag = split_by_character(body, ARGUMENT_ATTACHER, 1)[0]

            if option := self._match(flag):
                self._set_value(option, self._get_flag_values(index))
                continue

            # Flags that do not take any values can be concatenated, and the last
            # one may take values: -xvf <file1> <file2>
            matched = False
            if not long:
                for position, char in enumerate(flag):
                    if not (option := self._match(char)):
                        continue
                    self._set_value(option, self._get_flag_values(index) if position == len(flag) - 1 else [])
                    matched = True

            if strict and not matched:
                raise InvalidArgumentError(argument, prog=self.program, colorful=self._colorful)

        # Check to see if any required options were not matched
        if missing := [option for option in self._options if option.required and not option.was_set]:
            raise MissingRequiredOptionsError(missing, prog=self.program, colorful=self._colorful)

    def parse(self, strict=False):
        """
        Parse the arguments into their matching options.

        Parameters
        - strict: bool
          Fail on flag-shaped arguments that match no option (default: ignore them).

        Raises
        - InvalidArgumentError: strict mode, unrecognized flag.
        - InvalidValueForOptionError: an option rejected its values.
        - MissingRequiredOptionsError: required options were not given.

        In shell mode none of these propagate: the usage is printed with the
        error to standard error and the process exits with EX_USAGE.
        """
        try:
            self._parse(bool(strict))
        except ParseError as error:
            if not self._shell:
                raise
            self.print_usage(error)
            sys.exit(EX_USAGE)

    def format_usage(self, error=Unset, /):
        """
        Return the usage message (preceded by the error, if given) as plain text.
        """
        return render_usage(self.program, self._options, error).plain + "\n"

    def print_usage(self, error=Unset, /, *, file=Unset):
        """
        Print a usage message.

        Parameters
        - error: Unset | BaseException
          An error raised by parse(). Its description (e.g. "Missing required
          options: ['-x, --extract']") is printed before the usage message.
        - file: Unset | rich Console | text stream
          Destination; standard error by default.
        """
        if file is Unset:
            console = Console(stderr=True)
        elif isinstance(file, Console):
            console = file
        else:
            console = Console(file=file)

        # soft_wrap keeps rich from re-wrapping long help lines
        console.print(render_usage(self.program, self._options, error, colorful=self._colorful), soft_wrap=True)


__all__ = (
    "CommandLine",
)
