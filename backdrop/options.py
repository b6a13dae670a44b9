r"""
Backdrop option model: typed value holders for command-line flags.

Overview
- Option: abstract base carrying the flag identity (short and/or long flag),
  required-ness and help message, plus the capability methods used by the
  parser:
  • flag_match(flag) -> bool: case-sensitive comparison with either flag.
  • set_value(values) -> bool: coerce a value span and store it.
  • was_set: derived from the current value, never stored separately.
  • flag_description: "-s, --long", "--long" or "-s".

- Variants (closed set; each one is sealed against subclassing)
  • BoolOption          presence-only, value True once seen
  • CounterOption       presence-only, counts occurrences
  • IntOption           one base-10 signed integer
  • DoubleOption        one decimal number (locale-aware, see strings.to_double)
  • StringOption        one string
  • MultiStringOption   one or more strings
  • EnumOption[_E]      one member of an Enum, looked up by its value

Identity rules (checked on construction; violations are programming errors
and raise TypeError/ValueError, never a ParseError)
- At least one of short_flag/long_flag must be given.
- short_flag: exactly one character, not numeric, not "=".
- long_flag: non-empty, not numeric, no leading "-" and no "=".
Flags are given without their dash prefix.

Quick example:
    >>> verbose = CounterOption(short_flag="v", long_flag="verbose", help_message="Be chatty.")
    >>> verbose.flag_description
    '-v, --verbose'
    >>> verbose.set_value([]), verbose.value, verbose.was_set
    (True, 1, True)

Public API
- Classes: Option, BoolOption, CounterOption, IntOption, DoubleOption,
  StringOption, MultiStringOption, EnumOption
- Constants: SHORT_OPTION_PREFIX, LONG_OPTION_PREFIX, ARGUMENT_STOPPER,
  ARGUMENT_ATTACHER
"""
import builtins
import enum
import functools
import itertools
import operator
import re

from .strings import to_double, to_int
from .utils import *

SHORT_OPTION_PREFIX = "-"
LONG_OPTION_PREFIX = "--"

# Stop parsing arguments when an argument stopper (--) is detected. This is the
# GNU getopt convention.
ARGUMENT_STOPPER = "--"

# Allow arguments to be attached to flags when separated by this character:
# --flag=argument is equivalent to --flag argument
ARGUMENT_ATTACHER = "="


class OptionType(type):
    """
    Metaclass that gives option classes their introspection and sealing.

    Responsibilities
    - Accumulate __introspectable__ names along the class hierarchy and expose
      each newly declared name as a read-only property via mirror().
    - Derive __typename__ from the class name ("MultiStringOption" ->
      "multi-string-option"); it prefixes every construction error message.
    - Provide stable __repr__/__rich_repr__ implementations.
    - Seal classes declared with sealed=True against subclassing, which keeps
      the variant set closed.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        inherited = tuple(dict.fromkeys(itertools.chain.from_iterable(
            getattr(base, "__introspectable__", ()) for base in bases
        )))
        declared = tuple(field for field in namespace.get("__introspectable__", ()) if field not in inherited)

        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
                "__introspectable__": inherited + declared,
            } | {
                field: mirror(field) for field in declared
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation, e.g.
            int-option(short_flag='i', long_flag=None, required=False, help_message='', value=42)
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _is_numeric(flag):
    return to_int(flag) is not None or to_double(flag) is not None


def _sanitize_flags(cls, metadata, /):
    """
    Internal: validate the flag identity of an option.

    Parameters
    - cls: the option class, used for its __typename__ in messages.
    - metadata: dict with 'short_flag' and 'long_flag' (str | Unset). The dict
      is updated in place: Unset becomes None.

    Raises
    - TypeError: no flag at all, or a flag that is not a string.
    - ValueError: a short flag that is not exactly one non-numeric character
      other than "=", or a long flag that is empty, numeric, dash-prefixed or contains "=".
    """
    short_flag = metadata["short_flag"]
    long_flag = metadata["long_flag"]

    if short_flag is Unset and long_flag is Unset:
        raise TypeError(f"{cls.__typename__} must specify a short flag, a long flag or both")

    if short_flag is not Unset:
        if not isinstance(short_flag, str):
            raise TypeError(f"{cls.__typename__} short flag must be a string")
        elif len(short_flag) != 1:
            raise ValueError(f"{cls.__typename__} short flag must be a single character")
        elif _is_numeric(short_flag):
            raise ValueError(f"{cls.__typename__} short flag cannot be a numeric value")
        elif short_flag == ARGUMENT_ATTACHER:
            raise ValueError(f"{cls.__typename__} short flag cannot be {ARGUMENT_ATTACHER!r}")

    if long_flag is not Unset:
        if not isinstance(long_flag, str):
            raise TypeError(f"{cls.__typename__} long flag must be a string")
        elif not long_flag:
            raise ValueError(f"{cls.__typename__} long flag cannot be empty")
        elif _is_numeric(long_flag):
            raise ValueError(f"{cls.__typename__} long flag cannot be a numeric value")
        elif long_flag.startswith(SHORT_OPTION_PREFIX) or ARGUMENT_ATTACHER in long_flag:
            raise ValueError(f"{cls.__typename__} long flag must be given without dashes and without {ARGUMENT_ATTACHER!r}")

    metadata["short_flag"] = coalesce(short_flag)
    metadata["long_flag"] = coalesce(long_flag)


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize required/help_message.

    - required: any value, stored as bool.
    - help_message: Unset | str; Unset becomes the empty string.
    """
    metadata["required"] = bool(metadata["required"])

    if not isinstance(help_message := metadata["help_message"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'help_message' must be a string")
    metadata["help_message"] = coalesce(help_message, "")


class Option(metaclass=OptionType):
    """
    Base class for a command-line option.

    Concrete behavior lives in the variants; Option itself only knows the flag
    identity and how to describe it. Instances are owned by the caller: the
    parser keeps references, mutates the value through set_value() while
    parsing and never removes or copies options.

    Properties
    - short_flag / long_flag: str | None, immutable after construction.
    - required: bool
    - help_message: str
    """

    __introspectable__ = (
        "short_flag",
        "long_flag",
        "required",
        "help_message",
    )

    def __init__(self, *, short_flag=Unset, long_flag=Unset, required=False, help_message=Unset):
        """
        Construct an option.

        Parameters
        - short_flag: Unset | str
          Single character selected by "-x" (and usable in "-xyz" bundles).
        - long_flag: Unset | str
          Name selected by "--name".
        - required: bool
          Parsing fails with MissingRequiredOptionsError when the option was not seen.
        - help_message: Unset | str
          Shown under the flags in the usage message.
        """
        if type(self) is Option:
            raise TypeError("option cannot be instantiated directly, use one of its variants")

        metadata = {
            "short_flag": short_flag,
            "long_flag": long_flag,
            "required": required,
            "help_message": help_message,
        }
        _sanitize_flags(type(self), metadata)
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def was_set(self):
        """
        True if the option was matched while parsing command-line arguments.
        """
        raise NotImplementedError

    @property
    def flag_description(self):
        match self._short_flag, self._long_flag:
            case str() as short, str() as long:
                return f"{SHORT_OPTION_PREFIX}{short}, {LONG_OPTION_PREFIX}{long}"
            case None, str() as long:
                return f"{LONG_OPTION_PREFIX}{long}"
            case short, _:
                return f"{SHORT_OPTION_PREFIX}{short}"

    def flag_match(self, flag, /):
        return flag == self._short_flag or flag == self._long_flag

    def set_value(self, values, /):
        """
        Store the value(s) collected for this option.

        Parameters
        - values: Sequence[str]
          The value span collected after the flag (may be empty).

        Returns
        - bool: False when the values are not acceptable; the current value is
          left untouched in that case.
        """
        raise NotImplementedError


class BoolOption(Option, sealed=True):
    """
    A boolean option. The presence of either flag sets the value to True;
    absence is equivalent to False. Values after the flag are ignored.
    """
    __introspectable__ = ("value",)

    _value = False

    @property
    def was_set(self):
        return self._value

    def set_value(self, values, /):
        self._value = True
        return True


class CounterOption(Option, sealed=True):
    """
    An integer counter, incremented each time one of its flags is found
    ("-vvv" counts three).
    """
    __introspectable__ = ("value",)

    _value = 0

    @property
    def was_set(self):
        return self._value > 0

    def set_value(self, values, /):
        self._value += 1
        return True


class IntOption(Option, sealed=True):
    """An option that accepts a positive or negative integer value."""
    __introspectable__ = ("value",)

    _value = None

    @property
    def was_set(self):
        return self._value is not None

    def set_value(self, values, /):
        if not values:
            return False

        if (value := to_int(values[0])) is None:
            return False

        self._value = value
        return True


class DoubleOption(Option, sealed=True):
    """An option that accepts a positive or negative floating-point value."""
    __introspectable__ = ("value",)

    _value = None

    @property
    def was_set(self):
        return self._value is not None

    def set_value(self, values, /):
        if not values:
            return False

        if (value := to_double(values[0])) is None:
            return False

        self._value = value
        return True


class StringOption(Option, sealed=True):
    """An option that accepts a string value."""
    __introspectable__ = ("value",)

    _value = None

    @property
    def was_set(self):
        return self._value is not None

    def set_value(self, values, /):
        if not values:
            return False

        self._value = values[0]
        return True


class MultiStringOption(Option, sealed=True):
    """
    An option that accepts one or more string values. A later occurrence of the
    flag replaces the values of an earlier one.
    """
    __introspectable__ = ("value",)

    _value = None

    @property
    def was_set(self):
        return self._value is not None

    def set_value(self, values, /):
        if not values:
            return False

        self._value = list(values)
        return True


class EnumOption[_E](Option, sealed=True):
    """
    An option whose value is a member of an Enum.

    The first value is looked up by member value, so an Enum with string values
    gives the accepted spellings:

        class Mode(enum.Enum):
            FAST = "fast"
            SAFE = "safe"

        mode = EnumOption(Mode, short_flag="m", help_message="Run mode.")
    """
    __introspectable__ = ("type", "value")

    _value = None

    def __init__(self, type, /, **options):
        if not isinstance(type, enum.EnumType):
            raise TypeError(f"{builtins.type(self).__typename__} first argument must be an enum type")
        self._type = type
        super().__init__(**options)

    @property
    def was_set(self):
        return self._value is not None

    def set_value(self, values, /):
        if not values:
            return False

        try:
            self._value = self._type(values[0])
        except ValueError:
            return False

        return True


__all__ = (
    # Constants
    "SHORT_OPTION_PREFIX",
    "LONG_OPTION_PREFIX",
    "ARGUMENT_STOPPER",
    "ARGUMENT_ATTACHER",

    # Classes
    "Option",
    "BoolOption",
    "CounterOption",
    "IntOption",
    "DoubleOption",
    "StringOption",
    "MultiStringOption",
    "EnumOption",
)

# Internal metaclass, not part of the public API.
del OptionType
