"""
Backdrop string utilities (numeric parsing, splitting, padding, wrapping)

Scope
- Pure functions used by the option model and the usage renderer. There is no
  shared state; the only environment access is the read-only locale query.

Overview
- decimal_point()
  • Decimal separator of the active process locale ("." when unavailable).

- to_double(text) / to_int(text)
  • Strict numeric recognizers returning None instead of raising. They are also
    what decides whether a dash-prefixed token is a negative number or a flag.

- split_by_character(text, separator, max_splits=0)
  • Ordered segments at each separator, honoring an optional split limit.

- padded_to_width(text, width, pad_by=" ")
  • Right padding up to a fixed width.

- wrapped_at_width(text, width, wrap_by="\\n", split_by=" ")
  • Greedy word packing; every word keeps its trailing separator.

Quick examples
    >>> to_double("-1.25")
    -1.25
    >>> split_by_character("--flag=a=b", "=", 1)
    ['--flag', 'a=b']
    >>> padded_to_width("ab", 4, ".")
    'ab..'
"""
import locale
import re

# ASCII only; str.isdigit() would also accept superscripts and other scripts.
_DIGITS = frozenset("0123456789")


def decimal_point():
    """
    Return the locale-specified decimal separator.

    The value comes from locale.localeconv(), i.e. whatever LC_NUMERIC the
    process is running with (CommandLine initializes it from the environment).
    Only the first character is used; "." is returned when the locale does not
    define one.
    """
    return locale.localeconv().get("decimal_point", "")[:1] or "."


def to_double(text, /):
    """
    Attempt to parse a string into a float using the locale decimal separator.

    Grammar
    - an optional "-" in the first position,
    - ASCII digits, and the decimal separator (which switches from the integer
      part to the fractional part). Any other character rejects the string.

    Both digit runs start from a "0" seed, so the fractional run always holds
    one digit more than was typed; dividing by 10 ** (len - 1) therefore scales
    by the typed digit count. A consequence of this shape is that "", "-" and
    "." all parse to zero, and a repeated separator is skipped ("1.2.3" -> 1.23).

    Returns
    - float, or None when the text is rejected or does not fit a float.
    """
    if not isinstance(text, str):
        raise TypeError("to_double() argument must be a string")

    characteristic = "0"
    mantissa = "0"
    in_mantissa = False
    negative = False
    separator = decimal_point()

    for index, char in enumerate(text):
        if index == 0 and char == "-":
            negative = True
            continue

        if char == separator:
            in_mantissa = True
            continue

        if char not in _DIGITS:
            # Non-numeric character found, bail
            return None

        if in_mantissa:
            mantissa += char
        else:
            characteristic += char

    try:
        value = float(int(characteristic)) + int(mantissa) / 10 ** (len(mantissa) - 1)
    except (OverflowError, ValueError):
        # Too large for a float, or more digits than int() converts
        return None
    return -value if negative else value


def to_int(text, /):
    """
    Parse a base-10 signed integer ("42", "-5", "+7"); None otherwise.

    Unlike int(), surrounding whitespace, underscores and non-ASCII digits are
    rejected.
    """
    if not isinstance(text, str):
        raise TypeError("to_int() argument must be a string")
    if not re.fullmatch(r"[+-]?[0-9]+", text):
        return None
    try:
        return int(text)
    except ValueError:
        # Beyond sys.get_int_max_str_digits()
        return None


def _check_character(function, name, char):
    if not isinstance(char, str):
        raise TypeError(f"{function}() '{name}' must be a string")
    if len(char) != 1:
        raise ValueError(f"{function}() '{name}' must be a single character")


def split_by_character(text, separator, /, max_splits=0):
    """
    Split a string into components at each occurrence of a character.

    Parameters
    - text: str
    - separator: str
      A single character to split on.
    - max_splits: int
      Maximum number of splits to perform; 0 means unlimited.

    Returns
    - list[str]: the segments in order. A trailing remainder is appended only
      when non-empty, so "a=" gives ["a"] while "=a" gives ["", "a"] and "" gives [].
    """
    _check_character("split_by_character", "separator", separator)
    if not isinstance(max_splits, int) or max_splits < 0:
        raise ValueError("split_by_character() 'max_splits' must be a non-negative integer")

    segments = []
    splits = 0
    start = 0

    for index, char in enumerate(text):
        if char == separator and (max_splits == 0 or splits < max_splits):
            segments.append(text[start:index])
            start = index + 1
            splits += 1

    if start != len(text):
        segments.append(text[start:])

    return segments


def padded_to_width(text, width, /, pad_by=" "):
    """
    Pad a string on the right to the given width. Longer strings are unchanged.
    """
    _check_character("padded_to_width", "pad_by", pad_by)
    return text + pad_by * max(width - len(text), 0)


def wrapped_at_width(text, width, /, wrap_by="\n", split_by=" "):
    """
    Wrap a string to the given width.

    This just does simple greedy word-packing. A word is moved to a new line
    when the current line plus the word and one separator would exceed the
    width; a word longer than the width is never split and so ends up alone on
    its line.

    Every word, the last one included, is followed by split_by, and a word that
    does not fit even an empty line is preceded by a break. Callers comparing
    exact output should expect those trailing characters.

    Parameters
    - width: int
      The maximum length of a line.
    - wrap_by: str
      The line break character to use.
    - split_by: str
      The character used to split the text into words.
    """
    _check_character("wrapped_at_width", "wrap_by", wrap_by)
    _check_character("wrapped_at_width", "split_by", split_by)

    wrapped = []
    current = 0

    for word in split_by_character(text, split_by):
        if current + len(word) + 1 > width:
            wrapped.append(wrap_by)
            current = 0

        current += len(word) + 1
        wrapped.append(word)
        wrapped.append(split_by)

    return "".join(wrapped)


__all__ = (
    "decimal_point",
    "to_double",
    "to_int",
    "split_by_character",
    "padded_to_width",
    "wrapped_at_width",
)
