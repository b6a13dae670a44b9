"""
Backdrop helpers shared by the option model and the command-line engine.

- Unset: "argument not given" marker for keyword defaults where None already
  means something (an option without a long flag has long_flag None).
- coalesce(value, default=None): swap Unset for a default; keep everything else.
- rename(...): name generated functions (option accessors, repr hooks).
- mirror("attr"): read-only property over self._attr that hands out copies of
  lists, dicts and sets.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker: one instance per process, falsy, repr "Unset".

    It also takes part in X | Unset unions so that option constructors can
    check "str | Unset" with isinstance.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


def coalesce(object, default=None, /):
    """Return default when object is Unset, object otherwise."""
    return default if object is Unset else object


def rename(*parameters):
    """
    Set __name__ and __qualname__ of a generated function.

    rename(function, name) renames in place and returns the function;
    rename(name) returns a decorator doing the same.
    """
    match parameters:
        case (str() as name,):
            return lambda function: rename(function, name)
        case (function, str() as name) if builtins.callable(function):
            function.__name__ = function.__qualname__ = name
            return function
        case _:
            raise TypeError("rename() expects (function, name) or (name), both names being strings")


def _immortalize(object):
    # Containers come back as fresh (recursive) copies; anything else as is.
    match object:
        case str():
            return object
        case Sequence():
            return [_immortalize(item) for item in object]
        case Mapping():
            return {key: _immortalize(value) for key, value in object.items()}
        case Set():
            return {_immortalize(item) for item in object}
        case _:
            return object


def mirror(name, /):
    """
    Read-only property returning self._<name>, copying containers so that the
    values held by an option or a command line cannot be changed from outside.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
