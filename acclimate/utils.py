"""
Acclimate utilities.

Small helpers shared by the declaration, command and runner layers.

Contents
- Unset: the "nothing was passed" marker used for keyword defaults where None
  is itself a meaningful value (a description of None, a default of None...).
- coalesce(object, default): swap Unset for a fallback, keep everything else.
- rename("name"): decorator pinning __name__/__qualname__ of generated methods.
- mirror("field"): read-only property over the private "_field" attribute,
  handing out immutable views of containers.
- camelize(name): key of a parameter in the argument record.
- ordinal(number): "first", "second", ..., "11th", "22nd" for messages.

    >>> coalesce(Unset, 8080), coalesce(0, 8080)
    (8080, 0)
    >>> camelize("--dry-run")
    'dryRun'
    >>> ordinal(3), ordinal(42)
    ('third', '42nd')
"""
import functools
import re
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    There is exactly one instance; calling the type returns it. The marker is
    falsy, survives copy/deepcopy as itself, and takes part in PEP 604 unions
    so `isinstance(value, str | Unset)` reads naturally.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

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

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, otherwise `object` itself.

    Only the marker is replaced: None, 0, "" and False pass through.
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator giving the decorated callable a fixed __name__ and __qualname__.

    Used on methods built inside metaclasses so tracebacks and introspection
    show "__repr__" rather than a closure name.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("@rename() must be applied to a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _frozen(object):
    match object:
        case str():
            return object
        case Mapping():
            return MappingProxyType(object)
        case Set():
            return frozenset(object)
        case Sequence():
            return tuple(object)
    return object


def mirror(name, /):
    """
    Read-only property exposing the private attribute "_<name>".

    Lists come back as tuples, dicts as mapping proxies and sets as
    frozensets, so a declaration can never be altered through its public
    attributes.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")
    field = "_" + name

    @rename(name)
    def getter(self):
        return _frozen(getattr(self, field))

    return property(getter)


_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+|[^\W\d_A-Za-z]+")


@functools.cache
def camelize(name, /):
    """
    Camel-case a parameter name for the argument record.

    The name is split on non-word characters and underscores, then on case
    boundaries (acronym runs, capitalized words, digit runs). Every word is
    lowered and every word but the first gets a capital initial.

    - "--dry-run"   → "dryRun"
    - "--API-key"   → "apiKey"
    - "--HTTPPort"  → "httpPort"
    - "--userID"    → "userId"
    - "isEnabled"   → "isEnabled"
    - "max_retries" → "maxRetries"
    """
    if not isinstance(name, str):
        raise TypeError("camelize() argument must be a string")

    words = [word.lower() for word in _WORD.findall(name)]
    if not words:
        return ""
    head, *tail = words
    return head + "".join(word.capitalize() for word in tail)


_ORDINAL_WORDS = (
    "first",
    "second",
    "third",
    "fourth",
    "fifth",
    "sixth",
    "seventh",
    "eighth",
    "ninth",
    "tenth",
)


@functools.cache
def ordinal(number, /):
    """
    Ordinal label of a 1-based position: words up to ten, then "11th", "21st"...
    """
    if 1 <= number <= len(_ORDINAL_WORDS):
        return _ORDINAL_WORDS[number - 1]
    if number % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return "%d%s" % (number, suffix)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "camelize",
    "ordinal",
)
