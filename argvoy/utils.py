"""
Argvoy utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the definition, parsing, mapping and command
  layers so every layer agrees on sentinels and on how option names are spelled.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- dashed(name)
  • Render a bare option spelling with its command-line prefix ("n" → "-n", "name" → "--name").

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as an immutable view.

- environ(env)
  • Normalize an environment snapshot (mapping or "KEY=VALUE" strings) into a read-only mapping.

Usage guidance
- Prefer Unset for API defaults when None is a meaningful user value; materialize with coalesce().
- Never read os.environ from library code: snapshots are passed in and normalized with environ().
"""
import functools
from collections.abc import Iterable, Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    This returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0, "" or [] are
    preserved as-is; they are not treated as “unset”.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def dashed(name, /):
    """
    Render a bare option spelling the way a user types it.

    Single-character spellings are short options ("-n"); anything longer is a
    long option ("--name"). The tokenizer strips these prefixes, so faults and
    help output use this helper to put them back.
    """
    if not isinstance(name, str):
        raise TypeError("dashed() argument must be a string")
    return ("-" if len(name) == 1 else "--") + name


def environ(env=Unset, /):
    """
    Normalize an environment snapshot into a read-only mapping.

    Accepted shapes
    - Unset: an empty environment (the library never reads os.environ itself).
    - Mapping[str, str]: used as-is.
    - Iterable[str]: "KEY=VALUE" entries, as found in a raw process environment
      block; entries without '=' are ignored, and later keys override earlier ones.

    Raises
    - TypeError: when env is none of the above or holds non-string entries.
    """
    if env is Unset:
        return MappingProxyType({})
    if isinstance(env, Mapping):
        return MappingProxyType(dict(env))
    if isinstance(env, str) or not isinstance(env, Iterable):
        raise TypeError("environment must be a mapping or an iterable of 'KEY=VALUE' strings")

    snapshot = {}
    for entry in env:
        if not isinstance(entry, str):
            raise TypeError("environment entries must be strings")
        key, separator, value = entry.partition("=")
        if separator and key:
            snapshot[key] = value
    return MappingProxyType(snapshot)


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads from an attribute named "_{name}" on the
    instance and returns a read-only view for container types to discourage
    accidental mutation through the public API:
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - other types       → returned as-is

    Example
    - Given self._names, declare names = mirror("names") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth") for nicer phrasing in messages.
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


__all__ = (
    # Functions
    "coalesce",
    "dashed",
    "environ",
    "mirror",
    "ordinal",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
