r"""
Argvoy argument and option declarations.

Overview
- Slots
  • Argument: positional slot (name, description, value adapter, required or not).
  • Option: named slot shared by all of its spellings ("-n" and "--name"), with a
    value mode (none, optional, required), a value adapter, a display name for its
    value and an environment fallback variable.

- Spec grammar (the textual protocol exposed to configuration code)
  • options:   "-n, --name[=NAME]"  → spellings ("n", "name"), optional value shown as NAME
               "--port=PORT"        → required value
               "-v, --verbose"      → no value (adapter must be flag-capable)
  • arguments: "FILE"   → required slot
               "[FILE]" → optional slot

Validation highlights
- Short spellings are a single letter or digit after one dash; long spellings have
  at least two characters after two dashes and may use inner hyphens ("--dry-run").
- A value clause may be repeated on several spellings but must agree everywhere.
- Malformed specs raise ConfigurationError; they are programmer errors, not user input.

Quick example:
    >>> parse_option_spec("-n, --name[=NAME]")
    (('n', 'name'), <ValueMode.OPTIONAL: 0>, 'NAME')
    >>> parse_argument_spec("[FILE]")
    ('FILE', False)
"""
import re
from enum import IntEnum

from rich.text import Text

from .faults import ConfigurationError
from .utils import Unset, coalesce, dashed, mirror

_SPELLING = re.compile(
    r"(?:-(?P<short>[^\W_])|--(?P<long>[^\W_](?:-?[^\W_])+))"
    r"(?:\[=(?P<optional>[^\]\s]+)\]|=(?P<required>[^\[\]\s]+))?"
)
_ARGUMENT = re.compile(r"(?P<required>[^\W\d][\w-]*)|\[(?P<optional>[^\W\d][\w-]*)\]")


class ValueMode(IntEnum):
    """
    whether an option accepts no value, an optional value, or requires one.
    """
    NONE = -1
    OPTIONAL = 0
    REQUIRED = 1


class ArgumentType(type):
    """
    Metaclass wiring read-only properties and stable representations.

    - every name in __introspectable__ becomes a property mirroring "_<name>".
    - __repr__/__rich_repr__ list the introspectable fields for diagnostics.
    - __typename__ is derived from the class name for use in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join("%s=%r" % pair for pair in self.__rich_repr__())
            )
        self.__repr__ = __repr__

        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_descr(cls, descr, /):
    if not isinstance(descr, str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    return coalesce(descr)


def _sanitize_value(cls, value, /):
    if not callable(getattr(value, "parse", None)) or not callable(getattr(value, "set", None)):
        raise TypeError(f"{cls.__typename__} value must be a value adapter (parse/set/str)")
    return value


class Argument(metaclass=ArgumentType):
    """
    Positional argument slot.

    Arguments are bound strictly by position. Required slots must precede
    optional ones (enforced by Definition.add_argument).
    """

    __introspectable__ = (
        "name",
        "value",
        "descr",
        "required",
    )

    def __init__(self, name, value, /, descr=Unset, *, required=True):
        if not isinstance(name, str) or not name:
            raise TypeError(f"{type(self).__typename__} name must be a non-empty string")
        self._name = name
        self._value = _sanitize_value(type(self), value)
        self._descr = _sanitize_descr(type(self), descr)
        self._required = bool(required)


class Option(metaclass=ArgumentType):
    """
    Named option slot shared by every spelling that refers to it.

    Properties
    - names: bare spellings in declaration order (("n", "name")).
    - mode: ValueMode, fixed across all spellings.
    - metavar: display name of the value in help (None when mode is NONE).
    - env: environment variable consulted when no token was supplied (None disables it).
      derived from the long spelling for value-required options only; any other
      mode reads the environment only when given an explicit name.
    - canonical: preferred spelling for messages, the longest long name when there is one.
    """

    __introspectable__ = (
        "names",
        "mode",
        "value",
        "descr",
        "metavar",
        "env",
    )

    def __init__(self, names, mode, value, /, descr=Unset, *, metavar=None, env=Unset):
        if not names or not all(isinstance(name, str) and name for name in names):
            raise TypeError(f"{type(self).__typename__} must specify at least one non-empty name")
        if len(set(names)) != len(names):
            raise ConfigurationError(f"{type(self).__typename__} names cannot contain duplicates")
        if not isinstance(env, str | None | Unset):
            raise TypeError(f"{type(self).__typename__} 'env' must be a string or None")

        self._names = tuple(names)
        self._mode = ValueMode(mode)
        self._value = _sanitize_value(type(self), value)
        self._descr = _sanitize_descr(type(self), descr)
        self._metavar = metavar if self._mode is not ValueMode.NONE else None

        if env is Unset:
            # --db-host → DB_HOST; only value-required long options get an implicit variable
            longs = [name for name in self._names if len(name) > 1]
            implicit = self._mode is ValueMode.REQUIRED and longs
            env = max(longs, key=len).upper().replace("-", "_") if implicit else None
        self._env = env

    @property
    def canonical(self):
        return dashed(max(self._names, key=len))

    @property
    def spellings(self):
        """
        All spellings with their dashes, short ones first ("-n", "--name").
        """
        return tuple(map(dashed, sorted(self._names, key=len)))


def parse_option_spec(spec, /):
    """
    Parse an option spec string into (names, mode, metavar).

    Grammar
    - spec := spelling ("," spelling)*
    - spelling := "-" CHAR | "--" NAME, optionally followed by "[=VALUE]"
      (optional value) or "=VALUE" (required value).
    - whitespace around commas is ignored.

    Returns
    - tuple[tuple[str, ...], ValueMode, str | None]

    Raises
    - ConfigurationError: malformed spelling, duplicated spelling, or value
      clauses that disagree across spellings.
    """
    if not isinstance(spec, str):
        raise TypeError("option spec must be a string")

    names = []
    clauses = set()

    for part in spec.split(","):
        if not (match := _SPELLING.fullmatch(part := part.strip())):
            raise ConfigurationError(f"malformed option spelling {part!r} in spec {spec!r}")
        if (name := match["short"] or match["long"]) in names:
            raise ConfigurationError(f"option spelling {dashed(name)!r} is repeated in spec {spec!r}")
        names.append(name)

        if match["optional"]:
            clauses.add((ValueMode.OPTIONAL, match["optional"]))
        elif match["required"]:
            clauses.add((ValueMode.REQUIRED, match["required"]))

    if len(clauses) > 1:
        raise ConfigurationError(f"conflicting value modes in option spec {spec!r}")

    mode, metavar = clauses.pop() if clauses else (ValueMode.NONE, None)
    return tuple(names), mode, metavar


def parse_argument_spec(spec, /):
    """
    Parse an argument spec string into (name, required).

    "FILE" is required, "[FILE]" is optional.
    """
    if not isinstance(spec, str):
        raise TypeError("argument spec must be a string")
    if not (match := _ARGUMENT.fullmatch(spec.strip())):
        raise ConfigurationError(f"malformed argument spec {spec!r}")
    return (match["required"], True) if match["required"] else (match["optional"], False)


__all__ = (
    "ValueMode",
    "Argument",
    "Option",
    "parse_option_spec",
    "parse_argument_spec",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
