r"""
Argvoy input parsing: raw argument vectors into a token stream.

Token stream
- InputArgument(value): a positional token; order among arguments is preserved.
- InputOption(name, value): a named token; name is the bare spelling ("n", "name"),
  value is None when no value was supplied. The same name may appear several times.

Rules (applied left to right)
1. a literal "--" turns option interpretation off for the rest of the vector.
2. "--name[=value]" (longer than two characters) is a long option; the text is split
   once on '=' into name and value.
3. "-abc[=value]" (longer than one character) is a short-option cluster: every
   character but the last becomes its own valueless option, the last one receives
   the value of the '=' split ("-abc=x" → a, b, c=x).
4. anything else (including a lone "-") is a positional argument.

Two passes
- parse_input(argv): schema-free; used before any definition is known.
- parse_input(argv, definition): schema-aware; when the last option decoded from a
  token has no value, is declared value-required, and a next token exists, that next
  token is consumed verbatim as its value ("--name World" == "--name=World").
  Options missing from the definition are recorded but never consume a token.
"""
import logging
from collections import namedtuple

from .arguments import ValueMode
from .utils import Unset, dashed

logger = logging.getLogger(__name__)

InputArgument = namedtuple("InputArgument", ("value",))
InputOption = namedtuple("InputOption", ("name", "value"), defaults=(None,))


class Input:
    """
    The ordered token stream of one run, with lookup helpers.

    Properties
    - tokens: every token in input order.
    - arguments: InputArgument tokens only, in order.
    - options: InputOption tokens only, in order.
    """

    def __init__(self, tokens=(), /):
        self._tokens = tuple(tokens)

    @property
    def tokens(self):
        return self._tokens

    @property
    def arguments(self):
        return tuple(token for token in self._tokens if isinstance(token, InputArgument))

    @property
    def options(self):
        return tuple(token for token in self._tokens if isinstance(token, InputOption))

    def argument(self, index, default=None, /):
        """
        Value of the positional argument at index, or default when there is none.
        """
        try:
            return self.arguments[index].value
        except IndexError:
            return default

    def option(self, *names, default=None):
        """
        Value of the last option matching any of the given bare spellings.

        A matching option given without a value yields None; default is only
        returned when no option matches at all.
        """
        for token in reversed(self.options):
            if token.name in names:
                return token.value
        return default

    def __contains__(self, name):
        return any(token.name == name for token in self.options)

    def __iter__(self):
        return iter(self._tokens)

    def __len__(self):
        return len(self._tokens)

    def __eq__(self, other):
        if not isinstance(other, Input):
            return NotImplemented
        return self._tokens == other._tokens

    def __repr__(self):
        return "input(%s)" % " ".join(
            repr(token.value) if isinstance(token, InputArgument) else
            dashed(token.name) + ("" if token.value is None else "=" + repr(token.value))
            for token in self._tokens
        )


def _split_option(token, prefix, /):
    """
    Decode one option token ("--name=value", "-abc=x") into InputOption entries.
    """
    name, separator, value = token[len(prefix):].partition("=")
    value = value if separator else None

    if prefix == "--":
        return [InputOption(name, value)]

    # Folding: only the last character of a short cluster receives the value.
    options = [InputOption(char) for char in name[:-1]]
    options.append(InputOption(name[-1:], value))
    return options


def _classify(token, /):
    if len(token) > 2 and token.startswith("--"):
        return "--"
    if len(token) > 1 and token.startswith("-"):
        return "-"
    return None


def parse_input(argv, definition=Unset, /):
    """
    Tokenize an argument vector, optionally against a definition.

    Parameters
    - argv: Iterable[str], the arguments excluding the program name.
    - definition: Definition | Unset; when given, value-required options consume
      the following token as their value (see module docstring).

    Returns
    - Input: the ordered token stream.

    Raises
    - TypeError: when argv holds non-string items.
    """
    argv = list(argv)
    if not all(isinstance(token, str) for token in argv):
        raise TypeError("parse_input() argument must be an iterable of strings")

    tokens = []
    options = True
    index = 0

    # Not a for-loop: the cursor may skip a token consumed as an option value.
    while index < len(argv):
        token = argv[index]
        index += 1

        if options and token == "--":
            options = False
            continue

        if not options or not (prefix := _classify(token)):
            tokens.append(InputArgument(token))
            continue

        decoded = _split_option(token, prefix)
        last = decoded[-1]

        if definition is not Unset and last.value is None and index < len(argv):
            declared = definition.option(last.name)
            if declared is not None and declared.mode is ValueMode.REQUIRED:
                decoded[-1] = last._replace(value=argv[index])
                logger.debug("option %s consumed %r as its value", dashed(last.name), argv[index])
                index += 1

        tokens.extend(decoded)

    logger.debug("tokenized %d raw arguments into %d tokens", len(argv), len(tokens))
    return Input(tokens)


__all__ = (
    "InputArgument",
    "InputOption",
    "Input",
    "parse_input",
)
