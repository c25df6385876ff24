"""
Argvoy mapping: bind a token stream onto the value adapters of a definition.

phases
- options: every option token is looked up by exact spelling. unknown spellings are
  ignored (or rejected when strict). known ones are converted with the adapter's
  parse(); a bare option takes the adapter's flag value when it has one. repeated
  options follow last-one-wins.
- fallback: declared options that received no token are looked up in the environment
  snapshot under their env name, which only value-required options get implicitly;
  value-required options still missing afterwards are an error.
- arguments: positional tokens fill argument slots strictly by position; missing
  required slots are an error, extra tokens are returned to the caller unconsumed.
- commit: only once every step above succeeded are the converted values stored in
  the adapters, so a failing run never leaves a half-applied bind behind.

errors (fail-fast, the first failure is raised)
- UnknownOptionError (strict mode only), MissingValueError, ConversionError,
  MissingOptionError, MissingArgumentError.
"""
import logging

from .arguments import ValueMode
from .faults import *
from .utils import Unset, dashed, environ, ordinal
from .values import SupportsFlagValue

logger = logging.getLogger(__name__)


def _convert(adapter, raw, /, *, subject, origin):
    """
    parse raw with the adapter; wrap adapter failures into a ConversionError.
    """
    try:
        return adapter.parse(raw)
    except ValueError as error:
        raise ConversionError(
            "invalid value %r for %s: %s" % (raw, origin, error),
            title="invalid value",
            code=FaultCode.CONVERSION_FAILED,
            input=subject,
            value=raw,
            reason=str(error),
        ) from error


def map_input(definition, input, env=Unset, /, *, strict=False):
    """
    validate and bind an input token stream against a definition.

    parameters
    - definition: Definition holding the argument slots and options.
    - input: Input produced by parse_input(argv, definition).
    - env: environment snapshot (mapping or "KEY=VALUE" strings) for option fallback.
    - strict: when True, options unknown to the definition raise UnknownOptionError;
      otherwise they are ignored and left for the executing command to inspect.

    returns
    - list[str]: positional arguments beyond the declared slots.

    raises
    - CommandException subclasses, see the module docstring.
    """
    env = environ(env)
    pending = {}
    supplied = set()

    for token in input.options:
        if (option := definition.option(token.name)) is None:
            if strict:
                raise UnknownOptionError(
                    "unknown option %r" % dashed(token.name),
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    input=dashed(token.name),
                )
            logger.debug("ignoring unknown option %s", dashed(token.name))
            continue

        supplied.add(option)
        raw = token.value

        if raw is None:
            if option.mode is ValueMode.REQUIRED:
                raise MissingValueError(
                    "option %r requires a value" % dashed(token.name),
                    title="missing option value",
                    code=FaultCode.MISSING_OPTION_VALUE,
                    input=dashed(token.name),
                )
            if not isinstance(option.value, SupportsFlagValue):
                # optional value omitted: the adapter keeps its current value
                continue
            raw = option.value.flagvalue()

        pending[option.value] = _convert(
            option.value, raw, subject=dashed(token.name), origin="option %r" % dashed(token.name)
        )

    for option in definition.options:
        if option in supplied:
            continue
        if option.env is not None and option.env in env:
            logger.debug("option %s falls back on environment variable %s", option.canonical, option.env)
            pending[option.value] = _convert(
                option.value,
                env[option.env],
                subject=option.canonical,
                origin="option %r (from environment variable %s)" % (option.canonical, option.env),
            )
        elif option.mode is ValueMode.REQUIRED:
            raise MissingOptionError(
                "missing required option %r" % option.canonical,
                title="missing option",
                code=FaultCode.MISSING_OPTION,
                input=option.canonical,
                env=option.env,
            )

    values = [token.value for token in input.arguments]

    for index, argument in enumerate(definition.arguments):
        if index >= len(values):
            if not argument.required:
                break
            raise MissingArgumentError(
                "missing required argument %r (%s positional argument)" % (argument.name, ordinal(index + 1)),
                title="missing argument",
                code=FaultCode.MISSING_ARGUMENT,
                input=argument.name,
                index=index,
            )
        pending[argument.value] = _convert(
            argument.value, values[index], subject=argument.name, origin="argument %r" % argument.name
        )

    for adapter, value in pending.items():
        adapter.value = value

    extras = values[len(definition.arguments):]
    logger.debug("bound %d values, %d extra arguments", len(pending), len(extras))
    return extras


__all__ = (
    "map_input",
)
