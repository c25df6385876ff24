"""
Argvoy definitions: the declared schema of one command.

A Definition is built fresh for every run. The application creates an empty one,
then the configure hooks of the root and of every command on the resolved path
populate it in order. The schema-aware tokenizer and the mapper both read it.

Invariants (violations raise ConfigurationError when declaring)
- every option spelling maps to exactly one Option; spellings are never shared.
- a spelling keeps a single value mode (guaranteed by one Option per spelling).
- options without a value mode are bound to flag-capable adapters.
- argument names are unique and required arguments precede optional ones.

Lookups are exact: "na" never finds "--name".
"""
import logging

from .arguments import Argument, Option, ValueMode, parse_argument_spec, parse_option_spec
from .faults import ConfigurationError
from .utils import Unset, dashed
from .values import SupportsFlagValue

logger = logging.getLogger(__name__)


class Definition:
    """
    Ordered argument slots plus a mapping from every option spelling to its Option.

    Example
        >>> name = StringValue("World")
        >>> definition = Definition()
        >>> option = definition.add_option(name, "-n, --name[=NAME]", "Provide a name for the greeting.")
        >>> definition.option("n") is definition.option("name")
        True
    """

    def __init__(self):
        self._arguments = []
        self._options = {}

    @property
    def arguments(self):
        return tuple(self._arguments)

    @property
    def options(self):
        """
        Unique options in declaration order (each listed once, whatever its spellings).
        """
        return tuple(dict.fromkeys(self._options.values()))

    def add_argument(self, value, spec, descr=Unset, /):
        """
        Declare a positional argument slot.

        Parameters
        - value: value adapter receiving the argument.
        - spec: "NAME" (required) or "[NAME]" (optional).
        - descr: short description for help.

        Returns
        - Argument: the created slot.
        """
        name, required = parse_argument_spec(spec)

        if any(argument.name == name for argument in self._arguments):
            raise ConfigurationError(f"argument {name!r} is already defined")
        if required and any(not argument.required for argument in self._arguments):
            raise ConfigurationError(f"required argument {name!r} cannot follow an optional argument")

        self._arguments.append(argument := Argument(name, value, descr, required=required))
        logger.debug("defined argument %s (required=%s)", name, required)
        return argument

    def add_option(self, value, spec, descr=Unset, /, *, env=Unset):
        """
        Declare an option under one or more spellings.

        Parameters
        - value: value adapter receiving the option value.
        - spec: spec string such as "-n, --name[=NAME]" (see parse_option_spec).
        - descr: short description for help.
        - env: environment variable to fall back on. when omitted it is derived
          from the long spelling of a value-required option (other modes get
          none); disabled with None.

        Returns
        - Option: the created slot (shared by all spellings).
        """
        names, mode, metavar = parse_option_spec(spec)

        for name in names:
            if name not in self._options:
                continue
            if self._options[name].mode is not mode:
                raise ConfigurationError(f"option {dashed(name)!r} is already defined with a different value mode")
            raise ConfigurationError(f"option {dashed(name)!r} is already defined")

        if mode is ValueMode.NONE and not isinstance(value, SupportsFlagValue):
            raise ConfigurationError(
                f"option {spec!r} takes no value, so its adapter must provide a flag value"
            )

        option = Option(names, mode, value, descr, metavar=metavar, env=env)
        for name in names:
            self._options[name] = option
        logger.debug("defined option %s (mode=%s, env=%s)", ", ".join(option.spellings), mode.name, option.env)
        return option

    def option(self, name, default=None, /):
        """
        Exact lookup of an option by bare spelling ("n", "name").
        """
        return self._options.get(name, default)

    def argument(self, name, default=None, /):
        for argument in self._arguments:
            if argument.name == name:
                return argument
        return default

    def __contains__(self, name):
        return name in self._options

    def __repr__(self):
        return "definition(arguments=%r, options=%r)" % (self.arguments, self.options)


__all__ = (
    "Definition",
)
