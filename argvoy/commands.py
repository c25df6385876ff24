"""
Argvoy command layer: command trees, resolution and the application pipeline.

What this module provides
- Command: one node of the command tree, configured by two hooks:
  • configure(definition): declares the node's arguments and options.
  • execute(input, output): runs once the input was mapped successfully.
- resolve(root, argv): walks the tree along the raw argument vector.
- Output: text sink handed to execute hooks, plus the exit-code holder.
- Application: the root node; run(argv, env) wires resolve → configure → parse →
  help/version → map → execute and turns every outcome into an ExitCode.

Quick start
    from argvoy import Application, Command, StringValue

    name = StringValue("World")

    greet = Command(
        "greet",
        descr="Greet the given user, or the world.",
        configure=lambda definition: definition.add_option(
            name, "-n, --name[=NAME]", "Provide a name for the greeting."
        ),
        execute=lambda input, output: output.print(f"Hello, {name.value}!"),
    )

    application = Application("greeter", "0.1.0", commands=[greet])

    if __name__ == "__main__":
        raise SystemExit(application.run())

Design notes
- Resolution is positional and greedy: the first sibling (in declaration order)
  whose name or alias equals the token wins, the deepest match wins, and there is
  no backtracking.
- A fresh Definition is built for every run; the configure hooks of the root and of
  every node on the resolved path are applied in that order, so root options are
  shared by the whole tree.
- Faults are surfaced through trigger(): with shell=True (the default for
  applications) they are rendered and run() returns a code; with shell=False they
  propagate to the caller.
"""
import logging
import os.path
import re
import sys
from collections import namedtuple
from enum import IntEnum

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from . import faults
from .definition import Definition
from .faults import *
from .help import render_help, render_version
from .mapping import map_input
from .parsing import parse_input
from .utils import *
from .values import BoolValue

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """
    outcome of Application.run().
    """
    SUCCESS = 0
    EXECUTION_FAILED = 1
    HELP_SHOWN = 2
    MAPPING_FAILED = 3


class CommandType(type):
    """
    Metaclass exposing __introspectable__ fields as read-only properties.

    - every name in __introspectable__ becomes a property mirroring "_<name>".
    - __displayable__ narrows the fields listed by __repr__/__rich_repr__.
    - __typename__ is derived from the class name for use in messages.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, /, *, field="name"):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif not name or name.startswith("-") or any(char.isspace() for char in name):
        raise ConfigurationError(f"{cls.__typename__} {field} {name!r} must be a non-empty word not starting with '-'")
    return name


def _sanitize_text(cls, text, /, *, field):
    if not isinstance(text, str | Text | Unset):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif isinstance(text, str) and not (text := text.strip()):
        raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
    return coalesce(text)


def _sanitize_hook(cls, hook, /, *, field):
    if hook is not Unset and not callable(hook):
        raise TypeError(f"{cls.__typename__} {field!r} must be callable")
    return coalesce(hook)


class Command(metaclass=CommandType):
    """
    Node of the command tree.

    Parameters
    - name: word matched against the raw token at this node's depth.
    - alias: alternative word matched the same way (optional).
    - descr: one-line description shown in the parent's command table.
    - help: longer help text shown in this node's own help.
    - configure: callable(definition) declaring arguments and options.
    - execute: callable(input, output); nodes without one only group children.
    - commands: iterable of child commands, added with add_command().

    Invariants
    - names and aliases are unique among siblings (ConfigurationError otherwise).
    - a command belongs to at most one parent.
    """

    __introspectable__ = (
        "name",
        "alias",
        "descr",
        "help",
        "configure",
        "execute",
        "parent",
        "children",
    )

    __displayable__ = (
        "name",
        "alias",
        "descr",
        "children",
    )

    def __init__(
            self,
            name,
            /,
            alias=Unset,
            descr=Unset,
            help=Unset,
            configure=Unset,
            execute=Unset,
            commands=(),
    ):
        self._name = _sanitize_name(type(self), name)
        self._alias = None if alias is Unset else _sanitize_name(type(self), alias, field="alias")
        self._descr = _sanitize_text(type(self), descr, field="descr")
        self._help = _sanitize_text(type(self), help, field="help")
        self._configure = _sanitize_hook(type(self), configure, field="configure")
        self._execute = _sanitize_hook(type(self), execute, field="execute")
        self._parent = None
        self._children = []

        for command in commands:
            self.add_command(command)

    @property
    def root(self):
        """
        Return the topmost command in the current command hierarchy.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the full ancestry from root to this command as a tuple of nodes.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    def matches(self, token, /):
        """
        Whether a raw token selects this command (by name or alias).
        """
        return token == self._name or (self._alias is not None and token == self._alias)

    def add_command(self, command, /):
        """
        Attach a child command and return it.

        Raises
        - TypeError: command is not a Command.
        - ConfigurationError: the child already has a parent, or its name/alias
          collides with the name or alias of a sibling.
        """
        if not isinstance(command, Command):
            raise TypeError(f"{type(self).__typename__} child must be a command")
        if command.parent is not None or command is self:
            raise ConfigurationError(f"command {command.name!r} is already attached to a parent")

        words = {command.name, command.alias} - {None}
        for sibling in self._children:
            if clash := words & ({sibling.name, sibling.alias} - {None}):
                typeof = "subcommand" if self.parent else "command"
                raise ConfigurationError(f"{typeof} name {clash.pop()!r} is already in use under {self.name!r}")

        command._parent = self
        self._children.append(command)
        return command

    def command(self, name, /, **options):
        """
        Create a child command from the given options, attach it and return it.
        """
        return self.add_command(Command(name, **options))


class Resolution(namedtuple("Resolution", ("command", "path"))):
    """
    Result of resolve(): the matched node (None when nothing matched) and the
    names consumed from the argument vector to reach it.
    """
    __slots__ = ()

    def remainder(self, argv, /):
        """
        The argument vector without the consumed command path.
        """
        return list(argv)[len(self.path):]


def resolve(root, argv, /):
    """
    Find the command selected by the leading tokens of argv.

    Walk
    - at depth d, the children of the current node are scanned in declaration
      order; the first whose name or alias equals argv[d] is entered.
    - a deeper match wins over the node matched at the current depth.
    - no match at depth 0 (or an empty argv) yields Resolution(None, ()).

    Parameters
    - root: Command whose children are matched against argv[0].
    - argv: Iterable[str], raw arguments excluding the program name.
    """
    argv = list(argv)

    def descend(node, depth):
        if depth >= len(argv):
            return None, ()
        for child in node.children:
            if child.matches(argv[depth]):
                deeper, path = descend(child, depth + 1)
                return (deeper, (child.name, *path)) if deeper is not None else (child, (child.name,))
        return None, ()

    command, path = descend(root, 0)
    logger.debug("resolved %r to %s", argv, " ".join(path) or "no command")
    return Resolution(command, path)


class Output:
    """
    Side channel handed to execute hooks.

    - print(*objects, **options): rich-rendered output (markup, highlighting).
    - write(text): raw text, written as-is without a trailing newline.
    - code: exit code reported by run() when execution succeeds.
    """

    def __init__(self, console=Unset, /):
        self._console = Console() if console is Unset else console
        self.code = ExitCode.SUCCESS

    console = mirror("console")

    def print(self, *objects, **options):
        self._console.print(*objects, **options)

    def write(self, text, /):
        if not isinstance(text, str):
            raise TypeError("Output.write() argument must be a string")
        self._console.out(text, end="", highlight=False)


class Application(Command):
    """
    Root of a command tree, and the entry point of a console program.

    Parameters (in addition to Command's)
    - version: version string; enables "-v, --version" when given.
    - usage: program name in usage lines and hints, defaults to basename(sys.argv[0]).
    - logo: text printed above the help of the root.
    - shell: render faults instead of raising them (run() returns a code).
    - colorful, fancy: rendering flags for help and faults.
    - strict: treat options unknown to the definition as errors.
    - verbose: attach a rich logging handler to the package logger.
    - console: rich console for help, version and faults (stderr by default).
    """

    __introspectable__ = Command.__introspectable__ + (
        "version",
        "usage",
        "logo",
        "shell",
        "colorful",
        "fancy",
        "strict",
        "verbose",
        "console",
    )

    __displayable__ = (
        "name",
        "version",
        "usage",
        "children",
        "shell",
        "colorful",
        "fancy",
        "strict",
    )

    def __init__(
            self,
            name,
            version=Unset,
            /,
            usage=Unset,
            descr=Unset,
            help=Unset,
            logo=Unset,
            configure=Unset,
            execute=Unset,
            commands=(),
            *,
            shell=True,
            colorful=False,
            fancy=False,
            strict=False,
            verbose=False,
            console=Unset,
    ):
        super().__init__(name, descr=descr, help=help, configure=configure, execute=execute, commands=commands)
        self._version = _sanitize_text(type(self), version, field="version")
        self._usage = _sanitize_text(type(self), coalesce(usage, os.path.basename(sys.argv[0]) or name), field="usage")
        self._logo = _sanitize_text(type(self), logo, field="logo")
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._strict = bool(strict)
        self._verbose = bool(verbose)
        self._console = coalesce(console, faults.console)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this application's rendering context.
        """
        trigger(
            fault,
            tool=self,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
            console=self.console,
            **options,
        )

    def _hint(self, resolution):
        route = " ".join((self.usage, *resolution.path))
        return f"try '{route} --help' for more information"

    def _definition(self, resolution):
        """
        Build a fresh definition from the configure hooks along the resolved path,
        then add the built-in help/version options under their free spellings.
        """
        definition = Definition()
        for node in (resolution.command or self).path:
            if node.configure is not None:
                node.configure(definition)

        builtins = {}
        if spellings := [name for name in ("h", "help") if name not in definition]:
            definition.add_option(
                BoolValue(), ", ".join(map(dashed, spellings)), "show this help message and exit", env=None
            )
            builtins["help"] = spellings
        if self.version and (spellings := [name for name in ("v", "version") if name not in definition]):
            definition.add_option(
                BoolValue(), ", ".join(map(dashed, spellings)), "show this version message and exit", env=None
            )
            builtins["version"] = spellings
        return definition, builtins

    def _logging(self):
        package = logging.getLogger(__package__)
        if self.verbose and not any(isinstance(handler, RichHandler) for handler in package.handlers):
            package.addHandler(RichHandler(console=self.console, show_path=False))
            package.setLevel(logging.DEBUG)

    def run(self, argv=Unset, env=Unset, /, *, output=Unset):
        """
        Run the application against an argument vector and an environment snapshot.

        Parameters
        - argv: arguments excluding the program name; defaults to sys.argv[1:].
        - env: mapping or "KEY=VALUE" strings; defaults to os.environ.
        - output: Output handed to the execute hook; a stdout one by default.

        Returns
        - ExitCode.SUCCESS (or output.code as set by the command) on success,
          HELP_SHOWN when help/version was displayed or no runnable command was
          selected, MAPPING_FAILED on invalid input, EXECUTION_FAILED when the
          command raised.

        Raises
        - CommandException subclasses when shell=False.
        """
        argv = list(coalesce(argv, sys.argv[1:]))
        env = environ(coalesce(env, os.environ))
        output = Output() if output is Unset else output
        self._logging()

        resolution = resolve(self, argv)
        command = resolution.command or self
        remainder = resolution.remainder(argv)

        definition, builtins = self._definition(resolution)
        input = parse_input(remainder, definition)

        if any(name in input for name in builtins.get("help", ())):
            render_help(self, resolution, definition, self.console)
            return ExitCode.HELP_SHOWN

        if any(name in input for name in builtins.get("version", ())):
            render_version(self, self.console)
            return ExitCode.HELP_SHOWN

        if command.execute is None:
            if (word := input.argument(0)) is not None:
                self.trigger(UnknownCommandError(
                    f"unknown command {word!r}",
                    title="unknown command",
                    code=FaultCode.UNKNOWN_COMMAND,
                    input=word,
                    hint=self._hint(resolution),
                ))
            render_help(self, resolution, definition, self.console)
            return ExitCode.HELP_SHOWN

        try:
            extras = map_input(definition, input, env, strict=self.strict)
        except CommandException as fault:
            self.trigger(fault, hint=self._hint(resolution))
            return ExitCode.MAPPING_FAILED

        if extras:
            logger.debug("passing %d extra arguments through to %s", len(extras), command.name)

        try:
            command.execute(input, output)
        except CommandException as fault:
            self.trigger(fault, hint=self._hint(resolution))
            return ExitCode.EXECUTION_FAILED
        except Exception as error:
            logger.debug("command %s failed", command.name, exc_info=True)
            self.trigger(ExecutionError(
                str(error) or type(error).__name__,
                title="execution failed",
                code=FaultCode.EXECUTION_FAILED,
                hint=self._hint(resolution),
                error=error,
            ))
            return ExitCode.EXECUTION_FAILED

        return output.code


__all__ = (
    "ExitCode",
    "Command",
    "Resolution",
    "resolve",
    "Output",
    "Application",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del CommandType
