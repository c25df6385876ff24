"""
Argvoy help and version renderers (rich-based, color-aware).

Help layout (for the deepest resolved command, or the root when none resolved)
- logo (root help only)
- usage line: program name, command path, "[options]", argument slots and a
  "<command>" placeholder when the node has children.
- help text (falls back to the one-line description).
- commands table for the node's children (name, alias, description).
- arguments and options sections, one row per slot; options list every spelling,
  their value display name and the environment variable they fall back on.

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Styles only apply when the application is colorful; fancy wraps the output in a panel.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import ValueMode


def _palette(colorful, defaults, /):
    """
    Build the (styler, text) pair shared by the renderers.
    """
    styles = defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        # Normalize to Text; in non-colorful mode strip styles.
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment.copy()
        return Text(str(fragment), style)

    return styler, text


def render_help(application, resolution, definition, console, /):
    """
    Print contextual help for a resolved command.

    Parameters
    - application: Application providing usage, logo and rendering flags.
    - resolution: Resolution from resolve(); the root is described when it holds no command.
    - definition: Definition built for this run (arguments and options to list).
    - console: rich Console to print to.
    """
    styler, text = _palette(application.colorful, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "command-path": "bold #36C5F0",
        "usage-section": "#36C5F0",
        "description-section": "italic #A3A3A3",
        "logo": "bold #FF4D94",

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",
        "argument-name": "bold #FFD600",
        "argument-description": "#9CA3AF",
        "option-name": "bold #00E6FF",
        "flag-name": "bold #22C55E",
        "metavar": "bold #FFD600",
        "environment": "dim #9CA3AF",

        # === Children table ===
        "children-title": "bold #FFFFFF",
        "children-table": "#4B5563",
        "children": "bold #36C5F0",
        "children-description": "#9CA3AF",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    })

    command = resolution.command or application
    renders = []

    if application.logo and resolution.command is None:
        renders.append(text(application.logo, styler("logo")).append("\n"))

    # Usage line: program, path, then the input shape
    usage = Text()
    usage.append("usage", styler("usage-label")).append(": ")
    usage.append(text(application.usage, styler("program-name")))
    for name in resolution.path:
        usage.append(" ").append(text(name, styler("command-path")))
    if definition.options:
        usage.append(" ").append(text("[options]", styler("usage-section")))
    for argument in definition.arguments:
        usage.append(" ").append(text(argument.name if argument.required else f"[{argument.name}]", styler("argument-name")))
    if command.children:
        usage.append(" ").append(text("<command>", styler("usage-section")))
    renders.append(usage.append("\n"))

    if about := command.help or command.descr:
        renders.append(text(about, styler("description-section")).append("\n"))

    if command.children:
        typeof = "subcommands" if command.parent else "commands"
        table = Table(
            "name", "help",
            title=text(typeof, styler("children-title")),
            box=ROUNDED,
            style=styler("children-table"),
            header_style=styler("children-title"),
        )
        for child in command.children:
            name = text(child.name, styler("children"))
            if child.alias:
                name.append(", ").append_text(text(child.alias, styler("children")))
            if child.descr:
                descr = text(child.descr, styler("children-description"))
            else:
                route = " ".join((application.usage, *resolution.path, child.name))
                descr = text(f"no description, run '{route} --help' for details", styler("children-description"))
            table.add_row(name, descr)
        renders.append(table)

    if definition.arguments:
        grid = Table.grid(padding=(0, 4))
        grid.add_column(no_wrap=True)
        grid.add_column()
        for argument in definition.arguments:
            grid.add_row(
                Text("  ").append_text(text(argument.name, styler("argument-name"))),
                text(argument.descr, styler("argument-description")),
            )
        renders.append(Group(text("arguments", styler("group-label")).append(":"), grid, Text("")))

    if options := definition.options:
        grid = Table.grid(padding=(0, 4))
        grid.add_column(no_wrap=True)
        grid.add_column()
        for option in options:
            style = styler("flag-name" if option.mode is ValueMode.NONE else "option-name")
            names = Text("  ").append_text(Text(", ").join(text(spelling, style) for spelling in option.spellings))
            if option.mode is ValueMode.OPTIONAL:
                names.append("[=").append_text(text(option.metavar, styler("metavar"))).append("]")
            elif option.mode is ValueMode.REQUIRED:
                names.append("=").append_text(text(option.metavar, styler("metavar")))

            descr = text(option.descr, styler("argument-description"))
            if option.env:
                descr.append(" " if descr else "").append_text(text(f"[env: {option.env}]", styler("environment")))
            grid.add_row(names, descr)
        renders.append(Group(text("options", styler("group-label")).append(":"), grid))

    renderable = Group(*renders)

    if application.fancy:
        route = " ".join((application.name, *resolution.path))
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{route} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    console.print(renderable)


def render_version(application, console, /):
    """
    Print "<name> — <version>" for the application.
    """
    styler, text = _palette(application.colorful, {
        "program-name": "bold #FF4D94",
        "program-version": "bold #00E6FF",
        "panel-title": "bold #FF4D94",
    })

    renderable = Text(" — ").join((
        text(application.name, styler("program-name")),
        text(application.version or "unknown", styler("program-version")),
    ))

    if application.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{application.name} VERSION".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    console.print(renderable)


__all__ = (
    "render_help",
    "render_version",
)
