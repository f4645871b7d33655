"""
Commandeer rendering: usage lines, command help, listings and the overview.

Every function returns a rich renderable (or a plain string for usage()) and
never prints; the dispatcher decides which console receives it.

Palette keys
- label, program-name, usage-section, description-section
- parameter, option, default, type-tag, category, command-name, command-description
- example, example-dot, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .commands import DEFAULT_CATEGORY
from .specs import Option, TypeTag

PARAMETER_COLUMN = 20
OPTION_COLUMN = 40

GLOBAL_OPTIONS = (
    Option("help", "h", "show help for a command"),
    Option("verbose", "v", "verbose output"),
    Option("quiet", "q", "reduce output"),
    Option("version", "V", "show version information"),
    Option("config", "c", "configuration file to use", value=True, metavar="file"),
)

SPECIAL_COMMANDS = (
    ("help [command]", "show help (for one command when given)"),
    ("list", "list every available command"),
    ("exit", "leave the interactive mode"),
)


def _palette(colorful):
    styles = defaultdict(str, {
        # === Head sections ===
        "label": "bold #00E6FF",  # CYAN → section labels
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Arguments ===
        "parameter": "bold #FFD600",  # AMBER for parameters
        "option": "bold #22C55E",  # GREEN for options
        "default": "#737373",
        "type-tag": "#9CA3AF",

        # === Listings ===
        "category": "bold #FFFFFF",
        "command-name": "bold #36C5F0",
        "command-description": "#9CA3AF",

        # === Examples ===
        "example-dot": "#22C55E dim",
        "example": "#E5E7EB",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def _framed(renders, title, *, colorful, fancy):
    styler, _ = _palette(colorful)
    renderable = Group(*renders)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", title.upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


def usage(command, /):
    """
    Return the usage line of command: its explicit usage, or the name followed
    by each parameter (<required> / [optional]) and "[options...]" when the
    command declares options.
    """
    if command.usage:
        return command.usage
    parts = [command.name, *(parameter.usage for parameter in command.parameters)]
    if command.options:
        parts.append("[options...]")
    return " ".join(parts)


def helper(command, /, *, detailed=False, colorful=False, fancy=False):
    """
    Render help for one command.

    An explicit help text is returned as-is unless detailed help is requested.
    Examples are shown only in detailed help.
    """
    styler, text = _palette(colorful)

    if command.help and not detailed:
        return _framed([text(command.help, styler("description-section"))], f"{command.name} help", colorful=colorful, fancy=fancy)

    head = Text()
    head.append(text("command", styler("label"))).append(": ").append(text(command.name, styler("program-name")))
    if command.aliases:
        head.append(" (aliases: ").append(", ".join(command.aliases)).append(")")
    for label, value in (
            ("description", command.descr),
            ("category", command.category if command.category != DEFAULT_CATEGORY else None),
            ("version", command.version),
            ("author", command.author),
    ):
        if value:
            head.append("\n").append(text(label, styler("label"))).append(": ").append(text(value, styler("description-section")))

    renders = [head, Text.assemble("\n", text("usage", styler("label")), ": ", text(usage(command), styler("usage-section")))]

    if command.parameters:
        section = Text.assemble("\n", text("parameters", styler("label")), ":")
        for parameter in command.parameters:
            line = Text("  ").append(text(parameter.usage.ljust(PARAMETER_COLUMN), styler("parameter")))
            if parameter.descr:
                line.append(" ").append(parameter.descr)
            if parameter.default:
                line.append(" ").append(text("[default: %s]" % parameter.default, styler("default")))
            if parameter.type is not TypeTag.STRING:
                line.append(" ").append(text("(%s)" % parameter.type, styler("type-tag")))
            section.append("\n").append(line)
        renders.append(section)

    if command.options:
        section = Text.assemble("\n", text("options", styler("label")), ":")
        for option in command.options:
            line = Text("  ").append(text(option.usage.ljust(OPTION_COLUMN), styler("option")))
            if option.descr:
                line.append(" ").append(option.descr)
            if option.default:
                line.append(" ").append(text("[default: %s]" % option.default, styler("default")))
            section.append("\n").append(line)
        renders.append(section)

    if command.examples and detailed:
        section = Text.assemble("\n", text("examples", styler("label")), ":")
        for example in command.examples:
            section.append("\n").append(text(" • ", styler("example-dot"))).append(text(example, styler("example")))
        renders.append(section)

    return _framed(renders, f"{command.name} help", colorful=colorful, fancy=fancy)


def listing(registry, /, *, by_category=True, colorful=False, fancy=False):
    """
    Render every registered command with its description.

    by_category groups names under their category (categories sorted, names in
    registration order); otherwise a single name-sorted list is shown.
    """
    styler, text = _palette(colorful)

    def row(name):
        command = registry.lookup(name)
        return Text.assemble(
            "  ",
            text(name.ljust(PARAMETER_COLUMN), styler("command-name")),
            " ",
            text(command.descr or "", styler("command-description")),
        )

    renders = [Text.assemble(text("available commands", styler("label")), ":")]

    if by_category:
        for category, names in sorted(registry.categories().items()):
            section = Text.assemble("\n", text(category, styler("category")), ":")
            for name in names:
                if name in registry.names():
                    section.append("\n").append(row(name))
            renders.append(section)
    else:
        renders.extend(row(name) for name in sorted(registry.names()))

    renders.append(Text("\nuse 'help <command>' to see the help of one command"))
    return _framed(renders, "commands", colorful=colorful, fancy=fancy)


def overview(options=GLOBAL_OPTIONS, /, *, prog="commandeer", colorful=False, fancy=False):
    """
    Render the global help: global options, special commands and usage hints.
    """
    styler, text = _palette(colorful)

    renders = [Text.assemble(text(prog, styler("program-name")), " - ", text("global help", styler("label")))]

    section = Text.assemble("\n", text("global options", styler("label")), ":")
    for option in options:
        section.append("\n").append(Text("  ").append(text(option.usage.ljust(OPTION_COLUMN), styler("option"))))
        if option.descr:
            section.append(" ").append(option.descr)
    renders.append(section)

    section = Text.assemble("\n", text("special commands", styler("label")), ":")
    for name, descr in SPECIAL_COMMANDS:
        section.append("\n").append(Text.assemble("  ", text(name.ljust(PARAMETER_COLUMN), styler("command-name")), " ", descr))
    renders.append(section)

    section = Text.assemble("\n", text("examples", styler("label")), ":")
    for example in (
            "help <command>                 show the help of a command",
            "<command> [arguments...] [options...]",
            "<command> -h | --help          help for a command",
    ):
        section.append("\n").append(text(" • ", styler("example-dot"))).append(text(example, styler("example")))
    renders.append(section)

    return _framed(renders, f"{prog} help", colorful=colorful, fancy=fancy)


__all__ = (
    "GLOBAL_OPTIONS",
    "usage",
    "helper",
    "listing",
    "overview",
)
