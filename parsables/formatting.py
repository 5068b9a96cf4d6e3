"""
Parsables help formatting: the catalogue of commands and per-command detail.

What this module provides
- summary(registry, columns=None): an "Available commands:" listing, sorted by
  name, with names padded to a shared column and abstracts word-wrapped to
  the given width.
- detail(command, columns=None): the command's own help text, rendered with the
  same width hint as the summary.
- wrap(words, width, offset=0, indent=0): the word packer shared by both
  renderers (and by the bundled command help).

Layout of a summary entry
    "  " + name.ljust(width) + "  " + abstract
where width is the longest name, clamped to half of the columns. Wrapped lines
start under the first character of the abstract.
"""
HEADER = "Available commands:\n"

# Leading spaces before a name, and spaces between the name column and the abstract.
INDENT = 2
GAP = 2


def _validate_columns(columns, caller):
    if columns is None:
        return
    if isinstance(columns, bool) or not isinstance(columns, int):
        raise TypeError(f"{caller}() 'columns' must be an integer")
    if columns < 1:
        raise ValueError(f"{caller}() 'columns' must be a positive integer")


def wrap(words, width, /, offset=0, indent=0):
    """
    pack words into lines that do not exceed width.

    parameters
    - words: Iterable[str]
      the words to pack, in order (already split).
    - width: int | None
      the total line width; None means unbounded (a single line).
    - offset: int
      columns already used on the first line by whatever precedes it.
    - indent: int
      leading spaces of every continuation line (included in the returned text).

    returns
    - list[str]: at least one line; the first line carries no leading padding.

    behavior
    - a word is appended to the current line while the line stays within width;
      otherwise a new, indented line is started.
    - a word that does not fit even on a line of its own is placed anyway, so
      only a line holding a single word may exceed width.
    """
    lines = []
    current = None
    length = offset

    for word in words:
        if current is None:
            current, length = word, offset + len(word)
        elif width is None or length + 1 + len(word) <= width:
            current += " " + word
            length += 1 + len(word)
        else:
            lines.append(current)
            current, length = " " * indent + word, indent + len(word)

    lines.append(current if current is not None else "")
    return lines


def summary(registry, columns=None, /):
    """
    Render the list of available commands.

    parameters
    - registry: Iterable of command descriptors (name + abstract).
    - columns: positive int | None
      total line width; None means unbounded (nothing is wrapped).

    returns
    - str: the header line followed by one entry per command, sorted by name;
      every entry (including each wrapped continuation) ends with a newline.
    """
    _validate_columns(columns, "summary")

    commands = sorted(registry, key=lambda command: command.name)
    width = max((len(command.name) for command in commands), default=0)
    if columns is not None:
        width = min(width, columns // 2)

    entries = [HEADER]
    for command in commands:
        prefix = " " * INDENT + command.name.ljust(width) + " " * GAP
        abstract = str(command.abstract or "")

        if columns is None or len(prefix) + len(abstract) <= columns:
            lines = [abstract]
        else:
            lines = wrap(abstract.split(), columns, len(prefix), INDENT + width + GAP)

        lines[0] = prefix + lines[0]
        entries.append("".join(line.rstrip() + "\n" for line in lines))

    return "".join(entries)


def detail(command, columns=None, /):
    """
    Render the detailed help of a single command.

    The layout belongs to the command itself (see the descriptor's help());
    this only forwards the same width hint the summary uses.
    """
    _validate_columns(columns, "detail")
    return command.help(columns)


__all__ = (
    "summary",
    "detail",
    "wrap",
)
