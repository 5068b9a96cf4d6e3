"""
Parsables session context: what a running command gets as its first argument.

One Context per session, never shared. It carries
- the output sink (a rich Console), written verbatim by write()
- the done flag a command raises to end the session loop
- the column width used for help and error renderings
"""
from rich.console import Console
from rich.text import Text

from .faults import CommandException, full_message
from .utils import *


class Context:
    """
    Output sink and completion flag handed to every command.

    Construction
    - Context(console=Unset, *, columns=Unset)
      • console: a rich Console; a fresh one writing to stdout by default.
      • columns: fixed width for renderings; the console width by default.
    """

    def __init__(self, console=Unset, /, *, columns=Unset):
        if not isinstance(console := coalesce(console, Console()), Console):
            raise TypeError("context 'console' must be a rich console")
        if columns is not Unset and (isinstance(columns, bool) or not isinstance(columns, int)):
            raise TypeError("context 'columns' must be an integer")
        if columns is not Unset and columns < 1:
            raise ValueError("context 'columns' must be a positive integer")
        self._console = console
        self._columns = columns
        self.done = False

    @property
    def console(self):
        return self._console

    @property
    def columns(self):
        return coalesce(self._columns, self._console.width)

    def write(self, text, /):
        """
        Write text as-is: no markup, no highlighting, no newline added.
        """
        self._console.out(str(text), end="", highlight=False)

    def report(self, error, /):
        """
        Print a failure: faults through their rich rendering, anything else as
        "Error: ...".
        """
        if isinstance(error, CommandException):
            self._console.print(error, width=self.columns)
        else:
            self._console.print(Text(full_message(error, self.columns)), width=self.columns)

    def __repr__(self):
        return "context(columns=%r, done=%r)" % (self.columns, self.done)


__all__ = (
    "Context",
)
