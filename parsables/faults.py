"""
Parsables faults (dispatch errors, binding errors) and their renderings.

Scope
- FaultCode: stable numeric identifiers for every user-facing failure, grouped
  by domain so logs and searches stay predictable.
- CommandException: base type carrying a message plus read-only options
  (code, title, hint, and any context the raiser wants to keep).
- ParserError and its closed set of dispatch failures:
  • NoCommandError: nothing to dispatch (blank line).
  • NoSuchCommandError: first token is not a registered command.
  • ArgumentBindingError: the matched command rejected its arguments; keeps
    the command and the original failure inspectable.
- BindingError and its subclasses: failures raised by the bundled binding
  engine (parsables.commands) while turning tokens into an invocation.
- message() / full_message(): the two renderings of any failure. They never
  raise; anything outside the taxonomy renders as "Error: ...".

Rendering
- Faults are rich renderables: an optional "[ code | title ]" header followed
  by the full message, wrapped to the console width.
- Palette entries can be overridden through a __styles__ mapping in __main__,
  and code labels through a __codes__ mapping in __main__.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (1110x): NO_COMMAND, NO_SUCH_COMMAND
    - switches (1111x): MALFORMED_TOKEN, UNKNOWN_SWITCH, FLAG_ASSIGNMENT,
      DUPLICATED_SWITCH, OPTION_VALUE_REQUIRED, INLINE_EXTRA_VALUES
    - values and positionals (1112x): UNEXPECTED_CARDINAL, NOT_ENOUGH_VALUES,
      INVALID_CHOICE, MISSING_CARDINALS
    - delegated (1113x): ARGUMENT_BINDING (wrapper), UNCASTABLE_VALUE
    """
    # --- routing errors ---
    NO_COMMAND                  = 11100
    NO_SUCH_COMMAND             = 11101

    # --- switch errors ---
    MALFORMED_TOKEN             = 11111
    UNKNOWN_SWITCH              = 11112
    FLAG_ASSIGNMENT             = 11113
    DUPLICATED_SWITCH           = 11115
    OPTION_VALUE_REQUIRED       = 11117
    INLINE_EXTRA_VALUES         = 11118

    # --- value/positional errors ---
    UNEXPECTED_CARDINAL         = 11121
    NOT_ENOUGH_VALUES           = 11122
    INVALID_CHOICE              = 11124
    MISSING_CARDINALS           = 11125

    # --- delegated errors ---
    ARGUMENT_BINDING            = 11130
    UNCASTABLE_VALUE            = 11131

    def normalize(self):
        """
        return a host-normalized label for this code.

        the host application can provide a __codes__ mapping in __main__ to
        relabel codes; without one, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    """
    Base type for every failure surfaced by this package.

    Attributes
    - message: the short, displayable message.
    - options: read-only mapping with rendering hints (code, title, hint) and
      any extra context (input, index, argument, ...).

    copy.replace(fault, **options) returns a copy with merged options.
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s message must be a string" % type(self).__name__)
        super().__init__(message)
        self._message = message
        self.options = MappingProxyType(options)

    @property
    def message(self):
        return self._message

    @property
    def full_message(self):
        return self.message

    def __str__(self):
        return self.message

    def __rich_console__(self, console, options):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        renders = []
        code, title = self.options.get("code"), self.options.get("title")
        if code is not None and title:
            renders.append(Text.assemble(
                "[ ",
                (code.normalize() if isinstance(code, FaultCode) else str(code), styles["code"]),
                " | ",
                (title.title(), styles["error-title"]),
                " ]",
            ))
        renders.append(Text(full_message(self, options.max_width), styles["error-message"]))
        if hint := self.options.get("hint"):
            renders.append(Text.assemble((" → ", styles["hint-arrow"]), (hint, styles["hint"])))

        yield Group(*renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        replica = copy.copy(self)
        replica.options = MappingProxyType(self.options | overrides)
        return replica


# ── Dispatch failures ────────────────────────────────────────────────────────


class ParserError(CommandException):
    """
    Base of the closed dispatch taxonomy (see NoCommandError,
    NoSuchCommandError, ArgumentBindingError).
    """


class NoCommandError(ParserError):
    """
    The token sequence was empty (for instance a blank line).

    Callers usually ignore it.
    """

    def __init__(self, **options):
        super().__init__("No command", **({"code": FaultCode.NO_COMMAND} | options))
        self.args = ()


class NoSuchCommandError(ParserError):
    """
    The first token did not match any registered command.
    """

    def __init__(self, name, /, **options):
        super().__init__("No such command: %s" % name, **({
            "code": FaultCode.NO_SUCH_COMMAND,
            "title": "no such command",
            "input": name,
        } | options))
        self.args = (name,)
        self.name = name


class ArgumentBindingError(ParserError):
    """
    The matched command failed to bind its arguments.

    Attributes
    - command: the descriptor that was matched.
    - error: the original failure raised by command.bind(...).

    Renderings are delegated to the command lazily, so nothing is stringified
    before someone asks for it.
    """

    def __init__(self, command, error, /, **options):
        # rendering hints follow the original failure; foreign errors get a generic header
        if isinstance(error, CommandException):
            inherited = {name: error.options.get(name) for name in ("code", "title", "hint")}
        else:
            inherited = {"code": FaultCode.ARGUMENT_BINDING, "title": "invalid arguments"}
        super().__init__(str(getattr(command, "name", command)), **(inherited | options))
        self.args = (command, error)
        self.command = command
        self.error = error

    @property
    def message(self):
        return message(self)

    @property
    def full_message(self):
        return full_message(self)


# ── Binding failures (raised by parsables.commands) ──────────────────────────


class BindingError(CommandException):
    """
    Base of every failure raised while binding tokens to a command.

    The "usage" option, when present, is appended by full_message.
    """

    @property
    def full_message(self):
        if usage := self.options.get("usage"):
            return "%s\n\n%s" % (self.message, usage)
        return self.message


class MalformedTokenError(BindingError): ...
class UnknownSwitchError(BindingError): ...
class FlagAssignmentError(BindingError): ...
class DuplicatedSwitchError(BindingError): ...
class OptionValueRequiredError(BindingError): ...
class InlineExtraValuesError(BindingError): ...
class UnexpectedCardinalError(BindingError): ...
class NotEnoughValuesError(BindingError): ...
class InvalidChoiceError(BindingError): ...
class MissingCardinalsError(BindingError): ...
class UncastableValueError(BindingError): ...


class HelpRequest(BindingError):
    """
    Not a mistake: the user asked for help (-h/--help).

    Both renderings are the help text itself.
    """

    @property
    def full_message(self):
        return self.message


# ── Renderers ────────────────────────────────────────────────────────────────


def message(error, /, columns=None):
    """
    short rendering of any failure, suitable for users.

    - ArgumentBindingError: the command's own short message for the original failure.
    - other CommandException: its message.
    - anything else: "Error: " followed by the error text.
    """
    match error:
        case ArgumentBindingError(command=command, error=underlying):
            try:
                return command.message(underlying, columns)
            except Exception:
                return "Error: %s" % underlying
        case CommandException():
            return error.message
        case _:
            return "Error: %s" % error


def full_message(error, /, columns=None):
    """
    full rendering of any failure: like message() but includes usage information
    for argument binding failures.
    """
    match error:
        case ArgumentBindingError(command=command, error=underlying):
            try:
                return command.full_message(underlying, columns)
            except Exception:
                return "Error: %s" % underlying
        case CommandException():
            return error.full_message
        case _:
            return "Error: %s" % error


__all__ = (
    "FaultCode",
    "CommandException",
    "ParserError",
    "NoCommandError",
    "NoSuchCommandError",
    "ArgumentBindingError",
    "BindingError",
    "MalformedTokenError",
    "UnknownSwitchError",
    "FlagAssignmentError",
    "DuplicatedSwitchError",
    "OptionValueRequiredError",
    "InlineExtraValuesError",
    "UnexpectedCardinalError",
    "NotEnoughValuesError",
    "InvalidChoiceError",
    "MissingCardinalsError",
    "UncastableValueError",
    "HelpRequest",
    "message",
    "full_message",
)
