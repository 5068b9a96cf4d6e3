"""
Parsables command layer: turn a Python callable into a command descriptor.

What this module provides
- Command: wraps a callback and satisfies the descriptor contract used by
  parsables.registry and parsables.dispatch:
  • name / abstract: identity and one-line description for the catalogue.
  • bind(tokens): parse the argument tokens into an Invocation, or raise a
    BindingError explaining what went wrong.
  • help(columns) / synopsis(columns): plain-text help and usage line.
  • message(error, columns) / full_message(error, columns): how this command
    wants its own failures rendered.
- Invocation: the result of a successful bind; run(context) calls the callback.
- command(...): create a Command or a decorator that produces one.

Signature-driven surface
- The first parameter of the callback is the context slot: positional-only,
  without a default. It receives whatever the caller passes to run().
- Every other parameter declares an argument through its default:
  • Cardinal  -> positional-only parameter (order of appearance is the order
    of the values on the line).
  • Option    -> standard parameter, passed by keyword.
  • Flag      -> keyword-only parameter, True when present.
- "-h/--help" is added automatically unless the callback claims one of them.

Quick start
    from parsables import command, Cardinal, Option, Flag

    @command
    def greet(
        context,
        who=Cardinal(descr="who to greet"),
        /,
        times=Option("-t", "--times", type=int, default=1),
        *,
        loud=Flag("-l", "--loud"),
    ):
        "Say hello."
        for _ in range(times):
            context.write(("HELLO %s\\n" if loud else "hello %s\\n") % who)

    greet.bind(["-t", "2", "world"]).run(context)

Parsing rules
- "--name value" and "--name=value" are equivalent for options; list-valued
  options split an inline value on commas.
- "--" ends switch parsing; everything after it is positional.
- Tokens like "-5" or "-.5" are values, not switches.
- A greedy cardinal ("...") takes every remaining token, switches included,
  once a positional value has been read (by it or by an earlier cardinal).
- Diagnostics lead with the ordinal position of the offending token.
"""
import difflib
import functools
import inspect
import operator
import re
from collections import defaultdict, deque
from collections.abc import Iterable
from inspect import Parameter
from types import EllipsisType, MappingProxyType

from rich.containers import Lines
from rich.text import Text

from .arguments import Cardinal, Option, Flag
from .faults import *
from .formatting import wrap
from .utils import *

# shape of a switch token: <name>[=<value>]
SWITCH_PATTERN = re.compile(r"(?P<input>--?[^\W\d_](-?[^\W_]+)*)(=(?P<value>.*))?", re.DOTALL)

# help layout: leading spaces of a row, and column where descriptions start
PADDING = 2
INDENT = 15


def _switchlike(token):
    """
    True when token should be read as an option or flag rather than a value.

    "-" alone and negative numbers ("-5", "-.5") are values.
    """
    return len(token) > 1 and token[0] == "-" and not (token[1].isdigit() or token[1] == ".")


def _ordinal(number):
    """
    Return a human-friendly ordinal for a 1-based position ("first", "11th", "22nd").
    """
    words = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")
    if 1 <= number <= len(words):
        return words[number - 1]
    if 10 < number % 100 < 20:
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


def _label(argument, parameter):
    """
    Return the placeholder shown for a value-bearing argument (metavar or <param-name>).
    """
    if argument.metavar is not None:
        return argument.metavar
    if argument.choices:
        return "{%s}" % ",".join(map(str, argument.choices))
    return "<%s>" % re.sub(r"_+", "-", parameter.strip("_").lower())


def _shape(label, nargs):
    """
    Decorate a placeholder with its arity ([X], [X ...], X [X ...], X X).
    """
    match nargs:
        case "?":
            return "[%s]" % label
        case "*" | EllipsisType():
            return "[%s ...]" % label
        case "+":
            return "%s [%s ...]" % (label, label)
        case int(count):
            return " ".join([label] * count)
        case _:
            return label


class CommandType(type):
    """
    Metaclass giving Command a readable identity.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in validation messages.
    - Expose every name in __introspectable__ as a read-only property backed by
      the "_" + name attribute (see mirror()).
    - Provide __repr__/__rich_repr__ restricted to __displayable__ when set.
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

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _process_source(cls, metadata):
    """
    Introspect the callback and collect its argument specs.

    Builds, in metadata:
    - cardinals: mapping[param_name -> Cardinal] in declaration order
    - switches: mapping[alias -> Option|Flag] (aliases fan out to the same spec)
    - groups: mapping["arguments"|"options"|"flags" -> list[spec]]
    - parameters: mapping[spec -> param_name] (reverse lookup)
    - help: the automatic -h/--help Flag, or None when the callback claims a name

    Errors
    - TypeError: non-callable callback, missing context slot, wrong parameter
      kinds, missing or foreign defaults, misplaced greedy cardinal, duplicate
      switch names, or a spec shared by two parameters.
    - ValueError: the callback cannot be inspected.
    """
    if not callable(callback := metadata["callback"]):
        raise TypeError(f"{cls.__typename__} 'callback' must be callable")

    try:
        signature = inspect.signature(callback)
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'callback' must be an inspectable callable") from None

    cardinals = metadata["cardinals"] = {}
    switches = metadata["switches"] = {}
    groups = metadata["groups"] = {"arguments": [], "options": [], "flags": []}
    parameters = metadata["parameters"] = {}

    context, *rest = list(signature.parameters.values()) or [None]
    if context is None or context.kind is not Parameter.POSITIONAL_ONLY or context.default is not Parameter.empty:
        raise TypeError(f"{cls.__typename__} 'callback' first parameter must be a positional-only context slot without a default")

    greedy = None

    for parameter in rest:
        name = parameter.name
        if parameter.default is Parameter.empty:
            raise TypeError(f"{cls.__typename__} 'callback' parameter {name!r} must have a default")

        match argument := parameter.default:
            case Cardinal():
                if parameter.kind is not Parameter.POSITIONAL_ONLY:
                    raise TypeError(f"{cls.__typename__} 'callback' cardinal at parameter {name!r}, parameter must be positional-only")
                if greedy:
                    raise TypeError(f"{cls.__typename__} 'callback' greedy cardinal at parameter {greedy!r}, must be the last cardinal")
                greedy = name if argument.nargs is Ellipsis else None
                cardinals[name] = argument
                groups["arguments"].append(argument)
            case Option() | Flag():
                if isinstance(argument, Option) and parameter.kind is not Parameter.POSITIONAL_OR_KEYWORD:
                    raise TypeError(f"{cls.__typename__} 'callback' option at parameter {name!r}, parameter must be standard")
                if isinstance(argument, Flag) and parameter.kind is not Parameter.KEYWORD_ONLY:
                    raise TypeError(f"{cls.__typename__} 'callback' flag at parameter {name!r}, parameter must be keyword-only")
                for alias in argument.names:
                    if alias in switches:
                        raise TypeError(f"{cls.__typename__} 'callback' name {alias!r} is already in use")
                    switches[alias] = argument
                groups["options" if isinstance(argument, Option) else "flags"].append(argument)
            case _:
                raise TypeError(f"{cls.__typename__} 'callback' parameter {name!r} default must be a cardinal, an option, or a flag")

        if argument in parameters:
            raise TypeError(f"{cls.__typename__} 'callback' parameter {name!r} reuses the argument of {parameters[argument]!r}")
        parameters[argument] = name

    if "-h" in switches or "--help" in switches:
        metadata["help"] = None
    else:
        metadata["help"] = Flag("-h", "--help", descr="show this help message and exit")
        switches["-h"] = switches["--help"] = metadata["help"]
        groups["flags"].insert(0, metadata["help"])


def _process_strings(cls, metadata):
    """
    Normalize the scalar metadata fields (name, descr, usage, epilog).

    - name defaults to the callback's __name__ with "_" turned into "-", and
      must be a single word (it is matched against a tokenized line).
    - descr defaults to the callback's docstring.
    - descr/usage/epilog accept str or Text; strings are trimmed and must not
      be empty.
    """
    if (name := metadata["name"]) is Unset:
        if not isinstance(name := getattr(metadata["callback"], "__name__", None), str):
            raise TypeError(f"{cls.__typename__} 'name' is required when the callback has no __name__")
        name = name.replace("_", "-")
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif re.search(r"\s", name):
        raise ValueError(f"{cls.__typename__} 'name' cannot contain whitespaces")
    metadata["name"] = name

    if metadata["descr"] is Unset and (docstring := inspect.getdoc(metadata["callback"])):
        metadata["descr"] = docstring

    for name in ("descr", "usage", "epilog"):
        if not isinstance(object := metadata[name], str | Text | Unset):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        elif isinstance(object, str) and not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
        metadata[name] = coalesce(object)


class Command(metaclass=CommandType):
    """
    A command descriptor backed by a Python callback.

    Construction
    - Command(callback, /, name=Unset, descr=Unset, usage=Unset, epilog=Unset)
      • name: defaults to callback.__name__ with "_" replaced by "-".
      • descr: defaults to the callback's docstring; its first line is the abstract.
      • usage: replaces the synthesized usage line in help.
      • epilog: trailing paragraph of the help.

    Behavior
    - bind(tokens) never runs the callback; run the returned Invocation for that.
    - Calling the command directly, command(context, ...), forwards to the callback.
    - Binding keeps no state on the command, so one command may bind
      concurrently from several threads.
    - Printing a command with rich renders its styled help at the console width.
    """

    __introspectable__ = (
        "callback",
        "name",
        "descr",
        "usage",
        "epilog",
        "cardinals",
        "switches",
        "groups",
    )

    __displayable__ = (
        "name",
        "descr",
    )

    def __new__(cls, callback, /, name=Unset, descr=Unset, usage=Unset, epilog=Unset):
        metadata = {
            "callback": callback,
            "name": name,
            "descr": descr,
            "usage": usage,
            "epilog": epilog,
        }
        _process_source(cls, metadata)
        _process_strings(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self, context, /, *args, **kwargs):
        return self._callback(context, *args, **kwargs)

    @property
    def abstract(self):
        """
        The first line of the description, or "" when there is none.
        """
        if not self._descr or not (lines := str(self._descr).strip().splitlines()):
            return ""
        return lines[0].strip()

    def bind(self, tokens, /):
        """
        Parse argument tokens (the line without the command name) into an Invocation.

        Raises
        - TypeError: tokens is not an iterable of strings.
        - HelpRequest: -h/--help was given; its message is the help text.
        - BindingError subclasses for every user mistake (unknown switch,
          missing value, uncastable value, ...).
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("bind() argument must be an iterable of strings")
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("bind() argument must be an iterable of strings")
        return _Binding(self, tokens).run()

    def help(self, columns=None, /):
        """
        Return the help text as plain text, wrapped to columns when given.
        """
        return self._helper(columns).plain

    def synopsis(self, columns=None, /):
        """
        Return only the usage line(s) of the help ("usage: name [-h] ...").
        """
        return self._usage_line(self._palette(), columns).plain

    def message(self, error, columns=None, /):
        """
        Short rendering of a failure raised by bind().

        A help request renders as the help itself.
        """
        match error:
            case HelpRequest():
                return self.help(columns)
            case CommandException():
                return error.message
            case _:
                return "Error: %s" % error

    def full_message(self, error, columns=None, /):
        """
        Like message(), followed by a blank line and the usage line.
        """
        match error:
            case HelpRequest():
                return self.help(columns)
            case CommandException():
                return "%s\n\n%s" % (error.message, self.synopsis(columns))
            case _:
                return "Error: %s" % error

    def __rich_console__(self, console, options):
        yield self._helper(options.max_width)

    @staticmethod
    def _palette():
        """
        Palette keys
        - usage-label, program-name, usage-section, description-section, epilog-section
        - group-label, argument-description, option-name, flag-name, metavar

        Define a mapping named __styles__ in __main__ to override any entry.
        """
        return defaultdict(str, {
            "usage-label": "bold #00E6FF",
            "program-name": "bold #FF4D94",
            "usage-section": "bold #36C5F0",
            "description-section": "italic #A3A3A3",
            "epilog-section": "#737373",
            "group-label": "bold #FFFFFF",
            "argument-description": "#9CA3AF",
            "option-name": "bold #00E6FF",
            "flag-name": "bold #22C55E",
            "metavar": "bold #FFD600",
        } | getattr(__import__("__main__"), "__styles__", {}))

    def _usage_line(self, styles, columns):
        usage = Text.assemble(("usage", styles["usage-label"]), ": ")

        if self._usage:
            return usage.append_text(Text(str(self._usage), styles["usage-section"]))

        usage.append(self._name, styles["program-name"])
        offset = len(usage) + 1

        inputs = deque()
        for argument in filter(lambda x: not x.hidden, self._groups["flags"]):
            inputs.append(Text.assemble("[", (argument.names[0], styles["flag-name"]), "]"))
        for argument in filter(lambda x: not x.hidden, self._groups["options"]):
            label = _shape(_label(argument, self._parameters[argument]), argument.nargs)
            inputs.append(Text.assemble("[", (argument.names[0], styles["option-name"]), " ", (label, styles["metavar"]), "]"))
        for argument in filter(lambda x: not x.hidden, self._groups["arguments"]):
            inputs.append(Text(_shape(_label(argument, self._parameters[argument]), argument.nargs), styles["metavar"]))

        if not inputs:
            return usage

        lines = Lines([inputs.popleft()])
        while inputs:
            if columns is not None and offset + len(lines[-1]) + 1 + len(input := inputs[0]) > columns:
                lines.append(inputs.popleft())
            else:
                lines[-1].append(Text(" ") + inputs.popleft())

        usage.append(" ").append_text(lines.pop(0))
        for line in lines:
            usage.append("\n").append(" " * offset).append_text(line)
        return usage

    def _names(self, argument, styles):
        if isinstance(argument, Cardinal):
            return Text(_label(argument, self._parameters[argument]), styles["metavar"])

        style = styles["option-name" if isinstance(argument, Option) else "flag-name"]
        names = Text(" | ").join(Text(name, style) for name in argument.names)
        if isinstance(argument, Option):
            names.append(" ").append(_shape(_label(argument, self._parameters[argument]), argument.nargs), styles["metavar"])
        return names

    def _helper(self, columns=None):
        """
        Build the styled help.

        Layout
        - usage line, wrapped with a hanging indent under the first input
        - description paragraphs, word-wrapped
        - "arguments:", "options:" and "flags:" sections; descriptions start at
          a fixed column, or on the next line when the names are too wide
        - epilog
        """
        styles = self._palette()
        renders = [self._usage_line(styles, columns)]

        if self._descr:
            for paragraph in re.split(r"\n\s*\n", str(self._descr)):
                renders.append(Text("\n".join(wrap(paragraph.split(), columns)), styles["description-section"]))

        for group, arguments in self._groups.items():
            if not (arguments := [argument for argument in arguments if not argument.hidden]):
                continue

            section = Text.assemble((group, styles["group-label"]), ":")
            for argument in arguments:
                names = self._names(argument, styles)
                section.append("\n" + " " * PADDING).append_text(names)

                if descr := argument.descr:
                    if PADDING + len(names) + 2 > INDENT:
                        section.append("\n" + " " * INDENT)
                    else:
                        section.append(" " * (INDENT - PADDING - len(names)))
                    section.append("\n".join(wrap(str(descr).split(), columns, INDENT, INDENT)), styles["argument-description"])
            renders.append(section)

        if self._epilog:
            renders.append(Text("\n".join(wrap(str(self._epilog).split(), columns)), styles["epilog-section"]))

        return Text("\n\n").join(renders)


class Invocation:
    """
    A successful bind: the command plus the converted values.

    - arguments: read-only mapping of parameter name -> value.
    - run(context): calls the callback with the context first, cardinals
      positionally and options/flags by keyword; returns its result.
    """

    def __init__(self, command, args, kwargs, /):
        self._command = command
        self._args = tuple(args)
        self._kwargs = MappingProxyType(dict(kwargs))

    @property
    def command(self):
        return self._command

    @property
    def arguments(self):
        return MappingProxyType(dict(zip(self._command.cardinals.keys(), self._args)) | dict(self._kwargs))

    def run(self, context, /):
        return self._command.callback(context, *self._args, **self._kwargs)

    def __repr__(self):
        return "invocation(command=%r, arguments=%r)" % (self._command.name, dict(self.arguments))


class _Binding:
    """
    Internal: the state of one bind() call.

    index counts argument tokens from 1 and only moves on spaced tokens, so
    inline values keep pointing at their switch.
    """

    def __init__(self, command, tokens):
        self.command = command
        self.tokens = deque(tokens)
        self.cardinals = deque(command._cardinals.items())
        self.namespace = {}
        self.index = 1
        self.literal = False
        self.positional = False

    def fault(self, type, message, /, **options):
        return type(message, **{"usage": self.command.synopsis(), "index": self.index} | options)

    def run(self):
        while self.tokens:
            greedy = self.positional and bool(self.cardinals) and self.cardinals[0][1].nargs is Ellipsis
            if self.literal or greedy or not _switchlike(token := self.tokens[0]):
                self._cardinal()
            elif token == "--":
                self.tokens.popleft()
                self.index += 1
                self.literal = True
            else:
                self._switch(self.tokens.popleft())
        return self._finish()

    def _hint(self):
        return "run '%s --help' to see the accepted arguments" % self.command.name

    def _switch(self, token):
        command = self.command

        if not (match := SWITCH_PATTERN.fullmatch(token)):
            raise self.fault(
                MalformedTokenError,
                "bad form of option or flag %r at %s position" % (token, _ordinal(self.index)),
                code=FaultCode.MALFORMED_TOKEN,
                title="malformed option or flag",
                hint="options are spelled -x, --name or --name=value",
                token=token,
            )

        input, value = match["input"], match["value"]

        try:
            argument = command._switches[input]
        except KeyError:
            suggestions = difflib.get_close_matches(input, command._switches.keys(), 5)
            if suggestions:
                hint = "did you mean %r? you can also %s" % (suggestions[0], self._hint())
            else:
                hint = self._hint()
            raise self.fault(
                UnknownSwitchError,
                "unknown option or flag %r at %s position" % (input, _ordinal(self.index)),
                code=FaultCode.UNKNOWN_SWITCH,
                title="unknown option or flag",
                hint=hint,
                input=input,
                suggestions=suggestions,
            ) from None

        if isinstance(argument, Flag) and value is not None:
            raise self.fault(
                FlagAssignmentError,
                "flag %r at %s position cannot have an inline value" % (input, _ordinal(self.index)),
                code=FaultCode.FLAG_ASSIGNMENT,
                title="flag cannot take a value",
                hint="remove everything from '=' (for example: %s)" % input,
                input=input,
            )

        if argument is command._help:
            raise HelpRequest(command.help(), command=command)

        if (parameter := command._parameters[argument]) in self.namespace:
            raise self.fault(
                DuplicatedSwitchError,
                "%s %r at %s position is given more than once" % (
                    "option" if isinstance(argument, Option) else "flag", input, _ordinal(self.index)
                ),
                code=FaultCode.DUPLICATED_SWITCH,
                title="duplicated option or flag",
                hint="keep a single %s" % " or ".join(map(repr, argument.names)),
                input=input,
            )

        start = self.index
        self.index += 1

        if isinstance(argument, Flag):
            self.namespace[parameter] = True
        elif value is not None:
            values = deque(value.split(",") if argument.variadic else [value])
            self.namespace[parameter] = self._values(argument, "option %r" % input, values, start, inline=True)
            if values:
                raise self.fault(
                    InlineExtraValuesError,
                    "option %r at %s position takes %d values, got %d" % (
                        input, _ordinal(start), argument.nargs, argument.nargs + len(values)
                    ),
                    code=FaultCode.INLINE_EXTRA_VALUES,
                    title="too many inline values",
                    hint="remove %s" % ", ".join(map(repr, values)),
                    input=input,
                    index=start,
                )
        else:
            self.namespace[parameter] = self._values(argument, "option %r" % input, self.tokens, start, inline=False)

    def _cardinal(self):
        if not self.cardinals:
            raise self.fault(
                UnexpectedCardinalError,
                "unexpected argument %r at %s position" % (self.tokens[0], _ordinal(self.index)),
                code=FaultCode.UNEXPECTED_CARDINAL,
                title="unexpected argument",
                hint=self._hint(),
                token=self.tokens[0],
            )

        self.positional = True
        parameter, argument = self.cardinals.popleft()
        what = "argument %r" % _label(argument, parameter)
        self.namespace[parameter] = self._values(argument, what, self.tokens, self.index, inline=False)

    def _values(self, argument, what, tokens, start, *, inline):
        """
        consume and convert the value(s) of a Cardinal or Option from tokens.

        - inline tokens come from "--name=value" and are all values.
        - spaced tokens stop at the next switch, unless "--" was seen or the
          argument is greedy.
        """
        greedy = argument.nargs is Ellipsis
        raw = []

        def peekable():
            return bool(tokens) and (inline or self.literal or greedy or not _switchlike(tokens[0]))

        def take():
            raw.append((start if inline else self.index, tokens.popleft()))
            if not inline:
                self.index += 1

        match nargs := argument.nargs:
            case None:
                if not peekable():
                    raise self.fault(
                        OptionValueRequiredError,
                        "%s at %s position requires a value" % (what, _ordinal(start)),
                        code=FaultCode.OPTION_VALUE_REQUIRED,
                        title="missing option value",
                        hint="provide a value right after it",
                        index=start,
                    )
                take()
            case "?":
                if peekable():
                    take()
            case "*" | EllipsisType():
                while peekable():
                    take()
            case "+" | int():
                count = 1 if nargs == "+" else nargs
                while peekable() and (nargs == "+" or len(raw) < count):
                    take()
                if len(raw) < count:
                    raise self.fault(
                        NotEnoughValuesError,
                        "%s at %s position requires %s, got %d" % (
                            what,
                            _ordinal(start),
                            "at least one value" if nargs == "+" else "%d values" % nargs,
                            len(raw),
                        ),
                        code=FaultCode.NOT_ENOUGH_VALUES,
                        title="not enough values",
                        hint=self._hint(),
                        index=start,
                    )

        choices = argument.choices
        values = []
        for index, token in raw:
            try:
                value = argument.type(token)
            except Exception as exception:
                raise self.fault(
                    UncastableValueError,
                    "%s at %s position got an invalid value %r: %s" % (what, _ordinal(index), token, exception),
                    code=FaultCode.UNCASTABLE_VALUE,
                    title="invalid value",
                    hint=self._hint(),
                    token=token,
                    index=index,
                ) from exception
            if choices and value not in choices:
                raise self.fault(
                    InvalidChoiceError,
                    "%s at %s position got %r, expected one of %s" % (
                        what, _ordinal(index), token, ", ".join(map(repr, choices))
                    ),
                    code=FaultCode.INVALID_CHOICE,
                    title="invalid choice",
                    hint="pick one of %s" % ", ".join(map(str, choices)),
                    token=token,
                    index=index,
                )
            values.append(value)

        if not raw:
            return _absent(argument)
        return values if argument.variadic else values[0]

    def _finish(self):
        command = self.command

        if missing := [_label(argument, name) for name, argument in self.cardinals if argument.required]:
            raise self.fault(
                MissingCardinalsError,
                "missing required argument%s: %s" % ("s" * (len(missing) > 1), ", ".join(missing)),
                code=FaultCode.MISSING_CARDINALS,
                title="missing arguments",
                hint=self._hint(),
                missing=missing,
            )

        for name, argument in self.cardinals:
            self.namespace[name] = _absent(argument)

        kwargs = {}
        for argument, name in command._parameters.items():
            if isinstance(argument, Cardinal):
                continue
            if name not in self.namespace:
                self.namespace[name] = False if isinstance(argument, Flag) else _absent(argument)
            kwargs[name] = self.namespace[name]

        return Invocation(command, (self.namespace[name] for name in command._cardinals), kwargs)


def _absent(argument):
    """
    Value bound when no token was given: the default, or [] for list-valued
    arguments without one.
    """
    if argument.default is None and argument.variadic:
        return []
    return argument.default


def command(source=Unset, /, **options):
    """
    Create a Command or a decorator that produces one.

    Forms
    - @command                   -> Command(func)
    - @command(name="x", ...)    -> decorator applying Command(func, name="x", ...)
    - command(func, name="x")    -> Command(func, name="x")
    """

    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        return Command(source, **options)

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Command",
    "Invocation",
    "command",
)
