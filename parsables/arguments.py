r"""
Parsables argument specifications.

Overview
- Cardinal[_T]: positional, value-bearing argument (fixed, optional, variadic
  or greedy arity).
- Option[_T]: named, value-bearing option with one or more aliases
  (e.g., -o/--output); accepts "--name value" and "--name=value".
- Flag: named, presence-only switch, e.g., -v/--verbose.

Specs are declared as parameter defaults of a command callback (see
parsables.commands) and are read-only once built: every field is exposed through
a property mirroring a private, sanitized value.

Metadata (sanitized on construction)
- Shared
  • descr: Unset | str | Text (short help), non-empty when provided.
  • hidden: bool (suppresses the argument from help).
- Cardinal/Option only (value-bearing)
  • metavar: Unset | str (label in help; forbidden for greedy "...").
  • type: Callable[[str], _T] (converter/validator).
  • nargs: Unset | "?" | "+" | "*" | int (>=1) | Ellipsis (greedy, Cardinal only).
  • default: any value, used when the argument is absent.
  • choices: Iterable (duplicates rejected unless a Set).
- Option/Flag only
  • names: validated shell-style names; duplicates rejected.

Quick example:
    >>> from parsables import Cardinal, Option, Flag
    >>> files = Cardinal("FILE", nargs="+")
    >>> threads = Option("-t", "--threads", type=int, default=1)
    >>> verbose = Flag("-v", "--verbose", descr="talk more")
"""
import functools
import operator
import re
from collections.abc import Iterable, Set
from types import EllipsisType

from rich.text import Text

from .utils import *

# Shell-style switch names: -x, -long, --long, --long-name (unicode letters allowed).
NAME_PATTERN = re.compile(r"--?[^\W\d_](-?[^\W_]+)*")


class ArgumentType(type):
    """
    Metaclass giving every spec class a readable identity.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in validation messages.
    - Expose every name in __introspectable__ as a read-only property backed by
      the "_" + name attribute (see mirror()).
    - Provide stable __repr__/__rich_repr__ built from __introspectable__.
    """
    __introspectable__ = ()

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
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize the fields every spec shares (descr, hidden).

    Raises
    - TypeError: when 'descr' is not a string, Text, or Unset.
    - ValueError: when 'descr' is a string but empty after trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)
    metadata["hidden"] = bool(metadata["hidden"])


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the aliases of a named spec (Option, Flag).

    Each name must be a non-empty string matching NAME_PATTERN, and names must
    be unique. They are stored as a tuple sorted short-first, so the first one
    is the canonical name used in messages and the usage line.
    """
    names = []
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif not NAME_PATTERN.fullmatch(name):
            raise ValueError(f"{cls.__typename__} names must be valid shell-style option names (unicodes are allowed)")
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)

    metadata["names"] = tuple(sorted(names, key=lambda name: (name.startswith("--"), len(name))))


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate the fields of value-bearing specs (Cardinal, Option).

    - metavar: Unset or a non-empty string.
    - type: must be callable.
    - nargs: Unset | "?" | "+" | "*" | int (>= 1); Ellipsis for Cardinal only.
    - choices: iterable; non-Set collections reject duplicates and become a tuple.
    - metavar and choices are mutually exclusive (help shows one or the other).
    """
    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar)

    if not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    cardinal = issubclass(cls, Cardinal)

    if isinstance(nargs := metadata["nargs"], bool) or not isinstance(
            nargs, str | int | Unset | (EllipsisType if cardinal else Unset)
    ):
        if not cardinal:
            raise TypeError(f"{cls.__typename__} 'nargs' must be a string or an integer")
        raise TypeError(f"{cls.__typename__} 'nargs' must be a string, an integer, or ellipsis")
    if isinstance(nargs, str) and nargs not in ("?", "+", "*"):
        raise ValueError(f"{cls.__typename__} 'nargs' must be one of '?', '+', or '*'")
    if isinstance(nargs, int) and nargs < 1:
        raise ValueError(f"{cls.__typename__} 'nargs' must be a positive integer")
    metadata["nargs"] = coalesce(nargs)

    if not isinstance(choices := metadata["choices"], Iterable) or isinstance(choices, str):
        raise TypeError(f"{cls.__typename__} 'choices' must be a non-string iterable")
    if not isinstance(choices, Set):
        sanitized = []
        for choice in choices:
            if choice in sanitized:
                raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
            sanitized.append(choice)
        choices = tuple(sanitized)
    metadata["choices"] = choices

    if metadata["metavar"] is not None and choices:
        raise TypeError(f"{cls.__typename__} cannot have both 'metavar' and 'choices'")


class Cardinal[_T](metaclass=ArgumentType):
    """
    Positional, value-bearing argument specification.

    Arity (nargs)
    - Unset: exactly one value (required).
    - "?": zero or one value; the default is used when absent.
    - "*": zero or more values; "+": one or more values.
    - int n: exactly n values.
    - Ellipsis ("..."): greedy, takes every remaining token, including tokens
      that look like switches. Must be the last cardinal of a command.
    """

    __introspectable__ = (
        "metavar",
        "type",
        "nargs",
        "default",
        "choices",
        "descr",
        "hidden",
    )

    def __new__(
            cls,
            metavar=Unset,
            /,
            type=str,
            nargs=Unset,
            default=None,
            choices=(),
            descr=Unset,
            *,
            hidden=False
    ):
        if nargs == "...":
            nargs = Ellipsis
        metadata = {
            "metavar": metavar,
            "type": type,
            "nargs": nargs,
            "default": default,
            "choices": choices,
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        if metadata["nargs"] is Ellipsis and metadata["metavar"] is not None:
            # greedy input renders as "..." in help; a custom label would hide that
            raise TypeError(f"greedy {cls.__typename__} cannot specify a 'metavar'")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def variadic(self):
        """
        True when the bound value is a list (nargs is "*", "+", an int, or "...").
        """
        return self.nargs in ("*", "+") or self.nargs is Ellipsis or isinstance(self.nargs, int)

    @property
    def required(self):
        """
        True when at least one token must be supplied.
        """
        return self.nargs is None or self.nargs == "+" or isinstance(self.nargs, int)


class Option[_T](metaclass=ArgumentType):
    """
    Named, value-bearing option specification.

    Arity (nargs)
    - Unset: exactly one value after the name (or after '=').
    - "?": the value may be omitted; the default is used then.
    - "*", "+", int n: list-valued; spaced values are read until the next switch,
      inline values ("--name=a,b") are split on commas.
    """

    __introspectable__ = (
        "names",
        "metavar",
        "type",
        "nargs",
        "default",
        "choices",
        "descr",
        "hidden",
    )

    def __new__(
            cls,
            *names,
            metavar=Unset,
            type=str,
            nargs=Unset,
            default=None,
            choices=(),
            descr=Unset,
            hidden=False
    ):
        metadata = {
            "names": names,
            "metavar": metavar,
            "type": type,
            "nargs": nargs,
            "default": default,
            "choices": choices,
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def variadic(self):
        return self.nargs in ("*", "+") or isinstance(self.nargs, int)


class Flag(metaclass=ArgumentType):
    """
    Named, presence-only switch. Binds to True when given, False otherwise.
    """

    __introspectable__ = (
        "names",
        "descr",
        "hidden",
    )

    def __new__(cls, *names, descr=Unset, hidden=False):
        metadata = {
            "names": names,
            "descr": descr,
            "hidden": hidden,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


__all__ = (
    "Cardinal",
    "Option",
    "Flag",
)
