"""
Parsables utilities shared by the argument specs (arguments.py) and the command
layer (commands.py, context.py, session.py).

- Unset: the "not provided" default of every spec and command field whose None
  is a legitimate value (a Cardinal default, a Session column count). Unset
  takes part in isinstance unions, e.g. isinstance(descr, str | Text | Unset).
- coalesce(value, default): materializes Unset once validation is done.
- rename("name"): names the __repr__/__rich_repr__ methods the metaclasses
  generate and the @command decorator, so tracebacks read like source code.
- mirror("field"): the read-only properties listed in __introspectable__.
  Names, choices and groups come back as fresh containers on each read, so
  Option("-o").names.append(...) leaves the option untouched.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Type of Unset. Falsey, a singleton, and sealed against subclassing.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object, or default when object is Unset. None, 0 and "" are kept.
    """
    return object if object is not Unset else default


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of the decorated callable.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def wrapper(callable):
        if not builtins.callable(callable):
            raise TypeError("@rename() must be applied to a callable")
        callable.__qualname__ = name
        callable.__name__ = name
        return callable

    return wrapper


def _detach(object):
    # dict/set/list copies all the way down; strings and scalars are shared
    if isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_detach, object.values())))
    elif isinstance(object, Set):
        return set(map(_detach, object))
    elif isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_detach, object))
    return object


def mirror(name, /):
    """
    Read-only property returning a detached copy of self._<name>.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
