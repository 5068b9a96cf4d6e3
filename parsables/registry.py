"""
Parsables command registry: an ordered, read-only set of command descriptors.

A descriptor is any object exposing
- name: str, the dispatch key (unique within a registry)
- abstract: str, one line for the catalogue (may be empty)
- bind(tokens), help(columns=None), message(error, columns=None) and
  full_message(error, columns=None)

Registries are built once and never change afterwards, so they can be read
from any number of threads.
"""
import logging
from types import MappingProxyType

from . import dispatch, faults, formatting
from .faults import NoSuchCommandError

logger = logging.getLogger(__name__)

_CAPABILITIES = ("bind", "help", "message", "full_message")


def _validate_descriptor(command):
    if not isinstance(getattr(command, "name", None), str):
        raise TypeError("registry entry %r must have a string 'name'" % (command,))
    if not isinstance(getattr(command, "abstract", None), str):
        raise TypeError("registry entry %r must have a string 'abstract'" % command.name)
    for capability in _CAPABILITIES:
        if not callable(getattr(command, capability, None)):
            raise TypeError("registry entry %r must have a callable %r" % (command.name, capability))


class Registry:
    """
    Ordered collection of command descriptors with a name-keyed index.

    Construction
    - Registry(commands): any iterable of descriptors; order is kept.

    Raises
    - TypeError: an entry does not expose the descriptor capabilities.
    - ValueError: two entries share a name.

    Access
    - lookup(name) -> descriptor | None, all() -> tuple in registration order.
    - registry[name] (KeyError when absent), name in registry, len(), iter().
    """

    def __init__(self, commands=(), /):
        entries = []
        index = {}

        for command in commands:
            _validate_descriptor(command)
            if command.name in index:
                raise ValueError("command name %r is already registered" % command.name)
            index[command.name] = command
            entries.append(command)
            logger.debug("Registered command '%s'", command.name)

        self._entries = tuple(entries)
        self._index = MappingProxyType(index)
        logger.debug("Registry built with %d commands", len(self._entries))

    def lookup(self, name, /):
        """Return the descriptor registered under name, or None."""
        return self._index.get(name)

    def all(self):
        """Return every descriptor, in registration order."""
        return self._entries

    def __getitem__(self, name):
        return self._index[name]

    def __contains__(self, name):
        return name in self._index

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __repr__(self):
        return "registry(%s)" % ", ".join(map(repr, self._index))

    def resolve(self, prompt, /):
        return dispatch.resolve(self, prompt)

    def summary(self, columns=None, /):
        return formatting.summary(self, columns)

    def detail(self, name, columns=None, /):
        """
        Detailed help of the command registered under name.

        Raises NoSuchCommandError for an unknown name.
        """
        if (command := self.lookup(name)) is None:
            raise NoSuchCommandError(name)
        return formatting.detail(command, columns)

    def message(self, error, columns=None, /):
        return faults.message(error, columns)

    def full_message(self, error, columns=None, /):
        return faults.full_message(error, columns)


__all__ = (
    "Registry",
)
