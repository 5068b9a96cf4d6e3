"""
Parsables dispatcher: route a line (or a token list) to a registered command.

resolve(registry, prompt)
- tokenizes a string prompt, or takes an iterable of strings as-is
- the first token names the command, the rest goes to its bind()
- never runs the command: the bound value is returned to the caller

Failures, first one wins
- no tokens at all             -> NoCommandError
- first token not registered   -> NoSuchCommandError(name)
- bind() raised anything       -> ArgumentBindingError(command, error) from error
"""
import logging
from collections.abc import Iterable

from .faults import NoCommandError, NoSuchCommandError, ArgumentBindingError
from .tokens import tokenize

logger = logging.getLogger(__name__)


def resolve(registry, prompt, /):
    """
    Turn prompt into a bound command of registry.

    parameters
    - registry: parsables.registry.Registry (anything with lookup(name))
    - prompt: str | Iterable[str]

    returns
    - whatever the matched descriptor's bind() returns.

    raises
    - TypeError: prompt is neither a string nor an iterable of strings.
    - NoCommandError, NoSuchCommandError, ArgumentBindingError (see module doc).
    """
    if isinstance(prompt, str):
        tokens = tokenize(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("resolve() prompt must be a string or an iterable of strings")
    else:
        raise TypeError("resolve() prompt must be a string or an iterable of strings")

    if not tokens:
        raise NoCommandError()

    name, *arguments = tokens
    if (command := registry.lookup(name)) is None:
        logger.debug("No command registered under '%s'", name)
        raise NoSuchCommandError(name)

    logger.debug("Binding %d tokens to command '%s'", len(arguments), name)
    try:
        return command.bind(arguments)
    except Exception as error:
        logger.debug("Command '%s' rejected its arguments: %r", name, error)
        raise ArgumentBindingError(command, error) from error


__all__ = (
    "resolve",
)
