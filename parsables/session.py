"""
Parsables session: the read-resolve-run loop of an interactive program.

Session(registry, context=Unset, *, prompt="$ ", columns=Unset)
- feed(line): resolve one line and run the bound command with the context.
  • blank lines (NoCommandError) are ignored silently
  • dispatch failures are reported through the context (full rendering)
  • failures raised by a running command are logged and reported as "Error: ..."
- loop(input=builtins.input): prompt and feed until end of input or until a
  command sets context.done.
"""
import builtins
import logging

from .context import Context
from .faults import NoCommandError, ParserError
from .registry import Registry
from .utils import *

logger = logging.getLogger(__name__)


class Session:
    """
    Drives a Registry from lines of text.

    Construction
    - registry: a parsables Registry.
    - context: the Context handed to commands; a new one by default.
    - prompt: text shown by loop() before each line.
    - columns: width of the default context (cannot be combined with context).
    """

    def __init__(self, registry, context=Unset, /, *, prompt="$ ", columns=Unset):
        if not isinstance(registry, Registry):
            raise TypeError("session 'registry' must be a registry")
        if not isinstance(prompt, str):
            raise TypeError("session 'prompt' must be a string")
        if context is Unset:
            context = Context(columns=columns)
        elif not isinstance(context, Context):
            raise TypeError("session 'context' must be a context")
        elif columns is not Unset:
            raise TypeError("session cannot specify both 'context' and 'columns'")
        self._registry = registry
        self._context = context
        self._prompt = prompt

    @property
    def registry(self):
        return self._registry

    @property
    def context(self):
        return self._context

    @property
    def prompt(self):
        return self._prompt

    def feed(self, line, /):
        """
        Resolve and run one line. Returns True when a command ran (even if it failed).
        """
        try:
            invocation = self._registry.resolve(line)
        except NoCommandError:
            return False
        except ParserError as error:
            logger.debug("Dispatch failed for %r: %r", line, error)
            self._context.report(error)
            return False

        try:
            invocation.run(self._context)
        except Exception as error:
            logger.exception("Command failed while running %r", line)
            self._context.report(error)
        return True

    def loop(self, input=builtins.input, /):
        """
        Read lines with input(prompt) until EOF or context.done.
        """
        logger.debug("Session started with %d commands", len(self._registry))
        while not self._context.done:
            try:
                line = input(self._prompt)
            except EOFError:
                break
            self.feed(line)
        logger.debug("Session finished")


__all__ = (
    "Session",
)
