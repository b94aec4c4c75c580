"""
Sequent processor: walk the command line and dispatch registered commands.

The loop
- Tokens are consumed strictly left to right. For the token at the current index:
  • unknown → report "unrecognized command: <token>"; stop with 1 when
    halt_on_unrecognized is set, otherwise move on to the next token.
  • known, but fewer than `arity` tokens follow → report
    "too few parameters: <token>", skip the handler and move on to the next token
    (the overall result is left untouched).
  • known → run the handler over a Params view of the next `arity` tokens and
    move past them. A failing handler marks the run as failed; when its command
    has halt_on_fail, processing stops right away with 1.
- When the tokens are exhausted, the exit code is 0 if no handler failed, else 1.

Nothing raised by the core escapes process(); reports go to the console (or to a
fallback) and the exit code is the only machine-readable outcome. Exceptions
raised by handlers themselves propagate unchanged.

Quick start
    from sequent import Processor, Registry

    registry = Registry()
    registry.register("ping", lambda params: params.console.print("pong") or True)

    Processor(registry).process(["ping", "ping"])  # prints pong twice, returns 0
"""
import copy
import logging
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .faults import *
from .params import Params
from .registry import default_registry
from .utils import *

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _tokenize(prompt):
    """
    Normalize a prompt into a list of tokens.

    - Unset: the current command line (sys.argv[1:]).
    - str: shell-like string, split with shlex.split.
    - Iterable[str]: used verbatim (no trimming, empty tokens are kept).
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("process() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("process() argument must be a string or an iterable of strings")


class Processor:
    """
    Dispatches command-line tokens against a registry.

    Parameters
    - registry: Registry | Unset
      Commands to match against; the process-wide default registry when Unset.
    - halt_on_unrecognized: bool
      Stop with exit code 1 at the first unknown token.
    - console: rich.console.Console | Unset
      Where reports (and handlers using params.console) write; stdout when Unset.
    - colorful: bool
      Style reports with Rich colors (see faults.Fault.__rich__).

    The processor treats its registry as read-only while process() runs.
    """

    def __init__(self, registry=Unset, /, *, halt_on_unrecognized=False, console=Unset, colorful=False):
        self._registry = default_registry() if registry is Unset else registry
        self._halt_on_unrecognized = bool(halt_on_unrecognized)
        self._console = Console() if console is Unset else console
        self._colorful = bool(colorful)
        self._fallback = Unset

    @property
    def registry(self):
        return self._registry

    @property
    def console(self):
        return self._console

    @property
    def halt_on_unrecognized(self):
        return self._halt_on_unrecognized

    @property
    def colorful(self):
        return self._colorful

    def fallback(self, fallback, /):
        """
        Register a one-time fallback that receives every fault instead of the console.

        Contract
        - fallback: callable invoked with a single fault (see sequent.faults).
          It also receives CommandFailedFault, which the console printer skips.

        Rules
        - Must be callable.
        - Can be set only once per processor (cannot be overridden).

        Returns
        - The same callable, enabling decorator-style usage: @processor.fallback
        """
        if not callable(fallback):
            raise TypeError("processor fallback must be callable")
        if self._fallback is not Unset:
            raise TypeError("processor fallback cannot be overridden")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this processor's console/colorful options merged in.
        """
        options |= {"console": self._console, "colorful": self._colorful}
        if self._fallback:
            self._fallback(copy.replace(fault, **options))
        else:
            trigger(fault, **options)

    def process(self, prompt=Unset, /):
        """
        Run every command found in `prompt` and return the exit code (0 or 1).

        Parameters
        - prompt: Unset | str | Iterable[str]
          Tokens to process, excluding the program name (see _tokenize).

        Returns
        - 0 when every invoked handler succeeded (including when there are no tokens).
        - 1 when a handler failed, or immediately on a hard stop
          (unknown token with halt_on_unrecognized, failing command with halt_on_fail).
        """
        tokens = _tokenize(prompt)
        success = True
        index = 0

        while index < len(tokens):
            token = tokens[index]
            descriptor = self._registry.lookup(token)

            if descriptor is None:
                self.trigger(UnknownCommandFault(token), index=index)
                if self._halt_on_unrecognized:
                    logger.info("Halted on unrecognized command %r at position %d", token, index)
                    return EXIT_FAILURE
                index += 1
                continue

            if index + descriptor.arity >= len(tokens):
                self.trigger(
                    TooFewParametersFault(token),
                    index=index,
                    arity=descriptor.arity,
                    remaining=len(tokens) - index - 1,
                )
                index += 1
                continue

            logger.debug("Dispatching %s with %d parameter(s)", descriptor.name, descriptor.arity)
            params = Params(tokens, index + 1, descriptor.arity, console=self._console)

            if not descriptor(params):
                success = False
                self.trigger(CommandFailedFault(token), index=index, command=descriptor)
                if descriptor.halt_on_fail:
                    logger.info("Halted on failed command %r at position %d", token, index)
                    return EXIT_FAILURE

            index += 1 + descriptor.arity

        return EXIT_SUCCESS if success else EXIT_FAILURE


def process(prompt=Unset, /, *, halt_on_unrecognized=False):
    """
    Process `prompt` against the default registry; see Processor.process.
    """
    return Processor(halt_on_unrecognized=halt_on_unrecognized).process(prompt)


def main(prompt=Unset, /, **options):
    """
    Program entry point: process the command line and exit with its code.

    Options are forwarded to Processor (registry is taken from `registry=`
    when given, the default registry otherwise).
    """
    registry = options.pop("registry", Unset)
    sys.exit(Processor(registry, **options).process(prompt))


__all__ = (
    "Processor",
    "process",
    "main",
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
)
