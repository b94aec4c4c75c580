"""
Sequent faults and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for everything the processor
  reports while walking the command line.
- Fault: base type that carries the offending token + options and knows how to
  render itself through Rich (plain or colorful).
- trigger(): central entry point to surface a fault on a console.

Reporting contract
- Faults are reports, never exceptions: the processor keeps walking the command
  line (or stops, per its policy) after surfacing one.
- Plain rendering is a single stable line, e.g. "unrecognized command: bogus";
  the token is written verbatim (tabs and long tokens are neither expanded nor wrapped).
- Colorful rendering styles the same words; styles are configurable through a
  __styles__ mapping in __main__.
- CommandFailedFault is not printed by default (the handler already had its say);
  it only reaches a processor fallback.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console

from .utils import Unset, Verbatim


class FaultCode(IntEnum):
    """
    canonical fault codes used by the processor (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND, TOO_FEW_PARAMETERS
    - handlers (1113x)
      • COMMAND_FAILED
    """
    # --- routing (11xxx) ---
    UNKNOWN_COMMAND    = 11101
    TOO_FEW_PARAMETERS = 11102

    # --- handlers (11xxx) ---
    COMMAND_FAILED     = 11131


class Fault:
    """
    base report for something the processor could not do with a token.

    fields
    - token: the raw offending token, verbatim.
    - options: read-only mapping of rendering/runtime context
      (colorful, index, arity, remaining, command, ...).

    subclasses set `code` and `label`; the plain rendering is "<label>: <token>".
    """
    code = Unset
    label = Unset
    printable = True

    def __init__(self, token, /, **options):
        if not isinstance(token, str):
            raise TypeError(f"{type(self).__name__} token must be a string")
        self.token = token
        self.options = MappingProxyType(options)

    @property
    def message(self):
        return f"{self.label}: {self.token}"

    def __str__(self):
        return self.message

    def __repr__(self):
        return f"{type(self).__name__}({self.token!r})"

    def __rich__(self):
        if not self.options.get("colorful", False):
            return Verbatim(self.message)

        styles = defaultdict(str, {
            "fault-label": "bold #FF4DA6",  # friendly pinky label
            "fault-colon": "#6B6F7A",  # muted separator
            "fault-token": "bold #00E5FF",  # neon cyan token
        } | getattr(__import__("__main__"), "__styles__", {}))

        return Verbatim(
            (self.label, styles["fault-label"]),
            (":", styles["fault-colon"]),
            " ",
            (self.token, styles["fault-token"]),
        )

    def __trigger__(self):
        if not self.printable:
            return
        console = self.options.get("console") or Console()
        console.print(self, soft_wrap=True)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.token, **{**self.options, **overrides})


class UnknownCommandFault(Fault):
    code = FaultCode.UNKNOWN_COMMAND
    label = "unrecognized command"


class TooFewParametersFault(Fault):
    code = FaultCode.TOO_FEW_PARAMETERS
    label = "too few parameters"


class CommandFailedFault(Fault):
    code = FaultCode.COMMAND_FAILED
    label = "command failed"
    printable = False


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see Fault).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.

    typical options
    - console, colorful, index, and any other context a fallback may want to inspect.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "Fault",
    "UnknownCommandFault",
    "TooFewParametersFault",
    "CommandFailedFault",
    "trigger",
)
