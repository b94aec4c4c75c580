"""
Sequent command registry: name → descriptor, plus application info.

What this module provides
- Descriptor: immutable record of one command (name, handler, doc, arity, halt_on_fail).
- Registry: ordered mapping from sanitized command name to Descriptor, with the
  application info (name, version) shown by the builtin `version`/`help` commands.
- Module-level shortcuts bound to a lazily created, process-wide default registry:
  default_registry(), register(...), command(...), lookup(...), init(...).

Registration rules
- Names are sanitized on the way in: every character that is not an ASCII letter
  or digit becomes '-', so `add_two_values` is triggered by `add-two-values`.
- Registering an existing name overwrites it (last registration wins); the command
  keeps its original position in help output.
- `longest` tracks the longest name plus three columns of padding, for help alignment.
- Every registry starts with the builtins `version` and `help`.

Lifecycle
- Registration is expected to complete before processing starts. Hosts either call
  register()/@command explicitly during startup or import the modules whose
  decorators register their commands.

Quick start
    from sequent import command, init, main

    @command(arity=2, doc="Add two integers.")
    def add_two_values(params):
        left, right = params[0].int(), params[1].int()
        if not (left.result and right.result):
            return False
        params.console.print(left.value + right.value)
        return True

    if __name__ == "__main__":
        init("calc", "1.0.0")
        main()  # $ calc add-two-values 13 15  →  28
"""
import functools
import inspect
import logging
from collections import namedtuple

from .builtins import help as print_help, version as print_version
from .utils import *

logger = logging.getLogger(__name__)

# Columns added after the longest name in help output.
PADDING = 3

Info = namedtuple("Info", ("app_name", "version", "longest"))


class Descriptor:
    """
    Immutable record of one registered command.

    Fields
    - name: sanitized dispatch name (unique key in its registry).
    - handler: callable taking a Params view and returning a success boolean.
    - doc: one-line description shown by `help`.
    - arity: exact number of parameters the command consumes.
    - halt_on_fail: stop processing the remaining tokens when the handler fails.

    Calling a descriptor runs its handler: descriptor(params) → bool.
    """
    __slots__ = ("_name", "_handler", "_doc", "_arity", "_halt_on_fail")

    __introspectable__ = (
        "name",
        "handler",
        "doc",
        "arity",
        "halt_on_fail",
    )

    def __init__(self, name, handler, doc, arity, halt_on_fail, /):
        self._name = name
        self._handler = handler
        self._doc = doc
        self._arity = arity
        self._halt_on_fail = halt_on_fail

    @property
    def name(self):
        return self._name

    @property
    def handler(self):
        return self._handler

    @property
    def doc(self):
        return self._doc

    @property
    def arity(self):
        return self._arity

    @property
    def halt_on_fail(self):
        return self._halt_on_fail

    def __call__(self, params, /):
        return bool(self._handler(params))

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"descriptor({", ".join(f"{name}={object!r}" for name, object in self.__rich_repr__())})"

    def __eq__(self, other):
        if not isinstance(other, Descriptor):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__introspectable__)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in self.__introspectable__))


class Registry:
    """
    Ordered mapping from sanitized command name to Descriptor.

    Mapping protocol
    - registry[name] → Descriptor (KeyError when missing).
    - name in registry, len(registry), iteration over descriptors in registration order.
    - lookup(name) → Descriptor | None, the non-raising form used by the processor.

    Info
    - app_name/version are set through init() and default to empty strings.
    - info bundles them with `longest` for the builtin commands.
    """

    def __init__(self, *, builtins=True):
        self._commands = {}
        self._longest = 0
        self._app_name = ""
        self._version = ""
        if builtins:
            self.register("version", functools.partial(print_version, self), 0, "Print version.")
            self.register("help", functools.partial(print_help, self), 0, "Print help.")

    @property
    def app_name(self):
        return self._app_name

    @property
    def version(self):
        return self._version

    @property
    def longest(self):
        """
        Width of the name column in help output: longest name + PADDING.
        """
        return self._longest

    @property
    def info(self):
        return Info(self._app_name, self._version, self._longest)

    def init(self, app_name, version, /):
        """
        Set the application name and version printed by `version` and `help`.
        """
        if not isinstance(app_name, str):
            raise TypeError("registry 'app_name' must be a string")
        if not isinstance(version, str):
            raise TypeError("registry 'version' must be a string")
        self._app_name = app_name
        self._version = version

    def register(self, name, handler, arity=0, doc="", halt_on_fail=False):
        """
        Register `handler` under the sanitized form of `name`.

        Parameters
        - name: str
          Raw identifier; sanitized before use (see sanitize()).
        - handler: Callable[[Params], bool]
          Invoked with the `arity` tokens following the command name.
        - arity: int
          Exact number of parameters the command consumes (>= 0).
        - doc: str
          Description shown by `help`, reproduced verbatim.
        - halt_on_fail: bool
          When True, a failing handler stops processing immediately.

        Returns
        - The stored Descriptor.

        Raises
        - TypeError/ValueError on malformed arguments. Duplicate names are not an
          error: the new registration replaces the old one.
        """
        if not isinstance(name, str):
            raise TypeError("registry 'name' must be a string")
        elif not name:
            raise ValueError("registry 'name' must be a non-empty string")
        if not callable(handler):
            raise TypeError("registry 'handler' must be callable")
        if not isinstance(arity, int) or isinstance(arity, bool):
            raise TypeError("registry 'arity' must be an integer")
        elif arity < 0:
            raise ValueError("registry 'arity' must be a non-negative integer")
        if not isinstance(doc, str):
            raise TypeError("registry 'doc' must be a string")

        descriptor = Descriptor(name := sanitize(name), handler, doc, arity, bool(halt_on_fail))

        if name in self._commands:
            logger.warning("Command %r registered again; the previous handler is replaced", name)
        self._commands[name] = descriptor
        self._longest = max(self._longest, len(name) + PADDING)

        logger.debug("Registered command: %s (arity: %d, halt_on_fail: %s)", name, arity, descriptor.halt_on_fail)
        return descriptor

    def lookup(self, name, /):
        """
        Return the descriptor registered under exactly `name`, or None.

        The token is matched as-is: command-line input is expected in sanitized form.
        """
        return self._commands.get(name)

    def command(self, source=Unset, /, *, name=Unset, arity=0, doc=Unset, halt_on_fail=False):
        """
        Register a function as a command; usable directly or as a decorator.

        Invocation modes
        - Decorator:
            @registry.command(arity=1, doc="Greet someone.")
            def greet(params): ...
        - Bare decorator:
            @registry.command
            def ping(params): ...
        - Direct:
            registry.command(ping, name="ping")

        Defaults
        - name: the function's __name__ (then sanitized).
        - doc: the first line of the function's docstring, or "".

        Returns
        - The function unchanged (so it stays callable and testable on its own),
          or a decorator in decorator mode.
        """
        def wrapper(source, /):
            if not callable(source):
                raise TypeError("@command() must be applied to a callable")
            summary = (inspect.getdoc(source) or "").partition("\n")[0]
            self.register(
                nullify(name, getattr(source, "__name__", None)),
                source,
                arity,
                nullify(doc, summary),
                halt_on_fail,
            )
            return source

        # Direct mode if a source was provided, otherwise return the decorator.
        return wrapper(source) if source is not Unset else wrapper

    def __getitem__(self, name, /):
        return self._commands[name]

    def __contains__(self, name, /):
        return name in self._commands

    def __iter__(self):
        return iter(tuple(self._commands.values()))

    def __len__(self):
        return len(self._commands)

    def __repr__(self):
        return f"registry({", ".join(self._commands)})"


@functools.cache
def default_registry():
    """
    Return the process-wide default registry, created on first use.
    """
    return Registry()


def register(name, handler, arity=0, doc="", halt_on_fail=False):
    return default_registry().register(name, handler, arity, doc, halt_on_fail)


def command(source=Unset, /, **kwargs):
    return default_registry().command(source, **kwargs)


def lookup(name, /):
    return default_registry().lookup(name)


def init(app_name, version, /):
    return default_registry().init(app_name, version)


__all__ = (
    "Descriptor",
    "Registry",
    "Info",
    "default_registry",
    "register",
    "command",
    "lookup",
    "init",
)
