"""
Builtin commands registered on every registry: `version` and `help`.

Both are plain handlers with the registry bound as their first argument
(functools.partial), so they only depend on the registry's public surface.
They print through the console carried by the Params view and always succeed.

Output
- version:  "<app_name> <version>"
- help:     the version line, then one line per registered command in
            registration order: the name left-justified to `longest` columns,
            followed by its doc string verbatim (tabs included).
"""
from rich.console import Console

from .utils import Verbatim


def _console(params):
    return params.console or Console()


def version(registry, params, /):
    """
    Print version.
    """
    _console(params).print(Verbatim(f"{registry.app_name} {registry.version}"), soft_wrap=True)
    return True


def help(registry, params, /):
    """
    Print help.
    """
    version(registry, params)
    console = _console(params)
    for descriptor in registry:
        console.print(Verbatim(descriptor.name.ljust(registry.longest), descriptor.doc), soft_wrap=True)
    return True


__all__ = (
    "version",
    "help",
)
