import re

from rich.segment import Segment
from rich.style import Style


class UnsetType:
    """
    internal marker for "argument not provided" (distinct from None).

    there is a single instance, `Unset`; it is falsy and prints as "Unset".
    """
    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def nullify(object, default=None, /):
    """
    return `default` when `object` is Unset; otherwise return `object` unchanged.
    """
    return default if object is Unset else object


SEPARATOR = "-"

_UNSAFE = re.compile(r"[^A-Za-z0-9]")


def sanitize(name, /):
    """
    map a raw identifier to its canonical dispatch name.

    rules
    - ascii letters and digits are kept as-is.
    - every other character (underscores, dots, spaces, non-ascii letters...) is
      replaced by a single '-', so the result always has the input's length.

    properties
    - total: any string is accepted, the empty string maps to itself.
    - idempotent: sanitize(sanitize(s)) == sanitize(s).

    examples
    - "add_two_values" → "add-two-values"
    - "must pass!"     → "must-pass-"
    """
    if not isinstance(name, str):
        raise TypeError("sanitize() argument must be a string")
    return _UNSAFE.sub(SEPARATOR, name)


class Verbatim:
    """
    one output line whose text reaches the console untouched.

    rich.text.Text expands tabs and wraps at the console width; console lines
    that must reproduce tokens and doc strings byte for byte are emitted as raw
    segments instead. Each part is a string or a (string, style) pair; the
    style is dropped when the console has no colors.
    """
    __slots__ = ("parts",)

    def __init__(self, *parts):
        self.parts = tuple((part, "") if isinstance(part, str) else tuple(part) for part in parts)

    @property
    def plain(self):
        return "".join(text for text, _ in self.parts)

    def __rich_console__(self, console, options):
        for text, style in self.parts:
            yield Segment(text, Style.parse(style) if style else None)
        yield Segment.line()

    def __repr__(self):
        return f"verbatim({self.plain!r})"


__all__ = (
    "UnsetType",
    "Unset",
    "nullify",
    "SEPARATOR",
    "sanitize",
    "Verbatim",
)
