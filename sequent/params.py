"""
Sequent parameter views.

What this module provides
- Param: one raw command-line parameter with lazy conversions (int/real/bool).
- Params: a read-only, non-owning view over the tokens that follow a command.
- Parse: the (value, result) pair every conversion returns.

Semantics
- Conversions never raise. A failed conversion yields Parse(None, False);
  callers must check `result` before reading `value`.
- Indexing a Params view out of range yields the null parameter: a falsy Param
  whose text is None. It renders as a dim "null" in Rich and fails every conversion.
- Parsing is locale-independent and always consumes the whole text:
  "12" is an int, "12abc" and " 12" are not.

Example
    def add(params):
        left, right = params[0].int(), params[1].int()
        if not (left.result and right.result):
            return False
        print(left.value + right.value)
        return True
"""
import math
import re
from collections import namedtuple

from rich.text import Text

Parse = namedtuple("Parse", ("value", "result"))
Parse.__doc__ = """
Outcome of converting a parameter to a requested type.

- value: converted object; meaningful only when result is True (None otherwise).
- result: True when the whole text was a valid representation of the type.
"""

# Same range as a signed 64-bit integer.
INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1

_INT = re.compile(r"[+-]?[0-9]+")
_REAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_BOOLS = {"1": True, "0": False}

_FAILED = Parse(None, False)


class Param:
    """
    A single raw parameter.

    Behaves like its text for display and comparison:
    - str(param) is the raw text ("" for the null parameter).
    - param == "13" compares the raw text.
    - bool(param) is False only for the null parameter (an empty string token is still a parameter).
    """
    __slots__ = ("_text",)

    def __init__(self, text=None, /):
        if text is not None and not isinstance(text, str):
            raise TypeError("param text must be a string")
        self._text = text

    @property
    def text(self):
        """
        Return the raw text, or None for the null parameter.
        """
        return self._text

    @property
    def null(self):
        return self._text is None

    def int(self):
        """
        Convert to an integer in the signed 64-bit range.
        """
        if self._text is None or not _INT.fullmatch(self._text):
            return _FAILED
        value = int(self._text)
        if not INT_MIN <= value <= INT_MAX:
            return _FAILED
        return Parse(value, True)

    def real(self):
        """
        Convert to a float. Plain decimal and scientific notation only; "inf"/"nan"
        are rejected, as are values too large for a double.
        """
        if self._text is None or not _REAL.fullmatch(self._text):
            return _FAILED
        value = float(self._text)
        if math.isinf(value):
            return _FAILED
        return Parse(value, True)

    def bool(self):
        """
        Convert to a boolean: exactly "1" or "0"; any other text (including "true") fails.
        """
        if self._text is None:
            return _FAILED
        try:
            return Parse(_BOOLS[self._text], True)
        except KeyError:
            return _FAILED

    def __bool__(self):
        return self._text is not None

    def __str__(self):
        return "" if self._text is None else self._text

    def __repr__(self):
        return "null" if self._text is None else f"param({self._text!r})"

    def __rich__(self):
        if self._text is None:
            return Text("null", style="dim")
        return Text(self._text)

    def __eq__(self, other):
        if isinstance(other, Param):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    def __hash__(self):
        return hash(self._text)


# Returned for every out-of-range index.
null = Param()


class Params:
    """
    Read-only view over the `count` tokens following a command.

    The view borrows the processor's token list (no copy is made) and is only
    valid during the handler invocation it was built for.

    Access
    - params[i] → Param for 0 <= i < count, the null parameter otherwise
      (negative indices included; slices are not supported).
    - len(params) and params.count give the size; iteration yields Param objects.
    - params.console: the Rich console the running processor writes to, so
      handlers can print alongside the dispatcher's own messages.
    """
    __slots__ = ("_tokens", "_start", "_count", "_console")

    def __init__(self, tokens=(), start=0, count=None, /, *, console=None):
        count = len(tokens) - start if count is None else count
        if not isinstance(count, int) or count < 0 or start < 0 or start + count > len(tokens):
            raise ValueError("params view must lie within the token list")
        self._tokens = tokens
        self._start = start
        self._count = count
        self._console = console

    @property
    def count(self):
        return self._count

    @property
    def console(self):
        return self._console

    def __getitem__(self, index):
        if not isinstance(index, int):
            raise TypeError("params indices must be integers")
        if not 0 <= index < self._count:
            return null
        return Param(self._tokens[self._start + index])

    def __len__(self):
        return self._count

    def __iter__(self):
        for index in range(self._count):
            yield Param(self._tokens[self._start + index])

    def __repr__(self):
        return f"params({', '.join(map(repr, self))})"


__all__ = (
    "Parse",
    "Param",
    "Params",
    "null",
    "INT_MIN",
    "INT_MAX",
)
