"""line_scanner.py

Positional scanner for the comma/space separated lines written by the
charger drivers.  A format string is made of conversions, literal
characters and whitespace, the same way a C ``scanf`` format is:

* ``%d`` – signed decimal integer
* ``%x`` – hexadecimal integer, optional ``0x`` prefix, read as a signed
  32-bit value (``ffffffff`` is -1)
* ``%f`` – floating point number
* whitespace – matches any run of whitespace in the input, including none
* any other character – must match literally

Conversions skip leading whitespace.  Scanning stops at the first mismatch
and the values converted so far are returned, so the caller decides by
counting them whether the line is in the expected format.

Typical usage
-------------
>>> from line_scanner import LineScanner
>>> LineScanner("A:%d").scan("A:2")
[2]
>>> LineScanner("%d,%d %d").scan("1,2")
[1, 2]
"""

import re
from typing import List, Optional, Sequence, Tuple, Union

Value = Union[int, float]

_WS = re.compile(r"\s*")
_PATTERNS = {
    "d": re.compile(r"[+-]?\d+"),
    "x": re.compile(r"[+-]?(?:0[xX])?[0-9a-fA-F]+"),
    "f": re.compile(
        r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
        re.IGNORECASE,
    ),
}


def _convert(kind: str, text: str) -> Value:
    if kind == "d":
        return int(text, 10)
    if kind == "x":
        # hex fields are 32-bit registers
        v = int(text, 16) & 0xFFFFFFFF
        return v - (1 << 32) if v & 0x80000000 else v
    return float(text)


class LineScanner:
    """
    A compiled positional format.

    Parameters
    ----------
    fmt : str
        Format string using ``%d``, ``%x`` and ``%f`` conversions.
    """

    def __init__(self, fmt: str):
        self.fmt = fmt
        self._tokens = self._compile(fmt)
        self.conversions = sum(1 for kind, _ in self._tokens if kind == "conv")

    @staticmethod
    def _compile(fmt: str) -> List[Tuple[str, str]]:
        tokens: List[Tuple[str, str]] = []
        i = 0
        while i < len(fmt):
            c = fmt[i]
            if c == "%":
                kind = fmt[i + 1: i + 2]
                if kind not in _PATTERNS:
                    raise ValueError(f"unsupported conversion %{kind} in {fmt!r}")
                tokens.append(("conv", kind))
                i += 2
            elif c.isspace():
                # consecutive whitespace collapses into one token
                if not tokens or tokens[-1][0] != "ws":
                    tokens.append(("ws", " "))
                i += 1
            else:
                tokens.append(("lit", c))
                i += 1
        return tokens

    def scan(self, line: str) -> List[Value]:
        """Return the values converted before the first mismatch."""
        values: List[Value] = []
        pos = 0
        for kind, arg in self._tokens:
            if kind == "ws":
                pos = _WS.match(line, pos).end()
            elif kind == "lit":
                if line[pos: pos + 1] != arg:
                    break
                pos += 1
            else:
                pos = _WS.match(line, pos).end()
                m = _PATTERNS[arg].match(line, pos)
                if not m:
                    break
                values.append(_convert(arg, m.group(0)))
                pos = m.end()
        return values

    def match(self, line: str, expected: Optional[int] = None) -> Optional[List[Value]]:
        """
        Scan *line* and return its values only if exactly *expected* of
        them were converted (default: every conversion in the format).
        """
        values = self.scan(line)
        want = self.conversions if expected is None else expected
        return values if len(values) == want else None


def scan_first(scanner: LineScanner, lines: Sequence[str]) -> Optional[List[Value]]:
    """Return the values of the first line in *lines* that fully matches."""
    for line in lines:
        values = scanner.match(line)
        if values is not None:
            return values
    return None
