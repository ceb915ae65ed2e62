# format_resolver.py
"""
Resolve which positional format a session summary line is written in.

The formats are textual supersets of one another, so they are tried
richest first: CSI, then AACR, then the base format.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from errors import MalformedSummaryLine
from line_scanner import LineScanner


class SummaryFormat:
    BASE = "base"
    AACR = "aacr"
    CSI = "csi"


BASE_FMT = LineScanner("%d,%d,%d, %d,%d,%d,%d")
AACR_FMT = LineScanner("%d,%d,%d, %d,%d,%d,%d %d")
CSI_FMT = LineScanner("%d,%d,%d, %d,%d,%d,%d %d %d,%d")


@dataclass(frozen=True)
class ResolvedSummary:
    format: str
    values: List[int]

    @property
    def field_count(self) -> int:
        return len(self.values)


SummaryParser = Callable[[str], Optional[ResolvedSummary]]


def _parser(name: str, scanner: LineScanner) -> SummaryParser:
    def parse(line: str) -> Optional[ResolvedSummary]:
        values = scanner.match(line)
        return ResolvedSummary(name, values) if values is not None else None

    parse.__name__ = f"parse_{name}"
    return parse


parse_csi = _parser(SummaryFormat.CSI, CSI_FMT)
parse_aacr = _parser(SummaryFormat.AACR, AACR_FMT)
parse_base = _parser(SummaryFormat.BASE, BASE_FMT)

DEFAULT_PARSERS = (parse_csi, parse_aacr, parse_base)


class FormatResolver:
    def __init__(self, parsers: Sequence[SummaryParser] = DEFAULT_PARSERS):
        self.parsers = tuple(parsers)

    def resolve(self, line: str) -> ResolvedSummary:
        """Return the first format that matches *line* completely."""
        for parse in self.parsers:
            resolved = parse(line)
            if resolved is not None:
                return resolved
        raise MalformedSummaryLine(line, "Couldn't process summary")
