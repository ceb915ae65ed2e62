# errors.py
"""
Error taxonomy for a drain cycle and the degradation applied to each kind
of malformed line.  Nothing here escapes ``ChargeStatsReporter.drain``.
"""

from enum import Enum


class ChargeStatsError(Exception):
    """Base class for every error raised while draining charge stats."""


class ParseError(ChargeStatsError):
    """A line did not match the positional format it was expected in."""

    def __init__(self, line: str, reason: str = "no format matched"):
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class MalformedSummaryLine(ParseError):
    pass


class MalformedSideChannelLine(ParseError):
    pass


class MalformedTierLine(ParseError):
    pass


class TimeSourceError(ChargeStatsError):
    """The boot clock read as zero."""


class SourceReadError(ChargeStatsError):
    pass


class SourceClearError(ChargeStatsError):
    pass


class SinkReportError(ChargeStatsError):
    pass


# ----------------------------------------------------------------------
# Policy table – what happens when a line of a given kind is malformed
# ----------------------------------------------------------------------
class LineKind(Enum):
    SUMMARY = "summary"
    TIER = "tier"
    SIDE_CHANNEL = "side_channel"


class Degradation(Enum):
    ABORT = "abort"                 # drop the session and its tier lines
    SKIP = "skip"                   # drop this line, keep going
    TREAT_ABSENT = "treat_absent"   # behave as if the channel had no data


LINE_POLICY = {
    LineKind.SUMMARY: Degradation.ABORT,
    LineKind.TIER: Degradation.SKIP,
    LineKind.SIDE_CHANNEL: Degradation.TREAT_ABSENT,
}

ERROR_KIND = {
    MalformedSummaryLine: LineKind.SUMMARY,
    MalformedTierLine: LineKind.TIER,
    MalformedSideChannelLine: LineKind.SIDE_CHANNEL,
}


def degradation_for(error: ParseError) -> Degradation:
    """Look up the degradation that applies to *error*."""
    return LINE_POLICY[ERROR_KIND[type(error)]]
