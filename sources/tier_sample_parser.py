# tier_sample_parser.py
"""
Build VoltageTierStats samples from per‑tier lines.

A tier line has 16 positional fields: tier index, fractional SOC, then 14
integers.  Anything else is noise in the tier stream and is skipped.
"""

import math
from typing import Iterator, List, Optional

from app_logger import logger
from errors import MalformedTierLine
from line_scanner import LineScanner
from models import (
    VOLTAGE_TIER_BASE_SIZE,
    VOLTAGE_TIER_WIDTH,
    VoltageTierField as V,
    VoltageTierSample,
    WirelessTierStats,
)
from wireless_charge_stats import WirelessChargeStats

TIER_FMT = LineScanner("%d, %f,%d,%d, %d,%d,%d, %d,%d,%d, %d,%d,%d, %d,%d,%d")

BASE_FIELDS: List[V] = list(V)[:VOLTAGE_TIER_BASE_SIZE]


class TierSampleParser:
    def __init__(self, wireless_stats: Optional[WirelessChargeStats] = None):
        self.wireless_stats = wireless_stats or WirelessChargeStats()

    def parse(self, line: str, wireless_text: Optional[str] = None) -> VoltageTierSample:
        """
        Parse one tier line.  When *wireless_text* is given the four
        wireless slots are filled from it and the sample grows to 20 slots.

        Raises
        ------
        MalformedTierLine
            The line does not have exactly 16 fields, or its SOC is
            not finite.
        """
        values = TIER_FMT.match(line)
        if values is None:
            raise MalformedTierLine(line, "not a tier line")
        if not math.isfinite(values[1]):
            raise MalformedTierLine(line, "SOC is not a finite number")

        sample = VoltageTierSample(fields_size=VOLTAGE_TIER_BASE_SIZE)
        for f, value in zip(BASE_FIELDS, values):
            sample.set(f, value)

        if wireless_text is not None:
            stats = self.wireless_stats.calculate(int(values[1]), wireless_text)
            self._apply_wireless(sample, stats)

        logger.debug("VoltageTierStats: processed %s", line)
        return sample

    @staticmethod
    def _apply_wireless(sample: VoltageTierSample, stats: WirelessTierStats) -> None:
        sample.set(V.MIN_ADAPTER_POWER_OUT, stats.pout_min)
        sample.set(V.TIME_AVG_ADAPTER_POWER_OUT, stats.pout_avg)
        sample.set(V.MAX_ADAPTER_POWER_OUT, stats.pout_max)
        sample.set(V.CHARGING_OPERATING_POINT, stats.of_freq)
        sample.fields_size = VOLTAGE_TIER_WIDTH

    def parse_stream(self, lines: List[str], wireless_text: Optional[str] = None) -> Iterator[VoltageTierSample]:
        """Yield one sample per well‑formed line, in order; skip the rest."""
        for line in lines:
            try:
                yield self.parse(line, wireless_text)
            except MalformedTierLine:
                continue
