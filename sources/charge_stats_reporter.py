# charge_stats_reporter.py
"""
The drain cycle: glues the side‑channel store, the throttle, the parsers
and the emitter together.  ``drain`` is the only entry point the driver
calls; it never raises.
"""

from typing import Optional

from app_logger import logger
from emitter import Emitter
from errors import (
    MalformedSummaryLine,
    SourceClearError,
    SourceReadError,
    TimeSourceError,
    degradation_for,
)
from format_resolver import FormatResolver
from models import SideChannelSnapshot, SourceId
from session_assembler import SessionAssembler
from side_channel_store import SideChannelStore
from throttle_gate import ThrottleGate
from tier_sample_parser import TierSampleParser
from timing_decorator import timed
from wireless_charge_stats import WirelessChargeStats

# Read in this order; each one is cleared right after it is read.
SIDE_CHANNELS = (
    SourceId.PCA,
    SourceId.WIRELESS,
    SourceId.THERMAL,
    SourceId.GCHARGER,
    SourceId.DUAL_BATTERY,
)
# Side channels whose lines are independent tier samples.
TIER_CHANNELS = (SourceId.THERMAL, SourceId.GCHARGER, SourceId.DUAL_BATTERY)


class ChargeStatsReporter:
    def __init__(
        self,
        store: SideChannelStore,
        emitter: Emitter,
        throttle: Optional[ThrottleGate] = None,
        wireless_stats: Optional[WirelessChargeStats] = None,
        resolver: Optional[FormatResolver] = None,
    ):
        self.store = store
        self.emitter = emitter
        self.throttle = throttle or ThrottleGate()
        self.wireless_stats = wireless_stats or WirelessChargeStats()
        self.resolver = resolver or FormatResolver()
        self.assembler = SessionAssembler(self.wireless_stats.translate_sys_mode)
        self.tier_parser = TierSampleParser(self.wireless_stats)

    @timed("drain")
    def drain(self, primary: SourceId = SourceId.PRIMARY) -> None:
        try:
            contents = self.store.read(primary)
        except SourceReadError as exc:
            logger.error("%s", exc)
            return

        lines = contents.splitlines()
        if not lines:
            logger.error("Unable to read first line of %s", primary.value)
            return
        summary_line, tier_lines = lines[0], lines[1:]

        try:
            self.store.clear(primary)
        except SourceClearError as exc:
            logger.error("%s", exc)

        channels = {sid: self.store.consume(sid) for sid in SIDE_CHANNELS}

        if self._session_accepted():
            self._report_session(summary_line, tier_lines, channels)

        for sid in TIER_CHANNELS:
            self._report_tiers(channels[sid].lines())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _session_accepted(self) -> bool:
        try:
            accepted = self.throttle.try_accept()
        except TimeSourceError as exc:
            logger.error("%s", exc)
            return False
        if not accepted:
            logger.warning("Too many log events; event ignored.")
        return accepted

    def _report_session(self, summary_line: str, tier_lines, channels) -> None:
        logger.debug("processing %s", summary_line)
        try:
            summary = self.resolver.resolve(summary_line)
        except MalformedSummaryLine as exc:
            logger.error("%s (%s)", exc, degradation_for(exc).value)
            return

        wireless: SideChannelSnapshot = channels[SourceId.WIRELESS]
        record = self.assembler.assemble(
            summary,
            wireless=wireless,
            pca=channels[SourceId.PCA],
            gcharger=channels[SourceId.GCHARGER],
        )
        self.emitter.emit(record)

        wireless_text = None
        if wireless.present:
            self.wireless_stats.reset()
            wireless_text = wireless.text
        self._report_tiers(tier_lines, wireless_text)

    def _report_tiers(self, lines, wireless_text: Optional[str] = None) -> int:
        count = 0
        for sample in self.tier_parser.parse_stream(lines, wireless_text):
            self.emitter.emit(sample)
            count += 1
        return count
