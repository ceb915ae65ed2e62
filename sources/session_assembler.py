# session_assembler.py
"""
Build a ChargeStats record from a resolved summary line and the side
channels captured in the same drain.

Slot writes happen in this order, later writes winning:
summary → wireless → PCA → generic‑charger PDO.
"""

from typing import Callable, Optional

from app_logger import logger
from errors import MalformedSideChannelLine, degradation_for
from format_resolver import ResolvedSummary
from line_scanner import LineScanner, scan_first
from models import (
    CHARGE_STATS_BASE_SIZE,
    CHARGE_STATS_WIDTH,
    AdapterType,
    ChargeSessionRecord,
    ChargeStatsField as F,
    SideChannelSnapshot,
)
from wireless_charge_stats import WirelessChargeStats

WLC_ADAPTER_FMT = LineScanner("A:%d")
WLC_CAPS_FMT = LineScanner("D:%x,%x,%x,%x,%x, %x,%x")
PCA_FMT = LineScanner("D:%x,%x %x,%x,%x,%x,%x")
PDO_FMT = LineScanner("D:%x,%x,%x,%x,%x,%x,%x")

WLC_FIELDS = (
    F.ADAPTER_CAPABILITIES_0,
    F.ADAPTER_CAPABILITIES_1,
    F.ADAPTER_CAPABILITIES_2,
    F.ADAPTER_CAPABILITIES_3,
    F.ADAPTER_CAPABILITIES_4,
    F.RECEIVER_STATE_0,
    F.RECEIVER_STATE_1,
)


class SessionAssembler:
    """
    Parameters
    ----------
    translate_adapter_mode : callable, optional
        Maps the wireless ``A:`` mode integer to an adapter type.
        Defaults to :meth:`WirelessChargeStats.translate_sys_mode`.
    """

    def __init__(self, translate_adapter_mode: Optional[Callable[[int], int]] = None):
        self.translate_adapter_mode = (
            translate_adapter_mode or WirelessChargeStats.translate_sys_mode
        )

    def assemble(
        self,
        summary: ResolvedSummary,
        wireless: Optional[SideChannelSnapshot] = None,
        pca: Optional[SideChannelSnapshot] = None,
        gcharger: Optional[SideChannelSnapshot] = None,
    ) -> ChargeSessionRecord:
        record = ChargeSessionRecord(fields_size=CHARGE_STATS_BASE_SIZE)
        for f, value in zip(F, summary.values):
            record.set(f, value)

        has_wireless = wireless is not None and wireless.present
        if has_wireless:
            self._apply_wireless(record, wireless)
        if pca is not None and pca.present:
            self._apply_pca(record, pca, has_wireless)
        if gcharger is not None and gcharger.present:
            self._apply_pdo(record, gcharger)
        return record

    # ------------------------------------------------------------------
    # Side channels
    # ------------------------------------------------------------------
    def _apply_wireless(self, record: ChargeSessionRecord, wireless: SideChannelSnapshot) -> None:
        line_at, line_ac = wireless.line(0), wireless.line(1)
        logger.debug("wlc: processing %s", line_at)
        mode = WLC_ADAPTER_FMT.match(line_at)
        if mode is None:
            _side_channel_error(line_at)
            return
        record.set(F.ADAPTER_TYPE, self.translate_adapter_mode(mode[0]))

        logger.debug("wlc: processing %s", line_ac)
        caps = WLC_CAPS_FMT.match(line_ac)
        if caps is None:
            _side_channel_error(line_ac)
            return
        for f, value in zip(WLC_FIELDS, caps):
            record.set(f, value)
        record.fields_size = CHARGE_STATS_WIDTH

    @staticmethod
    def _apply_pca(record: ChargeSessionRecord, pca: SideChannelSnapshot, has_wireless: bool) -> None:
        line = pca.line(0)
        logger.debug("pca: processing %s", line)
        values = PCA_FMT.match(line)
        if values is None:
            _side_channel_error(line)
            return
        ac, rs = values[:2], values[2:]
        record.fields_size = CHARGE_STATS_WIDTH
        record.set(F.ADAPTER_CAPABILITIES_2, rs[2])
        record.set(F.ADAPTER_CAPABILITIES_3, rs[3])
        record.set(F.ADAPTER_CAPABILITIES_4, rs[4])
        record.set(F.RECEIVER_STATE_1, rs[1])
        if not has_wireless:
            # PPS only when the wireless channel is silent
            record.set(F.ADAPTER_TYPE, AdapterType.USB_PD_PPS)
            record.set(F.ADAPTER_CAPABILITIES_0, ac[0])
            record.set(F.ADAPTER_CAPABILITIES_1, ac[1])
            record.set(F.RECEIVER_STATE_0, rs[0])

    @staticmethod
    def _apply_pdo(record: ChargeSessionRecord, gcharger: SideChannelSnapshot) -> None:
        values = scan_first(PDO_FMT, gcharger.lines())
        if values is None:
            return
        apdo, pdo = values[1], values[6]
        logger.debug("processed pdo line, apdo:%d, pdo:%d", apdo, pdo)
        record.set(F.RECEIVER_STATE_0, apdo)
        record.set(F.RECEIVER_STATE_1, pdo)


def _side_channel_error(line: str) -> None:
    error = MalformedSideChannelLine(line, "Couldn't process")
    logger.error("%s (%s)", error, degradation_for(error).value)
