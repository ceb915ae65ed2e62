# wireless_charge_stats.py
"""
Wireless‑charging helpers used while building both atoms:

* the ``A:<mode>`` header of the wireless log is translated into an
  ``AdapterType``;
* the per‑SOC rows below the two header lines are folded into the four
  wireless slots of a voltage tier (output power min/avg/max and operating
  frequency).

Per‑SOC row format: ``<soc>:<elapsed>, <pout_min>,<pout_avg>,<pout_max>, <freq>``.
"""

from typing import Dict, List

from line_scanner import LineScanner
from models import AdapterType, WirelessTierStats

HEADER_LINES = 2
SOC_ROW_FMT = LineScanner("%d:%d, %d,%d,%d, %d")

SYS_MODE_TO_ADAPTER: Dict[int, AdapterType] = {
    0x01: AdapterType.WPC_BPP,
    0x02: AdapterType.WPC_EPP,
    0x03: AdapterType.WPC_L7,
    0xA0: AdapterType.WPC_10W,
    0xE0: AdapterType.DL,
}


class WirelessChargeStats:
    """
    Stateful calculator: ``tier_soc`` is the first SOC not yet folded into
    a tier.  It must be reset once per drain, before the first tier line.
    """

    def __init__(self) -> None:
        self.tier_soc = 0

    def reset(self) -> None:
        self.tier_soc = 0

    @staticmethod
    def translate_sys_mode(sys_mode: int) -> AdapterType:
        return SYS_MODE_TO_ADAPTER.get(sys_mode, AdapterType.UNKNOWN)

    def calculate(self, soc: int, wireless_text: str) -> WirelessTierStats:
        """
        Aggregate every row with ``tier_soc <= row_soc <= soc`` and advance
        ``tier_soc`` past *soc*.
        """
        rows: List[List[int]] = []
        for line in wireless_text.splitlines()[HEADER_LINES:]:
            values = SOC_ROW_FMT.match(line)
            if values is None:
                continue
            if self.tier_soc <= values[0] <= soc:
                rows.append(values)

        self.tier_soc = soc + 1
        if not rows:
            return WirelessTierStats()

        elapsed = sum(max(r[1], 0) for r in rows)
        if elapsed > 0:
            pout_avg = sum(r[3] * max(r[1], 0) for r in rows) / elapsed
        else:
            pout_avg = sum(r[3] for r in rows) / len(rows)

        return WirelessTierStats(
            pout_min=min(r[2] for r in rows),
            pout_avg=int(round(pout_avg)),
            pout_max=max(r[4] for r in rows),
            of_freq=int(round(sum(r[5] for r in rows) / len(rows))),
        )
