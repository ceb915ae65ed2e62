# models.py
"""
Dataclasses and enums for the two vendor atoms (ChargeStats and
VoltageTierStats) and for the raw side‑channel text they are built from.

Records keep their slots in a ``{field: value}`` mapping; the dense value
array the sink expects is only built by the emitter.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Iterator, List, Optional, Tuple, Union

Number = Union[int, float]

# ----------------------------------------------------------------------
# Atom identifiers & layout
# ----------------------------------------------------------------------
CHARGE_STATS_ATOM_ID = 105038
VOLTAGE_TIER_STATS_ATOM_ID = 105039
VENDOR_ATOM_OFFSET = 2          # first field number of every vendor atom

CLEARED_MARKER = "0"            # what a source contains after being cleared


class ChargeStatsField(IntEnum):
    ADAPTER_TYPE = 2
    ADAPTER_VOLTAGE = 3
    ADAPTER_AMPERAGE = 4
    SSOC_IN = 5
    VOLTAGE_IN = 6
    SSOC_OUT = 7
    VOLTAGE_OUT = 8
    CHARGE_CAPACITY = 9
    CSI_AGGREGATE_STATUS = 10
    CSI_AGGREGATE_TYPE = 11
    ADAPTER_CAPABILITIES_0 = 12
    ADAPTER_CAPABILITIES_1 = 13
    ADAPTER_CAPABILITIES_2 = 14
    ADAPTER_CAPABILITIES_3 = 15
    ADAPTER_CAPABILITIES_4 = 16
    RECEIVER_STATE_0 = 17
    RECEIVER_STATE_1 = 18

    @property
    def slot(self) -> int:
        return self.value - VENDOR_ATOM_OFFSET


class VoltageTierField(IntEnum):
    VOLTAGE_TIER = 2
    SOC_IN = 3
    CC_IN = 4
    TEMP_IN = 5
    TIME_FAST_SECS = 6
    TIME_TAPER_SECS = 7
    TIME_OTHER_SECS = 8
    TEMP_MIN = 9
    TEMP_AVG = 10
    TEMP_MAX = 11
    IBATT_MIN = 12
    IBATT_AVG = 13
    IBATT_MAX = 14
    ICL_MIN = 15
    ICL_AVG = 16
    ICL_MAX = 17
    MIN_ADAPTER_POWER_OUT = 18
    TIME_AVG_ADAPTER_POWER_OUT = 19
    MAX_ADAPTER_POWER_OUT = 20
    CHARGING_OPERATING_POINT = 21

    @property
    def slot(self) -> int:
        return self.value - VENDOR_ATOM_OFFSET


FLOAT_FIELDS = frozenset({VoltageTierField.SOC_IN})


def is_float_field(f: IntEnum) -> bool:
    # IntEnum members of different atoms compare equal by number
    return isinstance(f, VoltageTierField) and f in FLOAT_FIELDS


CHARGE_STATS_WIDTH = len(ChargeStatsField)          # 17
CHARGE_STATS_BASE_SIZE = 10                         # base/AACR/CSI prefix
VOLTAGE_TIER_WIDTH = len(VoltageTierField)          # 20
VOLTAGE_TIER_BASE_SIZE = 16                         # without wireless stats


class AdapterType(IntEnum):
    UNKNOWN = 0
    USB = 1
    USB_SDP = 2
    USB_DCP = 3
    USB_CDP = 4
    USB_ACA = 5
    USB_C = 6
    USB_PD = 7
    USB_PD_DRP = 8
    USB_PD_PPS = 9
    USB_BRICKID = 10
    USB_HVDCP = 11
    USB_HVDCP3 = 12
    FLOAT = 13
    WLC = 14
    WLC_EPP = 15
    WLC_SPP = 16
    GPP = 17
    TEN_W = 18
    L7 = 19
    DL = 20
    WPC_EPP = 21
    WPC_GPP = 22
    WPC_10W = 23
    WPC_BPP = 24
    WPC_L7 = 25


class SourceId(str, Enum):
    """Named text sources read during a drain."""
    PRIMARY = "primary"
    WIRELESS = "wireless"
    PCA = "pca"
    THERMAL = "thermal"
    GCHARGER = "gcharger"
    DUAL_BATTERY = "dual_battery"


# ----------------------------------------------------------------------
# Dataclasses
# ----------------------------------------------------------------------
@dataclass
class SideChannelSnapshot:
    """Raw text captured from one source at drain time."""
    source: SourceId
    text: str = ""
    present: bool = False

    @classmethod
    def absent(cls, source: SourceId) -> "SideChannelSnapshot":
        return cls(source=source)

    def lines(self) -> List[str]:
        return self.text.splitlines() if self.present else []

    def line(self, index: int) -> str:
        """Return line *index* or an empty string when there is none."""
        lines = self.lines()
        return lines[index] if index < len(lines) else ""


@dataclass
class ChargeSessionRecord:
    """One ChargeStats atom: slot values keyed by field plus the populated count."""
    values: Dict[ChargeStatsField, int] = field(default_factory=dict)
    fields_size: int = CHARGE_STATS_BASE_SIZE

    def get(self, f: ChargeStatsField) -> int:
        return self.values.get(f, 0)

    def set(self, f: ChargeStatsField, value: int) -> None:
        self.values[f] = int(value)

    def populated(self) -> Iterator[Tuple[ChargeStatsField, int]]:
        """Yield ``(field, value)`` for the populated prefix, in field order."""
        for f in list(ChargeStatsField)[: self.fields_size]:
            yield f, self.get(f)


@dataclass
class VoltageTierSample:
    """One VoltageTierStats atom."""
    values: Dict[VoltageTierField, Number] = field(default_factory=dict)
    fields_size: int = VOLTAGE_TIER_BASE_SIZE

    def get(self, f: VoltageTierField) -> Number:
        return self.values.get(f, 0.0 if is_float_field(f) else 0)

    def set(self, f: VoltageTierField, value: Number) -> None:
        self.values[f] = float(value) if is_float_field(f) else int(value)

    def populated(self) -> Iterator[Tuple[VoltageTierField, Number]]:
        for f in list(VoltageTierField)[: self.fields_size]:
            yield f, self.get(f)


@dataclass
class WirelessTierStats:
    pout_min: int = 0
    pout_avg: int = 0
    pout_max: int = 0
    of_freq: int = 0


@dataclass
class StatsAtom:
    """The dense, fixed‑schema value array handed to a sink."""
    atom_id: int
    values: List[Number]
    label: Optional[str] = None
