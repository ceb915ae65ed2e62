# emitter.py
"""
Turn an assembled record into the sink's dense value array and hand it
over.  Telemetry is fire‑and‑forget: a failing sink is logged, never
retried and never stops the drain.
"""

from typing import List, Protocol, Union

from app_logger import logger
from errors import SinkReportError
from models import (
    CHARGE_STATS_ATOM_ID,
    CHARGE_STATS_WIDTH,
    VOLTAGE_TIER_STATS_ATOM_ID,
    VOLTAGE_TIER_WIDTH,
    ChargeSessionRecord,
    ChargeStatsField,
    Number,
    StatsAtom,
    VoltageTierField,
    VoltageTierSample,
    is_float_field,
)

Record = Union[ChargeSessionRecord, VoltageTierSample]


class StatsSink(Protocol):
    def report(self, atom: StatsAtom) -> bool: ...


def _dense(fields, width: int) -> List[Number]:
    return [0.0 if is_float_field(f) else 0 for f in list(fields)[:width]]


def to_atom(record: Record) -> StatsAtom:
    """Materialise *record* into a zero‑filled array, one slot per field."""
    if isinstance(record, ChargeSessionRecord):
        atom_id, width, label = CHARGE_STATS_ATOM_ID, CHARGE_STATS_WIDTH, "ChargeStats"
        values = _dense(ChargeStatsField, width)
    else:
        atom_id, width, label = VOLTAGE_TIER_STATS_ATOM_ID, VOLTAGE_TIER_WIDTH, "VoltageTierStats"
        values = _dense(VoltageTierField, width)

    for f, value in record.populated():
        values[f.slot] = float(value) if is_float_field(f) else int(value)
    return StatsAtom(atom_id=atom_id, values=values, label=label)


class Emitter:
    def __init__(self, sink: StatsSink):
        self.sink = sink

    def emit(self, record: Record) -> bool:
        atom = to_atom(record)
        try:
            ok = self.sink.report(atom)
            if not ok:
                raise SinkReportError(f"Unable to report {atom.label} to Stats service")
        except SinkReportError as exc:
            logger.error("%s", exc)
            return False
        except Exception as exc:
            logger.error("Unable to report %s to Stats service - %s", atom.label, exc)
            return False
        return True
