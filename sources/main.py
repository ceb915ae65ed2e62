#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""main.py
Minimal driver that periodically drains the charger metrics files and
reports the resulting atoms.  Atoms are logged and stored in the SQLite
file ``DB_FILE`` (see tier_stats_plot.py to look at them).

Only one driver may run at a time: the read‑then‑clear protocol on the
metrics files is not safe under concurrent drains.
"""

import os
import time
from pathlib import Path

from app_logger import logger
from charge_stats_reporter import ChargeStatsReporter
from emitter import Emitter
from models import SourceId, StatsAtom
from side_channel_store import SideChannelStore
from stats_db import StatsDB
from stats_sinks import LoggingSink, SqliteSink
from throttle_gate import ThrottleGate

# ----------------------------------------------------------------------
# Configuration – override with CHARGE_STATS_* environment variables
# ----------------------------------------------------------------------
SYSFS_ROOT = Path(os.getenv("CHARGE_STATS_ROOT", "/"))
DB_FILE = Path(os.getenv("CHARGE_STATS_DB", "charge_stats.db"))
POLL_INTERVAL_S = float(os.getenv("CHARGE_STATS_POLL_SECS", "60"))

SOURCE_PATHS = {
    SourceId.PRIMARY: "sys/class/power_supply/battery/charge_stats",
    SourceId.WIRELESS: "sys/class/power_supply/wireless/device/charge_stats",
    SourceId.PCA: "sys/class/power_supply/pca94xx-mains/device/chg_stats",
    SourceId.THERMAL: "sys/devices/platform/google,charger/thermal_stats",
    SourceId.GCHARGER: "sys/devices/platform/google,charger/gcharger_stats",
    SourceId.DUAL_BATTERY: "sys/class/power_supply/dualbatt/dbatt_stats",
}


class TeeSink:
    """Log every atom, then store it."""

    def __init__(self, *sinks):
        self.sinks = sinks

    def report(self, atom: StatsAtom) -> bool:
        return all([sink.report(atom) for sink in self.sinks])


def build_components(db: StatsDB) -> ChargeStatsReporter:
    """
    Build the whole stack and return a ready‑to‑use reporter.
    """
    # 1️⃣  Sources
    store = SideChannelStore.from_paths(
        {sid: SYSFS_ROOT / rel for sid, rel in SOURCE_PATHS.items()}
    )

    # 2️⃣  Sink + emitter
    emitter = Emitter(TeeSink(LoggingSink(), SqliteSink(db)))

    # 3️⃣  Reporter with a process‑wide throttle
    return ChargeStatsReporter(store, emitter, throttle=ThrottleGate())


def main() -> None:
    db = StatsDB(db_path=DB_FILE)
    reporter = build_components(db)
    logger.info("draining %s every %.0fs", SYSFS_ROOT / SOURCE_PATHS[SourceId.PRIMARY],
                POLL_INTERVAL_S)
    try:
        while True:
            reporter.drain()
            time.sleep(POLL_INTERVAL_S)
    except KeyboardInterrupt:
        print("\nProgram terminated by user.")
    finally:
        db.close()


# ----------------------------------------------------------------------
# Main entry point
# ----------------------------------------------------------------------
if __name__ == "__main__":
    main()
