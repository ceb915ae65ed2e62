# stats_sinks.py
"""
Sinks that accept a finished ``StatsAtom``.

``LoggingSink`` only writes the atom to the log; ``SqliteSink`` stores it
through ``StatsDB`` so it can be analysed later (see tier_stats_plot.py).
"""

import sqlite3

from app_logger import logger
from models import CHARGE_STATS_ATOM_ID, VOLTAGE_TIER_STATS_ATOM_ID, StatsAtom
from stats_db import StatsDB


class LoggingSink:
    def report(self, atom: StatsAtom) -> bool:
        logger.info("%s(%d): %s", atom.label, atom.atom_id, atom.values)
        return True


class SqliteSink:
    """Persist every reported atom; unknown atoms are refused."""

    def __init__(self, db: StatsDB):
        self.db = db

    def report(self, atom: StatsAtom) -> bool:
        try:
            if atom.atom_id == CHARGE_STATS_ATOM_ID:
                row_id = self.db.insert_charge_stats(atom)
            elif atom.atom_id == VOLTAGE_TIER_STATS_ATOM_ID:
                row_id = self.db.insert_voltage_tier_stats(atom)
            else:
                logger.error("unknown atom id %d", atom.atom_id)
                return False
        except (sqlite3.Error, ValueError) as exc:
            logger.error("failed to store %s: %s", atom.label, exc)
            return False

        logger.debug("stored %s as row %d", atom.label, row_id)
        return True
