#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
File: stats_db.py
Description:
    Low‑level DAO (Data‑Access‑Object) over an embedded SQLite database that
    keeps the atoms reported by the charge stats reporter, one table per atom:

        • charge_stats        – 17 slot columns + recorded_at
        • voltage_tier_stats  – 20 slot columns + recorded_at

    Column names are the lower‑cased field names of ``ChargeStatsField`` and
    ``VoltageTierField``, so a row maps 1‑to‑1 to a ``StatsAtom``.
"""
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Type

from models import ChargeStatsField, StatsAtom, VoltageTierField, is_float_field

TABLES: Dict[str, Type] = {
    "charge_stats": ChargeStatsField,
    "voltage_tier_stats": VoltageTierField,
}


def columns(fields) -> List[str]:
    return [f.name.lower() for f in fields]


class StatsDB:
    """Insert / list wrapper for the charge_stats and voltage_tier_stats tables."""

    def __init__(self, db_path: str | Path = "charge_stats.db"):
        self.conn = sqlite3.connect(db_path, detect_types=sqlite3.PARSE_DECLTYPES)
        self.conn.row_factory = sqlite3.Row
        self._ensure_schema()

    # --------------------------------------------------------------
    # Schema creation
    # --------------------------------------------------------------
    def _ensure_schema(self) -> None:
        cur = self.conn.cursor()
        for table, fields in TABLES.items():
            cols = ",\n".join(
                f"    {f.name.lower()} {'REAL' if is_float_field(f) else 'INTEGER'} DEFAULT 0"
                for f in fields
            )
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    row_id      INTEGER PRIMARY KEY AUTOINCREMENT,
                {cols},
                    recorded_at TEXT NOT NULL
                );
                """
            )
        self.conn.commit()

    # ==============================================================
    #                     INSERT
    # ==============================================================
    def _insert(self, table: str, values: List, recorded_at: datetime) -> int:
        cols = columns(TABLES[table])
        if len(values) != len(cols):
            raise ValueError(f"{table}: expected {len(cols)} values, got {len(values)}")
        sql = f"""
            INSERT INTO {table} ({", ".join(cols)}, recorded_at)
            VALUES ({", ".join("?" * (len(cols) + 1))});
        """
        cur = self.conn.cursor()
        cur.execute(sql, (*values, recorded_at.isoformat(sep=" ")))
        self.conn.commit()
        return cur.lastrowid

    def insert_charge_stats(self, atom: StatsAtom, recorded_at: datetime | None = None) -> int:
        return self._insert("charge_stats", atom.values, recorded_at or datetime.now())

    def insert_voltage_tier_stats(self, atom: StatsAtom, recorded_at: datetime | None = None) -> int:
        return self._insert("voltage_tier_stats", atom.values, recorded_at or datetime.now())

    # ==============================================================
    #                     LIST
    # ==============================================================
    def _list(self, table: str) -> Iterable[Dict]:
        cur = self.conn.execute(f"SELECT * FROM {table} ORDER BY row_id;")
        for r in cur:
            yield {k: r[k] for k in r.keys()}

    def list_charge_stats(self) -> List[Dict]:
        return list(self._list("charge_stats"))

    def list_voltage_tier_stats(self) -> List[Dict]:
        return list(self._list("voltage_tier_stats"))

    # ------------------------------------------------------------------
    # Clean shutdown
    # ------------------------------------------------------------------
    def close(self) -> None:
        self.conn.close()
