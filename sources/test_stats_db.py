#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Round trip of reported atoms through the SQLite sink."""

import sqlite3

import matplotlib

matplotlib.use("Agg")

from conftest import logged  # noqa: E402
from emitter import to_atom  # noqa: E402
from format_resolver import FormatResolver  # noqa: E402
from models import StatsAtom  # noqa: E402
from session_assembler import SessionAssembler  # noqa: E402
from stats_db import StatsDB  # noqa: E402
from stats_sinks import LoggingSink, SqliteSink  # noqa: E402
from tier_sample_parser import TierSampleParser  # noqa: E402
from tier_stats_plot import fetch_tier_data, summarize_by_tier  # noqa: E402

SUMMARY = "3,9000,2000, 80,4400,90,4450 3100 5,2"
TIER_LINES = [
    "1, 85.5,1200,320, 10,5,2, 15,18,22, -200,-150,-100, 50,55,60",
    "1, 86.0,1210,322, 11,5,2, 17,20,24, -220,-170,-120, 52,57,62",
    "2, 90.2,1300,330, 20,6,3, 16,19,23, -210,-160,-110, 51,56,61",
]


def session_atom() -> StatsAtom:
    record = SessionAssembler().assemble(FormatResolver().resolve(SUMMARY))
    return to_atom(record)


def test_store_and_list(tmp_path):
    db = StatsDB(tmp_path / "charge_stats.db")
    sink = SqliteSink(db)
    try:
        assert sink.report(session_atom())
        for sample in TierSampleParser().parse_stream(TIER_LINES):
            assert sink.report(to_atom(sample))

        sessions = db.list_charge_stats()
        assert len(sessions) == 1
        assert sessions[0]["adapter_type"] == 3
        assert sessions[0]["csi_aggregate_type"] == 2
        assert sessions[0]["receiver_state_1"] == 0

        tiers = db.list_voltage_tier_stats()
        assert [t["voltage_tier"] for t in tiers] == [1, 1, 2]
        assert tiers[0]["soc_in"] == 85.5
    finally:
        db.close()


def test_unknown_or_malformed_atoms_are_refused(tmp_path):
    db = StatsDB(tmp_path / "charge_stats.db")
    sink = SqliteSink(db)
    try:
        assert not sink.report(StatsAtom(atom_id=1, values=[], label="Other"))
        assert not sink.report(StatsAtom(atom_id=session_atom().atom_id, values=[1, 2]))
        assert db.list_charge_stats() == []
        assert logged("unknown atom id 1")
    finally:
        db.close()


def test_logging_sink_logs_values():
    assert LoggingSink().report(session_atom())
    assert logged("ChargeStats(105038)")


def test_tier_summary_from_stored_rows(tmp_path):
    path = tmp_path / "charge_stats.db"
    db = StatsDB(path)
    sink = SqliteSink(db)
    for sample in TierSampleParser().parse_stream(TIER_LINES):
        sink.report(to_atom(sample))

    db.close()

    conn = sqlite3.connect(path)
    try:
        df = fetch_tier_data(conn)
    finally:
        conn.close()
    assert len(df) == 3

    summary = summarize_by_tier(df)
    tier_1 = summary[summary["voltage_tier"] == 1].iloc[0]
    assert tier_1["samples"] == 2
    assert tier_1["temp_avg"] == 19.0
    assert tier_1["ibatt_min"] == -210.0
