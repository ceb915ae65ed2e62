#!/usr/bin/env python3
"""
Plot stored voltage‑tier samples.

Features
--------
* Reads the ``voltage_tier_stats`` table written by ``SqliteSink``.
* One subplot per metric family (temperature, battery current, input
  current limit), min/avg/max drawn per voltage tier.
* The figure is saved to PNG (optional) and displayed with plt.show().
"""

import argparse
import sqlite3

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

METRICS = {
    "Temperature (0.1°C)": ("temp_min", "temp_avg", "temp_max"),
    "Battery current (mA)": ("ibatt_min", "ibatt_avg", "ibatt_max"),
    "Input current limit (mA)": ("icl_min", "icl_avg", "icl_max"),
}


# ----------------------------------------------------------------------
# Helper – fetch tier samples
# ----------------------------------------------------------------------
def fetch_tier_data(conn) -> pd.DataFrame:
    sql = """
    SELECT *
    FROM voltage_tier_stats
    ORDER BY recorded_at ASC, row_id ASC
    """
    df = pd.read_sql_query(sql, conn)
    if df.empty:
        return df
    df["recorded_at"] = pd.to_datetime(df["recorded_at"])
    return df


def summarize_by_tier(df: pd.DataFrame) -> pd.DataFrame:
    """Mean of every min/avg/max column per voltage tier, plus a sample count."""
    cols = [c for group in METRICS.values() for c in group]
    summary = df.groupby("voltage_tier")[cols].mean()
    summary["samples"] = df.groupby("voltage_tier").size()
    return summary.reset_index()


# ----------------------------------------------------------------------
# Figure
# ----------------------------------------------------------------------
def draw(summary: pd.DataFrame, save_path=None) -> None:
    sns.set_style("whitegrid")
    fig, axes = plt.subplots(len(METRICS), 1, figsize=(10, 9), sharex=True)

    for ax, (title, (lo, avg, hi)) in zip(axes, METRICS.items()):
        ax.fill_between(summary["voltage_tier"], summary[lo], summary[hi],
                        alpha=0.25, color="#1f77b4", label="min–max")
        sns.lineplot(data=summary, x="voltage_tier", y=avg, ax=ax,
                     marker="o", color="#1f77b4", label="avg")
        ax.set_ylabel(title)
        ax.legend(loc="upper right")

    axes[-1].set_xlabel("Voltage tier")
    fig.suptitle("Voltage tier statistics")
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches="tight")
        print(f"Figure saved to {save_path}")
    plt.show()


def _parse_args():
    parser = argparse.ArgumentParser(
        description="Plot voltage tier statistics stored by the charge stats reporter."
    )
    parser.add_argument("-d", "--db", required=True,
                        help="Path to the SQLite database (e.g. ./charge_stats.db)")
    parser.add_argument("-o", "--output", default=None,
                        help="Optional path to save the figure (PNG). If omitted, only display.")
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    conn = sqlite3.connect(args.db, detect_types=sqlite3.PARSE_DECLTYPES)
    try:
        data = fetch_tier_data(conn)
    finally:
        conn.close()
    if data.empty:
        raise SystemExit("no voltage tier samples stored yet")
    draw(summarize_by_tier(data), save_path=args.output)
