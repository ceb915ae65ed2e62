import matplotlib
import pandas as pd

matplotlib.use("Agg")

from tier_stats_plot import METRICS, summarize_by_tier  # noqa: E402


def make_frame():
    rows = [
        (1, 10, 20, 30, -200, -150, -100, 50, 55, 60),
        (1, 12, 22, 32, -220, -170, -120, 52, 57, 62),
        (2, 14, 24, 34, -300, -250, -200, 70, 75, 80),
    ]
    cols = ["voltage_tier"] + [c for group in METRICS.values() for c in group]
    return pd.DataFrame(rows, columns=cols)


def test_summary_averages_each_tier():
    summary = summarize_by_tier(make_frame())
    assert list(summary["voltage_tier"]) == [1, 2]

    tier_1 = summary[summary["voltage_tier"] == 1].iloc[0]
    assert tier_1["temp_min"] == 11.0
    assert tier_1["ibatt_avg"] == -160.0
    assert tier_1["icl_max"] == 61.0
    assert tier_1["samples"] == 2

    tier_2 = summary[summary["voltage_tier"] == 2].iloc[0]
    assert tier_2["temp_avg"] == 24.0
    assert tier_2["samples"] == 1


def test_summary_has_one_column_per_metric():
    summary = summarize_by_tier(make_frame())
    expected = {"voltage_tier", "samples"} | {c for g in METRICS.values() for c in g}
    assert set(summary.columns) == expected
