"""
Smoke tests for the benchmark script.
"""

import csv

from sptree import bench


def test_run_once_matches_reference():
    r = bench.run_once(60, 240, seed=3)

    assert r.n == 60
    assert r.m == 240
    assert r.max_abs_err == 0.0
    assert r.counters["settled"] >= 1
    assert r.engine_ms >= 0.0


def test_run_once_on_grid():
    r = bench.run_once(16, 0, graph_type="grid", seed=1)

    assert r.max_abs_err == 0.0
    assert r.counters["settled"] == 16


def test_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "bench.csv"

    code = bench.main(["--trials", "2", "--sizes", "20,60", "30,90", "--out-csv", str(out)])

    assert code == 0
    with out.open(newline="") as fh:
        rows = list(csv.reader(fh))
    assert rows[0][:4] == ["n", "m", "graph_type", "trial"]
    assert len(rows) == 1 + 4
    assert {row[-1] for row in rows[1:]} == {"0.0"}
    assert "settled" in capsys.readouterr().out
