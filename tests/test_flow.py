import csv

from seating_planner import cli, csv_loader, solver


def _load(data_dir):
    return csv_loader.load_all(
        data_dir / "guests.csv", data_dir / "tables.csv", data_dir / "relationships.csv"
    )


def test_full_flow(data_dir):
    guests, tables, relationships = _load(data_dir)

    model = solver.SeatingModel()
    model.build(guests, tables, relationships)
    plan = model.solve()
    assignments = plan.assignments()

    # all guests assigned
    assert len(assignments) == len(guests)
    assert plan.unseated == []

    # table capacities respected
    assert plan.over_capacity() == []

    # conflicts avoided
    assert plan.conflicts(model.graph.conflict_of) == []

    # preference partners sit together
    assert assignments["g5"] == assignments["g6"]
    assert assignments["g2"] == assignments["g3"]


def test_cli_writes_outputs(data_dir, tmp_path, capsys):
    out_assignments = tmp_path / "out" / "assignments.csv"
    out_report = tmp_path / "out" / "report.csv"
    out_map = tmp_path / "out" / "map.html"
    code = cli.main([
        "--guests", str(data_dir / "guests.csv"),
        "--tables", str(data_dir / "tables.csv"),
        "--relationships", str(data_dir / "relationships.csv"),
        "--out-assignments", str(out_assignments),
        "--out-report", str(out_report),
        "--out-map", str(out_map),
    ])
    assert code == 0

    printed = capsys.readouterr().out.splitlines()
    assert printed[0].startswith("g1,")
    assert sum(line.startswith("[REPORT]") for line in printed) == 3

    with out_assignments.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["guest"] for r in rows] == ["g1", "g2", "g3", "g4", "g5", "g6", "g7", "g8"]
    assert all(r["table"] for r in rows)

    with out_report.open(newline="") as f:
        report = list(csv.DictReader(f))
    assert [r["table"] for r in report] == ["Head Table", "Garden", "Terrace"]
    assert {r["status"] for r in report} == {"ok"}

    assert "legend-box" in out_map.read_text(encoding="utf-8")


def test_cli_rejects_missing_tables(data_dir, tmp_path, capsys):
    empty = tmp_path / "tables.csv"
    empty.write_text("name,capacity\n")
    code = cli.main([
        "--guests", str(data_dir / "guests.csv"),
        "--tables", str(empty),
        "--relationships", str(data_dir / "relationships.csv"),
    ])
    assert code == 1
    assert "no tables" in capsys.readouterr().err


def test_cli_reports_bad_input(data_dir, tmp_path, capsys):
    bad = tmp_path / "relationships.csv"
    bad.write_text("guest_id,related_guest_id,relationship_type\ng1,g2,rival\n")
    code = cli.main([
        "--guests", str(data_dir / "guests.csv"),
        "--tables", str(data_dir / "tables.csv"),
        "--relationships", str(bad),
    ])
    assert code == 2
    assert "unknown relationship type" in capsys.readouterr().err
