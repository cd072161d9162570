import json

from stack_solver.__main__ import main
from stack_solver.solution_io import SOLUTION_DIR_ENV

PALLET = {"length": 120, "width": 80, "height": 15, "maxHeight": 200, "weight": 25, "maxWeight": 1000}
BOX = {"length": 40, "width": 30, "height": 20, "weight": 10}


def test_cli_solve_prints_json(tmp_path, capsys):
    request = tmp_path / "request.json"
    request.write_text(json.dumps({"pallet": PALLET, "box": BOX}), encoding="utf-8")

    assert main(["solve", str(request)]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["metrics"]["totalBoxes"] == 72


def test_cli_reports_errors(tmp_path, capsys):
    request = tmp_path / "request.json"
    request.write_text(json.dumps({"pallet": PALLET, "box": {**BOX, "length": 150}}), encoding="utf-8")

    assert main(["solve", str(request)]) == 1
    assert "larger than the pallet" in capsys.readouterr().err


def test_cli_combine_and_save(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv(SOLUTION_DIR_ENV, str(tmp_path / "saved"))
    request = tmp_path / "solve.json"
    request.write_text(
        json.dumps(
            {
                "pallet": PALLET,
                "boxes": [
                    {**BOX, "quantity": 16},
                    {"length": 50, "width": 30, "height": 25, "weight": 5, "quantity": 12},
                ],
            }
        ),
        encoding="utf-8",
    )
    assert main(["solve", str(request)]) == 0
    batch = json.loads(capsys.readouterr().out)

    combine_request = tmp_path / "combine.json"
    combine_request.write_text(json.dumps({"solutions": batch["results"]}), encoding="utf-8")
    assert main(["combine", str(combine_request), "--save", "mixed"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["metrics"]["totalBoxes"] == 28
    assert (tmp_path / "saved" / "mixed.json").exists()
