"""
Tests for the feature-cluster command line.
"""

import json

import pytest

from feature_cluster.cli import build_parser, main


@pytest.fixture
def groups_csv(tmp_path):
    lines = ["name,x,y"]
    lines += [f"a{y},1,{y}" for y in range(5)]
    lines += [f"b{y + 4},9,{y}" for y in range(-4, 1)]
    path = tmp_path / "groups.csv"
    path.write_text("\n".join(lines) + "\n")
    return path


def test_parser_defaults():
    args = build_parser().parse_args(["data.csv"])
    assert args.algorithm == "automatic"
    assert args.measure == "squared_euclidean"
    assert args.threshold is None
    assert args.json is False


def test_text_output(groups_csv, capsys):
    code = main([str(groups_csv), "--algorithm", "greedy", "--threshold", "18", "--id-column", "name"])

    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out[0].startswith("2 cluster(s) from 10 row(s), silhouette ")
    assert out[1] == "[0] size=5: a0, a1, a2, a3, a4"
    assert out[2] == "[1] size=5: b0, b1, b2, b3, b4"


def test_json_output(groups_csv, capsys):
    code = main(
        [str(groups_csv), "--algorithm", "kmeans", "-k", "2", "--seed", "0", "--id-column", "name", "--json"]
    )

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["algorithm"] == "kmeans"
    assert payload["measure"] == "squared_euclidean"
    assert payload["clusters"] == [
        ["a0", "a1", "a2", "a3", "a4"],
        ["b0", "b1", "b2", "b3", "b4"],
    ]
    assert payload["silhouette"] > 0.5


def test_automatic_with_euclidean(groups_csv, capsys):
    code = main([str(groups_csv), "--measure", "euclidean", "--id-column", "name", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert len(payload["clusters"]) == 2


def test_missing_k_is_an_error(groups_csv, capsys):
    assert main([str(groups_csv), "--algorithm", "spectral", "--id-column", "name"]) == 2
    assert capsys.readouterr().out == ""


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.csv")]) == 2


def test_unknown_algorithm_rejected_by_parser(groups_csv):
    with pytest.raises(SystemExit):
        main([str(groups_csv), "--algorithm", "dbscan"])
