"""Tests for the command line front end."""

import json

import main


def test_main_prints_probability_table(capsys):
    status = main.main(["Bb", "Bb"])
    out = capsys.readouterr().out

    assert status == 0
    assert "| Bb | 50.00% | Black |" in out
    assert "Brown/Liver/Chocolate" in out


def test_main_reports_validation_error(capsys):
    status = main.main(["Bb", "BbEe"])
    out = capsys.readouterr().out

    assert status == 1
    assert "genotype length mismatch" in out


def test_main_traits_only(capsys):
    status = main.main(["--traits"])
    out = capsys.readouterr().out

    assert status == 0
    assert "K Locus (Dominant Black)" in out


def test_main_punnett_with_loci_parsing(capsys):
    status = main.main(["Kky", "kbrky", "--parse", "loci", "--punnett"])
    out = capsys.readouterr().out

    assert status == 0
    assert "Brindle" in out
    assert "kyky" in out


def test_main_punnett_reports_validation_error(capsys):
    status = main.main(["Bb", "", "--punnett"])

    assert status == 1
    assert "missing genotype" in capsys.readouterr().out


def test_main_save_writes_json_and_images(tmp_path):
    status = main.main(["Bb Ee", "bb ee", "--save", "--punnett", "--no-display",
                        "--output", str(tmp_path)])

    assert status == 0
    json_files = list(tmp_path.glob("offspring_*.json"))
    assert len(json_files) == 1
    data = json.loads(json_files[0].read_text(encoding="utf-8"))
    assert data["success"] is True
    assert len(data["punnett"]) == 2
    assert len(list(tmp_path.glob("*_chart.png"))) == 1
    assert len(list(tmp_path.glob("*_punnett_*.png"))) == 2
