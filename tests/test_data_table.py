"""Tests for result tables."""

from punnett_engine import ProbabilityTable, calculate, create_result_data, reference_markdown


def test_table_display_and_markdown():
    table = ProbabilityTable.from_result(calculate("Bb", "Bb"))

    assert table.to_display_dict() == [
        {"genotype": "Bb", "probability": "50.00%", "phenotype": "Black"},
        {"genotype": "BB", "probability": "25.00%", "phenotype": "Black"},
        {"genotype": "bb", "probability": "25.00%", "phenotype": "Brown/Liver/Chocolate"},
    ]
    lines = table.to_markdown(precision=1).splitlines()
    assert lines[0] == "| Genotype | Probability | Phenotype |"
    assert lines[2] == "| Bb | 50.0% | Black |"


def test_empty_table_renders_nothing():
    assert ProbabilityTable.from_result(calculate("", "Bb")).to_markdown() == ""


def test_create_result_data():
    data = create_result_data(calculate("Bb Ee", "Bb ee"))

    assert data["warnings"] == []
    assert sum(data["phenotype_summary"].values()) == 100.0
    assert data["table_markdown"].startswith("| Genotype")


def test_reference_markdown_lists_every_locus():
    text = reference_markdown()

    assert "| K Locus (Dominant Black) | Kky |" in text
    assert len(text.splitlines()) == 2 + 7
