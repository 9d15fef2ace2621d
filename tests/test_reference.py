"""Tests for the static locus reference tables."""

from punnett_engine import (
    ALLELE_CATALOGUE,
    COMMON_TRAITS,
    add_trait_to_genotype,
    find_allele,
    find_trait,
)


def test_common_traits_table():
    assert [t.locus for t in COMMON_TRAITS] == ["B", "E", "K", "A", "D", "M", "S"]
    assert find_trait("K").value == "Kky"
    assert find_trait("A Locus (Agouti)").value == "Aay"
    assert find_trait("Z") is None
    assert find_trait("") is None


def test_allele_catalogue():
    symbols = [a.symbol for a in ALLELE_CATALOGUE]

    assert "kbr" in symbols
    assert len(symbols) == len(set(symbols))
    assert find_allele("kbr").label == "Brindle"
    assert find_allele("B").is_dominant
    assert not find_allele("ay").is_dominant
    assert find_allele("Q") is None


def test_add_trait_to_genotype():
    assert add_trait_to_genotype("", "Bb") == "Bb"
    assert add_trait_to_genotype("Bb", "Ee") == "Bb Ee"
    assert add_trait_to_genotype("Bb ", "K") == "Bb Kky"
    assert add_trait_to_genotype(None, "Mm") == "Mm"


def test_trait_to_dict():
    data = find_trait("B").to_dict()

    assert data["locus"] == "B"
    assert data["value"] == "Bb"
