"""Tests for parent genotype validation reports."""

from punnett_engine import GenotypeParser, ParseMode, validate_genotypes
from punnett_engine.validator import GenotypeValidator, ValidationLevel


def parse(genotype, mode=ParseMode.FLAT):
    return GenotypeParser(mode).parse(genotype)


def test_valid_pair_has_no_errors():
    report = validate_genotypes(parse("Bb Ee"), parse("bb ee"))

    assert report.is_valid
    assert report.error_count == 0
    assert report.warning_count == 0


def test_missing_genotype_short_circuits_other_checks():
    report = validate_genotypes(parse(""), parse("Bb Ee"))

    assert not report.is_valid
    assert [r.code for r in report.results] == ["missing_genotype"]
    assert report.get_errors()[0].details == {"parents": ["parent1"]}


def test_first_error_converts_to_validation_error():
    report = validate_genotypes(parse("Bb"), parse("BbEe"))
    error = report.first_error()

    assert error.code == "length_mismatch"
    assert error.user_message == "Parent genotypes must have the same number of alleles"


def test_odd_allele_count_level_depends_on_strict():
    lenient = GenotypeValidator(strict=False).validate(parse("BbE"), parse("bbe"))
    strict = GenotypeValidator(strict=True).validate(parse("BbE"), parse("bbe"))

    assert lenient.is_valid
    assert lenient.get_warnings()[0].code == "odd_allele_count"
    assert not strict.is_valid
    assert strict.get_errors()[0].level == ValidationLevel.ERROR


def test_unknown_alleles_reported_as_info():
    report = validate_genotypes(parse("Xx"), parse("xx"))

    assert report.is_valid
    info = [r for r in report.results if r.level == ValidationLevel.INFO]
    assert info[0].details == {"alleles": ["X", "x"]}


def test_report_to_dict_and_str():
    report = validate_genotypes(parse("Bb"), parse("Bbe"))
    data = report.to_dict()

    assert data["is_valid"] is False
    assert data["error_count"] == 1
    assert data["results"][0]["code"] == "length_mismatch"
    assert "genotype length mismatch" in str(report)


def test_loci_mode_flags_unparseable_tokens():
    report = validate_genotypes(parse("Bb Qxz", ParseMode.LOCI), parse("Bb Ee", ParseMode.LOCI),
                                parse_mode=ParseMode.LOCI)

    assert report.get_errors()[0].code == "unparseable_locus"
    assert report.get_errors()[0].details == {"parent": "parent1", "tokens": ["Qxz"]}
