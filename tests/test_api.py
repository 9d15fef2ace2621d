"""Tests for the Flask API."""

import pytest


def test_index_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "/calculate" in response.get_json()["endpoints"]


def test_traits_and_alleles(client):
    traits = client.get("/traits").get_json()["traits"]
    alleles = client.get("/alleles").get_json()["alleles"]

    assert traits[0] == {
        "locus": "B",
        "name": "B Locus (Black/Brown)",
        "value": "Bb",
        "description": "B = Black pigment (dominant), b = brown/liver pigment (recessive)",
    }
    assert {"symbol": "kbr", "label": "Brindle", "dominant": False} in alleles


def test_calculate_monohybrid(client):
    response = client.post("/calculate", json={"parent1": "Bb", "parent2": "Bb"})
    data = response.get_json()

    assert response.status_code == 200
    assert data["success"] is True
    assert [r["genotype"] for r in data["results"]] == ["Bb", "BB", "bb"]
    assert data["results"][0]["probability"] == 50.0
    assert data["table"]["table_display"][0]["probability"] == "50.00%"
    assert "images" not in data


def test_calculate_with_options_and_chart(client):
    response = client.post("/calculate", json={
        "parent1": "Bb Ee",
        "parent2": "Bb Ee",
        "aggregation": "joint",
        "precision": 1,
        "include_chart": True,
    })
    data = response.get_json()

    assert response.status_code == 200
    assert data["aggregation"] == "joint"
    assert len(data["results"]) == 9
    assert data["images"]["chart"].startswith("data:image/png;base64,")


@pytest.mark.parametrize(
    "body, code",
    [
        ({"parent1": "", "parent2": "Bb"}, "missing_genotype"),
        ({"parent2": "Bb"}, "missing_genotype"),
        ({"parent1": "Bb", "parent2": "BbEe"}, "length_mismatch"),
    ],
)
def test_calculate_validation_errors_are_400(client, body, code):
    response = client.post("/calculate", json=body)
    data = response.get_json()

    assert response.status_code == 400
    assert data["success"] is False
    assert data["error"]["kind"] == "validation"
    assert data["error"]["code"] == code


def test_calculate_internal_error_is_500(client):
    response = client.post("/calculate", json={"parent1": 12, "parent2": "Bb"})

    assert response.status_code == 500
    assert response.get_json()["error"]["kind"] == "calculation"


def test_calculate_bad_option_is_400(client):
    response = client.post("/calculate", json={"parent1": "Bb", "parent2": "Bb", "parse_mode": "xml"})

    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "invalid_request"


def test_punnett_squares(client):
    response = client.post("/punnett", json={"parent1": "Kky", "parent2": "kbrky", "parse_mode": "loci"})
    data = response.get_json()

    assert response.status_code == 200
    assert data["squares"][0]["cells"] == [["Kkbr", "Kky"], ["kbrky", "kyky"]]


def test_punnett_validation_error(client):
    response = client.post("/punnett", json={"parent1": "Bb"})

    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "missing_genotype"


@pytest.mark.parametrize("parse_mode", ["flat", "loci"])
def test_punnett_non_string_parent_is_json_500(client, parse_mode):
    response = client.post("/punnett", json={"parent1": 12, "parent2": "Bb", "parse_mode": parse_mode})
    data = response.get_json()

    assert response.status_code == 500
    assert data["success"] is False
    assert data["error"]["kind"] == "calculation"
