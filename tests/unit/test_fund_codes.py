"""Unit tests for fund code normalization."""

import pytest

from src.domain.services.fund_codes import (
    BASELINE_FUND_CODES,
    LIFECYCLE_INCOME,
    normalize_fund_code,
)


# --- lifecycle income spellings ---

@pytest.mark.parametrize(
    "raw", ["L-Income", "lincome", "L INCOME", "LIncome", "L-INCOME", " l_income "]
)
def test_lifecycle_income_variants_share_one_code(raw):
    assert normalize_fund_code(raw) == LIFECYCLE_INCOME


def test_lifecycle_income_is_distinct_from_dated_fund():
    assert normalize_fund_code("L Income") != normalize_fund_code("L2030")


# --- base funds ---

@pytest.mark.parametrize("code", ["G", "F", "C", "S", "I"])
def test_base_codes_pass_through(code):
    assert normalize_fund_code(code) == code


@pytest.mark.parametrize("raw,expected", [("g", "G"), (" c ", "C"), ("i", "I")])
def test_base_codes_are_case_insensitive(raw, expected):
    assert normalize_fund_code(raw) == expected


def test_fund_suffix_alias_maps_to_base_code():
    assert normalize_fund_code("G Fund") == "G"


# --- dated lifecycle funds ---

@pytest.mark.parametrize("raw", ["L2050", "l2050", "L 2050", "L-2050"])
def test_dated_lifecycle_spellings(raw):
    assert normalize_fund_code(raw) == "L2050"


# --- unknown / empty ---

def test_unknown_code_is_trimmed_and_uppercased():
    assert normalize_fund_code("  xyz fund ") == "XYZ FUND"


def test_empty_and_none_normalize_to_empty_string():
    assert normalize_fund_code("   ") == ""
    assert normalize_fund_code(None) == ""


def test_normalization_is_idempotent():
    for code in ["L Income", "g", "l-2075", "weird"]:
        once = normalize_fund_code(code)
        assert normalize_fund_code(once) == once


def test_baseline_codes_are_the_five_base_funds_plus_income():
    assert BASELINE_FUND_CODES == ("G", "F", "C", "S", "I", "L-INCOME")
