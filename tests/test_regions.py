from spfcheck.services.regions import (
    US_STATE_BY_CODE,
    normalize_country_name,
    state_code_for_name,
    state_name_for_code,
)


def test_normalize_country_name_shortens_long_forms() -> None:
    assert normalize_country_name("United States of America") == "USA"
    assert normalize_country_name("united kingdom of great britain and northern ireland") == "UK"


def test_normalize_country_name_strips_trailing_parenthetical() -> None:
    assert normalize_country_name("Country (Region)") == "Country"
    assert normalize_country_name("  Netherlands (the)  ") == "Netherlands"
    assert normalize_country_name("United States of America (the)") == "USA"


def test_normalize_country_name_passes_unknown_names_through() -> None:
    assert normalize_country_name("Australia") == "Australia"
    assert normalize_country_name("Côte d'Ivoire") == "Côte d'Ivoire"
    assert normalize_country_name(None) == ""
    assert normalize_country_name("") == ""


def test_state_table_covers_states_dc_and_territories() -> None:
    assert len(US_STATE_BY_CODE) == 56
    for code in ("DC", "PR", "GU", "VI", "MP", "AS"):
        assert code in US_STATE_BY_CODE


def test_state_lookups_are_case_insensitive_both_ways() -> None:
    assert state_name_for_code("tx") == "Texas"
    assert state_name_for_code("ZZ") is None
    assert state_code_for_name("new york") == "NY"
    assert state_code_for_name("DISTRICT OF COLUMBIA") == "DC"
    assert state_code_for_name("Ontario") is None
    assert state_code_for_name(None) is None
