from __future__ import annotations

import re


US_STATE_BY_CODE = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "FL": "Florida",
    "GA": "Georgia",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
    "DC": "District of Columbia",
    "PR": "Puerto Rico",
    "GU": "Guam",
    "VI": "Virgin Islands",
    "MP": "Northern Mariana Islands",
    "AS": "American Samoa",
}

US_STATE_CODE_BY_NAME = {name.lower(): code for code, name in US_STATE_BY_CODE.items()}

COUNTRY_SHORT_NAMES = {
    "united states of america": "USA",
    "united kingdom of great britain and northern ireland": "UK",
}

_TRAILING_PARENTHETICAL = re.compile(r"\s*\([^)]*\)\s*$")


def strip_parenthetical(value: str) -> str:
    return _TRAILING_PARENTHETICAL.sub("", value).strip()


def normalize_country_name(raw: str | None) -> str:
    """Short colloquial country name: 'United States of America' -> 'USA', 'Congo (Kinshasa)' -> 'Congo'."""
    if not raw:
        return ""
    stripped = strip_parenthetical(raw)
    return COUNTRY_SHORT_NAMES.get(stripped.lower(), stripped)


def state_name_for_code(code: str | None) -> str | None:
    if not code:
        return None
    return US_STATE_BY_CODE.get(code.strip().upper())


def state_code_for_name(name: str | None) -> str | None:
    if not name:
        return None
    return US_STATE_CODE_BY_NAME.get(name.strip().lower())
