"""Country name normalization.

Maps free-text country names to alias groups so that "UK" and "Britain",
or "USA" and "United States", are treated as the same country.

Usage:
    same_country("uk", "britain")  # True
    parse_location_country("Manchester, Britain")  # "britain"
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

COUNTRY_ALIASES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "usa": frozenset(
            {
                "united states",
                "us",
                "usa",
                "america",
                "united states of america",
                "u.s.a",
                "u.s.",
            }
        ),
        "uk": frozenset(
            {
                "united kingdom",
                "uk",
                "great britain",
                "britain",
                "england",
                "scotland",
                "wales",
                "northern ireland",
                "u.k.",
            }
        ),
        "uae": frozenset({"united arab emirates", "uae", "emirates", "u.a.e."}),
        "canada": frozenset({"canada", "ca", "can"}),
        "mexico": frozenset({"mexico", "méxico", "mx", "mex"}),
        "india": frozenset({"india", "in", "ind", "bharat"}),
        "china": frozenset({"china", "cn", "chn", "prc", "peoples republic of china"}),
        "japan": frozenset({"japan", "jp", "jpn", "nippon"}),
        "germany": frozenset({"germany", "de", "deu", "deutschland"}),
        "france": frozenset({"france", "fr", "fra"}),
        "australia": frozenset({"australia", "au", "aus", "oz"}),
        "brazil": frozenset({"brazil", "br", "bra", "brasil"}),
    }
)


def _build_reverse_index(aliases: Mapping[str, frozenset[str]]) -> Mapping[str, frozenset[str]]:
    index: dict[str, set[str]] = {}
    for key, variants in aliases.items():
        for variant in variants:
            index.setdefault(variant, set()).add(key)
    return MappingProxyType({variant: frozenset(keys) for variant, keys in index.items()})


# variant -> canonical keys of every group containing it
_ALIAS_INDEX = _build_reverse_index(COUNTRY_ALIASES)


def normalize_country(value: str | None) -> str:
    """Trim and lowercase a country name. None becomes ""."""
    return (value or "").strip().lower()


def parse_location_country(location: str) -> str:
    """Return the normalized last comma-separated segment of a location.

    "New York, USA" -> "usa"; "Nowhere" -> "nowhere"; "Paris, " -> "".
    """
    return normalize_country(location.split(",")[-1])


def alias_groups(country: str) -> frozenset[str]:
    """Canonical keys of the alias groups containing a normalized country name."""
    return _ALIAS_INDEX.get(country, frozenset())


def same_country(first: str, second: str) -> bool:
    """True when two normalized names are equal or share an alias group."""
    if first == second:
        return True
    return bool(alias_groups(first) & alias_groups(second))
