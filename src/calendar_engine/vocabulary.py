#!/usr/bin/env python3
"""
Agricultural Calendar Engine - Vocabulary Tables
Keyword tables and patterns shared by the timeline, classifier and mapper components
"""

import re
from typing import Dict, FrozenSet, Pattern, Tuple

# Timeline header patterns
MONTH_PATTERN: Pattern = re.compile(
    r'^(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?|'
    r'sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\b\.?',
    re.IGNORECASE,
)
NUMBERED_WEEK_PATTERN: Pattern = re.compile(
    r'(?<![a-z])(?:week|wk)\.?\s*\d+|\b\d+(?:st|nd|rd|th)?\s*(?:week|wk)\b', re.IGNORECASE
)
BARE_WEEK_LABEL: Pattern = re.compile(r'^(?:week|wk)s?\.?\s*\d*$', re.IGNORECASE)
DATE_RANGE_PATTERN: Pattern = re.compile(r'^\d{1,2}\s*[-–/]\s*\d{1,2}$')
DAY_NUMBER_PATTERN: Pattern = re.compile(r'^\d{1,2}$')
ABSOLUTE_DATE_PATTERN: Pattern = re.compile(r'\d{1,2}[-/]\d{1,2}|\b(?:19|20)\d{2}\b')
YEAR_PATTERN: Pattern = re.compile(r'20\d{2}')

# Activity label patterns
BARE_NUMBER_PATTERN: Pattern = re.compile(r'^\(?\d+(?:\.\d+)*[.)]?$')
LONE_ORDINAL_PATTERN: Pattern = re.compile(r'^\d+(?:st|nd|rd|th)[.):]?$', re.IGNORECASE)
ROMAN_UPPER_PATTERN: Pattern = re.compile(r'^(?=[IVXLC])(?:XC|XL|L?X{0,3})(?:IX|IV|V?I{0,3})[.)]?$')
ROMAN_LOWER_PATTERN: Pattern = re.compile(r'^(?=[ivxlc])(?:xc|xl|l?x{0,3})(?:ix|iv|v?i{0,3})[.)]?$')
LEADING_ORDINAL_PATTERN: Pattern = re.compile(
    r'^(?P<token>\d+(?:st|nd|rd|th)?|first|second|third|fourth|fifth)[.):]?\s+(?P<rest>\S.*)$',
    re.IGNORECASE,
)

NON_ACTIVITY_TOKENS: FrozenSet[str] = frozenset({
    "date", "dates", "calendar date", "s/n", "s/no", "sn", "s.n", "no", "no.",
    "stage of activity", "stages of activity", "activity", "activities",
    "month", "months", "week", "weeks", "total", "totals", "summary",
    "remark", "remarks", "comment", "comments", "notes",
})

AGRICULTURAL_KEYWORDS: Tuple[str, ...] = (
    "weed", "fertili", "spray", "pest", "disease", "control", "management",
    "site", "land", "plant", "sow", "harvest", "treatment", "storage",
    "application", "seed", "nursery", "transplant", "irrigat", "vaccin",
    "brood", "feed", "thinning", "rogu", "scout", "drying", "threshing",
)

# Commodity vocabulary
CROP_COMMODITIES: Tuple[str, ...] = (
    "maize", "rice", "cassava", "yam", "plantain", "cocoa", "coffee",
    "tomato", "pepper", "onion", "okra", "garden egg", "beans",
    "groundnut", "soybean", "cowpea", "oil palm", "coconut",
)

POULTRY_PATTERNS: Dict[str, Tuple[str, ...]] = {
    "layer": ("layer", "egg production", "laying hen"),
    "broiler": ("broiler", "meat production", "chicken meat", "fryer"),
    "cockerel": ("cockerel", "rooster"),
    "duck": ("duck", "waterfowl"),
    "turkey": ("turkey",),
    "guinea fowl": ("guinea fowl",),
    "goose": ("goose",),
}
POULTRY_COMMODITIES: Tuple[str, ...] = tuple(POULTRY_PATTERNS)

GENERIC_POULTRY_TERMS: Tuple[str, ...] = ("poultry", "chicken", "hen", "chick", "flock")
GENERIC_CROP_TERMS: Tuple[str, ...] = (
    "crop", "cereal", "grain", "planting", "sowing", "harvest", "land preparation",
    "site selection", "fertilizer", "fertiliser",
)
CYCLE_ONLY_TERMS: Tuple[str, ...] = (
    "production week", "cycle week", "brooding", "layer phase", "starter phase",
    "grower phase", "finisher phase", "vaccination schedule", "vaccination",
)

DEFAULT_POULTRY_COMMODITY = "layer"
DEFAULT_CROP_COMMODITY = "maize"

TITLE_MARKERS: Tuple[str, ...] = ("CALENDAR", "PRODUCTION", "SEASON", "CYCLE")

SEASON_TERMS: Tuple[str, ...] = ("major", "minor", "dry", "wet")
DEFAULT_SEASON = "main"

BREED_TYPES: Tuple[Tuple[str, str], ...] = (
    ("cobb", "Cobb 500"),
    ("ross", "Ross 308"),
    ("isa", "Isa Brown"),
    ("lohmann", "Lohmann Brown"),
)

# Activity name -> canonical color, first match wins
WEEDING_ORDINAL_COLORS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("1st", "first"), "#FF0000"),
    (("2nd", "second"), "#DC143C"),
    (("3rd", "third"), "#B22222"),
)
WEEDING_DEFAULT_COLOR = "#FF0000"

KEYWORD_COLORS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("post harvest", "post-harvest", "postharvest"), "#993366"),
    (("harvest",), "#008000"),
    (("pest", "disease"), "#FF4500"),
    (("fertilizer", "fertiliser"), "#FFFF00"),
    (("site",), "#00B0F0"),
    (("land",), "#BF9000"),
    (("plant", "sow"), "#000000"),
)


def month_key(text: str) -> str:
    """Three-letter lowercase key for a month label ('' when not a month)."""
    match = MONTH_PATTERN.match(text.strip())
    return match.group(1)[:3].lower() if match else ""
