"""D&D 5E rules tables and limits used by the encounter tracker.

The tables are plain mappings so that a lookup is a dictionary access and a
table can be replaced without touching the code that reads it.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

# =============================================================================
# Encounter Difficulty (DMG p.82)
# =============================================================================

XP_THRESHOLDS_BY_LEVEL: Final[Mapping[int, Mapping[str, int]]] = MappingProxyType({
    1: {"easy": 25, "medium": 50, "hard": 75, "deadly": 100},
    2: {"easy": 50, "medium": 100, "hard": 150, "deadly": 200},
    3: {"easy": 75, "medium": 150, "hard": 225, "deadly": 400},
    4: {"easy": 125, "medium": 250, "hard": 375, "deadly": 500},
    5: {"easy": 250, "medium": 500, "hard": 750, "deadly": 1100},
    6: {"easy": 300, "medium": 600, "hard": 900, "deadly": 1400},
    7: {"easy": 350, "medium": 750, "hard": 1100, "deadly": 1700},
    8: {"easy": 450, "medium": 900, "hard": 1400, "deadly": 2100},
    9: {"easy": 550, "medium": 1100, "hard": 1600, "deadly": 2400},
    10: {"easy": 600, "medium": 1200, "hard": 1900, "deadly": 2800},
    11: {"easy": 800, "medium": 1600, "hard": 2400, "deadly": 3600},
    12: {"easy": 1000, "medium": 2000, "hard": 3000, "deadly": 4500},
    13: {"easy": 1100, "medium": 2200, "hard": 3400, "deadly": 5100},
    14: {"easy": 1250, "medium": 2500, "hard": 3800, "deadly": 5700},
    15: {"easy": 1400, "medium": 2800, "hard": 4300, "deadly": 6400},
    16: {"easy": 1600, "medium": 3200, "hard": 4800, "deadly": 7200},
    17: {"easy": 2000, "medium": 3900, "hard": 5900, "deadly": 8800},
    18: {"easy": 2100, "medium": 4200, "hard": 6300, "deadly": 9500},
    19: {"easy": 2400, "medium": 4900, "hard": 7300, "deadly": 10900},
    20: {"easy": 2800, "medium": 5700, "hard": 8500, "deadly": 12700},
})
"""Per-character XP thresholds for each difficulty tier, keyed by level."""

CR_TO_XP: Final[Mapping[str, int]] = MappingProxyType({
    "0": 10,
    "1/8": 25,
    "1/4": 50,
    "1/2": 100,
    "1": 200,
    "2": 450,
    "3": 700,
    "4": 1100,
    "5": 1800,
    "6": 2300,
    "7": 2900,
    "8": 3900,
    "9": 5000,
    "10": 5900,
    "11": 7200,
    "12": 8400,
    "13": 10000,
    "14": 11500,
    "15": 13000,
    "16": 15000,
    "17": 18000,
    "18": 20000,
    "19": 22000,
    "20": 25000,
    "21": 33000,
    "22": 41000,
    "23": 50000,
    "24": 62000,
    "25": 75000,
    "26": 90000,
    "27": 105000,
    "28": 120000,
    "29": 135000,
    "30": 155000,
})
"""Monster XP award by challenge rating string."""

FRACTIONAL_CR_VALUES: Final[Mapping[str, float]] = MappingProxyType({
    "1/8": 0.125,
    "1/4": 0.25,
    "1/2": 0.5,
})

ENCOUNTER_MULTIPLIERS: Final[tuple[tuple[int, float], ...]] = (
    (1, 1.0),
    (2, 1.5),
    (3, 2.0),
    (5, 2.5),
    (7, 3.0),
    (9, 3.5),
    (11, 4.0),
    (13, 4.5),
    (15, 5.0),
)
"""(minimum monster count, multiplier) pairs, ascending by count."""

DAILY_MEDIUM_ENCOUNTERS = 6
"""Medium encounters assumed per adventuring day for the daily budget."""

SUGGESTION_BUDGET_FLOOR = 0.7
"""Suggested groups must reach this share of the XP budget."""

MAX_SUGGESTIONS = 10

MIN_PARTY_LEVEL = 1
MAX_PARTY_LEVEL = 20

# =============================================================================
# Initiative
# =============================================================================

DEFAULT_MONSTER_DEXTERITY: Final[Mapping[str, int]] = MappingProxyType({
    "dragon": 10,
    "undead": 16,
    "giant": 13,
})
"""Baseline DEX by creature type when a stat block gives none."""

GENERIC_MONSTER_DEXTERITY = 12

MAX_CR_DEXTERITY_BONUS = 5
"""Cap on the CR-derived bump to the baseline DEX."""

# =============================================================================
# Hit Point Status (percent of max HP, lower bound inclusive)
# =============================================================================

HP_HEALTHY_PERCENT = 75.0
HP_WOUNDED_PERCENT = 50.0
HP_BLOODIED_PERCENT = 25.0

# =============================================================================
# Reminders
# =============================================================================

PRIORITY_ORDER: Final[Mapping[str, int]] = MappingProxyType({
    "critical": 0,
    "high": 1,
    "medium": 2,
    "low": 3,
})

DEFAULT_REMINDER_LIMIT = 8

# =============================================================================
# Field Validation Limits
# =============================================================================

MAX_HP_VALUE = 999
MIN_AC = 1
MAX_AC = 30
MIN_INITIATIVE = -10
MAX_INITIATIVE = 50
MAX_NAME_LENGTH = 50

STORAGE_FORMAT_VERSION = 1


__all__ = [
    # Difficulty
    "XP_THRESHOLDS_BY_LEVEL",
    "CR_TO_XP",
    "FRACTIONAL_CR_VALUES",
    "ENCOUNTER_MULTIPLIERS",
    "DAILY_MEDIUM_ENCOUNTERS",
    "SUGGESTION_BUDGET_FLOOR",
    "MAX_SUGGESTIONS",
    "MIN_PARTY_LEVEL",
    "MAX_PARTY_LEVEL",
    # Initiative
    "DEFAULT_MONSTER_DEXTERITY",
    "GENERIC_MONSTER_DEXTERITY",
    "MAX_CR_DEXTERITY_BONUS",
    # HP status
    "HP_HEALTHY_PERCENT",
    "HP_WOUNDED_PERCENT",
    "HP_BLOODIED_PERCENT",
    # Reminders
    "PRIORITY_ORDER",
    "DEFAULT_REMINDER_LIMIT",
    # Validation
    "MAX_HP_VALUE",
    "MIN_AC",
    "MAX_AC",
    "MIN_INITIATIVE",
    "MAX_INITIATIVE",
    "MAX_NAME_LENGTH",
    # Storage
    "STORAGE_FORMAT_VERSION",
]
