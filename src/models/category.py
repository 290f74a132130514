"""Race category vocabularies and entry fees."""
from typing import Dict

# Offered by the registration form
RACE_CATEGORIES: Dict[str, str] = {
    "kids-1km": "Kids Race (1 km)",
    "teens-5km": "Teens Race (5 km)",
    "age-20-22-10km": "Age 20-22 (10 km)",
    "half-marathon-21km": "Half Marathon (21.1 km)",
    "full-marathon-42km": "Full Marathon (42.2 km)",
}

# Older keys still found in stored registrations
LEGACY_CATEGORIES: Dict[str, str] = {
    "5k-race": "5K Race",
    "10k-race": "10K Race",
    "half-marathon": "Half Marathon",
    "full-marathon": "Full Marathon",
}

CATEGORY_FEES: Dict[str, int] = {
    "kids-1km": 100,
    "teens-5km": 150,
    "age-20-22-10km": 200,
    "half-marathon-21km": 350,
    "full-marathon-42km": 500,
    "5k-race": 150,
    "10k-race": 200,
    "half-marathon": 350,
    "full-marathon": 500,
}

TSHIRT_FEE = 100


def get_category_display_name(category: str) -> str:
    """
    Get human-readable name for a category key.

    Args:
        category: Category key from either vocabulary

    Returns:
        Display label, or the key itself when unknown
    """
    if category in RACE_CATEGORIES:
        return RACE_CATEGORIES[category]
    return LEGACY_CATEGORIES.get(category, category)


def is_known_category(category: str) -> bool:
    """Check if category belongs to either vocabulary."""
    return category in RACE_CATEGORIES or category in LEGACY_CATEGORIES
