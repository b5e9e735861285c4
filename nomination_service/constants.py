"""
Nomination domain and gender constants.

Centralized definitions consumed by the ORM check constraints, the migration,
the validator and the request handlers.
"""

from typing import Tuple

# Canonical domain values stored in the database (order is the display order)
DOMAIN_SPONSORSHIP_MARKETING = "Sponsorship & Marketing"
DOMAIN_SOCIAL_MEDIA = "Social Media Team"
DOMAIN_UI_UX = "UI/UX"
DOMAIN_APP_DEV = "App Dev"
DOMAIN_WEB_DEV = "Web Dev"
DOMAIN_CYBERSECURITY = "Cybersecurity Team"

ALL_DOMAINS: Tuple[str, ...] = (
    DOMAIN_SPONSORSHIP_MARKETING,
    DOMAIN_SOCIAL_MEDIA,
    DOMAIN_UI_UX,
    DOMAIN_APP_DEV,
    DOMAIN_WEB_DEV,
    DOMAIN_CYBERSECURITY,
)

GENDER_MALE = "Male"
GENDER_FEMALE = "Female"
GENDER_OTHERS = "Others"

ALL_GENDERS: Tuple[str, ...] = (GENDER_MALE, GENDER_FEMALE, GENDER_OTHERS)

PHONE_PATTERN = r"^[+]?[0-9]{10,15}$"

# Pagination policy
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def is_valid_domain(domain: str) -> bool:
    """Return True if the provided domain is one of the supported values."""
    return domain in ALL_DOMAINS


def is_valid_gender(gender: str) -> bool:
    return gender in ALL_GENDERS


def sql_in_list(values: Tuple[str, ...]) -> str:
    """Render values as a quoted SQL ``IN`` list for check constraints."""
    quoted = ", ".join("'" + v.replace("'", "''") + "'" for v in values)
    return f"({quoted})"
