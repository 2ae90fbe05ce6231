# backend/packhub/domain/constants.py

"""
Single source for the marketplace enumerations and attachment rules.
Models (CHECK constraints), schemas (Literal types) and services all read from here.
"""

from typing import Final, Tuple

USER_ROLES: Final[Tuple[str, ...]] = ("buyer", "supplier")

PACKAGING_TYPES: Final[Tuple[str, ...]] = (
    "boxes", "bottles", "bags", "containers", "labels", "pouches",
    "tubes", "cans", "jars", "wrapping", "other",
)

MATERIAL_TYPES: Final[Tuple[str, ...]] = (
    "cardboard", "plastic", "glass", "metal", "paper", "fabric",
    "wood", "biodegradable", "recyclable", "compostable", "other",
)

CERTIFICATION_TYPES: Final[Tuple[str, ...]] = (
    "fsc", "pefc", "iso14001", "iso9001", "brc", "fda",
    "eu_organic", "cradle_to_cradle", "other",
)

# Order matters: status may only move forward along this tuple
INQUIRY_STATUSES: Final[Tuple[str, ...]] = ("pending", "responded", "closed")

RATING_MIN: Final[int] = 1
RATING_MAX: Final[int] = 5

# ---- File attachments ----
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB

ALLOWED_MIME_TYPES: Final[Tuple[str, ...]] = (
    "application/pdf",
    "image/jpeg",
    "image/png",
    "image/gif",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
    "text/csv",
)


def sql_in_list(values: Tuple[str, ...]) -> str:
    """Render values as a quoted SQL IN list for CHECK constraints."""
    return ",".join(f"'{v}'" for v in values)
