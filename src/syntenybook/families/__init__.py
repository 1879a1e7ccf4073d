"""Gene family index construction."""

from syntenybook.families.builder import build, build_family_index, parse_family
from syntenybook.families.models import FAMILY_ID_ORIGIN, Family, FamilyIndex

__all__ = [
    "FAMILY_ID_ORIGIN",
    "Family",
    "FamilyIndex",
    "build",
    "build_family_index",
    "parse_family",
]
