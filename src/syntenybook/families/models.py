"""Data models for gene families."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Family ids are assigned sequentially from this value
FAMILY_ID_ORIGIN = 0


@dataclass(frozen=True)
class Family:
    """One gene family, i.e. one family-membership file.

    Attributes:
        id: Sequential family id, in processing order
        name: Display name derived from the source file, if requested
        source: File the family was read from
        size: Number of member ids listed in the file
    """
    id: int
    name: Optional[str] = None
    source: Optional[Path] = None
    size: int = 0


@dataclass
class FamilyIndex:
    """Mapping from external gene ids to family ids.

    Attributes:
        id2family: Member id -> family id
        families: Families in id order
        overwritten: Member ids that appeared in more than one family file
    """
    id2family: dict[str, int] = field(default_factory=dict)
    families: list[Family] = field(default_factory=list)
    overwritten: int = 0

    @property
    def family_count(self) -> int:
        return len(self.families)

    def lookup(self, member_id: str) -> Optional[int]:
        return self.id2family.get(member_id)

    def __contains__(self, member_id: str) -> bool:
        return member_id in self.id2family

    def __len__(self) -> int:
        return len(self.id2family)
