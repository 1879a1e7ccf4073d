"""Record types shared by the annotation decoders."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Strand(str, Enum):
    DIRECT = "+"
    REVERSE = "-"
    UNKNOWN = "."

    @classmethod
    def parse(cls, text: Optional[str]) -> "Strand":
        """Lenient conversion: anything but `+`/`-` is UNKNOWN."""
        if text == "+":
            return cls.DIRECT
        if text == "-":
            return cls.REVERSE
        return cls.UNKNOWN

    @property
    def char(self) -> str:
        return self.value


class Phase(int, Enum):
    SYNC = 0
    ONE_SHIFTED = 1
    TWO_SHIFTED = 2


@dataclass(frozen=True)
class AnnotationRecord:
    """Uniform view over one decoded BED or chromosome-table line.

    Coordinates are kept exactly as they appear in the source file, so BED
    starts stay 0-based while GFF3 starts stay 1-based.
    """

    chromosome: str
    start: int
    end: int
    id: Optional[str] = None
    strand: Strand = Strand.UNKNOWN
    feature_class: Optional[str] = None

    @property
    def location(self) -> str:
        return f"{self.chromosome}:{self.start}-{self.end}"

    def is_class(self, feature_class: str) -> bool:
        """Whether the record passes a feature-class filter.

        Formats without a class column (BED, chromosome tables) always pass.
        """
        return True


@dataclass(frozen=True)
class GffRecord(AnnotationRecord):
    source: Optional[str] = None
    score: Optional[float] = None
    phase: Optional[Phase] = None
    # (key, (value, ...)) pairs in file order
    attributes: tuple = ()

    def is_class(self, feature_class: str) -> bool:
        return self.feature_class == feature_class

    def attribute(self, key: str) -> list[str]:
        """All values of an attribute; keys are matched case-insensitively."""
        key = key.lower()
        for k, values in self.attributes:
            if k.lower() == key:
                return list(values)
        return []

    @property
    def parent(self) -> Optional[str]:
        parents = self.attribute("Parent")
        return parents[0] if parents else None
