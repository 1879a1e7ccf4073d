"""Tail genes and the compact tail-string format.

A tail is one side of a gene's landscape: the (family, strand) pairs of its
nearest neighbours on the same chromosome. Tails are stored as `.`-joined
tokens of the form `<strand><family>`, e.g. `+12.-7..3`; the empty tail is
the empty string.

Left tails read from the farthest neighbour to the nearest one, right tails
from the nearest neighbour to the farthest one.
"""

from dataclasses import dataclass
from typing import Iterable

from syntenybook.decoders.records import Strand

TOKEN_SEPARATOR = "."
STRAND_CHARS = {s.char: s for s in Strand}


@dataclass(frozen=True, eq=False)
class TailGene:
    """A landscape entry.

    Equality and hashing only consider the family: strand is carried along
    as metadata, so `TailGene(5, DIRECT) == TailGene(5, REVERSE)`.
    """
    family: int
    strand: Strand = Strand.UNKNOWN

    def __eq__(self, other):
        if not isinstance(other, TailGene):
            return NotImplemented
        return self.family == other.family

    def __hash__(self):
        return hash(self.family)

    def to_token(self) -> str:
        return f"{self.strand.char}{self.family}"

    @classmethod
    def from_token(cls, token: str) -> "TailGene":
        """Parse one `<strand><family>` token.

        A missing or unrecognised leading strand character means UNKNOWN.

        Raises:
            ValueError: If the family part is not a decimal integer
        """
        if token and token[0] in STRAND_CHARS:
            strand, digits = STRAND_CHARS[token[0]], token[1:]
        elif token and not token[0].isdigit():
            strand, digits = Strand.UNKNOWN, token[1:]
        else:
            strand, digits = Strand.UNKNOWN, token
        if not digits.isdigit():
            raise ValueError(f"invalid tail token: {token!r}")
        return cls(family=int(digits), strand=strand)


def encode_tail(tail: Iterable[TailGene]) -> str:
    return TOKEN_SEPARATOR.join(gene.to_token() for gene in tail)


def decode_tail(text: str) -> list[TailGene]:
    """Inverse of `encode_tail`.

    Tokens start with a strand character that may itself be `.`, so the
    string is split on separators that are followed by a token start rather
    than on every `.`.
    """
    if not text:
        return []

    tokens = []
    current = ""
    for char in text:
        # A `.` ends the current token only once that token holds digits
        if char == TOKEN_SEPARATOR and current and current[-1].isdigit():
            tokens.append(current)
            current = ""
        else:
            current += char
    tokens.append(current)
    return [TailGene.from_token(token) for token in tokens]


def truncate_left(tail: list[TailGene], window: int) -> list[TailGene]:
    """Keep the `window` entries nearest to the gene, farthest-first order."""
    kept = list(reversed(tail))[:window]
    kept.reverse()
    return kept


def truncate_right(tail: list[TailGene], window: int) -> list[TailGene]:
    """Keep the `window` entries nearest to the gene, nearest-first order."""
    return list(tail[:window])
