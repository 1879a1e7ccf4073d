"""Left/right neighbour windows over a start-sorted chromosome."""

from typing import Iterator, Sequence

from syntenybook.ingest.models import Annotation
from syntenybook.landscape import TailGene


def _tail_gene(annotation: Annotation) -> TailGene:
    return TailGene(family=annotation.family, strand=annotation.strand)


def left_window(annotations: Sequence[Annotation], j: int, window: int) -> list[TailGene]:
    """Up to `window` predecessors of gene `j`, farthest first."""
    return [_tail_gene(a) for a in annotations[max(0, j - window):j]]


def right_window(annotations: Sequence[Annotation], j: int, window: int) -> list[TailGene]:
    """Up to `window` successors of gene `j`, nearest first."""
    return [_tail_gene(a) for a in annotations[j + 1:j + 1 + window]]


def tail_windows(
    annotations: Sequence[Annotation],
    window: int,
) -> Iterator[tuple[Annotation, list[TailGene], list[TailGene]]]:
    """Yield (annotation, left tail, right tail) for every gene of a chromosome."""
    for j, annotation in enumerate(annotations):
        yield annotation, left_window(annotations, j, window), right_window(annotations, j, window)
