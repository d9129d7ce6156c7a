"""Symbol sets for the supported biological sequence types."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Final

DNA: Final = "ACGT"
RNA: Final = "ACGU"
AMINO_ACIDS: Final = "ACDEFGHIKLMNPQRSTVWY"
GAPS: Final = frozenset("-.")


class BioSequenceType(str, Enum):
    DNA = "dna"
    RNA = "rna"
    PROTEIN = "protein"


_ALPHABETS: Final[dict[BioSequenceType, str]] = {
    BioSequenceType.DNA: DNA,
    BioSequenceType.RNA: RNA,
    BioSequenceType.PROTEIN: AMINO_ACIDS,
}


def parse_bio_sequence_type(kind: BioSequenceType | str | None) -> BioSequenceType:
    """Coerce ``kind`` into a :class:`BioSequenceType`, defaulting to DNA."""
    if isinstance(kind, BioSequenceType):
        return kind
    try:
        return BioSequenceType(str(kind).lower())
    except ValueError:
        return BioSequenceType.DNA


def alphabet_for(kind: BioSequenceType | str | None) -> str:
    """Return the alphabet for ``kind``; anything unrecognized maps to DNA."""
    return _ALPHABETS.get(parse_bio_sequence_type(kind), DNA)


def count_viable(symbols: Iterable[str]) -> int:
    """Count symbols that are not gaps."""
    return sum(1 for symbol in symbols if symbol not in GAPS)
