"""Core primitives shared by the engine and the metrics."""

from .alphabets import AMINO_ACIDS, DNA, GAPS, RNA, BioSequenceType, alphabet_for
from .antibody import Antibody
from .results import ClonalgResults, read_memory_cells, write_memory_cells

__all__ = [
    "AMINO_ACIDS",
    "DNA",
    "GAPS",
    "RNA",
    "Antibody",
    "BioSequenceType",
    "ClonalgResults",
    "alphabet_for",
    "read_memory_cells",
    "write_memory_cells",
]
