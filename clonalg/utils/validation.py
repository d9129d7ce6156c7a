"""Validation helpers for antigen corpora."""

from __future__ import annotations

from collections.abc import Iterable

from clonalg.core.alphabets import GAPS, BioSequenceType, alphabet_for


def ensure_antigens(antigens: Iterable[str], kind: BioSequenceType | str = BioSequenceType.DNA) -> list[str]:
    """Normalize antigen strings to upper case and check them against the alphabet."""
    allowed = set(alphabet_for(kind)) | GAPS
    result: list[str] = []
    for idx, entry in enumerate(antigens):
        candidate = str(entry).strip().upper()
        if not candidate:
            msg = f"Antigen {idx} is empty"
            raise ValueError(msg)
        invalid = {char for char in candidate if char not in allowed}
        if invalid:
            msg = f"Antigen {idx} contains invalid symbols: {sorted(invalid)}"
            raise ValueError(msg)
        result.append(candidate)
    if not result:
        msg = "At least one antigen is required"
        raise ValueError(msg)
    return result
