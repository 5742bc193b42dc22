"""
Custom exceptions for the molbridge library.

This module defines a hierarchy of exceptions for reporting failures of
adapter calls in a structured way. Diagnostics found by
:func:`molbridge.detect_problems` are records, not exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from molbridge.diagnostics import ChemistryProblem


class ChemError(Exception):
    """Base exception for all chemistry-related errors."""

    pass


class ParseError(ChemError):
    """Error while building a molecule from text.

    Raised for malformed notation and for sanitization failures during
    construction. No molecule is produced.

    Attributes:
        message: Description of what went wrong.
        smiles: The input text that failed to parse.
    """

    def __init__(self, message: str, smiles: str | None = None) -> None:
        self.message = message
        self.smiles = smiles

        if smiles is not None:
            super().__init__(f"{message} in: {smiles!r}")
        else:
            super().__init__(message)


class AtomIndexError(ChemError, IndexError):
    """Atom index outside the molecule's atom range.

    Attributes:
        idx: The requested index.
        num_atoms: Number of atoms in the molecule at the time of the call.
    """

    def __init__(self, idx: int, num_atoms: int) -> None:
        self.idx = idx
        self.num_atoms = num_atoms
        super().__init__(f"Atom index {idx} out of range for molecule with {num_atoms} atoms")


class StaleAtomError(ChemError):
    """Atom view used after its molecule was structurally modified."""

    def __init__(self, idx: int) -> None:
        self.idx = idx
        super().__init__(
            f"Atom view {idx} is stale: the molecule changed structure since it was taken"
        )


class RefreshError(ChemError):
    """Strict property-cache refresh rejected the current graph state.

    The molecule keeps its mutated state; nothing is rolled back.

    Attributes:
        problem: The engine's problem record, if it exposed one.
    """

    def __init__(self, message: str, problem: "ChemistryProblem | None" = None) -> None:
        self.message = message
        self.problem = problem
        super().__init__(message)
