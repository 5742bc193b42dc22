"""
Structural diagnostics for molecules.

RDKit reports every sanitization problem it can find in a molecule at
once. This module turns those engine objects into plain, immutable records
so they can outlive the molecule and be passed around freely.

Only :class:`AtomProblem` carries an ``atom_idx``. Code that wants the
offending atom has to narrow the record first::

    for problem in detect_problems(mol):
        if isinstance(problem, AtomProblem):
            print(problem.tag, problem.atom_idx)

Atom indices are positions in the molecule as it was when the problems
were detected. They are not live references and go stale once the
molecule's structure changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, Union

from rdkit import Chem

if TYPE_CHECKING:
    from molbridge.types import Molecule

logger = logging.getLogger(__name__)


# Engine tags whose problems are localized to one atom
ATOM_SCOPED_TAGS: Final[frozenset[str]] = frozenset({
    "AtomSanitizeException",
    "AtomValenceException",
    "AtomKekulizeException",
})

KEKULIZE_TAG: Final[str] = "KekulizeException"


@dataclass(frozen=True, slots=True)
class MoleculeProblem:
    """A problem with the molecule as a whole.

    Attributes:
        tag: Engine category string, preserved verbatim.
        message: Engine description of the problem.
    """

    tag: str
    message: str


@dataclass(frozen=True, slots=True)
class AtomProblem:
    """A problem localized to a single atom.

    Attributes:
        tag: Engine category string, one of :data:`ATOM_SCOPED_TAGS`.
        message: Engine description of the problem.
        atom_idx: Zero-based index of the offending atom.
    """

    tag: str
    message: str
    atom_idx: int


@dataclass(frozen=True, slots=True)
class KekulizeProblem:
    """Aromatic atoms for which no Kekulé structure could be found.

    Attributes:
        tag: Engine category string (``"KekulizeException"``).
        message: Engine description of the problem.
        atom_indices: Indices of the unkekulized atoms.
    """

    tag: str
    message: str
    atom_indices: tuple[int, ...]


ChemistryProblem = Union[MoleculeProblem, AtomProblem, KekulizeProblem]


def problem_from_engine(problem: Any) -> ChemistryProblem:
    """Build a record from an RDKit ``MolSanitizeException`` object.

    The atom index is read only when the tag says the problem is
    atom-scoped, so a whole-molecule problem is never narrowed.
    """
    tag = problem.GetType()
    message = problem.Message()
    if tag in ATOM_SCOPED_TAGS:
        return AtomProblem(tag=tag, message=message, atom_idx=int(problem.GetAtomIdx()))
    if tag == KEKULIZE_TAG:
        indices = tuple(int(i) for i in problem.GetAtomIndices())
        return KekulizeProblem(tag=tag, message=message, atom_indices=indices)
    return MoleculeProblem(tag=tag, message=message)


def detect_problems(mol: "Molecule") -> list[ChemistryProblem]:
    """Collect every structural problem RDKit finds in a molecule.

    The molecule itself is not modified. Records come back in the order
    the engine discovered them; that order is for display only and may
    change between RDKit releases.

    Args:
        mol: Molecule to check.

    Returns:
        List of problem records, empty if the molecule is sane.
    """
    problems = [problem_from_engine(p) for p in Chem.DetectChemistryProblems(mol._mol)]
    if problems:
        logger.debug("Detected %d chemistry problem(s): %s",
                     len(problems), ", ".join(p.tag for p in problems))
    return problems


def atom_problems(problems: list[ChemistryProblem]) -> list[AtomProblem]:
    """Filter a problem list down to the atom-scoped records."""
    return [p for p in problems if isinstance(p, AtomProblem)]
