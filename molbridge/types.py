"""
Core molecular handle types.

This module defines the objects callers hold on to: :class:`Molecule`, a
handle owning one RDKit molecule; :class:`EditableMolecule`, a handle that
also allows structural edits; and :class:`Atom`, a non-owning view into
one atom of a molecule.

Ownership rules:

* A handle exclusively owns its RDKit molecule. Copying a handle copies
  the graph, so no two handles ever share one mutable graph.
* An :class:`Atom` keeps its parent handle alive but stores only an
  index. Every structural edit bumps the parent's generation and every
  older view then raises :class:`~molbridge.exceptions.StaleAtomError`.
* Atom setters do not recompute derived properties (valence, total
  hydrogen count). Call :meth:`Molecule.update_property_cache` once
  after a batch of edits.

Handles are not thread-safe; guard a shared handle with a lock.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from rdkit import Chem

from molbridge.diagnostics import AtomProblem, ChemistryProblem, detect_problems
from molbridge.elements import BondType, HybridizationType, get_atomic_number
from molbridge.exceptions import AtomIndexError, ChemError, RefreshError, StaleAtomError
from molbridge.writer import to_smiles

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)


def _refresh_problem(mol: Molecule, atom_idx: int | None = None) -> ChemistryProblem | None:
    """Find the problem record behind a failed strict refresh.

    Prefers the record for ``atom_idx`` when one atom was refreshed.
    """
    problems = detect_problems(mol)
    if atom_idx is not None:
        for problem in problems:
            if isinstance(problem, AtomProblem) and problem.atom_idx == atom_idx:
                return problem
    return problems[0] if problems else None


def _check_int(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got {type(value).__name__}")
    return value


class Atom:
    """A view of one atom inside a molecule.

    The view does not own the atom. It holds its parent molecule and the
    atom's index, and resolves the engine atom again on every access.

    Example:
        >>> mol = parse("CCO")
        >>> atom = mol.get_atom(2)
        >>> atom.symbol
        'O'
    """

    __slots__ = ("_owner", "_idx", "_generation")

    def __init__(self, owner: Molecule, idx: int) -> None:
        self._owner = owner
        self._idx = idx
        self._generation = owner._generation

    def _resolve(self) -> Chem.Atom:
        if self._generation != self._owner._generation:
            raise StaleAtomError(self._idx)
        return self._owner._mol.GetAtomWithIdx(self._idx)

    def __repr__(self) -> str:
        if self._generation != self._owner._generation:
            return f"Atom({self._idx}, <stale>)"
        return f"Atom({self._idx}, {self.symbol!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Atom):
            return NotImplemented
        return (
            self._owner is other._owner
            and self._idx == other._idx
            and self._generation == other._generation
        )

    def __hash__(self) -> int:
        return hash((id(self._owner), self._idx, self._generation))

    @property
    def idx(self) -> int:
        """Index of this atom in its molecule."""
        return self._idx

    @property
    def molecule(self) -> Molecule:
        """The molecule this view belongs to."""
        return self._owner

    @property
    def is_valid(self) -> bool:
        """False once the parent molecule has changed structure."""
        return self._generation == self._owner._generation

    # Plain fields

    @property
    def symbol(self) -> str:
        """Element symbol (e.g., "C", "Cl")."""
        return self._resolve().GetSymbol()

    @property
    def is_aromatic(self) -> bool:
        return self._resolve().GetIsAromatic()

    @property
    def atomic_num(self) -> int:
        return self._resolve().GetAtomicNum()

    @property
    def formal_charge(self) -> int:
        return self._resolve().GetFormalCharge()

    @formal_charge.setter
    def formal_charge(self, value: int) -> None:
        value = _check_int(value, "Formal charge")
        self._resolve().SetFormalCharge(value)
        self._owner._needs_refresh = True

    @property
    def num_explicit_hs(self) -> int:
        """Hydrogen count stored on the atom itself (bracket hydrogens)."""
        return self._resolve().GetNumExplicitHs()

    @num_explicit_hs.setter
    def num_explicit_hs(self, value: int) -> None:
        value = _check_int(value, "Explicit hydrogen count")
        if value < 0:
            raise ValueError(f"Explicit hydrogen count must be >= 0, got {value}")
        self._resolve().SetNumExplicitHs(value)
        self._owner._needs_refresh = True

    @property
    def hybridization(self) -> HybridizationType:
        return HybridizationType.from_engine(self._resolve().GetHybridization())

    @hybridization.setter
    def hybridization(self, value: HybridizationType | int) -> None:
        value = HybridizationType(value)
        self._resolve().SetHybridization(value.to_engine())
        self._owner._needs_refresh = True

    # Derived fields, read from the property cache

    @property
    def total_num_hs(self) -> int:
        """Total attached hydrogens, explicit plus implicit.

        Served from the property cache; may be stale after a setter call
        until the molecule is refreshed.
        """
        return self._resolve().GetTotalNumHs()

    @property
    def total_valence(self) -> int:
        """Total valence, served from the property cache."""
        return self._resolve().GetTotalValence()

    def update_property_cache(self, strict: bool = True) -> None:
        """Recompute this atom's derived properties only.

        Raises:
            RefreshError: If ``strict`` and the atom's valence is invalid.
        """
        try:
            self._resolve().UpdatePropertyCache(strict)
        except Chem.MolSanitizeException as exc:
            logger.debug("Strict refresh of atom %d failed: %s", self._idx, exc)
            raise RefreshError(str(exc), _refresh_problem(self._owner, self._idx)) from exc

    # Method forms of the setters

    def set_formal_charge(self, value: int) -> None:
        self.formal_charge = value

    def set_num_explicit_hs(self, value: int) -> None:
        self.num_explicit_hs = value

    def set_hybridization(self, value: HybridizationType | int) -> None:
        self.hybridization = value


class Molecule:
    """Handle owning one molecular graph.

    Handles are created by :func:`molbridge.parse` and friends, or with
    :meth:`from_rdkit`. Copying a handle duplicates the graph.

    Example:
        >>> mol = parse("c1ccccc1")
        >>> len(mol)
        6
        >>> clone = mol.copy()
        >>> clone[0].formal_charge = -1
        >>> mol[0].formal_charge
        0
    """

    __slots__ = ("_mol", "_generation", "_needs_refresh")

    def __init__(self, mol: Chem.Mol, *, needs_refresh: bool = False) -> None:
        # Takes ownership of ``mol``; use from_rdkit() for caller-held objects
        self._mol = mol
        self._generation = 0
        self._needs_refresh = needs_refresh

    @classmethod
    def from_rdkit(cls, mol: Chem.Mol) -> "Self":
        """Wrap a copy of an RDKit molecule.

        The caller's object is copied so it cannot alias the handle's graph.
        """
        if mol is None:
            raise ChemError("Cannot wrap a null RDKit molecule")
        clone = cls._engine_copy(mol)
        clone.UpdatePropertyCache(strict=False)
        return cls(clone)

    @staticmethod
    def _engine_copy(mol: Chem.Mol) -> Chem.Mol:
        return Chem.Mol(mol)

    def to_rdkit(self) -> Chem.Mol:
        """Return an independent RDKit copy of the graph."""
        return Chem.Mol(self._mol)

    # Handle model

    def copy(self) -> "Self":
        """Create a deep copy of the molecule.

        Returns:
            New handle with its own graph; edits to either never show in
            the other.
        """
        return type(self)(self._engine_copy(self._mol), needs_refresh=self._needs_refresh)

    def __copy__(self) -> "Self":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Self":
        return self.copy()

    def __repr__(self) -> str:
        try:
            text = self.to_smiles()
        except RuntimeError:
            return f"<{type(self).__name__} with {self.atom_count()} atoms>"
        return f"{type(self).__name__}({text!r})"

    # Sub-object access

    def atom_count(self, only_explicit: bool = True) -> int:
        """Number of atoms.

        Args:
            only_explicit: If False, implicit hydrogens are counted too.
        """
        return self._mol.GetNumAtoms(onlyExplicit=only_explicit)

    def get_atom(self, idx: int) -> Atom:
        """Get a view of the atom at ``idx``.

        Raises:
            AtomIndexError: If ``idx`` is not a graph atom index.
        """
        self._check_atom_idx(idx)
        return Atom(self, idx)

    def _check_atom_idx(self, idx: int) -> None:
        if isinstance(idx, bool) or not isinstance(idx, int):
            raise TypeError(f"Atom index must be an int, got {type(idx).__name__}")
        num_atoms = self._mol.GetNumAtoms()
        if not 0 <= idx < num_atoms:
            raise AtomIndexError(idx, num_atoms)

    def __len__(self) -> int:
        """Return number of explicit atoms."""
        return self._mol.GetNumAtoms()

    def __iter__(self) -> Iterator[Atom]:
        """Iterate over atom views."""
        for idx in range(self._mol.GetNumAtoms()):
            yield Atom(self, idx)

    def __getitem__(self, idx: int) -> Atom:
        """Get atom view by index."""
        return self.get_atom(idx)

    @property
    def num_bonds(self) -> int:
        """Number of bonds in the molecule."""
        return self._mol.GetNumBonds()

    @property
    def generation(self) -> int:
        """Structural generation; changes on every atom or bond add/remove."""
        return self._generation

    # Property cache

    @property
    def needs_refresh(self) -> bool:
        """True while derived atom properties may be out of date."""
        return self._needs_refresh

    def update_property_cache(self, strict: bool = True) -> None:
        """Recompute derived atom properties after edits.

        Args:
            strict: Also validate valences and raise on violations.

        Raises:
            RefreshError: If ``strict`` and the graph is chemically invalid.
                The graph keeps its edited state.
        """
        try:
            self._mol.UpdatePropertyCache(strict)
        except Chem.MolSanitizeException as exc:
            logger.debug("Strict refresh failed: %s", exc)
            raise RefreshError(str(exc), _refresh_problem(self)) from exc
        self._needs_refresh = False

    # Diagnostics and text

    def detect_problems(self) -> list[ChemistryProblem]:
        """See :func:`molbridge.diagnostics.detect_problems`."""
        return detect_problems(self)

    def to_smiles(self, *, canonical: bool = True, isomeric: bool = True) -> str:
        """See :func:`molbridge.writer.to_smiles`."""
        return to_smiles(self, canonical=canonical, isomeric=isomeric)

    # Conversion

    def to_editable(self, quick_copy: bool = False, conf_id: int = -1) -> EditableMolecule:
        """Return an editable copy of this molecule.

        Args:
            quick_copy: Skip copying properties and conformers.
            conf_id: Conformer to keep (-1 keeps all).
        """
        return EditableMolecule(
            Chem.RWMol(self._mol, quick_copy, conf_id),
            needs_refresh=self._needs_refresh,
        )


class EditableMolecule(Molecule):
    """Molecule handle that also allows adding and removing atoms and bonds.

    Every structural edit invalidates all atom views taken before it and
    marks the property cache stale.

    Example:
        >>> mol = parse("CCO").to_editable()
        >>> atom = mol[2]
        >>> mol.remove_atom(0)
        >>> atom.symbol
        Traceback (most recent call last):
        ...
        molbridge.exceptions.StaleAtomError: ...
    """

    __slots__ = ()

    @staticmethod
    def _engine_copy(mol: Chem.Mol) -> Chem.RWMol:
        return Chem.RWMol(mol)

    def to_molecule(self) -> Molecule:
        """Return a read-only handle with a copy of this graph."""
        return Molecule(Chem.Mol(self._mol), needs_refresh=self._needs_refresh)

    def _structure_changed(self, what: str) -> None:
        self._generation += 1
        self._needs_refresh = True
        logger.debug("%s; generation is now %d", what, self._generation)

    def add_atom(
        self,
        symbol: str,
        *,
        formal_charge: int = 0,
        is_aromatic: bool = False,
    ) -> int:
        """Add an atom to the molecule.

        Args:
            symbol: Element symbol.
            formal_charge: Formal charge.
            is_aromatic: Whether atom is aromatic.

        Returns:
            Index of the newly added atom.
        """
        atom = Chem.Atom(get_atomic_number(symbol))
        atom.SetFormalCharge(formal_charge)
        atom.SetIsAromatic(is_aromatic)
        idx = self._mol.AddAtom(atom)
        # Derived fields readable before the first refresh
        self._mol.GetAtomWithIdx(idx).UpdatePropertyCache(False)
        self._structure_changed(f"Added atom {idx} ({symbol})")
        return idx

    def remove_atom(self, idx: int) -> None:
        """Remove an atom and its bonds. Later atoms shift down by one."""
        self._check_atom_idx(idx)
        self._mol.RemoveAtom(idx)
        self._structure_changed(f"Removed atom {idx}")

    def add_bond(self, begin_idx: int, end_idx: int, bond_type: BondType = BondType.SINGLE) -> int:
        """Add a bond between two atoms.

        Returns:
            Index of the newly added bond.

        Raises:
            AtomIndexError: If either atom index is out of range.
            ChemError: If the bond already exists or joins an atom to itself.
        """
        self._check_atom_idx(begin_idx)
        self._check_atom_idx(end_idx)
        if begin_idx == end_idx:
            raise ChemError(f"Cannot bond atom {begin_idx} to itself")
        if self._mol.GetBondBetweenAtoms(begin_idx, end_idx) is not None:
            raise ChemError(f"Bond between atoms {begin_idx} and {end_idx} already exists")
        num_bonds = self._mol.AddBond(begin_idx, end_idx, BondType(bond_type).to_engine())
        self._structure_changed(f"Added bond {begin_idx}-{end_idx}")
        return num_bonds - 1

    def remove_bond(self, begin_idx: int, end_idx: int) -> None:
        """Remove the bond between two atoms.

        Raises:
            ChemError: If the atoms are not bonded.
        """
        self._check_atom_idx(begin_idx)
        self._check_atom_idx(end_idx)
        if self._mol.GetBondBetweenAtoms(begin_idx, end_idx) is None:
            raise ChemError(f"No bond between atoms {begin_idx} and {end_idx}")
        self._mol.RemoveBond(begin_idx, end_idx)
        self._structure_changed(f"Removed bond {begin_idx}-{end_idx}")


def refresh(mol: Molecule, strict: bool = True) -> None:
    """Recompute derived atom properties; see :meth:`Molecule.update_property_cache`."""
    mol.update_property_cache(strict)
