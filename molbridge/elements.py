"""
Chemical enumerations and periodic table lookups.

The enumerations here cross into the engine as raw integers, so their
values mirror RDKit's own enums exactly. Periodic table data is not
duplicated; every lookup is answered by RDKit's periodic table.
"""

from __future__ import annotations

from enum import IntEnum

from rdkit import Chem

from molbridge.exceptions import ChemError


class HybridizationType(IntEnum):
    """Atom hybridization state, encoded as ``Chem.HybridizationType``."""

    UNSPECIFIED = 0
    S = 1
    SP = 2
    SP2 = 3
    SP3 = 4
    SP2D = 5
    SP3D = 6
    SP3D2 = 7
    OTHER = 8

    def __str__(self) -> str:
        return self.name

    def to_engine(self) -> Chem.HybridizationType:
        """Return the RDKit enum value with the same integer encoding."""
        return Chem.HybridizationType.values[int(self)]

    @classmethod
    def from_engine(cls, value: Chem.HybridizationType | int) -> "HybridizationType":
        """Convert an RDKit hybridization value (or its integer) to this enum."""
        return cls(int(value))


class BondType(IntEnum):
    """Bond types accepted by structural edits, encoded as ``Chem.BondType``."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    AROMATIC = 12

    def __str__(self) -> str:
        return self.name.lower()

    def to_engine(self) -> Chem.BondType:
        """Return the RDKit enum value with the same integer encoding."""
        return Chem.BondType.values[int(self)]


def _periodic_table() -> Chem.rdchem.PeriodicTable:
    return Chem.GetPeriodicTable()


def get_atomic_number(symbol: str) -> int:
    """Get the atomic number for an element symbol.

    Lowercase (aromatic) symbols are accepted, e.g. ``"c"`` -> 6.

    Raises:
        ChemError: If the symbol is not an element.
    """
    if not symbol:
        raise ChemError("Empty element symbol")
    if symbol.islower():
        symbol = symbol.capitalize()
    try:
        return _periodic_table().GetAtomicNumber(symbol)
    except (RuntimeError, ValueError) as exc:
        raise ChemError(f"Unknown element symbol: {symbol}") from exc


def get_element_symbol(atomic_number: int) -> str:
    """Get the element symbol for an atomic number.

    Raises:
        ChemError: If the atomic number is out of range.
    """
    try:
        return _periodic_table().GetElementSymbol(atomic_number)
    except (RuntimeError, ValueError, OverflowError) as exc:
        raise ChemError(f"Unknown atomic number: {atomic_number}") from exc


def get_default_valence(atomic_number: int) -> int:
    """Get the engine's default valence (-1 means any valence is allowed)."""
    try:
        return _periodic_table().GetDefaultValence(atomic_number)
    except (RuntimeError, ValueError, OverflowError) as exc:
        raise ChemError(f"Unknown atomic number: {atomic_number}") from exc


def get_valence_list(atomic_number: int) -> list[int]:
    """Get every valence the engine allows for an element.

    Example:
        >>> get_valence_list(10)
        [0]
    """
    try:
        return list(_periodic_table().GetValenceList(atomic_number))
    except (RuntimeError, ValueError, OverflowError) as exc:
        raise ChemError(f"Unknown atomic number: {atomic_number}") from exc
