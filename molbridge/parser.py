"""
Construction of molecules from text.

All parsing is done by RDKit. This module decides what counts as a
failure, raises :class:`~molbridge.exceptions.ParseError` for it, and
wraps successful results in molbridge handles.

    >>> from molbridge import parse, SmilesParserParams
    >>> params = SmilesParserParams()
    >>> params.sanitize = False
    >>> mol = parse("c1cccc1", params)
"""

from __future__ import annotations

import logging

from rdkit import Chem

from molbridge.exceptions import ParseError
from molbridge.types import EditableMolecule, Molecule

logger = logging.getLogger(__name__)


class SmilesParserParams:
    """Options for :func:`parse`.

    One object can be reused for any number of parses. Changing an option
    affects every later parse that is given the same object; share it
    between threads only with external locking.

    Attributes:
        sanitize: Run structural sanitization after parsing (default True).
    """

    __slots__ = ("_params",)

    def __init__(self, *, sanitize: bool = True) -> None:
        self._params = Chem.SmilesParserParams()
        self._params.sanitize = sanitize

    @property
    def sanitize(self) -> bool:
        return self._params.sanitize

    @sanitize.setter
    def sanitize(self, value: bool) -> None:
        self._params.sanitize = bool(value)

    def set_sanitize(self, value: bool) -> None:
        self.sanitize = value

    def __repr__(self) -> str:
        return f"SmilesParserParams(sanitize={self.sanitize})"


def _check_text(text: object, kind: str) -> str:
    if not isinstance(text, str):
        raise TypeError(f"{kind} must be a str, got {type(text).__name__}")
    if not text.strip():
        raise ParseError(f"Empty {kind}", smiles=text)
    return text


def parse(smiles: str, params: SmilesParserParams | None = None) -> Molecule:
    """Parse a SMILES string into a molecule.

    Args:
        smiles: SMILES string to parse.
        params: Parser options; RDKit defaults (sanitization on) if None.

    Returns:
        New molecule handle.

    Raises:
        ParseError: If the SMILES is empty, malformed, or fails
            sanitization.

    Example:
        >>> mol = parse("c1ccccc1")
        >>> mol.atom_count()
        6
    """
    smiles = _check_text(smiles, "SMILES")
    if params is None:
        params = SmilesParserParams()

    try:
        mol = Chem.MolFromSmiles(smiles, params._params)
    except (RuntimeError, ValueError) as exc:
        raise ParseError(f"RDKit raised while parsing SMILES: {exc}", smiles=smiles) from exc
    if mol is None:
        logger.debug("RDKit rejected SMILES %r (sanitize=%s)", smiles, params.sanitize)
        raise ParseError("Could not parse SMILES", smiles=smiles)
    return Molecule(mol, needs_refresh=not params.sanitize)


def parse_smarts(smarts: str) -> EditableMolecule:
    """Parse a SMARTS pattern into an editable query molecule.

    Raises:
        ParseError: If RDKit cannot build a molecule from the pattern.
    """
    smarts = _check_text(smarts, "SMARTS")
    try:
        mol = Chem.MolFromSmarts(smarts)
    except (RuntimeError, ValueError) as exc:
        raise ParseError(f"RDKit raised while parsing SMARTS: {exc}", smiles=smarts) from exc
    if mol is None:
        logger.debug("RDKit rejected SMARTS %r", smarts)
        raise ParseError("Could not parse SMARTS", smiles=smarts)
    mol.UpdatePropertyCache(strict=False)
    return EditableMolecule(Chem.RWMol(mol), needs_refresh=True)


def parse_mol_block(
    mol_block: str,
    sanitize: bool = True,
    remove_hs: bool = True,
    strict_parsing: bool = True,
) -> EditableMolecule:
    """Parse an MDL mol block into an editable molecule.

    Args:
        mol_block: Mol block text.
        sanitize: Sanitize the molecule after reading.
        remove_hs: Remove explicit hydrogen atoms (needs ``sanitize``).
        strict_parsing: Reject mol blocks with format irregularities.

    Raises:
        ParseError: If the block is malformed or fails sanitization.
    """
    mol_block = _check_text(mol_block, "mol block")
    try:
        mol = Chem.MolFromMolBlock(
            mol_block,
            sanitize=sanitize,
            removeHs=remove_hs,
            strictParsing=strict_parsing,
        )
    except (RuntimeError, ValueError) as exc:
        raise ParseError(f"RDKit raised while reading mol block: {exc}") from exc
    if mol is None:
        logger.debug("RDKit rejected mol block (sanitize=%s, strict=%s)", sanitize, strict_parsing)
        raise ParseError("Could not parse mol block")
    if not sanitize:
        mol.UpdatePropertyCache(strict=False)
    return EditableMolecule(Chem.RWMol(mol), needs_refresh=not sanitize)
