"""
Text output for molecules.

Canonicalization belongs to RDKit; the functions here only pass the
handle's graph through. Output is a pure function of the graph state, so
writing the same unmodified molecule twice gives the same text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rdkit import Chem

if TYPE_CHECKING:
    from molbridge.types import Molecule


def to_smiles(mol: Molecule, *, canonical: bool = True, isomeric: bool = True) -> str:
    """Convert a molecule to a SMILES string.

    Args:
        mol: Molecule to convert.
        canonical: Use RDKit's canonical atom ordering.
        isomeric: Include stereochemistry and isotopes.

    Returns:
        SMILES string.

    Example:
        >>> to_smiles(parse("C1=CC=CC=C1"))
        'c1ccccc1'
    """
    return Chem.MolToSmiles(mol._mol, isomericSmiles=isomeric, canonical=canonical)


def to_mol_block(mol: Molecule, *, kekulize: bool = True) -> str:
    """Convert a molecule to an MDL mol block.

    Readable again with :func:`molbridge.parse_mol_block`.
    """
    return Chem.MolToMolBlock(mol._mol, kekulize=kekulize)
