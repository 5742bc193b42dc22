"""
molbridge - Safe handles over RDKit molecular graphs.

An adapter layer that exposes RDKit molecules, atoms, parsing and
sanitization diagnostics with explicit ownership and error rules.

    >>> from molbridge import parse, detect_problems
    >>> mol = parse("c1ccccc1")
    >>> mol.atom_count()
    6
    >>> detect_problems(mol)
    []

Submodules:
    molbridge.types       - Molecule, EditableMolecule and Atom handles
    molbridge.parser      - SMILES, SMARTS and mol block construction
    molbridge.writer      - SMILES and mol block output
    molbridge.diagnostics - Typed chemistry problem records
    molbridge.elements    - Engine-encoded enums and periodic table
    molbridge.engine      - RDKit log control
"""

__version__ = "0.1.0"

# Core types
from molbridge.types import Atom, EditableMolecule, Molecule, refresh

# Parsing and writing
from molbridge.parser import SmilesParserParams, parse, parse_mol_block, parse_smarts
from molbridge.writer import to_mol_block, to_smiles

# Diagnostics
from molbridge.diagnostics import (
    AtomProblem,
    ChemistryProblem,
    KekulizeProblem,
    MoleculeProblem,
    detect_problems,
)

# Exceptions
from molbridge.exceptions import (
    AtomIndexError,
    ChemError,
    ParseError,
    RefreshError,
    StaleAtomError,
)

# Element data
from molbridge.elements import BondType, HybridizationType, get_valence_list

__all__ = [
    # Types
    "Atom", "Molecule", "EditableMolecule", "refresh",
    # Parsing
    "parse", "parse_smarts", "parse_mol_block", "SmilesParserParams",
    # Writing
    "to_smiles", "to_mol_block",
    # Diagnostics
    "detect_problems", "ChemistryProblem", "AtomProblem", "KekulizeProblem", "MoleculeProblem",
    # Exceptions
    "ChemError", "ParseError", "AtomIndexError", "StaleAtomError", "RefreshError",
    # Elements
    "HybridizationType", "BondType", "get_valence_list",
]
