"""Test configuration and fixtures for molbridge tests."""

import pytest

from molbridge import Molecule, parse


@pytest.fixture
def benzene() -> Molecule:
    """Freshly parsed benzene."""
    return parse("c1ccccc1")


@pytest.fixture
def simple_smiles() -> list[str]:
    """Basic valid SMILES strings for smoke testing."""
    return [
        "C",
        "CC",
        "CCC",
        "CCO",
        "C=C",
        "C#C",
        "C=O",
        "C#N",
    ]


@pytest.fixture
def invalid_smiles() -> list[str]:
    """SMILES that RDKit refuses to build with default options."""
    return [
        "(",
        "C1CC",
        "C(C",
        "CC)",
        "[C",
        "c1cccc1",
        "C(C)(C)(C)(C)C",
    ]


@pytest.fixture
def complex_smiles() -> list[str]:
    """Complex real-world molecules."""
    return [
        # Aspirin
        "CC(=O)OC1=CC=CC=C1C(=O)O",
        # Caffeine
        "CN1C=NC2=C1C(=O)N(C(=O)N2C)C",
        # Ibuprofen
        "CC(C)Cc1ccc(cc1)C(C)C(=O)O",
        # Acetaminophen
        "CC(=O)Nc1ccc(O)cc1",
        # Naphthalene
        "c1ccc2ccccc2c1",
        # Pyridinium chloride
        "c1cc[nH+]cc1.[Cl-]",
        # Alanine
        "C[C@@H](C(=O)O)N",
        # Biphenyl
        "c1ccc(-c2ccccc2)cc1",
    ]
