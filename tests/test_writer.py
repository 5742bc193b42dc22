"""Tests for SMILES and mol block output, compared against RDKit."""

import pytest
from rdkit import Chem

from molbridge import SmilesParserParams, parse, to_mol_block, to_smiles


def rdkit_canonical(smiles: str) -> str:
    """Get RDKit canonical SMILES for comparison."""
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    return Chem.MolToSmiles(mol, canonical=True)


class TestToSmiles:

    def test_benzene(self):
        assert to_smiles(parse("C1=CC=CC=C1")) == "c1ccccc1"

    def test_matches_rdkit(self, complex_smiles):
        for smiles in complex_smiles:
            assert to_smiles(parse(smiles)) == rdkit_canonical(smiles)

    def test_deterministic(self, complex_smiles):
        for smiles in complex_smiles:
            mol = parse(smiles)
            assert to_smiles(mol) == to_smiles(mol)

    def test_method_form(self):
        mol = parse("OCC")
        assert mol.to_smiles() == to_smiles(mol) == "CCO"

    def test_non_isomeric(self):
        mol = parse("C[C@@H](C(=O)O)N")
        assert "@" in to_smiles(mol)
        assert "@" not in to_smiles(mol, isomeric=False)

    def test_non_canonical_keeps_input_order(self):
        mol = parse("OCC")
        assert to_smiles(mol, canonical=False) == "OCC"


class TestRoundTrip:
    """parse(to_smiles(m)) is canonically equivalent to m."""

    @pytest.mark.parametrize("smiles", [
        "CC(=O)OC1=CC=CC=C1C(=O)O",
        "CN1C=NC2=C1C(=O)N(C(=O)N2C)C",
        "F/C=C/F",
        "[2H]C([2H])([2H])[2H]",
        "[Na+].[Cl-]",
        "c1ccc2ccccc2c1",
    ])
    def test_fixed_point(self, smiles):
        once = to_smiles(parse(smiles))
        twice = to_smiles(parse(once))
        assert once == twice

    def test_unsanitized_round_trip(self):
        params = SmilesParserParams(sanitize=False)
        mol = parse("CCO", params)
        mol.update_property_cache(strict=False)
        assert to_smiles(parse(to_smiles(mol))) == "CCO"

    def test_edited_round_trip(self):
        mol = parse("CCO")
        mol[2].formal_charge = -1
        mol.update_property_cache()
        text = to_smiles(mol)
        assert text == "CC[O-]"
        assert to_smiles(parse(text)) == text


class TestMolBlock:

    def test_contains_atoms(self):
        block = to_mol_block(parse("CCO"))
        assert "V2000" in block or "V3000" in block
        assert " O " in block

    def test_deterministic(self, benzene):
        assert to_mol_block(benzene) == to_mol_block(benzene)
