"""Tests for structural edits and atom-view invalidation."""

import pytest
from rdkit import Chem

from molbridge import (
    AtomIndexError,
    BondType,
    ChemError,
    EditableMolecule,
    Molecule,
    StaleAtomError,
    parse,
    to_smiles,
)


def rdkit_canonical(smiles: str) -> str:
    """Get RDKit canonical SMILES for comparison."""
    return Chem.MolToSmiles(Chem.MolFromSmiles(smiles))


class TestConversion:

    def test_to_editable_copies(self):
        mol = parse("CCO")
        editable = mol.to_editable()
        assert isinstance(editable, EditableMolecule)
        editable.remove_atom(2)
        assert mol.atom_count() == 3

    def test_quick_copy(self):
        editable = parse("CCO").to_editable(quick_copy=True)
        assert editable.atom_count() == 3

    def test_to_molecule_copies(self):
        editable = parse("CCO").to_editable()
        mol = editable.to_molecule()
        assert type(mol) is Molecule
        editable.remove_atom(0)
        assert mol.atom_count() == 3


class TestStructuralEdits:

    def test_add_atom_and_bond(self):
        mol = parse("CO").to_editable()
        n_idx = mol.add_atom("N")
        assert n_idx == 2
        bond_idx = mol.add_bond(0, n_idx)
        assert bond_idx == 1
        mol.update_property_cache()
        assert to_smiles(mol) == rdkit_canonical("NCO")

    def test_add_double_bond(self):
        mol = parse("C").to_editable()
        o_idx = mol.add_atom("O")
        mol.add_bond(0, o_idx, BondType.DOUBLE)
        mol.update_property_cache()
        assert to_smiles(mol) == "C=O"

    def test_add_charged_atom(self):
        mol = parse("C").to_editable()
        idx = mol.add_atom("O", formal_charge=-1)
        mol.add_bond(0, idx)
        mol.update_property_cache()
        assert to_smiles(mol) == "C[O-]"

    def test_remove_atom(self):
        mol = parse("CCO").to_editable()
        mol.remove_atom(0)
        mol.update_property_cache(strict=False)
        assert mol.atom_count() == 2
        assert to_smiles(mol) == "CO"

    def test_remove_bond(self):
        mol = parse("CCO").to_editable()
        mol.remove_bond(1, 2)
        mol.update_property_cache()
        assert mol.num_bonds == 1
        assert to_smiles(mol) == rdkit_canonical("CC.O")

    def test_edit_marks_stale(self):
        mol = parse("CCO").to_editable()
        assert not mol.needs_refresh
        mol.add_atom("C")
        assert mol.needs_refresh

    def test_unknown_element(self):
        mol = parse("C").to_editable()
        with pytest.raises(ChemError):
            mol.add_atom("Xx")
        assert mol.generation == 0

    def test_bad_indices(self):
        mol = parse("CC").to_editable()
        with pytest.raises(AtomIndexError):
            mol.remove_atom(5)
        with pytest.raises(AtomIndexError):
            mol.add_bond(0, 5)
        with pytest.raises(AtomIndexError):
            mol.remove_bond(-1, 0)

    def test_duplicate_bond(self):
        mol = parse("CC").to_editable()
        with pytest.raises(ChemError):
            mol.add_bond(0, 1)
        with pytest.raises(ChemError):
            mol.add_bond(1, 1)

    def test_missing_bond(self):
        mol = parse("C.C").to_editable()
        with pytest.raises(ChemError):
            mol.remove_bond(0, 1)


class TestViewInvalidation:
    """Structural edits invalidate every older atom view."""

    def test_remove_atom_invalidates(self):
        mol = parse("CCO").to_editable()
        oxygen = mol[2]
        mol.remove_atom(0)
        assert not oxygen.is_valid
        with pytest.raises(StaleAtomError):
            oxygen.symbol
        with pytest.raises(StaleAtomError):
            oxygen.formal_charge = 1
        assert repr(oxygen) == "Atom(2, <stale>)"

    def test_fresh_view_after_edit(self):
        mol = parse("CCO").to_editable()
        mol.remove_atom(0)
        assert mol[1].symbol == "O"

    @pytest.mark.parametrize("edit", [
        lambda m: m.add_atom("C"),
        lambda m: m.add_bond(0, 2),
        lambda m: m.remove_bond(0, 1),
        lambda m: m.remove_atom(1),
    ])
    def test_every_edit_bumps_generation(self, edit):
        mol = parse("CCO").to_editable()
        view = mol[0]
        before = mol.generation
        edit(mol)
        assert mol.generation == before + 1
        with pytest.raises(StaleAtomError):
            view.atomic_num

    def test_field_edit_keeps_views(self):
        """Setting a field is not a structural change."""
        mol = parse("CCO").to_editable()
        view = mol[0]
        mol[2].formal_charge = -1
        assert view.is_valid
        assert mol.generation == 0

    def test_copy_edit_leaves_views_valid(self):
        mol = parse("CCO").to_editable()
        view = mol[2]
        mol.copy().remove_atom(0)
        assert view.symbol == "O"
