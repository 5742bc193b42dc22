#!/usr/bin/env python3
"""
Benchmark comparing property cache refresh strategies.

Sets the formal charge on every heteroatom of a molecule, then refreshes
either once after the whole batch or after each single edit. Raw RDKit
calls on the same molecule give the baseline cost of the handle layer.

Usage:
    python benchmarks/bench_refresh.py [--extended]

Options:
    --extended    Run every test molecule instead of just the large one
"""

import sys
import os
import time
from dataclasses import dataclass
from typing import Optional

# Ensure local molbridge is used (not installed version)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Test molecules with varying complexity
TEST_MOLECULES = {
    "small_amine": "NCCN",
    "medium_drug": "CN1C=NC2=C1C(=O)N(C(=O)N2C)C",  # Caffeine
    "drug_like": "Cc1ccc(cc1Nc2nccc(n2)c3cccnc3)NC(=O)c4ccc(cc4)CN5CCN(CC5)C",  # Imatinib-like
    "large_complex": "CCn1c2ccc3cc2c2cc(ccc21)C(=O)c1ccc(cc1)Cn1c[n+](c2ccccc21)Cc1ccc(cc1)C(=O)c1ccc2c(c1)c1cc(ccc1n2CC)C(=O)c1ccc(cc1)C[n+]1cn(c2ccccc21)Cc1ccc(cc1)C3=O",
}

# Default molecule for quick benchmark
LARGE_MOLECULE = TEST_MOLECULES["large_complex"]

ITERATIONS = 500
EXTENDED_ITERATIONS = 200


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    smiles: str
    time_seconds: float
    iterations: int
    num_edits: int
    num_atoms: int

    @property
    def time_per_call_ms(self) -> float:
        return (self.time_seconds / self.iterations) * 1000

    @property
    def time_per_edit_us(self) -> float:
        """Microseconds per edited atom per call."""
        if not self.num_edits:
            return 0.0
        return (self.time_seconds / self.iterations / self.num_edits) * 1_000_000


def heteroatom_indices(smiles: str) -> list[int]:
    """Indices of the atoms that get edited: everything that is not carbon."""
    from molbridge import parse
    mol = parse(smiles)
    return [atom.idx for atom in mol if atom.atomic_num != 6]


def benchmark_rdkit(smiles: str, iterations: int) -> BenchmarkResult:
    """Benchmark raw RDKit edits with a single cache update."""
    from rdkit import Chem

    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit failed to parse SMILES: {smiles}")
    targets = heteroatom_indices(smiles)

    start = time.perf_counter()
    for _ in range(iterations):
        work = Chem.Mol(mol)
        for idx in targets:
            work.GetAtomWithIdx(idx).SetFormalCharge(0)
        work.UpdatePropertyCache(strict=False)
    end = time.perf_counter()

    return BenchmarkResult(
        smiles=smiles,
        time_seconds=end - start,
        iterations=iterations,
        num_edits=len(targets),
        num_atoms=mol.GetNumAtoms(),
    )


def benchmark_batched(smiles: str, iterations: int) -> BenchmarkResult:
    """Benchmark molbridge edits followed by one molecule-level refresh."""
    from molbridge import parse

    mol = parse(smiles)
    targets = heteroatom_indices(smiles)

    start = time.perf_counter()
    for _ in range(iterations):
        work = mol.copy()
        for idx in targets:
            work[idx].formal_charge = 0
        work.update_property_cache(strict=False)
    end = time.perf_counter()

    return BenchmarkResult(
        smiles=smiles,
        time_seconds=end - start,
        iterations=iterations,
        num_edits=len(targets),
        num_atoms=mol.atom_count(),
    )


def benchmark_per_edit(smiles: str, iterations: int) -> BenchmarkResult:
    """Benchmark molbridge edits each followed by its own atom refresh."""
    from molbridge import parse

    mol = parse(smiles)
    targets = heteroatom_indices(smiles)

    start = time.perf_counter()
    for _ in range(iterations):
        work = mol.copy()
        for idx in targets:
            atom = work[idx]
            atom.formal_charge = 0
            atom.update_property_cache(strict=False)
    end = time.perf_counter()

    return BenchmarkResult(
        smiles=smiles,
        time_seconds=end - start,
        iterations=iterations,
        num_edits=len(targets),
        num_atoms=mol.atom_count(),
    )


STRATEGIES = {
    "rdkit": benchmark_rdkit,
    "batched": benchmark_batched,
    "per_edit": benchmark_per_edit,
}


def run_single_benchmark():
    """Run basic single-molecule benchmark."""
    print("=" * 70)
    print("Property Cache Refresh Benchmark")
    print("=" * 70)
    print(f"\nTest molecule ({len(LARGE_MOLECULE)} chars):")
    print(f"  {LARGE_MOLECULE[:60]}...")
    print(f"\nIterations: {ITERATIONS}")
    print("-" * 70)

    results: dict[str, Optional[BenchmarkResult]] = {}
    for name, bench in STRATEGIES.items():
        print(f"\nRunning {name} benchmark...", end=" ", flush=True)
        try:
            result = bench(LARGE_MOLECULE, ITERATIONS)
            results[name] = result
            print("done")
            print(f"  Time: {result.time_seconds:.3f}s ({result.time_per_call_ms:.3f}ms per call)")
            print(f"  Edits: {result.num_edits}")
        except ImportError as e:
            results[name] = None
            print(f"SKIPPED ({e})")

    print("\n" + "=" * 70)
    print("Summary")
    print("=" * 70)

    baseline = results.get("rdkit")
    if baseline is None:
        print("Could not compare (RDKit baseline missing)")
        return
    for name in ("batched", "per_edit"):
        result = results.get(name)
        if result is not None:
            ratio = result.time_seconds / baseline.time_seconds
            print(f"{name:<10} {ratio:.2f}x the raw RDKit time")


def run_extended_benchmark():
    """Run every test molecule with every strategy."""
    print("=" * 78)
    print("EXTENDED Property Cache Refresh Benchmark")
    print("=" * 78)
    print(f"\nIterations per molecule: {EXTENDED_ITERATIONS}")
    print("-" * 78)

    header = f"{'Molecule':<18} {'Atoms':>6} {'Edits':>6} {'RDKit ms':>10} {'batch ms':>10} {'edit ms':>10} {'µs/edit':>10}"
    print(header)
    print("-" * 78)

    for name, smiles in TEST_MOLECULES.items():
        rdkit_res = benchmark_rdkit(smiles, EXTENDED_ITERATIONS)
        batched_res = benchmark_batched(smiles, EXTENDED_ITERATIONS)
        per_edit_res = benchmark_per_edit(smiles, EXTENDED_ITERATIONS)
        print(f"{name:<18} "
              f"{batched_res.num_atoms:>6} "
              f"{batched_res.num_edits:>6} "
              f"{rdkit_res.time_per_call_ms:>10.4f} "
              f"{batched_res.time_per_call_ms:>10.4f} "
              f"{per_edit_res.time_per_call_ms:>10.4f} "
              f"{per_edit_res.time_per_edit_us:>10.2f}")


def main():
    if "--extended" in sys.argv or "-e" in sys.argv:
        run_extended_benchmark()
    else:
        run_single_benchmark()
        print("\n" + "-" * 70)
        print("TIP: Run with --extended for detailed multi-molecule analysis")


if __name__ == "__main__":
    main()
