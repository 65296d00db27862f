# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# protocol.py

"""
End-to-end verifier checks for the bundled circuits.

Every case is checked twice, each time against a freshly deployed verifier:

  positive: fullprove -> normalize -> export calldata -> reshape -> verifyProof == true
  negative: zero-filled arguments of the same shape        -> verifyProof == false

Usage:
    python -m zkharness.protocol [circuit-or-contract ...]
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from zkharness.calldata import (
    Groth16Arguments,
    PlonkArguments,
    get_scheme,
    split_calldata,
    to_verifier_arguments,
    zero_arguments,
)
from zkharness.constants import CIRCUITS_DIR
from zkharness.errors import VerificationMismatch
from zkharness.normalize import normalize
from zkharness.snarkjs import SnarkJS
from zkharness.verifier import CastVerifier, deploy_verifier


@dataclass(frozen=True)
class CircuitCase:
    """One circuit compiled for one proving scheme, with its verifier contract."""

    circuit: str
    scheme: str
    contract: str
    n_public: int
    # (signal, value) pairs, kept as a tuple so cases stay hashable
    witness: tuple[tuple[str, str], ...] = ()
    artifact_dir: str | None = None

    @property
    def name(self) -> str:
        return f"{self.circuit} with {get_scheme(self.scheme).name}"

    @property
    def artifacts(self) -> Path:
        return Path(CIRCUITS_DIR) / (self.artifact_dir or self.circuit)

    @property
    def wasm_path(self) -> Path:
        return self.artifacts / f"{self.circuit}_js" / f"{self.circuit}.wasm"

    @property
    def zkey_path(self) -> Path:
        return self.artifacts / "circuit_final.zkey"


CASES = (
    CircuitCase(
        circuit="HelloWorld",
        scheme="groth16",
        contract="HelloWorldVerifier",
        n_public=1,
        witness=(("a", "1"), ("b", "2")),
    ),
    CircuitCase(
        circuit="Multiplier3",
        scheme="groth16",
        contract="Multiplier3Verifier",
        n_public=2,
        witness=(("a", "1"), ("b", "2"), ("c", "3")),
    ),
    CircuitCase(
        circuit="Multiplier3",
        scheme="plonk",
        contract="Multiplier3VerifierPlonk",
        n_public=2,
        witness=(("a", "1"), ("b", "2"), ("c", "3")),
        artifact_dir="Multiplier3_plonk",
    ),
)


def prove_arguments(
    case: CircuitCase, prover: Any
) -> tuple[Groth16Arguments | PlonkArguments, list]:
    """
    Prove `case.witness` and turn the proof into verifier arguments.

    Args:
        case: The circuit to prove.
        prover: Anything with `full_prove` and `export_solidity_calldata`
            shaped like `SnarkJS`.

    Returns:
        (verifier arguments, normalized public signals)
    """
    proof, public_signals = prover.full_prove(
        dict(case.witness), case.wasm_path, case.zkey_path, case.scheme
    )
    print(f"{case.name}: public signals {public_signals}")

    proof = normalize(proof)
    public_signals = normalize(public_signals)

    calldata = prover.export_solidity_calldata(proof, public_signals)
    # the plonk proof must stay the exact hex token snarkjs exported
    arguments = to_verifier_arguments(split_calldata(calldata), case.scheme)
    return arguments, public_signals


def _expect(case: CircuitCase, verifier: Any, arguments: Any, expected: bool) -> None:
    result = verifier.verify_proof(arguments)
    if result is not expected:
        raise VerificationMismatch(case.contract, expected, result)
    print(f"{case.name}: verifyProof returned {result} as expected")


def check_valid_proof(
    case: CircuitCase, verifier: Any, prover: Any
) -> Groth16Arguments | PlonkArguments:
    """The verifier must accept a real proof. Returns the arguments it was called with."""
    arguments, _ = prove_arguments(case, prover)
    _expect(case, verifier, arguments, True)
    return arguments


def check_invalid_proof(
    case: CircuitCase, verifier: Any
) -> Groth16Arguments | PlonkArguments:
    """The verifier must reject zero-filled arguments of the right shape."""
    arguments = zero_arguments(case.scheme, case.n_public)
    _expect(case, verifier, arguments, False)
    return arguments


def deploy_cast_verifier(case: CircuitCase) -> CastVerifier:
    address = deploy_verifier(case.contract)
    print(f"{case.contract} deployed to {address}")
    return CastVerifier(address, case.scheme, contract=case.contract)


def run_case(
    case: CircuitCase,
    prover: Any = None,
    deploy: Callable[[CircuitCase], Any] = deploy_cast_verifier,
) -> None:
    """
    Run the positive and then the negative check, each on a fresh deployment.

    Raises:
        VerificationMismatch: If the verifier answers wrongly.
    """
    prover = prover if prover is not None else SnarkJS()
    check_valid_proof(case, deploy(case), prover)
    check_invalid_proof(case, deploy(case))


def select_cases(names: list[str]) -> list[CircuitCase]:
    """Cases whose circuit or contract name is in `names`; all cases if empty."""
    if not names:
        return list(CASES)

    selected = [c for c in CASES if c.circuit in names or c.contract in names]
    unknown = set(names) - {c.circuit for c in CASES} - {c.contract for c in CASES}
    if unknown:
        raise ValueError(f"unknown circuits: {', '.join(sorted(unknown))}")
    return selected


def main() -> None:
    """CLI: run the selected cases against the node at `RPC_URL`."""
    try:
        cases = select_cases(sys.argv[1:])
    except ValueError as e:
        print(e, file=sys.stderr)
        print(
            "Usage: python -m zkharness.protocol [circuit-or-contract ...]",
            file=sys.stderr,
        )
        sys.exit(1)

    prover = SnarkJS()
    for case in cases:
        try:
            run_case(case, prover)
        except VerificationMismatch as e:
            print(f"{case.name}: FAILED: {e}", file=sys.stderr)
            sys.exit(1)
    print(f"{len(cases)} case(s) passed")


if __name__ == "__main__":
    main()
