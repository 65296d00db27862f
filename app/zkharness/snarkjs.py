# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# snarkjs.py

"""
Thin wrapper around the snarkjs command line.

Only two snarkjs features are used:
  - `<scheme> fullprove`: witness + wasm + zkey -> proof.json, public.json
  - `zkey export soliditycalldata`: proof + public signals -> calldata string

Every call runs in its own temporary directory and raises
`subprocess.CalledProcessError` if snarkjs exits non-zero.
"""

import subprocess
import tempfile
from pathlib import Path
from typing import Any

from zkharness.calldata import get_scheme
from zkharness.constants import SNARKJS
from zkharness.files import load_json, save_json
from zkharness.normalize import stringify


class SnarkJS:
    def __init__(self, snarkjs_path: str | Path = SNARKJS):
        self.snarkjs_path = str(snarkjs_path)

    def _run(self, *args: str, cwd: str | Path) -> str:
        cmd = [self.snarkjs_path, *args]
        output = subprocess.run(
            cmd, capture_output=True, text=True, check=True, cwd=cwd
        )
        return output.stdout.strip()

    def full_prove(
        self,
        witness: dict[str, Any],
        wasm_path: str | Path,
        zkey_path: str | Path,
        scheme: str = "groth16",
    ) -> tuple[Any, list]:
        """
        Generate a proof for `witness` with the given circuit artifacts.

        Args:
            witness: Circuit input signals, e.g. {"a": "1", "b": "2"}.
            wasm_path: Witness generator compiled by circom.
            zkey_path: Proving key.
            scheme: "groth16" or "plonk".

        Returns:
            (proof, public_signals) exactly as snarkjs wrote them.
        """
        scheme = get_scheme(scheme).name
        with tempfile.TemporaryDirectory() as tmp:
            tmp = Path(tmp)
            save_json(tmp / "input.json", stringify(witness))
            self._run(
                scheme,
                "fullprove",
                str(tmp / "input.json"),
                str(Path(wasm_path).resolve()),
                str(Path(zkey_path).resolve()),
                str(tmp / "proof.json"),
                str(tmp / "public.json"),
                cwd=tmp,
            )
            return load_json(tmp / "proof.json"), load_json(tmp / "public.json")

    def export_solidity_calldata(self, proof: Any, public_signals: list) -> str:
        """
        Export the solidity calldata for a proof.

        Integer values are written back as decimal strings first, since
        snarkjs reads its inputs with a plain JSON parser.
        """
        with tempfile.TemporaryDirectory() as tmp:
            tmp = Path(tmp)
            save_json(tmp / "proof.json", stringify(proof))
            save_json(tmp / "public.json", stringify(public_signals))
            return self._run(
                "zkey",
                "export",
                "soliditycalldata",
                str(tmp / "public.json"),
                str(tmp / "proof.json"),
                cwd=tmp,
            )
