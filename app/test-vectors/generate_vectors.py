#!/usr/bin/env python3

# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

"""
Generate calldata-vectors.json for the calldata reshaping tests.

Run from the app/ directory:
    PYTHONPATH=. python test-vectors/generate_vectors.py
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from zkharness.calldata import to_argument_vector, to_verifier_arguments, split_calldata


def make_vector(name: str, scheme: str, calldata: str) -> dict:
    vector = to_argument_vector(calldata)
    arguments = to_verifier_arguments(split_calldata(calldata), scheme)

    return {
        "name": name,
        "scheme": scheme,
        "calldata": calldata,
        "vector": vector,
        "arguments": arguments.as_dict(),
    }


vectors = [
    make_vector(
        "groth16-hello-world",
        "groth16",
        '["0x01", "0x02"],[["0x03", "0x04"],["0x05", "0x06"]],["0x07", "0x08"],'
        '["0x0000000000000000000000000000000000000000000000000000000000000002"]',
    ),
    make_vector(
        "groth16-multiplier3",
        "groth16",
        '["0x2a", "0xff"],\n[["0x100", "0x1f"],["0x0", "0x10"]],\n["0xa", "0xb"],\n["0x02", "0x06"]',
    ),
    make_vector(
        "groth16-decimal-tokens",
        "groth16",
        '["1", "2"],[["3", "4"],["5", "6"]],["7", "8"],[]',
    ),
    make_vector(
        "plonk-multiplier3",
        "plonk",
        '0x00001234abcd,["0x02","0x06"]',
    ),
    # 24-word packed proof, a single set bit at 2**256
    make_vector(
        "plonk-packed-proof",
        "plonk",
        "0x" + "00" * 735 + "01" + "00" * 32 + ',["0x02","0x06"]',
    ),
]

out_path = Path(__file__).resolve().parent / "calldata-vectors.json"
out_path.write_text(json.dumps(vectors, indent=2) + "\n")
print(f"Wrote {len(vectors)} vectors to {out_path}")
