# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# verifier.py

"""
Deploy and call solidity verifier contracts through foundry.

`forge create` deploys a freshly compiled verifier and `cast call` runs a
read-only `verifyProof` against it. Both talk to the node at `RPC_URL`
(anvil by default).
"""

import re
import subprocess
from pathlib import Path

from eth_typing import HexAddress, HexStr

from zkharness.calldata import Groth16Arguments, PlonkArguments, Scheme, get_scheme
from zkharness.constants import CAST, CONTRACTS_DIR, FORGE, PRIVATE_KEY, RPC_URL

DEPLOYED_TO_RE = re.compile(r"Deployed to:\s*(0x[0-9a-fA-F]{40})")


def render_cast_arg(value: list | str) -> str:
    """Render one call argument in cast's syntax: nested lists become `[x,y]`."""
    if isinstance(value, list):
        return "[" + ",".join(render_cast_arg(v) for v in value) + "]"
    return str(value)


def parse_bool(output: str) -> bool:
    # cast prints the decoded return value on the last line
    lines = output.strip().splitlines()
    result = lines[-1].strip() if lines else ""
    if result == "true":
        return True
    if result == "false":
        return False
    raise ValueError(f"expected a bool from verifyProof, got {output!r}")


class CastVerifier:
    """A deployed verifier contract, called with `cast call`."""

    def __init__(
        self,
        address: HexAddress,
        scheme: Scheme | str,
        contract: str = "Verifier",
        rpc_url: str = RPC_URL,
        cast_path: str | Path = CAST,
    ):
        self.address = address
        self.scheme = get_scheme(scheme)
        self.contract = contract
        self.rpc_url = rpc_url
        self.cast_path = str(cast_path)

    def verify_proof(self, arguments: Groth16Arguments | PlonkArguments) -> bool:
        if not isinstance(arguments, self.scheme.arguments):
            raise TypeError(
                f"{self.contract} is a {self.scheme.name} verifier, "
                f"got {type(arguments).__name__}"
            )

        cmd = [
            self.cast_path,
            "call",
            self.address,
            self.scheme.signature,
            *[render_cast_arg(arg) for arg in arguments.call_args()],
            "--rpc-url",
            self.rpc_url,
        ]
        output = subprocess.run(cmd, capture_output=True, text=True, check=True)
        return parse_bool(output.stdout)


def deploy_verifier(
    contract: str,
    source_dir: str | Path = CONTRACTS_DIR,
    rpc_url: str = RPC_URL,
    private_key: HexStr = PRIVATE_KEY,
    forge_path: str | Path = FORGE,
) -> HexAddress:
    """
    Deploy `<source_dir>/<contract>.sol:<contract>` and return its address.

    Raises:
        subprocess.CalledProcessError: If forge fails.
        ValueError: If forge did not report a deployment address.
    """
    target = f"{Path(source_dir) / f'{contract}.sol'}:{contract}"
    cmd = [
        str(forge_path),
        "create",
        target,
        "--rpc-url",
        rpc_url,
        "--private-key",
        private_key,
        "--broadcast",
    ]
    output = subprocess.run(cmd, capture_output=True, text=True, check=True)

    match = DEPLOYED_TO_RE.search(output.stdout)
    if match is None:
        raise ValueError(f"forge did not report an address for {contract}:\n{output.stdout}")
    return HexAddress(HexStr(match.group(1)))
