# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only
import os
import re

# numerals emitted by snarkjs
DECIMAL_RE = re.compile(r"^[0-9]+$")
HEX_RE = re.compile(r"^0x[0-9a-fA-F]+$")

# calldata punctuation: quotes, square brackets, whitespace
CALLDATA_STRIP_RE = re.compile(r"[\"\[\]\s]")

# generated verifier sources
PRAGMA_RE = re.compile(r"pragma solidity \^\d+\.\d+\.\d+")
PLACEHOLDER_CONTRACT_RE = re.compile(r"contract Verifier\b")
TARGET_PRAGMA = "pragma solidity ^0.8.0"
IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# paths and tools
CONTRACTS_DIR = os.environ.get("ZKHARNESS_CONTRACTS_DIR", "contracts")
CIRCUITS_DIR = os.environ.get(
    "ZKHARNESS_CIRCUITS_DIR", os.path.join(CONTRACTS_DIR, "circuits")
)
SNARKJS = os.environ.get("SNARKJS", "snarkjs")
CAST = os.environ.get("CAST", "cast")
FORGE = os.environ.get("FORGE", "forge")
RPC_URL = os.environ.get("RPC_URL", "http://127.0.0.1:8545")

# first anvil dev account
PRIVATE_KEY = os.environ.get(
    "PRIVATE_KEY",
    "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80",
)
