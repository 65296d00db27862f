# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# bump_solidity.py

"""
Prepare snarkjs generated verifier sources for compilation.

`snarkjs zkey export solidityverifier` writes every verifier as
`contract Verifier` with an older caret pragma. Each `contracts/<Name>.sol`
is rewritten in place so that it:

  - declares `pragma solidity ^0.8.0`
  - declares `contract <Name>`, the file stem

Running the patch a second time changes nothing.

Usage:
    python -m zkharness.bump_solidity [contracts_dir]
"""

import re
import sys
from dataclasses import dataclass
from pathlib import Path

from zkharness.constants import (
    CONTRACTS_DIR,
    IDENTIFIER_RE,
    PLACEHOLDER_CONTRACT_RE,
    PRAGMA_RE,
    TARGET_PRAGMA,
)
from zkharness.errors import PatchMatchError
from zkharness.files import load_string, save_string


@dataclass(frozen=True)
class PatchRule:
    """Replace the first match of `pattern` with `template` formatted with the contract name."""

    what: str
    pattern: re.Pattern
    template: str

    def apply(self, content: str, name: str) -> str:
        replacement = self.template.format(name=name)
        patched, count = self.pattern.subn(lambda _: replacement, content, count=1)
        if count:
            return patched
        # already patched by an earlier run
        if re.search(re.escape(replacement) + r"\b", content):
            return content
        raise PatchMatchError(
            f"{name}.sol: no {self.what} matching {self.pattern.pattern!r}, "
            "has the verifier generator output changed?"
        )


PATCH_RULES = (
    PatchRule("pragma", PRAGMA_RE, TARGET_PRAGMA),
    PatchRule("contract", PLACEHOLDER_CONTRACT_RE, "contract {name}"),
)


def patch_source(content: str, name: str) -> str:
    """Apply every patch rule, in order, to the text of one verifier source."""
    for rule in PATCH_RULES:
        content = rule.apply(content, name)
    return content


def patch_contract(circuit_name: str, source_dir: str | Path = CONTRACTS_DIR) -> bool:
    """
    Patch `<source_dir>/<circuit_name>.sol` in place.

    Args:
        circuit_name: File stem, used as the new contract name.
        source_dir: Directory holding the generated verifier sources.

    Returns:
        True if the file was rewritten, False if it was already patched.

    Raises:
        PatchMatchError: If the name is not a Solidity identifier, or the
            source has neither the expected pattern nor its patched form.
        FileNotFoundError: If the source file does not exist.
    """
    if not IDENTIFIER_RE.fullmatch(circuit_name):
        raise PatchMatchError(
            f"{circuit_name!r} is not a valid Solidity contract name"
        )

    path = Path(source_dir) / f"{circuit_name}.sol"
    content = load_string(path)
    patched = patch_source(content, circuit_name)
    if patched == content:
        return False

    save_string(path, patched)
    return True


def bump_all(source_dir: str | Path = CONTRACTS_DIR) -> dict[str, Exception | None]:
    """
    Patch every `.sol` file in `source_dir`.

    A failing file does not stop the others; each failure is printed to
    stderr and returned in the result.

    Returns:
        Map of contract name to None on success or the raised exception.
    """
    results: dict[str, Exception | None] = {}
    for path in sorted(Path(source_dir).glob("*.sol")):
        name = path.stem
        try:
            changed = patch_contract(name, source_dir)
        except (PatchMatchError, OSError, UnicodeDecodeError) as e:
            print(f"{path}: {e}", file=sys.stderr)
            results[name] = e
            continue

        print(f"{path}: {'patched' if changed else 'already patched'}")
        results[name] = None
    return results


def main() -> None:
    """CLI: patch every verifier in the given directory (default `contracts`)."""
    source_dir = sys.argv[1] if len(sys.argv) >= 2 else CONTRACTS_DIR

    if not Path(source_dir).is_dir():
        print(
            "Usage: python -m zkharness.bump_solidity [contracts_dir]", file=sys.stderr
        )
        sys.exit(1)

    results = bump_all(source_dir)
    if any(e is not None for e in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
