# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only


class ShapeError(ValueError):
    """An argument vector is shorter than the scheme's fixed arity."""


class ParseError(ValueError):
    """A calldata token is not a decimal or hex field element."""


class PatchMatchError(ValueError):
    """A verifier source is missing the pragma or placeholder contract."""


class VerificationMismatch(AssertionError):
    """The verifier answered differently than the test expected."""

    def __init__(self, contract: str, expected: bool, actual: bool):
        self.contract = contract
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{contract}.verifyProof returned {actual}, expected {expected}"
        )
