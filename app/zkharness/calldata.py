# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# calldata.py

"""
Reshape snarkjs solidity calldata into verifier call arguments.

`snarkjs zkey export soliditycalldata` prints the call arguments as one string:

  Groth16: ["0x..", "0x.."],[["0x..", "0x.."],["0x..", "0x.."]],["0x..", "0x.."],["0x.."]
  PLONK:   0x<packed proof bytes>,["0x..", "0x.."]

Flattening that string gives the proof elements followed by the public
signals. Each scheme describes how the leading elements fold back into the
verifier's proof parameters; everything after them is the `input` array.

Groth16 verifier:
  verifyProof(uint256[2] a, uint256[2][2] b, uint256[2] c, uint256[] input)

PLONK verifier:
  verifyProof(bytes proof, uint256[] input)
"""

import math
from dataclasses import asdict, dataclass
from typing import Iterator

from eth_typing import HexStr

from zkharness.constants import CALLDATA_STRIP_RE, DECIMAL_RE, HEX_RE
from zkharness.errors import ParseError, ShapeError


@dataclass
class Groth16Arguments:
    a: list[str]
    b: list[list[str]]
    c: list[str]
    input: list[str]

    def as_dict(self) -> dict:
        return asdict(self)

    def call_args(self) -> tuple:
        return (self.a, self.b, self.c, self.input)


@dataclass
class PlonkArguments:
    proof: HexStr
    input: list[str]

    def as_dict(self) -> dict:
        return asdict(self)

    def call_args(self) -> tuple:
        return (self.proof, self.input)


@dataclass(frozen=True)
class Slot:
    """
    One proof parameter of a verifier call.

    `shape` is the nested array shape, `()` for a single element. A raw slot
    keeps the exported token untouched instead of canonicalizing it.
    """

    name: str
    shape: tuple[int, ...] = ()
    raw: bool = False

    @property
    def size(self) -> int:
        return math.prod(self.shape)


@dataclass(frozen=True)
class Scheme:
    name: str
    slots: tuple[Slot, ...]
    arguments: type
    signature: str

    @property
    def proof_arity(self) -> int:
        """Number of leading calldata elements that belong to the proof."""
        return sum(slot.size for slot in self.slots)


GROTH16 = Scheme(
    name="groth16",
    slots=(Slot("a", (2,)), Slot("b", (2, 2)), Slot("c", (2,))),
    arguments=Groth16Arguments,
    signature="verifyProof(uint256[2],uint256[2][2],uint256[2],uint256[])(bool)",
)

PLONK = Scheme(
    name="plonk",
    slots=(Slot("proof", raw=True),),
    arguments=PlonkArguments,
    signature="verifyProof(bytes,uint256[])(bool)",
)

SCHEMES = {scheme.name: scheme for scheme in (GROTH16, PLONK)}

GROTH16_PROOF_ARITY = GROTH16.proof_arity
PLONK_PROOF_ARITY = PLONK.proof_arity

# placeholder for raw proof slots in zero-filled calls: 24 zero words
ZERO_PROOF = "0x" + "00" * 32 * 24


def get_scheme(scheme: "Scheme | str") -> Scheme:
    if isinstance(scheme, Scheme):
        return scheme
    try:
        return SCHEMES[scheme.lower()]
    except KeyError:
        raise ValueError(
            f"unknown proving scheme {scheme!r}, expected one of {sorted(SCHEMES)}"
        ) from None


def canonical(token: str) -> str:
    """
    Render a decimal or 0x hex literal as a canonical decimal string.

    Raises:
        ParseError: If the token is not a numeral.
    """
    if DECIMAL_RE.fullmatch(token):
        value = int(token, 10)
    elif HEX_RE.fullmatch(token):
        value = int(token, 16)
    else:
        raise ParseError(f"calldata token {token!r} is not a decimal or hex numeral")
    return str(value)


def split_calldata(calldata: str) -> list[str]:
    """
    Flatten exported calldata into its raw tokens, in source order.

    Quotes, square brackets and whitespace are dropped and the rest is split
    on commas. Tokens are returned exactly as the exporter wrote them.
    """
    flat = CALLDATA_STRIP_RE.sub("", calldata)
    # empty arrays, such as a circuit without public signals, leave no token
    return [token for token in flat.split(",") if token]


def to_argument_vector(calldata: str) -> list[str]:
    """
    Flatten exported calldata into decimal field element strings.

        >>> to_argument_vector('["0x1", "0x2"],["3"]')
        ['1', '2', '3']
    """
    return [canonical(token) for token in split_calldata(calldata)]


def _take(tokens: Iterator[str], shape: tuple[int, ...], raw: bool):
    if not shape:
        token = next(tokens)
        return token if raw else canonical(token)
    return [_take(tokens, shape[1:], raw) for _ in range(shape[0])]


def to_verifier_arguments(
    vector: list[str], scheme: "Scheme | str"
) -> Groth16Arguments | PlonkArguments:
    """
    Fold a flat calldata vector into the scheme's verifier arguments.

    The first `scheme.proof_arity` elements fill the proof slots in order,
    the remainder becomes `input`. Both raw tokens from `split_calldata` and
    an already canonical vector are accepted.

    Args:
        vector: Flat calldata elements, proof first then public signals.
        scheme: `GROTH16`, `PLONK`, or a scheme name.

    Returns:
        `Groth16Arguments` or `PlonkArguments`.

    Raises:
        ShapeError: If the vector is shorter than the proof arity.
        ParseError: If a non-raw element is not a field element.
    """
    scheme = get_scheme(scheme)
    if len(vector) < scheme.proof_arity:
        raise ShapeError(
            f"{scheme.name} calldata needs at least {scheme.proof_arity} "
            f"elements, got {len(vector)}"
        )

    tokens = iter(vector)
    fields = {slot.name: _take(tokens, slot.shape, slot.raw) for slot in scheme.slots}
    fields["input"] = [canonical(token) for token in tokens]
    return scheme.arguments(**fields)


def zero_arguments(
    scheme: "Scheme | str", n_public: int
) -> Groth16Arguments | PlonkArguments:
    """
    Correctly shaped verifier arguments with every element set to zero.

    A verifier must reject these; they exercise the negative path.
    """
    scheme = get_scheme(scheme)
    tokens = []
    for slot in scheme.slots:
        tokens.extend([ZERO_PROOF if slot.raw else "0"] * slot.size)
    tokens.extend(["0"] * n_public)
    return to_verifier_arguments(tokens, scheme)
