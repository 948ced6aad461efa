# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""Single-qubit Pauli operators, phases and multi-qubit Pauli strings.

This module implements the algebra that the rest of the package is built on and is
independent of anything else in the package itself.

The single-qubit Pauli group is closed under multiplication, but it is **not**
abelian: :math:`XY = iZ` while :math:`YX = -iZ`. The multiplication table in this
module is the single source of truth for these relations and it is spelled out
entry by entry in :data:`PAULI_PRODUCTS` instead of being derived from the binary
representation.

Notes:
    :class:`PauliString` objects are immutable. All arithmetic returns a *new*
    string, contrary to the tableau operations in :mod:`tabula.tableau` which
    modify their input in place.

    >>> a = PauliString.from_string("XY")
    >>> b = PauliString.from_string("YZ")
    >>> str(a * b)
    '-ZX'
    >>> str(a)
    'XY'
"""
from __future__ import annotations

import enum
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np


class LengthMismatchError(ValueError):
    """Two operands act on a different number of qubits."""


class Phase(enum.Enum):
    r"""Global phase of a Pauli operator, an element of :math:`\{1, i, -1, -i\}`.

    The value of each member is the exponent :math:`k` of :math:`i^k`, so that
    multiplying phases is the addition of exponents modulo 4.
    """

    PLUS = 0
    PLUS_I = 1
    MINUS = 2
    MINUS_I = 3

    def multiply(self, other: Phase) -> Phase:
        """Product of two phases.

        Examples:
            >>> Phase.PLUS_I.multiply(Phase.PLUS_I)
            <Phase.MINUS: 2>
        """
        return Phase((self.value + other.value) % 4)

    __mul__ = multiply

    def sign(self) -> int:
        """Collapse the phase to a sign, ignoring the imaginary unit.

        Only meaningful where the phase is known to be real, e.g. for the generators
        of a stabiliser group.
        """
        return 1 if self in (Phase.PLUS, Phase.PLUS_I) else -1

    def negate(self) -> Phase:
        """Multiply the phase by :math:`-1`."""
        return Phase((self.value + 2) % 4)

    @property
    def is_real(self) -> bool:
        """Whether the phase is :math:`\\pm 1`."""
        return self.value % 2 == 0

    def to_complex(self) -> complex:
        """Return the phase as a complex number."""
        return (1, 1j, -1, -1j)[self.value]

    @classmethod
    def from_complex(cls, value: complex) -> Phase:
        """Convert one of :math:`\\pm 1, \\pm i` into a :class:`Phase`.

        Raises:
            ValueError: if ``value`` is not a fourth root of unity.
        """
        for phase, number in zip(cls, (1, 1j, -1, -1j)):
            if value == number:
                return phase
        raise ValueError(f"{value!r} is not one of 1, i, -1, -i")

    @property
    def prefix(self) -> str:
        """Text prefix used when printing a Pauli string with this phase."""
        return ("", "+i", "-", "-i")[self.value]


class Pauli(enum.Enum):
    """Single-qubit Pauli operator.

    The value of each member is its binary representation :math:`x + 2z`, the same
    encoding used by the columns of a :class:`~tabula.tableau.StabilizerTableau`.
    """

    I = 0  # noqa: E741
    X = 1
    Z = 2
    Y = 3

    def __str__(self) -> str:  # noqa: D105
        return self.name

    @property
    def bits(self) -> tuple[int, int]:
        """The ``(x, z)`` bits of this operator."""
        return self.value & 1, self.value >> 1

    @classmethod
    def from_bits(cls, x: Any, z: Any) -> Pauli:
        """Build an operator from its ``(x, z)`` bits.

        Examples:
            >>> Pauli.from_bits(1, 1)
            <Pauli.Y: 3>
        """
        # casting, otherwise numpy unsigned types leak into the enum lookup
        return cls(int(x) + 2 * int(z))

    @classmethod
    def from_char(cls, char: str) -> Pauli:
        """Parse one of ``I``, ``X``, ``Y`` or ``Z``.

        Raises:
            ValueError: for any other character.
        """
        try:
            return cls[char]
        except KeyError:
            raise ValueError(
                f"Unknown Pauli operator {char!r}, only I, X, Y, Z are allowed"
            ) from None

    def multiply(self, other: Pauli) -> tuple[Phase, Pauli]:
        """Multiply two single-qubit operators.

        Returns:
            a tuple with the phase picked up by the product and the resulting operator.

        Examples:
            >>> Pauli.X.multiply(Pauli.Y)
            (<Phase.PLUS_I: 1>, <Pauli.Z: 2>)
            >>> Pauli.Y.multiply(Pauli.X)
            (<Phase.MINUS_I: 3>, <Pauli.Z: 2>)
        """
        return PAULI_PRODUCTS[self, other]

    __mul__ = multiply

    def commutes_with(self, other: Pauli) -> bool:
        """Whether the two operators commute.

        Two single-qubit Pauli operators commute if either of them is the identity or
        if they are the same operator, and anticommute otherwise.
        """
        return self is Pauli.I or other is Pauli.I or self is other


_I, _X, _Y, _Z = Pauli.I, Pauli.X, Pauli.Y, Pauli.Z
_P, _PI, _MI = Phase.PLUS, Phase.PLUS_I, Phase.MINUS_I

#: Multiplication table of the single-qubit Pauli group.
#:
#: Keys are ordered pairs ``(left, right)``, values are ``(phase, product)``.
PAULI_PRODUCTS: dict[tuple[Pauli, Pauli], tuple[Phase, Pauli]] = {
    (_I, _I): (_P, _I),
    (_I, _X): (_P, _X),
    (_I, _Y): (_P, _Y),
    (_I, _Z): (_P, _Z),
    (_X, _I): (_P, _X),
    (_X, _X): (_P, _I),
    (_X, _Y): (_PI, _Z),
    (_X, _Z): (_MI, _Y),
    (_Y, _I): (_P, _Y),
    (_Y, _X): (_MI, _Z),
    (_Y, _Y): (_P, _I),
    (_Y, _Z): (_PI, _X),
    (_Z, _I): (_P, _Z),
    (_Z, _X): (_PI, _Y),
    (_Z, _Y): (_MI, _X),
    (_Z, _Z): (_P, _I),
}

# Optional phase prefix followed by the operators. "+" alone is not accepted.
_PAULI_STRING_RE = re.compile(r"(\+i|-i|-)?([IXYZ]*)")
_PREFIXES = {
    None: Phase.PLUS,
    "-": Phase.MINUS,
    "+i": Phase.PLUS_I,
    "-i": Phase.MINUS_I,
}


@dataclass(frozen=True)
class PauliString:
    """Tensor product of single-qubit Pauli operators with a global phase.

    The number of qubits is fixed at creation. Instances are immutable and hashable.

    Examples:
        >>> p = PauliString.from_string("-XIZ")
        >>> p.n_qubits, p.phase, p[2]
        (3, <Phase.MINUS: 2>, <Pauli.Z: 2>)
        >>> str(p)
        '-XIZ'
    """

    paulis: tuple[Pauli, ...]
    """Single-qubit operators, qubit 0 first."""
    phase: Phase = Phase.PLUS
    """Global phase of the operator."""

    def __post_init__(self):
        """Normalise the operators to a tuple and check their types.

        :meta private:
        """
        object.__setattr__(self, "paulis", tuple(self.paulis))
        if any(not isinstance(p, Pauli) for p in self.paulis):
            raise TypeError("All elements of a PauliString must be `Pauli` members")
        if not isinstance(self.phase, Phase):
            raise TypeError("The phase of a PauliString must be a `Phase` member")

    @classmethod
    def identity(cls, n_qubits: int) -> PauliString:
        """The identity on ``n_qubits`` qubits, with phase :math:`+1`."""
        return cls((Pauli.I,) * n_qubits)

    @classmethod
    def single(cls, pauli: Pauli | str, qubit: int, n_qubits: int) -> PauliString:
        """An operator acting as ``pauli`` on ``qubit`` and as the identity elsewhere.

        Raises:
            ValueError: if ``qubit`` is not a valid index for ``n_qubits`` qubits.
        """
        if not 0 <= qubit < n_qubits:
            raise ValueError(
                f"Qubit {qubit} is out of range for an operator on {n_qubits} qubits"
            )
        if isinstance(pauli, str):
            pauli = Pauli.from_char(pauli)
        paulis = [Pauli.I] * n_qubits
        paulis[qubit] = pauli
        return cls(tuple(paulis))

    @classmethod
    def from_string(cls, text: str, qubits: Optional[int] = None) -> PauliString:
        """Parse the text form of a Pauli string, e.g. ``"-iXIZY"``.

        The text is made of an optional phase prefix (nothing for :math:`+1`, ``-``,
        ``+i`` or ``-i``) followed by one character out of ``IXYZ`` per qubit.

        Args:
            text: the string to parse.
            qubits: if given, the number of qubits the operator must act on.

        Raises:
            ValueError: if ``text`` contains anything else than a valid prefix and
                Pauli characters.
            LengthMismatchError: if ``qubits`` is given and the parsed operator acts
                on a different number of qubits.

        Examples:
            >>> PauliString.from_string("+iXX").phase
            <Phase.PLUS_I: 1>
            >>> PauliString.from_string("XAX")
            Traceback (most recent call last):
              ...
            ValueError: Cannot parse 'XAX' as a Pauli string
        """
        match = _PAULI_STRING_RE.fullmatch(text)
        if match is None:
            raise ValueError(f"Cannot parse {text!r} as a Pauli string")
        prefix, body = match.groups()
        if qubits is not None and len(body) != qubits:
            raise LengthMismatchError(
                f"{text!r} acts on {len(body)} qubits, but {qubits} were expected"
            )
        return cls(tuple(Pauli[c] for c in body), _PREFIXES[prefix])

    @classmethod
    def from_binary(cls, row: np.ndarray) -> PauliString:
        """Build a Pauli string from a binary row ``[x_0..x_n-1, z_0..z_n-1, r]``.

        Raises:
            ValueError: if the row length is even (the sign bit is missing).
        """
        row = np.asarray(row)
        if row.ndim != 1 or row.size % 2 == 0:
            raise ValueError("A binary operator must be a 1D array with a sign bit")
        n = row.size // 2
        return cls(
            tuple(Pauli.from_bits(x, z) for x, z in zip(row[:n], row[n:-1])),
            Phase.MINUS if row[-1] else Phase.PLUS,
        )

    def to_binary(self) -> np.ndarray:
        """Binary representation ``[x | z | r]`` as a ``uint8`` array.

        Raises:
            ValueError: if the phase is imaginary, since the sign bit can only hold
                :math:`\\pm 1`.
        """
        if not self.phase.is_real:
            raise ValueError("Operators with imaginary phase have no binary form")
        n = self.n_qubits
        row = np.zeros(2 * n + 1, dtype="u1")
        for q, p in enumerate(self.paulis):
            row[q], row[q + n] = p.bits
        row[-1] = self.phase is Phase.MINUS
        return row

    @property
    def n_qubits(self) -> int:
        """Number of qubits this operator acts on, identities included."""
        return len(self.paulis)

    @property
    def weight(self) -> int:
        """Number of qubits on which this operator is not the identity."""
        return sum(p is not Pauli.I for p in self.paulis)

    def __len__(self) -> int:  # noqa: D105
        return len(self.paulis)

    def __getitem__(self, qubit: int) -> Pauli:  # noqa: D105
        return self.paulis[qubit]

    def __iter__(self):  # noqa: D105
        return iter(self.paulis)

    def __str__(self) -> str:  # noqa: D105
        return self.phase.prefix + "".join(p.name for p in self.paulis)

    def negate(self) -> PauliString:
        """The same operator with opposite phase."""
        return PauliString(self.paulis, self.phase.negate())

    def _check_length(self, other: PauliString):
        if self.n_qubits != other.n_qubits:
            raise LengthMismatchError(
                f"Operators act on a different number of qubits: "
                f"{self.n_qubits} and {other.n_qubits}"
            )

    def multiply(self, other: PauliString) -> PauliString:
        """Compute the product ``self * other``.

        The phase of the product collects both leading phases and the phase picked
        up on each qubit, from qubit 0 onwards.

        Raises:
            LengthMismatchError: if the operators act on a different number of qubits.
        """
        self._check_length(other)
        phase = self.phase.multiply(other.phase)
        paulis = []
        for left, right in zip(self.paulis, other.paulis):
            local_phase, product = left.multiply(right)
            phase = phase.multiply(local_phase)
            paulis.append(product)
        return PauliString(tuple(paulis), phase)

    __mul__ = multiply

    def commutes_with(self, other: PauliString) -> bool:
        """Whether the two operators commute.

        Two Pauli strings commute if and only if they anticommute on an even number
        of qubits.

        Raises:
            LengthMismatchError: if the operators act on a different number of qubits.

        Examples:
            >>> xx, zz = PauliString.from_string("XX"), PauliString.from_string("ZZ")
            >>> xx.commutes_with(zz)
            True
        """
        self._check_length(other)
        anticommuting = sum(
            not a.commutes_with(b) for a, b in zip(self.paulis, other.paulis)
        )
        return anticommuting % 2 == 0


def strings_to_paulis(
    texts: Iterable[str], qubits: Optional[int] = None
) -> list[PauliString]:
    """Parse many Pauli strings at once, see :meth:`PauliString.from_string`.

    Whitespace-separated strings can be given as a single string.

    Examples:
        >>> [str(p) for p in strings_to_paulis("ZZI IZZ")]
        ['ZZI', 'IZZ']
    """
    if isinstance(texts, str):
        texts = texts.split()
    return [PauliString.from_string(t, qubits) for t in texts]


def pauli_strings_commute(operators: Sequence[PauliString]) -> bool:
    """Check that all the given operators commute pairwise."""
    return all(
        a.commutes_with(b)
        for i, a in enumerate(operators)
        for b in operators[i + 1 :]
    )
