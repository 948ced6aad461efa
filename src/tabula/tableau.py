# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""Binary tableau of a stabiliser state and Clifford conjugation rules.

All calculations in ``tabula`` are based on the tableau formalism of Aaronson and
Gottesman, "Improved simulation of stabilizer circuits" (2004). A stabiliser state
on :math:`n` qubits is described by :math:`n` commuting and independent Pauli
generators, stored as the rows of an :math:`n \\times (2n + 1)` ``uint8`` matrix:
the first :math:`n` columns are the :math:`X` bits, the next :math:`n` the :math:`Z`
bits and the last column holds the sign of each generator (``0`` for :math:`+1`,
``1`` for :math:`-1`). Destabilisers are not tracked, since nothing in this package
measures the state.

The module is split in two layers. The functions operate on bare numpy arrays and,
like most functions working on arrays, they **modify their input** and return it:

>>> state = zero_state(2)
>>> after = hadamard(state, 0)
>>> after is state
True

:class:`StabilizerTableau` wraps one such array and is what the rest of the
package uses.
"""
from __future__ import annotations

import functools
from collections.abc import Iterable, Sequence
from typing import Any, TypeAlias

import numpy as np

from tabula.pauli import LengthMismatchError, PauliString

Tableau: TypeAlias = np.ndarray[Any, np.dtype[np.uint8]]


def _g(x1: int, z1: int, x2: int, z2: int) -> int:
    """Help calculate the phase of the operator when multiplying pauli operators.

    This is effectively the exponent (1, 0, or -1) of the :math:`i` factor resulting
    from multiplying the single-qubit operator ``(x1, z1)`` by ``(x2, z2)``.

    See definition of ``rowsum(h, i)`` by Aaronson and Gottesman.

    Args:
        x1: x bit of operator 1
        z1: z bit of operator 1
        x2: x bit of operator 2
        z2: z bit of operator 2

    Returns:
        exponent of i when two operators are multiplied
    """
    # this casting is necessary, otherwise unsigned numpy types will loop back
    x1 = int(x1)
    x2 = int(x2)
    z1 = int(z1)
    z2 = int(z2)
    if x1 == 0 and z1 == 0:
        return 0
    elif x1 == 1 and z1 == 1:
        return z2 - x2
    elif x1 == 1 and z1 == 0:
        return z2 * (2 * x2 - 1)
    elif x1 == 0 and z1 == 1:
        return x2 * (1 - 2 * z2)
    else:
        raise AssertionError("Bits must be either 0 or 1")


def zero_state(number_of_qubits: int) -> Tableau:
    r"""Return the :math:`\lvert 0\ldots 0\rangle` state of ``number_of_qubits``.

    Generator :math:`i` is :math:`Z` on qubit :math:`i` with sign :math:`+1`.

    Examples:
        >>> zero_state(2)
        array([[0, 0, 1, 0, 0],
               [0, 0, 0, 1, 0]], dtype=uint8)
    """
    state = np.zeros((number_of_qubits, 2 * number_of_qubits + 1), dtype="u1")
    diagonal = np.arange(number_of_qubits)
    state[diagonal, diagonal + number_of_qubits] = 1
    return state


def unpack_tableau(operator: Tableau) -> tuple[Tableau, Tableau, Tableau]:
    """Split the operator/state into its X/Z/Sign components.

    The returned arrays are *views* on ``operator``, modifying them modifies it.

    Args:
        operator: the operator to unpack

    Raises:
        ValueError: if the function's argument last axis has an even number of elements.
    """
    if operator.ndim > 2 or operator.ndim == 0:
        raise ValueError("Only 1D or 2D arrays are allowed")
    if operator.shape[-1] % 2 == 0:
        # We are expecting an operator/state WITH sign column
        raise ValueError("Argument has wrong shape (are you missing the sign column?)")

    n = operator.shape[-1] // 2
    return operator[..., :n], operator[..., n:-1], operator[..., -1]


def count_qubits(state: Tableau) -> int:
    """Number of qubits that a binary operator or state acts upon."""
    return state.shape[-1] // 2


def _as_list(qubits: int | Iterable[int]) -> list[int]:
    if isinstance(qubits, (int, np.integer)):
        return [int(qubits)]
    return list(qubits)


def hadamard(state: Tableau, target_qubits: int | Iterable[int]) -> Tableau:
    r"""Perform the Hadamard gate on the given target qubit(s).

    H transforms stabilizers according to :math:`Z \mapsto X`,
    :math:`X \mapsto Z` and :math:`Y \mapsto -Y`.

    Args:
        state: quantum state in binary representation.
        target_qubits: 0-based target qubit index/indices.
    """
    number_of_qubits = count_qubits(state)
    x, z, r = unpack_tableau(state)

    for target in _as_list(target_qubits):
        # Set r = r ^ (x_target*z_target)
        r ^= x[:, target] & z[:, target]
        # Swap x_target and z_target
        state[:, [target, target + number_of_qubits]] = state[
            :, [target + number_of_qubits, target]
        ]
    return state


def phase_gate(state: Tableau, target_qubits: int | Iterable[int]) -> Tableau:
    r"""Perform the phase gate :math:`S` on the given target qubit(s).

    S transforms stabilizers according to :math:`X \mapsto Y`,
    :math:`Y \mapsto -X` and :math:`Z \mapsto Z`.

    Args:
        state: the state to which to apply the gate
        target_qubits: The indices of the target qubit
    """
    # These are references to the same underlying numpy array
    x, z, r = unpack_tableau(state)

    for target in _as_list(target_qubits):
        # Set r = r ^ (x_target*z_target)
        r ^= x[:, target] & z[:, target]
        # z_target = z_target ^ x_target
        z[:, target] ^= x[:, target]
    return state


def _pairs(
    control_qubits: int | Sequence[int], target_qubits: int | Sequence[int]
) -> list[tuple[int, int]]:
    controls = _as_list(control_qubits)
    targets = _as_list(target_qubits)
    if len(targets) != len(controls):
        raise ValueError("Target and control must have the same number of qubits")
    pairs = list(zip(controls, targets))
    if any(c == t for c, t in pairs):
        raise ValueError("Control and target of a two-qubit gate must differ")
    return pairs


def control_not_gate(
    state: Tableau,
    control_qubits: int | Sequence[int],
    target_qubits: int | Sequence[int],
) -> Tableau:
    r"""Perform a CNOT gate on ``target`` qubit based on ``control`` qubit.

    CNOT transforms stabilizers according to
    :math:`X \otimes I \mapsto X \otimes X`,
    :math:`I \otimes X \mapsto I \otimes X`,
    :math:`Z \otimes I \mapsto Z \otimes I` and
    :math:`I \otimes Z \mapsto Z \otimes Z`.

    Args:
        state: quantum state in binary representation.
        control_qubits: 0-based control qubit index/indices.
        target_qubits: 0-based target qubit index/indices.
    """
    x, z, r = unpack_tableau(state)

    for control, target in _pairs(control_qubits, target_qubits):
        # r = r ^ (x_control * z_target *(x_target ^ z_control ^1))
        r ^= x[:, control] & z[:, target] & (x[:, target] ^ z[:, control] ^ 1)
        # x_target = x_target ^ x_control
        x[:, target] ^= x[:, control]
        # z_control = z_target ^ z_control
        z[:, control] ^= z[:, target]
    return state


def control_phase_gate(
    state: Tableau,
    control_qubits: int | Sequence[int],
    target_qubits: int | Sequence[int],
) -> Tableau:
    r"""Perform CPHASE or CZ gate on a target qubit based on a control qubit.

    CZ transforms stabilizers according to
    :math:`X \otimes I \mapsto X \otimes Z`,
    :math:`I \otimes X \mapsto Z \otimes X`,
    :math:`Z \otimes I \mapsto Z \otimes I` and
    :math:`I \otimes Z \mapsto I \otimes Z`. The gate is symmetric in its two
    qubits.

    Args:
        state: quantum state in binary representation.
        control_qubits: 0-based control qubit index/indices.
        target_qubits: 0-based target qubit index/indices.
    """
    x, z, r = unpack_tableau(state)

    for control, target in _pairs(control_qubits, target_qubits):
        # r = r ^ (x_control * x_target *(z_target ^ z_control))
        r ^= x[:, control] & x[:, target] & (z[:, target] ^ z[:, control])
        # z_target = z_target ^ x_control
        z[:, target] ^= x[:, control]
        # z_control = z_control ^ x_target
        z[:, control] ^= x[:, target]
    return state


#: Alias for :func:`hadamard`.
h = hadamard
#: Alias for :func:`phase_gate`.
s = phase_gate
#: Alias for :func:`control_not_gate`.
cx = control_not_gate
#: Alias for :func:`control_phase_gate`.
cz = control_phase_gate


def x(state: Tableau, qubits: int | Iterable[int]) -> Tableau:
    r"""Perform the X (bit-flip) gate on a given target qubit.

    X transforms stabilizers according to :math:`X \mapsto X` and
    :math:`Z \mapsto -Z`, i.e. it flips the sign of every generator acting as
    :math:`Z` or :math:`Y` on the target.

    Args:
        state: The state in the tableau representation
        qubits: The indices of the target qubit
    """
    _, z_bits, r = unpack_tableau(state)
    for q in _as_list(qubits):
        # Set r = r ^ z_target
        r ^= z_bits[:, q]
    return state


def z(state: Tableau, qubits: int | Iterable[int]) -> Tableau:
    r"""Perform the Z (phase-flip) gate on a given target qubit.

    Z transforms stabilizers according to :math:`X \mapsto -X` and
    :math:`Z \mapsto Z`, i.e. it flips the sign of every generator acting as
    :math:`X` or :math:`Y` on the target.

    Args:
        state: The state in the tableau representation
        qubits: The indices of the target qubit
    """
    x_bits, _, r = unpack_tableau(state)
    for q in _as_list(qubits):
        # Set r = r ^ x_target
        r ^= x_bits[:, q]
    return state


def y(state: Tableau, qubits: int | Iterable[int]) -> Tableau:
    """Perform the Y gate on a given target qubit.

    This is the same as applying the gate :math:`ZX`, and is here for convenience,
    since it calls :func:`z` and :func:`x` internally.

    Args:
        state: The state in the tableau representation
        qubits: The indices of the target qubit
    """
    return z(x(state, qubits), qubits)


def rowsum(state: Tableau, dest: int, src: int) -> Tableau:
    """Replace generator ``dest`` with the product of generators ``src`` and ``dest``.

    This is the ``rowsum(h, i)`` routine of Aaronson and Gottesman. The bits of the
    two rows are XOR-ed together and the sign of the product is computed from both
    signs and the per-qubit phase exponents given by :func:`_g`.

    Raises:
        ValueError: if the two rows anticommute, in which case the product has an
            imaginary phase and cannot be stored in the tableau.
    """
    x_bits, z_bits, r = unpack_tableau(state)
    phase_exponent = functools.reduce(
        lambda prev, nxt: prev + _g(*nxt),
        zip(x_bits[src], z_bits[src], x_bits[dest], z_bits[dest]),
        2 * int(r[dest]) + 2 * int(r[src]),
    )
    if phase_exponent % 2:
        raise ValueError(f"Rows {dest} and {src} anticommute and cannot be summed")
    r[dest] = 1 if phase_exponent % 4 == 2 else 0
    x_bits[dest] ^= x_bits[src]
    z_bits[dest] ^= z_bits[src]
    return state


def commutator_sign(a: Tableau, b: Tableau) -> np.ndarray:
    r"""Check if the given operators/states (anti)commute.

    If both arguments are 2D arrays, the output is a matrix :math:`M` of shape
    ``(len(a), len(b))`` with :math:`m_{ij} = 0` if :math:`[a_i, b_j] = 0` and
    :math:`1` otherwise. 1D arguments are treated as a single row and empty axes
    are squeezed out.

    Examples:
        >>> commutator_sign(zero_state(2), np.array([1, 0, 0, 0, 0], dtype="u1"))
        array([1, 0], dtype=uint8)
    """
    a = np.atleast_2d(a)
    b = np.atleast_2d(b)
    ax, az, _ = unpack_tableau(a)
    bx, bz, _ = unpack_tableau(b)
    # int casting, so the matrix products don't wrap around
    ax, az, bx, bz = (m.astype(int) for m in (ax, az, bx, bz))
    return ((ax @ bz.T + az @ bx.T) % 2).astype("u1").squeeze()


def gf2_rank(matrix: np.ndarray) -> int:
    """Rank of a binary matrix over GF(2).

    Examples:
        >>> gf2_rank(np.array([[1, 1, 0], [0, 1, 1], [1, 0, 1]]))
        2
    """
    m = np.array(matrix, dtype="u1") % 2
    rank = 0
    n_rows, n_cols = m.shape
    for col in range(n_cols):
        if rank == n_rows:
            break
        candidates = np.nonzero(m[rank:, col])[0]
        if candidates.size == 0:
            continue
        pivot = rank + candidates[0]
        if pivot != rank:
            m[[rank, pivot]] = m[[pivot, rank]]
        others = np.nonzero(m[:, col])[0]
        others = others[others != rank]
        m[others] ^= m[rank]
        rank += 1
    return rank


class StabilizerTableau:
    """Stabiliser state described by its generators in the binary picture.

    All gates act in place and touch every generator, since conjugating a
    generating set requires updating each of its elements.

    Qubit and row indices are **not** validated here, they are the responsibility
    of the caller (see :class:`tabula.simulator.Simulator`).

    .. automethod:: __init__
    """

    def __init__(self, n_qubits: int):
        r"""Initialize a new state in the computational :math:`\lvert 0\rangle` state.

        Args:
            n_qubits: Total number of qubits in the state.
        """
        #: Full tableau of the state: X block, Z block and sign column.
        self.tableau: Tableau = zero_state(n_qubits)

    @classmethod
    def from_stabilizers(
        cls, n_qubits: int, stabilizers: Sequence[PauliString]
    ) -> StabilizerTableau:
        """Build a state by overwriting each generator of the zero state.

        No check is made that the given operators commute or are independent, see
        :meth:`validate`.

        Raises:
            ValueError: if the number of operators is not ``n_qubits``.
        """
        if len(stabilizers) != n_qubits:
            raise ValueError(
                f"Exactly {n_qubits} stabilisers are needed, {len(stabilizers)} given"
            )
        state = cls(n_qubits)
        for i, stab in enumerate(stabilizers):
            state.set_stabilizer(i, stab)
        return state

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        """Support direct casting of this object into a numpy array."""
        if dtype is None and not copy:
            return self.tableau
        return self.tableau.astype(dtype or self.tableau.dtype)

    def __eq__(self, other: object) -> bool:  # noqa: D105
        if not isinstance(other, StabilizerTableau):
            return NotImplemented
        return np.array_equal(self.tableau, other.tableau)

    def __str__(self) -> str:  # noqa: D105
        return "\n".join(str(s) for s in self.get_all_stabilizers())

    def __repr__(self) -> str:  # noqa: D105
        return f"StabilizerTableau<{self.get_all_stabilizers_str()}>"

    @property
    def n_qubits(self) -> int:
        """Number of qubits, equal to the number of generators."""
        return count_qubits(self.tableau)

    @property
    def signs(self) -> np.ndarray:
        """Sign bits of the generators (a copy)."""
        return self.tableau[:, -1].copy()

    def copy(self) -> StabilizerTableau:
        """Return an independent copy of this state."""
        new = StabilizerTableau(0)
        new.tableau = self.tableau.copy()
        return new

    def apply_h(self, qubit: int):
        """Conjugate the state by a Hadamard gate on ``qubit``."""
        hadamard(self.tableau, qubit)

    def apply_s(self, qubit: int):
        """Conjugate the state by a phase gate on ``qubit``."""
        phase_gate(self.tableau, qubit)

    def apply_cnot(self, control: int, target: int):
        """Conjugate the state by a CNOT gate."""
        control_not_gate(self.tableau, control, target)

    def apply_cz(self, qubit1: int, qubit2: int):
        """Conjugate the state by a CZ gate."""
        control_phase_gate(self.tableau, qubit1, qubit2)

    def apply_x(self, qubit: int):
        """Apply a Pauli :math:`X` gate, flipping signs only."""
        x(self.tableau, qubit)

    def apply_y(self, qubit: int):
        """Apply a Pauli :math:`Y` gate, flipping signs only."""
        y(self.tableau, qubit)

    def apply_z(self, qubit: int):
        """Apply a Pauli :math:`Z` gate, flipping signs only."""
        z(self.tableau, qubit)

    def row_add(self, dest: int, src: int):
        """Multiply generator ``dest`` by generator ``src``, see :func:`rowsum`.

        Gates never call this, it is meant for bringing the generators into a
        normal form.
        """
        rowsum(self.tableau, dest, src)

    def get_stabilizer(self, index: int) -> PauliString:
        """Return generator ``index`` as a :class:`~tabula.pauli.PauliString`."""
        return PauliString.from_binary(self.tableau[index])

    def set_stabilizer(self, index: int, stabilizer: PauliString):
        """Overwrite generator ``index`` with ``stabilizer``.

        This is **not** a group multiplication and no check is made that the new
        generator commutes with, or is independent of, the others.

        Raises:
            LengthMismatchError: if ``stabilizer`` acts on a different number of
                qubits.
            ValueError: if ``stabilizer`` has an imaginary phase.
        """
        if stabilizer.n_qubits != self.n_qubits:
            raise LengthMismatchError(
                f"Stabiliser acts on {stabilizer.n_qubits} qubits, "
                f"but the state has {self.n_qubits}"
            )
        self.tableau[index] = stabilizer.to_binary()

    def get_all_stabilizers(self) -> list[PauliString]:
        """All generators, in row order."""
        return [self.get_stabilizer(i) for i in range(self.n_qubits)]

    def get_all_stabilizers_str(self) -> list[str]:
        """All generators in their text form, in row order."""
        return [str(s) for s in self.get_all_stabilizers()]

    def commutation_matrix(self) -> np.ndarray:
        """Symplectic products of all pairs of generators as a 2D array."""
        return np.atleast_2d(commutator_sign(self.tableau, self.tableau))

    def rank(self) -> int:
        """Number of independent generators, over GF(2)."""
        return gf2_rank(self.tableau[:, :-1])

    def validate(self):
        """Check that the generators commute pairwise and are independent.

        Raises:
            ValueError: when the generators do not describe a stabiliser state.
        """
        rows, cols = np.nonzero(np.triu(self.commutation_matrix()))
        if rows.size:
            raise ValueError(
                f"Stabiliser {cols[0]} does not commute with stabiliser {rows[0]}"
            )
        if (rank := self.rank()) != self.n_qubits:
            raise ValueError(
                f"Only {rank} of the {self.n_qubits} stabilisers are independent"
            )
