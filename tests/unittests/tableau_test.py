# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
import itertools

import numpy as np
import pytest as pt

from tabula.pauli import LengthMismatchError, Pauli, PauliString
from tabula.tableau import (
    StabilizerTableau,
    _g,
    commutator_sign,
    count_qubits,
    gf2_rank,
    rowsum,
    unpack_tableau,
    zero_state,
)


def _state_with(*rows: str) -> StabilizerTableau:
    """Overwrite the first generators of a zero state, no validity check."""
    state = StabilizerTableau(len(rows[0].lstrip("-")))
    for i, row in enumerate(rows):
        state.set_stabilizer(i, PauliString.from_string(row))
    return state


@pt.mark.parametrize("n", [1, 2, 3, 7])
def test_zero_state(n: int):
    state = StabilizerTableau(n)
    assert state.n_qubits == n
    assert state.tableau.shape == (n, 2 * n + 1)
    assert state.tableau.dtype == np.uint8
    assert state.get_all_stabilizers_str() == [
        "I" * i + "Z" + "I" * (n - i - 1) for i in range(n)
    ]
    state.validate()


def test_zero_state_array():
    np.testing.assert_array_equal(
        zero_state(3),
        np.array(
            [
                [0, 0, 0, 1, 0, 0, 0],
                [0, 0, 0, 0, 1, 0, 0],
                [0, 0, 0, 0, 0, 1, 0],
            ]
        ),
    )
    assert count_qubits(zero_state(3)) == 3


@pt.mark.parametrize("x1,z1,x2,z2", itertools.product((0, 1), repeat=4))
def test_g_matches_product_table(x1: int, z1: int, x2: int, z2: int):
    phase, _ = Pauli.from_bits(x1, z1) * Pauli.from_bits(x2, z2)
    assert _g(x1, z1, x2, z2) % 4 == phase.value


def test_g_with_unsigned_bits():
    one, zero = np.uint8(1), np.uint8(0)
    assert _g(one, zero, zero, one) == -1


def test_unpack_tableau():
    state = zero_state(2)
    x, z, r = unpack_tableau(state)
    assert x.shape == z.shape == (2, 2)
    assert r.shape == (2,)
    # views, not copies
    r[0] = 1
    assert state[0, -1] == 1


@pt.mark.parametrize(
    "operator,msg",
    [
        (np.zeros((2, 4), dtype="u1"), "missing the sign column"),
        (np.zeros((2, 2, 5), dtype="u1"), "Only 1D or 2D"),
    ],
)
def test_unpack_tableau_fails(operator: np.ndarray, msg: str):
    with pt.raises(ValueError, match=msg):
        unpack_tableau(operator)


@pt.mark.parametrize(
    "gate,before,after",
    [
        ("h", "X", "Z"),
        ("h", "Z", "X"),
        ("h", "Y", "-Y"),
        ("s", "X", "Y"),
        ("s", "Y", "-X"),
        ("s", "Z", "Z"),
        ("x", "X", "X"),
        ("x", "Z", "-Z"),
        ("x", "Y", "-Y"),
        ("y", "X", "-X"),
        ("y", "Y", "Y"),
        ("y", "Z", "-Z"),
        ("z", "X", "-X"),
        ("z", "Y", "-Y"),
        ("z", "Z", "Z"),
        ("z", "-X", "X"),
    ],
)
def test_single_qubit_gates(gate: str, before: str, after: str):
    state = _state_with(before)
    getattr(state, f"apply_{gate}")(0)
    assert state.get_all_stabilizers_str() == [after]


@pt.mark.parametrize(
    "before,after",
    [
        ("XI", "XX"),
        ("IX", "IX"),
        ("ZI", "ZI"),
        ("IZ", "ZZ"),
        ("YI", "YX"),
        ("IY", "ZY"),
        ("XZ", "-YY"),
        ("YY", "-XZ"),
        ("ZX", "ZX"),
        ("-XX", "-XI"),
    ],
)
def test_cnot_conjugation(before: str, after: str):
    state = _state_with(before)
    state.apply_cnot(0, 1)
    assert state.get_stabilizer(0) == PauliString.from_string(after)


@pt.mark.parametrize(
    "before,after",
    [
        ("XI", "XZ"),
        ("IX", "ZX"),
        ("ZI", "ZI"),
        ("IZ", "IZ"),
        ("XX", "YY"),
        ("YI", "YZ"),
        ("XY", "-YX"),
    ],
)
def test_cz_conjugation(before: str, after: str):
    state = _state_with(before)
    state.apply_cz(0, 1)
    assert str(state.get_stabilizer(0)) == after


def test_hadamard_on_zero_state():
    state = StabilizerTableau(1)
    state.apply_h(0)
    assert state.get_all_stabilizers_str() == ["X"]


def test_bell_state(bell_state: StabilizerTableau):
    assert bell_state.get_all_stabilizers_str() == ["XX", "ZZ"]
    bell_state.validate()


@pt.mark.parametrize("gate,reps", [("h", 2), ("s", 4), ("x", 2), ("y", 2), ("z", 2)])
def test_single_qubit_gates_are_periodic(
    scrambled_state: StabilizerTableau, gate: str, reps: int
):
    before = scrambled_state.copy()
    for q in range(scrambled_state.n_qubits):
        for _ in range(reps):
            getattr(scrambled_state, f"apply_{gate}")(q)
    assert scrambled_state == before


def test_s_twice_is_not_identity():
    state = StabilizerTableau(1)
    state.apply_h(0)
    state.apply_s(0)
    state.apply_s(0)
    assert state.get_all_stabilizers_str() == ["-X"]


@pt.mark.parametrize("gate", ["cnot", "cz"])
@pt.mark.parametrize("q1,q2", [(0, 1), (1, 0), (0, 3), (2, 1)])
def test_two_qubit_gates_are_self_inverse(
    scrambled_state: StabilizerTableau, gate: str, q1: int, q2: int
):
    before = scrambled_state.copy()
    getattr(scrambled_state, f"apply_{gate}")(q1, q2)
    getattr(scrambled_state, f"apply_{gate}")(q1, q2)
    assert scrambled_state == before


@pt.mark.parametrize("q1,q2", [(0, 1), (3, 2), (1, 3)])
def test_cz_is_symmetric(scrambled_state: StabilizerTableau, q1: int, q2: int):
    other = scrambled_state.copy()
    scrambled_state.apply_cz(q1, q2)
    other.apply_cz(q2, q1)
    assert scrambled_state == other


def test_gates_preserve_validity(scrambled_state: StabilizerTableau):
    scrambled_state.validate()
    assert scrambled_state.rank() == 4


@pt.mark.parametrize("gate", ["cnot", "cz"])
def test_two_qubit_gates_same_qubit(gate: str):
    state = StabilizerTableau(2)
    with pt.raises(ValueError, match="must differ"):
        getattr(state, f"apply_{gate}")(1, 1)


@pt.mark.parametrize(
    "dest,src",
    [
        ("XX", "ZZ"),
        ("ZZ", "XX"),
        ("-XZ", "ZX"),
        ("YY", "-XX"),
        ("ZIZ", "IZZ"),
        ("XYZ", "ZYX"),
    ],
)
def test_row_add_matches_multiply(dest: str, src: str):
    state = _state_with(dest, src)
    state.row_add(0, 1)
    product = PauliString.from_string(src) * PauliString.from_string(dest)
    assert state.get_stabilizer(0) == product
    # the source row is untouched
    assert state.get_stabilizer(1) == PauliString.from_string(src)


def test_row_add_anticommuting_fails():
    state = _state_with("XI", "ZI")
    with pt.raises(ValueError, match="anticommute"):
        state.row_add(0, 1)
    # nothing changed
    assert state.get_all_stabilizers_str() == ["XI", "ZI"]


def test_rowsum_on_array():
    state = zero_state(2)
    rowsum(state, 0, 1)
    assert PauliString.from_binary(state[0]) == PauliString.from_string("ZZ")


def test_set_and_get_stabilizer():
    state = StabilizerTableau(3)
    state.set_stabilizer(1, PauliString.from_string("-XYZ"))
    assert state.get_stabilizer(1) == PauliString.from_string("-XYZ")
    assert state.signs.tolist() == [0, 1, 0]
    # signs is a copy
    state.signs[0] = 1
    assert state.signs[0] == 0


@pt.mark.parametrize(
    "stab,exc",
    [
        ("XX", LengthMismatchError),
        ("+iXXX", ValueError),
    ],
)
def test_set_stabilizer_fails(stab: str, exc: type):
    state = StabilizerTableau(3)
    with pt.raises(exc):
        state.set_stabilizer(0, PauliString.from_string(stab))
    assert state == StabilizerTableau(3)


def test_from_stabilizers():
    stabs = [PauliString.from_string(s) for s in ("XX", "-ZZ")]
    state = StabilizerTableau.from_stabilizers(2, stabs)
    assert state.get_all_stabilizers() == stabs
    with pt.raises(ValueError, match="Exactly 3 stabilisers"):
        StabilizerTableau.from_stabilizers(3, stabs)


@pt.mark.parametrize(
    "rows,msg",
    [
        (("XI", "ZI"), "Stabiliser 1 does not commute with stabiliser 0"),
        (("ZI", "ZI"), "Only 1 of the 2 stabilisers are independent"),
        (("ZZI", "IZZ", "ZIZ"), "Only 2 of the 3"),
    ],
)
def test_validate_fails(rows: tuple[str, ...], msg: str):
    with pt.raises(ValueError, match=msg):
        _state_with(*rows).validate()


def test_commutator_sign():
    a = np.array([PauliString.from_string(s).to_binary() for s in ("XI", "ZZ")])
    b = np.array([PauliString.from_string(s).to_binary() for s in ("ZI", "XX", "IY")])
    np.testing.assert_array_equal(
        commutator_sign(a, b),
        np.array([[1, 0, 0], [0, 0, 1]]),
    )
    assert commutator_sign(a[0], b[0]) == 1


@pt.mark.parametrize(
    "matrix,rank",
    [
        (np.eye(4), 4),
        (np.zeros((3, 3)), 0),
        ([[1, 1, 0], [0, 1, 1], [1, 0, 1]], 2),
        ([[1, 1, 1, 1], [1, 1, 0, 0], [0, 0, 1, 1]], 2),
        ([[0, 1], [1, 0]], 2),
    ],
)
def test_gf2_rank(matrix, rank: int):
    assert gf2_rank(np.array(matrix)) == rank


def test_copy_and_array(bell_state: StabilizerTableau):
    other = bell_state.copy()
    assert other == bell_state
    other.apply_x(0)
    assert other != bell_state
    np.testing.assert_array_equal(np.asarray(bell_state), bell_state.tableau)
    assert str(bell_state) == "XX\nZZ"
    assert repr(bell_state) == "StabilizerTableau<['XX', 'ZZ']>"
