# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""Catalog of built-in quantum error-correcting codes.

Each :class:`Code` stores the stabiliser checks of the code and, for each logical
qubit, one logical :math:`Z` operator. A code with :math:`k` checks on :math:`n`
qubits encodes :math:`n - k` logical qubits, so checks and logical operators
together give exactly :math:`n` commuting and independent generators. The state
they define is the logical :math:`\\lvert 0\\ldots 0\\rangle` codeword, which is
what :meth:`Code.tableau` returns.

>>> code = lookup("repetition_3")
>>> code.n_qubits, code.n_checks
(3, 2)
>>> code.tableau().get_all_stabilizers_str()
['ZZI', 'IZZ', 'ZZZ']

The available codes can be listed with :func:`available_codes`:

>>> available_codes()
['repetition_3', 'five_qubit', 'steane', 'surface_d3', 'shor']
"""
from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass

from tabula.pauli import PauliString, strings_to_paulis
from tabula.tableau import StabilizerTableau


class UnknownCodeError(KeyError):
    """The requested code is not part of the catalog."""


@dataclass(frozen=True)
class CodeInfo:
    """Human-readable metadata of a code."""

    name: str
    """Display name."""
    description: str
    """One-line description."""
    n_qubits: int
    """Number of physical qubits."""
    n_logical: int
    """Number of encoded logical qubits."""
    distance: int
    """Code distance."""


@dataclass(frozen=True)
class Code:
    """A stabiliser code with its checks and logical :math:`Z` operators.

    The code is immutable: if you need a slightly modified version of a code you
    need to make a new one from scratch.

    Raises:
        ValueError: if the operators do not add up to a valid stabiliser state, see
            :meth:`~tabula.tableau.StabilizerTableau.validate`.
    """

    key: str
    """Name of the code in the catalog."""
    info: CodeInfo
    """Metadata of the code."""
    stabilizers: tuple[PauliString, ...]
    """The checks of the code."""
    logical_z: tuple[PauliString, ...]
    """One logical :math:`Z` operator per logical qubit."""

    def __post_init__(self):
        """Check the operators against the metadata and each other.

        :meta private:
        """
        object.__setattr__(self, "stabilizers", tuple(self.stabilizers))
        object.__setattr__(self, "logical_z", tuple(self.logical_z))
        if len(self.logical_z) != self.info.n_logical:
            raise ValueError(
                f"{self.key}: {self.info.n_logical} logical qubits declared, but "
                f"{len(self.logical_z)} logical operators given"
            )
        if len(self.stabilizers) + len(self.logical_z) != self.info.n_qubits:
            raise ValueError(
                f"{self.key}: checks and logical operators must add up to "
                f"{self.info.n_qubits} generators"
            )
        # fails if anything does not commute or is not independent
        self.tableau()

    def __repr__(self):
        """Make dataclass representation more straightforward."""
        return f"Code<{self.key}: [[{self.n_qubits},{self.info.n_logical}]]>"

    @property
    def n_qubits(self) -> int:
        """Number of physical qubits."""
        return self.info.n_qubits

    @property
    def n_checks(self) -> int:
        """Number of stabiliser checks."""
        return len(self.stabilizers)

    @property
    def generators(self) -> list[PauliString]:
        """Checks followed by logical operators, in tableau row order."""
        return [*self.stabilizers, *self.logical_z]

    @functools.cached_property
    def _codeword(self) -> StabilizerTableau:
        state = StabilizerTableau.from_stabilizers(self.n_qubits, self.generators)
        state.validate()
        return state

    def tableau(self) -> StabilizerTableau:
        """Return a fresh copy of the codeword state of this code."""
        return self._codeword.copy()

    @classmethod
    def make_repetition_3(cls) -> Code:
        """Generate :class:`Code` object for the 3-qubit bit-flip repetition code."""
        return cls(
            key="repetition_3",
            info=CodeInfo(
                name="3-qubit Repetition Code",
                description="Bit-flip code, detects 1 X error",
                n_qubits=3,
                n_logical=1,
                distance=3,
            ),
            stabilizers=tuple(strings_to_paulis("ZZI IZZ")),
            logical_z=tuple(strings_to_paulis("ZZZ")),
        )

    @classmethod
    def make_five_qubit(cls) -> Code:
        """Generate :class:`Code` object for the five qubit code."""
        return cls(
            key="five_qubit",
            info=CodeInfo(
                name="5-qubit Perfect Code",
                description="Smallest code correcting any single-qubit error",
                n_qubits=5,
                n_logical=1,
                distance=3,
            ),
            stabilizers=tuple(strings_to_paulis("XZZXI IXZZX XIXZZ ZXIXZ")),
            logical_z=tuple(strings_to_paulis("ZZZZZ")),
        )

    @classmethod
    def make_steane(cls) -> Code:
        """Generate :class:`Code` object for the 7-qubit Steane code."""
        stabilisers = strings_to_paulis(
            """
            IIIXXXX
            IXXIIXX
            XIXIXIX
            IIIZZZZ
            IZZIIZZ
            ZIZIZIZ
            """
        )
        return cls(
            key="steane",
            info=CodeInfo(
                name="Steane Code",
                description="7-qubit CSS code, corrects any single error",
                n_qubits=7,
                n_logical=1,
                distance=3,
            ),
            stabilizers=tuple(stabilisers),
            logical_z=(PauliString.from_string(7 * "Z"),),
        )

    @classmethod
    def make_surface_d3(cls) -> Code:
        """Generate :class:`Code` object for the distance-3 rotated surface code.

        Data qubits sit on a 3x3 grid, numbered row by row::

            0 - 1 - 2
            |   |   |
            3 - 4 - 5
            |   |   |
            6 - 7 - 8

        Weight-4 checks live on the four faces, weight-2 :math:`X` checks on the top
        and bottom boundaries and weight-2 :math:`Z` checks on the left and right
        ones. The logical :math:`Z` runs along the top row.
        """
        stabilisers = strings_to_paulis(
            """
            XXIXXIIII
            IXXIIIIII
            IIIIXXIXX
            IIIIIIXXI
            ZIIZIIIII
            IZZIZZIII
            IIIZZIZZI
            IIIIIZIIZ
            """
        )
        return cls(
            key="surface_d3",
            info=CodeInfo(
                name="Surface Code (d=3)",
                description="9-qubit rotated surface code on a 3x3 grid",
                n_qubits=9,
                n_logical=1,
                distance=3,
            ),
            stabilizers=tuple(stabilisers),
            logical_z=(PauliString.from_string("ZZZIIIIII"),),
        )

    @classmethod
    def make_shor(cls) -> Code:
        """Generate :class:`Code` object for the 9-qubit Shor code."""
        stabilisers = strings_to_paulis(
            """
            ZZIIIIIII
            IZZIIIIII
            XXXXXXIII
            IIIZZIIII
            IIIIZZIII
            IIIXXXXXX
            IIIIIIZZI
            IIIIIIIZZ
            """
        )
        return cls(
            key="shor",
            info=CodeInfo(
                name="Shor Code",
                description="9-qubit concatenated code, corrects any single error",
                n_qubits=9,
                n_logical=1,
                distance=3,
            ),
            stabilizers=tuple(stabilisers),
            logical_z=(PauliString.from_string(9 * "Z"),),
        )


_CATALOG: dict[str, Callable[[], Code]] = {
    "repetition_3": Code.make_repetition_3,
    "five_qubit": Code.make_five_qubit,
    "steane": Code.make_steane,
    "surface_d3": Code.make_surface_d3,
    "shor": Code.make_shor,
}


def available_codes() -> list[str]:
    """Names of all the codes in the catalog."""
    return list(_CATALOG)


@functools.cache
def _make_code(name: str) -> Code:
    return _CATALOG[name]()


def lookup(name: str) -> Code:
    """Return the catalog code called ``name``.

    Codes are built once, later lookups return the same object.

    Raises:
        UnknownCodeError: if there is no such code.
    """
    if not isinstance(name, str) or name not in _CATALOG:
        raise UnknownCodeError(
            f"Unknown code: {name!r}. Available codes: {', '.join(_CATALOG)}"
        )
    return _make_code(name)


def get_code_info(name: str) -> CodeInfo:
    """Metadata of the catalog code called ``name``.

    Raises:
        UnknownCodeError: if there is no such code.
    """
    return lookup(name).info
