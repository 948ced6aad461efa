# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""Single-qubit Pauli errors and their effect on a stabiliser state.

A Pauli error never changes *which* Pauli operator a generator is: conjugating a
Pauli operator by another one at most flips its sign, since the two either commute
or anticommute. Applying a :class:`PauliError` to a
:class:`~tabula.tableau.StabilizerTableau` therefore only touches the sign column,
flipping the sign of every generator that anticommutes with the error on the
affected qubit.

>>> from tabula.tableau import StabilizerTableau
>>> state = StabilizerTableau(3)
>>> _ = PauliError(0, "X").apply(state)
>>> state.get_all_stabilizers_str()
['-ZII', 'IZI', 'IIZ']

Errors can be stored to and loaded from CSV files with two columns, ``qubit`` and
``kind``, through :func:`save_errors_csv` and :func:`load_errors_csv`.
"""
from __future__ import annotations

import enum
import operator
import warnings
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

import pandas as pd

from tabula.pauli import Pauli
from tabula.tableau import StabilizerTableau


class QubitOutOfRangeError(IndexError):
    """A qubit index does not exist in the simulated state."""


class InvalidErrorKindError(ValueError):
    """An error kind is not one of ``X``, ``Y`` or ``Z``."""


class ErrorKind(enum.Enum):
    """Kind of a single-qubit Pauli error."""

    X = "X"
    """Bit flip."""
    Y = "Y"
    """Bit and phase flip."""
    Z = "Z"
    """Phase flip."""

    def __str__(self) -> str:  # noqa: D105
        return self.value

    @classmethod
    def parse(cls, kind: str | ErrorKind) -> ErrorKind:
        """Convert ``"X"``, ``"Y"`` or ``"Z"`` into an :class:`ErrorKind`.

        Raises:
            InvalidErrorKindError: for any other value.
        """
        if isinstance(kind, ErrorKind):
            return kind
        try:
            return cls(kind)
        except ValueError:
            raise InvalidErrorKindError(
                f"Invalid error kind {kind!r}, only X, Y, or Z are allowed"
            ) from None

    @property
    def pauli(self) -> Pauli:
        """The Pauli operator applied by this error."""
        return Pauli[self.value]

    def anticommutes_with(self, pauli: Pauli) -> bool:
        """Whether an error of this kind flips a generator acting as ``pauli``."""
        return not self.pauli.commutes_with(pauli)


class ErrorDict(TypedDict):  # noqa: D101
    qubit: int
    """Index of the qubit affected by the error."""
    kind: str
    """One of ``X``, ``Y``, ``Z``."""


def _qubit_index(qubit) -> int:
    if isinstance(qubit, bool):
        raise TypeError("Qubit index must be an integer, not a boolean")
    try:
        # numpy integers are fine too, floats are not even when integral
        return operator.index(qubit)
    except TypeError:
        raise TypeError(
            f"Qubit index must be an integer, not {type(qubit).__name__}"
        ) from None


def check_qubit(qubit: int, n_qubits: int) -> int:
    """Validate a qubit index against the number of qubits of a state.

    Returns:
        the index itself, as a plain ``int``.

    Raises:
        QubitOutOfRangeError: if the index is negative or not lower than
            ``n_qubits``.
        TypeError: if the index is not an integer.
    """
    qubit = _qubit_index(qubit)
    if not 0 <= qubit < n_qubits:
        raise QubitOutOfRangeError(
            f"Qubit index {qubit} is out of range for {n_qubits} qubits"
        )
    return qubit


@dataclass(frozen=True)
class PauliError:
    """A Pauli error acting on a single qubit.

    ``kind`` can be given as a string and is converted on creation.

    Raises:
        TypeError: if ``qubit`` is not an integer, e.g. ``1.5``.
        QubitOutOfRangeError: if ``qubit`` is negative.

    Examples:
        >>> PauliError(2, "Y")
        PauliError(qubit=2, kind=<ErrorKind.Y: 'Y'>)
        >>> str(PauliError(2, "Y"))
        'Y2'
    """

    qubit: int
    """Index of the affected qubit."""
    kind: ErrorKind
    """Which Pauli operator hit the qubit."""

    def __post_init__(self):
        """Convert and check the fields.

        :meta private:
        """
        object.__setattr__(self, "kind", ErrorKind.parse(self.kind))
        object.__setattr__(self, "qubit", _qubit_index(self.qubit))
        if self.qubit < 0:
            raise QubitOutOfRangeError("Qubit indices can't be negative")

    def __str__(self) -> str:  # noqa: D105
        return f"{self.kind}{self.qubit}"

    def apply(self, state: StabilizerTableau) -> StabilizerTableau:
        """Flip the sign of all generators anticommuting with this error.

        The qubit index is not validated, see :func:`check_qubit`.

        Returns:
            the modified state, which is also changed in place.
        """
        match self.kind:
            case ErrorKind.X:
                state.apply_x(self.qubit)
            case ErrorKind.Y:
                state.apply_y(self.qubit)
            case ErrorKind.Z:
                state.apply_z(self.qubit)
        return state

    def as_dict(self) -> ErrorDict:
        """Plain dictionary representation, e.g. ``{"qubit": 0, "kind": "X"}``."""
        return {"qubit": self.qubit, "kind": self.kind.value}

    @classmethod
    def from_dict(cls, error: ErrorDict) -> PauliError:
        """Inverse of :meth:`as_dict`."""
        return cls(error["qubit"], ErrorKind.parse(error["kind"]))


def apply_error(qubit: int, kind: str | ErrorKind, state: StabilizerTableau):
    """Apply a single-qubit Pauli error to ``state``, see :meth:`PauliError.apply`."""
    PauliError(qubit, ErrorKind.parse(kind)).apply(state)


def replace_error(errors: Iterable[PauliError], new: PauliError) -> list[PauliError]:
    """Drop any error on the qubit of ``new`` and append ``new`` at the end."""
    return [e for e in errors if e.qubit != new.qubit] + [new]


#: Columns of the CSV files storing errors.
ERRORS_CSV_COLUMNS = ("qubit", "kind")


def errors_to_dataframe(errors: Iterable[PauliError]) -> pd.DataFrame:
    """Collect the given errors in a :class:`~pandas.DataFrame`.

    Examples:
        >>> df = errors_to_dataframe([PauliError(0, "X"), PauliError(3, "Z")])
        >>> df.to_dict("list")
        {'qubit': [0, 3], 'kind': ['X', 'Z']}
    """
    return pd.DataFrame(
        [e.as_dict() for e in errors], columns=list(ERRORS_CSV_COLUMNS)
    )


def errors_from_dataframe(df: pd.DataFrame) -> list[PauliError]:
    """Convert a :class:`~pandas.DataFrame` with errors into a list.

    Each qubit can carry one error only. When a qubit appears more than once, the
    last entry replaces the previous ones, exactly like repeated calls to
    :meth:`tabula.simulator.Simulator.apply_error`.

    Raises:
        ValueError: if one of the required columns is missing.
        InvalidErrorKindError: if a ``kind`` entry is not ``X``, ``Y``, or ``Z``.

    Warnings:
        If the same qubit appears multiple times.
    """
    if missing := set(ERRORS_CSV_COLUMNS).difference(df.columns):
        raise ValueError(f"Missing column(s) in error table: {sorted(missing)}")

    errors: list[PauliError] = []
    for qubit, kind in zip(df["qubit"], df["kind"]):
        new = PauliError(qubit, ErrorKind.parse(str(kind).strip()))
        if any(e.qubit == new.qubit for e in errors):
            warnings.warn(
                f"Qubit {new.qubit} has more than one error, only the last one is kept",
                stacklevel=2,
            )
        errors = replace_error(errors, new)
    return errors


def save_errors_csv(errors: Iterable[PauliError], csv_path: str | Path):
    """Store the errors as a CSV file with columns ``qubit`` and ``kind``."""
    errors_to_dataframe(errors).to_csv(csv_path, index=False)


def load_errors_csv(csv_path: str | Path) -> list[PauliError]:
    """Load errors from a CSV file, see :func:`errors_from_dataframe`.

    Raises:
        FileNotFoundError: if ``csv_path`` does not exist.
    """
    return errors_from_dataframe(pd.read_csv(csv_path, dtype={"kind": str}))
