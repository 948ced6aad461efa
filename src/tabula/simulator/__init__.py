# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""Interactive error-injection sessions on a catalog code.

A :class:`Simulator` prepares the codeword of one of the codes in
:mod:`tabula.codes`, lets you put single-qubit Pauli errors on its qubits and
reports the resulting syndrome.

>>> sim = Simulator("repetition_3")
>>> sim.get_stabilizers()
['ZZI', 'IZZ', 'ZZZ']
>>> sim.apply_error(0, "X")
>>> sim.get_syndrome()
[-1, 1, -1]
>>> sim.get_triggered_stabilizers()
[0]

Each qubit carries at most one error. Applying a new error to a qubit that already
has one *replaces* the old error instead of composing with it: the state is rebuilt
from the codeword and all the errors that are still there are applied again, in the
order they were originally given.

>>> sim.apply_error(0, "Z")
>>> sim.get_applied_errors()
[{'qubit': 0, 'kind': 'Z'}]
>>> sim.has_error()
False

Every method validates its arguments before touching the state, so a failing call
leaves the session exactly as it was.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Optional

from tabula import codes
from tabula.errors import (
    ErrorDict,
    ErrorKind,
    PauliError,
    check_qubit,
    replace_error,
)
from tabula.syndrome import Syndrome
from tabula.tableau import StabilizerTableau

if TYPE_CHECKING:
    from tabula.frontend import SimulationConfig


class Simulator:
    """Error-injection session on a single code.

    Args:
        code_name: name of the code to prepare, one of
            :func:`~tabula.codes.available_codes`.

    Raises:
        UnknownCodeError: if ``code_name`` is not in the catalog.
    """

    state: StabilizerTableau
    """Current stabiliser state, codeword plus applied errors."""

    def __init__(self, code_name: str):  # noqa: D107
        self._code = codes.lookup(code_name)
        self._errors: list[PauliError] = []
        self.state = self._code.tableau()

    @classmethod
    def from_config(cls, config: SimulationConfig) -> Simulator:
        """Create a session as described by a configuration object.

        See :meth:`tabula.frontend.SimulationConfig.instantiate`.
        """
        return config.instantiate()

    @property
    def code(self) -> codes.Code:
        """The code this session runs on."""
        return self._code

    @property
    def code_name(self) -> str:
        """Catalog name of :attr:`code`."""
        return self._code.key

    @property
    def n_qubits(self) -> int:
        """Number of physical qubits of the code."""
        return self._code.n_qubits

    @property
    def n_checks(self) -> int:
        """Number of generators that are genuine checks of the code."""
        return self._code.n_checks

    @property
    def errors(self) -> tuple[PauliError, ...]:
        """Errors currently on the qubits, oldest first."""
        return tuple(self._errors)

    def _rebuild(self, errors: list[PauliError]):
        state = self._code.tableau()
        for error in errors:
            error.apply(state)
        self.state = state
        self._errors = errors

    def get_stabilizers(self) -> list[str]:
        """Text form of all the generators of the current state, in row order."""
        return self.state.get_all_stabilizers_str()

    def apply_error(self, qubit: int, kind: str | ErrorKind):
        """Put a Pauli error on a qubit, replacing any previous error there.

        Args:
            qubit: index of the qubit, between 0 and :attr:`n_qubits` excluded.
            kind: ``"X"``, ``"Y"``, or ``"Z"``.

        Raises:
            QubitOutOfRangeError: if ``qubit`` does not exist.
            InvalidErrorKindError: if ``kind`` is not a valid error kind.
        """
        kind = ErrorKind.parse(kind)
        qubit = check_qubit(qubit, self.n_qubits)
        self._rebuild(replace_error(self._errors, PauliError(qubit, kind)))

    def clear_qubit_error(self, qubit: int):
        """Remove the error on ``qubit``, if there is one.

        Raises:
            QubitOutOfRangeError: if ``qubit`` does not exist.
        """
        qubit = check_qubit(qubit, self.n_qubits)
        self._rebuild([e for e in self._errors if e.qubit != qubit])

    def syndrome(self) -> Syndrome:
        """Syndrome of the current state, see :class:`~tabula.syndrome.Syndrome`."""
        return Syndrome.from_state(self.state, self.n_checks)

    def get_syndrome(self) -> list[int]:
        """Outcome of every generator, ``+1`` or ``-1``, in row order.

        This includes the logical operators completing the state of codes with
        fewer checks than qubits.
        """
        return list(self.syndrome().outcomes)

    def has_error(self) -> bool:
        """Whether any check of the code is violated."""
        return self.syndrome().has_error()

    def get_triggered_stabilizers(self) -> list[int]:
        """Indices of the violated checks, in ascending order."""
        return self.syndrome().triggered_stabilizers()

    def reset(self, code_name: Optional[str] = None):
        """Remove all errors, optionally switching to another code.

        Args:
            code_name: catalog name of the new code. Defaults to the current one.

        Raises:
            UnknownCodeError: if ``code_name`` is not in the catalog.
        """
        if code_name is not None:
            self._code = codes.lookup(code_name)
        self._rebuild([])

    def get_applied_errors(self) -> list[ErrorDict]:
        """Errors currently on the qubits as plain dictionaries, oldest first."""
        return [e.as_dict() for e in self._errors]

    def as_dict(self) -> dict[str, Any]:
        """Summary of the session as a dictionary."""
        return {
            "code": self.code_name,
            "n_qubits": self.n_qubits,
            "errors": self.get_applied_errors(),
            "stabilizers": self.get_stabilizers(),
            "syndrome": self.get_syndrome(),
            "triggered": self.get_triggered_stabilizers(),
        }

    def to_json(self, **kwargs) -> str:
        """Summary of the session as a JSON string.

        Keyword arguments are forwarded to :func:`json.dumps`.
        """
        return json.dumps(self.as_dict(), **kwargs)

    def __repr__(self) -> str:  # noqa: D105
        errors = " ".join(map(str, self._errors)) or "none"
        return f"Simulator<{self.code_name}, errors: {errors}>"

    def __str__(self) -> str:
        """Multi-line overview of the code, the generators and the syndrome."""
        lines = [f"{self._code.info.name} ({self.code_name}), {self.n_qubits} qubits"]
        lines.append("Errors: " + (", ".join(map(str, self._errors)) or "none"))
        syndrome = self.get_syndrome()
        for i, stab in enumerate(self.get_stabilizers()):
            role = "check" if i < self.n_checks else "logical"
            width = self.n_qubits + 1
            lines.append(f"  {i:>2} {role:<7} {stab:>{width}} {syndrome[i]:+d}")
        return "\n".join(lines)
