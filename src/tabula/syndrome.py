# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""Syndrome extraction from the signs of a stabiliser state.

Measuring generator :math:`i` of a state gives :math:`+1` when its sign is
positive and :math:`-1` otherwise. Reading the syndrome does not modify the state.

Codes with :math:`k` checks on :math:`n > k` qubits fill the remaining generators
with logical operators (see :mod:`tabula.codes`). Only the first ``checks`` outcomes
are meaningful to detect errors, and only those are considered by
:meth:`Syndrome.has_error` and :meth:`Syndrome.triggered_stabilizers`.

>>> from tabula.tableau import StabilizerTableau
>>> state = StabilizerTableau(3)
>>> state.apply_x(0)
>>> syndrome = Syndrome.from_state(state)
>>> syndrome.outcomes
(-1, 1, 1)
>>> syndrome.triggered_stabilizers()
[0]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from tabula.tableau import StabilizerTableau


@dataclass(frozen=True)
class Syndrome:
    """Measurement outcomes of all the generators of a state."""

    outcomes: tuple[int, ...]
    """One :math:`\\pm 1` value per generator, in row order."""
    checks: Optional[int] = None
    """How many of the leading generators are genuine checks.

    ``None`` (default) means all of them.
    """

    def __post_init__(self):
        """Normalise the outcomes and the number of checks.

        :meta private:
        """
        object.__setattr__(self, "outcomes", tuple(int(o) for o in self.outcomes))
        if any(o not in (1, -1) for o in self.outcomes):
            raise ValueError("Syndrome outcomes can only be +1 or -1")
        if self.checks is None:
            object.__setattr__(self, "checks", len(self.outcomes))
        elif not 0 <= self.checks <= len(self.outcomes):
            raise ValueError(
                f"Number of checks ({self.checks}) must be between 0 and the number "
                f"of outcomes ({len(self.outcomes)})"
            )

    @classmethod
    def from_state(
        cls, state: StabilizerTableau, checks: Optional[int] = None
    ) -> Syndrome:
        """Read the syndrome of ``state``.

        Args:
            state: the state to read, left untouched.
            checks: number of leading generators that are genuine checks.
        """
        return cls(tuple(1 - 2 * int(r) for r in state.tableau[:, -1]), checks)

    def __len__(self) -> int:  # noqa: D105
        return len(self.outcomes)

    def __iter__(self):  # noqa: D105
        return iter(self.outcomes)

    def has_error(self) -> bool:
        """Whether any check has outcome :math:`-1`."""
        return any(o == -1 for o in self.outcomes[: self.checks])

    def triggered_stabilizers(self) -> list[int]:
        """Indices of the checks with outcome :math:`-1`, in ascending order."""
        return [i for i, o in enumerate(self.outcomes[: self.checks]) if o == -1]

    def to_bits(self) -> np.ndarray:
        """Outcomes as a ``uint8`` array, ``1`` marking a :math:`-1` outcome."""
        return np.array([o == -1 for o in self.outcomes], dtype="u1")
