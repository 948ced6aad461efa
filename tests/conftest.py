# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
import numpy as np
import pytest

from tabula.simulator import Simulator
from tabula.tableau import StabilizerTableau


@pytest.fixture(scope="module")
def stable_rgen():
    return np.random.RandomState(seed=123123456)


@pytest.fixture
def bell_state():
    state = StabilizerTableau(2)
    state.apply_h(0)
    state.apply_cnot(0, 1)
    return state


@pytest.fixture
def scrambled_state(stable_rgen):
    """A 4-qubit state prepared by a fixed random Clifford circuit."""
    state = StabilizerTableau(4)
    for _ in range(40):
        gate = stable_rgen.randint(4)
        q1, q2 = stable_rgen.choice(4, size=2, replace=False)
        match gate:
            case 0:
                state.apply_h(q1)
            case 1:
                state.apply_s(q1)
            case 2:
                state.apply_cnot(q1, q2)
            case 3:
                state.apply_cz(q1, q2)
    return state


@pytest.fixture
def rep3():
    return Simulator("repetition_3")
