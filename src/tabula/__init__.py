# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""An interactive stabiliser-tableau simulator for quantum error-correcting codes.

``tabula`` prepares the codeword of a small error-correcting code, lets you place
single-qubit Pauli errors on it and shows which checks of the code detect them.

The algebra of Pauli operators lives in :mod:`tabula.pauli`, while
:mod:`tabula.tableau` implements the "tableau-representation" of stabiliser states
together with the Clifford gates acting on it. Errors are described in
:mod:`tabula.errors` and read out through :mod:`tabula.syndrome`. The built-in codes
are in :mod:`tabula.codes`, and :mod:`tabula.simulator` ties everything together in
an interactive session, which can also be described declaratively with
:mod:`tabula.frontend`.
"""

import sys

from tabula.simulator import Simulator  # noqa: F401

__version__ = "0.1.0"

# Avoid surprises
assert sys.version_info >= (3, 10), "Please upgrade Python to at least 3.10"
