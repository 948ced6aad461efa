# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""Front-end configuration processing for simulation sessions.

A session can be described in a ``toml`` file like the following:

.. code-block:: toml

    code = "steane"            # one of tabula.codes.available_codes()
    errors_csv = "errors.csv"  # optional, columns "qubit" and "kind"

    [[errors]]
    qubit = 0
    kind = "X"

    [[errors]]
    qubit = 4
    kind = "Z"

Errors from the CSV file are applied first, then the inline ones, each through
:meth:`~tabula.simulator.Simulator.apply_error`, so later entries on the same
qubit replace earlier ones.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from pprint import pformat
from typing import Any, Optional

import toml  # type: ignore
from jsonschema import validate

from tabula import codes
from tabula.errors import ErrorDict, PauliError, load_errors_csv
from tabula.frontend import schemas
from tabula.simulator import Simulator


def _validate_config(config_dict: dict) -> bool:
    """Validate the simulation config using the schema.

    Returns:
        ``True`` if validated, else raises an Error. The errors raised are according to
        :func:`~jsonschema.validate`.
    """
    validate(config_dict, schemas.get_config_schema())
    return True


@dataclass(kw_only=True)
class SimulationConfig:
    """Class to store the configuration of a simulation session.

    Raises:
        UnknownCodeError: if ``code`` is not in the catalog.
        InvalidErrorKindError: if an error has a kind other than X, Y, or Z.
        TypeError: if an error is on a qubit index that is not an integer.

    Examples:
        >>> conf = SimulationConfig(code="five_qubit", errors=[{"qubit": 1, "kind": "Y"}])
        >>> print(conf)
        SimulationConfig(code='five_qubit',
                         errors=[{'qubit': 1, 'kind': 'Y'}],
                         errors_csv=None)
    """  # noqa: E501

    code: str
    """Catalog name of the code, see :func:`~tabula.codes.available_codes`."""
    errors: list[ErrorDict] = field(default_factory=list)
    """Errors to apply, in order."""
    errors_csv: Optional[str] = None
    """Path to a CSV file with more errors, applied before :attr:`errors`."""

    def __post_init__(self):
        """Checks initialized values.

        :meta private:
        """
        codes.lookup(self.code)
        self.errors = [PauliError.from_dict(e).as_dict() for e in self.errors]

    def __str__(self) -> str:  # noqa: D105
        return pformat(self)

    @classmethod
    def from_dict(cls, config_dict: dict) -> SimulationConfig:
        """Instantiate :class:`SimulationConfig` from a config dictionary.

        The dictionary is validated against
        :func:`~tabula.frontend.schemas.get_config_schema` first.

        Examples:
            >>> conf = SimulationConfig.from_dict({"code": "steane"})
            >>> conf.errors, conf.errors_csv
            ([], None)
        """
        _validate_config(config_dict)
        return cls(
            code=config_dict["code"],
            errors=list(config_dict.get("errors", [])),
            errors_csv=config_dict.get("errors_csv"),
        )

    def as_dict(self) -> dict[str, Any]:
        """Return class attributes as dictionary.

        ``errors_csv`` is left out when not set.
        """
        config_dict: dict[str, Any] = {
            "code": self.code,
            "errors": [dict(e) for e in self.errors],
        }
        if self.errors_csv is not None:
            config_dict["errors_csv"] = str(self.errors_csv)
        return config_dict

    def update(self, **kwargs):
        """Update class attributes with given ``**kwargs``.

        Unknown attributes are ignored.

        Returns:
            None, updates the config in-place.

        Examples:
            >>> conf = SimulationConfig(code="five_qubit")
            >>> conf.update(code="shor", colour="blue")
            >>> conf.code
            'shor'
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
        self.__post_init__()

    def validate(self) -> bool:
        """Validate the current state of the configuration against the schema."""
        return _validate_config(self.as_dict())

    @classmethod
    def load_toml(cls, toml_path: str | Path) -> SimulationConfig:
        """Instantiate a :class:`SimulationConfig` object from a ``toml`` file.

        See the module documentation for an example of the file.
        """
        config_dict: dict[str, Any] = toml.load(toml_path)
        return cls.from_dict(config_dict)

    @classmethod
    def load_json(cls, json_path: str | Path) -> SimulationConfig:
        """Instantiate a :class:`SimulationConfig` object from a ``json`` file."""
        with open(json_path) as file:
            config_dict = json.load(file)
        return cls.from_dict(config_dict)

    def dump_toml(self, toml_path: str | Path):
        """Save the config as a ``toml`` file at the given path."""
        with open(toml_path, "w") as file:
            toml.dump(self.as_dict(), file)

    def dump_json(self, json_path: str | Path):
        """Save the config as a ``json`` file at the given path."""
        with open(json_path, "w") as file:
            json.dump(self.as_dict(), file, indent=2)

    def instantiate(self) -> Simulator:
        """Create the :class:`~tabula.simulator.Simulator` described by this config.

        Raises:
            FileNotFoundError: if :attr:`errors_csv` does not exist.
            QubitOutOfRangeError: if an error is on a qubit the code does not have.

        Examples:
            >>> conf = SimulationConfig(code="repetition_3", errors=[{"qubit": 2, "kind": "X"}])
            >>> conf.instantiate().get_triggered_stabilizers()
            [1]
        """  # noqa: E501
        sim = Simulator(self.code)
        errors = load_errors_csv(self.errors_csv) if self.errors_csv else []
        errors.extend(PauliError.from_dict(e) for e in self.errors)
        for error in errors:
            sim.apply_error(error.qubit, error.kind)
        return sim
