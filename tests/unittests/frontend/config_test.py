# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
import jsonschema
import pytest as pt

from tabula.codes import UnknownCodeError
from tabula.errors import (
    InvalidErrorKindError,
    PauliError,
    QubitOutOfRangeError,
    save_errors_csv,
)
from tabula.frontend import SimulationConfig
from tabula.frontend.schemas import get_config_schema
from tabula.simulator import Simulator


class TestSimulationConfig:
    """Class to test the class `tabula.frontend.SimulationConfig`."""

    @pt.mark.parametrize(
        "config_dict, output_obj",
        [
            (
                dict(code="steane"),
                SimulationConfig(code="steane"),
            ),
            (
                dict(code="shor", errors=[dict(qubit=1, kind="X")]),
                SimulationConfig(code="shor", errors=[{"qubit": 1, "kind": "X"}]),
            ),
            (
                dict(code="five_qubit", errors=[], errors_csv="errors.csv"),
                SimulationConfig(code="five_qubit", errors_csv="errors.csv"),
            ),
        ],
    )
    def test_from_dict(self, config_dict: dict, output_obj: SimulationConfig):
        assert SimulationConfig.from_dict(config_dict) == output_obj

    @pt.mark.parametrize(
        "config",
        [
            SimulationConfig(code="steane"),
            SimulationConfig(
                code="surface_d3",
                errors=[{"qubit": 8, "kind": "Y"}, {"qubit": 0, "kind": "Z"}],
            ),
            SimulationConfig(code="repetition_3", errors_csv="some/errors.csv"),
        ],
    )
    def test_round_trip(self, config: SimulationConfig):
        assert SimulationConfig.from_dict(config.as_dict()) == config
        assert config.validate()

    def test_as_dict(self):
        config = SimulationConfig(code="shor", errors=[{"qubit": 3, "kind": "Z"}])
        assert config.as_dict() == {
            "code": "shor",
            "errors": [{"qubit": 3, "kind": "Z"}],
        }

    @pt.mark.parametrize(
        "config_dict",
        [
            dict(),
            dict(code=3),
            dict(code="steane", errors=[dict(qubit=0)]),
            dict(code="steane", errors=[dict(qubit=-1, kind="X")]),
            dict(code="steane", errors=[dict(qubit=0, kind="W")]),
            dict(code="steane", rounds=3),
        ],
    )
    def test_schema_violations(self, config_dict: dict):
        with pt.raises(jsonschema.ValidationError):
            SimulationConfig.from_dict(config_dict)

    def test_schema(self):
        schema = get_config_schema()
        assert schema["required"] == ["code"]
        assert schema["properties"]["errors"]["items"]["properties"]["kind"][
            "enum"
        ] == ["X", "Y", "Z"]

    def test_unknown_code(self):
        with pt.raises(UnknownCodeError):
            SimulationConfig.from_dict(dict(code="toric"))
        with pt.raises(UnknownCodeError):
            SimulationConfig(code="toric")

    def test_invalid_error_kind(self):
        with pt.raises(InvalidErrorKindError):
            SimulationConfig(code="steane", errors=[{"qubit": 0, "kind": "Q"}])

    @pt.mark.parametrize("qubit", [2.9, 2.0])
    def test_fractional_qubit(self, qubit: float):
        errors = [{"qubit": qubit, "kind": "X"}]
        with pt.raises(TypeError):
            SimulationConfig(code="steane", errors=errors)
        with pt.raises((jsonschema.ValidationError, TypeError)):
            SimulationConfig.from_dict(dict(code="steane", errors=errors))

    def test_update(self):
        config = SimulationConfig(code="steane")
        config.update(code="five_qubit", errors=[{"qubit": 4, "kind": "X"}], foo=1)
        assert config == SimulationConfig(
            code="five_qubit", errors=[{"qubit": 4, "kind": "X"}]
        )
        assert not hasattr(config, "foo")
        with pt.raises(UnknownCodeError):
            config.update(code="nope")

    def test_instantiate(self):
        config = SimulationConfig(
            code="repetition_3",
            errors=[{"qubit": 0, "kind": "X"}, {"qubit": 0, "kind": "Z"}],
        )
        sim = config.instantiate()
        assert isinstance(sim, Simulator)
        assert sim.get_applied_errors() == [{"qubit": 0, "kind": "Z"}]
        assert not sim.has_error()
        assert Simulator.from_config(config).as_dict() == sim.as_dict()

    def test_instantiate_out_of_range(self):
        config = SimulationConfig(
            code="repetition_3", errors=[{"qubit": 3, "kind": "X"}]
        )
        with pt.raises(QubitOutOfRangeError):
            config.instantiate()

    def test_instantiate_with_csv(self, tmp_path):
        csv_path = tmp_path / "errors.csv"
        save_errors_csv([PauliError(0, "X"), PauliError(4, "Z")], csv_path)
        config = SimulationConfig(
            code="five_qubit",
            errors=[{"qubit": 0, "kind": "Y"}],
            errors_csv=str(csv_path),
        )
        sim = config.instantiate()
        # inline errors come after the csv ones
        assert sim.get_applied_errors() == [
            {"qubit": 4, "kind": "Z"},
            {"qubit": 0, "kind": "Y"},
        ]

    def test_instantiate_missing_csv(self, tmp_path):
        config = SimulationConfig(code="steane", errors_csv=str(tmp_path / "no.csv"))
        with pt.raises(FileNotFoundError):
            config.instantiate()

    def test_toml(self, tmp_path):
        toml_path = tmp_path / "session.toml"
        toml_path.write_text(
            'code = "steane"\n'
            "\n"
            "[[errors]]\n"
            "qubit = 0\n"
            'kind = "X"\n'
            "\n"
            "[[errors]]\n"
            "qubit = 6\n"
            'kind = "Y"\n'
        )
        config = SimulationConfig.load_toml(toml_path)
        assert config == SimulationConfig(
            code="steane",
            errors=[{"qubit": 0, "kind": "X"}, {"qubit": 6, "kind": "Y"}],
        )

        out_path = tmp_path / "dumped.toml"
        config.dump_toml(out_path)
        assert SimulationConfig.load_toml(out_path) == config

    def test_json(self, tmp_path):
        config = SimulationConfig(
            code="shor", errors=[{"qubit": 5, "kind": "Z"}], errors_csv="e.csv"
        )
        json_path = tmp_path / "session.json"
        config.dump_json(json_path)
        assert SimulationConfig.load_json(json_path) == config
