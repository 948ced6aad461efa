# Copyright 2023, QC Design GmbH and the tabula contributors
# SPDX-License-Identifier: Apache-2.0
"""Frontend schema definitions."""
import json


def get_config_schema() -> dict:
    """Utility function to get the simulation config json schema."""
    schema = """{
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "code": {
                "type": "string"
            },
            "errors": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "qubit": {
                            "type": "integer",
                            "minimum": 0
                        },
                        "kind": {
                            "type": "string",
                            "enum": ["X", "Y", "Z"]
                        }
                    },
                    "required": ["qubit", "kind"],
                    "additionalProperties": false
                }
            },
            "errors_csv": {
                "type": "string"
            }
        },
        "required": ["code"],
        "additionalProperties": false
    }"""
    return json.loads(schema)
