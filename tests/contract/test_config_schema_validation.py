from __future__ import annotations

import json

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from sheet_normalizer.config.loader import DEFAULTS, SCHEMA_PATH

"""Config schema contract against the packaged config_schema.json."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_defaults_satisfy_schema(schema):
    jsonschema.validate(DEFAULTS, schema)


def test_minimal_config(schema):
    jsonschema.validate({"source_directory": "./uploads"}, schema)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"source_directory": ""},
        {"source_directory": "./in", "sample_size": 0},
        {"source_directory": "./in", "sample_size": 11},
        {"source_directory": "./in", "batch_size": 1001},
        {"source_directory": "./in", "large_file_threshold": 0},
        {"source_directory": "./in", "batch_size": "500"},
        {"source_directory": "./in", "unknown": True},
    ],
)
def test_schema_rejects(schema, data):
    with pytest.raises(ValidationError):
        jsonschema.validate(data, schema)
