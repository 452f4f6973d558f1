"""
Tests for the JSON output contract.
"""

import json

from idiomlint.config import EngineConfig
from idiomlint.runner import Engine, Unit
from idiomlint.schema import (
    PROTOCOL_VERSION, finding_to_dict, results_to_json, run_result_to_dict, validate_run_result
)
from idiomlint.types import RunResult, RunStatus
from samples import if_padded_parens, keyword_and


class TestSchema:
    """Test suite for the output contract."""

    def setup_method(self):
        source = "if ( x )\nend\n"
        self.result = Engine().analyze(Unit("a.rb", if_padded_parens(source), source))

    def test_run_result_validates(self):
        output = run_result_to_dict(self.result)
        assert output["idiomlint.protocol"] == PROTOCOL_VERSION
        assert output["status"] == "ok"
        assert validate_run_result(output) == []

    def test_finding_fields(self):
        data = finding_to_dict(self.result.findings[0])
        assert data["rule_id"] == "style.redundant_condition_parens"
        assert data["kind"] == "violation"
        assert data["autofix"] == [
            {"start_byte": 3, "end_byte": 5, "replacement": ""},
            {"start_byte": 6, "end_byte": 8, "replacement": ""},
        ]

    def test_correction_and_parse_unavailable_validate(self):
        corrected = Engine(config=EngineConfig(autocorrect=True)).analyze(
            Unit("b.rb", keyword_and(), "a and b\n"))
        unavailable = RunResult(file="c.rb", status=RunStatus.PARSE_UNAVAILABLE)

        for result in (corrected, unavailable):
            assert validate_run_result(run_result_to_dict(result)) == []
        assert run_result_to_dict(corrected)["correction"]["text"] == "a && b\n"

    def test_invalid_output_is_reported(self):
        output = run_result_to_dict(self.result)
        output["status"] = "exploded"
        del output["findings"][0]["severity"]

        errors = validate_run_result(output)
        assert len(errors) == 2
        assert any(error.startswith("status:") for error in errors)
        assert any(error.startswith("findings/0:") for error in errors)

    def test_json_is_deterministic(self):
        text = results_to_json([self.result])
        assert text == results_to_json([self.result])
        assert json.loads(text)[0]["file_path"] == "a.rb"
