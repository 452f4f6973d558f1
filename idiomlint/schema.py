"""
JSON schema for idiomlint run results.

This module provides the JSON schema of the engine's output contract and
helpers to convert RunResults to deterministic JSON and validate them, so a
wrapping CLI or reporter has a well-defined format to consume.
"""

import json
from typing import Any, Dict, List, Sequence

import jsonschema

from .types import Edit, Finding, RunResult

# Current protocol version
PROTOCOL_VERSION = "1"

EDIT_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "start_byte": {"type": "integer", "minimum": 0},
        "end_byte": {"type": "integer", "minimum": 0},
        "replacement": {"type": "string"},
    },
    "required": ["start_byte", "end_byte", "replacement"],
    "additionalProperties": False,
}

# JSON Schema for a single Finding
FINDING_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "rule_id": {
            "type": "string",
            "description": "Rule identifier that generated this finding"
        },
        "kind": {
            "type": "string",
            "enum": ["violation", "rule_crashed", "autocorrect_skipped"],
        },
        "message": {
            "type": "string",
            "description": "Human-readable description of the issue"
        },
        "severity": {
            "type": "string",
            "enum": ["info", "warning", "error"],
        },
        "file_path": {"type": "string"},
        "start_byte": {"type": "integer", "minimum": 0},
        "end_byte": {"type": "integer", "minimum": 0},
        "start_line": {"type": "integer", "minimum": 1},
        "end_line": {"type": "integer", "minimum": 1},
        "autofix": {
            "type": "array",
            "items": EDIT_JSON_SCHEMA,
            "description": "Optional list of edits to fix the issue"
        },
        "meta": {
            "type": "object",
            "description": "Optional metadata about the finding"
        }
    },
    "required": ["rule_id", "kind", "message", "severity", "file_path",
                 "start_byte", "end_byte", "start_line", "end_line"],
    "additionalProperties": False
}

# JSON Schema for one unit's RunResult
RUN_RESULT_SCHEMA = {
    "type": "object",
    "properties": {
        "idiomlint.protocol": {"type": "string"},
        "file_path": {"type": "string"},
        "status": {"type": "string", "enum": ["ok", "cancelled", "parse_unavailable"]},
        "success": {"type": "boolean"},
        "findings": {"type": "array", "items": FINDING_JSON_SCHEMA},
        "correction": {
            "type": "object",
            "properties": {
                "text": {"type": "string"},
                "applied": {"type": "array", "items": FINDING_JSON_SCHEMA},
                "skipped": {"type": "array", "items": FINDING_JSON_SCHEMA},
            },
            "required": ["text", "applied", "skipped"],
            "additionalProperties": False,
        },
    },
    "required": ["idiomlint.protocol", "file_path", "status", "success", "findings"],
    "additionalProperties": False
}


def edit_to_dict(edit: Edit) -> Dict[str, Any]:
    return {"start_byte": edit.start_byte, "end_byte": edit.end_byte, "replacement": edit.replacement}


def finding_to_dict(finding: Finding) -> Dict[str, Any]:
    """Convert a Finding to a JSON-serializable dictionary."""
    result = {
        "rule_id": finding.rule,
        "kind": finding.kind.value,
        "message": finding.message,
        "severity": finding.severity,
        "file_path": finding.file,
        "start_byte": finding.start_byte,
        "end_byte": finding.end_byte,
        "start_line": finding.start_line,
        "end_line": finding.end_line,
    }
    if finding.autofix:
        result["autofix"] = [edit_to_dict(edit) for edit in finding.autofix]
    if finding.meta:
        result["meta"] = dict(finding.meta)
    return result


def run_result_to_dict(result: RunResult) -> Dict[str, Any]:
    """Convert a RunResult to a JSON-serializable dictionary."""
    output = {
        "idiomlint.protocol": PROTOCOL_VERSION,
        "file_path": result.file,
        "status": result.status.value,
        "success": result.success,
        "findings": [finding_to_dict(f) for f in result.findings],
    }
    if result.correction is not None:
        output["correction"] = {
            "text": result.correction.text,
            "applied": [finding_to_dict(f) for f in result.correction.applied],
            "skipped": [finding_to_dict(f) for f in result.correction.skipped],
        }
    return output


def results_to_json(results: Sequence[RunResult]) -> str:
    """Serialize run results deterministically (sorted keys, fixed separators)."""
    return json.dumps([run_result_to_dict(r) for r in results], sort_keys=True, indent=2)


def validate_run_result(output: Dict[str, Any]) -> List[str]:
    """
    Validate a run result dictionary against the schema.

    Args:
        output: Dictionary produced by run_result_to_dict

    Returns:
        List of validation errors (empty if valid)
    """
    validator = jsonschema.Draft7Validator(RUN_RESULT_SCHEMA)
    return [
        f"{'/'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
        for error in sorted(validator.iter_errors(output), key=lambda e: [str(p) for p in e.absolute_path])
    ]
