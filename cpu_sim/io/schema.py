"""JSON schema for workload structure validation."""

from __future__ import annotations

CONFIG_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "CPU Scheduling Workload",
    "type": "object",
    "required": ["version", "platform", "scheduler", "jobs"],
    "properties": {
        "version": {"type": "string"},
        "platform": {
            "type": "object",
            "required": ["core_count"],
            "properties": {
                "core_count": {"type": "integer", "minimum": 1},
            },
            "additionalProperties": False,
        },
        "scheduler": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "params": {
                    "type": "object",
                    "default": {},
                    "properties": {
                        "quantum": {"type": ["integer", "null"], "exclusiveMinimum": 0},
                    },
                    "additionalProperties": False,
                },
            },
            "additionalProperties": False,
        },
        "jobs": {
            "type": "array",
            "minItems": 1,
            "items": {"$ref": "#/$defs/Job"},
        },
        "sim": {
            "type": "object",
            "properties": {
                "until": {"type": ["integer", "null"], "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
    },
    "$defs": {
        "Job": {
            "type": "object",
            "required": ["id", "arrival", "run_time"],
            "properties": {
                "id": {"type": "integer", "minimum": 0},
                "arrival": {"type": "integer", "minimum": 0},
                "run_time": {"type": "integer", "minimum": 1},
                "priority": {"type": "integer", "default": 0},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}
