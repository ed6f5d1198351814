"""
Typed interview configuration.

The stored config is an open JSON object edited from the admin page; these
models give every known field an explicit default, and merge_config /
apply_update spell out how stored overrides combine with the defaults.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModelSettings(BaseModel):
    model: str = "gpt-4o"
    temperature_question: float = 0.8
    temperature_analysis: float = 0.5
    temperature_insight: float = 0.6


class InterviewConfig(BaseModel):
    """
    Interview configuration as used by the question generator and analyzer.

    - question_generation_prompt: template for turns >= 4 (None -> built-in)
    - analysis_prompt: template for per-answer analysis (None -> built-in)
    - example_questions: canned follow-up templates keyed by type
    - model_settings: model name and temperatures

    Unknown keys are kept so that a config round-trips through
    export / import unchanged.
    """

    model_config = ConfigDict(extra="allow", protected_namespaces=())

    question_generation_prompt: Optional[str] = None
    analysis_prompt: Optional[str] = None
    example_questions: Dict[str, List[str]] = Field(default_factory=dict)
    model_settings: ModelSettings = Field(default_factory=ModelSettings)


def _as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def merge_config(defaults: Mapping[str, Any], stored: Mapping[str, Any]) -> InterviewConfig:
    """Overlay stored overrides on the defaults, field by field.

    - prompts and unknown keys: the stored value wins whenever the key exists
    - example_questions: stored if it is a non-empty object, else defaults
    - model_settings: each setting falls back to the default individually
    """
    defaults = _as_dict(defaults)
    stored = _as_dict(stored)

    merged: Dict[str, Any] = {**defaults, **stored}

    stored_examples = _as_dict(stored.get("example_questions"))
    merged["example_questions"] = (
        stored_examples if stored_examples else _as_dict(defaults.get("example_questions"))
    )

    merged["model_settings"] = {
        **_as_dict(defaults.get("model_settings")),
        **_as_dict(stored.get("model_settings")),
    }

    return InterviewConfig.model_validate(merged)


def apply_update(current: Mapping[str, Any], updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply a partial update: nested objects are shallow-merged, everything else replaced."""
    result = dict(current)
    for key, value in _as_dict(updates).items():
        existing = result.get(key)
        if isinstance(value, Mapping) and isinstance(existing, Mapping) and existing:
            result[key] = {**existing, **value}
        else:
            result[key] = value
    return result
