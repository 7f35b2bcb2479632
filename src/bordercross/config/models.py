"""Pydantic models describing the analysis configuration file."""

from __future__ import annotations

from typing import List, Literal, Tuple

from pydantic import BaseModel, Field, model_validator

from ..classify import DEFAULT_RULES, ClassificationRule
from ..records.models import TypeGroup


class RuleEntry(BaseModel):
    group: Literal["Commercial", "Personal"]
    keywords: List[str]

    @model_validator(mode="after")
    def ensure_keywords(self) -> "RuleEntry":
        if not self.keywords:
            raise ValueError("keywords must not be empty")
        if any(not keyword.strip() for keyword in self.keywords):
            raise ValueError("keywords must not be blank")
        return self


def _default_rule_entries() -> List[RuleEntry]:
    return [
        RuleEntry(group=rule.group.value, keywords=sorted(rule.keywords))
        for rule in DEFAULT_RULES
    ]


class ClassificationConfig(BaseModel):
    rules: List[RuleEntry] = Field(default_factory=_default_rule_entries)

    @model_validator(mode="after")
    def ensure_non_empty(self) -> "ClassificationConfig":
        if not self.rules:
            raise ValueError("at least one rule must be defined")
        return self

    def to_rules(self) -> Tuple[ClassificationRule, ...]:
        return tuple(
            ClassificationRule(
                keywords=frozenset(keyword.strip() for keyword in entry.keywords),
                group=TypeGroup(entry.group),
            )
            for entry in self.rules
        )


class ChartsConfig(BaseModel):
    figure_width: float = 12.0
    figure_height: float = 6.0
    dpi: int = 100
    render: bool = True

    @model_validator(mode="after")
    def check_dimensions(self) -> "ChartsConfig":
        if self.figure_width <= 0 or self.figure_height <= 0:
            raise ValueError("figure dimensions must be positive")
        if self.dpi <= 0:
            raise ValueError("dpi must be positive")
        return self


class AnalysisConfig(BaseModel):
    date_policy: Literal["lenient", "strict"] = "lenient"
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    charts: ChartsConfig = Field(default_factory=ChartsConfig)
