"""
Ruleset loading and the immutable program repository.

Rulesets are JSON documents (local file or HTTP URL) with a top-level
`programs` list. The structure is validated with pydantic and every pattern
is compiled up front, so a malformed ruleset is rejected at load time rather
than silently failing individual checks later.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional, Tuple, Union

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from policy_checker.rules.engine import PatternError, compile_requirement
from policy_checker.rules.types import (
    MATCH_PATTERN,
    MedicalLimitRequirement,
    Program,
    Requirement,
    Requirements,
)

logger = logging.getLogger("policy_checker.rules.loader")

DEFAULT_RULESET_PATH = Path(__file__).resolve().parent.parent / "data" / "requirements.json"


class RulesetError(ValueError):
    """Ruleset could not be fetched, parsed or validated."""


class _RuleModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    phrase: str
    regex: str = Field(min_length=1)
    tooltip: str = ""
    match: Literal["pattern", "substring"] = MATCH_PATTERN

    def to_requirement(self) -> Requirement:
        return Requirement(
            phrase=self.phrase,
            pattern=self.regex,
            explanation=self.tooltip,
            match=self.match,
        )


class _MedicalLimitModel(_RuleModel):
    phrase: str = ""
    currency: str = Field(min_length=1)
    amount: float = Field(gt=0)

    def to_requirement(self) -> MedicalLimitRequirement:
        return MedicalLimitRequirement(
            phrase=self.phrase,
            pattern=self.regex,
            explanation=self.tooltip,
            match=self.match,
            currency=self.currency,
            amount=self.amount,
        )


class _RequirementsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    required_phrases: List[_RuleModel] = Field(default_factory=list, alias="requiredPhrases")
    min_medical_limit: _MedicalLimitModel = Field(alias="minMedicalLimit")
    prohibited_phrases: List[_RuleModel] = Field(default_factory=list, alias="prohibitedPhrases")


class _ProgramModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str
    country: str = ""
    official_url: str = Field("", alias="officialUrl")
    requirements: _RequirementsModel


class _RulesetModel(BaseModel):
    programs: List[_ProgramModel]

    @field_validator("programs")
    @classmethod
    def _unique_ids(cls, programs: List[_ProgramModel]) -> List[_ProgramModel]:
        seen = set()
        for program in programs:
            if program.id in seen:
                raise ValueError(f"duplicate program id '{program.id}'")
            seen.add(program.id)
        return programs


def _build_program(model: _ProgramModel) -> Program:
    reqs = model.requirements
    requirements = Requirements(
        required_phrases=tuple(rule.to_requirement() for rule in reqs.required_phrases),
        min_medical_limit=reqs.min_medical_limit.to_requirement(),
        prohibited_phrases=tuple(rule.to_requirement() for rule in reqs.prohibited_phrases),
    )
    for requirement in (
        *requirements.required_phrases,
        requirements.min_medical_limit,
        *requirements.prohibited_phrases,
    ):
        try:
            compile_requirement(requirement)
        except PatternError as exc:
            raise RulesetError(f"Program '{model.id}': {exc}") from exc
    return Program(
        id=model.id,
        name=model.name,
        country=model.country,
        official_url=model.official_url,
        requirements=requirements,
    )


class ProgramRepository:
    """Read-only, id-keyed collection of programs in load order."""

    def __init__(self, programs: Tuple[Program, ...] = ()):
        self._programs: Mapping[str, Program] = MappingProxyType({p.id: p for p in programs})

    def __iter__(self) -> Iterator[Program]:
        return iter(self._programs.values())

    def __len__(self) -> int:
        return len(self._programs)

    def __contains__(self, program_id: object) -> bool:
        return program_id in self._programs

    def get(self, program_id: Optional[str]) -> Optional[Program]:
        if not program_id:
            return None
        return self._programs.get(program_id)

    def options(self) -> List[Dict[str, str]]:
        """Selector entries labelled `<name> (<country>)`."""
        return [
            {"id": program.id, "label": program.label, "name": program.name, "country": program.country}
            for program in self
        ]


def parse_ruleset(data: Any) -> ProgramRepository:
    """Validate a decoded ruleset document and build the repository."""
    try:
        model = _RulesetModel.model_validate(data)
    except ValidationError as exc:
        raise RulesetError(f"Invalid ruleset: {exc}") from exc
    return ProgramRepository(tuple(_build_program(program) for program in model.programs))


def _read_source(source: Union[str, Path], timeout: float) -> str:
    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        try:
            response = requests.get(source_str, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise RulesetError(f"Failed to fetch ruleset from {source_str}: {exc}") from exc
        return response.text
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RulesetError(f"Failed to read ruleset at {path}: {exc}") from exc


def load_ruleset(source: Union[str, Path, None] = None, *, timeout: float = 30.0) -> ProgramRepository:
    """
    Load programs from a JSON file path or HTTP(S) URL.

    Args:
        source: Location of the ruleset; defaults to the bundled sample.
        timeout: Request timeout in seconds for remote sources.

    Returns:
        ProgramRepository holding every program in file order.
    """

    source = source or DEFAULT_RULESET_PATH
    raw = _read_source(source, timeout)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise RulesetError(f"Ruleset at {source} is not valid JSON: {exc}") from exc
    repository = parse_ruleset(data)
    logger.info("Ruleset loaded", extra={"source": str(source), "programs": len(repository)})
    return repository


__all__ = [
    "DEFAULT_RULESET_PATH",
    "ProgramRepository",
    "RulesetError",
    "load_ruleset",
    "parse_ruleset",
]
