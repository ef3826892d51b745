from __future__ import annotations
from pathlib import Path
from types import MappingProxyType
from typing import List, Literal, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from chronogrid.vocab import EraId

ERAS_PATH = Path(__file__).with_name("eras.yaml")


class Scoring(BaseModel):
    model_config = ConfigDict(frozen=True)

    td: int = Field(ge=0)
    fg: int = Field(ge=0)
    safety: int = Field(ge=0)
    xp: int = Field(ge=0)
    two_pt_available: bool = False


class PlayCallProbs(BaseModel):
    """Shares used as cumulative bands (run, then run+pass); need not sum to 1."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    run: float = Field(ge=0)
    pass_: float = Field(ge=0, alias="pass")
    kick: float = Field(ge=0)
    waste: float = Field(default=0.0, ge=0)


class EraRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    pass_legal: bool
    hash_marks: bool  # display only
    ot_enabled: bool
    kickoff_line: int = Field(ge=0, le=100)
    fumble_rate: float = Field(ge=0, le=1)
    interception_rate: float = Field(ge=0, le=1)
    incompletion_penalty: bool
    extra_point_line: int = Field(ge=0, le=100)
    fg_accuracy: float = Field(ge=0, le=1)
    xp_accuracy: float = Field(ge=0, le=1)


class EraConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: EraId
    name: str
    year_range: str
    description: str = ""
    scoring: Scoring
    probs: PlayCallProbs
    rules: EraRules


class EraTable(BaseModel):
    eras: List[EraConfig]

    @model_validator(mode="after")
    def one_per_era(self) -> "EraTable":
        seen = [e.id for e in self.eras]
        dupes = sorted({e.value for e in seen if seen.count(e) > 1})
        if dupes:
            raise ValueError(f"era listed more than once: {dupes}")
        missing = sorted(e.value for e in EraId if e not in seen)
        if missing:
            raise ValueError(f"era table missing: {missing}")
        return self


def load_eras(path: str | Path = ERAS_PATH) -> dict[EraId, EraConfig]:
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    table = EraTable.model_validate(raw)
    return {e.id: e for e in table.eras}


ERAS: Mapping[EraId, EraConfig] = MappingProxyType(load_eras())


def get_era(era_id: EraId | str) -> EraConfig:
    return ERAS[EraId(era_id)]


class RunConfig(BaseModel):
    seed: int = 42
    games_per_era: int = Field(default=50, ge=1)
    eras: List[EraId] = list(EraId)
    user_side: Literal["home", "away"] = "home"
    user_strategy: Literal["coach", "random"] = "coach"
    out: str = "runs/sim_plays.parquet"
    scoragami: str = "runs/scoragami.json"


def load_config(path: str) -> RunConfig:
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    return RunConfig.model_validate(raw)
