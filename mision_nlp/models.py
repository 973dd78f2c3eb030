# mision_nlp/models.py

from dataclasses import dataclass, field, replace
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, Field, field_validator

from .schema import SchemaDescriptor

# --- Analysis type keys for the linguistic tab ---
ANALYSIS_TOKENS = "tokens"
ANALYSIS_ENTITIES = "entidades"
ANALYSIS_TYPES = (ANALYSIS_TOKENS, ANALYSIS_ENTITIES)  # canonical order


# --- User input and request records ---
@dataclass(frozen=True)
class TabInputs:
    """Everything a tab's form can hold. Each exercise reads the fields it needs."""
    text: str = ""
    username: str = ""
    tweet_count: int = 5
    analysis_types: FrozenSet[str] = field(default_factory=frozenset)

    def non_blank_lines(self) -> List[str]:
        return [line for line in self.text.split("\n") if line.strip()]

    def requested_analyses(self) -> List[str]:
        return [key for key in ANALYSIS_TYPES if key in self.analysis_types]

    def with_changes(self, **changes) -> "TabInputs":
        if "analysis_types" in changes:
            changes["analysis_types"] = frozenset(changes["analysis_types"])
        return replace(self, **changes)


@dataclass(frozen=True)
class AnalysisRequest:
    instruction_text: str
    expected_schema: SchemaDescriptor


# --- Pydantic models for parsed responses ---
# Optional fields default so a response missing them still renders;
# required fields are the ones the report cannot do without.

class VaderScores(BaseModel):
    neg: float = 0.0
    neu: float = 0.0
    pos: float = 0.0
    compound: float


class BatchItem(BaseModel):
    text: str = ""
    sentiment: str = "NEUTRO"
    compound: float = 0.0


class BatchSummary(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class BatchResult(BaseModel):
    results: List[BatchItem] = Field(default_factory=list)
    summary: BatchSummary = Field(default_factory=BatchSummary)


class HybridPolarity(BaseModel):
    original_text: str = ""
    translated_text: str = ""
    spanish_polarity: float = 0.0
    english_polarity: float = 0.0
    final_polarity: float
    final_subjectivity: float
    final_sentiment: str = ""


class TokenInfo(BaseModel):
    text: str
    pos: str = ""
    explanation: str = ""


class EntityInfo(BaseModel):
    text: str
    label: str = ""
    explanation: str = ""


class LinguisticAnalysis(BaseModel):
    tokens: Optional[List[TokenInfo]] = None
    entidades: Optional[List[EntityInfo]] = None


class TwitterProfile(BaseModel):
    name: str = ""
    followers: str = ""
    verified: bool = False

    @field_validator("followers", mode="before")
    @classmethod
    def _followers_as_text(cls, value):
        # The schema asks for a string, but the model sometimes answers 150000000.
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Tweet(BaseModel):
    content: str
    sentiment: str = ""


class ProfileAnalysis(BaseModel):
    profile: TwitterProfile
    tweets: List[Tweet] = Field(default_factory=list)
