from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

# -ENUMS for validation and type safety
class FedoraType(str, Enum):
    ITEM = "item"
    COLLECTION = "collection"
    APO = "apo"

class ControllerType(str, Enum):
    APO = "apo"
    COLLECTION = "collection"
    TAG = "tag"

# Literal objectType values stored in the index. Iteration order is the
# order in which response buckets are seeded.
FEDORA_TYPES: Dict[FedoraType, str] = {
    FedoraType.ITEM: "item",
    FedoraType.COLLECTION: "collection",
    FedoraType.APO: "adminPolicy",
}

# Index relation fields meaning "is controlled by" / "is tagged with".
CONTROLLER_TYPES: Dict[ControllerType, str] = {
    ControllerType.APO: "is_governed_by_ssim",
    ControllerType.COLLECTION: "is_member_of_collection_ssim",
    ControllerType.TAG: "tag_ssim",
}

# --- PYDANTIC MODELS for API requests

class FetchParams(BaseModel):
    """
    Query-string parameters of a fetch request. Every field is optional.
    """
    id: Optional[str] = None
    status: Optional[str] = None
    first_modified: Optional[str] = None
    last_modified: Optional[str] = None
    rows: Optional[str] = Field(None, description="Row cap; '0' returns only the match count.")

    @field_validator('rows', mode='before')
    @classmethod
    def rows_as_string(cls, value):
        # 0 and "0" are the same count-only sentinel
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class TimeRange(BaseModel):
    """Closed interval of canonical UTC ISO8601 timestamps."""
    model_config = ConfigDict(frozen=True)

    first: str
    last: str

# --- QUERY TARGETS

class AllOfType(BaseModel):
    fedora_type: FedoraType

class ControlledBy(BaseModel):
    druid: str
    controller_type: ControllerType

    @field_validator('controller_type')
    @classmethod
    def check_controller(cls, value):
        if value == ControllerType.TAG:
            raise ValueError("Tags do not control objects; use TaggedWith instead.")
        return value

class TaggedWith(BaseModel):
    tag: str

Relation = Union[AllOfType, ControlledBy, TaggedWith]

# --- SOLR WIRE MODELS

class SolrQuery(BaseModel):
    q: str
    wt: str = "json"
    fl: str
    rows: str

    def as_params(self) -> Dict[str, str]:
        return self.model_dump()

class RawResult(BaseModel):
    numFound: int
    docs: List[Dict[str, Any]] = Field(default_factory=list)
