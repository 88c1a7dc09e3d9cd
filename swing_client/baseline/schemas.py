"""Baseline API schemas."""

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

UNIT_CODE_LEN = 5
REGION_CODE_LEN = 2


class RawBaselineSchema(BaseModel):
    """One unit's return as delivered by the feed.

    Accepts both the per-cycle column names (``votesGop2024``) and the short
    ones (``gop``). Vote counts must be non-negative integers.
    """

    code: str = Field(validation_alias=AliasChoices("fips", "unitCode", "unit_code", "code"))
    parent_region: str | None = Field(
        default=None, validation_alias=AliasChoices("stateFips", "parentRegion", "parent_region")
    )
    name: str | None = Field(default=None, validation_alias=AliasChoices("countyName", "name"))
    total_votes: int = Field(
        ge=0, validation_alias=AliasChoices("totalVotes2024", "totalVotes", "total_votes", "total")
    )
    gop: int | None = Field(default=None, ge=0, validation_alias=AliasChoices("votesGop2024", "gop"))
    dem: int | None = Field(default=None, ge=0, validation_alias=AliasChoices("votesDem2024", "dem"))
    votes_by_party: dict[str, int] | None = Field(
        default=None, validation_alias=AliasChoices("votesByParty", "votes_by_party")
    )

    @field_validator("code", mode="before")
    @classmethod
    def _normalize_code(cls, v):
        if v is None or isinstance(v, bool):
            raise ValueError("missing unit code")
        s = str(v).strip()
        if not s:
            raise ValueError("missing unit code")
        if s.isdigit():
            s = s.zfill(UNIT_CODE_LEN)
        return s[-UNIT_CODE_LEN:]

    @field_validator("parent_region", "name", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    @field_validator("parent_region")
    @classmethod
    def _pad_region(cls, v):
        if v is not None and v.isdigit():
            return v.zfill(REGION_CODE_LEN)
        return v

    @field_validator("votes_by_party")
    @classmethod
    def _non_negative(cls, v):
        if v is not None and any(n < 0 for n in v.values()):
            raise ValueError("negative party votes")
        return v

    @model_validator(mode="after")
    def _has_party_votes(self):
        if self.votes_by_party is None and (self.gop is None or self.dem is None):
            raise ValueError("GOP/DEM votes missing")
        return self

    @property
    def region(self) -> str:
        return self.parent_region or self.code[:2]

    def party_votes(self) -> dict[str, int]:
        """Party tag -> votes; explicit gop/dem fields win over the mapping."""
        votes = {k.strip().upper(): n for k, n in (self.votes_by_party or {}).items()}
        if self.gop is not None:
            votes["GOP"] = self.gop
        if self.dem is not None:
            votes["DEM"] = self.dem
        return votes
