"""
Pydantic models for releases returned by Radarr's release search.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RadarrModel(BaseModel):
    """Base for Radarr payloads, where any field may come back as null."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Null fields fall back to their defaults instead of failing validation."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class QualityDefinition(RadarrModel):
    """The inner quality definition, e.g. 'Bluray-1080p'."""

    name: str = ""
    source: str = "unknown"
    resolution: int = 0


class ReleaseQuality(RadarrModel):
    """Radarr wraps the quality definition together with revision info."""

    quality: QualityDefinition = Field(default_factory=QualityDefinition)


class Release(RadarrModel):
    """A candidate release found by one of Radarr's indexers."""

    guid: str | None = None
    indexer_id: int | None = Field(default=None, alias="indexerId")
    title: str = ""
    custom_format_score: float | None = Field(default=None, alias="customFormatScore")

    # Attributes consumed by the points heuristic
    indexer: str = ""
    protocol: str = "unknown"
    size: int = 0
    seeders: int | None = None
    rejected: bool = False
    quality: ReleaseQuality = Field(default_factory=ReleaseQuality)

    @property
    def score(self) -> float:
        """Custom format score with a missing value counted as zero."""
        return self.custom_format_score or 0

    @property
    def quality_name(self) -> str:
        return self.quality.quality.name or "Unknown"

    @property
    def resolution(self) -> int:
        return self.quality.quality.resolution

    @property
    def source(self) -> str:
        return self.quality.quality.source


ReleaseList = list[Release]
