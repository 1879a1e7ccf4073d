"""Pydantic models for syntenybook configuration."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from syntenybook.genebook.models import Strategy
from syntenybook.ingest.patterns import ID_GROUP, SPECIES_GROUP, compile_pattern


class BuildSettings(BaseModel):
    """Inputs and parameters of an index build."""

    families: list[Path] = Field(
        ...,
        description="Family files or directories of family files, in processing order",
    )
    genomes: list[Path] = Field(
        ...,
        description="Annotation files (GFF3/BED, optionally gzipped) or directories of them",
    )
    species_pattern: str = Field(
        default=r"(?P<species>[^.]+)",
        description="Regex applied to annotation file names; must declare group 'species'",
    )
    id_pattern: str = Field(
        default=r"(?P<id>.+)",
        description="Regex applied to raw record ids; must declare group 'id'",
    )
    feature_class: str = Field(
        default="gene",
        description="GFF3 feature type to keep (empty string keeps every record)",
    )
    window: int = Field(
        default=15,
        ge=0,
        description="Number of neighbours stored on each side of a gene",
    )
    chrom_table: bool = Field(
        default=False,
        description="Read annotation files as chromosome tables",
    )
    name_families: bool = Field(
        default=False,
        description="Name each family after the stem of its file",
    )

    @field_validator("species_pattern")
    @classmethod
    def check_species_pattern(cls, v: str) -> str:
        compile_pattern(v, SPECIES_GROUP)
        return v

    @field_validator("id_pattern")
    @classmethod
    def check_id_pattern(cls, v: str) -> str:
        compile_pattern(v, ID_GROUP)
        return v


class QuerySettings(BaseModel):
    """Parameters of the gene books opened over a database."""

    window: int = Field(
        default=15,
        ge=0,
        description="Number of neighbours returned on each side of a gene",
    )
    strategy: Strategy = Field(
        default=Strategy.IN_MEMORY,
        description="Row retrieval strategy: in-memory, cached or inline",
    )
    id_column: str = Field(
        default="id",
        description="Column used to look genes up",
    )


class SyntenyConfig(BaseModel):
    """Main syntenybook configuration."""

    database: Path = Field(
        ...,
        description="Path to DuckDB database file",
    )
    build: BuildSettings = Field(
        ...,
        description="Index build settings",
    )
    query: QuerySettings = Field(
        default_factory=QuerySettings,
        description="Gene book settings",
    )

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        useful for tracking which settings produced a database.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
