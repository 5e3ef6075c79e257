import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class JunkConfig(BaseModel):
    use_defaults: bool = True
    extra_patterns: list[str] = Field(default_factory=list)

    @field_validator("extra_patterns")
    @classmethod
    def patterns_compile(cls, v: list[str]) -> list[str]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid junk pattern {pattern!r}: {e}") from e
        return v


class CompareConfig(BaseModel):
    chunk_size: int = Field(default=1024, gt=0)


class TreepruneConfig(BaseModel):
    junk: JunkConfig = Field(default_factory=JunkConfig)
    compare: CompareConfig = Field(default_factory=CompareConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
