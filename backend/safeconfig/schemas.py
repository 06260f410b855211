from pydantic import BaseModel, Field
from typing import Literal


class AnalyzeRequest(BaseModel):
    config: str
    format: Literal["yaml", "json"]


class DiffRequest(BaseModel):
    old_config: str = Field(alias="oldConfig")
    new_config: str = Field(alias="newConfig")
    format: Literal["yaml", "json"]


ANALYZE_USAGE = 'config (string) and format ("yaml" | "json") are required.'
DIFF_USAGE = 'oldConfig, newConfig (strings) and format ("yaml" | "json") are required.'
