from pydantic import BaseModel, Field
from typing import Literal


class ApiConfig(BaseModel):
    host: str = "https://addons.mozilla.org"
    version: str = "v4"
    token_env: str = "COMPAREVIEW_AUTH_TOKEN"
    timeout: float = 30.0


class UIConfig(BaseModel):
    lang: str = "en-US"


class CompareviewConfig(BaseModel):
    api: ApiConfig = Field(default_factory=ApiConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
