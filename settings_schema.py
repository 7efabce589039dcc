from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from config import YamlConfig
from persistence import STORAGE_KEY


class SettingsSchema(BaseModel):
    language: Literal["en", "ja"] = "en"
    storage_key: str = STORAGE_KEY
    level_start: float = Field(1200, gt=0)
    level_growth: float = Field(1.11, gt=0)
    level_count: int = Field(50, ge=2)
    api_key: Optional[str] = None


def validate_settings(data: dict) -> None:
    try:
        SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))


def load_settings(path: str = "settings.yaml") -> SettingsSchema:
    data = YamlConfig(path).load()
    validate_settings(data)
    return SettingsSchema(**data)
