"""Engine configuration settings."""

from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).parent


class EngineSettings(BaseSettings):
    """Resume engine configuration settings."""

    default_template: str = Field("standard", alias="RESUME_DEFAULT_TEMPLATE")
    templates_dir: Path = Field(PACKAGE_DIR / "data" / "templates", alias="RESUME_TEMPLATES_DIR")
    log_level: str = Field("INFO", alias="RESUME_LOG_LEVEL")
    pdf_author: str = Field("Resume Forge", alias="RESUME_PDF_AUTHOR")
    pdf_creator: str = Field("Resume Forge", alias="RESUME_PDF_CREATOR")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True


_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """
    Get or create the settings singleton.

    Returns:
        EngineSettings: The settings instance
    """
    global _settings
    if _settings is None:
        _settings = EngineSettings()
    return _settings
