"""Configuration management."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .geom import Domain


class Settings(BaseSettings):
    """Налаштування CLI; перекриваються змінними середовища CG2D_* або .env."""

    model_config = SettingsConfigDict(env_prefix="CG2D_", env_file=".env", extra="ignore")

    # Periodic domain
    xmin: float = Field(default=0.0, description="Domain lower x bound")
    xmax: float = Field(default=1.0, description="Domain upper x bound")
    ymin: float = Field(default=0.0, description="Domain lower y bound")
    ymax: float = Field(default=1.0, description="Domain upper y bound")

    @property
    def domain(self) -> Domain:
        """Build the periodic domain from the bounds (validates them)."""
        return Domain(self.xmin, self.xmax, self.ymin, self.ymax)

    # I/O
    input_path: str = Field(default="data/data1.dt.cin", description="Input points file")
    output_path: str = Field(default="periodic_triangulation.vtu", description="Output VTU file")
    sheets: int = Field(default=1, description="Covering to export: 1 or 9 sheets")

    @field_validator("sheets")
    @classmethod
    def check_sheets(cls, v: int) -> int:
        if v not in (1, 9):
            raise ValueError("sheets must be 1 or 9")
        return v

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["plain", "json"] = Field(default="plain", description="Log format")
