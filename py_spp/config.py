"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from SPP_* environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # Cascade generation defaults
    default_grid_x: int = Field(default=7, ge=1, description="Default domain width (odd)")
    default_grid_z: int = Field(default=7, ge=1, description="Default domain depth (odd)")
    default_target_cells: int = Field(default=35, ge=1, description="Default cascade cell target")
    max_extra_branches: int = Field(
        default=2, ge=0, description="Max extra edges pushed per connected cell"
    )
    max_grid_dim: int = Field(default=101, ge=1, description="Largest accepted grid extent")

    # Backtracking generation defaults
    default_maze_cells: int = Field(default=40, ge=1, description="Default maze cell target")

    model_config = SettingsConfigDict(
        env_prefix="SPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
