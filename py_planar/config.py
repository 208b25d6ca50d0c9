"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from PLANAR_* environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="PLANAR_")

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format: json or console")

    # Graph generation
    default_vertex_count: int = Field(default=100, ge=0, description="Vertices placed when none requested")
    max_vertex_count: int = Field(default=2000, ge=0, description="Largest vertex count accepted by the API")
    graph_width: float = Field(default=2.0, gt=0, description="Domain width, centered on the origin")
    graph_height: float = Field(default=2.0, gt=0, description="Domain height, centered on the origin")
    graph_padding: float = Field(default=0.1, ge=0, description="Margin kept free of vertices")
    min_angle_degrees: float = Field(default=30.0, ge=0, description="Narrowest angle allowed between edges")


settings = Settings()
