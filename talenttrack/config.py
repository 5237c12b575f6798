"""Application configuration."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "TalentTrack Motion Engine"
    debug: bool = False
    api_prefix: str = "/api"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8100", "capacitor://localhost"]

    # Sessions
    default_fps: float = 30.0  # Sampling rate assumed when the caller doesn't send one
    max_live_sessions: int = 100
    retain_stopped_sessions: int = 100  # Stopped sessions kept for late requests

    # Pose input
    min_landmark_visibility: float = 0.5  # Landmarks below this are treated as missing

    # Pixel -> physical unit scale factors (no camera calibration, approximate only)
    jump_cm_per_px: float = 0.0264
    shuttle_m_per_px: float = 0.01
    reach_m_per_px: float = 0.01

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
