"""
Configuration models

Typed view of the YAML configuration. ConfigManager builds these from the
merged raw dict; everything else in the application reads only these.
"""

from dataclasses import dataclass, field
from typing import List

from geco.models.enums import LogLevel


@dataclass(frozen=True)
class EngineConfig:
    default_animation_name: str = "Untitled Animation"
    default_total_frames: int = 100
    slerp_epsilon: float = 1e-6


@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    use_colors: bool = True


@dataclass(frozen=True)
class ApiConfig:
    title: str = "Geco Animation API"
    host: str = "127.0.0.1"
    port: int = 8000
    docs_enabled: bool = True
    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ])


@dataclass(frozen=True)
class StorageConfig:
    max_blob_bytes: int = 16 * 1024 * 1024


@dataclass(frozen=True)
class GecoConfig:
    """Root configuration object"""
    engine: EngineConfig = field(default_factory=EngineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
