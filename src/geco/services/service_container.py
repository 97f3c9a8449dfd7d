"""Service Container - Dependency injection container for the API layer"""

from dataclasses import dataclass

from geco.engine.engine_registry import EngineRegistry
from geco.models.config import GecoConfig
from geco.services.blob_store import InMemoryBlobStore
from geco.services.storage_service import AnimationStorageService


@dataclass
class ServiceContainer:
    """
    Everything an API request needs, created once at startup.

    - config: loaded GecoConfig
    - engines: per-owner AnimationEngine instances
    - storage: save/load of encoded animations

    Usage:
        services = ServiceContainer.build(ConfigManager().load())
        set_service_container(services)
    """

    config: GecoConfig
    engines: EngineRegistry
    storage: AnimationStorageService

    @classmethod
    def build(cls, config: GecoConfig) -> 'ServiceContainer':
        store = InMemoryBlobStore(max_blob_bytes=config.storage.max_blob_bytes)
        return cls(
            config=config,
            engines=EngineRegistry(config.engine),
            storage=AnimationStorageService(store),
        )
