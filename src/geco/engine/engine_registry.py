"""Engine registry - one AnimationEngine per owner"""

from typing import Dict

from geco.engine.animation_engine import AnimationEngine
from geco.models.config import EngineConfig
from geco.models.enums import LogCategory
from geco.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


class EngineRegistry:
    """
    Owns the engine instances served by the API.

    Each owner gets exactly one engine, created lazily with the configured
    defaults and kept for the life of the process.
    """

    def __init__(self, engine_config: EngineConfig):
        self.engine_config = engine_config
        self._engines: Dict[str, AnimationEngine] = {}

    def get(self, owner_id: str) -> AnimationEngine:
        engine = self._engines.get(owner_id)
        if engine is None:
            engine = AnimationEngine(
                name=self.engine_config.default_animation_name,
                total_frames=self.engine_config.default_total_frames,
                slerp_epsilon=self.engine_config.slerp_epsilon,
            )
            self._engines[owner_id] = engine
            log.info("Engine created", owner=owner_id)
        return engine
