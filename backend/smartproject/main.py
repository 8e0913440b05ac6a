from smartproject.core.config import Settings, settings
from smartproject.core.logging import configure_logging, logger


def bootstrap(cfg: Settings | None = None) -> Settings:
    """Configure logging for a host process embedding the engine."""
    cfg = cfg or settings
    configure_logging(cfg.ENV, cfg.LOG_LEVEL)
    logger.info(
        "engine_ready",
        env=cfg.ENV,
        max_wbs_level=cfg.MAX_WBS_LEVEL,
        constraint_max_passes=cfg.CONSTRAINT_MAX_PASSES,
    )
    return cfg
