"""FastAPI dependency injection providers."""

from .config import SparksConfig, get_config
from .database import get_session_factory
from .engine.layout_manager import LayoutManager
from .utils.logging import get_logger

_dep_logger = get_logger("dependencies")

_config_instance: SparksConfig | None = None
_layout_manager: LayoutManager | None = None


def get_app_config() -> SparksConfig:
    """Get the application config singleton."""
    global _config_instance
    if _config_instance is None:
        _config_instance = get_config()
    return _config_instance


def get_layout_manager() -> LayoutManager:
    """Get the layout manager singleton, wired to the session factory."""
    global _layout_manager
    if _layout_manager is None:
        config = get_app_config()
        _layout_manager = LayoutManager(
            db_session_factory=get_session_factory(config),
            reports_per_row=config.reports_per_row,
            default_view_reports=config.default_view_reports,
        )
        _dep_logger.debug("layout_manager_created", reports_per_row=config.reports_per_row)
    return _layout_manager
