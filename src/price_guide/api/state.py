"""Shared objects for the API routers."""
from price_guide.engine.facade import PriceGuideEngine
from price_guide.config.settings import get_settings

engine = PriceGuideEngine()
settings = get_settings()
