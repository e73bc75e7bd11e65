import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from price_guide.config.settings import Settings


def test_defaults():
    settings = Settings.load({})
    assert settings.default_currency == "AUD"
    assert settings.log_level == "INFO"
    assert settings.api_host == "0.0.0.0"
    assert settings.api_port == 8000


def test_environment_overrides():
    settings = Settings.load({
        "PRICE_GUIDE_DEFAULT_CURRENCY": "GBP",
        "PRICE_GUIDE_LOG_LEVEL": "debug",
        "PRICE_GUIDE_API_HOST": "127.0.0.1",
        "PRICE_GUIDE_API_PORT": "9000",
    })
    assert settings.default_currency == "GBP"
    assert settings.log_level == "DEBUG"
    assert settings.api_host == "127.0.0.1"
    assert settings.api_port == 9000


def test_bad_port_rejected():
    with pytest.raises(ValueError, match="PRICE_GUIDE_API_PORT"):
        Settings.load({"PRICE_GUIDE_API_PORT": "eighty"})
