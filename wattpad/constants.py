"""Fixed values shared across the client."""

__title__ = "wattpad-scrape"
__version__ = "1.0.0"

BASE_URL = "https://www.wattpad.com"
DEFAULT_USER_AGENT = ("Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                      "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36 "
                      f"WattpadClient/Python/{__version__}")
DEFAULT_CACHE_DIR = "capacitor"
