# runtime defaults, overridable through the environment
import os


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


DB_PATH = os.getenv("SHOPEASE_DB_PATH", "data/shopease.sqlite")

# simulated backend latency, seconds
AUTH_DELAY = _float_env("SHOPEASE_AUTH_DELAY", 1.0)
PROMO_DELAY = _float_env("SHOPEASE_PROMO_DELAY", 1.0)

SESSION_KEY = "shopease-user"
CART_KEY = "shopease-cart"

DEBUG = bool(os.getenv("DEBUG"))
