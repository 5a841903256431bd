"""
Runtime configuration for the Hovenier quote engine.

Values come from the environment (a local ``.env`` is loaded in development).
Pricing constants default to the built-in rate set and can be replaced by a
JSON file named in ``PRICING_CONSTANTS_FILE``; keys missing from the file keep
their defaults.
"""
import json
import logging
import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

from hovenier.models.pricing_constants import PricingConstants
from hovenier.models.rates import CorrectionFactor

load_dotenv()

logger = logging.getLogger("hovenier-api")

APP_VERSION = "1.0.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
JSON_LOGS = os.getenv("LOG_FORMAT", "json").lower() != "text"

_cors_default = "http://localhost:3000,http://localhost:8000"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", _cors_default).split(",") if o.strip()]


# ---------------------------------------------------------------------------
# Seed correction-factor table, used when a request carries none
# ---------------------------------------------------------------------------
_DEFAULT_FACTOR_ROWS = [
    ("bereikbaarheid", "goed", 1.0),
    ("bereikbaarheid", "beperkt", 1.2),
    ("bereikbaarheid", "slecht", 1.5),
    ("complexiteit", "laag", 1.0),
    ("complexiteit", "gemiddeld", 1.15),
    ("complexiteit", "hoog", 1.3),
    ("intensiteit", "weinig", 0.8),
    ("intensiteit", "gemiddeld", 1.0),
    ("intensiteit", "veel", 1.3),
    ("snijwerk", "laag", 1.0),
    ("snijwerk", "gemiddeld", 1.2),
    ("snijwerk", "hoog", 1.4),
    ("achterstalligheid", "laag", 1.0),
    ("achterstalligheid", "gemiddeld", 1.3),
    ("achterstalligheid", "hoog", 1.6),
]

DEFAULT_CORRECTION_FACTORS: List[CorrectionFactor] = [
    CorrectionFactor(type=t, value=v, factor=f) for t, v, f in _DEFAULT_FACTOR_ROWS
]


def load_pricing_constants(path: Optional[str] = None) -> PricingConstants:
    """
    Read pricing constants from ``path`` (or ``PRICING_CONSTANTS_FILE``).

    Without a path the defaults are returned. A missing or malformed file
    raises; a file with wrong value types raises pydantic ValidationError.
    """
    path = path or os.getenv("PRICING_CONSTANTS_FILE")
    if not path:
        return PricingConstants()

    with open(path, encoding="utf-8") as fh:
        overrides = json.load(fh)
    constants = PricingConstants.model_validate(overrides)
    logger.info(f"Pricing constants loaded from {path} ({len(overrides)} overrides)")
    return constants


@lru_cache(maxsize=1)
def get_pricing_constants() -> PricingConstants:
    """Process-wide constants, loaded once."""
    return load_pricing_constants()
