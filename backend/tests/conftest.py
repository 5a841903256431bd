"""
conftest.py — Shared pytest fixtures for the Hovenier quote engine test suite.

No database or external service fixtures are defined here. The engine is a
set of pure functions; every test builds its inputs from the reference rate
tables below.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``hovenier.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import sys
import os
import pytest

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any hovenier imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


HOURLY_RATE = 45.0
DEFAULT_MARGIN = 20.0
VAT = 21.0


# ---------------------------------------------------------------------------
# Reference rate tables
# ---------------------------------------------------------------------------

_NORMUREN = [
    # (scope, activity, hours_per_unit, unit)
    ("grondwerk", "ontgraven standaard", 0.25, "m2"),
    ("grondwerk", "ontgraven licht", 0.15, "m2"),
    ("grondwerk", "ontgraven zwaar", 0.35, "m2"),
    ("grondwerk", "afvoeren grond", 0.1, "m3"),
    ("bestrating", "tegels leggen", 0.4, "m2"),
    ("bestrating", "klinkers leggen", 0.5, "m2"),
    ("bestrating", "natuursteen leggen", 0.6, "m2"),
    ("bestrating", "zandbed aanbrengen", 0.1, "m2"),
    ("bestrating", "opsluitbanden plaatsen", 0.2, "m"),
    ("borders", "grondbewerking", 0.2, "m2"),
    ("borders", "planten laag", 0.15, "m2"),
    ("borders", "planten gemiddeld", 0.25, "m2"),
    ("borders", "planten hoog", 0.35, "m2"),
    ("borders", "schors aanbrengen", 0.08, "m2"),
    ("gras", "ondergrond bewerken", 0.1, "m2"),
    ("gras", "graszoden leggen", 0.12, "m2"),
    ("gras", "gras zaaien", 0.05, "m2"),
    ("houtwerk", "schutting plaatsen", 0.8, "m"),
    ("houtwerk", "vlonder leggen", 0.6, "m2"),
    ("houtwerk", "pergola bouwen", 2.0, "m2"),
    ("houtwerk", "fundering standaard", 0.5, "stuk"),
    ("houtwerk", "fundering zwaar", 0.8, "stuk"),
    ("water_elektra", "sleuf graven", 0.3, "m"),
    ("water_elektra", "kabel leggen", 0.1, "m"),
    ("water_elektra", "sleuf herstellen", 0.15, "m"),
    ("water_elektra", "armatuur plaatsen", 0.5, "stuk"),
    ("gras_onderhoud", "maaien", 0.02, "m2"),
    ("gras_onderhoud", "kanten steken", 0.05, "m"),
    ("gras_onderhoud", "verticuteren", 0.03, "m2"),
    ("borders_onderhoud", "wieden weinig", 0.1, "m2"),
    ("borders_onderhoud", "wieden gemiddeld", 0.15, "m2"),
    ("borders_onderhoud", "wieden veel", 0.2, "m2"),
    ("borders_onderhoud", "snoei licht", 0.08, "m2"),
    ("borders_onderhoud", "snoei zwaar", 0.15, "m2"),
    ("heggen_onderhoud", "heg snoeien", 0.15, "m3"),
    ("heggen_onderhoud", "snoeisel afvoeren", 0.1, "m3"),
    ("bomen_onderhoud", "boom snoeien licht", 0.5, "stuk"),
    ("bomen_onderhoud", "boom snoeien zwaar", 1.5, "stuk"),
]

_FACTORS = [
    ("bereikbaarheid", "goed", 1.0),
    ("bereikbaarheid", "beperkt", 1.2),
    ("bereikbaarheid", "slecht", 1.5),
    ("snijwerk", "laag", 1.0),
    ("snijwerk", "gemiddeld", 1.1),
    ("snijwerk", "hoog", 1.3),
    ("achterstalligheid", "laag", 1.0),
    ("achterstalligheid", "gemiddeld", 1.3),
    ("achterstalligheid", "hoog", 1.6),
]

_PRODUCTS = [
    # (name, sell_price, unit, wastage_percent)
    ("Afvoer grond", 30.0, "m3", 0),
    ("Straatzand", 35.0, "m3", 5),
    ("Opsluitband 100x20x6", 5.0, "stuk", 3),
    ("Bodembedekker pot 9cm", 3.0, "stuk", 5),
    ("Boomschors 10-40mm", 60.0, "m3", 5),
    ("Graszoden", 7.0, "m2", 5),
    ("Graszaad sport", 15.0, "kg", 0),
    ("Schuttingplank 180x15", 8.0, "stuk", 5),
    ("Schuttingpaal 7x7x270", 25.0, "stuk", 0),
    ("Vlonderdeel hardhout", 20.0, "m", 5),
    ("Betonpoer 30x30x30", 15.0, "stuk", 0),
    ("Kabel 3x1,5 grond", 4.0, "m", 5),
    ("Grondspot LED", 45.0, "stuk", 0),
    ("Lasdoos waterdicht", 6.0, "stuk", 0),
]


@pytest.fixture
def standard_hours():
    from hovenier.models.rates import StandardHoursEntry
    return [
        StandardHoursEntry(scope=s, activity=a, hours_per_unit=h, unit=u)
        for s, a, h, u in _NORMUREN
    ]


@pytest.fixture
def correction_factors():
    from hovenier.models.rates import CorrectionFactor
    return [CorrectionFactor(type=t, value=v, factor=f) for t, v, f in _FACTORS]


@pytest.fixture
def products():
    from hovenier.models.rates import Product
    return [
        Product(name=n, sell_price=p, unit=u, wastage_percent=w)
        for n, p, u, w in _PRODUCTS
    ]


@pytest.fixture
def settings():
    from hovenier.models.rates import Settings
    return Settings(hourly_rate=HOURLY_RATE, default_margin_percent=DEFAULT_MARGIN, vat_percent=VAT)


@pytest.fixture
def rate_tables(standard_hours, correction_factors, products, settings):
    from hovenier.models.rates import RateTables
    return RateTables(
        standard_hours=standard_hours,
        correction_factors=correction_factors,
        products=products,
        settings=settings,
    )


@pytest.fixture
def make_context(rate_tables):
    """
    Factory for a CalculationContext over the reference tables.

    Keyword arguments override context fields, e.g.
    ``make_context(accessibility="slecht", backlog_severity="hoog")``.
    """
    from hovenier.models.quote import CalculationContext

    def _make(**overrides):
        ctx = CalculationContext.from_rate_tables(rate_tables)
        return ctx.model_copy(update=overrides) if overrides else ctx

    return _make


@pytest.fixture
def context(make_context):
    """Context with good accessibility and no backlog."""
    return make_context()


@pytest.fixture
def rates_payload(rate_tables):
    """Rate tables as the JSON body of the quote API expects them."""
    return rate_tables.model_dump()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def by_description(lines, description):
    """Return the single line with ``description``; fail loudly otherwise."""
    matches = [line for line in lines if line.description == description]
    assert len(matches) == 1, f"expected one '{description}' line, got {len(matches)}: " \
        f"{[line.description for line in lines]}"
    return matches[0]


@pytest.fixture
def find_line():
    return by_description
