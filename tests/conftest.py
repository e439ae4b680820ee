from datetime import date, datetime
from decimal import Decimal
import logging

import pytest

from domainobjects.config import get_settings

from sample_objects import Address, ComplexObject, Customer, OrderLine, RulesObject, SimpleObject


@pytest.fixture
def simple_object():
    return SimpleObject()


@pytest.fixture
def rules_object():
    return RulesObject()


@pytest.fixture
def complex_object():
    return ComplexObject()


@pytest.fixture
def customer():
    """A fully populated object graph with every scalar kind."""
    return Customer(
        name="Ada",
        born=date(1815, 12, 10),
        active=True,
        address=Address(street="1 Analytical Way", city="London"),
        lines=[
            OrderLine(sku="A1", quantity=2, unit_price=Decimal("9.5")),
            OrderLine(sku="B2", quantity=1, unit_price=Decimal("12.5")),
        ],
        created=datetime(2024, 3, 1, 9, 30, 15),
        rating=4.5,
    )


@pytest.fixture
def settings_cache():
    """Clear the cached settings around a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def library_logger():
    """Restore the library logger after a test configures it."""
    logger = logging.getLogger("domainobjects")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
