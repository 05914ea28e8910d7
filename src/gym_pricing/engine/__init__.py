"""Engine subpackage - core pricing logic and catalogs."""
from .pricing_engine import PricingEngine
from .catalog import Catalog, default_catalog
from .models import Plan, Feature, Request, Result, ErrorKind, PricingError

__all__ = [
    'PricingEngine', 'Catalog', 'default_catalog',
    'Plan', 'Feature', 'Request', 'Result', 'ErrorKind', 'PricingError',
]
