"""
Plan and feature catalogs.

The reference catalogs are fixed in-memory data built once at import time.
A `Catalog` is read-only after construction and safe to share between callers.
"""
from decimal import Decimal
from typing import Iterable, Optional

from .models import Plan, Feature


DEFAULT_PLANS = (
    Plan(id="basic", name="Basic Plan", cost=Decimal("50")),
    Plan(id="premium", name="Premium Plan", cost=Decimal("100")),
    Plan(id="family", name="Family Plan", cost=Decimal("150")),
)

DEFAULT_FEATURES = (
    Feature(id="personal_training", name="Personal Training", cost=Decimal("30")),
    Feature(id="group_classes", name="Group Classes", cost=Decimal("20")),
    Feature(id="exclusive_access", name="Exclusive Facilities Access", cost=Decimal("50"), is_premium=True),
)


class Catalog:
    """
    Immutable lookup over plans and features, preserving menu order.

    Raises ValueError on duplicate ids or negative costs.
    """

    def __init__(self, plans: Iterable[Plan], features: Iterable[Feature]):
        self._plans = tuple(plans)
        self._features = tuple(features)
        self._plan_index = self._build_index(self._plans, "plan")
        self._feature_index = self._build_index(self._features, "feature")

    @staticmethod
    def _build_index(entries: tuple, kind: str) -> dict:
        index = {}
        for entry in entries:
            if entry.id in index:
                raise ValueError(f"Duplicate {kind} id '{entry.id}' in catalog")
            if entry.cost < 0:
                raise ValueError(f"{kind.capitalize()} '{entry.id}' has negative cost {entry.cost}")
            index[entry.id] = entry
        return index

    @property
    def plans(self) -> tuple[Plan, ...]:
        return self._plans

    @property
    def features(self) -> tuple[Feature, ...]:
        return self._features

    def get_plan(self, plan_id: str) -> Optional[Plan]:
        return self._plan_index.get(plan_id)

    def get_feature(self, feature_id: str) -> Optional[Feature]:
        return self._feature_index.get(feature_id)


_default_catalog: Optional[Catalog] = None


def default_catalog() -> Catalog:
    """Get the shared reference catalog."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = Catalog(DEFAULT_PLANS, DEFAULT_FEATURES)
    return _default_catalog
