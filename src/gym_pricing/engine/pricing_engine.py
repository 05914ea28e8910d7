"""
Pricing Engine - Core membership pricing logic with traceability.

Every quote runs the same pipeline:
- Validation of plan, features and member count (first failure wins)
- Per-person subtotal from plan and add-on costs
- Premium surcharge, group discount and special-offer rebate
- A single rounding step at the very end
"""
import logging
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Optional

from ..config.settings import get_settings, Settings
from .catalog import Catalog, default_catalog
from .models import ErrorKind, Feature, Plan, PricingError, Request, Result

logger = logging.getLogger(__name__)


def _money(value: Decimal) -> str:
    return f"${value:.2f}"


def _width(value) -> int:
    """Digits needed to hold `value` exactly: integer part plus fraction."""
    value = Decimal(value)
    return max(value.adjusted(), 0) + 1 + max(-value.as_tuple().exponent, 0)


class PricingEngine:
    """
    Core pricing engine for gym memberships.

    Resolution order:
    1. Reject unknown plan, then unknown feature, then member count < 1
    2. Sum plan cost and feature costs (repeated features count every time)
    3. Apply the premium surcharge once if any feature is premium
    4. Multiply by member count, apply group discount for groups
    5. Apply the first special-offer tier whose threshold the total exceeds
    6. Round half away from zero to a whole amount
    """

    def __init__(self, catalog: Optional[Catalog] = None, settings: Optional[Settings] = None):
        self.catalog = catalog or default_catalog()
        self.settings = settings or get_settings()

    def list_plans(self) -> tuple[Plan, ...]:
        """Plans in menu order."""
        return self.catalog.plans

    def list_features(self) -> tuple[Feature, ...]:
        """Features in menu order."""
        return self.catalog.features

    def calculate_total_cost(self, plan_id: str, feature_ids: Iterable[str], member_count) -> Result:
        """
        Price a membership.

        Args:
            plan_id: Plan catalog key
            feature_ids: Feature catalog keys, duplicates allowed
            member_count: Number of enrolling members

        Returns:
            Result with `total` set on success, or `error` set on failure

        Raises:
            TypeError: feature_ids is a single string instead of a sequence
        """
        if isinstance(feature_ids, str):
            raise TypeError(
                f"feature_ids must be a sequence of feature ids, not a string ({feature_ids!r})"
            )
        request = Request(
            plan_id=plan_id,
            feature_ids=tuple(feature_ids or ()),
            member_count=member_count,
        )
        return self.calculate(request)

    def calculate(self, request: Request) -> Result:
        """
        Calculate a quote with full traceability.

        Failures are returned on the result, never raised.
        """
        result = Result(request=request)

        error = self._validate(request)
        if error:
            logger.debug("Rejected pricing request %r: %s", request, error.message)
            result.error = error
            return result

        plan = self.catalog.get_plan(request.plan_id)
        features = [self.catalog.get_feature(fid) for fid in request.feature_ids]

        # Arithmetic stays exact; only the final quantize rounds
        with localcontext() as ctx:
            ctx.prec = self._precision_for(plan, features, request.member_count)
            self._price(request, result, plan, features)

        logger.debug("Priced %r at %s", request, result.total)
        return result

    def _precision_for(self, plan: Plan, features: list[Feature], member_count: int) -> int:
        """Upper bound on the digits any intermediate value can reach."""
        settings = self.settings
        operands = [plan.cost, member_count, settings.premium_surcharge_rate, settings.group_discount_rate]
        operands.extend(f.cost for f in features)
        for tier in settings.offer_tiers:
            operands.extend((tier.threshold, tier.amount))
        # +len(features) covers carries from the feature sum
        return max(28, sum(_width(v) for v in operands) + len(features) + 4)

    def _price(self, request: Request, result: Result, plan: Plan, features: list[Feature]):
        result.add_trace("Plan", plan.name, _money(plan.cost))

        features_cost = sum((f.cost for f in features), Decimal("0"))
        for feature in features:
            result.add_trace("Feature", feature.name, _money(feature.cost))

        subtotal = plan.cost + features_cost

        if any(f.is_premium for f in features):
            rate = self.settings.premium_surcharge_rate
            subtotal *= 1 + rate
            result.premium_surcharge_applied = True
            result.add_trace("Premium Surcharge", f"+{float(rate * 100):g}% for premium features", _money(subtotal))

        result.subtotal_per_person = subtotal
        result.add_trace("Subtotal", "Per person", _money(subtotal))

        total = subtotal * request.member_count
        result.add_trace("Members", f"{request.member_count} × {_money(subtotal)}", _money(total))

        if request.member_count >= self.settings.group_min_members:
            rate = self.settings.group_discount_rate
            total *= 1 - rate
            result.group_discount_applied = True
            result.add_trace("Group Discount", f"-{float(rate * 100):g}% for {request.member_count} members", _money(total))

        total = self._apply_offer(total, result)

        result.total = int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        result.add_trace("Total", "Rounded to whole amount", f"${result.total}")

    def _validate(self, request: Request) -> Optional[PricingError]:
        """Run validations in order; return the first failure."""
        if self.catalog.get_plan(request.plan_id) is None:
            return PricingError(
                kind=ErrorKind.INVALID_PLAN,
                message=f"The selected plan '{request.plan_id}' is not valid.",
                offending_id=str(request.plan_id),
            )

        for feature_id in request.feature_ids:
            if self.catalog.get_feature(feature_id) is None:
                return PricingError(
                    kind=ErrorKind.INVALID_FEATURE,
                    message=f"The feature '{feature_id}' is not valid.",
                    offending_id=str(feature_id),
                )

        count = request.member_count
        # bool is an int subclass but never a head count
        if not isinstance(count, int) or isinstance(count, bool) or count < 1:
            return PricingError(
                kind=ErrorKind.INVALID_MEMBER_COUNT,
                message="The number of members must be at least 1.",
            )

        return None

    def _apply_offer(self, total: Decimal, result: Result) -> Decimal:
        """Subtract the first special-offer tier the total strictly exceeds."""
        for tier in self.settings.offer_tiers:
            if total > tier.threshold:
                result.offer_discount = tier.amount
                new_total = total - tier.amount
                result.add_trace(
                    "Special Offer",
                    f"Total over {_money(tier.threshold)}: {_money(total)} → {_money(new_total)}",
                    f"-{_money(tier.amount)}",
                )
                return new_total
        return total
