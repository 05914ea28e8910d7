"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


def _as_decimal(value) -> Decimal:
    # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
    return value if isinstance(value, Decimal) else Decimal(str(value))


@dataclass(frozen=True)
class Plan:
    """A base membership tier with a flat per-person cost."""
    id: str
    name: str
    cost: Decimal

    def __post_init__(self):
        object.__setattr__(self, "cost", _as_decimal(self.cost))


@dataclass(frozen=True)
class Feature:
    """An optional add-on. Premium features trigger the surcharge."""
    id: str
    name: str
    cost: Decimal
    is_premium: bool = False

    def __post_init__(self):
        object.__setattr__(self, "cost", _as_decimal(self.cost))


@dataclass(frozen=True)
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


class ErrorKind(str, Enum):
    INVALID_PLAN = "invalid_plan"
    INVALID_FEATURE = "invalid_feature"
    INVALID_MEMBER_COUNT = "invalid_member_count"


@dataclass(frozen=True)
class PricingError:
    """Why a request could not be priced."""
    kind: ErrorKind
    message: str
    offending_id: Optional[str] = None


@dataclass(frozen=True)
class Request:
    """A pricing request: one plan, any add-ons, and the number of members."""
    plan_id: str
    feature_ids: tuple = ()
    member_count: object = 1  # int once parsed; anything else is rejected


@dataclass
class Result:
    """Complete result of a pricing calculation. Either `total` or `error` is set."""
    request: Request
    total: Optional[int] = None
    error: Optional[PricingError] = None

    # Display-only breakdown
    subtotal_per_person: Optional[Decimal] = None
    premium_surcharge_applied: bool = False
    group_discount_applied: bool = False
    offer_discount: Decimal = Decimal("0")
    trace: list[TraceStep] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the result-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable result trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Plain dict for JSON responses."""
        if self.error:
            return {
                "ok": False,
                "error": {
                    "kind": self.error.kind.value,
                    "message": self.error.message,
                    "offending_id": self.error.offending_id,
                },
            }
        return {
            "ok": True,
            "plan_id": self.request.plan_id,
            "feature_ids": list(self.request.feature_ids),
            "member_count": self.request.member_count,
            "total": self.total,
            "subtotal_per_person": float(self.subtotal_per_person),
            "premium_surcharge_applied": self.premium_surcharge_applied,
            "group_discount_applied": self.group_discount_applied,
            "offer_discount": float(self.offer_discount),
            "trace": [
                {"step": t.step, "description": t.description, "value": t.value}
                for t in self.trace
            ],
        }
