from decimal import Decimal, ROUND_HALF_UP

import pytest

from gym_pricing.config.settings import Settings
from gym_pricing.engine import Catalog, ErrorKind, Feature, Plan, PricingEngine, Request


@pytest.fixture(scope="module")
def engine():
    return PricingEngine(settings=Settings())


@pytest.fixture
def threshold_engine():
    """Engine over flat plans priced right at the special-offer boundaries."""
    plans = [Plan(id=f"p{cost}", name=f"Plan {cost}", cost=cost) for cost in (200, 201, 400, 401)]
    plans.append(Plan(id="half", name="Half", cost="100.5"))
    plans.append(Plan(id="below_half", name="Below Half", cost="100.49"))
    features = [
        Feature(id="spa", name="Spa", cost=10, is_premium=True),
        Feature(id="pool", name="Pool", cost=10, is_premium=True),
        Feature(id="towel", name="Towel", cost=0),
    ]
    return PricingEngine(catalog=Catalog(plans, features), settings=Settings())


@pytest.mark.parametrize("plan_id, expected", [
    ("p200", 200),  # exactly 200: no offer
    ("p201", 181),  # over 200: -20
    ("p400", 380),  # exactly 400: lower tier only
    ("p401", 351),  # over 400: -50
])
def test_offer_thresholds_are_strict(threshold_engine, plan_id, expected):
    result = threshold_engine.calculate_total_cost(plan_id, [], 1)
    assert result.total == expected


def test_offer_tiers_are_exclusive(threshold_engine):
    result = threshold_engine.calculate_total_cost("p401", [], 1)
    assert result.offer_discount == Decimal("50")
    assert len([t for t in result.trace if t.step == "Special Offer"]) == 1


def test_half_rounds_up(threshold_engine):
    assert threshold_engine.calculate_total_cost("half", [], 1).total == 101
    assert threshold_engine.calculate_total_cost("below_half", [], 1).total == 100


def test_premium_surcharge_applied_once(threshold_engine):
    one = threshold_engine.calculate_total_cost("p200", ["spa"], 1)
    two = threshold_engine.calculate_total_cost("p200", ["spa", "pool"], 1)

    # (200 + 10) * 1.15 = 241.5 - 20
    assert one.total == 222
    # (200 + 20) * 1.15 = 253 - 20
    assert two.total == 233
    assert one.premium_surcharge_applied and two.premium_surcharge_applied


def test_zero_cost_feature_does_not_change_total(threshold_engine):
    plain = threshold_engine.calculate_total_cost("p200", [], 1)
    with_towel = threshold_engine.calculate_total_cost("p200", ["towel"], 1)
    assert plain.total == with_towel.total == 200


def test_duplicate_features_are_counted_each_time(engine):
    once = engine.calculate_total_cost("basic", ["group_classes"], 1)
    twice = engine.calculate_total_cost("basic", ["group_classes", "group_classes"], 1)
    assert once.total == 70
    assert twice.total == 90


def test_feature_order_is_irrelevant(engine):
    a = engine.calculate_total_cost("premium", ["exclusive_access", "personal_training"], 3)
    b = engine.calculate_total_cost("premium", ["personal_training", "exclusive_access"], 3)
    assert a.total == b.total


def test_no_float_drift_in_surcharge(engine):
    """100 * 1.15 is 114.99999999999999 in binary floating point."""
    result = engine.calculate_total_cost("basic", ["exclusive_access"], 1)
    assert result.total == 115
    assert result.subtotal_per_person == Decimal("115")


@pytest.mark.parametrize("members", [1, 2, 3, 7, 10])
def test_plan_only_formula(engine, members):
    for plan in engine.list_plans():
        total = plan.cost * members
        if members >= 2:
            total *= Decimal("0.9")
        if total > 400:
            total -= 50
        elif total > 200:
            total -= 20
        expected = int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

        assert engine.calculate_total_cost(plan.id, [], members).total == expected


def test_group_discount_flag(engine):
    assert engine.calculate_total_cost("premium", [], 2).group_discount_applied
    assert not engine.calculate_total_cost("premium", [], 1).group_discount_applied


def test_result_is_non_negative_integer(engine):
    for plan in engine.list_plans():
        for members in (1, 2, 50):
            result = engine.calculate_total_cost(plan.id, ["exclusive_access"], members)
            assert isinstance(result.total, int)
            assert result.total >= 0


def test_same_request_same_result(engine):
    first = engine.calculate_total_cost("family", ["exclusive_access", "group_classes"], 4)
    second = engine.calculate_total_cost("family", ["exclusive_access", "group_classes"], 4)
    assert first.total == second.total
    assert first.to_dict() == second.to_dict()


def test_calculate_accepts_request(engine):
    result = engine.calculate(Request(plan_id="basic", feature_ids=("personal_training",), member_count=1))
    assert result.total == 80


# Validation


@pytest.mark.parametrize("features, members", [
    ([], 1),
    (["masaje_spa"], 1),
    ([], 0),
    (["masaje_spa"], -1),
])
def test_unknown_plan_checked_first(engine, features, members):
    result = engine.calculate_total_cost("plan_inexistente", features, members)
    assert result.error.kind == ErrorKind.INVALID_PLAN
    assert result.error.offending_id == "plan_inexistente"
    assert result.total is None


def test_unknown_feature_reports_first_offender(engine):
    result = engine.calculate_total_cost("basic", ["group_classes", "masaje_spa", "sauna"], 0)
    assert result.error.kind == ErrorKind.INVALID_FEATURE
    assert result.error.offending_id == "masaje_spa"
    assert "masaje_spa" in result.error.message


@pytest.mark.parametrize("members", [0, -1, -100])
def test_member_count_below_one(engine, members):
    result = engine.calculate_total_cost("basic", ["personal_training"], members)
    assert result.error.kind == ErrorKind.INVALID_MEMBER_COUNT
    assert not result.ok


@pytest.mark.parametrize("members", [None, "abc", "3", 2.5, float("nan"), True])
def test_non_integer_member_count_rejected(engine, members):
    result = engine.calculate_total_cost("basic", [], members)
    assert result.error.kind == ErrorKind.INVALID_MEMBER_COUNT


def test_failure_has_no_partial_breakdown(engine):
    result = engine.calculate_total_cost("basic", [], 0)
    assert result.subtotal_per_person is None
    assert result.trace == []
    assert result.to_dict()["error"]["kind"] == "invalid_member_count"


# Catalog access


def test_list_plans_in_menu_order(engine):
    plans = engine.list_plans()
    assert [p.id for p in plans] == ["basic", "premium", "family"]
    assert [p.cost for p in plans] == [Decimal("50"), Decimal("100"), Decimal("150")]


def test_list_features_in_menu_order(engine):
    features = engine.list_features()
    assert [f.id for f in features] == ["personal_training", "group_classes", "exclusive_access"]
    assert [f.is_premium for f in features] == [False, False, True]


def test_catalog_rejects_duplicate_ids():
    with pytest.raises(ValueError, match="Duplicate plan id"):
        Catalog([Plan("a", "A", 1), Plan("a", "A again", 2)], [])


def test_catalog_rejects_negative_cost():
    with pytest.raises(ValueError, match="negative cost"):
        Catalog([], [Feature("f", "F", -5)])


def test_trace_text(engine):
    result = engine.calculate_total_cost("family", ["exclusive_access"], 1)
    text = result.get_trace_text()
    assert "Premium Surcharge" in text
    assert "Special Offer" in text
    assert text.endswith("Total: Rounded to whole amount = $210")


# Large groups


@pytest.mark.parametrize("members", [10**27, 12345678901234567890123456789, 10**60 + 7])
def test_huge_member_count_is_exact(engine, members):
    result = engine.calculate_total_cost("basic", [], members)
    # 50 * n * 0.9 - 50
    assert result.total == 45 * members - 50


def test_huge_member_count_with_surcharge(engine):
    members = 10**40 + 1
    result = engine.calculate_total_cost("basic", ["exclusive_access"], members)
    # 115 * n * 0.9 = 103.5 * n, n odd so the .5 rounds up
    assert result.total == (1035 * members + 5) // 10 - 50


def test_precision_does_not_leak_into_caller(engine):
    import decimal

    before = decimal.getcontext().prec
    engine.calculate_total_cost("premium", [], 10**50)
    assert decimal.getcontext().prec == before


def test_string_feature_ids_rejected(engine):
    with pytest.raises(TypeError, match="not a string"):
        engine.calculate_total_cost("basic", "group_classes", 1)


def test_tuple_and_generator_feature_ids_accepted(engine):
    assert engine.calculate_total_cost("basic", ("group_classes",), 1).total == 70
    assert engine.calculate_total_cost("basic", (f for f in ["group_classes"]), 1).total == 70
