"""
Interactive console for pricing a gym membership.

Usage:
    gym-pricing
    python scripts/run_console.py
"""
import re
import sys
from typing import Callable, Optional

from ..engine import PricingEngine

RULE_WIDTH = 30

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(text: str) -> Optional[int]:
    """
    Read the leading whole number of an answer.

    "2 people" and "2.5" both read as 2; answers that do not start with
    a number return None.
    """
    match = LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def run_console(
    engine: Optional[PricingEngine] = None,
    ask: Callable[[str], str] = input,
    say: Callable[[str], None] = print,
) -> Optional[int]:
    """
    Walk the user through plan, features and members, then confirm.

    Returns the charged total on a confirmed enrollment, otherwise None.
    """
    engine = engine or PricingEngine()
    currency = engine.settings.currency_symbol
    plans = engine.list_plans()
    features = engine.list_features()

    say("--- Gym Membership System ---")

    say("\nAvailable plans:")
    for i, plan in enumerate(plans, start=1):
        say(f" {i} - {plan.name}: {currency}{plan.cost}")

    option = _parse_int(ask("\nSelect the number of the desired plan: "))
    if option is None or not 1 <= option <= len(plans):
        say("Error: Invalid plan option.")
        return None
    plan = plans[option - 1]

    say("\nAvailable add-on features:")
    for i, feature in enumerate(features, start=1):
        label = "PREMIUM" if feature.is_premium else "Standard"
        say(f" {i} - {feature.name}: {currency}{feature.cost} ({label})")

    say("\nEnter the feature numbers separated by commas")
    say("(Example: '1, 3', or leave empty for none):")
    raw_features = ask("> ")

    selected = []
    if raw_features.strip():
        for chunk in raw_features.split(","):
            chunk = chunk.strip()
            idx = _parse_int(chunk)
            if idx is None:
                say(f"Error: '{chunk}' is not a valid number.")
                return None
            if not 1 <= idx <= len(features):
                say(f"Error: Option '{idx}' does not exist.")
                return None
            selected.append(features[idx - 1])

    raw_members = ask("\nHow many people will enroll?: ")
    # Unparseable input goes through as-is; the engine rejects it
    members = _parse_int(raw_members)
    member_count = members if members is not None else raw_members

    result = engine.calculate_total_cost(plan.id, [f.id for f in selected], member_count)
    if not result.ok:
        say(f"Error: {result.error.message}")
        return None

    if result.group_discount_applied:
        rate = engine.settings.group_discount_rate
        say(f"Notice! A {float(rate * 100):g}% group discount has been applied.")

    extras = ", ".join(f.name for f in selected) if selected else "None"

    say("\n" + "=" * RULE_WIDTH)
    say(" ENROLLMENT CONFIRMATION")
    say("=" * RULE_WIDTH)
    say(f"Plan:        {plan.name}")
    say(f"Extras:      {extras}")
    say(f"Members:     {member_count}")
    say("-" * RULE_WIDTH)
    say(f"TOTAL DUE: {currency}{result.total}")
    say("=" * RULE_WIDTH)

    confirm = ask("\nConfirm enrollment? (1 = Yes, 0 = No): ")
    if confirm.strip() == "1":
        say(f"\nEnrollment successful. Total charged: {currency}{result.total}")
        return result.total

    say("\nEnrollment cancelled by the user.")
    return None


def main():
    try:
        total = run_console()
    except (KeyboardInterrupt, EOFError):
        print("\nEnrollment aborted.")
        sys.exit(1)
    sys.exit(0 if total is not None else 1)


if __name__ == "__main__":
    main()
