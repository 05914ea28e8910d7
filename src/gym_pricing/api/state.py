"""Shared engine instance for the API process."""
from ..engine import PricingEngine

engine = PricingEngine()
