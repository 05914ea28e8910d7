"""
Gym Pricing Package

A pricing calculator for gym membership subscriptions.
Resolves Plan → Features → Surcharge → Group Discount → Special Offer pipeline.
"""

__version__ = "1.0.0"
