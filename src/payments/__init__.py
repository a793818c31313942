"""Payments: strategy-per-method payment processing.

Credit card, PayPal, crypto and bank transfer handlers share one contract and
are selected by payment method through a fixed registry. All processing is
simulated: failures are injected from a random source and fees follow fixed
formulas.
"""
