"""
Sparkle.

Rules engine for a single-player push-your-luck dice game in the Farkle
family: roll, set aside scoring dice, bank, and beat a rising threshold
each turn.
"""

__version__ = "0.1.0"
