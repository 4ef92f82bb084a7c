"""
holdem: Texas Hold'em win probability estimator

Evaluates hand strength and estimates a player's chance of winning at
any street against a table of opponents with unknown cards, using
Monte Carlo simulation.
"""

__version__ = "0.1.0"
