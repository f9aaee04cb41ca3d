"""
FPL Predictor Package

Turns raw Fantasy Premier League statistics into player and fixture feature
sets, assembles a labeled player x fixture training set and fits a regression
model that estimates a player's expected points for a given match.
"""

__version__ = "0.3.0"
