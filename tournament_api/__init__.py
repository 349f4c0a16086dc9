"""
Football tournament REST API: players, teams, tournaments and matches.
"""
__version__ = "0.1.0"
