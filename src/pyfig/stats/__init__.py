"""
Statistics helpers for pyfig.
"""

from pyfig.stats.bootstrap import bootstrap_distribution, bootstrap_p_value

__all__ = [
    "bootstrap_distribution",
    "bootstrap_p_value",
]
