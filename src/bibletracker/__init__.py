"""Bible reading tracker.

Log chapter ranges read each day and follow progress through the canon,
daily streaks, and the pace needed to finish by year end.
"""

__version__ = "0.1.0"
