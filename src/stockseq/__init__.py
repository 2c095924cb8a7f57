"""
Multi-Symbol Stock Sequence Pipeline

Turns daily Open/Close records for several symbols into aligned, normalized
sliding-window datasets labeled with future up/down direction.
"""

__version__ = "0.1.0"
