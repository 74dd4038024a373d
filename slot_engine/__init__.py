"""Adaptive slot machine engine"""

__version__ = '1.0.0'
