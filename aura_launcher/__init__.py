"""Aura Launcher - application launcher ranking engine.

This package provides:
- Frecency tracking of application launches with 7-day half-life decay
- Fuzzy ranking that blends match quality with launch history
- Bounded, negative-caching icon lookup on top of XDG icon themes
- A terminal front end for searching and launching desktop applications
"""

__version__ = "0.1.0"
__author__ = "aura-launcher contributors"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]
