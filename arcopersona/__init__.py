"""
Arco persona personalization.

Classifies visitors into one of six brewing personas from a short quiz,
persists the result, and assembles persona-aware page data.
"""

__version__ = "1.0.0"
