"""
Fleet operations platform: load recommendations, cost analysis and HOS compliance.
"""

__version__ = "0.1.0"
