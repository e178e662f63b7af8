"""
FCA Fines: backend for the FCA enforcement fines dashboard.
"""

__version__ = "1.0.0"
