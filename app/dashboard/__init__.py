"""
Dashboard Module

Stores saved match results for each visitor.
"""

from .factory import create_dashboard_module

__all__ = ["create_dashboard_module"]
