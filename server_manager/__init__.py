"""
Server Manager: update-trigger service and status dashboard for a small,
fixed set of infrastructure services.
"""

__version__ = "1.0.0"
