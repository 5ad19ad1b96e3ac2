"""
Configuration package for the trip inquiry service.
"""

from tripdesk.config.settings import Settings, get_settings, settings

__all__ = ['Settings', 'get_settings', 'settings']
