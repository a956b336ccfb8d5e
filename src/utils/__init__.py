"""
Utility functions for glissando
"""

from .logger import get_logger, get_category_logger, configure_logger

__all__ = [
    'get_logger',
    'get_category_logger',
    'configure_logger',
]
