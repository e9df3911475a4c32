"""
Print Bridge Handlers
=====================

Protocol handlers for network label printers.
"""

from .base import BaseHandler
from .zpl import ZPLHandler

__all__ = ['BaseHandler', 'ZPLHandler']
