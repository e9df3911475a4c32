"""
Print Bridge Models
"""

from .printer import Printer, PrinterDirectory
from .job import LabelJob

__all__ = ['Printer', 'PrinterDirectory', 'LabelJob']
