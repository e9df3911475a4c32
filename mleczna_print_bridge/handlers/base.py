"""
Base Handler
============

Abstract base class for printer delivery handlers.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from ..config import PRINTER_PORT, DELIVERY_TIMEOUT
from ..models import LabelJob


class BaseHandler(ABC):
    """Abstract base class for printer handlers."""

    def __init__(self, port: int = PRINTER_PORT, timeout: float = DELIVERY_TIMEOUT):
        """Initialize handler with the printer port and delivery timeout."""
        self.port = port
        self.timeout = timeout

    @abstractmethod
    def send(self, payload: str, ip: str, job: Optional[LabelJob] = None) -> Dict[str, Any]:
        """
        Deliver a printer-ready payload.

        Args:
            payload: Printer language document
            ip: Resolved printer address
            job: Job whose state is advanced during delivery

        Returns:
            Dict with delivery details

        Raises:
            DeliveryFailed: on any transport error or timeout
        """
        pass

    @abstractmethod
    def test_connection(self, ip: str, timeout: float = None) -> bool:
        """
        Test whether the printer accepts connections.

        Returns:
            True if reachable
        """
        pass
