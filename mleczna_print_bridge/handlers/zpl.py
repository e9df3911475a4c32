"""
ZPL Handler
===========

Raw TCP delivery of ZPL (Zebra Programming Language) labels to network
printers on port 9100. One connection per job, no retry.
"""

import logging
import socket
from typing import Optional, Dict, Any

from .base import BaseHandler
from ..config import PROBE_TIMEOUT
from ..errors import DeliveryFailed
from ..models import LabelJob

logger = logging.getLogger(__name__)


class ZPLHandler(BaseHandler):
    """Handler for ZPL-compatible network printers (Zebra)."""

    def send(self, payload: str, ip: str, job: Optional[LabelJob] = None) -> Dict[str, Any]:
        """
        Send ZPL code to a printer.

        ``ip`` is expected to be an IP literal; the timeout bounds connect
        and write, not name resolution. The socket is closed on every exit
        path, including timeouts.

        Raises:
            DeliveryFailed: on connection errors, write errors or timeout
        """
        if job is None:
            job = LabelJob()
        port = self.port
        data = payload.encode('utf-8')

        job.connect(ip)
        try:
            with socket.create_connection((ip, port), timeout=self.timeout) as sock:
                logger.info('[TCP] Sending %d bytes to %s:%s', len(data), ip, port)
                job.send()
                sock.sendall(data)
        except socket.timeout:
            error = f'Timeout połączenia z drukarką {ip}:{port}'
        except ConnectionRefusedError:
            error = f'Drukarka {ip}:{port} odrzuciła połączenie'
        except OSError as e:
            error = str(e) or e.__class__.__name__
        else:
            job.complete(len(data))
            return {
                'success': True,
                'host': ip,
                'port': port,
                'bytes_sent': len(data),
            }

        job.fail(error)
        raise DeliveryFailed(error)

    def test_connection(self, ip: str, timeout: float = None) -> bool:
        """Test connection to printer without printing."""
        try:
            with socket.create_connection((ip, self.port), timeout=timeout or PROBE_TIMEOUT):
                return True
        except OSError as e:
            logger.debug('Printer %s:%s unreachable: %s', ip, self.port, e)
            return False
