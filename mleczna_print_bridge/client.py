"""
Print Bridge Client
===================

Python SDK for submitting label jobs to the print bridge.

Usage:
    from mleczna_print_bridge.client import PrintClient

    client = PrintClient('https://192.168.1.143:3001', verify=False)

    # Named printer
    client.print_label({'nrPalety': 'P-001', 'nazwa': 'Mleko w proszku'},
                       printer_name='Magazyn', job_type='raw_material')

    # Explicit IP, pre-formatted ZPL
    client.print_label('^XA^FDTest^FS^XZ', ip='192.168.1.160')
"""

import requests
from typing import Dict, Any, List, Optional, Union


class PrintClient:
    """Client for the print bridge."""

    def __init__(self, base_url: str = 'https://localhost:3001', verify: Union[bool, str] = True,
                 timeout: float = 30):
        """
        Initialize client.

        Args:
            base_url: Base URL of the bridge
            verify: TLS verification flag or CA bundle path (bridge certs are usually self-signed)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.verify = verify
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, data: Dict = None,
                 params: Dict = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'

        try:
            response = requests.request(
                method, url, json=data, params=params,
                timeout=self.timeout, verify=self.verify,
            )
            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'message': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'message': f'Cannot connect to {self.base_url}'}
        except ValueError:
            return {'success': False, 'message': 'Invalid JSON response'}

    # =========================================================================
    # Health
    # =========================================================================

    def status(self) -> Dict[str, Any]:
        """Check bridge status."""
        return self._request('GET', '/status')

    def is_online(self) -> bool:
        """Check if the bridge is online."""
        return self.status().get('success', False)

    # =========================================================================
    # Printers
    # =========================================================================

    def list_printers(self, status: bool = False) -> List[Dict[str, Any]]:
        """List configured printers, optionally with live reachability."""
        params = {'status': 'true'} if status else None
        result = self._request('GET', '/printers', params=params)
        return result.get('printers', [])

    # =========================================================================
    # Printing
    # =========================================================================

    def print_label(self, data: Union[str, Dict[str, Any]], printer_name: Optional[str] = None,
                    ip: Optional[str] = None, job_type: str = '') -> Dict[str, Any]:
        """
        Submit a label job.

        Args:
            data: Pre-formatted ZPL string or pallet record
            printer_name: Name from the bridge's printer directory
            ip: Explicit printer IP (wins over printer_name)
            job_type: Job type; values containing ``raw`` print a raw material label
        """
        body = {'data': data, 'jobType': job_type}
        if printer_name:
            body['printerName'] = printer_name
        if ip:
            body['ip'] = ip
        return self._request('POST', '/print-label', body)
