"""
Mleczna Droga Print Bridge Configuration
"""

import json
import os

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('MLECZNA_PRINT_PORT', 3001))
HOST = os.environ.get('MLECZNA_PRINT_HOST', '0.0.0.0')
DEBUG = os.environ.get('MLECZNA_PRINT_DEBUG', 'false').lower() == 'true'

# TLS material is supplied externally (self-signed cert on the bridge host)
SSL_CERT = os.environ.get('MLECZNA_PRINT_SSL_CERT', './server.cert')
SSL_KEY = os.environ.get('MLECZNA_PRINT_SSL_KEY', './server.key')

LOG_LEVEL = os.environ.get('MLECZNA_PRINT_LOG_LEVEL', 'INFO').upper()

# =============================================================================
# Printer Defaults
# =============================================================================

# Raw ZPL port on Zebra network printers
PRINTER_PORT = int(os.environ.get('MLECZNA_PRINT_PRINTER_PORT', 9100))

# Connect and write timeout for a single delivery (seconds)
DELIVERY_TIMEOUT = float(os.environ.get('MLECZNA_PRINT_TIMEOUT', 5))

# Quick reachability probe used by GET /printers?status=true
PROBE_TIMEOUT = 2

# =============================================================================
# Printer Directory
# =============================================================================

PRINTERS_FILE = os.environ.get('MLECZNA_PRINT_PRINTERS_FILE')

DEFAULT_PRINTERS = {
    'Biuro': '192.168.1.236',
    'Magazyn': '192.168.1.237',
    'Handel': '192.168.1.240',
    'OSIP': '192.168.1.160',
}


def load_printer_table(path: str = None) -> dict:
    """
    Load the printer name -> IP table.

    Args:
        path: JSON file with a ``{"name": "ip"}`` object. Falls back to
            PRINTERS_FILE, then to DEFAULT_PRINTERS.

    Returns:
        Plain dict; callers wrap it in a PrinterDirectory.
    """
    path = path or PRINTERS_FILE
    if not path:
        return dict(DEFAULT_PRINTERS)

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f'Printer table in {path} must be a JSON object')

    return {str(name): str(ip) for name, ip in data.items()}
