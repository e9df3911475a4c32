#!/usr/bin/env python
"""
Mleczna Droga Print Bridge - Standalone Entry Point

Run directly:
    python main.py

Or with environment variables:
    MLECZNA_PRINT_PORT=3001 MLECZNA_PRINT_PRINTERS_FILE=printers.json python main.py
"""

import os
import sys

# Ensure package is importable when running directly
if __name__ == '__main__':
    parent_dir = os.path.dirname(os.path.abspath(__file__))
    if parent_dir not in sys.path:
        sys.path.insert(0, parent_dir)

from mleczna_print_bridge.app import app
from mleczna_print_bridge.config import PORT, HOST, DEBUG, SSL_CERT, SSL_KEY


def main():
    """Start the print bridge."""
    for path in (SSL_CERT, SSL_KEY):
        if not os.path.isfile(path):
            print(f"[ERROR] SSL file not found: {path}")
            sys.exit(1)

    print("=" * 60)
    print("Mleczna Droga Print Bridge")
    print("=" * 60)
    print(f"Starting on https://{HOST}:{PORT}")
    print(f"Status: https://localhost:{PORT}/status")
    print("=" * 60)

    app.run(host=HOST, port=PORT, debug=DEBUG, ssl_context=(SSL_CERT, SSL_KEY))


if __name__ == '__main__':
    main()
