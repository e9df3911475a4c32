"""
Mleczna Droga Print Bridge
==========================

Standalone HTTPS bridge forwarding label jobs from the Mleczna Droga
warehouse application to Zebra network printers (raw TCP, port 9100).

Usage:
    python -m mleczna_print_bridge

API Endpoints:
    GET  /status         - Liveness check
    GET  /printers       - Configured printers (?status=true for reachability)
    POST /print-label    - Submit label job
    POST /drukuj-zpl     - Legacy label job (Polish field names)
"""

__version__ = '1.0.0'
__author__ = 'Mleczna Droga'
