"""
Mleczna Droga Print Bridge - Main Application
=============================================

HTTPS bridge between the warehouse application and Zebra network printers.

Run: python -m mleczna_print_bridge
"""

import logging
import os
import sys

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from . import __version__
from .config import (
    PORT, HOST, DEBUG, SSL_CERT, SSL_KEY, LOG_LEVEL,
    PRINTER_PORT, DELIVERY_TIMEOUT, load_printer_table,
)
from .errors import BridgeError
from .handlers import BaseHandler, ZPLHandler
from .labels import format_label
from .models import LabelJob, PrinterDirectory

logger = logging.getLogger(__name__)

bp = Blueprint('bridge', __name__)

# =============================================================================
# Application Setup
# =============================================================================


def create_app(directory: PrinterDirectory = None, handler: BaseHandler = None) -> Flask:
    """
    Build the bridge application.

    Args:
        directory: Printer directory; loaded from configuration when omitted
        handler: Delivery handler; a ZPLHandler on PRINTER_PORT when omitted
    """
    if directory is None:
        directory = PrinterDirectory(load_printer_table(), PRINTER_PORT)
    if handler is None:
        handler = ZPLHandler(PRINTER_PORT, DELIVERY_TIMEOUT)

    app = Flask(__name__)
    app.config['PRINTER_DIRECTORY'] = directory
    app.config['PRINTER_HANDLER'] = handler

    CORS(app, origins='*', max_age=86400, allow_private_network=True)

    @app.before_request
    def preflight():
        # CORS headers are added by flask-cors in after_request
        if request.method == 'OPTIONS':
            return '', 204

    app.register_blueprint(bp)
    return app


def _directory() -> PrinterDirectory:
    return current_app.config['PRINTER_DIRECTORY']


def _handler() -> BaseHandler:
    return current_app.config['PRINTER_HANDLER']


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@bp.route('/status', methods=['GET'])
def status():
    """Liveness check; never contacts a printer."""
    return jsonify({'success': True, 'message': 'Serwer druku działa.'})


@bp.route('/printers', methods=['GET'])
def list_printers():
    """List configured printers.

    Query params:
        status=true - Check live online/offline status for each printer
    """
    include_status = request.args.get('status', 'false').lower() == 'true'
    handler = _handler()

    printers_data = []
    for printer in _directory():
        printer_dict = printer.to_dict()
        if include_status:
            printer_dict['is_online'] = handler.test_connection(printer.host)
        else:
            printer_dict['is_online'] = None  # Unknown (not checked)
        printers_data.append(printer_dict)

    return jsonify({
        'success': True,
        'printers': printers_data,
        'count': len(printers_data),
    })


# =============================================================================
# Printing
# =============================================================================

def _run_job(job: LabelJob):
    """Resolve, format and deliver one job, answering with JSON."""
    logger.info(
        'New job %s: type=%s printer=%s ip=%s',
        job.id, job.job_type or '-', job.printer_name or 'dynamic', job.ip or '-',
    )

    try:
        job.validate()
        target_ip = _directory().resolve(job.printer_name, job.ip)
        zpl = format_label(job.payload, job.job_type)
        _handler().send(zpl, target_ip, job)
    except BridgeError as e:
        if not job.is_finished:
            job.fail(e.message)
        logger.error('Job %s failed: %s', job.id, e.message)
        return jsonify({'success': False, 'message': e.message, 'job': job.to_dict()}), e.status_code

    logger.info('Job %s delivered to %s (%d bytes)', job.id, job.target_ip, job.bytes_sent)
    return jsonify({'success': True, 'job': job.to_dict()})


@bp.route('/print-label', methods=['POST'])
def print_label():
    """Submit a label job."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'message': 'Request body required'}), 400

    return _run_job(LabelJob.from_request(data, source_ip=request.remote_addr))


# =============================================================================
# Backward Compatibility with the Node.js bridge
# =============================================================================

@bp.route('/drukuj-zpl', methods=['POST'])
def legacy_print():
    """Legacy print endpoint (dane / drukarka / ip / typ)."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'message': 'Request body required'}), 400

    return _run_job(LabelJob.from_legacy_request(data, source_ip=request.remote_addr))


# Default application, configured from the environment
app = create_app()


# =============================================================================
# Main
# =============================================================================

def main():
    """Run the bridge over HTTPS."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s %(levelname)-8s %(name)s: %(message)s',
    )

    for path in (SSL_CERT, SSL_KEY):
        if not os.path.isfile(path):
            logger.error('SSL file not found: %s', path)
            sys.exit(1)

    directory = app.config['PRINTER_DIRECTORY']

    print("=" * 60)
    print("  Mleczna Droga Print Bridge")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Listening: https://{HOST}:{PORT}")
    print(f"  Printers: {len(directory)} configured (port {directory.port})")
    for printer in directory:
        print(f"    {printer.name:<12} {printer.host}")
    print("=" * 60)
    print("  API Endpoints:")
    print("    GET  /status                          - Health check")
    print("    GET  /printers                        - List printers")
    print("    POST /print-label                     - Submit label job")
    print("    POST /drukuj-zpl                      - Legacy label job")
    print("=" * 60)

    app.run(host=HOST, port=PORT, debug=DEBUG, ssl_context=(SSL_CERT, SSL_KEY))


if __name__ == '__main__':
    main()
