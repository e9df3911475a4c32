import socket
import threading
import time

import pytest

from mleczna_print_bridge.errors import DeliveryFailed
from mleczna_print_bridge.handlers import ZPLHandler
from mleczna_print_bridge.handlers import zpl as zpl_module
from mleczna_print_bridge.models import LabelJob


@pytest.fixture
def printer_server():
    """Localhost stand-in for a printer on a raw TCP port."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(('127.0.0.1', 0))
    server.listen(1)
    server.settimeout(5)
    received = []

    def serve():
        conn, _ = server.accept()
        with conn:
            chunks = []
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        received.append(b''.join(chunks))

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    yield server.getsockname()[1], received, thread
    server.close()


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(('127.0.0.1', 0))
        return sock.getsockname()[1]


class FakeSocket:
    def __init__(self, send_error=None):
        self.send_error = send_error
        self.data = b''
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def sendall(self, data):
        if self.send_error:
            raise self.send_error
        self.data += data


def test_send_delivers_payload(printer_server):
    port, received, thread = printer_server
    job = LabelJob()

    result = ZPLHandler(port=port, timeout=2).send('^XA^FDŻółty ser^FS^XZ', '127.0.0.1', job)
    thread.join(5)

    assert received == ['^XA^FDŻółty ser^FS^XZ'.encode('utf-8')]
    assert result['success'] is True
    assert result['bytes_sent'] == len('^XA^FDŻółty ser^FS^XZ'.encode('utf-8'))
    assert job.status == 'closed'
    assert job.target_ip == '127.0.0.1'


def test_connection_refused_fails():
    job = LabelJob()

    with pytest.raises(DeliveryFailed) as exc:
        ZPLHandler(port=_free_port(), timeout=2).send('^XA^XZ', '127.0.0.1', job)

    assert exc.value.status_code == 500
    assert job.status == 'failed'
    assert job.error_message == exc.value.message


def test_connect_timeout_fails(monkeypatch):
    def create_connection(address, timeout=None):
        raise socket.timeout('timed out')

    monkeypatch.setattr(zpl_module.socket, 'create_connection', create_connection)
    job = LabelJob()

    with pytest.raises(DeliveryFailed) as exc:
        ZPLHandler(timeout=5).send('^XA^XZ', '192.168.1.236', job)

    assert 'Timeout' in exc.value.message
    assert job.status == 'failed'


def test_write_error_closes_socket(monkeypatch):
    fake = FakeSocket(send_error=BrokenPipeError('Broken pipe'))
    calls = []

    def create_connection(address, timeout=None):
        calls.append((address, timeout))
        return fake

    monkeypatch.setattr(zpl_module.socket, 'create_connection', create_connection)
    job = LabelJob()

    with pytest.raises(DeliveryFailed) as exc:
        ZPLHandler(port=9100, timeout=5).send('^XA^XZ', '192.168.1.237', job)

    assert calls == [(('192.168.1.237', 9100), 5)]
    assert fake.closed is True
    assert 'Broken pipe' in exc.value.message
    assert job.status == 'failed'


def test_success_closes_socket(monkeypatch):
    fake = FakeSocket()
    monkeypatch.setattr(zpl_module.socket, 'create_connection', lambda address, timeout=None: fake)

    ZPLHandler().send('^XA^XZ', '192.168.1.237')

    assert fake.data == b'^XA^XZ'
    assert fake.closed is True


def test_unreachable_printer_fails_within_timeout():
    start = time.monotonic()

    with pytest.raises(DeliveryFailed):
        # TEST-NET-1, never routed
        ZPLHandler(port=9100, timeout=0.5).send('^XA^XZ', '192.0.2.1')

    assert time.monotonic() - start < 0.5 + 1.5


def test_test_connection():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(('127.0.0.1', 0))
        server.listen(1)
        port = server.getsockname()[1]

        assert ZPLHandler(port=port).test_connection('127.0.0.1', timeout=2) is True

    assert ZPLHandler(port=_free_port()).test_connection('127.0.0.1', timeout=2) is False
