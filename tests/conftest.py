import pytest

from mleczna_print_bridge.app import create_app
from mleczna_print_bridge.errors import DeliveryFailed
from mleczna_print_bridge.handlers import BaseHandler
from mleczna_print_bridge.models import PrinterDirectory

PRINTERS = {
    'Biuro': '192.168.1.236',
    'Magazyn': '192.168.1.237',
}


class FakeHandler(BaseHandler):
    """Records deliveries instead of opening sockets."""

    def __init__(self, error=None, online=()):
        super().__init__(port=9100, timeout=5)
        self.error = error
        self.online = set(online)
        self.sent = []

    def send(self, payload, ip, job=None):
        if job is not None:
            job.connect(ip)
        if self.error:
            if job is not None:
                job.fail(self.error)
            raise DeliveryFailed(self.error)
        self.sent.append((payload, ip))
        if job is not None:
            job.send()
            job.complete(len(payload.encode('utf-8')))
        return {'success': True, 'host': ip, 'port': self.port}

    def test_connection(self, ip, timeout=None):
        return ip in self.online


@pytest.fixture
def directory():
    return PrinterDirectory(PRINTERS)


@pytest.fixture
def handler():
    return FakeHandler()


@pytest.fixture
def app(directory, handler):
    app = create_app(directory=directory, handler=handler)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
