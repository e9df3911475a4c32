"""
Label Job Model
===============

Represents a single label job for the lifetime of one HTTP request.
"""

import ipaddress
import uuid
from datetime import datetime
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, Union

from ..errors import MalformedPayload

# Job states
IDLE = 'idle'
CONNECTING = 'connecting'
SENDING = 'sending'
CLOSED = 'closed'
FAILED = 'failed'


@dataclass
class LabelJob:
    """Label job request and delivery state."""

    # Request
    payload: Union[str, Dict[str, Any], None] = None
    printer_name: Optional[str] = None
    ip: Optional[str] = None
    job_type: str = ""

    # Identification
    id: str = field(default_factory=lambda: f"JOB-{str(uuid.uuid4())[:8].upper()}")

    # Status
    status: str = IDLE
    target_ip: Optional[str] = None
    bytes_sent: int = 0
    error_message: Optional[str] = None

    # Timestamps
    created_at: datetime = field(default_factory=datetime.now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Source
    source_ip: Optional[str] = None

    @classmethod
    def from_request(cls, data: Dict[str, Any], source_ip: str = None) -> 'LabelJob':
        """Build a job from a ``/print-label`` JSON body."""
        return cls(
            payload=data.get('data'),
            printer_name=data.get('printerName'),
            ip=data.get('ip'),
            job_type=data.get('jobType') or '',
            source_ip=source_ip,
        )

    @classmethod
    def from_legacy_request(cls, data: Dict[str, Any], source_ip: str = None) -> 'LabelJob':
        """Build a job from a legacy ``/drukuj-zpl`` JSON body."""
        return cls(
            payload=data.get('dane'),
            printer_name=data.get('drukarka'),
            ip=data.get('ip'),
            job_type=data.get('typ') or '',
            source_ip=source_ip,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (payload omitted)."""
        data = asdict(self)
        data.pop('payload')
        for key in ['created_at', 'started_at', 'completed_at']:
            if data.get(key):
                data[key] = data[key].isoformat()
        return data

    @property
    def is_finished(self) -> bool:
        return self.status in (CLOSED, FAILED)

    def validate(self):
        """
        Check the routing fields before any lookup or network attempt.

        Raises:
            MalformedPayload: if ip, printer name or job type is not a string,
                or ip is not an IPv4/IPv6 literal
        """
        for name in ('ip', 'printer_name', 'job_type'):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise MalformedPayload(f'Pole {name} musi być tekstem.')

        # IP literals only; delivery does no DNS lookup
        if self.ip:
            try:
                ipaddress.ip_address(self.ip)
            except ValueError:
                raise MalformedPayload(f'Nieprawidłowy adres IP drukarki: {self.ip}')

    def connect(self, target_ip: str):
        """Mark job as connecting to the printer."""
        self.status = CONNECTING
        self.target_ip = target_ip
        self.started_at = datetime.now()

    def send(self):
        """Mark job as writing the payload."""
        self.status = SENDING

    def complete(self, bytes_sent: int):
        """Mark job as delivered."""
        self.status = CLOSED
        self.bytes_sent = bytes_sent
        self.completed_at = datetime.now()

    def fail(self, error: str):
        """Mark job as failed."""
        self.status = FAILED
        self.completed_at = datetime.now()
        self.error_message = error
