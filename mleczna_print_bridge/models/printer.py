"""
Printer Model
=============

Known network printers and the name -> IP directory used to route jobs.
"""

import ipaddress
from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Optional, Dict, Any, Iterator, Mapping

from ..config import PRINTER_PORT
from ..errors import MissingTarget


@dataclass(frozen=True)
class Printer:
    """A named network label printer."""

    name: str
    host: str
    port: int = PRINTER_PORT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class PrinterDirectory:
    """Read-only printer name -> IP table, fixed at process start."""

    def __init__(self, table: Mapping[str, str], port: int = PRINTER_PORT):
        for name, host in table.items():
            # IP literals only; delivery does no DNS lookup
            try:
                ipaddress.ip_address(host)
            except ValueError:
                raise ValueError(f'Printer {name!r} has no valid IP address: {host!r}')
        self._table = MappingProxyType(dict(table))
        self.port = port

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, name) -> bool:
        return name in self._table

    def __iter__(self) -> Iterator[Printer]:
        for name, host in self._table.items():
            yield Printer(name=name, host=host, port=self.port)

    def get(self, name: Optional[str]) -> Optional[str]:
        """Return the IP configured for ``name``, or None."""
        if not name:
            return None
        return self._table.get(name)

    def resolve(self, printer_name: Optional[str] = None, ip: Optional[str] = None) -> str:
        """
        Resolve the target IP for a job.

        An explicit IP always wins; otherwise the printer name is looked up.

        Raises:
            MissingTarget: if neither yields an address
        """
        if ip:
            return ip

        target = self.get(printer_name)
        if not target:
            raise MissingTarget('Nieznana drukarka lub brak adresu IP.')
        return target
