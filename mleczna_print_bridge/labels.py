"""
Pallet Label Formatter
======================

Builds the fixed ZPL layout printed on raw material and finished good
pallets. Pre-formatted ZPL strings are passed through untouched.

Layout (ZPL II, UTF-8 via ^CI28):
- frame 740x540 dots
- header: SUROWIEC (raw material) or WYRÓB GOTOWY (finished good)
- product name, max 30 characters
- Code128 barcode of the pallet identifier
- batch, production date, expiry date
- optional lab notes block (^FB, 3 lines)
- net weight in whole kilograms
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Mapping, Union

from .errors import MalformedPayload

NAME_MAX_LENGTH = 30

# Accepted keys per field, first truthy value wins
ID_FIELDS = ('nrPalety', 'displayId', 'id')
NAME_FIELDS = ('nazwa', 'productName')
BATCH_FIELDS = ('batchNumber', 'batchId')
PRODUCTION_DATE_FIELDS = ('dataProdukcji', 'productionDate')
EXPIRY_DATE_FIELDS = ('dataPrzydatnosci', 'expiryDate')
WEIGHT_FIELDS = ('currentWeight', 'quantityKg', 'producedWeight')
NOTES_FIELDS = ('labAnalysisNotes', 'labNotes')

_NEWLINES = re.compile(r'\r?\n|\r')


def _pick(record: Mapping, keys: tuple, default: Any) -> Any:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return default


def format_date(value: Any) -> str:
    """Cut an ISO timestamp down to its date part; other values pass through."""
    text = str(value)
    if 'T' in text:
        return text.split('T')[0]
    return text


def format_weight(value: Any) -> str:
    """Round a weight half-up to whole kilograms (never negative)."""
    if not value:
        return '0'
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise MalformedPayload(f'Nieprawidłowa waga: {value!r}')
    if not math.isfinite(number):
        raise MalformedPayload(f'Nieprawidłowa waga: {value!r}')

    # Enough digits for any finite float (max ~1.8e308)
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = Decimal(str(number)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return str(max(int(rounded), 0))


def format_notes(value: Any) -> str:
    """Flatten multi-line lab notes onto a single line."""
    return _NEWLINES.sub(' ', str(value))


def label_header(job_type: str) -> str:
    if 'raw' in (job_type or ''):
        return 'SUROWIEC'
    return 'WYRÓB GOTOWY'


def pallet_label_zpl(record: Mapping, job_type: str = '') -> str:
    """
    Render a pallet record as ZPL.

    Args:
        record: Pallet fields (see *_FIELDS for accepted keys)
        job_type: Job type from the caller; ``raw`` selects the raw material header

    Returns:
        ZPL code string
    """
    pallet_id = _pick(record, ID_FIELDS, 'Brak ID')
    name = str(_pick(record, NAME_FIELDS, 'Brak Nazwy'))[:NAME_MAX_LENGTH]
    batch = _pick(record, BATCH_FIELDS, '---')
    produced = format_date(_pick(record, PRODUCTION_DATE_FIELDS, '---'))
    expires = format_date(_pick(record, EXPIRY_DATE_FIELDS, '---'))
    weight = format_weight(_pick(record, WEIGHT_FIELDS, 0))
    notes = _pick(record, NOTES_FIELDS, '')

    lines = [
        '^XA^CI28',
        '^FO30,30^GB740,540,4^FS',
        f'^FO60,60^A0N,30,30^FD{label_header(job_type)}^FS',
        f'^FO60,100^A0N,45,45^FD{name}^FS',
        f'^FO60,160^BY3^BCN,80,Y,N,N^FD{pallet_id}^FS',
        f'^FO60,280^A0N,25,25^FDPARTIA: {batch}^FS',
        f'^FO60,320^A0N,25,25^FDPRODUKCJA: {produced}^FS',
        f'^FO60,360^A0N,25,25^FDWAZNOSC:   {expires}^FS',
    ]
    # No length cap on notes; ^FB clips to 3 lines on the printer
    if notes:
        lines.append(f'^FO60,400^A0N,20,20^FB680,3,0,L^FDNOTATKI LAB: {format_notes(notes)}^FS')
    lines.append(f'^FO60,480^A0N,55,55^FDWAGA NETTO: {weight} kg^FS')
    lines.append('^XZ')

    return '\n'.join(lines)


def format_label(data: Union[str, Mapping, None], job_type: str = '') -> str:
    """
    Turn job data into printer-ready ZPL.

    Raises:
        MalformedPayload: if data is neither a ZPL string nor a pallet record
    """
    if isinstance(data, str):
        return data

    if not isinstance(data, Mapping):
        raise MalformedPayload('Brak danych etykiety lub nieobsługiwany format.')

    record = data.get('palletData') or data
    if not isinstance(record, Mapping):
        raise MalformedPayload('Pole palletData musi być obiektem.')

    return pallet_label_zpl(record, job_type)
