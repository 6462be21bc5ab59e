"""
Digital signatures embedded in a document.

``Signatures`` is a live view over the document's signature fields;
``Signature`` wraps one native signature handle and reads its metadata
on demand. Cryptographic validation is out of scope: ``signer_info()``
and ``digest_info()`` only decode the CMS blob.
"""

from __future__ import annotations

import datetime
import enum
import logging
import re
from typing import TYPE_CHECKING

from .classifier import check_handle
from .cms_info import extract_digest_info, extract_signer_info, strip_contents_padding
from .sequence import NativeSequence

if TYPE_CHECKING:
    from .bindings import NativeHandle, PdfiumBindings
    from .document import Document

_logger = logging.getLogger(__name__)

# D:YYYYMMDDHHmmSS with optional Z / +HH'mm' / -HH'mm' suffix
_PDF_DATE_PATTERN = re.compile(
    r"^D:(\d{4})(\d{2})?(\d{2})?(\d{2})?(\d{2})?(\d{2})?(?:(Z)|([+-])(\d{2})'?(\d{2})?'?)?"
)


class DocMDPPermission(enum.IntEnum):
    """Access permissions granted by a certifying (DocMDP) signature."""

    NONE = 0
    NO_CHANGES = 1
    FORM_FILLING = 2
    ANNOTATIONS = 3


def parse_pdf_date(value: str) -> datetime.datetime | None:
    """Parse a PDF date string (``D:20240131120000+01'00'``).

    Returns:
        Aware datetime when a timezone is present, naive otherwise;
        None if the string is not a PDF date.
    """
    match = _PDF_DATE_PATTERN.match(value)
    if match is None:
        return None
    year, month, day, hour, minute, second, zulu, sign, tz_h, tz_m = match.groups()
    try:
        parsed = datetime.datetime(
            int(year),
            int(month or 1),
            int(day or 1),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
        )
    except ValueError:
        _logger.debug("Invalid PDF date: %r", value)
        return None
    if zulu:
        return parsed.replace(tzinfo=datetime.timezone.utc)
    if sign:
        offset = datetime.timedelta(hours=int(tz_h), minutes=int(tz_m or 0))
        if sign == "-":
            offset = -offset
        return parsed.replace(tzinfo=datetime.timezone(offset))
    return parsed


class Signature:
    """A single digital signature in a ``Document``."""

    def __init__(self, handle: NativeHandle, document: Document) -> None:
        self._handle = handle
        self._document = document

    def __repr__(self) -> str:
        return f"<Signature in {self._document!r}>"

    @property
    def handle(self) -> NativeHandle:
        return self._handle

    @property
    def document(self) -> Document:
        return self._document

    @property
    def bindings(self) -> PdfiumBindings:
        return self._document.bindings

    def _live_bindings(self) -> PdfiumBindings:
        self._document.scope.ensure_alive()
        return self._document.bindings

    def contents(self) -> bytes:
        """Raw ``/Contents`` value: usually a DER-encoded CMS blob with zero padding."""
        return self._live_bindings().signature_get_contents(self._handle)

    def byte_range(self) -> list[int]:
        """``/ByteRange`` as a flat list of (offset, length) pairs."""
        return self._live_bindings().signature_get_byte_range(self._handle)

    def sub_filter(self) -> str | None:
        """Encoding of the signature value, e.g. ``adbe.pkcs7.detached``."""
        return self._live_bindings().signature_get_sub_filter(self._handle)

    def reason(self) -> str | None:
        return self._live_bindings().signature_get_reason(self._handle)

    def signing_date(self) -> str | None:
        """Raw ``/M`` value in PDF date format."""
        return self._live_bindings().signature_get_time(self._handle)

    def signing_datetime(self) -> datetime.datetime | None:
        raw = self.signing_date()
        return parse_pdf_date(raw) if raw else None

    def modification_detection_permission(self) -> DocMDPPermission:
        value = self._live_bindings().signature_get_doc_mdp_permission(self._handle)
        try:
            return DocMDPPermission(value)
        except ValueError:
            _logger.debug("Unexpected DocMDP permission value %d", value)
            return DocMDPPermission.NONE

    def signer_info(self) -> dict[str, str | None] | None:
        """Subject of the first certificate in the CMS blob, or None."""
        return extract_signer_info(strip_contents_padding(self.contents()))

    def digest_info(self) -> tuple[str, bytes] | None:
        """(hash algorithm, messageDigest) from the CMS blob, or None."""
        return extract_digest_info(strip_contents_padding(self.contents()))


class Signatures(NativeSequence[Signature]):
    """The collection of ``Signature`` objects inside a ``Document``."""

    _collection_name = "signatures"

    def __init__(self, document: Document) -> None:
        super().__init__(document.bindings, document.scope)
        self._document = document

    @property
    def document(self) -> Document:
        return self._document

    def _count(self) -> int:
        return self._bindings.get_signature_count(self._document.handle)

    def _fetch(self, index: int) -> Signature:
        handle = check_handle(
            self._bindings,
            self._bindings.get_signature_object(self._document.handle, index),
            f"get signature {index}",
        )
        return Signature(handle, self._document)
