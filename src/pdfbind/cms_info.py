# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""CMS metadata extraction for embedded signatures -- digest info and signer identity."""

from __future__ import annotations

import hashlib
import logging

from asn1crypto import cms as asn1_cms

_logger = logging.getLogger(__name__)

# ASN.1 SEQUENCE tag -- first byte of any valid CMS/PKCS#7 blob
ASN1_SEQUENCE_TAG = 0x30

# OID for messageDigest attribute in CMS SignerInfo
_OID_MESSAGE_DIGEST = "1.2.840.113549.1.9.4"

# OIDs for common subject fields
_OID_CN = "2.5.4.3"
_OID_EMAIL = "1.2.840.113549.1.9.1"
_OID_ORG = "2.5.4.10"

# Some signers put the signature algorithm in the digestAlgorithm field.
_DIGEST_ALGO_MAP: dict[str, str] = {
    "sha1_rsa": "sha1",
    "sha256_rsa": "sha256",
    "sha384_rsa": "sha384",
    "sha512_rsa": "sha512",
    "1.2.840.113549.1.1.5": "sha1",
    "1.2.840.113549.1.1.11": "sha256",
    "1.2.840.113549.1.1.12": "sha384",
    "1.2.840.113549.1.1.13": "sha512",
}


def strip_contents_padding(contents: bytes) -> bytes:
    """Trim the zero padding PDF writers append after the DER blob.

    Reads the outer ASN.1 length so blobs that legitimately end in 0x00
    are not truncated. Returns ``contents`` unchanged if the header
    cannot be parsed.
    """
    if len(contents) < 2 or contents[0] != ASN1_SEQUENCE_TAG:
        return contents
    length_byte = contents[1]
    if length_byte < 0x80:
        total = 2 + length_byte
    else:
        num_len_bytes = length_byte & 0x7F
        if num_len_bytes == 0 or num_len_bytes > 4 or len(contents) < 2 + num_len_bytes:
            return contents
        total = 2 + num_len_bytes + int.from_bytes(contents[2 : 2 + num_len_bytes], "big")
    if total > len(contents):
        return contents
    return contents[:total]


def resolve_hash_algo(algo_raw: str) -> str | None:
    """Resolve a CMS digest algorithm identifier to a hashlib-compatible name."""
    if algo_raw in hashlib.algorithms_available:
        return algo_raw
    return _DIGEST_ALGO_MAP.get(algo_raw)


def extract_digest_info(cms_der: bytes) -> tuple[str, bytes] | None:
    """Extract digest algorithm and messageDigest from the first CMS SignerInfo.

    Returns:
        (hashlib_algo_name, digest_bytes) if extraction succeeds, None otherwise.
    """
    try:
        content_info = asn1_cms.ContentInfo.load(cms_der)
        signer_infos = content_info["content"]["signer_infos"]
        if not signer_infos:
            return None

        signer_info = signer_infos[0]
        algo_id = signer_info["digest_algorithm"]["algorithm"]
        algo_name = resolve_hash_algo(algo_id.native)
        if algo_name is None:
            algo_name = resolve_hash_algo(algo_id.dotted)
        if algo_name is None:
            _logger.debug("Unrecognized digest algorithm: %s (%s)", algo_id.native, algo_id.dotted)
            return None

        signed_attrs = signer_info["signed_attrs"]
        if signed_attrs is None:
            return None

        for attr in signed_attrs:
            if attr["type"].dotted == _OID_MESSAGE_DIGEST:
                values = attr["values"]
                if values:
                    return (algo_name, values[0].native)
        return None  # noqa: TRY300
    except (ValueError, TypeError, KeyError, AttributeError, IndexError):
        _logger.debug("Could not extract digest info from CMS", exc_info=True)
        return None


def extract_signer_info(cms_der: bytes) -> dict[str, str | None] | None:
    """Extract the signer certificate subject from a CMS blob.

    Returns:
        dict with name (CN), email, organization, dn -- or None on failure.
    """
    try:
        content_info = asn1_cms.ContentInfo.load(cms_der)
        certs = content_info["content"]["certificates"]
        if not certs:
            return None
        subject = certs[0].chosen.subject

        fields: dict[str, str | None] = {"name": None, "email": None, "organization": None}
        oid_map = {_OID_CN: "name", _OID_EMAIL: "email", _OID_ORG: "organization"}
        for rdn in subject.chosen:
            for attr in rdn:
                oid = attr["type"].dotted
                if oid in oid_map:
                    fields[oid_map[oid]] = attr["value"].native
        fields["dn"] = subject.human_friendly
        return fields  # noqa: TRY300
    except (ValueError, TypeError, KeyError, AttributeError, IndexError, OSError):
        _logger.debug("Could not extract signer info from CMS", exc_info=True)
        return None
