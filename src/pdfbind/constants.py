"""
Library-wide constants for pdfbind.

Native enum values, index limits, environment variable names and
defaults are centralized here.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("pdfbind")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"

__all__ = [
    "BYTES_PER_MB",
    "DEFAULT_CONFIG_DIR",
    "DEFAULT_STRICT_LIFETIMES",
    "DEFAULT_WARN_SIZE_MB",
    "ENV_CONFIG",
    "ENV_STRICT_LIFETIMES",
    "ENV_WARN_SIZE_MB",
    "FPDF_ANNOT_LINK",
    "MAX_COLLECTION_INDEX",
    "PDFACTION_GOTO",
    "PDFACTION_URI",
    "PDF_MAGIC",
    "__version__",
]

# ── Collection indices ────────────────────────────────────────────────

# Every native collection is addressed with an unsigned 16-bit index
MAX_COLLECTION_INDEX = 0xFFFF


# ── Native enum values (fpdf_annot.h, fpdf_doc.h) ─────────────────────

# FPDF_ANNOT_LINK annotation subtype
FPDF_ANNOT_LINK = 2

# FPDFAction_GetType() results we act on
PDFACTION_GOTO = 1
PDFACTION_URI = 3


# ── Size units and limits ─────────────────────────────────────────────

BYTES_PER_MB = 1024 * 1024

# load_pdf_from_file() logs a warning above this size
DEFAULT_WARN_SIZE_MB = 200


# ── Lifetime checks ───────────────────────────────────────────────────

# Wrappers verify their scope is still open before each native call
DEFAULT_STRICT_LIFETIMES = True


# ── Environment variable names ────────────────────────────────────────

ENV_CONFIG = "PDFBIND_CONFIG"
ENV_STRICT_LIFETIMES = "PDFBIND_STRICT_LIFETIMES"
ENV_WARN_SIZE_MB = "PDFBIND_WARN_SIZE_MB"

DEFAULT_CONFIG_DIR = ".pdfbind"


# PDF file magic bytes
PDF_MAGIC = b"%PDF-"
