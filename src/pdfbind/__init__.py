"""
pdfbind -- safe Python wrappers over the PDFium native library.

Documents, pages, annotations, links and signatures are exposed as
wrappers around native handles. Native collections are live,
index-addressable views; native failures surface as a small set of
typed errors.
"""

from __future__ import annotations

import logging

from .annotation_objects import AnnotationObjects, PageObject, PageObjectType
from .annotations import AnnotationType, LinkAnnotation, PageAnnotation, PageAnnotations
from .attachment_points import AttachmentPoints
from .bindings import PdfiumBindings, PdfiumLibraryBindings
from .config import Settings, load_settings
from .constants import MAX_COLLECTION_INDEX, __version__
from .document import Document
from .errors import (
    BindingsError,
    ClosedHandleError,
    ConfigError,
    DocumentLoadError,
    IndexOutOfBoundsError,
    InternalErrorCode,
    LibraryInternalError,
    PdfBindError,
    UnsupportedOperationError,
)
from .library import Pdfium
from .link import Link, LinkTarget, NamedDestination, UriDestination
from .page import Page, Pages
from .quad_points import QuadPoints
from .scope import HandleScope
from .sequence import NativeSequence, NativeSequenceIterator
from .signatures import DocMDPPermission, Signature, Signatures

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "MAX_COLLECTION_INDEX",
    "AnnotationObjects",
    "AnnotationType",
    "AttachmentPoints",
    "BindingsError",
    "ClosedHandleError",
    "ConfigError",
    "DocMDPPermission",
    "Document",
    "DocumentLoadError",
    "HandleScope",
    "IndexOutOfBoundsError",
    "InternalErrorCode",
    "LibraryInternalError",
    "Link",
    "LinkAnnotation",
    "LinkTarget",
    "NamedDestination",
    "NativeSequence",
    "NativeSequenceIterator",
    "Page",
    "PageAnnotation",
    "PageAnnotations",
    "PageObject",
    "PageObjectType",
    "Pages",
    "PdfBindError",
    "Pdfium",
    "PdfiumBindings",
    "PdfiumLibraryBindings",
    "QuadPoints",
    "Settings",
    "Signature",
    "Signatures",
    "UnsupportedOperationError",
    "UriDestination",
    "__version__",
    "load_settings",
]
