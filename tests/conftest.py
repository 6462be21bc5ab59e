"""Shared test fixtures for the pdfbind test suite.

``FakePdfium`` is an in-memory stand-in for the native bindings. It keeps
a log of every call in ``calls`` and can be told to fail individual
calls, so wrapper behaviour can be checked without loading PDFium.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field

import pytest

from pdfbind.config import Settings
from pdfbind.constants import FPDF_ANNOT_LINK, PDFACTION_GOTO, PDFACTION_URI
from pdfbind.errors import InternalErrorCode, UnsupportedOperationError
from pdfbind.library import Pdfium
from pdfbind.quad_points import QuadPoints

SAMPLE_PDF = b"%PDF-1.7\n% sample\n"
SAVED_PDF = b"%PDF-1.7\n% saved by FakePdfium\n"

# ── In-memory native model ───────────────────────────────────────────


@dataclass(eq=False)
class FakeDest:
    page_index: int
    location: tuple[float | None, float | None, float | None] | None = None


@dataclass(eq=False)
class FakeAction:
    action_type: int
    uri: str | None = None
    dest: FakeDest | None = None


@dataclass(eq=False)
class FakePageObject:
    object_type: int = 2
    bounds: tuple[float, float, float, float] | None = (0.0, 0.0, 10.0, 10.0)


@dataclass(eq=False)
class FakeAnnotation:
    subtype: int = FPDF_ANNOT_LINK
    uri: str | None = None
    dest: FakeDest | None = None
    goto: FakeDest | None = None
    quads: list[QuadPoints] = field(default_factory=list)
    objects: list[FakePageObject] = field(default_factory=list)
    page: FakePage | None = None


@dataclass(eq=False)
class FakeLink:
    annotation: FakeAnnotation


@dataclass(eq=False)
class FakePage:
    width: float = 612.0
    height: float = 792.0
    annotations: list[FakeAnnotation] = field(default_factory=list)
    document: FakeDocument | None = None


@dataclass(eq=False)
class FakeSignature:
    contents: bytes = b""
    byte_range: list[int] = field(default_factory=list)
    sub_filter: str | None = "adbe.pkcs7.detached"
    reason: str | None = None
    time: str | None = None
    doc_mdp: int = 0


@dataclass(eq=False)
class FakeDocument:
    pages: list[FakePage] = field(default_factory=list)
    signatures: list[FakeSignature] = field(default_factory=list)
    password: str | None = None
    closed: bool = False

    def add_page(self, page: FakePage | None = None) -> FakePage:
        page = page if page is not None else FakePage()
        page.document = self
        for annotation in page.annotations:
            annotation.page = page
        self.pages.append(page)
        return page


class FakePdfium:
    """In-memory ``PdfiumBindings`` implementation with failure injection.

    Attributes:
        calls: Every call as ``(method_name, *args)``, in order.
        last_error: Value returned by ``get_last_error()``.
        fail_at: Method name -> indices at which an indexed call fails.
        failing: Method names that always return their failure sentinel.
        counts: Method name -> forced return value for count calls.
        supports_set_dest: When False, ``annot_set_dest`` raises
            ``UnsupportedOperationError`` like a stock PDFium build.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[object, ...]] = []
        self.last_error: InternalErrorCode | None = None
        self.fail_at: dict[str, set[int]] = {}
        self.failing: set[str] = set()
        self.counts: dict[str, int] = {}
        self.supports_set_dest = True
        self.loadable: dict[bytes, FakeDocument] = {}

    def register(self, data: bytes, document: FakeDocument) -> FakeDocument:
        self.loadable[data] = document
        return document

    def calls_to(self, name: str) -> list[tuple[object, ...]]:
        return [call for call in self.calls if call[0] == name]

    def _log(self, name: str, *args: object) -> None:
        self.calls.append((name, *args))

    def _fails(self, name: str, index: int | None = None) -> bool:
        if name in self.failing:
            return True
        return index is not None and index in self.fail_at.get(name, set())

    def _count(self, name: str, actual: int) -> int:
        return self.counts.get(name, actual)

    # ── Errors ───────────────────────────────────────────────────────

    def get_last_error(self):
        self._log("get_last_error")
        return self.last_error

    # ── Documents ────────────────────────────────────────────────────

    def load_mem_document(self, data, password):
        self._log("load_mem_document", data, password)
        document = self.loadable.get(data)
        if document is None or self._fails("load_mem_document"):
            self.last_error = InternalErrorCode.FORMAT
            return None
        if document.password is not None and password != document.password:
            self.last_error = InternalErrorCode.PASSWORD
            return None
        return document

    def create_new_document(self):
        self._log("create_new_document")
        if self._fails("create_new_document"):
            return None
        return FakeDocument()

    def close_document(self, document):
        self._log("close_document", document)
        document.closed = True

    def save_as_copy(self, document, flags):
        self._log("save_as_copy", document, flags)
        if self._fails("save_as_copy"):
            return None
        return SAVED_PDF

    def get_page_count(self, document):
        self._log("get_page_count", document)
        return self._count("get_page_count", len(document.pages))

    # ── Pages ────────────────────────────────────────────────────────

    def load_page(self, document, index):
        self._log("load_page", document, index)
        if self._fails("load_page", index) or index >= len(document.pages):
            return None
        return document.pages[index]

    def close_page(self, page):
        self._log("close_page", page)

    def page_new(self, document, index, width, height):
        self._log("page_new", document, index, width, height)
        if self._fails("page_new"):
            return None
        page = FakePage(width=width, height=height, document=document)
        document.pages.insert(index, page)
        return page

    def get_page_width(self, page):
        self._log("get_page_width", page)
        return page.width

    def get_page_height(self, page):
        self._log("get_page_height", page)
        return page.height

    # ── Signatures ───────────────────────────────────────────────────

    def get_signature_count(self, document):
        self._log("get_signature_count", document)
        return self._count("get_signature_count", len(document.signatures))

    def get_signature_object(self, document, index):
        self._log("get_signature_object", document, index)
        if self._fails("get_signature_object", index) or index >= len(document.signatures):
            return None
        return document.signatures[index]

    def signature_get_contents(self, signature):
        self._log("signature_get_contents", signature)
        return signature.contents

    def signature_get_byte_range(self, signature):
        self._log("signature_get_byte_range", signature)
        return list(signature.byte_range)

    def signature_get_sub_filter(self, signature):
        self._log("signature_get_sub_filter", signature)
        return signature.sub_filter

    def signature_get_reason(self, signature):
        self._log("signature_get_reason", signature)
        return signature.reason

    def signature_get_time(self, signature):
        self._log("signature_get_time", signature)
        return signature.time

    def signature_get_doc_mdp_permission(self, signature):
        self._log("signature_get_doc_mdp_permission", signature)
        return signature.doc_mdp

    # ── Annotations ──────────────────────────────────────────────────

    def page_get_annot_count(self, page):
        self._log("page_get_annot_count", page)
        return self._count("page_get_annot_count", len(page.annotations))

    def page_get_annot(self, page, index):
        self._log("page_get_annot", page, index)
        if self._fails("page_get_annot", index) or index >= len(page.annotations):
            return None
        return page.annotations[index]

    def page_create_annot(self, page, subtype):
        self._log("page_create_annot", page, subtype)
        if self._fails("page_create_annot"):
            return None
        annotation = FakeAnnotation(subtype=subtype, page=page)
        page.annotations.append(annotation)
        return annotation

    def page_remove_annot(self, page, index):
        self._log("page_remove_annot", page, index)
        if self._fails("page_remove_annot", index):
            return False
        del page.annotations[index]
        return True

    def page_close_annot(self, annotation):
        self._log("page_close_annot", annotation)

    def annot_get_subtype(self, annotation):
        self._log("annot_get_subtype", annotation)
        return annotation.subtype

    def annot_get_link(self, annotation):
        self._log("annot_get_link", annotation)
        if self._fails("annot_get_link") or annotation.subtype != FPDF_ANNOT_LINK:
            return None
        return FakeLink(annotation)

    def annot_set_uri(self, annotation, uri):
        self._log("annot_set_uri", annotation, uri)
        if self._fails("annot_set_uri") or annotation.subtype != FPDF_ANNOT_LINK:
            return False
        annotation.uri = uri
        annotation.dest = None
        annotation.goto = None
        return True

    def annot_set_dest(self, annotation, page, x, y, z):
        self._log("annot_set_dest", annotation, page, x, y, z)
        if not self.supports_set_dest:
            raise UnsupportedOperationError("FPDFAnnot_SetDest is not available")
        if self._fails("annot_set_dest"):
            return False
        # Destinations must stay inside the annotation's own document
        if annotation.page is None or annotation.page.document is not page.document:
            return False
        page_index = page.document.pages.index(page)
        annotation.dest = FakeDest(page_index, (x, y, z))
        annotation.uri = None
        annotation.goto = None
        return True

    # ── Attachment points ────────────────────────────────────────────

    def annot_count_attachment_points(self, annotation):
        self._log("annot_count_attachment_points", annotation)
        return self._count("annot_count_attachment_points", len(annotation.quads))

    def annot_get_attachment_points(self, annotation, index):
        self._log("annot_get_attachment_points", annotation, index)
        if self._fails("annot_get_attachment_points", index) or index >= len(annotation.quads):
            return None
        return annotation.quads[index]

    def annot_set_attachment_points(self, annotation, index, quad):
        self._log("annot_set_attachment_points", annotation, index, quad)
        if self._fails("annot_set_attachment_points", index) or index >= len(annotation.quads):
            return False
        annotation.quads[index] = quad
        return True

    def annot_append_attachment_points(self, annotation, quad):
        self._log("annot_append_attachment_points", annotation, quad)
        if self._fails("annot_append_attachment_points"):
            return False
        annotation.quads.append(quad)
        return True

    # ── Annotation objects ───────────────────────────────────────────

    def annot_get_object_count(self, annotation):
        self._log("annot_get_object_count", annotation)
        return self._count("annot_get_object_count", len(annotation.objects))

    def annot_get_object(self, annotation, index):
        self._log("annot_get_object", annotation, index)
        if self._fails("annot_get_object", index) or index >= len(annotation.objects):
            return None
        return annotation.objects[index]

    def annot_remove_object(self, annotation, index):
        self._log("annot_remove_object", annotation, index)
        if self._fails("annot_remove_object", index):
            return False
        del annotation.objects[index]
        return True

    def page_object_get_type(self, page_object):
        self._log("page_object_get_type", page_object)
        return page_object.object_type

    def page_object_get_bounds(self, page_object):
        self._log("page_object_get_bounds", page_object)
        return page_object.bounds

    # ── Links, actions, destinations ─────────────────────────────────

    def link_get_dest(self, document, link):
        self._log("link_get_dest", document, link)
        return link.annotation.dest

    def link_get_action(self, link):
        self._log("link_get_action", link)
        annotation = link.annotation
        if annotation.uri is not None:
            return FakeAction(PDFACTION_URI, uri=annotation.uri)
        if annotation.goto is not None:
            return FakeAction(PDFACTION_GOTO, dest=annotation.goto)
        return None

    def action_get_type(self, action):
        self._log("action_get_type", action)
        return action.action_type

    def action_get_uri_path(self, document, action):
        self._log("action_get_uri_path", document, action)
        return action.uri

    def action_get_dest(self, document, action):
        self._log("action_get_dest", document, action)
        return action.dest

    def dest_get_page_index(self, document, dest):
        self._log("dest_get_page_index", document, dest)
        return dest.page_index

    def dest_get_location_in_page(self, dest):
        self._log("dest_get_location_in_page", dest)
        return dest.location


# ── Fixtures ─────────────────────────────────────────────────────────


def make_sample_document() -> FakeDocument:
    """Two pages; page 0 holds a URI link, a text note and a GoTo link."""
    uri_link = FakeAnnotation(
        uri="https://example.com",
        quads=[QuadPoints.from_rect(72, 700, 200, 720)],
    )
    note = FakeAnnotation(subtype=1, objects=[FakePageObject(1), FakePageObject(3)])
    dest_link = FakeAnnotation(dest=FakeDest(1, (10.0, 20.0, None)))
    document = FakeDocument(
        signatures=[
            FakeSignature(reason="Approved", time="D:20240131120000+01'00'", doc_mdp=2),
            FakeSignature(sub_filter="ETSI.CAdES.detached"),
        ]
    )
    document.add_page(FakePage(annotations=[uri_link, note, dest_link]))
    document.add_page(FakePage(width=842.0, height=595.0))
    return document


@pytest.fixture
def fake_pdfium():
    """A fresh in-memory bindings double."""
    return FakePdfium()


@pytest.fixture
def sample(fake_pdfium):
    """The FakeDocument behind ``document``, for inspecting native state."""
    return fake_pdfium.register(SAMPLE_PDF, make_sample_document())


@pytest.fixture
def pdfium(fake_pdfium):
    """A ``Pdfium`` entry point wired to the fake bindings with default settings."""
    return Pdfium(bindings=fake_pdfium, settings=Settings())


@pytest.fixture
def document(pdfium, sample):
    """The sample document, opened through the wrappers and closed afterwards."""
    doc = pdfium.load_pdf_from_bytes(SAMPLE_PDF)
    yield doc
    doc.close()


# ── Real PDFs built with pikepdf ─────────────────────────────────────


@pytest.fixture
def linked_pdf_bytes():
    """Two-page PDF whose first page carries a URI link and a /Dest link."""
    pikepdf = pytest.importorskip("pikepdf")

    pdf = pikepdf.Pdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    pdf.add_blank_page(page_size=(612, 792))
    first, second = pdf.pages[0], pdf.pages[1]

    uri_link = pdf.make_indirect(
        pikepdf.Dictionary(
            Type=pikepdf.Name.Annot,
            Subtype=pikepdf.Name.Link,
            Rect=[72, 700, 200, 720],
            QuadPoints=[72, 720, 200, 720, 72, 700, 200, 700],
            A=pikepdf.Dictionary(S=pikepdf.Name.URI, URI=pikepdf.String("https://example.com")),
        )
    )
    dest_link = pdf.make_indirect(
        pikepdf.Dictionary(
            Type=pikepdf.Name.Annot,
            Subtype=pikepdf.Name.Link,
            Rect=[72, 600, 200, 620],
            Dest=pikepdf.Array([second.obj, pikepdf.Name.XYZ, 10, 20, 0]),
        )
    )
    first.obj[pikepdf.Name.Annots] = pikepdf.Array([uri_link, dest_link])

    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()


@pytest.fixture
def signed_pdf_bytes():
    """One-page PDF with a single signature field holding a placeholder CMS blob."""
    pikepdf = pytest.importorskip("pikepdf")

    pdf = pikepdf.Pdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    page = pdf.pages[0]

    signature = pdf.make_indirect(
        pikepdf.Dictionary(
            Type=pikepdf.Name.Sig,
            Filter=pikepdf.Name("/Adobe.PPKLite"),
            SubFilter=pikepdf.Name("/adbe.pkcs7.detached"),
            Contents=pikepdf.String(b"\x30\x03\x02\x01\x01" + b"\x00" * 11),
            ByteRange=[0, 100, 200, 300],
            Reason=pikepdf.String("Approved"),
            M=pikepdf.String("D:20240131120000Z"),
        )
    )
    field_widget = pdf.make_indirect(
        pikepdf.Dictionary(
            Type=pikepdf.Name.Annot,
            Subtype=pikepdf.Name.Widget,
            FT=pikepdf.Name.Sig,
            T=pikepdf.String("Signature1"),
            Rect=[0, 0, 0, 0],
            F=132,
            V=signature,
            P=page.obj,
        )
    )
    page.obj[pikepdf.Name.Annots] = pikepdf.Array([field_widget])
    pdf.Root[pikepdf.Name.AcroForm] = pikepdf.Dictionary(
        Fields=pikepdf.Array([field_widget]), SigFlags=3
    )

    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()
