"""Tests for pdfbind.annotation_objects -- page objects inside annotations."""

from __future__ import annotations

import pytest

from pdfbind.annotation_objects import PageObject, PageObjectType
from pdfbind.errors import IndexOutOfBoundsError, LibraryInternalError


@pytest.fixture
def page(document):
    return document.pages.get(0)


@pytest.fixture
def note(page):
    return page.annotations.get(1)


def test_handles_exposed(note, page, document):
    assert note.objects.page_handle is page.handle
    assert note.objects.document_handle is document.handle


def test_objects_listed_in_order(note):
    objects = list(note.objects)
    assert len(objects) == 2
    assert all(isinstance(obj, PageObject) for obj in objects)
    assert [obj.object_type for obj in objects] == [PageObjectType.TEXT, PageObjectType.IMAGE]


def test_bounds(note):
    assert note.objects.get(0).bounds() == (0.0, 0.0, 10.0, 10.0)


def test_bounds_failure(note, sample):
    sample.pages[0].annotations[1].objects[0].bounds = None
    with pytest.raises(LibraryInternalError, match="get page object bounds"):
        note.objects.get(0).bounds()


def test_unrecognized_object_type(note, sample):
    sample.pages[0].annotations[1].objects[0].object_type = 42
    assert note.objects.get(0).object_type is PageObjectType.UNKNOWN


def test_remove(note, sample):
    note.objects.remove(0)
    assert len(note.objects) == 1
    assert len(sample.pages[0].annotations[1].objects) == 1


def test_remove_out_of_bounds(note, fake_pdfium):
    with pytest.raises(IndexOutOfBoundsError):
        note.objects.remove(5)
    assert fake_pdfium.calls_to("annot_remove_object") == []


def test_remove_failure(note, fake_pdfium):
    fake_pdfium.fail_at["annot_remove_object"] = {0}
    with pytest.raises(LibraryInternalError):
        note.objects.remove(0)


def test_link_without_objects(page):
    link = page.annotations.get(0)
    assert link.objects.is_empty()
    with pytest.raises(IndexOutOfBoundsError):
        link.objects.get(0)
