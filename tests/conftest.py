"""Shared fixtures for building DOCX templates in memory."""

import io
import zipfile

import pytest

from docgen.core.providers import default_registry

CONTENT_TYPES = b"<?xml version='1.0'?><Types xmlns='http://schemas.openxmlformats.org/package/2006/content-types'><Default Extension='xml' ContentType='application/xml'/><Override PartName='/word/document.xml' ContentType='application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml'/></Types>"
ROOT_RELS = b"<?xml version='1.0'?><Relationships xmlns='http://schemas.openxmlformats.org/package/2006/relationships'><Relationship Id='rId1' Type='http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument' Target='word/document.xml'/></Relationships>"
DOCUMENT_RELS = b"<?xml version='1.0'?><Relationships xmlns='http://schemas.openxmlformats.org/package/2006/relationships'></Relationships>"


def build_document_xml(paragraphs: list[str]) -> str:
    body = "".join(f"<w:p><w:r><w:t>{text}</w:t></w:r></w:p>" for text in paragraphs)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
        f"<w:body>{body}</w:body></w:document>"
    )


@pytest.fixture
def make_docx():
    """Return a builder for minimal .docx packages.

    ``make_docx(["Société : {nomSociete}"])`` returns the package bytes.
    Pass ``include_body=False`` to omit word/document.xml.
    """

    def _make(paragraphs: list[str], include_body: bool = True) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("[Content_Types].xml", CONTENT_TYPES)
            zf.writestr("_rels/.rels", ROOT_RELS)
            if include_body:
                zf.writestr("word/document.xml", build_document_xml(paragraphs))
            zf.writestr("word/_rels/document.xml.rels", DOCUMENT_RELS)
        return buffer.getvalue()

    return _make


@pytest.fixture
def make_word_docx():
    """Return a builder producing real Word documents through python-docx."""
    from docx import Document

    def _make(paragraphs: list[str]) -> bytes:
        doc = Document()
        for text in paragraphs:
            doc.add_paragraph(text)
        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    return _make


@pytest.fixture
def registry():
    """The built-in provider registry."""
    return default_registry()


@pytest.fixture
def read_body():
    """Return a reader for the decoded word/document.xml of a package."""

    def _read(document: bytes) -> str:
        with zipfile.ZipFile(io.BytesIO(document)) as zf:
            return zf.read("word/document.xml").decode("utf-8")

    return _read
