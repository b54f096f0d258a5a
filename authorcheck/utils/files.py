import io

from fastapi import UploadFile
from docx import Document
from pypdf import PdfReader

from authorcheck.core.errors import UnsupportedUpload, UploadTooLarge

TEXT_CONTENT_TYPES = {
    "application/json",
    "application/xml",
    "application/rtf",
}
PDF_CONTENT_TYPE = "application/pdf"
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _kind(content_type: str) -> str | None:
    if content_type.startswith("text/") or content_type in TEXT_CONTENT_TYPES:
        return "text"
    if content_type == PDF_CONTENT_TYPE:
        return "pdf"
    if content_type == DOCX_CONTENT_TYPE:
        return "docx"
    return None


def extract_text(raw: bytes, content_type: str) -> str:
    kind = _kind(content_type.split(";")[0].strip().lower())
    if kind == "text":
        return raw.decode("utf-8", errors="ignore")
    if kind == "pdf":
        reader = PdfReader(io.BytesIO(raw))
        return "\n".join(page.extract_text() or "" for page in reader.pages)
    if kind == "docx":
        doc = Document(io.BytesIO(raw))
        return "\n\n".join(paragraph.text for paragraph in doc.paragraphs if paragraph.text.strip())
    raise UnsupportedUpload()


async def extract_text_from_upload(file: UploadFile, max_upload_bytes: int) -> str:
    raw = await file.read(max_upload_bytes + 1)
    if len(raw) > max_upload_bytes:
        raise UploadTooLarge()
    return extract_text(raw, file.content_type or "")
