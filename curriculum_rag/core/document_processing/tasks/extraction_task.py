"""
Text extraction task.

Converts raw document bytes into plain text: PDFs through pypdf, every
other content type decoded as UTF-8.

Dependencies: pypdf
System role: Second stage of document ingestion pipeline
"""

import asyncio
import io
import logging

from pypdf import PdfReader

from curriculum_rag.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


class TextExtractor:
    """Extract plain text from document bytes."""

    @staticmethod
    def is_pdf(data: bytes, mime_type: str | None, filename: str | None) -> bool:
        if mime_type == PDF_MIME_TYPE:
            return True
        if filename and filename.lower().endswith(".pdf"):
            return True
        return data[:5] == b"%PDF-"

    @staticmethod
    def _extract_pdf(data: bytes) -> str:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
        return "\n\n".join(text.strip() for text in pages if text.strip())

    async def extract(
        self,
        data: bytes,
        mime_type: str | None = None,
        filename: str | None = None,
    ) -> str:
        """
        Extract text from document bytes.

        PDF parsing runs in a worker thread so the event loop stays free.

        Args:
            data: Raw document bytes
            mime_type: Content type, if known
            filename: Original filename, used as a format hint

        Returns:
            str: Extracted text (may be blank; callers decide whether that is an error)

        Raises:
            ExtractionError: When the document cannot be parsed
        """
        if self.is_pdf(data, mime_type, filename):
            try:
                text = await asyncio.to_thread(self._extract_pdf, data)
            except Exception as e:
                raise ExtractionError(
                    f"Failed to parse PDF: {e}",
                    mime_type=PDF_MIME_TYPE,
                    details={"filename": filename},
                ) from e
        else:
            text = data.decode("utf-8-sig", errors="replace")

        logger.info(
            f"{__name__}:extract - Extracted {len(text)} characters",
            extra={"source_filename": filename, "mime_type": mime_type},
        )
        return text
