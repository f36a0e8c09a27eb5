"""
PDF Loader Module
Extracts text lines from statement PDFs using PyMuPDF (fitz).
"""

import logging

import fitz  # PyMuPDF

from ..extractors.text_extractor import clean_lines

logger = logging.getLogger(__name__)


def load_pdf_lines(file_content: bytes) -> list[str]:
    """
    Extract cleaned text lines from every page of a PDF, in page order.

    Pages without extractable text contribute no lines. Decoder errors for
    malformed bytes propagate unchanged.

    Args:
        file_content: Raw PDF bytes

    Returns:
        Lines with whitespace runs collapsed and empty lines removed
    """
    try:
        doc = fitz.open(stream=file_content, filetype="pdf")
    except Exception as e:
        logger.error(f"Invalid or corrupted PDF: {e}", exc_info=True)
        raise

    with doc:
        logger.info(f"Loading PDF ({doc.page_count} pages)")

        lines = []
        empty_pages = 0

        for page in doc:
            page_lines = clean_lines(page.get_text())
            if page_lines:
                lines.extend(page_lines)
                logger.debug(f"Page {page.number + 1}: extracted {len(page_lines)} lines")
            else:
                empty_pages += 1
                logger.warning(f"Page {page.number + 1}: empty or no extractable text")

    logger.info(f"Extraction complete: {len(lines)} lines ({empty_pages} empty pages)")
    return lines
