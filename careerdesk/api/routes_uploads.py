import logging
from fastapi import APIRouter, File, HTTPException, UploadFile

from ..pdf_parser import PdfExtractionError, extract_text_from_pdf, validate_pdf_upload
from ..schemas import ExtractTextResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/extract-text", response_model=ExtractTextResponse)
async def extract_text(file: UploadFile = File(...)):
    """Extract plain text from an uploaded PDF (resume or job description)"""
    if not file.filename:
        raise HTTPException(400, "No file selected")

    contents = await file.read()
    try:
        validate_pdf_upload(file.filename, file.content_type, len(contents))
        text = extract_text_from_pdf(contents)
    except PdfExtractionError as e:
        logger.warning(f"Rejected upload {file.filename}: {e}")
        raise HTTPException(400, str(e))

    return ExtractTextResponse(filename=file.filename, text=text, characters=len(text))
