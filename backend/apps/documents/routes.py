"""Document routes - registers all document endpoints."""

from fastapi import APIRouter

from apps.documents.handlers import analyze_document, extract_document, upload_document

router = APIRouter(tags=["Documents"])

# POST /upload - Upload document
router.post("/upload")(upload_document)

# POST /analyze - Extract + structured AI analysis
router.post("/analyze")(analyze_document)

# POST /extract - Extraction preview
router.post("/extract")(extract_document)
