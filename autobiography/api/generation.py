"""
Generation and Export REST API

Generation returns advisory text; the caller writes it into its aggregate and
saves explicitly. Exports are rendered from the submitted aggregate and
returned as file downloads.
"""

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from autobiography.agents.storyteller import StorytellerAgent
from autobiography.api.dependencies import get_storyteller
from autobiography.export import EXPORT_FILENAMES, render_docx, render_pdf
from autobiography.schemas import AutobiographyData


router = APIRouter(prefix="/api", tags=["generation"])

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


# --- Pydantic Schemas ---

class GenerateStoryRequest(BaseModel):
    data: AutobiographyData


class GenerateStoryResponse(BaseModel):
    story: str


# --- Endpoints ---

@router.post("/generate-story", response_model=GenerateStoryResponse)
async def generate_story(
    body: GenerateStoryRequest,
    storyteller: StorytellerAgent = Depends(get_storyteller)
):
    """One generation request per call; failures come back as 502 with nothing written."""
    story = await storyteller.generate(body.data)
    return GenerateStoryResponse(story=story)


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/export/pdf")
async def export_pdf(body: AutobiographyData):
    return _attachment(render_pdf(body), PDF_MEDIA_TYPE, EXPORT_FILENAMES["pdf"])


@router.post("/export/docx")
async def export_docx(body: AutobiographyData):
    return _attachment(render_docx(body), DOCX_MEDIA_TYPE, EXPORT_FILENAMES["docx"])
