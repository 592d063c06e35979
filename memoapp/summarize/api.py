# memoapp/summarize/api.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from memoapp.shared.config import Settings, get_settings
from memoapp.shared.http import ApiError
from .service import GeminiSummarizer, SummarizerNotConfigured, SummarizerFailed

router = APIRouter(prefix="/api", tags=["Summarize"])

class SummarizeIn(BaseModel):
    content: str | None = None

class SummarizeOut(BaseModel):
    summary: str

def get_summarizer(cfg: Settings = Depends(get_settings)) -> GeminiSummarizer:
    return GeminiSummarizer(cfg.GEMINI_API_KEY, cfg.GEMINI_MODEL)

@router.post("/summarize", response_model=SummarizeOut)
def api_summarize(inb: SummarizeIn | None = None, summarizer: GeminiSummarizer = Depends(get_summarizer)):
    content = inb.content if inb else None
    if not content:
        raise ApiError("Content is required", status=400)
    try:
        return {"summary": summarizer.summarize(content)}
    except SummarizerNotConfigured as e:
        raise ApiError(str(e), status=500)
    except SummarizerFailed as e:
        raise ApiError(str(e), status=500)
