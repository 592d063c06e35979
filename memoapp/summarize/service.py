from __future__ import annotations
import logging

from google import genai

logger = logging.getLogger(__name__)

SUMMARY_INSTRUCTION = "Summarize the following memo concisely in three lines or fewer:"


class SummarizerNotConfigured(RuntimeError):
    pass


class SummarizerFailed(RuntimeError):
    pass


def build_prompt(content: str) -> str:
    return f"{SUMMARY_INSTRUCTION}\n\n{content}"


class GeminiSummarizer:
    """One-shot summaries from a Gemini model.

    The API key is only checked when a summary is requested, so a missing key
    breaks summarization and nothing else.
    """

    def __init__(self, api_key: str | None, model_name: str):
        self.api_key = api_key
        self.model_name = model_name

    def summarize(self, content: str) -> str:
        if not self.api_key:
            raise SummarizerNotConfigured("GEMINI_API_KEY is not configured")

        logger.info("summarize request: model=%s chars=%d", self.model_name, len(content))
        try:
            client = genai.Client(api_key=self.api_key)
            response = client.models.generate_content(model=self.model_name, contents=build_prompt(content))
            return response.text
        except Exception as e:
            logger.exception("summarize failed: model=%s", self.model_name)
            raise SummarizerFailed(str(e) or "Failed to generate summary") from e
