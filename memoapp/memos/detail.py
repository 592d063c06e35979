"""
Memo detail view.

Holds the state of one detail modal: which memo is shown, whether it is open,
and the transient AI summary. Everything outside the view (closing the page
overlay, the editor, deletion, dialogs, the summarize endpoint) is injected.
"""
from __future__ import annotations
import logging
from datetime import datetime, tzinfo
from typing import Any, Callable, Optional

import httpx
import markdown

from memoapp.memos.schemas import MEMO_CATEGORIES, MemoOut

logger = logging.getLogger(__name__)

BACKDROP = "backdrop"
CONTENT = "content"

DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this memo?"
SUMMARY_FAILED_MESSAGE = "Failed to generate summary: {error}"
SUMMARY_REQUEST_ERROR_MESSAGE = "An error occurred while requesting the summary."

CATEGORY_STYLES = {
    "personal": "bg-blue-100 text-blue-800",
    "work": "bg-green-100 text-green-800",
    "study": "bg-purple-100 text-purple-800",
    "idea": "bg-yellow-100 text-yellow-800",
    "other": "bg-gray-100 text-gray-800",
}

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


class SummaryRejected(Exception):
    """The summarize endpoint answered with an error status."""


class SummaryUnavailable(Exception):
    """The summarize endpoint could not be reached or answered garbage."""


class SummaryClient:
    """Posts memo content to the summarize endpoint."""

    def __init__(self, http: httpx.Client, path: str = "/api/summarize"):
        self.http = http
        self.path = path

    def summarize(self, content: str) -> str:
        try:
            r = self.http.post(self.path, json={"content": content})
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SummaryUnavailable(str(e)) from e
        if not r.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            raise SummaryRejected(error or "Unknown error")
        summary = data.get("summary") if isinstance(data, dict) else None
        if not isinstance(summary, str):
            raise SummaryUnavailable("summary missing from response")
        return summary


def format_date(ts: datetime, tz: tzinfo | None = None) -> str:
    """``March 5, 2026 14:07``"""
    if tz is not None and ts.tzinfo is not None:
        ts = ts.astimezone(tz)
    return f"{ts:%B} {ts.day}, {ts.year} {ts:%H:%M}"


def category_label(category: str) -> str:
    return MEMO_CATEGORIES.get(category, category)


def category_style(category: str) -> str:
    return CATEGORY_STYLES.get(category, CATEGORY_STYLES["other"])


def render_markdown(source: str) -> str:
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    # raw HTML in memos is shown as text, not injected into the page
    md.preprocessors.deregister("html_block")
    md.inlinePatterns.deregister("html")
    return md.convert(source or "")


class MemoDetailView:
    def __init__(
        self,
        summary_client: SummaryClient,
        on_close: Callable[[], None],
        on_edit: Callable[[MemoOut], None],
        on_delete: Callable[[str], None],
        confirm: Callable[[str], bool],
        alert: Callable[[str], None],
        tz: tzinfo | None = None,
    ):
        self.summary_client = summary_client
        self.on_close = on_close
        self.on_edit = on_edit
        self.on_delete = on_delete
        self.confirm = confirm
        self.alert = alert
        self.tz = tz

        self.memo: Optional[MemoOut] = None
        self.is_open = False
        self.summary = ""
        self.is_summarizing = False
        # bumped on every open/close so late summaries can be told apart
        self._generation = 0

    # --- open / close ---

    def open(self, memo: MemoOut) -> None:
        self._generation += 1
        self.memo = memo
        self.is_open = True
        self.summary = ""
        self.is_summarizing = False

    def close(self) -> None:
        self._generation += 1
        self.is_open = False
        self.summary = ""
        self.is_summarizing = False
        self.on_close()

    def handle_key(self, key: str) -> None:
        if self.is_open and key == "Escape":
            self.close()

    def handle_click(self, target: str) -> None:
        # clicks inside the panel bubble up to the backdrop; only a direct hit closes
        if self.is_open and target == BACKDROP:
            self.close()

    # --- actions ---

    def summarize(self) -> None:
        if not self.memo or not self.memo.content:
            return
        if self.is_summarizing or self.summary:
            return

        generation = self._generation
        self.is_summarizing = True
        try:
            summary = self.summary_client.summarize(self.memo.content)
        except SummaryRejected as e:
            if generation == self._generation:
                self.alert(SUMMARY_FAILED_MESSAGE.format(error=e))
            return
        except SummaryUnavailable:
            logger.exception("summary request failed")
            if generation == self._generation:
                self.alert(SUMMARY_REQUEST_ERROR_MESSAGE)
            return
        finally:
            if generation == self._generation:
                self.is_summarizing = False

        if generation != self._generation:
            logger.info("dropping summary for a view that was closed or reopened")
            return
        self.summary = summary

    def edit(self) -> None:
        if self.memo:
            self.on_edit(self.memo)
            self.close()

    def delete(self) -> None:
        if self.memo and self.confirm(DELETE_CONFIRM_MESSAGE):
            self.on_delete(self.memo.id)
            self.close()

    # --- rendering ---

    def render(self) -> dict[str, Any] | None:
        if not self.is_open or not self.memo:
            return None
        memo = self.memo
        updated = None
        if memo.updated_at != memo.created_at:
            updated = format_date(memo.updated_at, self.tz)
        return {
            "title": memo.title,
            "category": {"label": category_label(memo.category), "style": category_style(memo.category)},
            "created": format_date(memo.created_at, self.tz),
            "updated": updated,
            "content_html": render_markdown(memo.content),
            "tags": [f"#{t}" for t in memo.tags],
            "summary": self.summary or None,
            "is_summarizing": self.is_summarizing,
            "show_summarize_button": not self.summary,
            "summarize_disabled": self.is_summarizing,
        }
