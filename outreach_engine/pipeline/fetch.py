"""
Stage B/C — sequential fetch with per-task failure isolation, then mode selection.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from outreach_engine.pipeline.queries import FetchTask

logger = logging.getLogger('pipeline.fetch')

MIN_PAGE_CHARS = 50
MIN_RESULT_CHARS = 20
PAGE_CHARS = 5000
RESULT_CHARS = 2000
SEARCH_LIMIT = 5
LABEL_CHARS = 60


@dataclass
class FetchedItem:
    source: str
    source_type: str
    content: str


@dataclass
class FetchReport:
    items: List[FetchedItem] = field(default_factory=list)
    successes: int = 0
    errors: List[str] = field(default_factory=list)


def fetch_all(discovery, tasks: List[FetchTask]) -> FetchReport:
    """
    Run every task in order. A failing task only adds "<label>: <message>"
    to report.errors; the loop always continues.
    """
    report = FetchReport()
    for task in tasks:
        try:
            if task.kind == 'url':
                page = discovery.scrape(task.value)
                content = page.content or ''
                if len(content) > MIN_PAGE_CHARS:
                    report.items.append(FetchedItem(task.value, task.type, content[:PAGE_CHARS]))
                    report.successes += 1
            else:
                for result in discovery.search(task.value, limit=SEARCH_LIMIT) or []:
                    text = result.text
                    if len(text) > MIN_RESULT_CHARS:
                        report.items.append(FetchedItem(
                            result.url or task.value,
                            task.type,
                            f"{result.title or ''}: {text}"[:RESULT_CHARS],
                        ))
                        report.successes += 1
        except Exception as e:
            logger.warning("Fetch failed for %s: %s", task.label[:LABEL_CHARS], e)
            report.errors.append(f"{task.label[:LABEL_CHARS]}: {e}")
    return report


def select_mode(report: FetchReport) -> str:
    """`scraped` if anything usable came back, else `ai_prospecting`."""
    return 'scraped' if report.items else 'ai_prospecting'
