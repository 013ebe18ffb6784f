"""Export of research reports to the results directory."""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from .config import settings
from .research.models import ResearchQuery, ResearchResult
from .research.report import render_markdown

logger = logging.getLogger(__name__)

MAX_SLUG_LENGTH = 30


def report_slug(technology: str) -> str:
    """Filesystem-safe, lowercase name fragment for a technology."""
    slug = re.sub(r"[^\w\-]+", "-", technology.lower()).strip("-")
    return slug[:MAX_SLUG_LENGTH] or "research"


def save_research_report(query: ResearchQuery, result: ResearchResult, results_dir: Path | None = None) -> Path:
    """Write ``<stamp>_<slug>.md`` plus a ``.json`` twin holding the query and result.

    Existing files are never overwritten; a numeric suffix is added instead.

    Returns:
        Path of the markdown report.
    """
    target_dir = results_dir if results_dir is not None else settings.get_results_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    saved_at = datetime.now(timezone.utc)
    stem = f"{saved_at:%Y%m%d_%H%M%S}_{report_slug(query.technology)}"
    report = render_markdown(query, result)

    suffix = 0
    while True:
        report_path = target_dir / (f"{stem}.md" if suffix == 0 else f"{stem}_{suffix}.md")
        try:
            with report_path.open("x", encoding="utf-8") as fh:
                fh.write(report)
            break
        except FileExistsError:
            suffix += 1

    record = {
        "saved_at": saved_at.isoformat(),
        "report": report_path.name,
        "query": query.model_dump(mode="json"),
        "result": result.model_dump(mode="json"),
    }
    report_path.with_suffix(".json").write_text(json.dumps(record, indent=2), encoding="utf-8")

    logger.info(f"Saved research report to {report_path}")
    return report_path
