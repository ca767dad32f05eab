import logging
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from tqdm import tqdm

from accessibility_checker.config import Configuration
from accessibility_checker.dom.builder import DOMBuilder
from accessibility_checker.dom.engine import AuditEngine
from accessibility_checker.dom.models import HTMLDocument
from accessibility_checker.errors import AccessibilityCheckerError
from accessibility_checker.model import AuditSummary, FileResult
from accessibility_checker.stats.aggregator import aggregate
from accessibility_checker.stats.merger import merge
from accessibility_checker.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def audit_document(doc: HTMLDocument, engine: AuditEngine) -> FileResult:
    """Runs traverse -> aggregate for one parsed document."""
    diagnostics = engine.traverse(doc)
    return FileResult(
        title=doc.title or doc.path,
        path=doc.path,
        diagnostics=diagnostics,
        statistics=aggregate(diagnostics)
    )


def _worker_audit_file(path: str, config: Configuration, engine: Optional[AuditEngine] = None) -> Dict[str, Any]:
    """
    Worker function to audit a single file, in-process or in a separate process.
    Any read, parse or rule failure is reported back instead of raised.
    Configuration and aggregation errors propagate.

    Worker processes build their own engine; the in-process path passes the
    controller's engine so the configuration is validated once.
    """
    builder = DOMBuilder()
    if engine is None:
        engine = AuditEngine(config)

    try:
        doc = builder.parse_file(path)
        return {"result": audit_document(doc, engine)}
    except AccessibilityCheckerError:
        raise
    except Exception as e:
        logger.error(f"Worker failed on {path}: {e!r}")
        return {"error": repr(e), "path": path}


class AuditController:
    """
    Orchestrates the audit of one or many documents: per-document pipelines
    (optionally in parallel), followed by a sequential merge of their statistics.
    """

    def __init__(self, config: Configuration):
        # Creating the engine validates the configuration up front
        self.engine = AuditEngine(config)
        self.config = config
        self.builder = DOMBuilder()

    def audit_html(self, html: str, path: str = "", title: Optional[str] = None) -> FileResult:
        doc = self.builder.parse_doc(html, path=path, title=title)
        return audit_document(doc, self.engine)

    def audit_documents(self, docs: Iterable[HTMLDocument]) -> AuditSummary:
        """Audits already parsed documents in-process."""
        results = [audit_document(doc, self.engine) for doc in docs]
        return self._summarize(results, [])

    def run_audit(
            self,
            paths: Iterable[Union[str, Path]],
            workers: int = 1,
            progress_callback: Optional[ProgressCallback] = None,
            show_progress: bool = False
    ) -> AuditSummary:
        """
        Audits every HTML file found under `paths`.

        Results keep the order of the discovered files regardless of the
        number of workers, so the merged summary is deterministic.
        """
        files = [str(p) for p in PathUtils.find_html_files(paths)]
        total = len(files)
        logger.info(f"Auditing {total} document(s) with {workers} worker(s)")

        results: List[FileResult] = []
        failed: List[str] = []

        progress = tqdm(total=total, desc="Auditing", unit="doc", disable=not show_progress)

        try:
            if workers > 1 and total > 1:
                func = partial(_worker_audit_file, config=self.config)
                with ProcessPoolExecutor(max_workers=workers) as executor:
                    outcomes = executor.map(func, files)
                    self._collect(outcomes, total, results, failed, progress, progress_callback)
            else:
                func = partial(_worker_audit_file, config=self.config, engine=self.engine)
                outcomes = (func(f) for f in files)
                self._collect(outcomes, total, results, failed, progress, progress_callback)
        finally:
            progress.close()

        return self._summarize(results, failed)

    @staticmethod
    def _collect(outcomes, total, results, failed, progress, progress_callback) -> None:
        for i, outcome in enumerate(outcomes):
            progress.update(1)
            if progress_callback:
                progress_callback(i + 1, total)

            if "error" in outcome:
                failed.append(outcome["path"])
                continue
            results.append(outcome["result"])

    @staticmethod
    def _summarize(results: List[FileResult], failed: List[str]) -> AuditSummary:
        overall = merge(r.statistics for r in results)
        total_issues = sum(len(r.diagnostics) for r in results)
        logger.info(
            f"Audit finished: {len(results)} document(s), {total_issues} diagnostic(s), {len(failed)} failure(s)"
        )
        return AuditSummary(results=results, overall=overall, failed=failed)
