import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import pandas as pd

from accessibility_checker.model import CATEGORIES, AuditSummary, Statistics
from accessibility_checker.stats.aggregator import CATEGORY_INDEX

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Title", "Path", "Code", "Severity", "Rule", "Message", "Line", "Character"]


class ReportManager:
    """
    Turns an AuditSummary into the payloads handed to the reporting layer:
    a JSON report (overall summary plus per-file drill-down) and a flat
    diagnostics table.
    """

    @staticmethod
    def statistics_payload(stats: Statistics) -> Dict[str, Any]:
        return {
            "guidelines": stats.guidelines,
            "tallies": stats.tallies,
            "amount": stats.amount,
            "messages": stats.messages,
            "messageCodes": stats.message_codes,
            "uncoded": stats.uncoded,
        }

    def build_report(self, summary: AuditSummary) -> Dict[str, Any]:
        """Builds the report payload: overall statistics at the top level, one entry per file."""
        payload = self.statistics_payload(summary.overall)
        payload["categories"] = CATEGORIES
        payload["results"] = [
            {
                "title": result.title,
                "path": result.path,
                "statistics": self.statistics_payload(result.statistics),
                "diagnostics": [d.model_dump(mode="json") for d in result.diagnostics],
            }
            for result in summary.results
        ]
        payload["failed"] = summary.failed
        return payload

    def save_report(self, summary: AuditSummary, output: Union[str, Path]) -> Path:
        """Writes the JSON report, replacing any existing file."""
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self.build_report(summary), f, indent=2)
        logger.info(f"Report saved to {output_path}")
        return output_path

    def to_dataframe(self, summary: AuditSummary) -> pd.DataFrame:
        """One row per diagnostic, across all files."""
        rows = [
            {
                "Title": result.title,
                "Path": result.path,
                "Code": d.code,
                "Severity": d.severity.value,
                "Rule": d.rule,
                "Message": d.message,
                # One-based for display
                "Line": d.range.start.line + 1,
                "Character": d.range.start.character + 1,
            }
            for result in summary.results
            for d in result.diagnostics
        ]
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    def export_csv(self, summary: AuditSummary, output: Union[str, Path]) -> Path:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df = self.to_dataframe(summary)
        df.to_csv(output_path, index=False)
        logger.info(f"Exported {len(df)} diagnostic(s) to {output_path}")
        return output_path

    def category_table(self, stats: Statistics) -> pd.DataFrame:
        """Code frequency table with the category each code belongs to."""
        df = pd.DataFrame({"Code": stats.guidelines, "Occurrences": stats.amount})
        df["Category"] = [
            CATEGORIES[CATEGORY_INDEX[code[0]]] if code[:1] in CATEGORY_INDEX else ""
            for code in stats.guidelines
        ]
        return df
