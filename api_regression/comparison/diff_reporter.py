"""Diff Reporter - Console report lines plus optional JSON and Markdown summaries."""

from __future__ import annotations

import json
import sys
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, TextIO, Tuple

from api_regression.comparison.models import ComparisonOutcome, PairComparison
from api_regression.utils.logger import get_logger

logger = get_logger(__name__)

SUMMARY_JSON_FILENAME = "comparison_summary.json"
SUMMARY_MD_FILENAME = "SUMMARY.md"

_STATUS_LABELS = {
    ComparisonOutcome.MATCH: "MATCH",
    ComparisonOutcome.DIFFERENT: "DIFF",
    ComparisonOutcome.MISSING_IN_V1: "MISSING (v1)",
    ComparisonOutcome.MISSING_IN_V2: "MISSING (v2)",
    ComparisonOutcome.BOTH_MISSING: "MISSING (both)",
    ComparisonOutcome.UNREADABLE: "UNREADABLE",
}


class DiffReporter:
    """
    Print comparison results in the fixed console format.

    The wording of every line is stable so downstream jobs can scrape it.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def format_lines(self, comparison: PairComparison) -> List[str]:
        file1, file2 = comparison.file1, comparison.file2
        outcome = comparison.outcome

        if outcome is ComparisonOutcome.BOTH_MISSING:
            return [f"Both files are missing: {file1} and {file2}"]
        if outcome is ComparisonOutcome.MISSING_IN_V1:
            return [f"File missing in version 1: {file1}"]
        if outcome is ComparisonOutcome.MISSING_IN_V2:
            return [f"File missing in version 2: {file2}"]
        if outcome is ComparisonOutcome.UNREADABLE:
            return [f"Could not parse {comparison.unreadable_file}: {comparison.error}"]
        if outcome is ComparisonOutcome.DIFFERENT:
            return [
                f"Differences found between {file1} and {file2}:",
                json.dumps(
                    [record.to_dict() for record in comparison.differences],
                    indent=2,
                    ensure_ascii=False,
                    default=str,
                ),
            ]
        return [f"No differences found between {file1} and {file2}. The responses match."]

    def report(self, comparison: PairComparison) -> None:
        for line in self.format_lines(comparison):
            print(line, file=self.stream)

    def build_stats(self, comparisons: List[PairComparison]) -> Dict[str, Any]:
        counts = Counter(comparison.outcome for comparison in comparisons)
        return {
            "total_files": len(comparisons),
            "matched": counts[ComparisonOutcome.MATCH],
            "different": counts[ComparisonOutcome.DIFFERENT],
            "missing_in_v1": counts[ComparisonOutcome.MISSING_IN_V1],
            "missing_in_v2": counts[ComparisonOutcome.MISSING_IN_V2],
            "both_missing": counts[ComparisonOutcome.BOTH_MISSING],
            "unreadable": counts[ComparisonOutcome.UNREADABLE],
            "parity_status": (
                "PASS" if all(comparison.is_match for comparison in comparisons) else "FAIL"
            ),
        }

    def generate_json_report(
        self, dir1: str, dir2: str, comparisons: List[PairComparison]
    ) -> str:
        report = {
            "metadata": {
                "version1_dir": dir1,
                "version2_dir": dir2,
                "generated_at": datetime.now().isoformat(),
            },
            "statistics": self.build_stats(comparisons),
            "files": [comparison.to_dict() for comparison in comparisons],
        }
        return json.dumps(report, indent=2, ensure_ascii=False, default=str)

    def generate_markdown_summary(
        self, dir1: str, dir2: str, comparisons: List[PairComparison]
    ) -> str:
        stats = self.build_stats(comparisons)
        md_lines = [
            f"# API Response Comparison: {dir1} vs {dir2}",
            f"**Generated:** {datetime.now().isoformat()}",
            "",
            "## Summary",
            f"- **Files Compared:** {stats['total_files']}",
            f"- **Matched:** {stats['matched']}",
            f"- **Different:** {stats['different']}",
            f"- **Missing in version 1:** {stats['missing_in_v1']}",
            f"- **Missing in version 2:** {stats['missing_in_v2']}",
            f"- **Unreadable:** {stats['unreadable']}",
            f"- **Parity Status:** {stats['parity_status']}",
            "",
        ]

        if comparisons:
            md_lines.append("## Files")
            md_lines.append("")
            for comparison in sorted(comparisons, key=lambda item: item.filename):
                label = _STATUS_LABELS[comparison.outcome]
                detail = ""
                if comparison.outcome is ComparisonOutcome.DIFFERENT:
                    detail = f" ({len(comparison.differences)} differences)"
                md_lines.append(f"- **{label}** {comparison.filename}{detail}")
        else:
            md_lines.append("No response files found.")

        return "\n".join(md_lines) + "\n"

    def write_summary(
        self,
        output_dir: Path | str,
        dir1: str,
        dir2: str,
        comparisons: List[PairComparison],
    ) -> Tuple[Path, Path]:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        json_path = output_dir / SUMMARY_JSON_FILENAME
        md_path = output_dir / SUMMARY_MD_FILENAME

        json_path.write_text(self.generate_json_report(dir1, dir2, comparisons), encoding="utf-8")
        md_path.write_text(self.generate_markdown_summary(dir1, dir2, comparisons), encoding="utf-8")

        logger.info(
            "Wrote comparison summary",
            operation="write_summary",
            context={"json": str(json_path), "markdown": str(md_path)},
        )
        return json_path, md_path
