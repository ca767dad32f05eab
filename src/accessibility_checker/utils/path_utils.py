# src/accessibility_checker/utils/path_utils.py
import logging
from pathlib import Path
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)

HTML_SUFFIXES = {".html", ".htm"}


class PathUtils:
    """
    A central utility for locating the documents to audit.
    """

    @staticmethod
    def is_html_file(path: Path) -> bool:
        return path.is_file() and path.suffix.lower() in HTML_SUFFIXES

    @staticmethod
    def find_html_files(paths: Iterable[Union[str, Path]]) -> List[Path]:
        """
        Expands files and directories into a sorted, de-duplicated list of HTML files.
        Directories are searched recursively.
        """
        found = []
        seen = set()
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                candidates = sorted(p for p in path.rglob("*") if PathUtils.is_html_file(p))
            elif PathUtils.is_html_file(path):
                candidates = [path]
            else:
                logger.warning("Skipping %s: not an HTML file or directory", path)
                continue

            for candidate in candidates:
                key = candidate.resolve()
                if key not in seen:
                    seen.add(key)
                    found.append(candidate)
        return found

    @staticmethod
    def get_package_root() -> Path:
        return Path(__file__).resolve().parent.parent
