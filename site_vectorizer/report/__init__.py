# File: site_vectorizer/report/__init__.py
"""site_vectorizer.report: запись vectors.json, используемая CLI и тестами."""

from .json_report import ExportResult, render_json

__all__ = ["ExportResult", "render_json"]
