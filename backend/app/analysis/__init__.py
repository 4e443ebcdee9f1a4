"""Image analysis orchestration."""

from app.analysis.messages import analysis_header, format_analysis_message
from app.analysis.service import result_from_raw, run_analysis

__all__ = [
    "analysis_header",
    "format_analysis_message",
    "result_from_raw",
    "run_analysis",
]
