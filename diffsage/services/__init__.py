"""Services for diffsage.

Services encapsulate business logic and orchestrate domain models.
They receive dependencies via constructor injection.
"""

from diffsage.services.diff_analyzer import AnalysisPhase, DiffAnalyzer, analyze, split_lines
from diffsage.services.git_operations import (
    GitFileNotFoundError,
    GitOperationsService,
    GitRepositoryError,
)
from diffsage.services.report_generator import ReportFormat, ReportGenerator, describe_change

__all__ = [
    "AnalysisPhase",
    "DiffAnalyzer",
    "GitFileNotFoundError",
    "GitOperationsService",
    "GitRepositoryError",
    "ReportFormat",
    "ReportGenerator",
    "analyze",
    "describe_change",
    "split_lines",
]
