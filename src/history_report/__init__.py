"""Console report, summary statistics, and CLI for parsed chat histories."""

from .summary import HistorySummary, UserSummary, summarize_history, summarize_user
