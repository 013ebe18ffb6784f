"""Custom exceptions for the tech research server."""


class TechResearchError(Exception):
    """Base exception for tech research errors."""

    pass


class AdapterFailure(TechResearchError):
    """Raised inside a source adapter when one unit of work fails.

    Always recovered at the adapter boundary; never escapes ``search``.
    """

    pass


class ResearchCancelled(AdapterFailure):
    """Raised when a research token was cancelled or its deadline passed."""

    pass


class ResearchFailed(TechResearchError):
    """Raised when the research orchestration itself fails."""

    pass


class RepositoryAnalysisError(TechResearchError):
    """Raised when a repository cannot be cloned for analysis."""

    pass
