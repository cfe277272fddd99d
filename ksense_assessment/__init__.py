"""Fetch, score and submit ksense patient risk assessments."""

from .client import AssessmentClient
from .config import Settings
from .scoring import AssessmentResult, analyze

__all__ = ["AssessmentClient", "AssessmentResult", "Settings", "analyze"]
