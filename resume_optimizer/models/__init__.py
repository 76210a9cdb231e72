"""数据模型模块"""

from .analysis import (
    DocumentFormat, AnalysisRequest, ScoreResult, AnalysisRecord,
    AnalysisRecordCreate, PersistOutcome, AnalysisResponse
)
from .suggestion import ParseStrategy, SuggestionParse

__all__ = [
    "DocumentFormat",
    "AnalysisRequest",
    "ScoreResult",
    "AnalysisRecord",
    "AnalysisRecordCreate",
    "PersistOutcome",
    "AnalysisResponse",
    "ParseStrategy",
    "SuggestionParse",
]
