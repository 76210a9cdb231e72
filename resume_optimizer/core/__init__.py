"""核心业务逻辑模块"""

from .text_extractor import extract_text, extract_pdf_text, extract_docx_text
from .keyword_scorer import score, tokenize, unique_tokens
from .suggestion_generator import SuggestionGenerator, parse_suggestions, FALLBACK_SUGGESTION
from .data_manager import DataManager
from .resume_analyzer import ResumeAnalyzer

__all__ = [
    "extract_text",
    "extract_pdf_text",
    "extract_docx_text",
    "score",
    "tokenize",
    "unique_tokens",
    "SuggestionGenerator",
    "parse_suggestions",
    "FALLBACK_SUGGESTION",
    "DataManager",
    "ResumeAnalyzer",
]
