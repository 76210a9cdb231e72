"""AI简历优化系统: 简历文本提取、ATS关键词评分与改进建议生成"""

__version__ = "1.0.0"
__description__ = "简历与岗位描述的ATS匹配分析服务"

# 导出主要组件
from .core import ResumeAnalyzer, SuggestionGenerator, DataManager
from .services import get_resume_service
from .integrations import OpenAIAPI
from .utils.config import get_settings
from .utils.logger import app_logger

__all__ = [
    "ResumeAnalyzer",
    "SuggestionGenerator",
    "DataManager",
    "get_resume_service",
    "OpenAIAPI",
    "get_settings",
    "app_logger",
]
