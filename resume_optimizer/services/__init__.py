"""业务服务层"""

from .resume_service import ResumeService, get_resume_service, close_resume_service

__all__ = [
    "ResumeService",
    "get_resume_service",
    "close_resume_service",
]
