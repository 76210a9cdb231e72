"""分析结果数据模型"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from ..utils.helpers import PDF_MIME_TYPE, DOCX_MIME_TYPE


class DocumentFormat(str, Enum):
    """支持的简历格式，值为声明的MIME类型"""
    PDF = PDF_MIME_TYPE
    DOCX = DOCX_MIME_TYPE

    @classmethod
    def from_content_type(cls, content_type: Optional[str]) -> Optional["DocumentFormat"]:
        """按MIME类型精确匹配，不支持的类型返回None"""
        for fmt in cls:
            if fmt.value == content_type:
                return fmt
        return None


class AnalysisRequest(BaseModel):
    """单次分析请求，仅在请求期间存在"""
    resume_bytes: bytes = Field(..., description="简历文件内容")
    resume_format: DocumentFormat = Field(..., description="简历格式")
    job_description: str = Field(..., description="岗位描述")
    original_filename: str = Field("", description="原始文件名")


class ScoreResult(BaseModel):
    """关键词匹配得分"""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100, description="ATS得分")
    matched_keyword_count: int = Field(..., ge=0, description="匹配关键词数")
    total_keyword_count: int = Field(..., ge=0, description="岗位描述关键词总数")
    matched_keywords: Tuple[str, ...] = Field(default_factory=tuple, description="匹配的关键词，按岗位描述中首次出现的顺序")

    @property
    def match_summary(self) -> str:
        return f"Matched {self.matched_keyword_count} of {self.total_keyword_count} keywords"


class AnalysisRecordBase(BaseModel):
    """分析记录基础模型"""
    original_filename: str = Field(..., description="原始文件名")
    job_description: str = Field(..., description="岗位描述")
    parsed_content: str = Field(..., description="提取的简历文本")
    ats_score: int = Field(..., description="ATS得分")
    match_summary: Optional[str] = Field(None, description="匹配摘要")
    recommendations: List[str] = Field(default_factory=list, description="改进建议")


class AnalysisRecordCreate(AnalysisRecordBase):
    """创建分析记录模型"""
    pass


class AnalysisRecord(AnalysisRecordBase):
    """完整分析记录模型"""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="记录ID")
    created_at: datetime = Field(..., description="创建时间")


class PersistOutcome(BaseModel):
    """保存分析记录的结果，只用于日志"""
    record_id: Optional[int] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.record_id is not None


class AnalysisResponse(BaseModel):
    """分析接口响应"""
    model_config = ConfigDict(populate_by_name=True)

    ats_score: int = Field(..., alias="atsScore")
    match_summary: str = Field(..., alias="matchSummary")
    recommendations: List[str] = Field(default_factory=list)
    resume_id: Optional[int] = Field(None, alias="resumeId")
