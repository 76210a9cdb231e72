"""简历分析编排模块

单次请求按固定顺序执行: 校验 -> 提取文本 -> 关键词评分 -> 生成建议 -> 保存记录 -> 返回结果。
只有输入错误、文档解析失败和配置缺失会让请求失败；建议生成和保存记录的失败都在本地降级处理。
"""

from datetime import datetime
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from ..exceptions import ClientInputError, ConfigurationError
from ..models.analysis import (
    AnalysisRequest, AnalysisResponse, AnalysisRecordCreate,
    DocumentFormat, PersistOutcome, ScoreResult
)
from ..utils.logger import app_logger
from .data_manager import DataManager
from .keyword_scorer import score
from .suggestion_generator import SuggestionGenerator
from .text_extractor import extract_text


class ResumeAnalyzer:
    """简历分析编排器"""

    def __init__(self, data_manager: Optional[DataManager], generator: Optional[SuggestionGenerator]):
        self.data_manager = data_manager
        self.generator = generator

    def validate(
        self,
        content: Optional[bytes],
        content_type: Optional[str],
        filename: Optional[str],
        job_description: Optional[str]
    ) -> AnalysisRequest:
        """校验输入，任何问题都在提取之前失败"""
        if not content:
            raise ClientInputError("Resume file is required.")

        if not job_description or not job_description.strip():
            raise ClientInputError("Job description is required.")

        document_format = DocumentFormat.from_content_type(content_type)
        if document_format is None:
            app_logger.warning(f"不支持的文件类型: {content_type} ({filename})")
            raise ClientInputError("Unsupported file type. Use PDF or DOCX.")

        return AnalysisRequest(
            resume_bytes=content,
            resume_format=document_format,
            job_description=job_description,
            original_filename=filename or ""
        )

    def _require_generator(self) -> SuggestionGenerator:
        if self.generator is None:
            app_logger.error("OPENAI_API_KEY 未配置")
            raise ConfigurationError("OpenAI API Key is missing. Please add OPENAI_API_KEY to .env")
        return self.generator

    async def _persist(self, request: AnalysisRequest, resume_text: str,
                       score_result: ScoreResult, recommendations: list) -> PersistOutcome:
        """尽力保存分析记录，失败只记录日志"""
        if self.data_manager is None:
            return PersistOutcome()

        try:
            record = await self.data_manager.create_resume(AnalysisRecordCreate(
                original_filename=request.original_filename,
                job_description=request.job_description,
                parsed_content=resume_text,
                ats_score=score_result.score,
                match_summary=score_result.match_summary,
                recommendations=recommendations
            ))
        except Exception as e:
            return PersistOutcome(error=str(e))

        return PersistOutcome(record_id=record.id)

    async def analyze(
        self,
        content: Optional[bytes],
        content_type: Optional[str],
        filename: Optional[str],
        job_description: Optional[str]
    ) -> AnalysisResponse:
        """分析简历与岗位描述的匹配度"""
        request = self.validate(content, content_type, filename, job_description)
        generator = self._require_generator()

        app_logger.info(f"开始分析简历: {request.original_filename} ({request.resume_format.name})")
        start_time = datetime.now()

        resume_text = await run_in_threadpool(extract_text, request.resume_bytes, request.resume_format)

        score_result = score(resume_text, request.job_description)

        recommendations = await generator.generate(resume_text, request.job_description)

        outcome = await self._persist(request, resume_text, score_result, recommendations)
        if not outcome.succeeded and outcome.error:
            app_logger.warning(f"分析记录未保存，仍返回结果: {outcome.error}")

        duration = (datetime.now() - start_time).total_seconds()
        app_logger.info(
            f"简历分析完成: {request.original_filename} - 得分: {score_result.score} - "
            f"{score_result.match_summary} - 耗时: {duration:.2f}秒"
        )

        return AnalysisResponse(
            ats_score=score_result.score,
            match_summary=score_result.match_summary,
            recommendations=recommendations,
            resume_id=outcome.record_id
        )
