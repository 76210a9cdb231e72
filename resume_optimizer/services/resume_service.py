"""简历上传与分析服务"""

from pathlib import Path
from typing import List, Optional, Tuple

from ..core.data_manager import DataManager
from ..core.resume_analyzer import ResumeAnalyzer
from ..core.suggestion_generator import SuggestionGenerator
from ..exceptions import PayloadTooLarge
from ..integrations.openai_api import OpenAIAPI
from ..models.analysis import AnalysisRecord, AnalysisResponse
from ..utils.config import Settings, UploadConfig, get_settings
from ..utils.helpers import build_upload_filename, get_file_size_mb
from ..utils.logger import app_logger


class ResumeService:
    """简历上传与分析服务"""

    def __init__(self, analyzer: ResumeAnalyzer, upload_config: UploadConfig,
                 client: Optional[OpenAIAPI] = None):
        self.analyzer = analyzer
        self.upload_config = upload_config
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResumeService":
        """按配置组装服务依赖"""
        data_manager = DataManager(settings.database.path) if settings.database.enabled else None

        client = None
        generator = None
        if settings.openai.api_key:
            client = OpenAIAPI.from_config(settings.openai)
            generator = SuggestionGenerator(client, temperature=settings.openai.temperature)

        analyzer = ResumeAnalyzer(data_manager, generator)
        return cls(analyzer, settings.upload, client)

    def _check_size(self, content: Optional[bytes]):
        if content and len(content) > self.upload_config.max_size_bytes:
            size_mb = get_file_size_mb(len(content))
            app_logger.warning(f"上传文件过大: {size_mb:.2f}MB")
            raise PayloadTooLarge(
                f"File too large. Maximum size is {self.upload_config.max_size_mb}MB."
            )

    def _save_upload(self, filename: Optional[str], content: bytes) -> Optional[Path]:
        """保存上传的原始文件，失败不影响分析"""
        try:
            upload_dir = Path(self.upload_config.upload_dir)
            upload_dir.mkdir(parents=True, exist_ok=True)
            file_path = upload_dir / build_upload_filename(filename)
            file_path.write_bytes(content)
            app_logger.info(f"上传文件已保存: {file_path}")
            return file_path
        except (OSError, ValueError) as e:
            app_logger.warning(f"保存上传文件失败: {str(e)}")
            return None

    async def analyze_upload(
        self,
        filename: Optional[str],
        content_type: Optional[str],
        content: Optional[bytes],
        job_description: Optional[str]
    ) -> AnalysisResponse:
        """处理上传的简历并分析"""
        self._check_size(content)

        # 只保存通过校验的上传文件
        self.analyzer.validate(content, content_type, filename, job_description)
        if content and self.upload_config.save_files:
            self._save_upload(filename, content)

        return await self.analyzer.analyze(content, content_type, filename, job_description)

    async def get_record(self, record_id: int) -> Optional[AnalysisRecord]:
        """获取已保存的分析记录"""
        if self.analyzer.data_manager is None:
            return None
        return await self.analyzer.data_manager.get_resume_by_id(record_id)

    async def list_records(self, limit: int = 20) -> Tuple[List[AnalysisRecord], int]:
        """获取最近的分析记录及总数"""
        if self.analyzer.data_manager is None:
            return [], 0
        records = await self.analyzer.data_manager.list_resumes(limit)
        total = await self.analyzer.data_manager.count_resumes()
        return records, total

    async def close(self):
        """关闭生成服务客户端"""
        if self.client:
            await self.client.close()


# 全局服务实例
_resume_service_instance = None


def get_resume_service() -> ResumeService:
    """获取简历服务实例"""
    global _resume_service_instance
    if _resume_service_instance is None:
        _resume_service_instance = ResumeService.from_settings(get_settings())
    return _resume_service_instance


async def close_resume_service():
    """关闭服务实例"""
    global _resume_service_instance
    if _resume_service_instance:
        await _resume_service_instance.close()
        _resume_service_instance = None
