"""改进建议生成模块"""

import json
import re
from typing import List

from ..exceptions import SuggestionGenerationError
from ..integrations.openai_api import OpenAIAPI
from ..models.suggestion import ParseStrategy, SuggestionParse
from ..utils.logger import ai_logger
from ..utils.helpers import truncate_text

FALLBACK_SUGGESTION = "Unable to generate suggestions at this time."

DEFAULT_TEMPERATURE = 0.7

_LINE_BREAK_PATTERN = re.compile(r"\n\s*")


def parse_suggestions(content: str) -> SuggestionParse:
    """解析生成内容

    优先按严格JSON字符串数组解析；否则按换行拆分并丢弃空段。
    """
    content = (content or "").strip()

    try:
        parsed = json.loads(content)
    except (ValueError, RecursionError):
        # 非法或嵌套过深的JSON都按纯文本处理
        parsed = None

    if isinstance(parsed, list) and all(isinstance(item, str) for item in parsed):
        return SuggestionParse(strategy=ParseStrategy.JSON_ARRAY, suggestions=parsed)

    segments = [segment for segment in _LINE_BREAK_PATTERN.split(content) if segment]
    return SuggestionParse(strategy=ParseStrategy.LINE_SPLIT, suggestions=segments)


class SuggestionGenerator:
    """调用生成服务产出ATS改进建议"""

    def __init__(self, client: OpenAIAPI, temperature: float = DEFAULT_TEMPERATURE):
        self.client = client
        self.temperature = temperature

    def build_prompt(self, resume_text: str, job_description: str) -> str:
        """构建提示词"""
        return (
            "You are an expert career coach. Given the following resume text and a job description, "
            "provide 5-7 concise, actionable improvement suggestions to increase ATS compatibility and "
            "better align the resume with the job requirements. Return the suggestions as a JSON array "
            "of strings.\n\n"
            f"Resume:\n{resume_text}\n\n"
            f"Job Description:\n{job_description}"
        )

    async def generate(self, resume_text: str, job_description: str) -> List[str]:
        """生成建议，失败时返回占位内容，不向上抛出"""
        prompt = self.build_prompt(resume_text, job_description)

        try:
            content = await self.client.complete(prompt, temperature=self.temperature)
        except SuggestionGenerationError as e:
            ai_logger.error(f"生成建议失败: {e.message}")
            return [FALLBACK_SUGGESTION]
        except Exception as e:
            ai_logger.exception(f"生成建议出现未知错误: {str(e)}")
            return [FALLBACK_SUGGESTION]

        try:
            result = parse_suggestions(content)
        except Exception as e:
            ai_logger.exception(f"解析生成内容失败: {str(e)}")
            return [FALLBACK_SUGGESTION]

        if result.is_empty:
            ai_logger.warning(f"生成内容无法解析: {truncate_text(content)}")
            return [FALLBACK_SUGGESTION]

        ai_logger.info(f"生成建议完成: {len(result.suggestions)} 条 ({result.strategy.value})")
        return result.suggestions
