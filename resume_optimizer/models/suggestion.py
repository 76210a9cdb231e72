"""建议解析结果模型"""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class ParseStrategy(str, Enum):
    """解析分支"""
    JSON_ARRAY = "json_array"  # 严格JSON数组
    LINE_SPLIT = "line_split"  # 按换行拆分


class SuggestionParse(BaseModel):
    """生成内容的解析结果"""
    strategy: ParseStrategy = Field(..., description="命中的解析分支")
    suggestions: List[str] = Field(default_factory=list, description="解析出的建议")

    @property
    def is_empty(self) -> bool:
        return not self.suggestions
