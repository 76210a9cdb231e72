"""关键词匹配评分模块"""

import math
import re
from typing import List

from ..models.analysis import ScoreResult

_WORD_PATTERN = re.compile(r"\b\w+\b")


def tokenize(text: str) -> List[str]:
    """小写化后按单词边界切分"""
    if not text:
        return []
    return _WORD_PATTERN.findall(text.lower())


def unique_tokens(text: str) -> List[str]:
    """去重，保留首次出现的顺序"""
    return list(dict.fromkeys(tokenize(text)))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score(resume_text: str, job_description: str) -> ScoreResult:
    """计算简历与岗位描述的关键词重合度

    得分 = 匹配的岗位关键词数 / 岗位关键词总数 * 100，四舍五入。
    岗位描述没有任何关键词时得分为0。
    """
    resume_words = set(tokenize(resume_text))
    job_words = unique_tokens(job_description)

    matches = [word for word in job_words if word in resume_words]

    if not job_words:
        return ScoreResult(score=0, matched_keyword_count=0, total_keyword_count=0)

    return ScoreResult(
        score=_round_half_up(len(matches) / len(job_words) * 100),
        matched_keyword_count=len(matches),
        total_keyword_count=len(job_words),
        matched_keywords=tuple(matches),
    )
