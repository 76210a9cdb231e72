"""辅助函数模块"""

import re
import random
import time
import mimetypes
from pathlib import Path
from typing import Optional

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# 只保留普通扩展名，避免把客户端传来的特殊字符带进存储路径
_PLAIN_SUFFIX_PATTERN = re.compile(r"\.[A-Za-z0-9]{1,10}")

# 系统的 mimetypes 表不一定包含 .docx
_KNOWN_MIME_TYPES = {
    ".pdf": PDF_MIME_TYPE,
    ".docx": DOCX_MIME_TYPE,
}


def get_mime_type(file_path: str) -> str:
    """获取文件MIME类型"""
    suffix = Path(file_path).suffix.lower()
    if suffix in _KNOWN_MIME_TYPES:
        return _KNOWN_MIME_TYPES[suffix]

    mime_type, _ = mimetypes.guess_type(file_path)
    return mime_type or 'application/octet-stream'


def get_file_size_mb(size_bytes: int) -> float:
    """字节数转换为MB"""
    return size_bytes / (1024 * 1024)


def build_upload_filename(original_filename: Optional[str]) -> str:
    """生成上传文件的存储名称: <毫秒时间戳>-<随机数><扩展名>"""
    suffix = Path(original_filename).suffix if original_filename else ""
    if not _PLAIN_SUFFIX_PATTERN.fullmatch(suffix):
        suffix = ""
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9 - 1)}"
    return f"{unique_suffix}{suffix}"


def truncate_text(text: str, max_length: int = 200, suffix: str = "...") -> str:
    """截断文本到指定长度"""
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
