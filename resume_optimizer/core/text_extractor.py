"""简历文本提取模块"""

import io
import re
import html

import mammoth
from pypdf import PdfReader

from ..exceptions import ClientInputError, MalformedDocument
from ..models.analysis import DocumentFormat
from ..utils.logger import app_logger

_TAG_PATTERN = re.compile(r"<[^>]*>")


def extract_pdf_text(data: bytes) -> str:
    """提取PDF文本层，按页顺序拼接"""
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        app_logger.error(f"PDF解析失败: {str(e)}")
        raise MalformedDocument(f"Could not read PDF document: {str(e)}") from e

    return "\n".join(pages)


def extract_docx_text(data: bytes) -> str:
    """DOCX先转换为HTML，再把标签替换为空格"""
    try:
        result = mammoth.convert_to_html(io.BytesIO(data))
    except Exception as e:
        app_logger.error(f"DOCX解析失败: {str(e)}")
        raise MalformedDocument(f"Could not read DOCX document: {str(e)}") from e

    for message in result.messages:
        app_logger.debug(f"DOCX转换提示: {message}")

    return html.unescape(_TAG_PATTERN.sub(" ", result.value))


def extract_text(data: bytes, document_format: DocumentFormat) -> str:
    """按声明的格式提取简历文本"""
    if document_format == DocumentFormat.PDF:
        text = extract_pdf_text(data)
    elif document_format == DocumentFormat.DOCX:
        text = extract_docx_text(data)
    else:
        raise ClientInputError("Unsupported file type. Use PDF or DOCX.")

    app_logger.info(f"简历文本提取完成: 格式 {document_format.name}, {len(text)} 个字符")
    return text
