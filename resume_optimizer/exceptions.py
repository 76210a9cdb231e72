"""异常定义模块"""


class ResumeOptimizerError(Exception):
    """系统异常基类"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(ResumeOptimizerError):
    """客户端输入错误（缺少文件、缺少岗位描述、不支持的格式）"""

    status_code = 400


class PayloadTooLarge(ClientInputError):
    """上传文件超过大小限制"""

    status_code = 413


class MalformedDocument(ResumeOptimizerError):
    """文档内容与声明的格式不符，无法提取文本"""


class ConfigurationError(ResumeOptimizerError):
    """服务端配置错误，例如缺少生成服务的API密钥"""


class SuggestionGenerationError(ResumeOptimizerError):
    """生成建议失败，在本地恢复，不会返回给调用方"""


class PersistenceError(ResumeOptimizerError):
    """保存分析记录失败，在本地恢复，不会返回给调用方"""
