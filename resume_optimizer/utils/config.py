"""配置管理模块"""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# 加载环境变量
load_dotenv()


class OpenAIConfig(BaseSettings):
    """OpenAI 兼容生成服务配置"""
    model_config = SettingsConfigDict(env_prefix="OPENAI_", extra="ignore")

    api_key: Optional[str] = Field(None, description="API密钥")
    base_url: str = Field("https://api.openai.com/v1", description="服务地址")
    model: str = Field("gpt-4o-mini", description="模型名称")
    timeout: int = Field(60, description="请求超时(秒)")
    temperature: float = Field(0.7, description="采样温度")


class DatabaseConfig(BaseSettings):
    """数据库配置"""
    model_config = SettingsConfigDict(env_prefix="DATABASE_", extra="ignore")

    url: str = Field("sqlite:///./resume_optimizer.db")
    enabled: bool = Field(True, description="是否保存分析记录")

    @property
    def path(self) -> str:
        return self.url.replace("sqlite:///", "")


class UploadConfig(BaseSettings):
    """上传文件配置"""
    model_config = SettingsConfigDict(env_prefix="UPLOAD_", extra="ignore")

    max_size_mb: int = Field(5)
    upload_dir: str = Field("uploads")
    save_files: bool = Field(True)

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024


class AppConfig(BaseSettings):
    """应用配置"""
    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")

    name: str = Field("Resume Optimizer")
    version: str = Field("1.0.0")
    debug: bool = Field(False)
    log_level: str = Field("INFO")
    log_dir: str = Field("logs")
    host: str = Field("0.0.0.0")
    port: int = Field(5000)


class Settings:
    """全局配置类"""

    def __init__(self):
        self.app = AppConfig()
        self.openai = OpenAIConfig()
        self.database = DatabaseConfig()
        self.upload = UploadConfig()


# 全局配置实例
settings = Settings()


def get_settings() -> Settings:
    """获取配置实例"""
    return settings
