"""OpenAI 兼容文本生成服务集成模块"""

from typing import Dict, List, Optional, Any

import httpx

from ..exceptions import SuggestionGenerationError
from ..utils.config import OpenAIConfig
from ..utils.logger import ai_logger


class OpenAIAPIError(SuggestionGenerationError):
    """生成服务API异常"""
    pass


class OpenAIAPI:
    """OpenAI 兼容的 chat completions 客户端

    密钥通过构造参数传入，不读取进程级的全局状态。
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        timeout: float = 60,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

        self.client = client or httpx.AsyncClient(timeout=self.timeout)
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

    @classmethod
    def from_config(cls, config: OpenAIConfig) -> "OpenAIAPI":
        """根据配置创建客户端，要求已配置密钥"""
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            model=config.model,
            timeout=config.timeout
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _make_request(self, messages: List[Dict[str, str]], **kwargs) -> Dict[str, Any]:
        """发送API请求，只尝试一次"""
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": kwargs.get("temperature", 0.7),
        }

        ai_logger.info(f"发送生成服务请求: {self.model}")

        try:
            response = await self.client.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers=self.headers
            )
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            ai_logger.error(f"生成服务HTTP错误: {e.response.status_code} - {e.response.text}")
            raise OpenAIAPIError(f"API请求失败: {e.response.status_code}") from e
        except httpx.RequestError as e:
            ai_logger.error(f"生成服务请求错误: {str(e)}")
            raise OpenAIAPIError(f"网络请求失败: {str(e)}") from e
        except ValueError as e:
            ai_logger.error(f"生成服务响应不是合法JSON: {str(e)}")
            raise OpenAIAPIError(f"响应格式错误: {str(e)}") from e

        ai_logger.info(f"生成服务响应成功, tokens: {result.get('usage', {})}")

        return result

    async def complete(self, prompt: str, temperature: float = 0.7) -> str:
        """单轮对话补全，返回第一个候选的文本"""
        messages = [{"role": "user", "content": prompt}]

        result = await self._make_request(messages, temperature=temperature)

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            ai_logger.error(f"生成服务响应缺少内容: {result}")
            raise OpenAIAPIError("响应中没有生成内容") from e

        if not isinstance(content, str):
            raise OpenAIAPIError("响应中没有生成内容")

        return content.strip()

    async def close(self):
        """关闭客户端"""
        await self.client.aclose()
