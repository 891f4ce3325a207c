"""
LLM 服务封装 - 统一调用 OpenAI 兼容的对话补全接口
"""
from typing import Optional

import openai
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from kotonoha.core import Settings, get_settings, get_logger
from kotonoha.core.exceptions import ConfigurationError, UpstreamError

logger = get_logger(__name__)


class LLMService:
    """
    LLM 服务封装

    超时和重试交给 openai 客户端：429 / 408 / 409 / 5xx / 连接错误
    按指数退避重试 max_retries 次，其余状态直接失败。
    """

    def __init__(self, settings: Optional[Settings] = None, llm=None):
        """
        初始化 LLM 客户端

        Args:
            settings: 配置，默认读取全局配置
            llm: 已构造好的 LangChain chat model（测试注入用）
        """
        self.settings = settings or get_settings()
        self.model_name = self.settings.openai_model

        if llm is None:
            self.settings.require_llm_credentials()
            llm = ChatOpenAI(
                model=self.settings.openai_model,
                api_key=self.settings.openai_api_key,
                base_url=self.settings.openai_base_url,
                temperature=self.settings.llm_temperature,
                max_tokens=self.settings.llm_max_tokens,
                timeout=self.settings.llm_timeout,
                max_retries=self.settings.llm_max_retries,
                default_headers={
                    "HTTP-Referer": self.settings.site_url,
                    "X-Title": self.settings.app_title,
                },
            )
        self.llm = llm
        logger.info(f"LLM 服务初始化完成，使用模型: {self.model_name}")

    @staticmethod
    def _build_messages(system_prompt: str, user_prompt: str) -> list:
        messages = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=user_prompt))
        return messages

    @staticmethod
    def _extract_content(response) -> str:
        content = getattr(response, "content", "")
        if isinstance(content, list):
            # 部分兼容接口返回分块内容
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        if not content or not content.strip():
            raise UpstreamError("AIからの応答が空です", status_code=502)
        return content

    @staticmethod
    def _translate_error(e: Exception) -> UpstreamError:
        if isinstance(e, openai.APIStatusError):
            logger.error(f"LLM 接口返回错误: status={e.status_code}, error={e}")
            return UpstreamError(f"LLM API エラー: {e.status_code}", status_code=e.status_code)
        if isinstance(e, openai.APITimeoutError):
            logger.error(f"LLM 接口超时: {e}")
            return UpstreamError("LLM API タイムアウト", status_code=504)
        logger.error(f"LLM 接口连接失败: {e}")
        return UpstreamError("LLM API 接続エラー", status_code=502)

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        同步调用，返回完整补全文本

        Raises:
            UpstreamError: 非成功状态、超时、连接失败或空响应
        """
        try:
            response = self.llm.invoke(self._build_messages(system_prompt, user_prompt))
        except openai.APIError as e:
            raise self._translate_error(e) from e
        return self._extract_content(response)

    async def acomplete(self, system_prompt: str, user_prompt: str) -> str:
        """异步调用；任务被取消时底层 HTTP 请求一并中止"""
        try:
            response = await self.llm.ainvoke(self._build_messages(system_prompt, user_prompt))
        except openai.APIError as e:
            raise self._translate_error(e) from e
        return self._extract_content(response)


# 全局单例
_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """获取 LLM 服务单例"""
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
    return _llm_service
