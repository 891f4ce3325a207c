"""
异常定义 - 生成流水线的错误分类

致命错误（请求级失败）都继承 GenerationError，由 API 层统一映射为 {"error": ...}。
配置 JSON 损坏不属于异常：解析时记录警告并退回默认值。
"""
from typing import Optional


class ConfigurationError(RuntimeError):
    """启动期配置错误（例如缺少大模型 API Key）"""


class GenerationError(Exception):
    """请求级致命错误基类"""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(GenerationError):
    """请求参数缺失或格式错误，在任何外部调用之前抛出"""

    status_code = 400

    def __init__(self, message: str, fields: Optional[list[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class ConfigNotFoundError(GenerationError):
    """基础写作风格不存在"""

    status_code = 404

    def __init__(self, slug: str):
        super().__init__(f"Writing style not found: {slug}")
        self.slug = slug


class UpstreamError(GenerationError):
    """大模型接口返回非成功状态或空内容"""

    status_code = 502
