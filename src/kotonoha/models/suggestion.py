"""
关键词提案的数据类型
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kotonoha.core.exceptions import InvalidRequestError

SUGGESTION_REQUIRED_FIELDS = ("methodId", "templateId", "mode")
MAX_THEMES = 5
MAX_FRAGMENTS = 10


class SuggestionRequest(BaseModel):
    """提案请求：手法 ID + 型 ID + 模式"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    method_id: str = Field(alias="methodId", min_length=1)
    template_id: str = Field(alias="templateId", min_length=1)
    mode: str = Field(min_length=1)

    @classmethod
    def from_payload(cls, payload: Any) -> "SuggestionRequest":
        """
        从请求体构造并校验；空字符串视同缺失

        Raises:
            InvalidRequestError: 缺少必填字段或字段格式错误
        """
        if not isinstance(payload, dict):
            raise InvalidRequestError("リクエストボディはJSONオブジェクトである必要があります")

        missing = [name for name in SUGGESTION_REQUIRED_FIELDS if not payload.get(name)]
        if missing:
            raise InvalidRequestError(
                f"必須パラメータが不足しています: {', '.join(missing)}", fields=missing
            )

        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            raise InvalidRequestError(
                f"パラメータが不正です: {', '.join(fields)}", fields=fields
            ) from e


class SuggestionResult(BaseModel):
    """提案结果：场景案 + 关键词片段"""

    themes: list[str] = Field(default_factory=list)
    fragments: list[str] = Field(default_factory=list)

    def to_response(self) -> dict:
        return {"result": {"themes": self.themes, "fragments": self.fragments}}
