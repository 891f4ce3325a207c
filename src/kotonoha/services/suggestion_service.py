"""
关键词提案服务 - 按手法和型让模型给出场景案与关键词片段，供前端关键词选择器使用
"""
import json
from typing import Any, Optional

from kotonoha.core import get_logger
from kotonoha.core.exceptions import UpstreamError
from kotonoha.models import SuggestionRequest, SuggestionResult
from kotonoha.models.suggestion import MAX_FRAGMENTS, MAX_THEMES
from kotonoha.services.llm_service import LLMService, get_llm_service

logger = get_logger(__name__)

# 手法 ID → 显示名；未知 ID 原样使用
METHOD_NAMES = {
    "teaser": "じらし式",
    "emotion": "感情動かし式",
    "mind": "マインド式",
    "instant": "即決式",
    "agitate": "感情煽り式",
}

# 型 ID → 显示名；未知 ID 原样使用
TEMPLATE_NAMES = {
    "secret": "秘密の体験日記",
    "solve": "問題解決型",
    "question": "疑問形タイトル",
    "seven_steps": "7ステップ",
    "impact": "インパクト",
    "healing": "癒しパートナー募集",
}

SUGGESTION_SYSTEM_PROMPT = """あなたは読み手の感情を動かす文章が得意なライターです。
ユーザーがキーワードを選べるよう、短く印象的なテーマと断片を提案してください。
回答は必ずJSON形式のみで出力してください。"""

SUGGESTION_USER_PROMPT = """モード: {mode}
手法: {method_name}
型: {template_name}

以下のJSON形式で提案を生成してください:
{{
  "themes": ["シチュエーション案1", "シチュエーション案2", "シチュエーション案3", "シチュエーション案4", "シチュエーション案5"],
  "fragments": ["五感キーワード1", "感情キーワード2", "シチュエーション3", "情景4", "形容詞5", "動詞6", "名詞7", "副詞8", "擬態語9", "雰囲気10"]
}}

themes: その手法と型に最適なシチュエーション案（{max_themes}つ）- 具体的な状況設定
fragments: 五感、感情、情景を表す言葉（{max_fragments}個）- 短い単語やフレーズ"""


def extract_json_object(raw: str) -> dict:
    """
    从模型输出中取出 JSON 对象

    允许 ```json 代码块包裹或前后夹杂说明文字。

    Raises:
        UpstreamError: 找不到可解析的 JSON 对象
    """
    text = raw.strip()
    if "```json" in text:
        text = text.split("```json", 1)[1].split("```", 1)[0]
    elif "```" in text:
        text = text.split("```", 1)[1].split("```", 1)[0]
    text = text.strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise UpstreamError("JSON解析に失敗しました", status_code=502)
        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError as e:
            raise UpstreamError("JSON解析に失敗しました", status_code=502) from e

    if not isinstance(data, dict):
        raise UpstreamError("JSON解析に失敗しました", status_code=502)
    return data


def _clean_list(value: Any, limit: int) -> list[str]:
    if not isinstance(value, list):
        return []
    cleaned = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return cleaned[:limit]


class SuggestionService:
    """关键词提案；与生成流水线共用同一个 LLMService"""

    def __init__(self, llm_service: LLMService):
        self.llm_service = llm_service

    def build_user_prompt(self, request: SuggestionRequest) -> str:
        return SUGGESTION_USER_PROMPT.format(
            mode=request.mode,
            method_name=METHOD_NAMES.get(request.method_id, request.method_id),
            template_name=TEMPLATE_NAMES.get(request.template_id, request.template_id),
            max_themes=MAX_THEMES,
            max_fragments=MAX_FRAGMENTS,
        )

    def _build_result(self, completion: str) -> SuggestionResult:
        data = extract_json_object(completion)
        result = SuggestionResult(
            themes=_clean_list(data.get("themes"), MAX_THEMES),
            fragments=_clean_list(data.get("fragments"), MAX_FRAGMENTS),
        )
        logger.info(f"提案生成完成: themes={len(result.themes)}, fragments={len(result.fragments)}")
        return result

    def suggest(self, request: SuggestionRequest) -> SuggestionResult:
        logger.info(
            f"开始生成提案: method={request.method_id}, template={request.template_id}, "
            f"mode={request.mode}"
        )
        completion = self.llm_service.complete(
            SUGGESTION_SYSTEM_PROMPT, self.build_user_prompt(request)
        )
        return self._build_result(completion)

    async def asuggest(self, request: SuggestionRequest) -> SuggestionResult:
        logger.info(
            f"开始生成提案: method={request.method_id}, template={request.template_id}, "
            f"mode={request.mode}"
        )
        completion = await self.llm_service.acomplete(
            SUGGESTION_SYSTEM_PROMPT, self.build_user_prompt(request)
        )
        return self._build_result(completion)


# 全局单例
_suggestion_service: Optional[SuggestionService] = None


def get_suggestion_service() -> SuggestionService:
    """获取提案服务单例"""
    global _suggestion_service
    if _suggestion_service is None:
        _suggestion_service = SuggestionService(llm_service=get_llm_service())
    return _suggestion_service
