"""
关键词提案 API 路由
"""
from fastapi import APIRouter, Depends, Request, Response

from kotonoha.api.disconnect import CLIENT_CLOSED_STATUS, run_until_disconnect
from kotonoha.core.exceptions import InvalidRequestError
from kotonoha.models import SuggestionRequest
from kotonoha.services.suggestion_service import SuggestionService, get_suggestion_service

router = APIRouter(prefix="/suggestions", tags=["关键词提案"])


@router.options("")
async def suggestions_preflight():
    """CORS 预检：空响应体"""
    return Response(status_code=200)


@router.post("")
async def suggest(
    request: Request,
    service: SuggestionService = Depends(get_suggestion_service),
):
    """按手法和型生成场景案与关键词片段"""
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidRequestError("リクエストボディが不正なJSONです")

    suggestion_request = SuggestionRequest.from_payload(payload)

    result = await run_until_disconnect(request, service.asuggest(suggestion_request))
    if result is None:
        return Response(status_code=CLIENT_CLOSED_STATUS)
    return result.to_response()
