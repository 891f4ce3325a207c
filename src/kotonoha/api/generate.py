"""
文章生成 API 路由
"""
from fastapi import APIRouter, Depends, Request, Response

from kotonoha.api.disconnect import CLIENT_CLOSED_STATUS, run_until_disconnect
from kotonoha.core import get_logger
from kotonoha.core.exceptions import InvalidRequestError
from kotonoha.models import GenerationRequest
from kotonoha.services.generation_service import GenerationService, get_generation_service

logger = get_logger(__name__)
router = APIRouter(prefix="/generate", tags=["文章生成"])


@router.options("")
async def generate_preflight():
    """CORS 预检：空响应体"""
    return Response(status_code=200)


@router.post("")
async def generate(
    request: Request,
    service: GenerationService = Depends(get_generation_service),
):
    """
    生成多パターン文章

    参数校验在任何配置库 / 模型调用之前完成
    """
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidRequestError("リクエストボディが不正なJSONです")

    generation_request = GenerationRequest.from_payload(payload)

    result = await run_until_disconnect(request, service.agenerate(generation_request))
    if result is None:
        return Response(status_code=CLIENT_CLOSED_STATUS)
    return result.to_response()
