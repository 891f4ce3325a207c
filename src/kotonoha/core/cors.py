"""
CORS 中间件 - 预检请求返回空响应体
"""
from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

# 由 Response 自己重新计算
_BODY_HEADERS = ("content-length", "content-type")


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """与 CORSMiddleware 相同，只是通过校验的预检返回空 200"""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers=request_headers)
        if response.status_code != 200:
            return response
        headers = {
            key: value for key, value in response.headers.items() if key not in _BODY_HEADERS
        }
        return Response(status_code=200, headers=headers)
