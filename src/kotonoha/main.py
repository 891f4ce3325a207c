"""
FastAPI 应用入口
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kotonoha.core import setup_logging, get_settings, get_logger
from kotonoha.core.cors import EmptyPreflightCORSMiddleware
from kotonoha.core.exceptions import GenerationError
from kotonoha.api import api_router

# 初始化日志
settings = get_settings()
setup_logging(settings.log_level)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 缺少模型密钥时直接拒绝启动，而不是等到第一次请求才失败
    settings.require_llm_credentials()
    logger.info(f"言の葉 生成 API 启动中... model={settings.openai_model}")
    yield
    logger.info("言の葉 生成 API 关闭")


# 创建 FastAPI 应用
app = FastAPI(
    title="言の葉 生成 API",
    description="写作风格 + 模板 + 关键词 → 多パターン文章生成",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS 中间件：允许所有来源和任意请求头，预检返回空 200
allow_all = "*" in settings.cors_origins
app.add_middleware(
    EmptyPreflightCORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=not allow_all,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    """请求级致命错误统一映射为 {"error": ...}"""
    if exc.status_code >= 500:
        logger.error(f"生成失败: {exc.message}")
    else:
        logger.warning(f"请求被拒绝: status={exc.status_code}, error={exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"error": f"パラメータが不正です: {', '.join(fields)}"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"未处理的异常: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})


# 注册 API 路由
app.include_router(api_router)


@app.get("/")
async def root():
    """健康检查"""
    return {"status": "ok", "message": "言の葉 生成 API 运行中"}


@app.get("/health")
async def health():
    """健康检查"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"启动服务: http://{settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "kotonoha.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
