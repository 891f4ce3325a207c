"""
API 路由模块
"""
from fastapi import APIRouter
from .generate import router as generate_router
from .suggestions import router as suggestions_router

# 创建主路由
api_router = APIRouter(prefix="/api")

api_router.include_router(generate_router)
api_router.include_router(suggestions_router)

__all__ = ["api_router"]
