"""
言の葉 (kotonoha) - 多パターン文章生成服务
"""
__version__ = "0.1.0"
