"""
结果解析 - 把模型的多パターン自由文本拆成结构化记录

纯函数、不做 I/O、不抛异常：非空输入至少返回一条，空输入返回空列表。
"""
from typing import Optional

from kotonoha.models import Pattern
from kotonoha.services.pattern_format import (
    DELIMITER_PATTERN,
    TITLE_LINE_PATTERN,
    approach_label,
)


def split_fragments(raw: str) -> list[str]:
    """按区切り拆分，丢弃空白片段并去除首尾空白"""
    return [part.strip() for part in DELIMITER_PATTERN.split(raw) if part.strip()]


def extract_title(fragment: str, index: int) -> tuple[str, str]:
    """
    提取タイトル行

    Returns:
        (title, body)；找不到タイトル行时使用 "Pattern <n>"，正文保持原样
    """
    match = TITLE_LINE_PATTERN.search(fragment)
    if not match or not match.group(1).strip():
        return f"Pattern {index}", fragment

    title = match.group(1).strip()
    line_end = fragment.find("\n", match.end())
    rest = fragment[line_end + 1:] if line_end != -1 else ""
    body = (fragment[:match.start()] + rest).strip()
    return title, body


def parse_patterns(raw: Optional[str], expected_count: Optional[int] = None) -> list[Pattern]:
    """
    解析模型输出

    Args:
        raw: 模型原始输出
        expected_count: 请求的パターン数，只用于对齐 approach 标签，不截断结果

    Returns:
        按原始顺序排列的 Pattern 列表
    """
    if raw is None or not raw.strip():
        return []

    fragments = split_fragments(raw)
    if not fragments:
        # 模型无视了区切り指示（或只输出了区切り本身）
        fragments = [raw.strip()]

    patterns = []
    for index, fragment in enumerate(fragments, start=1):
        title, body = extract_title(fragment, index)
        approach = approach_label(index)
        if expected_count is not None and index > expected_count:
            approach = f"パターン{index}"
        patterns.append(Pattern(approach=approach, title=title, content=body, raw=fragment))
    return patterns
