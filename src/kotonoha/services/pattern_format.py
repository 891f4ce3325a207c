"""
パターン区切りとタイトル行の書式 - 提示词组装与结果解析共用
"""
import re

TITLE_LABEL = "タイトル"

# 区切り: ---パターン1--- （模型偶尔输出英文 PATTERN，一并兼容）
DELIMITER_PATTERN = re.compile(r"---\s*(?:パターン|PATTERN)\s*\d+\s*---", re.IGNORECASE)

# タイトル行: 全角/半角コロン都接受
TITLE_LINE_PATTERN = re.compile(
    r"^[ \t]*(?:タイトル|Title)[ \t]*[:：][ \t]*(.+?)[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

# 各パターンの書き出しアプローチ（顺序即パターン番号）
APPROACHES: list[tuple[str, str]] = [
    ("共感型", "「私も同じ悩みを抱えていました...」のように自分の経験や悩みへの共感から始める"),
    ("提案型", "「こんな体験ができます」「〇〇を実現しませんか」のようにメリットや解決策から始める"),
    ("質問型", "「〇〇で悩んでいませんか？」「〇〇を知っていますか？」のように読者への質問から始める"),
    ("体験談型", "「先日、こんなことがありました」のように具体的な場面の描写から始める"),
    ("断言型", "「〇〇は必ず変えられます」のように言い切りの一文で結論から始める"),
]


def pattern_delimiter(index: int) -> str:
    """1 始まりの区切りトークン"""
    return f"---パターン{index}---"


def approach_for(index: int) -> tuple[str, str]:
    """1 始まりの番号に対応する (アプローチ名, 説明)；5 を超えると先頭から循環"""
    return APPROACHES[(index - 1) % len(APPROACHES)]


def approach_label(index: int) -> str:
    """1 始まりの番号に対応するアプローチ名"""
    if index < 1:
        return f"パターン{index}"
    return approach_for(index)[0]
