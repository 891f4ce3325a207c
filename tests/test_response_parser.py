"""
结果解析测试
"""
from kotonoha.services.response_parser import extract_title, parse_patterns, split_fragments


def test_scenario_english_delimiter_and_title() -> None:
    patterns = parse_patterns("---PATTERN1---\nTitle: 例1\n\n本文1")

    assert len(patterns) == 1
    assert patterns[0].title == "例1"
    assert patterns[0].content == "本文1"


def test_plain_text_falls_back_to_single_pattern() -> None:
    patterns = parse_patterns("ただの文章")

    assert len(patterns) == 1
    assert patterns[0].title == "Pattern 1"
    assert patterns[0].content == "ただの文章"


def test_no_delimiter_body_equals_trimmed_input() -> None:
    raw = "\n\n  一行目。\n二行目。\n\n次の段落。  \n"

    patterns = parse_patterns(raw)

    assert len(patterns) == 1
    assert patterns[0].content == raw.strip()


def test_fragments_keep_order_and_count() -> None:
    raw = (
        "---パターン1---\nタイトル: A\n\n本文A\n"
        "---パターン2---\nタイトル： B\n\n本文B\n"
        "---パターン3---\nタイトル:C\n\n本文C"
    )

    patterns = parse_patterns(raw, expected_count=3)

    assert [p.title for p in patterns] == ["A", "B", "C"]
    assert [p.content for p in patterns] == ["本文A", "本文B", "本文C"]
    assert [p.approach for p in patterns] == ["共感型", "提案型", "質問型"]


def test_blank_fragments_are_discarded() -> None:
    raw = "---パターン1---\n\n   \n---パターン2---\nタイトル: 残る\n\n本文"

    patterns = parse_patterns(raw)

    assert len(patterns) == 1
    assert patterns[0].title == "残る"


def test_preamble_before_first_delimiter_is_its_own_pattern() -> None:
    raw = "以下の通りです。\n---パターン1---\nタイトル: T\n\n本文"

    patterns = parse_patterns(raw)

    assert len(patterns) == 2
    assert patterns[0].title == "Pattern 1"
    assert patterns[1].title == "T"


def test_body_preserves_paragraph_and_line_breaks() -> None:
    raw = "---パターン1---\nタイトル: 改行\n\n一文目。\n二文目。\n\n二段落目。"

    pattern = parse_patterns(raw)[0]

    assert pattern.content == "一文目。\n二文目。\n\n二段落目。"


def test_extracted_body_never_contains_title_line() -> None:
    fragment = "前置き\nタイトル: 見出し\n\n本文"

    title, body = extract_title(fragment, 1)

    assert title == "見出し"
    assert "タイトル" not in body
    assert body == "前置き\n\n本文"


def test_title_missing_keeps_body_unchanged() -> None:
    title, body = extract_title("本文だけ\n二行目", 2)

    assert title == "Pattern 2"
    assert body == "本文だけ\n二行目"


def test_delimiter_only_output_falls_back_to_whole_text() -> None:
    patterns = parse_patterns("---パターン1---")

    assert len(patterns) == 1
    assert patterns[0].content == "---パターン1---"


def test_empty_input_returns_empty_list() -> None:
    assert parse_patterns("") == []
    assert parse_patterns("   \n") == []
    assert parse_patterns(None) == []


def test_split_fragments_tolerates_spaces_in_delimiter() -> None:
    assert split_fragments("--- パターン 1 ---\nA\n---パターン2---\nB") == ["A", "B"]


def test_extra_patterns_get_numbered_approach() -> None:
    raw = "---パターン1---\nA\n---パターン2---\nB"

    patterns = parse_patterns(raw, expected_count=1)

    assert patterns[1].approach == "パターン2"


def test_approach_labels_cycle_past_five() -> None:
    raw = "\n".join(f"---パターン{i}---\nタイトル: t{i}\n\n本文" for i in range(1, 8))

    patterns = parse_patterns(raw, expected_count=7)

    assert [p.approach for p in patterns] == [
        "共感型",
        "提案型",
        "質問型",
        "体験談型",
        "断言型",
        "共感型",
        "提案型",
    ]
