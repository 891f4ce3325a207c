"""
提示词组装 - 把有效配置、参考素材和请求渲染成 system / user 两段指令

这里不引入任何随机性：相同输入必须得到逐字节相同的输出。
"""
from typing import Sequence

from kotonoha.models import (
    ComposedPrompt,
    ContentType,
    EffectiveConfig,
    GenerationRequest,
    SampledMaterial,
)
from kotonoha.models.style_payload import FrameworkSection
from kotonoha.services.pattern_format import (
    APPROACHES,
    TITLE_LABEL,
    approach_for,
    pattern_delimiter,
)

DEFAULT_RULES = "質問形式でエンゲージ。読点を多用。"
DEFAULT_TONE = "共感的・丁寧"
FREE_KEYWORDS = "自由"
NO_EXAMPLES = "（参考例なし）"
LIST_SEPARATOR = "、"

CONTENT_KIND = {
    ContentType.DIARY_LOGIC: "日記記事",
    ContentType.BOARD_TEMPLATE: "掲示板投稿文",
}

LENGTH_RULES = {
    ContentType.DIARY_LOGIC: "800〜1000文字程度（最低でも800文字以上）",
    ContentType.BOARD_TEMPLATE: "300〜500文字程度",
}

# 书写人设固定，只由常量组成，不拼接任何调用方输入
PERSONA_RULES = """【絶対に守るべきルール】
**書き手は男性です。読み手は女性です。**
- 男性が女性に向けて書いている文章にしてください
- 「私も女として...」のような女性視点の表現は絶対に使わないでください
- 男性が女性の悩みに寄り添い、解決を提案する立場で書いてください"""

CLOSING_LINE = "日本語で自然な会話口調で生成してください。"

CONCEPT_SYSTEM_PROMPT = """あなたは日本語表現に優れた心理的コピーライターです。
掲示板投稿文を作成してください。

{persona_rules}

【共通ルール】
{rules}

{framework_block}{extra_block}

【キー要素】
- トーン: {tone}
- 女性の悩み例: {dilemmas}
- 提供するテクニック例: {techniques}{vocabulary_line}

【今回のコンセプト: {concept_name}】
- フォーカス: {concept_focus}
- トーン: {concept_tone}
- キーワード例: {concept_keywords}

{closing}"""

STRUCTURED_STYLE_PROMPT = """あなたは日本語表現に優れた心理的コピーライターです。

【ルール】
{rules}

{framework_block}{extra_block}

【キー要素】
- トーン: {tone}
- 女性の悩み例: {dilemmas}
- 提供するテクニック例: {techniques}{vocabulary_line}

{persona_rules}

{closing}"""

USER_PROMPT = """{kind}を**{pattern_count}パターン**作成してください。

# 条件
{conditions}

# 参考例
{examples_text}

# 重要な指示（必ず守ること）
1. **{pattern_count}パターン**の**全く異なる内容**を作成してください。
2. 各パターンは{delimiter_examples}のように区切ってください。
3. 構成フレームワークの流れを意識しつつ、(Problem)(Agitation)などのラベルは**絶対に含めないでください**。
4. 各パターンの構成:
   - 1行目: 「{title_label}: 〇〇〇」
   - 2行目: 空行
   - 3行目以降: 本文
5. **本文は{length_rule}で書いてください。**
6. **本文は読みやすいように適切な位置で改行を入れてください。**1〜2文ごとに改行し、段落の区切りでは空行を入れてください。
7. **絶対禁止事項:**
   - 文字数を本文に記載しない（「(428文字)」「(合計文字数: 428)」など禁止）
   - 連絡先情報を含めない（メールアドレス、電話番号、LINE ID、SNSアカウント、URLなど禁止）

# 【超重要】各パターンの書き出しスタイル
**必ず以下の異なるスタイルで書き始めてください：**
{approach_lines}

**各パターンは冒頭のアプローチだけでなく、全体の構成・流れも変えてください。同じ内容の言い換えはNGです。**

# 出力フォーマット例
{format_example}"""

ADDENDUM_BLOCK = """

# 追加指示
{user_prompt}"""


def _join(items: Sequence[str]) -> str:
    return LIST_SEPARATOR.join(item for item in items if item)


def render_framework(sections: Sequence[FrameworkSection]) -> str:
    """【段落名】+ 説明 的顺序渲染；没有段落时返回空串"""
    if not sections:
        return ""
    body = "\n\n".join(f"【{s.name}】\n{s.description}" for s in sections)
    return (
        f"【必須の{len(sections)}段階構成フレームワーク】\n"
        f"以下の構成に従って文章を作成してください：\n\n{body}"
    )


def render_extra_sections(sections: Sequence[FrameworkSection]) -> str:
    """补充段落，紧跟在构成框架之后"""
    return "".join(f"\n\n【{s.name}】\n{s.description}" for s in sections)


def render_vocabulary(vocabulary: Sequence[str]) -> str:
    words = _join(vocabulary)
    return f"\n- 語彙: {words}" if words else ""


def render_keywords(keywords: Sequence[str]) -> str:
    cleaned = [kw.strip() for kw in keywords if kw and kw.strip()]
    return ", ".join(cleaned) if cleaned else FREE_KEYWORDS


def render_approaches(pattern_count: int) -> str:
    lines = []
    for i in range(1, pattern_count + 1):
        name, description = approach_for(i)
        if i <= len(APPROACHES):
            lines.append(f"- **パターン{i}（{name}）**: {description}")
        else:
            # 同じアプローチの二巡目以降は、先行パターンと場面・構成を変える
            first = (i - 1) % len(APPROACHES) + 1
            lines.append(
                f"- **パターン{i}（{name}・別の切り口）**: {description}。"
                f"パターン{first}とは異なる場面・構成で書く"
            )
    return "\n".join(lines)


def render_format_example(pattern_count: int) -> str:
    blocks = [
        f"""{pattern_delimiter(1)}
{TITLE_LABEL}: 魅力的なタイトルをここに

本文の最初の段落。
ここで一度改行。

次の段落はこのように空行を挟みます。
読みやすさを意識した文章を心がけてください。"""
    ]
    if pattern_count > 1:
        blocks.append(
            f"""{pattern_delimiter(2)}
{TITLE_LABEL}: 別のアプローチのタイトル

（以下同様）"""
        )
    return "\n\n".join(blocks)


class PromptComposer:
    """提示词组装器"""

    def compose(
        self,
        config: EffectiveConfig,
        material: SampledMaterial,
        request: GenerationRequest,
    ) -> ComposedPrompt:
        return ComposedPrompt(
            system_instruction=self.build_system_instruction(config),
            user_instruction=self.build_user_instruction(material, request),
        )

    def build_system_instruction(self, config: EffectiveConfig) -> str:
        if config.concept_mode:
            return CONCEPT_SYSTEM_PROMPT.format(
                persona_rules=PERSONA_RULES,
                rules=config.rules or DEFAULT_RULES,
                framework_block=render_framework(config.framework_sections),
                extra_block=render_extra_sections(config.extra_sections),
                tone=config.tone_hints or DEFAULT_TONE,
                dilemmas=_join(config.dilemma_examples),
                techniques=_join(config.technique_examples),
                vocabulary_line=render_vocabulary(config.vocabulary),
                concept_name=config.concept_name,
                concept_focus=config.concept_focus,
                concept_tone=config.concept_tone,
                concept_keywords=_join(config.concept_keywords),
                closing=CLOSING_LINE,
            )

        if config.structured:
            return STRUCTURED_STYLE_PROMPT.format(
                rules=config.rules or DEFAULT_RULES,
                framework_block=render_framework(config.framework_sections),
                extra_block=render_extra_sections(config.extra_sections),
                tone=config.tone_hints or DEFAULT_TONE,
                dilemmas=_join(config.dilemma_examples),
                techniques=_join(config.technique_examples),
                vocabulary_line=render_vocabulary(config.vocabulary),
                persona_rules=PERSONA_RULES,
                closing=CLOSING_LINE,
            )

        return f"{config.system_instruction.rstrip()}\n\n{PERSONA_RULES}\n\n{CLOSING_LINE}".lstrip()

    def build_user_instruction(
        self, material: SampledMaterial, request: GenerationRequest
    ) -> str:
        count = request.pattern_count

        conditions = [
            f"- キーワード: {render_keywords(request.selected_keywords)}",
            "  ※キーワードはそのまま使う必要はありません。"
            "前後の文脈や内容に合わせて自然な形に変化させてください。",
        ]
        if material.tip_text:
            conditions.append(material.tip_text)

        delimiter_examples = "".join(
            f"「{pattern_delimiter(i)}」" for i in range(1, min(count, 2) + 1)
        )

        prompt = USER_PROMPT.format(
            kind=CONTENT_KIND[request.content_type],
            pattern_count=count,
            conditions="\n".join(conditions),
            examples_text=material.examples_text.strip("\n") or NO_EXAMPLES,
            delimiter_examples=delimiter_examples,
            title_label=TITLE_LABEL,
            length_rule=LENGTH_RULES[request.content_type],
            approach_lines=render_approaches(count),
            format_example=render_format_example(count),
        )

        # 追加指示永远放在最后，不能覆盖前面的结构规则
        addendum = (request.user_prompt or "").strip()
        if addendum:
            prompt += ADDENDUM_BLOCK.format(user_prompt=addendum)
        return prompt
