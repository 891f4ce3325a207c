"""
演示数据 - 初始化配置库用的风格、概念、参考例和写作技巧
"""
import json

from sqlmodel import Session, select

from kotonoha.core import get_logger
from kotonoha.models import KnowledgeChunk, ReferenceDiary, WritingStyle

logger = get_logger(__name__)

BOARD_COMMON = {
    "schema_version": 1,
    "rules": "質問形式で読み手を巻き込む。読点を多用し、短い文でテンポよく書く。",
    "framework": {
        "1_problem": {"name": "悩みの提示", "description": "読み手が抱えていそうな悩みを具体的に言い当てる"},
        "2_agitation": {"name": "悩みの深掘り", "description": "放置した場合の気持ちや状況を想像させる"},
        "3_solution": {"name": "解決の提示", "description": "書き手が力になれることを押し付けずに伝える"},
        "4_narrow": {"name": "絞り込み", "description": "どんな人に読んでほしいかを明確にする"},
        "5_action": {"name": "行動の後押し", "description": "気軽に返信できる一言で締めくくる"},
    },
    "key_elements": {
        "tone": "共感的・丁寧",
        "dilemmas": ["話を聞いてくれる人がいない", "毎日が同じことの繰り返し"],
        "techniques": ["相手の言葉を繰り返す", "具体的な場面を一つだけ描く"],
    },
}

CONCEPTS = {
    "healing": {
        "name": "癒しパートナー募集",
        "payload": {
            "focus": "忙しい毎日の中で一息つける時間を提案する",
            "tone": "穏やか・包容力",
            "example_keywords": ["カフェ", "散歩", "週末"],
            "base_templates": ["癒し"],
        },
    },
    "question": {
        "name": "疑問形タイトル",
        "payload": {
            "focus": "読み手が思わず答えたくなる問いかけで始める",
            "tone": "軽快・親しみ",
            "example_keywords": ["本音", "きっかけ"],
            "base_templates": ["疑問"],
        },
    },
}

PANA_EMOTION_PROMPT = """あなたは感情に寄り添う文章を得意とするライターです。
PANAの法則（Problem / Affinity / Solution / Action）の流れで、読み手の心が少しずつ動く文章を書いてください。"""

REFERENCE_DIARIES = [
    {
        "title": "雨の日のカフェで",
        "body": "窓の外は朝からずっと雨。\nいつもの席で、温かいラテを頼みました。\n\n誰かとゆっくり話したい、そんな気分の午後でした。",
        "content_type": "diary_logic",
        "style": "pana_emotion",
    },
    {
        "title": "週末だけの楽しみ",
        "body": "平日は仕事に追われて、自分の時間なんてほとんどない。\n\nだからこそ、週末の朝の散歩が何より大切なんです。",
        "content_type": "board_template",
        "style": "pana_emotion",
    },
    {
        "title": "癒しの時間を一緒に",
        "body": "頑張りすぎていませんか？\nたまには誰かに甘えてもいいと思うんです。",
        "content_type": "board_temp",
        "style": None,
    },
    {
        "title": "疑問：本音で話せる相手、いますか？",
        "body": "最近、心から笑ったのはいつですか？\n\n気軽に話せる相手を探しています。",
        "content_type": "board_temp",
        "style": None,
    },
]

WRITING_TIPS = [
    "冒頭の一文は15文字以内に収める",
    "五感のうち一つを必ず描写する",
    "最後は読み手が答えやすい質問で締める",
]


def seed_demo_data(engine) -> int:
    """
    写入演示数据；已存在 board_common 时跳过

    Returns:
        新写入的记录数
    """
    with Session(engine) as session:
        if session.exec(select(WritingStyle).where(WritingStyle.slug == "board_common")).first():
            logger.info("演示数据已存在，跳过")
            return 0

        styles = {
            "pana_emotion": WritingStyle(
                slug="pana_emotion", name="PANA感情型", system_prompt=PANA_EMOTION_PROMPT
            ),
            "board_common": WritingStyle(
                slug="board_common",
                name="掲示板共通",
                system_prompt=json.dumps(BOARD_COMMON, ensure_ascii=False),
            ),
        }
        for concept_id, concept in CONCEPTS.items():
            slug = f"board_concept_{concept_id}"
            styles[slug] = WritingStyle(
                slug=slug,
                name=concept["name"],
                system_prompt=json.dumps(concept["payload"], ensure_ascii=False),
            )
        session.add_all(styles.values())
        session.commit()

        count = len(styles)
        pana_id = styles["pana_emotion"].id
        for diary in REFERENCE_DIARIES:
            session.add(
                ReferenceDiary(
                    title=diary["title"],
                    body=diary["body"],
                    content_type=diary["content_type"],
                    style_id=pana_id if diary["style"] else None,
                )
            )
            count += 1

        for tip in WRITING_TIPS:
            session.add(KnowledgeChunk(content=tip, category="board_writing_tip", style_id=pana_id))
            count += 1

        session.commit()

    logger.info(f"演示数据写入完成: {count} 条")
    return count
