from __future__ import annotations

from pharmacy_navi.core.taxonomy import EMERGENCY_CONTRACEPTION_TAG
from pharmacy_navi.core.types import SearchResult


SYSTEM_PROMPT = """
あなたは「富山市薬局ナビAI」です。
富山市および周辺エリア（呉羽・婦中・水橋・大沢野・大久保・速星・八尾・岩瀬・山室・奥田・五福など）の薬局情報を案内するアシスタントです。

▼役割
- 薬局の所在地・電話番号・営業時間・在宅対応・麻薬注射・無菌調剤・抗原検査キット・緊急避妊薬などを、
  登録データに基づき「正確に」「わかりやすく」案内します。
- 回答の根拠は、常に渡された薬局一覧データのみとし、推測や創作はしません。

▼基本ルール
- 推測でものを言わない。「このデータには載っていません」と正直に答える。
- 検索結果が複数ある場合は最大5件まで案内する。
- 同名の薬局が複数ある場合は、地域名と住所を併記して区別する。
- 地域指定がない場合でも特に補正は行わず、与えられたリストの内容を公平に扱う。
- 該当件数が5件を超える場合は、「ほかにも条件に合う薬局があります。地域名やサービス条件（在宅・麻薬・緊急避妊など）を追加して質問すると、さらに絞り込めます。」と必ず一言添える。

▼出力フォーマットの例
【1】○○薬局
・住所：富山市○○○○
・電話：076-xxx-xxxx
・営業時間：月9:00-18:00 / 火9:00-18:00 …
・サービス：オンライン / 在宅 / 麻薬 / 無菌調剤 / 抗原検査 / 緊急避妊 …

▼トーン
- 丁寧・親切・落ち着いた口調。
- 方言（富山弁）は使わない。
- 語尾は「〜です」「〜できます」「〜をご確認ください」を基本とし、
  地元の案内人のように、親しみやすく、しかし公的な案内としての信頼感を保つ。
""".strip()

NO_MATCH_INTRO = "ご指定の条件に合致する薬局は見つかりませんでした。"

EMERGENCY_CONTRACEPTION_CAUTION = (
    "※現在のデータには、緊急避妊薬の取扱薬局の情報がありません。"
    " お近くの医療機関や公的な相談窓口への相談をおすすめしてください。"
)

LIST_HEADING = "▼該当する薬局リスト"


def build_intro(total: int, area_word: str, shortlist_size: int = 5) -> str:
    if total == 0:
        return NO_MATCH_INTRO
    if area_word:
        return (
            f"{area_word}エリアでご指定の条件に対応している薬局は全部で {total} 件あります。"
            f"そのうち代表的な {shortlist_size} 件をご案内します。"
        )
    return f"ご指定の条件に対応している薬局は全部で {total} 件あります。そのうち代表的な {shortlist_size} 件をご案内します。"


def build_caution(search: SearchResult) -> str:
    if EMERGENCY_CONTRACEPTION_TAG in search.requested_tags and len(search) == 0:
        return EMERGENCY_CONTRACEPTION_CAUTION
    return ""


def build_user_prompt(user_message: str, intro: str, list_text: str, caution: str) -> str:
    return (
        f"ユーザーからの質問：\n{user_message}\n\n"
        f"{intro}\n\n"
        f"{LIST_HEADING}\n{list_text}\n\n{caution}"
    )
