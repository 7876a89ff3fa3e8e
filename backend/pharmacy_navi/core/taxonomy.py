from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TagDefinition:
    canonical: str
    keywords: tuple[str, ...]


# --------------------
# Well-known spreadsheet headers
# --------------------

COL_NAME = "薬局名"
COL_REGION = "地域"
COL_ADDRESS = "住所"
COL_LOCATION = "所在地"
COL_TAGS = "総合タグ"
COL_WEEKDAY_OUTPATIENT = "曜日タグ_外来"
COL_WEEKDAY_HOME = "曜日タグ_在宅"

OPENING_HOURS_MARKER = "開局時間"

PHONE_HEADERS = (
    "電話番号",
    "TEL",
    "連絡先電話番号",
    "連絡先電話番号（開局中）",
)

OUTPATIENT_SUFFIX = "外来"
HOME_VISIT_SUFFIX = "在宅"


# --------------------
# Service tags (order is match priority)
# --------------------

HOME_VISIT_TAG = "在宅"
EMERGENCY_CONTRACEPTION_TAG = "緊急避妊"

SERVICE_TAGS: tuple[TagDefinition, ...] = (
    TagDefinition("オンライン", ("オンライン", "オンライン服薬指導", "オンライン診療")),
    TagDefinition(
        "抗原",
        (
            "抗原",
            "抗原検査",
            "抗原検査キット",
            "検査キット",
            "検査薬",
            "コロナ",
            "コロナ検査",
            "インフル",
            "インフルエンザ",
        ),
    ),
    TagDefinition(HOME_VISIT_TAG, ("在宅", "訪問", "在宅医療", "往診", "訪問対応")),
    TagDefinition("麻薬", ("麻薬", "麻薬注射")),
    TagDefinition("無菌調剤", ("無菌", "無菌調剤", "無菌製剤")),
    TagDefinition(
        EMERGENCY_CONTRACEPTION_TAG,
        ("避妊", "緊急避妊", "緊急避妊薬", "アフターピル", "モーニングアフターピル", "ピル"),
    ),
    TagDefinition(
        "土曜在宅",
        ("土曜在宅", "土曜日在宅", "土曜に在宅", "土曜日に在宅", "土曜日 在宅対応", "土曜 在宅対応"),
    ),
    TagDefinition(
        "土曜外来",
        ("土曜外来", "土曜日外来", "土曜に開いている薬局", "土曜日に開いている薬局", "土曜日 開いている薬局"),
    ),
)


# --------------------
# Weekdays
# --------------------

# 平日 is matched as Friday: legacy sheets keep weekday hours in the Friday slot.
WEEKDAY_TAGS: tuple[TagDefinition, ...] = (
    TagDefinition("月曜", ("月曜", "月曜日")),
    TagDefinition("火曜", ("火曜", "火曜日")),
    TagDefinition("水曜", ("水曜", "水曜日")),
    TagDefinition("木曜", ("木曜", "木曜日")),
    TagDefinition("金曜", ("金曜", "金曜日", "平日")),
    TagDefinition("土曜", ("土曜", "土曜日")),
    TagDefinition("日曜", ("日曜", "日曜日")),
    TagDefinition("祝日", ("祝日", "祭日")),
)

# Opening-hours columns: display label -> header patterns, in display order.
OPENING_HOURS_DAYS: tuple[TagDefinition, ...] = (
    TagDefinition("月", ("月曜", "月曜日")),
    TagDefinition("火", ("火曜", "火曜日")),
    TagDefinition("水", ("水曜", "水曜日")),
    TagDefinition("木", ("木曜", "木曜日")),
    TagDefinition("金", ("金曜", "金曜日", "平日")),
    TagDefinition("土", ("土曜", "土曜日")),
    TagDefinition("日", ("日曜", "日曜日")),
    TagDefinition("祝", ("祝日", "祝祭日")),
)

HOURS_PLACEHOLDERS = frozenset({"-", "－"})


# --------------------
# Query vocabulary
# --------------------

KEEP_WORDS = ("日曜日", "日曜", "土曜日", "土曜", "祝日", "平日", "休日")

STOP_PHRASES = (
    "について教えて",
    "について知りたい",
    "について",
    "を教えて",
    "が知りたい",
    "知りたい",
    "教えて",
    "の店舗を知りたい",
    "の店舗",
)

OPEN_NOW_PHRASES = (
    "開いている",
    "開いてる",
    "空いている",
    "空いてる",
    "やっている",
    "やってる",
    "営業している",
    "営業中",
)

PUNCTUATION = "、。.,，"
PARTICLES = "ではがをにへとってからまでよりへで"

GENERIC_WORDS = ("薬局", "店舗", "店", "薬")

AREA_SUFFIXES = ("エリア", "地域", "周辺", "付近")
NOISE_WORDS = frozenset({"地域", "周辺", "近く", "あたり", "付近"})
ADMIN_SUFFIXES = ("市内", "市", "町", "村", "区")


# --------------------
# Drugstore chains
# --------------------

DRUGSTORE_KEYWORDS = ("ドラッグストア", "ドラッグ")

DRUGSTORE_CHAINS = (
    "ウエルシア",
    "Vドラッグ",
    "Ｖドラッグ",
    "クスリのアオキ",
    "ドラッグセイムス",
    "シメノドラッグ",
    "スギ薬局",
    "マツモトキヨシ",
)
