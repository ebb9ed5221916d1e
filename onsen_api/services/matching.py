"""フリーワード・タグの一致判定

DB非依存のロジック。大文字小文字と全角半角の違いを無視した部分一致のみで、
形態素解析やスコアリングは行わない。
"""
import re
import unicodedata
from typing import List, Optional

# 半角・全角カンマで区切る（読点「、」は語の一部）
TAG_SEPARATORS = re.compile(r"[,，]")


def _fold(text: str) -> str:
    """全角英数→半角、半角カナ→全角に正規化してから小文字化"""
    return unicodedata.normalize("NFKC", text).lower()


def matches_text(entry, query: Optional[str]) -> bool:
    """名称または説明にqueryを含むならTrue。空のqueryは全件一致"""
    if not query or not query.strip():
        return True
    needle = _fold(query.strip())
    for field in (entry.name, entry.description):
        if field and needle in _fold(field):
            return True
    return False


def parse_tags(tag_filter: Optional[str]) -> List[str]:
    """カンマ区切りのタグ指定を、空白除去済み・重複なしの語リストにする"""
    if not tag_filter:
        return []
    terms = []
    for raw in TAG_SEPARATORS.split(tag_filter):
        term = raw.strip()
        if term and term not in terms:
            terms.append(term)
    return terms


def matches_tags(entry, tag_filter: Optional[str]) -> bool:
    """タグ文字列にいずれかの語を含むならTrue（OR条件）"""
    terms = parse_tags(tag_filter)
    if not terms:
        return True
    if not entry.tags:
        return False
    haystack = _fold(entry.tags)
    return any(_fold(term) in haystack for term in terms)
