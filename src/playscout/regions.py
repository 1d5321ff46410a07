"""KOPIS region codes and the display labels they are grouped under."""

from enum import IntEnum


class Region(IntEnum):
    """
    KOPIS ``signgucode`` values, one per metropolitan city or province.

    Member names are the short Korean region names used by KOPIS.
    """

    서울 = 11
    부산 = 26
    대구 = 27
    인천 = 28
    광주 = 29
    대전 = 30
    울산 = 31
    세종 = 36
    경기 = 41
    충북 = 43
    충남 = 44
    전북 = 45
    전남 = 46
    경북 = 47
    경남 = 48
    제주 = 50
    강원 = 51


# Regions shown together under one merged label. Anything not listed here
# is displayed under its own name.
REGION_LABELS: dict[Region, str] = {
    Region.경기: "경기/인천",
    Region.인천: "경기/인천",
    Region.전북: "전라",
    Region.전남: "전라",
    Region.경북: "경상",
    Region.경남: "경상",
    Region.충북: "충청",
    Region.충남: "충청",
}


def region_label(region: Region) -> str:
    """Return the display label a region's shows are stored under."""
    return REGION_LABELS.get(region, region.name)
