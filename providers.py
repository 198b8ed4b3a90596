"""Pluggable data providers for Hijri dates, Qibla bearing and ayah text.

The engine consumes these through small protocols; the bundled implementations
are explicit placeholders until real data sources are wired in.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Protocol, Tuple

from user_state import InvalidArgumentError, require_int

LOGGER = logging.getLogger(__name__)

HIJRI_MONTHS = [
    "Muharram",
    "Safar",
    "Rabi al-Awwal",
    "Rabi al-Thani",
    "Jumada al-Ula",
    "Jumada al-Thaniyah",
    "Rajab",
    "Sha'ban",
    "Ramadan",
    "Shawwal",
    "Dhu al-Qa'dah",
    "Dhu al-Hijjah",
]


@dataclass(frozen=True)
class SurahInfo:
    number: int
    name: str
    arabic_name: str
    ayah_count: int


_SURAH_METADATA: List[Tuple[int, str, str, int]] = [
    (1, "Al-Fatiha", "الفاتحة", 7),
    (2, "Al-Baqarah", "البقرة", 286),
    (3, "Aal-Imran", "آل عمران", 200),
    (4, "An-Nisa", "النساء", 176),
    (5, "Al-Ma'idah", "المائدة", 120),
    (6, "Al-An'am", "الأنعام", 165),
    (7, "Al-A'raf", "الأعراف", 206),
    (8, "Al-Anfal", "الأنفال", 75),
    (9, "At-Tawbah", "التوبة", 129),
    (10, "Yunus", "يونس", 109),
    (11, "Hud", "هود", 123),
    (12, "Yusuf", "يوسف", 111),
    (13, "Ar-Ra'd", "الرعد", 43),
    (14, "Ibrahim", "إبراهيم", 52),
    (15, "Al-Hijr", "الحجر", 99),
    (16, "An-Nahl", "النحل", 128),
    (17, "Al-Isra", "الإسراء", 111),
    (18, "Al-Kahf", "الكهف", 110),
    (19, "Maryam", "مريم", 98),
    (20, "Ta-Ha", "طه", 135),
    (21, "Al-Anbiya", "الأنبياء", 112),
    (22, "Al-Hajj", "الحج", 78),
    (23, "Al-Mu'minun", "المؤمنون", 118),
    (24, "An-Nur", "النور", 64),
    (25, "Al-Furqan", "الفرقان", 77),
    (26, "Ash-Shu'ara", "الشعراء", 227),
    (27, "An-Naml", "النمل", 93),
    (28, "Al-Qasas", "القصص", 88),
    (29, "Al-Ankabut", "العنكبوت", 69),
    (30, "Ar-Rum", "الروم", 60),
    (31, "Luqman", "لقمان", 34),
    (32, "As-Sajdah", "السجدة", 30),
    (33, "Al-Ahzab", "الأحزاب", 73),
    (34, "Saba", "سبأ", 54),
    (35, "Fatir", "فاطر", 45),
    (36, "Ya-Sin", "يس", 83),
    (37, "As-Saffat", "الصافات", 182),
    (38, "Sad", "ص", 88),
    (39, "Az-Zumar", "الزمر", 75),
    (40, "Ghafir", "غافر", 85),
    (41, "Fussilat", "فصلت", 54),
    (42, "Ash-Shuraa", "الشورى", 53),
    (43, "Az-Zukhruf", "الزخرف", 89),
    (44, "Ad-Dukhan", "الدخان", 59),
    (45, "Al-Jathiyah", "الجاثية", 37),
    (46, "Al-Ahqaf", "الأحقاف", 35),
    (47, "Muhammad", "محمد", 38),
    (48, "Al-Fath", "الفتح", 29),
    (49, "Al-Hujurat", "الحجرات", 18),
    (50, "Qaf", "ق", 45),
    (51, "Adh-Dhariyat", "الذاريات", 60),
    (52, "At-Tur", "الطور", 49),
    (53, "An-Najm", "النجم", 62),
    (54, "Al-Qamar", "القمر", 55),
    (55, "Ar-Rahman", "الرحمن", 78),
    (56, "Al-Waqi'ah", "الواقعة", 96),
    (57, "Al-Hadid", "الحديد", 29),
    (58, "Al-Mujadila", "المجادلة", 22),
    (59, "Al-Hashr", "الحشر", 24),
    (60, "Al-Mumtahanah", "الممتحنة", 13),
    (61, "As-Saff", "الصف", 14),
    (62, "Al-Jumu'ah", "الجمعة", 11),
    (63, "Al-Munafiqun", "المنافقون", 11),
    (64, "At-Taghabun", "التغابن", 18),
    (65, "At-Talaq", "الطلاق", 12),
    (66, "At-Tahrim", "التحريم", 12),
    (67, "Al-Mulk", "الملك", 30),
    (68, "Al-Qalam", "القلم", 52),
    (69, "Al-Haqqah", "الحاقة", 52),
    (70, "Al-Ma'arij", "المعارج", 44),
    (71, "Nuh", "نوح", 28),
    (72, "Al-Jinn", "الجن", 28),
    (73, "Al-Muzzammil", "المزمل", 20),
    (74, "Al-Muddathir", "المدثر", 56),
    (75, "Al-Qiyamah", "القيامة", 40),
    (76, "Al-Insan", "الإنسان", 31),
    (77, "Al-Mursalat", "المرسلات", 50),
    (78, "An-Naba", "النبأ", 40),
    (79, "An-Nazi'at", "النازعات", 46),
    (80, "Abasa", "عبس", 42),
    (81, "At-Takwir", "التكوير", 29),
    (82, "Al-Infitar", "الانفطار", 19),
    (83, "Al-Mutaffifin", "المطففين", 36),
    (84, "Al-Inshiqaq", "الانشقاق", 25),
    (85, "Al-Buruj", "البروج", 22),
    (86, "At-Tariq", "الطارق", 17),
    (87, "Al-A'la", "الأعلى", 19),
    (88, "Al-Ghashiyah", "الغاشية", 26),
    (89, "Al-Fajr", "الفجر", 30),
    (90, "Al-Balad", "البلد", 20),
    (91, "Ash-Shams", "الشمس", 15),
    (92, "Al-Layl", "الليل", 21),
    (93, "Ad-Duha", "الضحى", 11),
    (94, "Ash-Sharh", "الشرح", 8),
    (95, "At-Tin", "التين", 8),
    (96, "Al-Alaq", "العلق", 19),
    (97, "Al-Qadr", "القدر", 5),
    (98, "Al-Bayyinah", "البينة", 8),
    (99, "Az-Zalzalah", "الزلزلة", 8),
    (100, "Al-Adiyat", "العاديات", 11),
    (101, "Al-Qari'ah", "القارعة", 11),
    (102, "At-Takathur", "التكاثر", 8),
    (103, "Al-Asr", "العصر", 3),
    (104, "Al-Humazah", "الهمزة", 9),
    (105, "Al-Fil", "الفيل", 5),
    (106, "Quraysh", "قريش", 4),
    (107, "Al-Ma'un", "الماعون", 7),
    (108, "Al-Kawthar", "الكوثر", 3),
    (109, "Al-Kafirun", "الكافرون", 6),
    (110, "An-Nasr", "النصر", 3),
    (111, "Al-Masad", "المسد", 5),
    (112, "Al-Ikhlas", "الإخلاص", 4),
    (113, "Al-Falaq", "الفلق", 5),
    (114, "An-Nas", "الناس", 6),
]

SURAH_DATA: List[SurahInfo] = [
    SurahInfo(number=number, name=name, arabic_name=arabic, ayah_count=count)
    for number, name, arabic, count in _SURAH_METADATA
]
_SURAH_BY_NUMBER: Dict[int, SurahInfo] = {surah.number: surah for surah in SURAH_DATA}


def surah_info(number: int) -> SurahInfo:
    try:
        return _SURAH_BY_NUMBER[number]
    except KeyError:
        raise InvalidArgumentError(f"Surah number must be between 1 and {len(SURAH_DATA)}: {number}") from None


def validate_ayah(surah: int, ayah: int) -> SurahInfo:
    """Ensure *ayah* exists in *surah*, returning the surah metadata."""
    require_int(surah, "surah")
    require_int(ayah, "ayah")
    info = surah_info(surah)
    if not 1 <= ayah <= info.ayah_count:
        raise InvalidArgumentError(f"Surah {info.name} has {info.ayah_count} ayahs; got {ayah}")
    return info


def next_ayah(surah: int, ayah: int) -> Optional[int]:
    """Return the following ayah number within the surah, or None at its end."""
    info = validate_ayah(surah, ayah)
    return ayah + 1 if ayah < info.ayah_count else None


def previous_ayah(surah: int, ayah: int) -> Optional[int]:
    validate_ayah(surah, ayah)
    return ayah - 1 if ayah > 1 else None


@dataclass(frozen=True)
class HijriDate:
    day: int
    month: int
    year: int

    @property
    def month_name(self) -> str:
        return HIJRI_MONTHS[self.month - 1]

    def __str__(self) -> str:
        return f"{self.day} {self.month_name} {self.year} AH"


@dataclass(frozen=True)
class AyahText:
    arabic: str
    translation: str
    transliteration: str


class HijriDateProvider(Protocol):
    def hijri_date(self, day: date) -> HijriDate:
        ...


class QiblaProvider(Protocol):
    def qibla_bearing(self, latitude: float, longitude: float) -> float:
        ...


class AyahTextProvider(Protocol):
    def ayah(self, surah: int, ayah: int) -> AyahText:
        ...


class FixedHijriDateProvider:
    """Placeholder that reports the same Hijri date for every day."""

    def __init__(self, fixed: HijriDate = HijriDate(day=15, month=8, year=1445)) -> None:
        self.fixed = fixed

    def hijri_date(self, day: date) -> HijriDate:
        LOGGER.debug("Returning placeholder Hijri date %s for %s", self.fixed, day)
        return self.fixed


class FixedQiblaProvider:
    """Placeholder bearing (south-east) regardless of coordinates."""

    def __init__(self, bearing: float = 135.0) -> None:
        self.bearing = bearing

    def qibla_bearing(self, latitude: float, longitude: float) -> float:
        LOGGER.debug("Returning placeholder Qibla bearing %.1f for (%s, %s)", self.bearing, latitude, longitude)
        return self.bearing


class PlaceholderAyahProvider:
    """Knows only Al-Fatiha 1:1; every other ayah reports itself unavailable."""

    _KNOWN: Dict[Tuple[int, int], AyahText] = {
        (1, 1): AyahText(
            arabic="بِسْمِ اللَّهِ الرَّحْمَٰنِ الرَّحِيمِ",
            translation="In the name of Allah, the Most Gracious, the Most Merciful",
            transliteration="Bismillāhir-Raĥmānir-Raĥīm",
        ),
    }
    _UNAVAILABLE = AyahText(
        arabic="الآية غير متوفرة",
        translation="Ayah temporarily unavailable",
        transliteration="Ayah temporarily unavailable",
    )

    def ayah(self, surah: int, ayah: int) -> AyahText:
        validate_ayah(surah, ayah)
        return self._KNOWN.get((surah, ayah), self._UNAVAILABLE)
