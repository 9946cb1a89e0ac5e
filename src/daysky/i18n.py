"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "하루의 하늘",
        "en": "DaySky",
    },
    # Sun events
    "astro_twilight_begin": {
        "ko": "천문박명 시작",
        "en": "Astronomical Twilight Begin",
    },
    "nautical_twilight_begin": {
        "ko": "항해박명 시작",
        "en": "Nautical Twilight Begin",
    },
    "civil_twilight_begin": {
        "ko": "시민박명 시작",
        "en": "Civil Twilight Begin",
    },
    "sunrise": {
        "ko": "일출",
        "en": "Sunrise",
    },
    "solar_noon": {
        "ko": "남중",
        "en": "Solar Noon",
    },
    "sunset": {
        "ko": "일몰",
        "en": "Sunset",
    },
    "civil_twilight_end": {
        "ko": "시민박명 끝",
        "en": "Civil Twilight End",
    },
    "nautical_twilight_end": {
        "ko": "항해박명 끝",
        "en": "Nautical Twilight End",
    },
    "astro_twilight_end": {
        "ko": "천문박명 끝",
        "en": "Astronomical Twilight End",
    },
    "midnight": {
        "ko": "자정",
        "en": "Midnight",
    },
    # Dial labels
    "label_astro": {
        "ko": "천문",
        "en": "Astro",
    },
    "label_nautical": {
        "ko": "항해",
        "en": "Nautical",
    },
    "label_civil": {
        "ko": "시민",
        "en": "Civil",
    },
    "label_sunrise": {
        "ko": "일출",
        "en": "Sunrise",
    },
    "label_noon": {
        "ko": "정오",
        "en": "Noon",
    },
    "label_sunset": {
        "ko": "일몰",
        "en": "Sunset",
    },
    # Moon phases
    "new_moon": {
        "ko": "삭",
        "en": "New Moon",
    },
    "waxing_crescent": {
        "ko": "초승달",
        "en": "Waxing Crescent",
    },
    "first_quarter": {
        "ko": "상현달",
        "en": "First Quarter",
    },
    "waxing_gibbous": {
        "ko": "차오르는 달",
        "en": "Waxing Gibbous",
    },
    "full_moon": {
        "ko": "보름달",
        "en": "Full Moon",
    },
    "waning_gibbous": {
        "ko": "기우는 달",
        "en": "Waning Gibbous",
    },
    "last_quarter": {
        "ko": "하현달",
        "en": "Last Quarter",
    },
    "waning_crescent": {
        "ko": "그믐달",
        "en": "Waning Crescent",
    },
    # UI
    "label_next_event": {
        "ko": "다음 이벤트",
        "en": "Next",
    },
    "label_moon": {
        "ko": "달",
        "en": "Moon",
    },
    "label_darkness": {
        "ko": "어둠",
        "en": "Darkness",
    },
    "label_override": {
        "ko": "시각 직접 지정",
        "en": "Override time",
    },
    "loading_schedule": {
        "ko": "✦ 오늘의 해를 계산하는 중",
        "en": "✦ Computing today's sun",
    },
    "error_schedule": {
        "ko": "오늘의 일출·일몰 정보를 불러오지 못했어요. ({error})",
        "en": "Could not load today's sun events. ({error})",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
