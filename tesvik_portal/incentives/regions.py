"""Province to development-region mapping.

Turkey's incentive system groups the 81 provinces into six development
regions; region 6 is the least developed. The table below is the default.
Admins can override single provinces at runtime (``province_regions``
table); overrides win.

The region-6 SGK premium support has its own province list: next to the
region-6 provinces it covers Erzincan, Erzurum and Kars (region 4) and Van
(region 5).
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Mapping, Optional

DEFAULT_REGION = 1

_REGION_PROVINCES = {
    1: ["İstanbul", "Ankara", "İzmir", "Kocaeli", "Bursa", "Eskişehir", "Antalya"],
    2: [
        "Adana", "Denizli", "Gaziantep", "Hatay", "İçel (Mersin)", "Kayseri", "Konya", "Manisa",
        "Muğla", "Sakarya", "Samsun", "Tekirdağ", "Trabzon",
    ],
    3: [
        "Afyonkarahisar", "Amasya", "Artvin", "Aydın", "Balıkesir", "Bartın", "Bolu", "Burdur",
        "Çanakkale", "Çankırı", "Çorum", "Düzce", "Edirne", "Giresun", "Gümüşhane", "Isparta",
        "Karabük", "Karaman", "Kastamonu", "Kırklareli", "Kütahya", "Nevşehir", "Ordu", "Rize",
        "Sinop", "Tokat", "Uşak", "Yalova", "Zonguldak",
    ],
    4: [
        "Aksaray", "Bayburt", "Bilecik", "Erzincan", "Erzurum", "Kars", "Kırıkkale", "Kırşehir",
        "Niğde", "Sivas", "Yozgat",
    ],
    5: ["Adıyaman", "Kahramanmaraş", "Kilis", "Malatya", "Osmaniye", "Şanlıurfa", "Van"],
    6: [
        "Ağrı", "Ardahan", "Batman", "Bingöl", "Bitlis", "Diyarbakır", "Elazığ", "Hakkari", "Iğdır",
        "Mardin", "Muş", "Siirt", "Şırnak", "Tunceli",
    ],
}

PROVINCE_REGIONS: Dict[str, int] = {
    province: region for region, provinces in _REGION_PROVINCES.items() for province in provinces
}

SGK_REGION_6_PROVINCES: FrozenSet[str] = frozenset(_REGION_PROVINCES[6]) | {"Erzincan", "Erzurum", "Kars", "Van"}

# Alternative spellings seen in user input and imported data
PROVINCE_ALIASES: Dict[str, str] = {
    "Mersin": "İçel (Mersin)",
    "İçel": "İçel (Mersin)",
    "Hakkâri": "Hakkari",
    "Istanbul": "İstanbul",
    "Izmir": "İzmir",
}


def canonical_province(province: str) -> str:
    name = (province or "").strip()
    return PROVINCE_ALIASES.get(name, name)


def province_region(province: str, overrides: Optional[Mapping[str, int]] = None) -> int:
    """Development region (1-6) of a province; unknown provinces fall back to region 1."""
    name = canonical_province(province)
    if overrides and name in overrides:
        return int(overrides[name])
    return PROVINCE_REGIONS.get(name, DEFAULT_REGION)


def is_region_6(province: str, overrides: Optional[Mapping[str, int]] = None) -> bool:
    """Whether the province gets the region-6 SGK premium support.

    An override decides on its own; otherwise the SGK province list does.
    """
    name = canonical_province(province)
    if overrides and name in overrides:
        return int(overrides[name]) == 6
    return name in SGK_REGION_6_PROVINCES
