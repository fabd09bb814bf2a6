"""Menu visibility rules.

Every menu item has three flags, one per audience: ``admin``, ``registered``
(signed in, not admin) and ``anonymous``. An item without stored settings
uses the default, which only shows it to admins.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Mapping, Sequence

from pydantic import BaseModel


class Audience(str, Enum):
    ADMIN = "admin"
    REGISTERED = "registered"
    ANONYMOUS = "anonymous"


class MenuItemVisibility(BaseModel):
    admin: bool = True
    registered: bool = False
    anonymous: bool = False


class MenuItem(BaseModel):
    setting_key: str
    title: str
    url: str


MENU_ITEMS: List[MenuItem] = [
    MenuItem(setting_key="menu_item_destek_arama", title="Destek Arama", url="/searchsupport"),
    MenuItem(setting_key="menu_item_tesvik_araclari", title="9903 | Teşvik Araçları", url="/incentive-tools"),
    MenuItem(setting_key="menu_item_soru_cevap", title="Soru & Cevap", url="/qna"),
    MenuItem(setting_key="menu_item_tedarik_zinciri", title="Tedarik Zinciri Yönetimi", url="/tzy"),
    MenuItem(setting_key="menu_item_yatirim_firsatlari", title="Yatırım Fırsatları", url="/yatirim-firsatlari"),
    MenuItem(setting_key="menu_item_yatirimci_sozlugu", title="Yatırımcı Sözlüğü", url="/investor-glossary"),
    MenuItem(setting_key="menu_item_basvuru_sureci", title="Başvuru Süreci", url="/basvuru-sureci"),
    MenuItem(setting_key="menu_item_chat", title="AI Sohbet", url="/chat"),
]

MENU_KEYS = [item.setting_key for item in MENU_ITEMS]

DEFAULT_VISIBILITY = MenuItemVisibility()

# Items whose default differs from admin-only
_DEFAULT_OVERRIDES = {
    "menu_item_chat": MenuItemVisibility(admin=True, registered=True, anonymous=False),
}


def default_visibility(setting_key: str) -> MenuItemVisibility:
    return _DEFAULT_OVERRIDES.get(setting_key, DEFAULT_VISIBILITY).model_copy()


def audience_for(is_authenticated: bool, is_admin: bool) -> Audience:
    if is_admin:
        return Audience.ADMIN
    if is_authenticated:
        return Audience.REGISTERED
    return Audience.ANONYMOUS


def should_show_menu_item(visibility: MenuItemVisibility, is_authenticated: bool, is_admin: bool) -> bool:
    """Whether an item is visible to the caller.

    The caller belongs to exactly one audience and only that audience's flag
    counts: an admin does not see an item that is visible to anonymous users
    only.
    """
    if is_admin:
        return visibility.admin
    if is_authenticated:
        return visibility.registered
    return visibility.anonymous


def resolve_visibility(stored: Mapping[str, object]) -> Dict[str, MenuItemVisibility]:
    """Effective visibility for every known menu key.

    ``stored`` maps setting keys to rows (or any object) exposing the three
    audience flags; unknown keys are ignored and missing keys get defaults.
    """
    resolved = {}
    for key in MENU_KEYS:
        row = stored.get(key)
        if row is None:
            resolved[key] = default_visibility(key)
        else:
            resolved[key] = MenuItemVisibility(
                admin=getattr(row, "admin"), registered=getattr(row, "registered"), anonymous=getattr(row, "anonymous")
            )
    return resolved


def filter_visible_menu_items(
    items: Sequence[MenuItem],
    visibility: Mapping[str, MenuItemVisibility],
    is_authenticated: bool,
    is_admin: bool,
) -> List[MenuItem]:
    """Items visible to the caller; items without a visibility entry are hidden."""
    visible = []
    for item in items:
        settings = visibility.get(item.setting_key)
        if settings is None:
            continue
        if should_show_menu_item(settings, is_authenticated, is_admin):
            visible.append(item)
    return visible
