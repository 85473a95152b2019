"""Fixed category table and category lookups."""

from typing import Optional, Union

from timeblocker.domain.entities import Category, UnresolvedCategory


CATEGORIES: tuple[Category, ...] = (
    Category("sleep", "睡觉", "bg-indigo-300", "text-indigo-900"),
    Category("routine", "日常", "bg-purple-200", "text-purple-900"),
    Category("learning", "学习", "bg-emerald-300", "text-emerald-900"),
    Category("work", "工作", "bg-sky-300", "text-sky-900"),
    Category("leisure", "娱乐", "bg-pink-300", "text-pink-900"),
    Category("exercise", "运动", "bg-orange-300", "text-orange-900"),
    Category("waste", "浪费", "bg-red-300", "text-red-900"),
    Category("rest", "休息", "bg-teal-200", "text-teal-900"),
    Category("other", "其他", "bg-gray-300", "text-gray-900"),
)

# Category ids used by the first release of the planner, mapped to their
# current replacements. Only retired ids belong here.
LEGACY_CATEGORY_IDS: dict[str, str] = {
    "morning_routine": "routine",
    "work_deep": "work",
    "work_shallow": "work",
    "transit": "routine",
}

_CATEGORY_INDEX: dict[str, Category] = {category.id: category for category in CATEGORIES}


def get_category(category_id: Optional[str]) -> Optional[Category]:
    """Get a category from the table, or None if the id is unknown."""
    if category_id is None:
        return None
    return _CATEGORY_INDEX.get(category_id)


def resolve_category(category_id: str) -> Union[Category, UnresolvedCategory]:
    """Resolve a non-null category id.

    Ids that are no longer in the table resolve to an UnresolvedCategory
    carrying the fallback label instead of failing.
    """
    category = _CATEGORY_INDEX.get(category_id)
    if category is None:
        return UnresolvedCategory(id=category_id)
    return category


def remap_legacy_category_id(category_id: Optional[str]) -> Optional[str]:
    """Map a retired category id to its current id; other ids pass through."""
    if category_id is None:
        return None
    return LEGACY_CATEGORY_IDS.get(category_id, category_id)


def is_known_category(category_id: str) -> bool:
    return category_id in _CATEGORY_INDEX


def find_category(value: str) -> Optional[Category]:
    """Find a category by id or by display name."""
    category = _CATEGORY_INDEX.get(value)
    if category is not None:
        return category
    for candidate in CATEGORIES:
        if candidate.name == value:
            return candidate
    return None
