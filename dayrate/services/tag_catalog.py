"""Day-factor tag catalogue and validation."""
from typing import Any, Iterable, Optional

from dayrate.config import get_settings
from dayrate.models.enums import Tag, TagCategory
from dayrate.utils.exceptions import ValidationError


TAG_CATEGORY_CONFIGS = {
    TagCategory.WORK: {"name": "Work", "icon": "💼"},
    TagCategory.SOCIAL: {"name": "Social", "icon": "👥"},
    TagCategory.HEALTH: {"name": "Health", "icon": "❤️"},
    TagCategory.PERSONAL: {"name": "Personal", "icon": "🎯"},
    TagCategory.EXTERNAL: {"name": "External", "icon": "🌤️"},
}

TAG_CONFIGS = {
    Tag.PRODUCTIVE: {"category": TagCategory.WORK, "name": "Productive", "positive": True, "icon": "✅"},
    Tag.USEFUL_MEETING: {"category": TagCategory.WORK, "name": "Useful meeting", "positive": True, "icon": "🤝"},
    Tag.PROJECT_PROGRESS: {"category": TagCategory.WORK, "name": "Project progress", "positive": True, "icon": "📈"},
    Tag.RECOGNITION: {"category": TagCategory.WORK, "name": "Recognition", "positive": True, "icon": "🏆"},
    Tag.OVERLOAD: {"category": TagCategory.WORK, "name": "Overload", "positive": False, "icon": "😫"},
    Tag.USELESS_MEETING: {"category": TagCategory.WORK, "name": "Useless meeting", "positive": False, "icon": "🙄"},
    Tag.WORK_CONFLICT: {"category": TagCategory.WORK, "name": "Work conflict", "positive": False, "icon": "⚡"},
    Tag.DEADLINE: {"category": TagCategory.WORK, "name": "Stressful deadline", "positive": False, "icon": "⏰"},

    Tag.GOOD_EXCHANGES: {"category": TagCategory.SOCIAL, "name": "Good exchanges", "positive": True, "icon": "💬"},
    Tag.PARTY: {"category": TagCategory.SOCIAL, "name": "Party", "positive": True, "icon": "🎉"},
    Tag.FAMILY_TIME: {"category": TagCategory.SOCIAL, "name": "Family time", "positive": True, "icon": "👪"},
    Tag.NEW_CONTACTS: {"category": TagCategory.SOCIAL, "name": "New contacts", "positive": True, "icon": "🤗"},
    Tag.SOCIAL_CONFLICT: {"category": TagCategory.SOCIAL, "name": "Conflict", "positive": False, "icon": "😤"},
    Tag.LONELINESS: {"category": TagCategory.SOCIAL, "name": "Loneliness", "positive": False, "icon": "😔"},
    Tag.MISUNDERSTANDING: {"category": TagCategory.SOCIAL, "name": "Misunderstanding", "positive": False, "icon": "😕"},

    Tag.SPORT: {"category": TagCategory.HEALTH, "name": "Sport", "positive": True, "icon": "🏃"},
    Tag.GOOD_SLEEP: {"category": TagCategory.HEALTH, "name": "Slept well", "positive": True, "icon": "😴"},
    Tag.ENERGY: {"category": TagCategory.HEALTH, "name": "Energy", "positive": True, "icon": "⚡"},
    Tag.SICK: {"category": TagCategory.HEALTH, "name": "Sick", "positive": False, "icon": "🤒"},
    Tag.TIRED: {"category": TagCategory.HEALTH, "name": "Tired", "positive": False, "icon": "😩"},
    Tag.BAD_SLEEP: {"category": TagCategory.HEALTH, "name": "Slept badly", "positive": False, "icon": "😵"},
    Tag.PAIN: {"category": TagCategory.HEALTH, "name": "Pain", "positive": False, "icon": "🤕"},

    Tag.HOBBY: {"category": TagCategory.PERSONAL, "name": "Hobby", "positive": True, "icon": "🎨"},
    Tag.ACCOMPLISHMENT: {"category": TagCategory.PERSONAL, "name": "Accomplishment", "positive": True, "icon": "🎯"},
    Tag.RELAXATION: {"category": TagCategory.PERSONAL, "name": "Relaxation", "positive": True, "icon": "🧘"},
    Tag.GOOD_NEWS: {"category": TagCategory.PERSONAL, "name": "Good news", "positive": True, "icon": "📰"},
    Tag.PROCRASTINATION: {"category": TagCategory.PERSONAL, "name": "Procrastination", "positive": False, "icon": "📱"},
    Tag.ANXIETY: {"category": TagCategory.PERSONAL, "name": "Anxiety", "positive": False, "icon": "😰"},
    Tag.BAD_NEWS: {"category": TagCategory.PERSONAL, "name": "Bad news", "positive": False, "icon": "😢"},

    Tag.GOOD_WEATHER: {"category": TagCategory.EXTERNAL, "name": "Good weather", "positive": True, "icon": "☀️"},
    Tag.WEEKEND: {"category": TagCategory.EXTERNAL, "name": "Weekend", "positive": True, "icon": "🎊"},
    Tag.BAD_WEATHER: {"category": TagCategory.EXTERNAL, "name": "Bad weather", "positive": False, "icon": "🌧️"},
    Tag.TRANSPORT_ISSUES: {"category": TagCategory.EXTERNAL, "name": "Transport issues", "positive": False, "icon": "🚇"},
    Tag.UNEXPECTED: {"category": TagCategory.EXTERNAL, "name": "Unexpected", "positive": False, "icon": "😱"},
}


def validate_tags(values: Optional[Iterable[str]], max_tags: Optional[int] = None) -> list[str]:
    """Return known tag identifiers in submission order without duplicates.

    Raises:
        ValidationError: a value is not a known tag, or too many tags were sent.
    """
    if values is None:
        return []
    if isinstance(values, str):
        raise ValidationError("tags must be a list of tag identifiers")

    cleaned: list[str] = []
    for value in values:
        try:
            tag = Tag(value)
        except ValueError:
            raise ValidationError(f"Unknown tag: {value}") from None
        if tag.value not in cleaned:
            cleaned.append(tag.value)

    limit = get_settings().max_tags_per_entry if max_tags is None else max_tags
    if len(cleaned) > limit:
        raise ValidationError(f"An entry can have at most {limit} tags")
    return cleaned


def tags_by_category() -> dict[str, dict[str, Any]]:
    """Group tag definitions per category, positive tags first."""
    grouped = {
        category.value: {**config, "id": category.value, "positive": [], "negative": []}
        for category, config in TAG_CATEGORY_CONFIGS.items()
    }
    for tag, config in TAG_CONFIGS.items():
        bucket = "positive" if config["positive"] else "negative"
        grouped[config["category"].value][bucket].append(
            {"id": tag.value, "name": config["name"], "icon": config["icon"]}
        )
    return grouped
