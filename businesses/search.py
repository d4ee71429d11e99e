"""Query building for business listings and search.

All filters are optional and AND-combined. Public callers only ever see
active listings; admin and owner views pass `public=False` and scope the
queryset themselves.
"""

from django.db.models import Q
from rest_framework.exceptions import ValidationError

from categories.models import Category
from .models import Business

SORTS = {
    "relevance": ("-is_featured", "-rating_average", "-rating_count", "-created_at", "-id"),
    "rating": ("-rating_average", "-rating_count", "-id"),
    "name": ("name", "id"),
    "views": ("-views", "-id"),
    "newest": ("-created_at", "-id"),
}
DEFAULT_SORT = "relevance"


# ---- helpers (module-level) ----

def _first(params, *names):
    """Value of the first query param present (and non-blank) among `names`."""
    for name in names:
        value = params.get(name)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    return None


def _location_filter(city, state=None) -> Q:
    """'City, State' matches (city AND state) OR city OR state; a bare value matches city OR state."""
    if "," in city:
        city_part, _, state_part = (part.strip() for part in city.partition(","))
        if city_part and state_part:
            return (
                Q(city__icontains=city_part, state__icontains=state_part)
                | Q(city__icontains=city_part)
                | Q(state__icontains=state_part)
            )
        city = city_part or state_part
    if state:
        return Q(city__icontains=city)
    return Q(city__icontains=city) | Q(state__icontains=city)


def _parse_category(value):
    if not value.isdigit():
        raise ValidationError({"category": "Must be an integer."})
    return int(value)


def _parse_min_rating(value) -> float:
    try:
        rating = float(value)
    except (TypeError, ValueError):
        raise ValidationError({"minRating": "Must be a number between 0 and 5."})
    if not 0 <= rating <= 5:
        raise ValidationError({"minRating": "Must be a number between 0 and 5."})
    return rating


def _parse_bool(name, value) -> bool:
    lowered = value.lower()
    if lowered not in ("true", "false"):
        raise ValidationError({name: "Must be 'true' or 'false'."})
    return lowered == "true"


# ---- public API ----

def build_business_queryset(params, public=True, queryset=None):
    """Filter businesses from request query params.

    Recognised params: q/search, category, city, state, minRating/min_rating,
    featured. Invalid values raise a 400 ValidationError.
    """
    qs = queryset if queryset is not None else Business.objects.all()
    qs = qs.select_related("category", "owner")
    if public:
        qs = qs.filter(is_active=True)

    term = _first(params, "q", "search")
    if term:
        qs = qs.filter(
            Q(name__icontains=term) | Q(description__icontains=term) | Q(tags_text__contains=term.lower())
        )

    category = _first(params, "category", "category_id")
    if category is not None:
        qs = qs.filter(category_id=_parse_category(category))

    city = _first(params, "city")
    state = _first(params, "state")
    if city:
        qs = qs.filter(_location_filter(city, state))
    if state:
        qs = qs.filter(state__icontains=state)

    min_rating = _first(params, "minRating", "min_rating")
    if min_rating is not None:
        qs = qs.filter(rating_average__gte=_parse_min_rating(min_rating))

    featured = _first(params, "featured")
    if featured is not None:
        qs = qs.filter(is_featured=_parse_bool("featured", featured))

    return qs


def apply_sort(qs, sort):
    """Order by one of the named sort keys; unknown keys raise a 400."""
    sort = (sort or DEFAULT_SORT).strip().lower()
    if sort not in SORTS:
        raise ValidationError({"sort": f"Allowed values: {', '.join(SORTS)}."})
    return qs.order_by(*SORTS[sort])


def search_suggestions(term):
    """Up to 5 active categories and 8 active businesses whose name contains `term`."""
    categories = Category.objects.filter(is_active=True, name__icontains=term).order_by("order", "name")[:5]
    businesses = (
        Business.objects.filter(is_active=True)
        .filter(Q(name__icontains=term) | Q(tags_text__contains=term.lower()))
        .select_related("category")
        .order_by("-is_featured", "-rating_average", "name")[:8]
    )
    return list(categories), list(businesses)


def location_suggestions(term, limit=10):
    """Unique "City, State" pairs of active listings; city-prefix matches come first."""
    rows = (
        Business.objects.filter(is_active=True)
        .filter(Q(city__icontains=term) | Q(state__icontains=term))
        .values_list("city", "state")
        .distinct()
        .order_by("city", "state")
    )
    lowered = term.lower()
    seen, prefix, rest = set(), [], []
    for city, state in rows:
        key = (city.strip().lower(), state.strip().lower())
        if key in seen:
            continue
        seen.add(key)
        label = f"{city.strip()}, {state.strip()}"
        (prefix if city.lower().startswith(lowered) else rest).append(label)
    return (prefix + rest)[:limit]
