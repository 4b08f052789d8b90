"""Criteria filtering, classification and sorting of movie details.

Everything here is a pure function over ``MovieDetail`` sequences. The
predicates are combined with logical AND by ``matches_criteria``; an
unset criterion always matches.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from ...utils.text_utils import contains_any, contains_ignore_case, title_sort_key
from ..models import (
    DEFAULT_SENSITIVE_KEYWORDS,
    AgeCategory,
    FilterCriteria,
    MovieDetail,
    SortOrder,
)

AGE_CATEGORY_RATINGS = {
    AgeCategory.UNDER_6: {"g", "u", "tv-g"},
    AgeCategory.SIX_TO_ELEVEN: {"pg", "approved"},
    AgeCategory.TWELVE_PLUS: {"pg-13"},
}


def matches_year_range(
    movie: MovieDetail, year_min: Optional[int] = None, year_max: Optional[int] = None
) -> bool:
    """Check inclusive release year bounds.

    A movie without a parsable year fails as soon as either bound is set.
    """
    if year_min is None and year_max is None:
        return True

    year = movie.year_value
    if year is None:
        return False
    if year_min is not None and year < year_min:
        return False
    if year_max is not None and year > year_max:
        return False
    return True


def matches_rating_ceiling(
    movie: MovieDetail, ceiling: Optional[float], allow_missing: bool = True
) -> bool:
    """Check the IMDb rating against a ceiling.

    Args:
        movie: Movie details.
        ceiling: Maximum rating, None to accept everything.
        allow_missing: Accept movies whose rating is "N/A" or unparsable.

    Returns:
        True if the movie qualifies.
    """
    if ceiling is None:
        return True

    rating = movie.rating_value
    if rating is None:
        return allow_missing
    return rating <= ceiling


def matches_content_rating(movie: MovieDetail, allowed: Optional[Iterable[str]]) -> bool:
    """Check the content rating against an allow-list, ignoring case."""
    if allowed is None:
        return True

    allowed_folded = {rating.strip().casefold() for rating in allowed}
    return movie.rated.strip().casefold() in allowed_folded


def matches_language(movie: MovieDetail, language: Optional[str]) -> bool:
    """Check for a language substring, ignoring case."""
    if not language:
        return True
    return contains_ignore_case(movie.language, language)


def matches_topic(movie: MovieDetail, topic: Optional[str]) -> bool:
    """Check for a topic substring in the title or plot, ignoring case."""
    if not topic:
        return True
    return contains_ignore_case(movie.title, topic) or contains_ignore_case(movie.plot, topic)


def matches_genre(movie: MovieDetail, genre: Optional[str]) -> bool:
    """Check for a genre substring, ignoring case."""
    if not genre:
        return True
    return contains_ignore_case(movie.genre, genre)


def matches_runtime(movie: MovieDetail, max_runtime: Optional[int]) -> bool:
    """Check the runtime in minutes against a maximum.

    A movie without a parsable runtime fails when a maximum is set.
    """
    if max_runtime is None:
        return True

    runtime = movie.runtime_minutes
    if runtime is None:
        return False
    return runtime <= max_runtime


def has_sensitive_content(
    movie: MovieDetail, keywords: Iterable[str] = DEFAULT_SENSITIVE_KEYWORDS
) -> bool:
    """Check whether the plot mentions any sensitive keyword."""
    return contains_any(movie.plot, keywords)


def classify_age_category(
    movie: MovieDetail, keywords: Iterable[str] = DEFAULT_SENSITIVE_KEYWORDS
) -> Optional[AgeCategory]:
    """Map a movie to an audience age bucket.

    Args:
        movie: Movie details.
        keywords: Sensitive plot keywords.

    Returns:
        Age category, or None if the rating is unrecognized or the plot
        mentions a sensitive keyword.
    """
    rating = movie.rated.strip().casefold()
    if not rating:
        return None

    if has_sensitive_content(movie, keywords):
        return None

    for category, ratings in AGE_CATEGORY_RATINGS.items():
        if rating in ratings:
            return category
    return None


def matches_criteria(movie: MovieDetail, criteria: FilterCriteria) -> bool:
    """Check a movie against every configured predicate."""
    if not matches_year_range(movie, criteria.year_min, criteria.year_max):
        return False
    if not matches_rating_ceiling(movie, criteria.rating_ceiling, criteria.allow_missing_rating):
        return False
    if not matches_content_rating(movie, criteria.content_ratings):
        return False
    if not matches_language(movie, criteria.language):
        return False
    if not matches_topic(movie, criteria.topic):
        return False
    if not matches_genre(movie, criteria.genre):
        return False
    if not matches_runtime(movie, criteria.max_runtime):
        return False
    if criteria.exclude_sensitive and has_sensitive_content(movie, criteria.sensitive_keywords):
        return False
    if criteria.require_age_category:
        if classify_age_category(movie, criteria.sensitive_keywords) is None:
            return False
    return True


def filter_movies(
    details: Iterable[Optional[MovieDetail]], criteria: FilterCriteria
) -> List[MovieDetail]:
    """Keep the movies matching the criteria.

    Failed lookups (None) are dropped. Input order is preserved.
    """
    return [
        movie for movie in details if movie is not None and matches_criteria(movie, criteria)
    ]


def sort_movies(
    movies: Iterable[MovieDetail],
    order: SortOrder = SortOrder.TITLE,
    unrated_last: bool = True,
) -> List[MovieDetail]:
    """Sort movies by title or IMDb rating.

    Rating sorts fall back to the title for ties. Movies without a
    parsable rating are grouped at the end (or the start when
    ``unrated_last`` is False) and ordered by title among themselves.

    Args:
        movies: Movies to sort.
        order: Sort order.
        unrated_last: Placement of unrated movies in rating sorts.

    Returns:
        New sorted list.
    """
    by_title = sorted(movies, key=lambda movie: title_sort_key(movie.title))
    if order == SortOrder.TITLE:
        return by_title

    rated = [movie for movie in by_title if movie.rating_value is not None]
    unrated = [movie for movie in by_title if movie.rating_value is None]

    # sorted() is stable, so title order survives among equal ratings
    sign = -1.0 if order == SortOrder.RATING_DESC else 1.0
    rated = sorted(rated, key=lambda movie: sign * movie.rating_value)  # type: ignore[operator]

    return rated + unrated if unrated_last else unrated + rated


def apply_criteria(
    details: Iterable[Optional[MovieDetail]], criteria: FilterCriteria
) -> List[MovieDetail]:
    """Filter then sort according to the criteria."""
    return sort_movies(filter_movies(details, criteria), criteria.sort, criteria.unrated_last)


def group_by_age_category(
    movies: Iterable[MovieDetail], keywords: Iterable[str] = DEFAULT_SENSITIVE_KEYWORDS
) -> Dict[AgeCategory, List[MovieDetail]]:
    """Bucket movies by age category.

    Unclassifiable movies are left out and empty buckets are omitted.
    Buckets come youngest first.
    """
    keyword_list = list(keywords)
    groups: Dict[AgeCategory, List[MovieDetail]] = {category: [] for category in AgeCategory}
    for movie in movies:
        category = classify_age_category(movie, keyword_list)
        if category is not None:
            groups[category].append(movie)
    return {category: members for category, members in groups.items() if members}


def count_genres(movies: Sequence[MovieDetail]) -> Dict[str, int]:
    """Count genre occurrences, most common first."""
    counter: Counter = Counter()
    for movie in movies:
        counter.update(movie.genres)
    return dict(counter.most_common())
