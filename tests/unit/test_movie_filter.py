"""Test criteria filtering, classification and sorting."""

import pytest
from conftest import make_detail

from cinesift.core.models import AgeCategory, FilterCriteria, SortOrder
from cinesift.core.services.movie_filter import (
    apply_criteria,
    classify_age_category,
    count_genres,
    filter_movies,
    group_by_age_category,
    has_sensitive_content,
    matches_content_rating,
    matches_criteria,
    matches_language,
    matches_rating_ceiling,
    matches_runtime,
    matches_topic,
    matches_year_range,
    sort_movies,
)


def titles(movies):
    return [movie.title for movie in movies]


class TestPredicates:
    """Test individual predicates."""

    def test_year_range_is_inclusive(self):
        assert matches_year_range(make_detail("tt1", "A", Year="1980"), 1980, 1999)
        assert matches_year_range(make_detail("tt1", "A", Year="1999"), 1980, 1999)
        assert not matches_year_range(make_detail("tt1", "A", Year="2000"), 1980, 1999)

    def test_year_range_uses_leading_year(self):
        series = make_detail("tt1", "A", Year="1995–1998")
        assert matches_year_range(series, 1990, 1995)

    def test_year_range_unparsable_year(self):
        movie = make_detail("tt1", "A", Year="N/A")
        assert not matches_year_range(movie, 1980, None)
        assert matches_year_range(movie, None, None)

    @pytest.mark.parametrize("rating", ["N/A", "", "not a number"])
    def test_rating_ceiling_admits_missing_rating(self, rating):
        movie = make_detail("tt1", "A", imdbRating=rating)
        for ceiling in (0.0, 2.5, 10.0):
            assert matches_rating_ceiling(movie, ceiling)

    def test_rating_ceiling_can_reject_missing_rating(self):
        movie = make_detail("tt1", "A", imdbRating="N/A")
        assert not matches_rating_ceiling(movie, 5.0, allow_missing=False)

    def test_rating_ceiling_numeric(self):
        assert matches_rating_ceiling(make_detail("tt1", "A", imdbRating="6.0"), 6.0)
        assert not matches_rating_ceiling(make_detail("tt1", "A", imdbRating="6.1"), 6.0)

    def test_content_rating_is_case_insensitive(self):
        allowed = ["G", "PG", "PG-13"]
        assert matches_content_rating(make_detail("tt1", "A", Rated="pg-13"), allowed)
        assert matches_content_rating(make_detail("tt1", "A", Rated="PG-13"), allowed)
        assert matches_content_rating(make_detail("tt1", "A", Rated="PG-13"), ["pg-13"])
        assert not matches_content_rating(make_detail("tt1", "A", Rated="R"), allowed)

    def test_content_rating_is_exact_match(self):
        assert not matches_content_rating(make_detail("tt1", "A", Rated="PG-13"), ["PG"])

    def test_language_substring(self):
        movie = make_detail("tt1", "A", Language="French, English")
        assert matches_language(movie, "english")
        assert matches_language(movie, None)
        assert not matches_language(movie, "german")

    def test_topic_matches_title_or_plot(self):
        movie = make_detail("tt1", "Space Cats", Plot="Felines explore the galaxy.")
        assert matches_topic(movie, "space")
        assert matches_topic(movie, "GALAXY")
        assert not matches_topic(movie, "dogs")

    def test_runtime_leading_integer(self):
        assert matches_runtime(make_detail("tt1", "A", Runtime="94 min"), 100)
        assert not matches_runtime(make_detail("tt1", "A", Runtime="101 min"), 100)
        assert not matches_runtime(make_detail("tt1", "A", Runtime="N/A"), 100)
        assert matches_runtime(make_detail("tt1", "A", Runtime="N/A"), None)

    def test_sensitive_keywords_are_case_insensitive(self):
        movie = make_detail("tt1", "A", Plot="A story of DRUGS and money.")
        assert has_sensitive_content(movie)
        assert not has_sensitive_content(make_detail("tt1", "A", Plot="Puppies play."))


class TestAgeCategory:
    """Test age-category classification."""

    @pytest.mark.parametrize(
        "rated,expected",
        [
            ("G", AgeCategory.UNDER_6),
            ("u", AgeCategory.UNDER_6),
            ("TV-G", AgeCategory.UNDER_6),
            ("PG", AgeCategory.SIX_TO_ELEVEN),
            ("Approved", AgeCategory.SIX_TO_ELEVEN),
            ("PG-13", AgeCategory.TWELVE_PLUS),
            ("R", None),
            ("N/A", None),
            ("", None),
        ],
    )
    def test_rating_buckets(self, rated, expected):
        movie = make_detail("tt1", "A", Rated=rated, Plot="Friends go on an adventure.")
        assert classify_age_category(movie) == expected

    def test_sensitive_plot_is_unclassifiable(self):
        movie = make_detail("tt1", "A", Rated="G", Plot="A tale of violence.")
        assert classify_age_category(movie) is None

    def test_labels(self):
        assert AgeCategory.UNDER_6.label == "Below 6 years"
        assert AgeCategory.SIX_TO_ELEVEN.label == "6-11 years"
        assert AgeCategory.TWELVE_PLUS.label == "12 years and up"

    def test_group_by_age_category(self, sample_details):
        groups = group_by_age_category(sample_details)

        assert list(groups) == [
            AgeCategory.UNDER_6,
            AgeCategory.SIX_TO_ELEVEN,
            AgeCategory.TWELVE_PLUS,
        ]
        assert titles(groups[AgeCategory.UNDER_6]) == ["Little Ones"]
        assert titles(groups[AgeCategory.SIX_TO_ELEVEN]) == ["Family Trip"]
        assert titles(groups[AgeCategory.TWELVE_PLUS]) == ["Modern Hit"]

    def test_group_by_age_category_omits_empty_buckets(self):
        movies = [make_detail("tt1", "A", Rated="PG", Plot="Fun.")]
        assert list(group_by_age_category(movies)) == [AgeCategory.SIX_TO_ELEVEN]


class TestFilterMovies:
    """Test combined criteria."""

    def test_content_rating_excludes_despite_year_and_rating(self):
        movie = make_detail("tt1", "A", Year="1985", Rated="R", imdbRating="3.2")
        criteria = FilterCriteria(
            year_min=1980, year_max=1999, rating_ceiling=5.0, content_ratings=["G", "PG"]
        )

        assert filter_movies([movie], criteria) == []

    def test_missing_rating_qualifies(self):
        movie = make_detail("tt1", "A", Year="1990", imdbRating="N/A")
        criteria = FilterCriteria(year_min=1980, year_max=1999, rating_ceiling=5.0)

        assert filter_movies([movie], criteria) == [movie]

    def test_failed_lookups_are_dropped(self, sample_details):
        details = [sample_details[0], None, sample_details[2], None, sample_details[4]]

        result = filter_movies(details, FilterCriteria())

        assert titles(result) == ["Bad Movie", "Family Trip", "Little Ones"]

    def test_challenge_criteria(self, sample_details):
        criteria = FilterCriteria(year_min=1980, year_max=1999, rating_ceiling=6.0)

        result = filter_movies(sample_details, criteria)

        assert titles(result) == ["Bad Movie", "Unrated Oddity", "Family Trip", "Little Ones"]

    def test_family_criteria(self, sample_details):
        criteria = FilterCriteria(
            content_ratings=["G", "Approved", "TV-G", "U", "PG", "PG-13"],
            exclude_sensitive=True,
            require_age_category=True,
            language="english",
            max_runtime=100,
        )

        result = filter_movies(sample_details, criteria)

        assert titles(result) == ["Family Trip", "Little Ones"]

    def test_genre_filter(self, sample_details):
        result = filter_movies(sample_details, FilterCriteria(genre="animation"))
        assert titles(result) == ["Family Trip", "Little Ones"]

    def test_language_all_matches_everything(self, sample_details):
        criteria = FilterCriteria(language="All")
        assert criteria.language is None
        assert len(filter_movies(sample_details, criteria)) == len(sample_details)

    def test_unset_criteria_match_everything(self, sample_details):
        assert all(matches_criteria(movie, FilterCriteria()) for movie in sample_details)

    def test_inverted_year_range_rejected(self):
        with pytest.raises(ValueError):
            FilterCriteria(year_min=2000, year_max=1990)


class TestSortMovies:
    """Test result ordering."""

    def test_rating_ascending_pushes_unrated_to_end(self):
        movies = [
            make_detail("tt1", "B", imdbRating="4.0"),
            make_detail("tt2", "A", imdbRating="N/A"),
        ]

        result = sort_movies(movies, SortOrder.RATING_ASC)

        assert titles(result) == ["B", "A"]

    def test_rating_descending(self, sample_details):
        result = sort_movies(sample_details, SortOrder.RATING_DESC)

        assert titles(result) == [
            "Modern Hit",
            "Little Ones",
            "Family Trip",
            "Bad Movie",
            "Unrated Oddity",
        ]

    def test_unrated_first_when_configured(self):
        movies = [
            make_detail("tt1", "B", imdbRating="4.0"),
            make_detail("tt2", "A", imdbRating="N/A"),
        ]

        result = sort_movies(movies, SortOrder.RATING_ASC, unrated_last=False)

        assert titles(result) == ["A", "B"]

    def test_rating_ties_fall_back_to_title(self):
        movies = [
            make_detail("tt1", "Zeta", imdbRating="5.0"),
            make_detail("tt2", "Alpha", imdbRating="5.0"),
            make_detail("tt3", "Mid", imdbRating="5.0"),
        ]

        assert titles(sort_movies(movies, SortOrder.RATING_ASC)) == ["Alpha", "Mid", "Zeta"]
        assert titles(sort_movies(movies, SortOrder.RATING_DESC)) == ["Alpha", "Mid", "Zeta"]

    def test_title_sort_ignores_case(self):
        movies = [
            make_detail("tt1", "banana"),
            make_detail("tt2", "Apple"),
            make_detail("tt3", "cherry"),
        ]

        assert titles(sort_movies(movies)) == ["Apple", "banana", "cherry"]

    def test_title_sort_folds_accents(self):
        movies = [
            make_detail("tt1", "Zorro"),
            make_detail("tt2", "Émile"),
            make_detail("tt3", "Apple"),
        ]

        assert titles(sort_movies(movies)) == ["Apple", "Émile", "Zorro"]

    def test_apply_criteria_filters_then_sorts(self, sample_details):
        criteria = FilterCriteria(
            year_min=1980, year_max=1999, rating_ceiling=6.0, sort=SortOrder.RATING_ASC
        )

        result = apply_criteria(sample_details, criteria)

        assert titles(result) == ["Bad Movie", "Family Trip", "Little Ones", "Unrated Oddity"]


def test_count_genres(sample_details):
    counts = count_genres(sample_details)

    assert counts["Animation"] == 2
    assert counts["Horror"] == 1
    assert list(counts)[0] == "Animation"
