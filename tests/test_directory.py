import pytest

from lawconsult.data.sample_data import SAMPLE_LAWYERS
from lawconsult.models.lawyer import Lawyer, LawyerFilters, SortDirection, SortOption
from lawconsult.services.directory import SORT_FIELDS, DirectoryStore, filter_and_sort, matches

FILTER_CASES = [
    LawyerFilters(),
    LawyerFilters(specialties=["婚姻家庭", "刑事辩护"]),
    LawyerFilters(experience_range=(10, 16)),
    LawyerFilters(rating_range=(4.7, 4.8)),
    LawyerFilters(price_range=(400, 500)),
    LawyerFilters(location="市"),
    LawyerFilters(is_online=True),
    LawyerFilters(is_online=False, price_range=(0, 450)),
]


@pytest.mark.parametrize("filters", FILTER_CASES)
def test_visible_is_subset_and_satisfies_predicates(filters):
    visible = filter_and_sort(SAMPLE_LAWYERS, filters)
    assert all(lawyer in SAMPLE_LAWYERS for lawyer in visible)
    for lawyer in visible:
        assert matches(lawyer, filters)
        low, high = filters.price_range
        assert low <= lawyer.hourly_rate <= high
        if filters.is_online is not None:
            assert lawyer.is_online == filters.is_online


@pytest.mark.parametrize("sort_by", list(SortOption))
@pytest.mark.parametrize("direction", list(SortDirection))
def test_sort_is_monotonic(sort_by, direction):
    key = SORT_FIELDS[sort_by]
    values = [key(lawyer) for lawyer in filter_and_sort(SAMPLE_LAWYERS, None, sort_by, direction)]
    if direction == SortDirection.DESC:
        assert values == sorted(values, reverse=True)
    else:
        assert values == sorted(values)


def test_rating_desc_order():
    visible = filter_and_sort(SAMPLE_LAWYERS, sort_by=SortOption.RATING, direction=SortDirection.DESC)
    assert [lawyer.rating for lawyer in visible] == [4.9, 4.8, 4.7, 4.6]


def test_specialty_filter_finds_family_lawyer():
    visible = filter_and_sort(SAMPLE_LAWYERS, LawyerFilters(specialties=["婚姻家庭"]))
    assert [lawyer.id for lawyer in visible] == ["2"]


def test_specialties_match_any():
    visible = filter_and_sort(SAMPLE_LAWYERS, LawyerFilters(specialties=["婚姻家庭", "知识产权"]))
    assert sorted(lawyer.id for lawyer in visible) == ["2", "4"]


def test_ranges_are_inclusive():
    visible = filter_and_sort(SAMPLE_LAWYERS, LawyerFilters(price_range=(450, 500)))
    assert sorted(lawyer.hourly_rate for lawyer in visible) == [450, 500]


def test_impossible_range_gives_empty_list():
    assert filter_and_sort(SAMPLE_LAWYERS, LawyerFilters(experience_range=(20, 5))) == []
    assert filter_and_sort(SAMPLE_LAWYERS, LawyerFilters(rating_range=(5.0, 0.0))) == []


def test_empty_collection():
    assert filter_and_sort([], LawyerFilters(specialties=["婚姻家庭"])) == []


def test_search_is_case_insensitive_over_name_and_specialties():
    lawyers = [
        Lawyer(id="a", name="Alice Smith", specialties=["Tax"]),
        Lawyer(id="b", name="Bob", specialties=["Family Law"]),
    ]
    assert [lw.id for lw in filter_and_sort(lawyers, search="ALICE")] == ["a"]
    assert [lw.id for lw in filter_and_sort(lawyers, search="family")] == ["b"]
    assert filter_and_sort(lawyers, search="criminal") == []


def test_location_is_substring_match():
    visible = filter_and_sort(SAMPLE_LAWYERS, LawyerFilters(location="上海"))
    assert [lawyer.id for lawyer in visible] == ["2"]


def test_ties_are_broken_by_id_in_both_directions():
    lawyers = [
        Lawyer(id="c", name="C", rating=4.5),
        Lawyer(id="a", name="A", rating=4.5),
        Lawyer(id="b", name="B", rating=4.9),
    ]
    desc = filter_and_sort(lawyers, sort_by=SortOption.RATING, direction=SortDirection.DESC)
    asc = filter_and_sort(lawyers, sort_by=SortOption.RATING, direction=SortDirection.ASC)
    assert [lw.id for lw in desc] == ["b", "a", "c"]
    assert [lw.id for lw in asc] == ["a", "c", "b"]


def test_store_recomputes_and_is_idempotent():
    store = DirectoryStore(SAMPLE_LAWYERS)
    assert [lw.rating for lw in store.visible] == [4.9, 4.8, 4.7, 4.6]

    store.set_filters(is_online=True)
    first = list(store.visible)
    store.set_filters(is_online=True)
    assert store.visible == first
    assert all(lw.is_online for lw in store.visible)


def test_store_filter_changes_are_merged():
    store = DirectoryStore(SAMPLE_LAWYERS)
    store.set_filters({"price_range": (0, 500)})
    store.set_filters(isOnline=True)
    assert store.filters.price_range == (0, 500)
    assert store.filters.is_online is True
    assert sorted(lw.id for lw in store.visible) == ["1", "4"]


def test_store_sort_search_and_collection():
    store = DirectoryStore()
    assert store.visible == []

    store.set_collection(SAMPLE_LAWYERS)
    store.set_sort(SortOption.PRICE, SortDirection.ASC)
    assert [lw.hourly_rate for lw in store.visible] == [400, 450, 500, 800]

    store.set_search("王")
    assert [lw.id for lw in store.visible] == ["3"]


def test_store_select():
    store = DirectoryStore(SAMPLE_LAWYERS)
    assert store.select("2").name == "李雅婷"
    assert store.select("missing") is None
    assert store.select(None) is None
