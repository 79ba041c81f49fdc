"""Tests for recency ranking and quota allocation."""

import pytest

from feedmerge.models import EPOCH, Category, Record
from feedmerge.ranking import QuotaAllocator, rank_by_recency


class TestRankByRecency:
    def test_newest_first(self, record_factory):
        records = [
            record_factory("mid", date="2024-02-01T00:00:00Z"),
            record_factory("new", date="2024-03-01T00:00:00Z"),
            record_factory("old", date="2024-01-01T00:00:00Z"),
        ]
        assert [r.identity for r in rank_by_recency(records)] == ["new", "mid", "old"]

    def test_ties_keep_input_order(self, record_factory):
        records = [
            record_factory("first", date="2024-01-01T00:00:00Z"),
            record_factory("second", date="2024-01-01T00:00:00Z"),
            record_factory("third", date="2024-01-01T00:00:00Z"),
        ]
        assert [r.identity for r in rank_by_recency(records)] == ["first", "second", "third"]

    def test_epoch_records_sort_last(self, record_factory):
        undated = Record(identity="undated", category=Category.ARTICLE)
        records = [undated, record_factory("dated", date="2001-01-01T00:00:00Z")]

        ranked = rank_by_recency(records)

        assert ranked[-1].identity == "undated"
        assert ranked[-1].timestamp == EPOCH


class TestQuotaAllocator:
    def _pool(self, record_factory):
        # 3 articles D1 > D2 > D3 and 2 videos V1 > V2, V2 older than every article
        return rank_by_recency([
            record_factory("D1", date="2024-01-10T00:00:00Z"),
            record_factory("D2", date="2024-01-08T00:00:00Z"),
            record_factory("D3", date="2024-01-06T00:00:00Z"),
            record_factory("V1", category="video", date="2024-01-09T00:00:00Z"),
            record_factory("V2", category="video", date="2024-01-01T00:00:00Z"),
        ])

    def test_reservation_scenario(self, record_factory):
        allocator = QuotaAllocator(max_items=4, min_reserved=1)
        result = allocator.allocate(self._pool(record_factory))

        assert [r.identity for r in result.items] == ["D1", "V1", "D2", "D3"]
        assert result.privileged_included == 1
        assert result.reserved == 1

    def test_reservation_guarantees_presence(self, record_factory):
        allocator = QuotaAllocator(max_items=3, min_reserved=2)
        result = allocator.allocate(self._pool(record_factory))

        assert [r.identity for r in result.items] == ["D1", "V1", "V2"]
        assert result.privileged_included == 2

    def test_overflow_resurfaces_in_fill(self, record_factory):
        pool = rank_by_recency([
            record_factory("V1", category="video", date="2024-01-10T00:00:00Z"),
            record_factory("V2", category="video", date="2024-01-09T00:00:00Z"),
            record_factory("D1", date="2024-01-05T00:00:00Z"),
        ])

        result = QuotaAllocator(max_items=2, min_reserved=1).allocate(pool)

        assert [r.identity for r in result.items] == ["V1", "V2"]

    def test_overflow_excluded_when_fill_restricted(self, record_factory):
        pool = rank_by_recency([
            record_factory("V1", category="video", date="2024-01-10T00:00:00Z"),
            record_factory("V2", category="video", date="2024-01-09T00:00:00Z"),
            record_factory("D1", date="2024-01-05T00:00:00Z"),
        ])

        allocator = QuotaAllocator(max_items=2, min_reserved=1, fill_from_all_categories=False)
        result = allocator.allocate(pool)

        assert [r.identity for r in result.items] == ["V1", "D1"]

    def test_fewer_privileged_than_reservation(self, record_factory):
        allocator = QuotaAllocator(max_items=4, min_reserved=3)
        result = allocator.allocate(self._pool(record_factory))

        assert result.reserved == 2
        assert result.privileged_included == 2
        assert len(result.items) == 4

    def test_small_pool_not_padded(self, record_factory):
        allocator = QuotaAllocator(max_items=100, min_reserved=10)
        result = allocator.allocate(self._pool(record_factory))

        assert len(result.items) == 5
        assert len({r.identity for r in result.items}) == 5

    @pytest.mark.parametrize(
        "max_items,min_reserved,videos,articles",
        [(4, 1, 2, 3), (4, 4, 2, 3), (2, 0, 2, 3), (10, 3, 5, 1), (0, 0, 2, 2), (6, 2, 0, 8)],
    )
    def test_quota_bounds(self, record_factory, max_items, min_reserved, videos, articles):
        pool = rank_by_recency(
            [record_factory(f"v{i}", category="video", date=f"2024-02-{i + 1:02d}T00:00:00Z") for i in range(videos)]
            + [record_factory(f"a{i}", date=f"2024-01-{i + 1:02d}T00:00:00Z") for i in range(articles)]
        )

        result = QuotaAllocator(max_items=max_items, min_reserved=min_reserved).allocate(pool)

        assert len(result.items) <= max_items
        assert result.privileged_included >= min(min_reserved, videos)
        assert len({r.identity for r in result.items}) == len(result.items)
        timestamps = [r.timestamp for r in result.items]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_reserved_are_most_recent_videos(self, record_factory):
        pool = rank_by_recency(
            [record_factory(f"v{i}", category="video", date=f"2023-06-{i + 1:02d}T00:00:00Z") for i in range(5)]
            + [record_factory(f"a{i}", date=f"2024-01-{i + 1:02d}T00:00:00Z") for i in range(5)]
        )

        result = QuotaAllocator(max_items=4, min_reserved=2).allocate(pool)
        videos = [r.identity for r in result.items if r.category == Category.VIDEO]

        assert videos == ["v4", "v3"]

    def test_reservation_above_cap_rejected(self):
        with pytest.raises(ValueError):
            QuotaAllocator(max_items=5, min_reserved=6)
