"""Unit tests for the package index."""

import pytest
from package_search.core.index import PackageIndex
from package_search.core.tokenizer import STOP_WORDS
from package_search.models.package import PackageRecord


def names(records):
    return [record.name for record in records]


class TestPackageIndex:
    """Test cases for the PackageIndex class."""

    @pytest.fixture
    def records(self):
        """Sample package records for testing."""
        return [
            PackageRecord(name="foo", description="a great tool"),
            PackageRecord(name="bar", provides=["foo"], description="alt implementation"),
            PackageRecord(name="baz", provides=["baz", "libbaz.so"], description="Baz library"),
            PackageRecord(name="qux-git", provides=["qux"], description=None),
        ]

    @pytest.fixture
    def index(self, records):
        """Create an index over the sample records."""
        return PackageIndex.build(records)

    def test_by_name(self, index, records):
        """Test that every record is reachable by its name."""
        for record in records:
            assert index.get_by_name(record.name) is record
        assert index.get_by_name("missing") is None

    def test_self_provision(self, index):
        """Test that records without provides are indexed under their own name."""
        assert names(index.get_providers("foo")) == ["foo", "bar"]

    def test_explicit_provides_replace_self(self, index):
        """Test that declared provides replace the implicit self-provision."""
        assert index.get_providers("bar") == ()
        assert index.get_providers("qux-git") == ()
        assert names(index.get_providers("qux")) == ["qux-git"]

    def test_self_listed_in_provides(self, index):
        """Test a record that lists its own name among its provides."""
        assert names(index.get_providers("baz")) == ["baz"]
        assert names(index.get_providers("libbaz.so")) == ["baz"]

    def test_by_word(self, index):
        """Test word lookups over names and descriptions."""
        assert names(index.get_word_matches("great")) == ["foo"]
        assert names(index.get_word_matches("library")) == ["baz"]
        assert names(index.get_word_matches("qux")) == ["qux-git"]
        assert names(index.get_word_matches("git")) == ["qux-git"]
        assert index.get_word_matches("nonexistent") == frozenset()

    def test_word_keys_filtered(self, index):
        """Test that no stop word or short word is used as a key."""
        for word in index.by_word:
            assert word not in STOP_WORDS
            assert len(word) > 2

    def test_word_shared_by_records(self):
        """Test that one word can index many records."""
        index = PackageIndex.build([
            PackageRecord(name="one", description="shared tool"),
            PackageRecord(name="two", description="another shared tool"),
        ])

        assert {record.name for record in index.get_word_matches("shared")} == {"one", "two"}

    def test_duplicate_names_last_wins(self):
        """Test that the last record wins when names repeat."""
        index = PackageIndex.build([
            PackageRecord(name="dup", version="1", description="alpha"),
            PackageRecord(name="dup", version="2", description="alpha"),
        ])

        assert index.get_by_name("dup").version == "2"
        matches = index.get_word_matches("alpha")
        assert len(matches) == 1
        assert next(iter(matches)).version == "2"

    def test_mappings_read_only(self, index):
        """Test that the built mappings cannot be modified."""
        with pytest.raises(TypeError):
            index.by_name["new"] = PackageRecord(name="new")
        with pytest.raises(TypeError):
            index.by_provides["new"] = ()
        with pytest.raises(TypeError):
            index.by_word["new"] = frozenset()

    def test_empty_index(self):
        """Test an index built from no records."""
        index = PackageIndex.build([])

        assert len(index) == 0
        assert index.get_by_name("foo") is None
        assert index.get_providers("foo") == ()

    def test_get_stats(self, index):
        """Test index statistics."""
        stats = index.get_stats()

        assert stats["total_records"] == 4
        assert stats["total_names"] == 4
        assert stats["total_provides"] == 4
        assert stats["total_words"] == len(index.by_word)
        assert stats["build_time_ms"] >= 0.0
        assert len(index) == 4
