"""Unit tests for the record store and the package record model."""

import json

import pytest
import yaml
from pydantic import ValidationError
from package_search.core.store import DatabaseLoadError, RecordStore
from package_search.models.package import PackageRecord


class TestRecordStore:
    """Test cases for loading package snapshots."""

    @pytest.fixture
    def compact_packages(self):
        """Packages using the compact two-letter snapshot keys."""
        return [
            {
                "na": "paru",
                "ds": "Feature packed AUR helper",
                "pv": [],
                "dp": ["git", "pacman"],
                "vr": "2.0.3-1",
                "id": 1,
                "pb": "paru",
                "pi": 10,
                "nv": 500,
                "pl": 12.5,
                "fs": 1600000000,
                "lm": 1700000000,
                "up": "/cgit/aur.git/snapshot/paru.tar.gz",
            },
            {
                "na": "paru-bin",
                "ds": "Feature packed AUR helper (binary)",
                "pv": ["paru"],
                "vr": "2.0.3-1",
            },
        ]

    def test_load_json(self, tmp_path, compact_packages):
        """Test loading a JSON snapshot with compact keys."""
        db_file = tmp_path / "db.json"
        db_file.write_text(json.dumps(compact_packages), encoding="utf-8")

        store = RecordStore.from_file(db_file)

        assert len(store) == 2
        paru = store.records[0]
        assert paru.name == "paru"
        assert paru.description == "Feature packed AUR helper"
        assert paru.depends == ["git", "pacman"]
        assert paru.package_base_id == 10
        assert paru.popularity == 12.5
        assert store.records[1].provides == ["paru"]

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML snapshot with PascalCase keys."""
        db_file = tmp_path / "db.yaml"
        db_file.write_text(
            yaml.safe_dump([
                {"Name": "ripgrep", "Description": "Fast grep", "Provides": [], "Version": "14.0"},
                {"Name": "fd", "Description": None, "URL": "https://example.org/fd"},
            ]),
            encoding="utf-8",
        )

        store = RecordStore.from_file(str(db_file))

        assert [record.name for record in store] == ["ripgrep", "fd"]
        assert store.records[1].description is None
        assert store.records[1].url == "https://example.org/fd"

    def test_order_preserved(self, tmp_path):
        """Test that records keep snapshot order."""
        db_file = tmp_path / "db.json"
        db_file.write_text(
            json.dumps([{"na": name} for name in ["c", "a", "b"]]), encoding="utf-8"
        )

        store = RecordStore.from_file(db_file)

        assert [record.name for record in store] == ["c", "a", "b"]

    def test_missing_file(self, tmp_path):
        """Test that a missing snapshot is a load error."""
        with pytest.raises(DatabaseLoadError) as exc_info:
            RecordStore.from_file(tmp_path / "missing.json")

        assert exc_info.value.path == tmp_path / "missing.json"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_malformed_json(self, tmp_path):
        """Test that unparsable JSON is a load error."""
        db_file = tmp_path / "db.json"
        db_file.write_text("[{\"na\": ", encoding="utf-8")

        with pytest.raises(DatabaseLoadError, match="parse error"):
            RecordStore.from_file(db_file)

    def test_malformed_yaml(self, tmp_path):
        """Test that unparsable YAML is a load error."""
        db_file = tmp_path / "db.yml"
        db_file.write_text("- Name: [unclosed\n", encoding="utf-8")

        with pytest.raises(DatabaseLoadError, match="parse error"):
            RecordStore.from_file(db_file)

    def test_not_a_list(self, tmp_path):
        """Test that a top-level object is rejected."""
        db_file = tmp_path / "db.json"
        db_file.write_text(json.dumps({"na": "foo"}), encoding="utf-8")

        with pytest.raises(DatabaseLoadError, match="expected a list"):
            RecordStore.from_file(db_file)

    def test_unknown_field(self):
        """Test that records with unknown fields are rejected."""
        with pytest.raises(DatabaseLoadError, match="invalid package record"):
            RecordStore.from_data([{"na": "foo", "zz": 1}])

    def test_missing_name(self):
        """Test that records without a name are rejected."""
        with pytest.raises(DatabaseLoadError):
            RecordStore.from_data([{"ds": "nameless"}])

    def test_wrong_type(self):
        """Test that badly typed fields are rejected."""
        with pytest.raises(DatabaseLoadError):
            RecordStore.from_data([{"na": "foo", "pv": "not-a-list"}])


class TestPackageRecord:
    """Test cases for the PackageRecord model."""

    def test_defaults(self):
        """Test that optional metadata has defaults."""
        record = PackageRecord(name="foo")

        assert record.description is None
        assert record.provides == []
        assert record.out_of_date is None
        assert record.version == ""

    def test_serialization_names(self):
        """Test that every field is serialized under its PascalCase name."""
        data = PackageRecord(name="foo", description="bar", provides=["baz"]).model_dump(by_alias=True)

        assert data["Name"] == "foo"
        assert data["Description"] == "bar"
        assert data["Provides"] == ["baz"]
        for key in ("ID", "URL", "URLPath", "PackageBaseID", "CheckDepends", "OutOfDate", "NumVotes"):
            assert key in data
        assert len(data) == 24

    def test_serialized_form_reloads(self):
        """Test that serialized records are accepted as snapshot input."""
        record = PackageRecord(name="foo", id=3, url="https://example.org", provides=["bar"])

        store = RecordStore.from_data([record.model_dump(by_alias=True)])

        assert store.records[0].model_dump() == record.model_dump()

    def test_equality_by_name(self):
        """Test that records are identified by name only."""
        first = PackageRecord(name="foo", version="1")
        second = PackageRecord(name="foo", version="2")

        assert first == second
        assert hash(first) == hash(second)
        assert PackageRecord(name="bar") != first
        assert len({first, second}) == 1

    def test_immutable(self):
        """Test that records cannot be modified after load."""
        record = PackageRecord(name="foo")

        with pytest.raises(ValidationError):
            record.name = "bar"
