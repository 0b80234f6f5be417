"""Unit tests for application bundle models."""

import pytest
from cleanx.models.app import (
    AppBundle,
    AppDescriptor,
    MatchRule,
    RelatedCategory,
    RelatedFile,
)


class TestAppBundle:
    """Tests for AppBundle dataclass."""

    def test_name_prefers_descriptor(self) -> None:
        """The manifest display name wins over the folder name."""
        bundle = AppBundle(
            path="/Applications/Foo.app",
            descriptor=AppDescriptor(bundle_id="com.example.Foo", name="Foo Pro"),
        )
        assert bundle.name == "Foo Pro"
        assert bundle.file_name == "Foo"
        assert bundle.bundle_id == "com.example.Foo"

    def test_name_falls_back_to_file_name(self) -> None:
        """Without a descriptor the folder name is used."""
        bundle = AppBundle(path="/Applications/Foo.app")
        assert bundle.name == "Foo"
        assert bundle.bundle_id is None
        assert bundle.version is None

    def test_empty_path_raises(self) -> None:
        """An empty bundle path is rejected."""
        with pytest.raises(ValueError, match="Bundle path cannot be empty"):
            AppBundle(path="")

    def test_to_dict(self) -> None:
        """to_dict omits unknown descriptor fields."""
        bundle = AppBundle(path="/A/Foo.app", descriptor=AppDescriptor(version="2.0"))
        assert bundle.to_dict() == {
            "path": "/A/Foo.app",
            "name": "Foo",
            "descriptor": {"version": "2.0"},
        }

    def test_dict_round_trip(self) -> None:
        """from_dict rebuilds the bundle and ignores the derived name."""
        bundle = AppBundle(
            path="/A/Foo.app",
            descriptor=AppDescriptor(bundle_id="com.example.Foo", name="Foo Pro", version="2.0"),
        )
        assert AppBundle.from_dict(bundle.to_dict()) == bundle

    def test_from_dict_without_descriptor(self) -> None:
        """A bundle serialized without a manifest reloads without one."""
        bundle = AppBundle.from_dict({"path": "/A/Foo.app", "name": "Stale", "descriptor": None})
        assert bundle.descriptor is None
        assert bundle.name == "Foo"


class TestRelatedCategory:
    """Tests for RelatedCategory enum."""

    @pytest.mark.parametrize(
        "category",
        [
            RelatedCategory.LAUNCH_DAEMONS,
            RelatedCategory.CONTAINERS,
            RelatedCategory.SYSTEM_APP_SUPPORT,
        ],
    )
    def test_system_owned(self, category: RelatedCategory) -> None:
        """System-owned locations are flagged."""
        assert category.system_owned

    def test_user_locations_not_system_owned(self) -> None:
        """Ordinary Library locations are not flagged."""
        assert not RelatedCategory.PREFERENCES.system_owned
        assert not RelatedCategory.CACHES.system_owned

    def test_every_category_has_display_name(self) -> None:
        """Each category has a display name."""
        for category in RelatedCategory:
            assert category.display_name


class TestRelatedFile:
    """Tests for RelatedFile dataclass."""

    def test_is_protected_follows_category(self) -> None:
        """Files in system-owned locations are protected."""
        kept = RelatedFile("/L/Containers/x", RelatedCategory.CONTAINERS, 1, MatchRule.NAME)
        removed = RelatedFile("/L/Caches/x", RelatedCategory.CACHES, 1, MatchRule.NAME)
        assert kept.is_protected
        assert not removed.is_protected

    def test_negative_size_raises(self) -> None:
        """A negative size is rejected."""
        with pytest.raises(ValueError, match="Size cannot be negative"):
            RelatedFile("/x", RelatedCategory.CACHES, -1, MatchRule.NAME)

    def test_dict_round_trip(self) -> None:
        """from_dict reverses to_dict."""
        item = RelatedFile("/x", RelatedCategory.PREFERENCES, 10, MatchRule.PREFERENCE_FILE)
        assert RelatedFile.from_dict(item.to_dict()) == item
