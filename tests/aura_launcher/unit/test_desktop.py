"""Unit tests for desktop file scanning."""

from pathlib import Path

import pytest

from aura_launcher.core.desktop import parse_desktop_file, scan_applications
from aura_launcher.models.app import DesktopApp


def write_desktop_file(directory: Path, app_id: str, **fields) -> Path:
    """Write a minimal .desktop file with the given keys."""
    directory.mkdir(parents=True, exist_ok=True)
    entry = {"Type": "Application", **fields}
    lines = ["[Desktop Entry]"] + [f"{key}={value}" for key, value in entry.items()]
    path = directory / f"{app_id}.desktop"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def user_dir(tmp_path: Path) -> Path:
    return tmp_path / "home" / "applications"


@pytest.fixture
def system_dir(tmp_path: Path) -> Path:
    return tmp_path / "usr" / "applications"


class TestParseDesktopFile:
    """Tests for parsing a single entry."""

    def test_full_entry(self, user_dir):
        path = write_desktop_file(
            user_dir, "firefox",
            Name="Firefox",
            Exec="firefox %u",
            Icon="firefox",
            Keywords="web;browser;internet;",
            Comment="Browse the World Wide Web",
        )

        app = parse_desktop_file(path)

        assert app == DesktopApp(
            id="firefox",
            name="Firefox",
            exec="firefox %u",
            icon="firefox",
            keywords=("web", "browser", "internet"),
            description="Browse the World Wide Web",
            path=path,
        )

    def test_optional_fields_default_to_none(self, user_dir):
        app = parse_desktop_file(write_desktop_file(user_dir, "tool", Name="Tool", Exec="tool"))

        assert app.icon is None
        assert app.description is None
        assert app.keywords == ()

    @pytest.mark.parametrize("fields", [
        {"Name": "Hidden", "Exec": "hidden", "Hidden": "true"},
        {"Name": "NoDisplay", "Exec": "nodisplay", "NoDisplay": "true"},
        {"Name": "Link", "Exec": "link", "Type": "Link"},
        {"Exec": "nameless"},
        {"Name": "No Exec"},
    ])
    def test_skipped_entries(self, user_dir, fields):
        assert parse_desktop_file(write_desktop_file(user_dir, "skipped", **fields)) is None

    def test_unparseable_file_is_skipped(self, user_dir):
        user_dir.mkdir(parents=True)
        path = user_dir / "broken.desktop"
        path.write_text("this is not an ini file\n")

        assert parse_desktop_file(path) is None


class TestScanApplications:
    """Tests for scanning directories."""

    def test_sorted_by_name(self, user_dir):
        write_desktop_file(user_dir, "zed", Name="zed", Exec="zed")
        write_desktop_file(user_dir, "alacritty", Name="Alacritty", Exec="alacritty")
        write_desktop_file(user_dir, "firefox", Name="Firefox", Exec="firefox")

        apps = scan_applications([user_dir])

        assert [app.name for app in apps] == ["Alacritty", "Firefox", "zed"]

    def test_sort_uses_case_folding(self, user_dir):
        write_desktop_file(user_dir, "mat", Name="Mat", Exec="mat")
        write_desktop_file(user_dir, "mast", Name="Maſt", Exec="mast")

        apps = scan_applications([user_dir])

        assert [app.name for app in apps] == ["Maſt", "Mat"]

    def test_first_directory_wins(self, user_dir, system_dir):
        write_desktop_file(user_dir, "firefox", Name="Firefox (User)", Exec="firefox-user")
        write_desktop_file(system_dir, "firefox", Name="Firefox", Exec="firefox")

        apps = scan_applications([user_dir, system_dir])

        assert len(apps) == 1
        assert apps[0].name == "Firefox (User)"

    def test_hidden_entry_does_not_shadow(self, user_dir, system_dir):
        write_desktop_file(user_dir, "firefox", Name="Firefox", Exec="firefox", Hidden="true")
        write_desktop_file(system_dir, "firefox", Name="Firefox", Exec="firefox")

        apps = scan_applications([user_dir, system_dir])

        assert [app.id for app in apps] == ["firefox"]
        assert apps[0].path.parent == system_dir

    def test_missing_directories_ignored(self, tmp_path, user_dir):
        write_desktop_file(user_dir, "firefox", Name="Firefox", Exec="firefox")

        apps = scan_applications([tmp_path / "absent", user_dir])

        assert [app.id for app in apps] == ["firefox"]

    def test_non_desktop_files_ignored(self, user_dir):
        write_desktop_file(user_dir, "firefox", Name="Firefox", Exec="firefox")
        (user_dir / "README.txt").write_text("not an entry")

        assert [app.id for app in scan_applications([user_dir])] == ["firefox"]


class TestDesktopApp:
    """Tests for DesktopApp helpers."""

    @pytest.mark.parametrize("exec_cmd,expected", [
        ("firefox %u", "firefox"),
        ("code --new-window %F", "code --new-window"),
        ("gimp-2.10 %U", "gimp-2.10"),
        ("ghostty", "ghostty"),
    ])
    def test_launch_command_strips_field_codes(self, exec_cmd, expected):
        app = DesktopApp(id="test", name="Test", exec=exec_cmd)
        assert app.launch_command() == expected

    def test_haystack_joins_name_and_keywords(self):
        app = DesktopApp(id="code", name="Visual Studio Code", exec="code", keywords=("editor", "ide"))
        assert app.haystack() == "Visual Studio Code editor ide"

    def test_haystack_without_keywords(self):
        assert DesktopApp(id="x", name="Firefox", exec="firefox").haystack() == "Firefox"
