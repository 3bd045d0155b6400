#!/usr/bin/env python3
"""
Tests for the LaunchBar facade

Run: pytest tests/test_launchbar.py -v
"""

import io
import sys
import json
import asyncio
import pytest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class RecordingRunner:
    """Stands in for OsaScriptRunner; records scripts instead of running them."""

    def __init__(self, stdout=""):
        self.stdout = stdout
        self.scripts = []

    async def run(self, script):
        self.scripts.append(script)
        return self.stdout


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def make_launchbar(runner):
    """Build a LaunchBar with a recording runner and captured stdout."""
    from launchbar.core.environment import LaunchBarEnv
    from launchbar.launchbar import LaunchBar

    def _make(**env_fields):
        return LaunchBar(env=LaunchBarEnv(**env_fields), runner=runner, stdout=io.StringIO())
    return _make


class TestOutput:
    """Tests for LaunchBar.output."""

    def test_writes_json_line(self, make_launchbar):
        from launchbar.core.item import Item

        lb = make_launchbar()
        lb.output([Item(title="Safari", path="/Applications/Safari.app"), {"title": "raw"}])

        written = lb.stdout.getvalue()
        assert written.endswith("\n")
        assert json.loads(written) == [
            {"title": "Safari", "path": "/Applications/Safari.app"},
            {"title": "raw"},
        ]

    def test_defaults_to_sys_stdout(self, capsys):
        """Test output goes to sys.stdout when no stream is given."""
        from launchbar.core.environment import LaunchBarEnv
        from launchbar.launchbar import LaunchBar

        LaunchBar(env=LaunchBarEnv(), runner=RecordingRunner()).output({"title": "x"})
        assert json.loads(capsys.readouterr().out) == {"title": "x"}


class TestSimpleCommands:
    """Tests for the fixed-script commands."""

    def test_hide(self, make_launchbar, runner):
        asyncio.run(make_launchbar().hide())
        assert runner.scripts == ['tell application "LaunchBar" to hide']

    def test_remain_active(self, make_launchbar, runner):
        asyncio.run(make_launchbar().remain_active())
        assert runner.scripts == ['tell application "LaunchBar" to remain active']

    def test_clear_clipboard(self, make_launchbar, runner):
        asyncio.run(make_launchbar().clear_clipboard())
        assert runner.scripts == ['set the clipboard to ""']

    def test_one_process_per_call(self, make_launchbar, runner):
        """Test every operation issues exactly one script."""
        lb = make_launchbar()

        async def scenario():
            await lb.hide()
            await lb.paste("x")
            await lb.display_notification()

        asyncio.run(scenario())
        assert len(runner.scripts) == 3


class TestKeyboardFocus:
    """Tests for has_keyboard_focus."""

    @pytest.mark.parametrize("stdout,expected", [
        ("true\n", True),
        ("true", True),
        ("  true  \n", True),
        ("false\n", False),
        ("", False),
        ("TRUE", False),
        ("true true", False),
        ("garbage", False),
    ])
    def test_result_parsing(self, make_launchbar, runner, stdout, expected):
        """Test only a trimmed "true" means focused."""
        runner.stdout = stdout
        result = asyncio.run(make_launchbar().has_keyboard_focus())

        assert result is expected
        assert runner.scripts == ['tell application "LaunchBar" to return has keyboard focus']


class TestClipboardAndPaste:
    """Tests for set_clipboard_string and paste."""

    def test_set_clipboard(self, make_launchbar, runner):
        asyncio.run(make_launchbar().set_clipboard_string("hello"))
        assert runner.scripts == ['tell application "LaunchBar" to set the clipboard to "hello"']

    def test_set_clipboard_escapes(self, make_launchbar, runner):
        asyncio.run(make_launchbar().set_clipboard_string('say "hi" \\o/'))
        assert runner.scripts == [
            'tell application "LaunchBar" to set the clipboard to "say \\"hi\\" \\\\o/"'
        ]

    def test_paste_escapes(self, make_launchbar, runner):
        asyncio.run(make_launchbar().paste('" & (do shell script "id") & "'))
        assert runner.scripts == [
            'tell application "LaunchBar" to paste in frontmost application '
            '"\\" & (do shell script \\"id\\") & \\""'
        ]

    def test_paste_non_string_raises_before_spawning(self, make_launchbar, runner):
        """Test malformed input is a TypeError and nothing runs."""
        with pytest.raises(TypeError):
            asyncio.run(make_launchbar().paste(123))
        assert runner.scripts == []


class TestPerformService:
    """Tests for perform_service."""

    def test_with_argument(self, make_launchbar, runner):
        asyncio.run(make_launchbar().perform_service("Make New Sticky Note", "note text"))
        assert runner.scripts == [
            'tell application "LaunchBar" to perform service "Make New Sticky Note" '
            'with string "note text"'
        ]

    def test_without_argument(self, make_launchbar, runner):
        asyncio.run(make_launchbar().perform_service("Show Info"))
        assert runner.scripts == ['tell application "LaunchBar" to perform service "Show Info"']


class TestDisplayNotification:
    """Tests for display_notification."""

    def test_defaults(self, make_launchbar, runner):
        """Test no arguments gives the LaunchBar title and empty fields."""
        asyncio.run(make_launchbar().display_notification())
        assert runner.scripts == [
            'tell application "LaunchBar" to display in notification center "" '
            'with title "LaunchBar" subtitle "" callback URL "" after delay 0'
        ]

    def test_options_object(self, make_launchbar, runner):
        from launchbar.launchbar import NotificationOptions

        options = NotificationOptions(
            text='Done "now"', title="Build", subtitle="CI",
            callback_url="x-launchbar:select", after_delay=5
        )
        asyncio.run(make_launchbar().display_notification(options))
        assert runner.scripts == [
            'tell application "LaunchBar" to display in notification center "Done \\"now\\"" '
            'with title "Build" subtitle "CI" callback URL "x-launchbar:select" after delay 5'
        ]

    def test_keyword_fields(self, make_launchbar, runner):
        asyncio.run(make_launchbar().display_notification(text="hi", after_delay=1.5))
        assert runner.scripts[0].endswith('callback URL "" after delay 1.5')
        assert 'notification center "hi" with title "LaunchBar"' in runner.scripts[0]

    def test_empty_title_falls_back(self, make_launchbar, runner):
        asyncio.run(make_launchbar().display_notification(title=""))
        assert 'with title "LaunchBar"' in runner.scripts[0]

    def test_options_and_fields_conflict(self, make_launchbar):
        from launchbar.launchbar import NotificationOptions

        with pytest.raises(TypeError):
            asyncio.run(make_launchbar().display_notification(NotificationOptions(), text="x"))

    def test_unknown_field(self, make_launchbar):
        with pytest.raises(TypeError):
            asyncio.run(make_launchbar().display_notification(body="x"))

    def test_bad_delay(self, make_launchbar, runner):
        with pytest.raises(TypeError):
            asyncio.run(make_launchbar().display_notification(after_delay="soon"))
        assert runner.scripts == []


class TestTextAction:
    """Tests for text_action."""

    def test_pastes_joined_lines(self, make_launchbar, runner):
        lb = make_launchbar()
        lines = asyncio.run(lb.text_action(["a\nb", "c"], str.upper, "-"))

        assert lines == ["A", "B", "C"]
        assert runner.scripts == [
            'tell application "LaunchBar" to paste in frontmost application "A-B-C"'
        ]
        assert lb.stdout.getvalue() == ""

    def test_command_key_previews(self, make_launchbar, runner):
        """Test the command key prints items instead of pasting."""
        lb = make_launchbar(command_key=True)
        lines = asyncio.run(lb.text_action(["a\nb", "c"], str.upper, "-"))

        assert lines == ["A", "B", "C"]
        assert runner.scripts == []
        assert json.loads(lb.stdout.getvalue()) == [
            {"title": "A"}, {"title": "B"}, {"title": "C"}
        ]

    def test_preview_disabled(self, make_launchbar, runner):
        """Test preview_on_command_key=False always pastes."""
        lb = make_launchbar(command_key=True)
        asyncio.run(lb.text_action("x", str.upper, preview_on_command_key=False))

        assert runner.scripts == ['tell application "LaunchBar" to paste in frontmost application "X"']
        assert lb.stdout.getvalue() == ""

    def test_single_line_identity(self, make_launchbar, runner):
        lines = asyncio.run(make_launchbar().text_action("single line", lambda line: line))

        assert lines == ["single line"]
        assert runner.scripts == [
            'tell application "LaunchBar" to paste in frontmost application "single line"'
        ]

    def test_default_joiner_is_newline(self, make_launchbar, runner):
        asyncio.run(make_launchbar().text_action("a\nb", str.upper))
        assert runner.scripts == ['tell application "LaunchBar" to paste in frontmost application "A\nB"']


class TestFailures:
    """Tests for error propagation."""

    def test_exit_error_propagates(self, make_launchbar):
        from launchbar.bridges.osascript import ScriptExitError

        lb = make_launchbar()
        lb.runner = MagicMock()
        lb.runner.run = AsyncMock(side_effect=ScriptExitError("hide", 1, "LaunchBar got an error"))

        with pytest.raises(ScriptExitError):
            asyncio.run(lb.hide())
        lb.runner.run.assert_awaited_once()

    def test_spawn_error_propagates_from_text_action(self, make_launchbar):
        from launchbar.bridges.osascript import ScriptSpawnError

        lb = make_launchbar()
        lb.runner = MagicMock()
        lb.runner.run = AsyncMock(side_effect=ScriptSpawnError("/usr/bin/osascript", "missing"))

        with pytest.raises(ScriptSpawnError):
            asyncio.run(lb.text_action("x", str.upper))


class TestStores:
    """Tests for the facade's store handles."""

    def test_stores_open_once(self, make_launchbar):
        """Test stores are opened lazily and only once."""
        lb = make_launchbar(support_path="/tmp/s", cache_path="/tmp/c")

        with patch("launchbar.launchbar.open_stores") as mock_open:
            assert not mock_open.called
            config = lb.config
            cache = lb.cache
            assert lb.stores is mock_open.return_value
            mock_open.assert_called_once_with(lb.env)

        assert config is mock_open.return_value.config
        assert cache is mock_open.return_value.cache

    def test_close(self, make_launchbar):
        stores = MagicMock()
        lb = make_launchbar()
        lb._stores = stores

        with lb:
            pass
        stores.close.assert_called_once()

    def test_real_stores(self, tmp_path, runner):
        from launchbar.core.environment import LaunchBarEnv
        from launchbar.launchbar import LaunchBar

        env = LaunchBarEnv(support_path=str(tmp_path / "support"), cache_path=str(tmp_path / "cache"))
        with LaunchBar(env=env, runner=runner) as lb:
            lb.config.set("count", 3)
            lb.cache.set("recent", ["x"], expire=60)
            assert lb.config.get("count") == 3
            assert lb.cache.get("recent") == ["x"]
        assert (tmp_path / "support" / "config").is_dir()


class TestGetLaunchBar:
    """Tests for the process-wide instance."""

    def test_singleton(self, monkeypatch):
        import launchbar.launchbar as module

        monkeypatch.setattr(module, "_launchbar", None)
        monkeypatch.setenv("LB_OPTION_ALTERNATE_KEY", "1")

        first = module.get_launchbar()
        assert first is module.get_launchbar()
        assert first.env.alternate_key is True
