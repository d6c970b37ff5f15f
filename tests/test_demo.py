"""Tests for the example driver."""

from unittest.mock import MagicMock, Mock, patch

import pytest
from blessed import Terminal
from ascii_screen import CLEAR_LINES, Screen
from ascii_screen import demo


def create_mock_terminal(width=80, height=24, tty=False):
    """Create a mock Terminal with specified dimensions."""
    term = Mock(spec=Terminal)
    term.width = width
    term.height = height
    term.is_a_tty = tty
    term.cbreak.return_value = MagicMock()
    return term


class TestBuildScreen:
    """Tests for the example window layout."""

    def test_layout(self):
        """Test that the example windows overlap as expected."""
        screen = Screen(100, 40)
        example, top = demo.build_screen(screen)

        assert screen.windows == (example, top)
        rows = screen.render()
        assert rows[10] == '     +------------------+'.ljust(100)
        # Long line is cut at the window width
        assert rows[16] == '     he1-he2-he3-he4-he5-'.ljust(100)
        # Top window covers the right part of the example window
        assert rows[17] == '     it was 1###############'.ljust(100)
        assert rows[18] == '     +-------# This Window #'.ljust(100)
        assert rows[26] == (' ' * 13 + '#' * 15).ljust(100)


class TestMain:
    """Tests for demo.main()."""

    def test_main_prints_frame(self, capsys):
        """Test that main() writes a cleared 100x40 frame."""
        with patch.object(demo, 'Terminal', return_value=create_mock_terminal()):
            assert demo.main(['--no-wait']) == 0

        out = capsys.readouterr().out
        assert out.startswith('\n' * CLEAR_LINES)
        rows = out[CLEAR_LINES:].split('\n')
        assert rows[-1] == ''
        assert len(rows[:-1]) == 40
        assert all(len(row) == 100 for row in rows[:-1])

    def test_main_fit_uses_terminal(self):
        """Test that --fit sizes the screen to the terminal and writes to it."""
        term = create_mock_terminal(30, 20)
        with patch.object(demo, 'Terminal', return_value=term):
            demo.main(['--fit', '--no-wait'])

        term.stream.write.assert_called_once()
        frame = term.stream.write.call_args[0][0]
        rows = frame[CLEAR_LINES:].split('\n')[:-1]
        assert len(rows) == 20
        assert all(len(row) == 30 for row in rows)
        term.stream.flush.assert_called_once()

    def test_main_waits_for_key_on_tty(self, capsys):
        """Test that main() waits for a key press on a terminal."""
        term = create_mock_terminal(tty=True)
        with patch.object(demo, 'Terminal', return_value=term):
            demo.main([])

        term.cbreak.assert_called_once()
        term.inkey.assert_called_once()

    def test_main_does_not_wait_without_tty(self, capsys):
        """Test that main() returns immediately when not on a terminal."""
        term = create_mock_terminal(tty=False)
        with patch.object(demo, 'Terminal', return_value=term):
            demo.main([])

        term.inkey.assert_not_called()

    def test_help(self, capsys):
        """Test that --help exits cleanly."""
        with pytest.raises(SystemExit) as exc_info:
            demo.main(['--help'])
        assert exc_info.value.code == 0
        assert 'ascii-screen-demo' in capsys.readouterr().out
