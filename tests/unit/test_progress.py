from __future__ import annotations

from unittest.mock import MagicMock, patch

from microchip_update.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_follows_stdout():
    with patch("sys.stdout") as stdout:
        stdout.isatty.return_value = True
        assert is_tty_enabled() is True
        stdout.isatty.return_value = False
        assert is_tty_enabled() is False


def test_tracker_disabled_without_tty():
    with patch("microchip_update.services.progress.is_tty_enabled", return_value=False):
        tracker = ProgressTracker(total=10)
    assert tracker.enabled is False
    assert tracker.pbar is None
    tracker.advance(3)
    tracker.set_postfix(dogs=2)
    tracker.close()
    assert tracker.current == 3


def test_tracker_drives_tqdm_on_tty():
    bar = MagicMock()
    with patch("microchip_update.services.progress.is_tty_enabled", return_value=True), patch(
        "microchip_update.services.progress.tqdm", return_value=bar
    ) as tqdm_cls:
        with ProgressTracker(total=5, description="Loading old.csv") as tracker:
            tracker.advance()
            tracker.advance(2)
            tracker.set_postfix(dogs=3)

    assert tqdm_cls.call_args.kwargs["total"] == 5
    assert tqdm_cls.call_args.kwargs["desc"] == "Loading old.csv"
    assert bar.update.call_count == 2
    bar.set_postfix.assert_called_once_with(dogs=3)
    bar.close.assert_called_once()
    assert tracker.pbar is None
