from __future__ import annotations

from unittest.mock import Mock, patch

from hr_audit.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


def test_tracker_creates_tqdm_on_tty():
    with patch("hr_audit.services.progress.is_tty_enabled", return_value=True), \
         patch("hr_audit.services.progress.tqdm") as mock_tqdm:
        tracker = ProgressTracker(5, description="Evaluating records")
        mock_tqdm.assert_called_once_with(
            total=5,
            desc="Evaluating records",
            unit="row",
            disable=False,
            leave=True,
            position=0,
            ncols=80,
            ascii=True,
        )
        tracker.advance()
        tracker.advance(2)
        assert tracker.done == 3
        mock_tqdm.return_value.update.assert_any_call(2)


def test_tracker_disabled_without_tty():
    with patch("hr_audit.services.progress.is_tty_enabled", return_value=False):
        tracker = ProgressTracker(3)
        assert tracker.pbar is None
        tracker.advance()
        tracker.set_postfix(flagged=1)
        tracker.close()
        assert tracker.done == 1


def test_context_manager_closes_bar():
    pbar = Mock()
    with patch("hr_audit.services.progress.is_tty_enabled", return_value=True), \
         patch("hr_audit.services.progress.tqdm", return_value=pbar):
        with ProgressTracker(1) as tracker:
            tracker.advance()
    pbar.close.assert_called_once()
