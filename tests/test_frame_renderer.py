"""
Tests for the pinned frame renderer.
"""

from __future__ import annotations

import string
import threading

from hypothesis import given, strategies as st

from capitalist_world.utils.ui.core import frame_renderer as frame_module
from capitalist_world.utils.ui.core.frame_renderer import (
    CLEAR_LINE,
    RESTORE_CURSOR,
    SAVE_CURSOR,
    FrameRenderer,
    move_to,
)
from capitalist_world.utils.ui.core.terminal_mode import TerminalModeController
from conftest import FakeTerminal, MutableSize


def _make_renderer(
    tty: bool = True,
    size: MutableSize | None = None,
    force_ansi: bool = False,
    disable_ansi: bool = False,
) -> tuple[FrameRenderer, FakeTerminal]:
    stream = FakeTerminal(tty=tty)
    renderer = FrameRenderer(
        stream,
        size_provider=size or MutableSize(),
        mode_controller=TerminalModeController(stdin=FakeTerminal(tty=False)),
        force_ansi=force_ansi,
        disable_ansi=disable_ansi,
    )
    renderer.configure()
    return renderer, stream


def test_configure_detects_terminal_and_honors_overrides() -> None:
    """Verify tty detection and that disable wins over force."""
    assert _make_renderer(tty=True)[0].ansi_capable
    assert not _make_renderer(tty=False)[0].ansi_capable
    assert _make_renderer(tty=False, force_ansi=True)[0].ansi_capable
    assert not _make_renderer(tty=True, disable_ansi=True)[0].ansi_capable
    assert not _make_renderer(tty=True, force_ansi=True, disable_ansi=True)[0].ansi_capable


def test_render_full_positions_prompt_and_status_rows() -> None:
    """Verify the four frame rows are cleared and filled from the bottom."""
    renderer, stream = _make_renderer(size=MutableSize((80, 24)))

    renderer.render_full("capitalist> ", "Balance: $1.00")
    output = stream.getvalue()

    for row in (21, 22, 23, 24):
        assert move_to(row) + CLEAR_LINE in output
    assert move_to(22) + "Balance: $1.00" in output
    assert output.endswith(move_to(21) + "capitalist> ")
    assert renderer.frame_active
    assert renderer.status_region_active


def test_update_status_only_skips_identical_text() -> None:
    """Verify a repeated status issues no second write."""
    renderer, stream = _make_renderer()
    renderer.render_full("> ", "day 1")

    before = len(stream.getvalue())
    assert renderer.update_status_only("day 1") is False
    assert len(stream.getvalue()) == before

    assert renderer.update_status_only("day 2") is True
    written = stream.getvalue()[before:]
    assert written.count(SAVE_CURSOR) == 1
    assert written.count(RESTORE_CURSOR) == 1
    assert written == SAVE_CURSOR + move_to(22) + CLEAR_LINE + "day 2" + RESTORE_CURSOR

    after = len(stream.getvalue())
    assert renderer.update_status_only("day 2") is False
    assert len(stream.getvalue()) == after


@given(
    st.lists(
        st.text(alphabet=string.ascii_letters + string.digits + " :$,.", max_size=20),
        max_size=30,
    )
)
def test_update_writes_only_when_text_changes(statuses: list[str]) -> None:
    """Verify the number of positioned writes equals the number of changes."""
    renderer, stream = _make_renderer()
    renderer.render_full("> ", "initial")
    start = len(stream.getvalue())

    expected = 0
    previous = "initial"
    for status in statuses:
        renderer.update_status_only(status)
        if status != previous:
            expected += 1
            previous = status

    assert stream.getvalue()[start:].count(SAVE_CURSOR) == expected


def test_suspend_resume_render_matches_fresh_render() -> None:
    """Verify a repaint after suspension is byte-identical to a first paint."""
    fresh, fresh_stream = _make_renderer()
    fresh.render_full("> ", "status")

    renderer, stream = _make_renderer()
    renderer.render_full("> ", "status")
    renderer.suspend()
    renderer.resume()
    mark = len(stream.getvalue())
    renderer.render_full("> ", "status")

    assert stream.getvalue()[mark:] == fresh_stream.getvalue()


def test_suspend_clears_frame_bottom_to_top() -> None:
    """Verify suspension erases the frame and parks the cursor on the last row."""
    renderer, stream = _make_renderer(size=MutableSize((80, 24)))
    renderer.render_full("> ", "status")
    mark = len(stream.getvalue())

    renderer.suspend()

    expected = "".join(move_to(row) + CLEAR_LINE for row in (24, 23, 22, 21))
    assert stream.getvalue()[mark:] == expected + move_to(24)
    assert renderer.suspended
    assert not renderer.frame_active
    assert not renderer.status_region_active


def test_updates_ignored_while_suspended() -> None:
    """Verify status updates do nothing until the frame is repainted."""
    renderer, stream = _make_renderer()
    renderer.render_full("> ", "one")
    renderer.suspend()
    mark = len(stream.getvalue())

    assert renderer.update_status_only("two") is False
    renderer.resume()
    assert renderer.update_status_only("two") is False
    assert len(stream.getvalue()) == mark

    renderer.render_full("> ", "two")
    assert renderer.update_status_only("three") is True


def test_short_terminal_falls_back_until_taller() -> None:
    """Verify fewer than four rows uses the plain layout and disables updates."""
    size = MutableSize((80, 3))
    renderer, stream = _make_renderer(size=size)

    renderer.render_full("> ", "status")
    assert stream.getvalue() == "> \nstatus"
    assert not renderer.status_region_active

    mark = len(stream.getvalue())
    assert renderer.update_status_only("other") is False
    assert len(stream.getvalue()) == mark

    size.size = (80, 24)
    assert renderer.update_status_only("other") is False

    renderer.render_full("> ", "status")
    assert renderer.status_region_active
    assert renderer.update_status_only("other") is True


def test_failed_size_query_falls_back() -> None:
    """Verify an unknown terminal size never produces positioned output."""
    renderer, stream = _make_renderer(size=MutableSize(None))

    renderer.render_full("> ", "status")

    assert "\033[" not in stream.getvalue()
    assert not renderer.status_region_active


def test_size_provider_errors_are_treated_as_unknown() -> None:
    """Verify a raising size provider degrades to the fallback layout."""

    def broken() -> tuple[int, int]:
        raise OSError("no tty")

    stream = FakeTerminal(tty=True)
    renderer = FrameRenderer(
        stream,
        size_provider=broken,
        mode_controller=TerminalModeController(stdin=FakeTerminal(tty=False)),
    )
    renderer.configure()
    renderer.render_full("> ", "status")

    assert stream.getvalue() == "> \nstatus"


def test_status_row_follows_resize() -> None:
    """Verify the status row is recomputed from the current size on each update."""
    size = MutableSize((80, 24))
    renderer, stream = _make_renderer(size=size)
    renderer.render_full("> ", "one")

    size.size = (80, 30)
    mark = len(stream.getvalue())
    renderer.update_status_only("two")

    assert move_to(28) in stream.getvalue()[mark:]


def test_too_short_for_status_update_disables_region() -> None:
    """Verify shrinking below three rows stops incremental updates."""
    size = MutableSize((80, 24))
    renderer, _ = _make_renderer(size=size)
    renderer.render_full("> ", "one")

    size.size = (80, 2)
    assert renderer.update_status_only("two") is False
    assert not renderer.status_region_active

    size.size = (80, 24)
    assert renderer.update_status_only("two") is False


def test_long_status_is_truncated_to_width() -> None:
    """Verify text never wraps onto the padding row."""
    renderer, stream = _make_renderer(size=MutableSize((10, 24)))

    renderer.render_full("> ", "x" * 50)

    assert move_to(22) + "x" * 9 + move_to(21) in stream.getvalue()


def test_non_ansi_render_and_suspend() -> None:
    """Verify plain output mode never writes escape sequences."""
    renderer, stream = _make_renderer(tty=False)

    renderer.render_full("> ", "status")
    assert renderer.update_status_only("changed") is False
    renderer.suspend()

    assert stream.getvalue() == "> \nstatus\n"
    assert "\033" not in stream.getvalue()


def test_append_tears_down_active_frame() -> None:
    """Verify scrolling output suspends the frame before printing."""
    renderer, stream = _make_renderer(size=MutableSize((80, 24)))
    renderer.render_full("> ", "status")
    mark = len(stream.getvalue())

    renderer.append_text("hello world")

    output = stream.getvalue()[mark:]
    assert renderer.suspended
    assert output.startswith(move_to(24) + CLEAR_LINE)
    assert "hello world" in output


def test_restore_without_configure_is_silent() -> None:
    """Verify restore is a no-op before configure and when repeated."""
    stream = FakeTerminal(tty=True)
    renderer = FrameRenderer(
        stream,
        size_provider=MutableSize(),
        mode_controller=TerminalModeController(stdin=FakeTerminal(tty=False)),
    )

    renderer.restore()
    renderer.restore()

    assert stream.getvalue() == ""


def test_restore_twice_after_configure_is_silent() -> None:
    """Verify repeated restores after configure write nothing."""
    renderer, stream = _make_renderer()
    mark = len(stream.getvalue())

    renderer.restore()
    renderer.restore()

    assert len(stream.getvalue()) == mark


def test_move_to_sequence() -> None:
    assert frame_module.move_to(5) == "\033[5;1H"
    assert frame_module.move_to(2, 7) == "\033[2;7H"


def test_input_prompt_written_only_after_fallback() -> None:
    """Verify plain output gets its own input line and positioned frames do not."""
    renderer, stream = _make_renderer(tty=False)
    renderer.render_full("> ", "status")

    assert renderer.write_input_prompt("> ") is True
    assert stream.getvalue() == "> \nstatus\n> "

    positioned, positioned_stream = _make_renderer()
    positioned.render_full("> ", "status")
    mark = len(positioned_stream.getvalue())

    assert positioned.write_input_prompt("> ") is False
    assert len(positioned_stream.getvalue()) == mark


def test_concurrent_updates_never_split_a_status_write() -> None:
    """Verify each save cursor is closed by one restore with no frame writes between."""
    renderer, stream = _make_renderer(size=MutableSize((80, 24)))
    renderer.render_full("> ", "start")
    status_prefix = move_to(22) + CLEAR_LINE
    start = threading.Barrier(5)

    def update(worker: int) -> None:
        start.wait()
        for step in range(200):
            renderer.update_status_only(f"worker {worker} step {step}")

    workers = [threading.Thread(target=update, args=(index,)) for index in range(4)]
    for thread in workers:
        thread.start()

    start.wait()
    for step in range(100):
        renderer.render_full("> ", f"frame {step}")
        renderer.suspend()
        renderer.resume()
    renderer.render_full("> ", "done")

    for thread in workers:
        thread.join(timeout=5.0)
        assert not thread.is_alive()

    chunks = stream.getvalue().split(SAVE_CURSOR)[1:]
    for chunk in chunks:
        assert chunk.count(RESTORE_CURSOR) == 1
        written = chunk.split(RESTORE_CURSOR)[0]
        assert written.startswith(status_prefix)
        assert "\033" not in written[len(status_prefix):]
