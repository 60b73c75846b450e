"""Tests for frame composition and change detection."""

from pointy.models import Ledger, Reward, Task
from pointy.render import Renderer, Style, cell_width, clip, compose
from pointy.states import Main, NewReward, NewTask, SolveTask, TakeReward


def styles_of(frame, prefix):
    """Styles of the body rows whose text starts with `prefix`."""
    return [
        [s for _, s in line]
        for line in frame.lines
        if "".join(t for t, _ in line).startswith(prefix)
    ]


class TestMainFrame:
    def test_header_and_entries(self):
        frame = compose(Ledger(points=7), Main(0))
        assert frame.text().splitlines() == [
            "Welcome to pointy! You have 7 points.",
            "",
            "[+] Add new task",
            "[+] Add new reward",
            "[+] Solve task",
            "[+] Take reward",
            "[+] Clear points",
        ]
        assert frame.cursor is None

    def test_only_selected_entry_highlighted(self):
        frame = compose(Ledger(), Main(3))
        rows = styles_of(frame, "[+]")
        assert rows == [[Style.DEFAULT]] * 3 + [[Style.HIGHLIGHT]] + [[Style.DEFAULT]]


class TestWizardFrames:
    def test_title_step_shows_buffer_and_cursor(self):
        frame = compose(Ledger(), NewTask(title="Clean"))
        assert frame.text() == "New task\n\nTitle: Clean"
        assert frame.lines[2][0] == ("Title: ", Style.LABEL)
        assert frame.cursor == (2, len("Title: Clean"))

    def test_amount_step(self):
        frame = compose(Ledger(), NewReward(step=1, title="Coffee", price="1"))
        assert frame.text() == "Reward Coffee\n\nPrice: 1"
        assert frame.cursor == (2, len("Price: 1"))

    def test_confirm_step_summarizes(self):
        frame = compose(Ledger(), NewTask(step=2, title="Clean desk", reward="5"))
        assert frame.text() == "Almost done\n\nTitle: Clean desk\nReward: 5\nCreate? [y/n] "
        assert frame.cursor == (4, len("Create? [y/n] "))

    def test_pasted_line_breaks_stay_on_one_row(self):
        frame = compose(Ledger(), NewTask(title="a\nb"))
        assert frame.text().splitlines()[-1] == "Title: a b"


class TestListFrames:
    def test_solve_task_rows(self):
        ledger = Ledger(tasks=[Task("Run", 3), Task("Read", 1)])
        frame = compose(ledger, SolveTask(1))
        assert frame.text().splitlines() == [
            "Currently you have 2 tasks.",
            "",
            "[3] Run",
            "[1] Read",
        ]
        assert styles_of(frame, "[") == [[Style.DEFAULT], [Style.HIGHLIGHT]]
        assert frame.cursor is None

    def test_take_reward_mutes_unaffordable(self):
        ledger = Ledger(rewards=[Reward("Tea", 5), Reward("Coffee", 10), Reward("Movie", 30)], points=10)
        frame = compose(ledger, TakeReward(0))
        assert frame.text().splitlines()[0] == "Currently you have 3 rewards."
        assert styles_of(frame, "[") == [[Style.HIGHLIGHT], [Style.DEFAULT], [Style.MUTED]]

    def test_muted_wins_over_selection(self):
        ledger = Ledger(rewards=[Reward("Movie", 30)], points=0)
        frame = compose(ledger, TakeReward(0))
        assert styles_of(frame, "[") == [[Style.MUTED]]

    def test_every_frame_has_a_hint(self):
        for state in (Main(), NewTask(), NewTask(step=1), NewTask(step=2), SolveTask(), TakeReward()):
            assert compose(Ledger(), state).footer


class TestRenderer:
    def test_unchanged_input_skips_redraw(self):
        renderer = Renderer()
        ledger = Ledger(points=1)
        assert renderer.render(ledger, Main(0)) is not None
        assert renderer.render(ledger, Main(0)) is None

    def test_selection_change_redraws(self):
        renderer = Renderer()
        renderer.render(Ledger(), Main(0))
        assert renderer.render(Ledger(), Main(1)) is not None

    def test_buffer_change_redraws(self):
        renderer = Renderer()
        renderer.render(Ledger(), NewTask(title="a"))
        assert renderer.render(Ledger(), NewTask(title="ab")) is not None

    def test_same_fields_different_screen_redraws(self):
        renderer = Renderer()
        renderer.render(Ledger(), SolveTask(0))
        assert renderer.render(Ledger(), TakeReward(0)) is not None

    def test_in_place_ledger_mutation_redraws(self):
        renderer = Renderer()
        ledger = Ledger(tasks=[Task("Run", 3)])
        renderer.render(ledger, SolveTask(0))
        ledger.tasks[0].reward = 4
        frame = renderer.render(ledger, SolveTask(0))
        assert frame is not None
        assert "[4] Run" in frame.text()

    def test_invalidate_forces_redraw(self):
        renderer = Renderer()
        renderer.render(Ledger(), Main(0))
        renderer.invalidate()
        assert renderer.render(Ledger(), Main(0)) is not None


class TestDisplayText:
    def test_control_bytes_in_titles_are_printable(self):
        frame = compose(Ledger(), NewTask(title="a\x00b"))
        assert all(line.isprintable() for line in frame.text().splitlines())
        assert frame.text().splitlines()[-1] == "Title: a b"

    def test_stored_title_is_untouched(self):
        state = NewTask(title="a\x00b")
        compose(Ledger(), state)
        assert state.title == "a\x00b"

    def test_list_rows_are_printable(self):
        ledger = Ledger(tasks=[Task("x\x1by\tz", 1)])
        frame = compose(ledger, SolveTask(0))
        assert frame.text().splitlines()[-1] == "[1] x y z"

    def test_cell_width(self):
        assert cell_width("abc") == 3
        assert cell_width("\u732b") == 2
        assert cell_width("e\u0301") == 1

    def test_clip(self):
        assert clip("\u732b\u732bab", 3) == "\u732b"
        assert clip("abc", 5) == "abc"

    def test_cursor_after_wide_title(self):
        frame = compose(Ledger(), NewTask(title="\u732b\u732b"))
        assert frame.cursor == (2, len("Title: ") + 4)
