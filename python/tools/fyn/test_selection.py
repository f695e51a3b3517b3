import pytest

from .conftest import ScriptedChannel, archive, official
from .selection import SelectionEngine, SelectionState


def make_packages(count):
    return [official(f"pkg{i}") for i in range(1, count + 1)]


def make_engine(packages, query="pkg", inputs=None, page_size=10):
    channel = ScriptedChannel(inputs)
    return SelectionEngine(packages, query, channel, page_size=page_size), channel


class TestExactMatch:
    """The exact-match shortcut skips the listing entirely"""

    def test_exact_match_selected_without_prompt(self):
        packages = [official("yay-bin"), archive("yay")]
        engine, channel = make_engine(packages, query="yay")

        transition = engine.run()

        assert transition.state is SelectionState.EXACT_MATCH
        assert transition.selected
        assert transition.record is packages[1]
        assert channel.prompts == []

    def test_first_exact_match_wins(self):
        packages = [official("foo"), archive("foo")]
        engine, _ = make_engine(packages, query="foo")

        assert engine.run().record is packages[0]

    def test_exact_match_is_case_sensitive(self):
        engine, channel = make_engine([official("Foo")], query="foo", inputs=["q"])

        assert engine.run().state is SelectionState.CANCELLED
        assert len(channel.prompts) == 1


class TestPagination:
    """Page bounds and the 'more' command"""

    @pytest.mark.parametrize(
        "count,page,bounds",
        [(25, 0, (0, 10)), (25, 1, (10, 20)), (25, 2, (20, 25)), (10, 0, (0, 10))],
    )
    def test_page_bounds(self, count, page, bounds):
        engine, _ = make_engine(make_packages(count))
        engine.page = page

        assert engine.page_bounds() == bounds

    def test_labels_continue_across_pages(self):
        engine, _ = make_engine(make_packages(12))

        engine.handle_input("more")

        assert engine.page_lines()[0] == "[11] extra/pkg11 1.0-1"
        assert engine.page_lines()[2] == "[12] extra/pkg12 1.0-1"

    def test_more_advances_when_pages_remain(self):
        engine, _ = make_engine(make_packages(15))

        transition = engine.handle_input("more")

        assert transition.state is SelectionState.PAGED_LIST
        assert transition.page_advanced
        assert engine.page == 1

    @pytest.mark.parametrize("text", ["m", "M", "MORE", " more "])
    def test_more_aliases(self, text):
        engine, _ = make_engine(make_packages(15))

        assert engine.handle_input(text).page_advanced

    def test_more_on_last_page_stays(self):
        engine, _ = make_engine(make_packages(5))

        transition = engine.handle_input("more")

        assert not transition.page_advanced
        assert transition.notice == "No more packages to show."
        assert engine.page == 0

    def test_prompt_depends_on_remaining_pages(self):
        engine, _ = make_engine(make_packages(15))

        assert engine.prompt() == (
            "Showing 1-10 of 15. Enter number/name, 'more' for next page, or 'q' to quit: "
        )
        engine.handle_input("m")
        assert engine.prompt() == "Enter number or package name to install (or 'q' to quit): "


class TestInputHandling:
    """Transitions for each kind of input"""

    @pytest.mark.parametrize("text", ["", "   ", "q", "Q", None])
    def test_cancel(self, text):
        engine, _ = make_engine(make_packages(3))

        transition = engine.handle_input(text)

        assert transition.state is SelectionState.CANCELLED
        assert not transition.selected

    def test_select_by_number(self):
        packages = make_packages(15)
        engine, _ = make_engine(packages)

        transition = engine.handle_input("15")

        assert transition.state is SelectionState.SELECTED
        assert transition.record is packages[14]

    @pytest.mark.parametrize("text", ["0", "4", "-1"])
    def test_out_of_range_number_stays_on_page(self, text):
        engine, _ = make_engine(make_packages(3))

        transition = engine.handle_input(text)

        assert transition.state is SelectionState.PAGED_LIST
        assert transition.notice == "Invalid number. Please enter 1-3."
        assert engine.page == 0

    @pytest.mark.parametrize("text", ["1_0", "١", "1.0", "0x1"])
    def test_non_plain_numbers_are_looked_up_as_names(self, text):
        engine, _ = make_engine(make_packages(12))

        transition = engine.handle_input(text)

        assert transition.state is SelectionState.PAGED_LIST
        assert transition.notice == f"Package '{text}' not found in results. Try again."

    def test_signed_number(self):
        packages = make_packages(3)
        engine, _ = make_engine(packages)

        assert engine.handle_input("+3").record is packages[2]

    def test_select_by_name_searches_whole_list(self):
        packages = make_packages(25)
        engine, _ = make_engine(packages)

        transition = engine.handle_input("pkg23")

        assert transition.state is SelectionState.SELECTED
        assert transition.record is packages[22]

    def test_unknown_name(self):
        engine, _ = make_engine(make_packages(3))

        transition = engine.handle_input("nope")

        assert transition.state is SelectionState.PAGED_LIST
        assert transition.notice == "Package 'nope' not found in results. Try again."


class TestRun:
    """Driving the engine through a channel"""

    def test_invalid_input_then_selection(self):
        packages = make_packages(12)
        engine, channel = make_engine(packages, inputs=["99", "more", "12"])

        transition = engine.run()

        assert transition.record is packages[11]
        assert len(channel.prompts) == 3
        assert "Invalid number. Please enter 1-12." in channel.output
        assert channel.output[0] == "Found 12 matching package(s):"

    def test_end_of_input_cancels(self):
        engine, _ = make_engine(make_packages(3), inputs=[])

        assert engine.run().state is SelectionState.CANCELLED

    def test_rejects_bad_page_size(self):
        with pytest.raises(ValueError):
            SelectionEngine([], "x", ScriptedChannel(), page_size=0)
