"""Tests for the move correlator."""

from __future__ import annotations

from headinglinks.correlator import CorrelatorState, MoveCorrelator, pair_headings
from headinglinks.schemas import Heading


def _heading(text: str, position: int, document: str = "A.md", level: int = 2) -> Heading:
    return Heading(text=text, level=level, position=position, document=document)


class TestPairHeadings:
    """Tests for pair_headings function."""

    def test_rename_in_place(self) -> None:
        """Same document and position with new text is a rename."""
        moves = pair_headings([_heading("Old", 3)], [_heading("New", 3)])

        assert len(moves) == 1
        move = moves[0]
        assert (move.old_heading, move.new_heading) == ("Old", "New")
        assert move.document == move.new_document == "A.md"
        assert move.position == 3

    def test_same_document_different_position_is_not_a_move(self) -> None:
        """A heading deleted here and another added there stay unpaired."""
        assert pair_headings([_heading("Old", 3)], [_heading("New", 8)]) == []

    def test_move_between_documents(self) -> None:
        """Same text in another document is a relocation."""
        moves = pair_headings([_heading("Intro", 2, "X.md")], [_heading("Intro", 5, "Y.md")])

        assert len(moves) == 1
        move = moves[0]
        assert move.old_heading == move.new_heading == "Intro"
        assert (move.document, move.new_document) == ("X.md", "Y.md")
        assert move.position == 2

    def test_different_document_different_text_is_not_a_move(self) -> None:
        """Unrelated headings in two documents stay unpaired."""
        assert pair_headings([_heading("A", 0, "X.md")], [_heading("B", 0, "Y.md")]) == []

    def test_first_removed_heading_wins(self) -> None:
        """Ties resolve to the first candidate in removal order."""
        removed = [_heading("Intro", 1, "X.md"), _heading("Intro", 7, "X.md")]

        moves = pair_headings(removed, [_heading("Intro", 0, "Y.md")])

        assert [m.position for m in moves] == [1]

    def test_removed_heading_is_paired_once(self) -> None:
        """Two added copies cannot both claim the same removed heading."""
        removed = [_heading("Intro", 1, "X.md")]
        added = [_heading("Intro", 0, "Y.md"), _heading("Intro", 4, "Y.md")]

        assert len(pair_headings(removed, added)) == 1


class TestMoveCorrelator:
    """Tests for MoveCorrelator state handling."""

    def test_starts_empty(self) -> None:
        """A new correlator holds nothing."""
        assert MoveCorrelator().state is CorrelatorState.EMPTY

    def test_in_place_rename_from_one_notification(self) -> None:
        """One edit fills both slots and yields the rename."""
        correlator = MoveCorrelator()
        before = [_heading("Intro", 0), _heading("Body", 4)]
        after = [_heading("Overview", 0), _heading("Body", 4)]

        correlation = correlator.observe("A.md", before, after)

        assert correlation is not None
        assert correlation.old_document == correlation.new_document == "A.md"
        assert [(m.old_heading, m.new_heading) for m in correlation.moves] == [
            ("Intro", "Overview")
        ]
        assert correlator.state is CorrelatorState.EMPTY

    def test_cut_and_paste_across_two_notifications(self) -> None:
        """The cut fills the removal slot, the paste completes the move."""
        correlator = MoveCorrelator()
        section = _heading("Setup", 2, "X.md")

        assert correlator.observe("X.md", [section], []) is None
        assert correlator.state is CorrelatorState.PARTIALLY_FILLED
        assert correlator.removal is not None
        assert correlator.removal.document == "X.md"

        correlation = correlator.observe("Y.md", [], [_heading("Setup", 6, "Y.md")])

        assert correlation is not None
        assert (correlation.old_document, correlation.new_document) == ("X.md", "Y.md")
        assert correlation.moves[0].old_heading == correlation.moves[0].new_heading == "Setup"
        assert correlator.state is CorrelatorState.EMPTY

    def test_paste_before_cut_also_correlates(self) -> None:
        """Order of the two notifications does not matter."""
        correlator = MoveCorrelator()

        assert correlator.observe("Y.md", [], [_heading("Setup", 0, "Y.md")]) is None
        correlation = correlator.observe("X.md", [_heading("Setup", 3, "X.md")], [])

        assert correlation is not None
        assert (correlation.old_document, correlation.new_document) == ("X.md", "Y.md")

    def test_no_heading_differences_leave_buffer_untouched(self) -> None:
        """An edit to body text only does not touch the slots."""
        correlator = MoveCorrelator()
        correlator.observe("X.md", [_heading("Setup", 3, "X.md")], [])
        removal = correlator.removal
        headings = [_heading("Other", 0, "Z.md")]

        assert correlator.observe("Z.md", headings, headings) is None
        assert correlator.removal is removal
        assert correlator.addition is None

    def test_newer_record_overwrites_slot(self) -> None:
        """The latest removal replaces an earlier one."""
        correlator = MoveCorrelator()
        correlator.observe("X.md", [_heading("First", 0, "X.md")], [])
        correlator.observe("W.md", [_heading("Second", 0, "W.md")], [])

        assert correlator.removal is not None
        assert correlator.removal.document == "W.md"
        assert [h.text for h in correlator.removal.headings] == ["Second"]

    def test_failed_correlation_keeps_slots_by_default(self) -> None:
        """Without a pair both records wait for the next notification."""
        correlator = MoveCorrelator(clear_on_miss=False)
        correlator.observe("X.md", [_heading("Setup", 0, "X.md")], [])

        assert correlator.observe("Y.md", [], [_heading("Unrelated", 0, "Y.md")]) is None
        assert correlator.state is CorrelatorState.FILLED

        correlation = correlator.observe("Z.md", [], [_heading("Setup", 1, "Z.md")])

        assert correlation is not None
        assert correlation.new_document == "Z.md"

    def test_clear_on_miss_empties_slots(self) -> None:
        """The opt-in policy discards both records after a failed attempt."""
        correlator = MoveCorrelator(clear_on_miss=True)
        correlator.observe("X.md", [_heading("Setup", 0, "X.md")], [])

        assert correlator.observe("Y.md", [], [_heading("Unrelated", 0, "Y.md")]) is None
        assert correlator.state is CorrelatorState.EMPTY

    def test_reset(self) -> None:
        """reset() empties both slots."""
        correlator = MoveCorrelator()
        correlator.observe("X.md", [_heading("Setup", 0, "X.md")], [])

        correlator.reset()

        assert correlator.state is CorrelatorState.EMPTY
