"""
🧪 test_like_set.py — автомат станів вподобайок

Перевіряє:
- NOT_LIKED → PENDING → LIKED
- Відкат PENDING → NOT_LIKED не чіпає інші id
- replace_confirmed() замінює LIKED і не чіпає PENDING
"""

from musicrecs.domain.music import LikeSet, LikeState


def test_begin_confirm_transitions():
    likes = LikeSet()
    assert likes.state_of("s1") is LikeState.NOT_LIKED
    assert likes.begin("s1") is True
    assert likes.state_of("s1") is LikeState.PENDING
    assert "s1" in likes
    assert likes.confirm("s1") is True
    assert likes.state_of("s1") is LikeState.LIKED


def test_begin_is_noop_for_pending_and_liked():
    likes = LikeSet(["s1"])
    likes.begin("s2")
    assert likes.begin("s1") is False
    assert likes.begin("s2") is False
    assert likes.pending() == frozenset({"s2"})


def test_rollback_removes_only_that_id():
    likes = LikeSet(["a", "b"])
    likes.begin("c")
    likes.begin("d")
    assert likes.rollback("c") is True
    assert likes.ids() == frozenset({"a", "b", "d"})
    assert likes.rollback("a") is False  # підтверджені не відкочуються


def test_replace_confirmed_swaps_liked_ids_and_keeps_pending():
    likes = LikeSet(["old", "x"])
    likes.begin("p")
    added = likes.replace_confirmed(["p", "x", "y", "x"])
    assert added == 1
    assert likes.state_of("p") is LikeState.PENDING
    assert likes.state_of("x") is LikeState.LIKED
    assert likes.state_of("old") is LikeState.NOT_LIKED
    assert likes.ids() == frozenset({"p", "x", "y"})


def test_clear_empties_everything():
    likes = LikeSet(["a"])
    likes.begin("b")
    likes.clear()
    assert list(likes) == []
    assert likes.confirm("b") is False
