"""
Quiz: selection versus commit, countdown, review and rating.
"""

import pytest

from backend import config
from backend.engine.questions import QUESTIONS, Question
from backend.engine.quiz import QuizEngine
from backend.engine.state import COMPLETE, IN_PROGRESS, NOT_STARTED

SECOND = config.SECOND_MS
LIMIT = config.QUIZ_SECONDS_PER_QUESTION


def started(scheduler, **kwargs):
    engine = QuizEngine(scheduler, **kwargs)
    assert engine.start()
    return engine


def answer_all(engine, picks):
    for pick in picks:
        engine.select(pick)
        engine.advance()


def test_bank_has_eight_questions_with_four_options():
    assert len(QUESTIONS) == 8
    for q in QUESTIONS:
        assert len(q.options) == 4
        assert 0 <= q.correct_answer < 4
    assert "correct_answer" not in QUESTIONS[0].to_dict()
    assert QUESTIONS[0].to_dict(include_answer=True)["correct_answer"] == 0


def test_empty_bank_rejected(scheduler):
    with pytest.raises(ValueError):
        QuizEngine(scheduler, questions=[])


def test_not_started_ignores_input(scheduler):
    engine = QuizEngine(scheduler)
    assert engine.state.status == NOT_STARTED
    assert engine.current_question is None
    assert not engine.select(0)
    assert not engine.advance()
    scheduler.advance(SECOND * 5)
    assert engine.state.time_left == 0


def test_all_correct(scheduler):
    engine = started(scheduler)
    answer_all(engine, [q.correct_answer for q in QUESTIONS])
    assert engine.state.status == COMPLETE
    assert engine.state.score == 8
    assert engine.review() == []
    result = engine.finish()
    assert (result.score, result.stars) == (8, 5)


def test_select_does_not_advance(scheduler):
    engine = started(scheduler)
    assert engine.select(2)
    assert engine.select(1)
    assert engine.state.current_index == 0
    assert engine.state.selected == 1
    assert engine.state.score == 0
    assert not engine.select(4)
    assert engine.state.selected == 1


def test_advance_commits_and_resets_countdown(scheduler):
    engine = started(scheduler)
    scheduler.advance(SECOND * 10)
    assert engine.state.time_left == LIMIT - 10
    engine.select(QUESTIONS[0].correct_answer)
    engine.advance()
    s = engine.state
    assert s.current_index == 1
    assert s.score == 1
    assert s.answers[0] == QUESTIONS[0].correct_answer
    assert s.selected is None
    assert s.time_left == LIMIT


def test_advance_without_selection_records_none(scheduler):
    engine = started(scheduler)
    engine.advance()
    assert engine.state.answers[0] is None
    assert engine.state.score == 0


def test_timeout_records_no_answer(scheduler):
    engine = started(scheduler)
    scheduler.advance(LIMIT * SECOND - 1)
    assert engine.state.current_index == 0
    assert engine.state.time_left == 1
    scheduler.advance(1)
    s = engine.state
    assert s.current_index == 1
    assert s.answers[0] is None
    assert s.time_left == LIMIT
    types = [e.type for e in engine.drain_events()]
    assert "question_timed_out" in types


def test_timeout_commits_pending_selection(scheduler):
    engine = started(scheduler)
    engine.select(QUESTIONS[0].correct_answer)
    scheduler.advance(LIMIT * SECOND)
    assert engine.state.current_index == 1
    assert engine.state.score == 1


def test_timing_out_every_question(scheduler):
    engine = started(scheduler)
    scheduler.advance(LIMIT * SECOND * len(QUESTIONS))
    s = engine.state
    assert s.status == COMPLETE
    assert s.answers == [None] * 8
    assert s.score == 0
    assert not engine.countdown.running
    assert len(engine.review()) == 8
    assert engine.finish().stars == 1


def test_review_lists_wrong_answers(scheduler):
    engine = started(scheduler)
    picks = [q.correct_answer for q in QUESTIONS]
    picks[2] = (picks[2] + 1) % 4
    answer_all(engine, picks)
    review = engine.review()
    assert len(review) == 1
    entry = review[0]
    assert entry["question_id"] == QUESTIONS[2].id
    assert entry["your_answer"] == picks[2]
    assert entry["your_answer_text"] == QUESTIONS[2].options[picks[2]]
    assert entry["correct_answer_text"] == QUESTIONS[2].options[QUESTIONS[2].correct_answer]


def test_start_rejected_while_in_progress(scheduler):
    engine = started(scheduler)
    engine.advance()
    assert not engine.start()
    assert engine.state.current_index == 1
    assert engine.state.status == IN_PROGRESS


def test_restart_after_completion(scheduler):
    engine = started(scheduler)
    answer_all(engine, [0] * 8)
    assert engine.start()
    assert engine.state.current_index == 0
    assert engine.state.score == 0
    assert engine.state.answers == [None] * 8


def test_stars_from_percentage(scheduler):
    for correct, stars in [(8, 5), (7, 4), (6, 4), (5, 3), (4, 2), (3, 1), (0, 1)]:
        engine = started(scheduler)
        picks = [q.correct_answer if i < correct else (q.correct_answer + 1) % 4
                 for i, q in enumerate(QUESTIONS)]
        answer_all(engine, picks)
        assert engine.finish().stars == stars


def test_custom_question_bank(scheduler):
    bank = [Question(id=1, question="1 + 1?", options=("1", "2"), correct_answer=1, category="Math")]
    engine = started(scheduler, questions=bank, seconds_per_question=5)
    assert engine.state.time_left == 5
    engine.select(1)
    engine.advance()
    assert engine.state.status == COMPLETE
    data = engine.to_dict()
    assert data["total_questions"] == 1
    assert data["question"] is None
    assert data["review"] == []
