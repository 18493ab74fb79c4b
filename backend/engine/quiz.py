"""
Timed multiple-choice quiz.

not_started -> in_progress (question i, counting down) -> ... -> complete

Selecting an option only records it. The answer is committed when the player
advances or when the countdown runs out, whichever happens first.
"""

import random

from backend import config
from backend.engine.base import GameEngine
from backend.engine.clock import Scheduler
from backend.engine.events import (
    game_completed,
    game_started,
    option_selected,
    question_answered,
    question_timed_out,
)
from backend.engine.questions import QUESTIONS, Question
from backend.engine.scoring import QUIZ_STAR_THRESHOLDS, quiz_percentage, stars_for
from backend.engine.state import COMPLETE, IN_PROGRESS, QuizState


class QuizEngine(GameEngine):
    game_id = "quiz"

    def __init__(
        self,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        questions: list[Question] | None = None,
        seconds_per_question: int = config.QUIZ_SECONDS_PER_QUESTION,
    ):
        super().__init__(scheduler, rng)
        self.questions = list(questions if questions is not None else QUESTIONS)
        if not self.questions:
            raise ValueError("Quiz needs at least one question")
        self.seconds_per_question = seconds_per_question
        self.state = QuizState(answers=[None] * len(self.questions))
        self.countdown = self.make_clock(config.SECOND_MS, self._tick)

    @property
    def current_question(self) -> Question | None:
        if self.state.status != IN_PROGRESS:
            return None
        return self.questions[self.state.current_index]

    def start(self) -> bool:
        if self.ended or self.state.status == IN_PROGRESS:
            return False
        self.state = QuizState(
            time_left=self.seconds_per_question,
            answers=[None] * len(self.questions),
            status=IN_PROGRESS,
        )
        self.countdown.restart()
        self.started = True
        self.emit(game_started(self.game_id))
        return True

    def select(self, option: int) -> bool:
        """Record a choice for the current question without advancing."""
        question = self.current_question
        if self.ended or question is None:
            return False
        if not isinstance(option, int) or not 0 <= option < len(question.options):
            return False
        self.state.selected = option
        self.emit(option_selected(self.state.current_index, option))
        return True

    def advance(self) -> bool:
        """Next / Finish: commit the current selection and move on."""
        if self.ended or self.state.status != IN_PROGRESS:
            return False
        self._commit()
        return True

    def _tick(self) -> None:
        s = self.state
        if s.status != IN_PROGRESS:
            return
        s.time_left -= 1
        if s.time_left <= 0:
            s.time_left = 0
            self.emit(question_timed_out(s.current_index))
            self._commit()

    def _commit(self) -> None:
        s = self.state
        index = s.current_index
        question = self.questions[index]
        s.answers[index] = s.selected
        correct = s.selected is not None and s.selected == question.correct_answer
        if correct:
            s.score += 1
        self.emit(question_answered(index, s.selected, correct, s.score))

        if index + 1 < len(self.questions):
            s.current_index = index + 1
            s.selected = None
            s.time_left = self.seconds_per_question
            # Fresh countdown: the next tick is a full second away
            self.countdown.restart()
        else:
            s.status = COMPLETE
            s.selected = None
            self.countdown.stop()
            self.emit(game_completed(self.game_id, {
                "score": s.score,
                "total_questions": len(self.questions),
            }))

    def review(self) -> list[dict]:
        """Questions whose committed answer differs from the correct one."""
        s = self.state
        answered = len(self.questions) if s.status == COMPLETE else s.current_index
        out = []
        for i, question in enumerate(self.questions[:answered]):
            if s.answers[i] != question.correct_answer:
                your_answer = s.answers[i]
                out.append({
                    "question_id": question.id,
                    "question": question.question,
                    "your_answer": your_answer,
                    "your_answer_text": question.options[your_answer] if your_answer is not None else None,
                    "correct_answer": question.correct_answer,
                    "correct_answer_text": question.options[question.correct_answer],
                })
        return out

    def compute_result(self) -> tuple[int, int]:
        s = self.state
        percentage = quiz_percentage(s.score, len(self.questions))
        return s.score, stars_for(percentage, QUIZ_STAR_THRESHOLDS)

    def to_dict(self) -> dict:
        out = super().to_dict()
        question = self.current_question
        out["question"] = question.to_dict() if question else None
        out["total_questions"] = len(self.questions)
        out["review"] = self.review() if self.state.show_result else []
        return out
