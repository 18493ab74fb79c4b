"""
Quiz question bank.
Questions are asked in this order; correct_answer is an index into options.
"""

from dataclasses import dataclass, asdict
from typing import Any


@dataclass(frozen=True)
class Question:
    id: int
    question: str
    options: tuple[str, ...]
    correct_answer: int
    category: str

    def to_dict(self, include_answer: bool = False) -> dict[str, Any]:
        out = asdict(self)
        out["options"] = list(self.options)
        if not include_answer:
            del out["correct_answer"]
        return out


QUESTIONS: list[Question] = [
    Question(
        id=1,
        question="What does HTML stand for?",
        options=(
            "Hyper Text Markup Language",
            "High Tech Modern Language",
            "Home Tool Markup Language",
            "Hyperlink and Text Markup Language",
        ),
        correct_answer=0,
        category="Web Development",
    ),
    Question(
        id=2,
        question="Which CSS property is used to change text color?",
        options=("font-color", "text-color", "color", "foreground-color"),
        correct_answer=2,
        category="Web Development",
    ),
    Question(
        id=3,
        question="What is the correct way to declare a JavaScript variable?",
        options=("variable myVar;", "v myVar;", "var myVar;", "declare myVar;"),
        correct_answer=2,
        category="Programming",
    ),
    Question(
        id=4,
        question="Which company developed React?",
        options=("Google", "Microsoft", "Facebook", "Apple"),
        correct_answer=2,
        category="Programming",
    ),
    Question(
        id=5,
        question="What does CPU stand for?",
        options=(
            "Central Processing Unit",
            "Computer Personal Unit",
            "Central Program Utility",
            "Computer Processing Unit",
        ),
        correct_answer=0,
        category="Computer Science",
    ),
    Question(
        id=6,
        question="Which programming language is known as the 'language of the web'?",
        options=("Python", "Java", "JavaScript", "C++"),
        correct_answer=2,
        category="Programming",
    ),
    Question(
        id=7,
        question="What is the purpose of Git?",
        options=("Web hosting", "Version control", "Database management", "Image editing"),
        correct_answer=1,
        category="Development Tools",
    ),
    Question(
        id=8,
        question="Which HTTP status code indicates 'Not Found'?",
        options=("200", "301", "404", "500"),
        correct_answer=2,
        category="Web Development",
    ),
]
