from .quiz import Cell, QuizApp, WordView

__all__ = ["Cell", "QuizApp", "WordView"]
