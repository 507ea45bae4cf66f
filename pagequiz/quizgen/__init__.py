from pagequiz.quizgen.base import BaseQuizGenerator
from pagequiz.quizgen.factory import QuizGeneratorFactory
from pagequiz.quizgen.quiz_generator import QuizGenerator

__all__ = ["BaseQuizGenerator", "QuizGenerator", "QuizGeneratorFactory"]
