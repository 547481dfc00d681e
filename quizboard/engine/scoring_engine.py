"""Quiz Scoring Engine - Validacao de respostas e pontuacao."""

from ..models.errors import QuizError, QuizResult
from ..models.state import Question


class QuizScoringEngine:
    """Motor de pontuacao para quizzes de multipla escolha.

    Cada questao vale ``points`` quando o conjunto de alternativas escolhidas
    e exatamente igual ao conjunto de alternativas corretas (a ordem nao
    importa). Nao existe pontuacao parcial: uma alternativa a mais ou a menos
    zera a questao.

    Example:
        >>> engine = QuizScoringEngine()
        >>> q = Question(id=0, text="?", options=["a", "b", "c"], correct_options=[0, 2], points=10)
        >>> engine.evaluate_question(q, [2, 0])
        True
        >>> engine.evaluate_question(q, [0])
        False
    """

    def validate_answers(
        self, questions: list[Question], answers: list[list[int]]
    ) -> QuizError | None:
        """Valida o formato das respostas contra as questoes do quiz.

        Args:
            questions: Questoes do quiz, em ordem
            answers: Indices escolhidos para cada questao

        Returns:
            QuizError (InvalidAnswerFormat) no primeiro problema, None se valido
        """
        if len(answers) != len(questions):
            return QuizResult.invalid_answer_format(
                f"Answer count mismatch: expected {len(questions)} answers, got {len(answers)}"
            ).error

        for i, (question, selected) in enumerate(zip(questions, answers, strict=True)):
            if len(set(selected)) != len(selected):
                return QuizResult.invalid_answer_format(
                    f"Question {i + 1} has duplicate answers"
                ).error

            for answer_index in selected:
                if answer_index < 0 or answer_index >= len(question.options):
                    return QuizResult.invalid_answer_format(
                        f"Question {i + 1} has invalid answer index: {answer_index}"
                    ).error

        return None

    def evaluate_question(self, question: Question, selected: list[int]) -> bool:
        """Compara as escolhas com as alternativas corretas (igualdade de conjuntos ordenados)."""
        return sorted(selected) == sorted(question.correct_options)

    def calculate_score(self, questions: list[Question], answers: list[list[int]]) -> dict:
        """Calcula pontuacao completa do quiz.

        Args:
            questions: Lista de questoes do quiz
            answers: Indices escolhidos pelo usuario para cada questao

        Returns:
            Dict com score, max_score, correct_answers e pontos por questao
        """
        if len(questions) != len(answers):
            raise ValueError(
                f"Answer count ({len(answers)}) differs from question count ({len(questions)})"
            )

        total_score = 0
        max_score = 0
        correct_count = 0
        per_question = []

        for question, selected in zip(questions, answers, strict=True):
            max_score += question.points
            if self.evaluate_question(question, selected):
                total_score += question.points
                correct_count += 1
                per_question.append(question.points)
            else:
                per_question.append(0)

        return {
            "total_questions": len(questions),
            "correct_answers": correct_count,
            "score": total_score,
            "max_score": max_score,
            "per_question": per_question,
        }
