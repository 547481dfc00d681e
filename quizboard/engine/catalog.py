"""Quiz Catalog - Validacao e criacao de quizzes."""

import logging
import re

from ..models.enums import QuizEventKind
from ..models.errors import QuizResult, QuizStoreError
from ..models.schemas import U64_MAX, CreateQuizParams, QuestionParams
from ..models.state import Question, Quiz
from ..storage.quiz_store import QuizStore, WriteBatch
from .event_log import EventLog

logger = logging.getLogger(__name__)

MICROS_PER_MILLI = 1000
MAX_WINDOW_MICROS = 3600 * 24 * 365 * 100 * 1_000_000  # 100 anos
MIN_TIMESTAMP_DIGITS = 10
MAX_TIMESTAMP_DIGITS = 14
MAX_U64_CHARS = len(str(U64_MAX))

_DIGITS = re.compile(r"[0-9]+")


class QuizCatalog:
    """Catalogo de quizzes: valida, materializa e persiste novos quizzes.

    A validacao segue uma ordem fixa e para no primeiro erro:
        1. Formato dos timestamps (ms em string -> us)
        2. Janela de tempo (futuro, fim apos inicio, no maximo 100 anos)
        3. Autenticacao do chamador
        4. Formato das questoes
    Nenhuma escrita acontece antes de toda a validacao passar.

    Args:
        store: QuizStore de persistencia
        events: Log de eventos
        strict_correct_options: Valida indices corretos na criacao
    """

    def __init__(self, store: QuizStore, events: EventLog, strict_correct_options: bool = False):
        self.store = store
        self.events = events
        self.strict_correct_options = strict_correct_options

    def parse_timestamp(self, value: str, label: str) -> QuizResult:
        """Converte um timestamp em milissegundos (string) para microssegundos.

        Args:
            value: Timestamp em ms, apenas digitos
            label: "Start time" ou "End time" (usado nas mensagens)

        Returns:
            QuizResult com o timestamp em us, ou InvalidTimestampFormat
        """
        if (
            not _DIGITS.fullmatch(value or "")
            or len(value) > MAX_U64_CHARS
            or int(value) > U64_MAX
        ):
            return QuizResult.invalid_timestamp_format(f"{label} is not a valid number")

        millis = int(value)
        digits = len(str(millis))
        if digits < MIN_TIMESTAMP_DIGITS or digits > MAX_TIMESTAMP_DIGITS:
            return QuizResult.invalid_timestamp_format(
                f"{label} seems invalid (should be a millisecond timestamp)"
            )

        micros = millis * MICROS_PER_MILLI
        if micros > U64_MAX:
            return QuizResult.invalid_timestamp_format(
                f"{label} overflow when converting to microseconds"
            )

        return QuizResult.success(micros)

    def validate_time_range(self, start_time: int, end_time: int, now: int) -> QuizResult:
        if start_time <= now:
            return QuizResult.invalid_time_range("Start time must be in the future")
        if end_time <= start_time:
            return QuizResult.invalid_time_range("End time must be after start time")
        if end_time - start_time > MAX_WINDOW_MICROS:
            return QuizResult.invalid_time_range("Time range is too long (maximum 100 years)")
        return QuizResult.success()

    def validate_questions(self, questions: list[QuestionParams]) -> QuizResult:
        """Valida enunciado, alternativas e respostas corretas de cada questao.

        Os indices corretos so sao conferidos contra as alternativas quando
        ``strict_correct_options`` esta ativo; do contrario a conferencia fica
        para a correcao.
        """
        for i, q in enumerate(questions, start=1):
            if not q.text.strip():
                return QuizResult.invalid_input(f"Question {i} text cannot be empty")

            if len(q.options) < 2:
                return QuizResult.invalid_input(f"Question {i} must have at least 2 options")

            if not q.correct_options:
                return QuizResult.invalid_input(
                    f"Question {i} must have at least one correct option"
                )

            for j, option in enumerate(q.options, start=1):
                if not option.strip():
                    return QuizResult.invalid_input(
                        f"Question {i} option {j} text cannot be empty"
                    )

            if self.strict_correct_options:
                if len(set(q.correct_options)) != len(q.correct_options):
                    return QuizResult.invalid_input(
                        f"Question {i} has duplicate correct options"
                    )
                for index in q.correct_options:
                    if index >= len(q.options):
                        return QuizResult.invalid_input(
                            f"Question {i} has invalid correct option index: {index}"
                        )

        return QuizResult.success()

    async def create_quiz(
        self, params: CreateQuizParams, caller: str | None, now: int
    ) -> QuizResult:
        """Cria um quiz novo.

        Args:
            params: Dados do quiz
            caller: Identidade autenticada do chamador (None = anonimo)
            now: Momento atual em microssegundos

        Returns:
            QuizResult com o ID atribuido, ou o primeiro erro de validacao
        """
        start = self.parse_timestamp(params.start_time, "Start time")
        if not start.ok:
            return start
        end = self.parse_timestamp(params.end_time, "End time")
        if not end.ok:
            return end

        time_range = self.validate_time_range(start.data, end.data, now)
        if not time_range.ok:
            return time_range

        if not caller:
            return QuizResult.unauthorized()

        checked = self.validate_questions(params.questions)
        if not checked.ok:
            return checked

        try:
            quiz_id = await self.store.get_next_quiz_id()
            if quiz_id >= U64_MAX:
                return QuizResult.other_error("Quiz ID overflow")

            quiz = Quiz(
                id=quiz_id,
                title=params.title,
                description=params.description,
                creator=params.nick_name,
                questions=[
                    Question(
                        id=i,
                        text=q.text,
                        options=list(q.options),
                        correct_options=list(q.correct_options),
                        points=q.points,
                    )
                    for i, q in enumerate(params.questions)
                ],
                time_limit=params.time_limit,
                start_time=start.data,
                end_time=end.data,
                created_at=now,
            )

            batch = WriteBatch()
            self.store.stage_quiz(batch, quiz)
            self.store.stage_next_quiz_id(batch, quiz_id + 1)
            await self.events.stage_append(
                batch, QuizEventKind.QUIZ_CREATED, quiz_id=quiz_id, created_at=now
            )
            await self.store.commit(batch)
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)

        logger.info(f"[Quiz {quiz_id}] Criado por {params.nick_name} ({len(quiz.questions)} questoes)")
        return QuizResult.success(quiz_id)
