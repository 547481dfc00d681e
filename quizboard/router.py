"""Quiz Router - Endpoints FastAPI do quizboard."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import StreamingResponse

from . import app_state
from .engine.quiz_engine import QuizEngine
from .models.enums import QuizErrorKind, QuizSortField
from .models.errors import QuizResult
from .models.schemas import CreateQuizParams, SubmitAnswersParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz", tags=["Quiz"])

# Status HTTP por tipo de erro
ERROR_STATUS = {
    QuizErrorKind.QUIZ_NOT_FOUND: 404,
    QuizErrorKind.UNAUTHORIZED: 401,
    QuizErrorKind.ALREADY_SUBMITTED: 409,
    QuizErrorKind.QUIZ_NOT_STARTED: 403,
    QuizErrorKind.QUIZ_ENDED: 403,
    QuizErrorKind.INVALID_INPUT: 400,
    QuizErrorKind.INVALID_ANSWER_FORMAT: 400,
    QuizErrorKind.INVALID_TIMESTAMP_FORMAT: 400,
    QuizErrorKind.INVALID_TIME_RANGE: 400,
    QuizErrorKind.STORAGE_ERROR: 500,
    QuizErrorKind.OTHER: 500,
}


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


async def get_quiz_engine() -> QuizEngine:
    """Dependency para obter o QuizEngine configurado."""
    return await app_state.get_engine()


def get_caller(x_signer: str | None = Header(default=None)) -> str | None:
    """Identidade autenticada do chamador, informada pela camada de autenticacao."""
    if x_signer is None or not x_signer.strip():
        return None
    return x_signer.strip()


def _respond(result: QuizResult) -> dict[str, Any]:
    """Converte o QuizResult em resposta HTTP (erro vira HTTPException)."""
    if not result.ok:
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error.kind, 500),
            detail=result.error.model_dump(mode="json"),
        )
    return result.model_dump(mode="json")


# =============================================================================
# OPERACOES
# =============================================================================


@router.post("/quizzes")
async def create_quiz(
    params: CreateQuizParams,
    engine: QuizEngine = Depends(get_quiz_engine),
    caller: str | None = Depends(get_caller),
):
    """Cria um quiz. Retorna ``{"data": quiz_id}``.

    - Timestamps em milissegundos (string)
    - Requer o header ``X-Signer``
    """
    return _respond(await engine.create_quiz(params, caller))


@router.post("/submissions")
async def submit_answers(
    params: SubmitAnswersParams,
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Envia as respostas de um usuario (uma vez por quiz)."""
    return _respond(await engine.submit_answers(params))


# =============================================================================
# CONSULTAS
# =============================================================================


@router.get("/quizzes")
async def list_quizzes(
    sort_by: QuizSortField = Query(default=QuizSortField.ID),
    descending: bool = Query(default=False),
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    return _respond(
        await engine.list_quizzes(sort_by=sort_by, descending=descending, offset=offset, limit=limit)
    )


@router.get("/quizzes/{quiz_id}")
async def get_quiz(quiz_id: int, engine: QuizEngine = Depends(get_quiz_engine)):
    return _respond(await engine.get_quiz(quiz_id))


@router.get("/quizzes/{quiz_id}/leaderboard")
async def get_quiz_leaderboard(quiz_id: int, engine: QuizEngine = Depends(get_quiz_engine)):
    """Leaderboard do quiz recalculado a partir das tentativas."""
    return _respond(await engine.quiz_leaderboard(quiz_id))


@router.get("/quizzes/{quiz_id}/leaderboard/cached")
async def get_cached_quiz_leaderboard(
    quiz_id: int, engine: QuizEngine = Depends(get_quiz_engine)
):
    """Leaderboard incremental mantido a cada envio aceito."""
    return _respond(await engine.cached_quiz_leaderboard(quiz_id))


@router.get("/leaderboard")
async def get_global_leaderboard(engine: QuizEngine = Depends(get_quiz_engine)):
    return _respond(await engine.global_leaderboard())


@router.get("/users/{user}/attempts")
async def get_user_attempts(user: str, engine: QuizEngine = Depends(get_quiz_engine)):
    return _respond(await engine.user_attempts(user))


@router.get("/users/{user}/participations")
async def get_user_participations(user: str, engine: QuizEngine = Depends(get_quiz_engine)):
    return _respond(await engine.user_participations(user))


@router.get("/users/{user}/created")
async def get_user_created_quizzes(user: str, engine: QuizEngine = Depends(get_quiz_engine)):
    return _respond(await engine.user_created_quizzes(user))


@router.get("/users/{user}/participated")
async def get_user_participated_quizzes(
    user: str, engine: QuizEngine = Depends(get_quiz_engine)
):
    return _respond(await engine.user_participated_quizzes(user))


# =============================================================================
# EVENTOS
# =============================================================================


@router.get("/events")
async def list_events(
    after: int = Query(default=0, ge=0, description="Primeiro numero de sequencia"),
    limit: int | None = Query(default=None, ge=1),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    return _respond(await engine.events_after(after, limit))


@router.get("/events/stream")
async def stream_events(
    after: int = Query(default=0, ge=0),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Stream SSE dos eventos a partir de ``after``, na ordem de commit."""
    cursor = engine.subscribe(after)
    logger.info(f"Stream de eventos aberto a partir de {after}")

    async def event_generator():
        async for event in cursor:
            yield (
                f"id: {event.seq}\n"
                f"event: {event.kind.value}\n"
                f"data: {event.to_view().model_dump_json()}\n\n"
            )

    return StreamingResponse(event_generator(), media_type="text/event-stream")
