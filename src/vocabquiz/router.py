from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Response
from fastapi.responses import JSONResponse

from .catalog import WordCatalog
from .config import settings
from .dependencies import get_catalog, get_session_id, get_store
from .engine import QuizEngine
from .errors import InvalidTransition, QuizError
from .models import QuizMode
from .sessions import SessionStore

router = APIRouter(prefix="/api")

# Hidden until the question has been answered
ANSWER_FIELDS = {"correct_answer", "explanation_text"}


def state_view(engine: QuizEngine) -> Dict[str, Any]:
    state = engine.current_state()
    question = None
    if state.current_question is not None:
        exclude = ANSWER_FIELDS if state.feedback is None else None
        question = state.current_question.model_dump(mode="json", exclude=exclude)
    return {
        "mode": state.mode.value,
        "score": state.score.model_dump(),
        "used_words": sorted(state.used_words),
        "word_count": len(engine.catalog),
        "coverage": engine.coverage(),
        "question": question,
        "feedback": state.feedback.model_dump() if state.feedback else None,
    }


def session_invalid() -> JSONResponse:
    return JSONResponse({"error": "Session invalid"}, status_code=401)


@router.get("/catalog")
async def get_catalog_summary(catalog: WordCatalog = Depends(get_catalog)):
    return catalog.summary()


@router.post("/start")
async def start_quiz(
    mode: QuizMode = Form(...),
    session_id: Optional[str] = Depends(get_session_id),
    catalog: WordCatalog = Depends(get_catalog),
    store: SessionStore = Depends(get_store),
):
    engine = store.get(session_id)
    created = engine is None
    if created:
        session_id, engine = store.create(catalog)

    try:
        engine.start_game(mode)
    except QuizError:
        # The cookie is never sent, so nothing could reach this session again
        if created:
            store.delete(session_id)
        raise

    response = JSONResponse(state_view(engine))
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        httponly=True,
        samesite="Lax",
    )
    return response


@router.get("/state")
async def get_state(
    session_id: Optional[str] = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
):
    engine = store.get(session_id)
    if engine is None:
        return session_invalid()
    return state_view(engine)


@router.post("/answer")
async def submit_answer(
    answer: Optional[str] = Form(None),
    option_index: Optional[int] = Form(None),
    session_id: Optional[str] = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
):
    engine = store.get(session_id)
    if engine is None:
        return session_invalid()
    if answer is None and option_index is None:
        return JSONResponse({"error": "Missing answer"}, status_code=400)

    if option_index is not None:
        question = engine.current_state().current_question
        if question is None:
            raise InvalidTransition("No question is pending")
        if not (0 <= option_index < len(question.options)):
            return JSONResponse({"error": "Invalid option"}, status_code=400)
        answer = question.options[option_index]

    engine.submit_answer(answer)
    return state_view(engine)


@router.post("/next")
async def next_question(
    session_id: Optional[str] = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
):
    engine = store.get(session_id)
    if engine is None:
        return session_invalid()
    engine.next_question()
    return state_view(engine)


@router.post("/menu")
async def back_to_menu(
    session_id: Optional[str] = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
):
    engine = store.get(session_id)
    if engine is None:
        return session_invalid()
    engine.back_to_menu()
    return state_view(engine)


@router.post("/reset")
async def reset_session(
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
):
    store.delete(session_id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"status": "success"}
