from fastapi import APIRouter, Depends, HTTPException, Response, status

from interview_sim.errors import EmptyAnswerError, QuestionGenerationError, SessionStateError, ValidationError
from interview_sim.models.evaluation import Evaluation
from interview_sim.models.session import (
    AnswerRequest,
    CurrentQuestion,
    DraftPayload,
    NextQuestionResponse,
    Progress,
    StartInterviewRequest,
    StartInterviewResponse,
)
from interview_sim.models.summary import InterviewExport, InterviewSummary
from interview_sim.services.interview_engine import InterviewEngine, build_interview_engine

router = APIRouter(prefix="/interviews", tags=["Interviews"])

_engine: InterviewEngine | None = None


def get_interview_engine() -> InterviewEngine:
    global _engine
    if _engine is None:
        _engine = build_interview_engine()
    return _engine


@router.post("/start", response_model=StartInterviewResponse, status_code=status.HTTP_201_CREATED)
async def start_interview(
    payload: StartInterviewRequest,
    engine: InterviewEngine = Depends(get_interview_engine),
) -> StartInterviewResponse:
    try:
        questions = await engine.start_interview(payload.model_dump())
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors) from exc
    except QuestionGenerationError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return StartInterviewResponse(
        sessionId=engine.session.sessionId,
        message="Interview started",
        questions=questions,
        current=engine.get_current_question(),
    )


@router.get("/current", response_model=CurrentQuestion | None)
def get_current_question(engine: InterviewEngine = Depends(get_interview_engine)) -> CurrentQuestion | None:
    return engine.get_current_question()


@router.post("/answer", response_model=Evaluation)
async def submit_answer(
    payload: AnswerRequest,
    engine: InterviewEngine = Depends(get_interview_engine),
) -> Evaluation:
    try:
        return await engine.submit_answer(payload.answer)
    except EmptyAnswerError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except SessionStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.post("/skip", response_model=Evaluation)
def skip_question(engine: InterviewEngine = Depends(get_interview_engine)) -> Evaluation:
    try:
        return engine.skip_question()
    except SessionStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.post("/next", response_model=NextQuestionResponse)
def next_question(engine: InterviewEngine = Depends(get_interview_engine)) -> NextQuestionResponse:
    try:
        current = engine.next_question()
    except SessionStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if current is not None:
        return NextQuestionResponse(completed=False, current=current)
    summary = engine.get_summary()
    return NextQuestionResponse(
        completed=True,
        summary=summary.model_dump(mode="json") if summary is not None else None,
    )


@router.get("/progress", response_model=Progress)
def get_progress(engine: InterviewEngine = Depends(get_interview_engine)) -> Progress:
    return engine.get_progress()


@router.post("/end", response_model=InterviewSummary)
def end_interview(engine: InterviewEngine = Depends(get_interview_engine)) -> InterviewSummary:
    try:
        return engine.end_interview()
    except SessionStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.get("/export", response_model=InterviewExport)
def export_interview(engine: InterviewEngine = Depends(get_interview_engine)) -> InterviewExport:
    return engine.export_data()


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
def reset_interview(engine: InterviewEngine = Depends(get_interview_engine)) -> Response:
    engine.reset()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/drafts/{index}", response_model=DraftPayload)
def get_draft(index: int, engine: InterviewEngine = Depends(get_interview_engine)) -> DraftPayload:
    draft = engine.load_draft(index)
    if draft is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Draft not found")
    return DraftPayload(text=draft)


@router.put("/drafts/{index}", response_model=DraftPayload)
def save_draft(
    index: int,
    payload: DraftPayload,
    engine: InterviewEngine = Depends(get_interview_engine),
) -> DraftPayload:
    engine.save_draft(index, payload.text)
    return payload


@router.delete("/drafts/{index}", status_code=status.HTTP_204_NO_CONTENT)
def delete_draft(index: int, engine: InterviewEngine = Depends(get_interview_engine)) -> Response:
    engine.clear_draft(index)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
