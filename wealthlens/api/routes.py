from typing import Any, Dict, Optional
import structlog
from fastapi import APIRouter, Body, HTTPException, Request
from .schemas import BrokerageImportRequest, HistoryResponse
from ..engine.analyzer import analyze_portfolio
from ..engine.brokerage import holdings_from_brokerage
from ..errors import InvalidInputError
from ..history import ReportHistory

log = structlog.get_logger()

router = APIRouter()

DEFAULT_USER = "anonymous"

def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)

def _history_for(request: Request, user_id: str, create: bool = False) -> Optional[ReportHistory]:
    """Caller holds history_lock. Users are kept least-recently-used first."""
    state = request.app.state
    history = state.histories.get(user_id)
    if history is not None:
        state.histories.move_to_end(user_id)
    elif create:
        history = ReportHistory(state.history_max_reports)
        state.histories[user_id] = history
        while len(state.histories) > state.history_max_users:
            dropped, _ = state.histories.popitem(last=False)
            log.info("history_user_dropped", user_id=dropped, max_users=state.history_max_users)
    return history

@router.get(
    '/health',
    summary="Health check",
    description="Returns service status and the active analysis thresholds.",
    tags=["Health"],
)
def health(request: Request):
    state = request.app.state
    return {
        'ok': True,
        'users_with_history': len(state.histories),
        'config': state.analysis_config.model_dump(),
    }

@router.post(
    '/analysis',
    summary="Analyze a portfolio snapshot",
    description=(
        "Runs the analysis engine over the posted snapshot "
        "(equityHoldings, fundHoldings, externalAssets, recurringExpenses, futureExpenses, userProfile) "
        "and appends the report to the user's recent history."
    ),
    tags=["Analysis"],
)
def analyze(request: Request, snapshot: Optional[Dict[str, Any]] = Body(default=None), user_id: str = DEFAULT_USER):
    state = request.app.state
    try:
        report = analyze_portfolio(snapshot, config=state.analysis_config, market_data=state.market_data)
    except InvalidInputError as e:
        raise HTTPException(400, str(e))
    with state.history_lock:
        evicted = _history_for(request, user_id, create=True).append(report)
    if evicted is not None:
        log.debug("history_evicted", user_id=user_id, generated_at=evicted.generated_at)
    return _dump(report)

@router.get(
    '/analysis/{user_id}/latest',
    summary="Latest report",
    description="Returns the most recent report for the user.",
    tags=["Analysis"],
)
def latest(request: Request, user_id: str):
    with request.app.state.history_lock:
        history = _history_for(request, user_id)
        report = history.latest() if history else None
    if report is None:
        raise HTTPException(404, 'no analysis for user')
    return _dump(report)

@router.get(
    '/analysis/{user_id}/history',
    response_model=HistoryResponse,
    summary="Recent reports",
    description="Returns the user's recent reports, oldest first.",
    tags=["Analysis"],
)
def history(request: Request, user_id: str):
    state = request.app.state
    with state.history_lock:
        hist = _history_for(request, user_id)
        reports = hist.items() if hist else []
    return HistoryResponse(
        user_id=user_id,
        count=len(reports),
        max_reports=state.history_max_reports,
        reports=[_dump(r) for r in reports],
    )

@router.post(
    '/holdings/brokerage',
    summary="Map brokerage holdings",
    description="Converts brokerage holding rows into equityHoldings and fundHoldings for a snapshot.",
    tags=["Holdings"],
)
def brokerage_holdings(req: BrokerageImportRequest):
    equities, funds = holdings_from_brokerage(req.holdings, req.sectors)
    return {
        'equityHoldings': [_dump(h) for h in equities],
        'fundHoldings': [_dump(f) for f in funds],
    }
