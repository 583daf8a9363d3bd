import logging
from typing import Any, Optional

from fastapi import FastAPI, Depends, Body, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .db import init_db
from .errors import InvalidArgument, RewardError
from .schemas import (
    ErrorDetail,
    ExtraWordsData,
    ExtraWordsResponse,
    RewardStatusData,
    RewardStatusResponse,
)
from .auth import get_caller_id
from .deps import get_reward_engine
from .services.reward_engine import RewardEngine

logger = logging.getLogger(__name__)

app = FastAPI(
    title="LexiFlow Daily Reward API",
    version="1.0.0",
    description="LexiFlow – ödüllü reklam sonrası günlük ek kelime servisi"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    """Uygulama ayağa kalkarken log seviyesini ayarla ve DB tablolarını oluştur."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()


def _error_response(exc: RewardError) -> JSONResponse:
    body = ExtraWordsResponse(success=False, error=ErrorDetail(**exc.to_dict()))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(RewardError)
def handle_reward_error(request: Request, exc: RewardError):
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.debug("Request validation failed: %s", exc.errors())
    return _error_response(InvalidArgument("A valid userId is required."))


@app.get("/")
def root():
    return {"status": "ok", "app": "LexiFlow Daily Reward API"}


# ----------------------------------------------------
# ÖDÜLLÜ REKLAM → EK KELİMELER
# ----------------------------------------------------


@app.post("/api/v1/rewards/extra-words", response_model=ExtraWordsResponse)
def grant_extra_words(
    payload: Any = Body(default=None),
    caller_id: Optional[str] = Depends(get_caller_id),
    engine: RewardEngine = Depends(get_reward_engine),
):
    """
    Reklam izlendikten sonra çağrılır:
    - Kullanıcı yalnızca kendi hesabı için talep edebilir
    - Gün başına tek sefer; ikinci talep failed-precondition döner
    - Başarıda BONUS_WORD_COUNT adet yeni kelime kimliği döner
    """
    # Gövde doğrulaması motora bırakılır; kimlik kontrolü her zaman önce gelir
    user_id = payload.get("userId") if isinstance(payload, dict) else None
    claim = engine.claim_daily_reward(caller_id, user_id)
    return ExtraWordsResponse(
        success=True,
        data=ExtraWordsData(extraWords=list(claim.extra_word_ids)),
    )


@app.get("/api/v1/rewards/extra-words", response_model=RewardStatusResponse)
def extra_words_status(
    userId: str = "",
    caller_id: Optional[str] = Depends(get_caller_id),
    engine: RewardEngine = Depends(get_reward_engine),
):
    """Bugünkü ödül durumu (salt okunur): talep edildi mi, ek kelimeler, kalan bekleme süresi."""
    status = engine.get_reward_status(caller_id, userId)
    return RewardStatusResponse(
        success=True,
        data=RewardStatusData(
            dayId=status.day_id,
            rewardClaimed=status.reward_claimed,
            extraWords=list(status.extra_word_ids),
            lastRewardedAt=status.last_rewarded_at,
            cooldownRemainingSeconds=int(status.cooldown_remaining.total_seconds()),
        ),
    )
