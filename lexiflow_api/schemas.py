from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class ExtraWordsData(BaseModel):
    extraWords: List[str]


class RewardStatusData(BaseModel):
    dayId: str
    rewardClaimed: bool
    extraWords: List[str]
    lastRewardedAt: Optional[datetime] = None
    cooldownRemainingSeconds: int


class ErrorDetail(BaseModel):
    code: str
    reason: Optional[str] = None
    message: str


class ExtraWordsResponse(BaseModel):
    success: bool
    data: Optional[ExtraWordsData] = None
    error: Optional[ErrorDetail] = None


class RewardStatusResponse(BaseModel):
    success: bool
    data: Optional[RewardStatusData] = None
    error: Optional[ErrorDetail] = None
