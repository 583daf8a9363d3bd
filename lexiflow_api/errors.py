from typing import Optional


class RewardError(Exception):
    """
    Ödül akışındaki tüm hataların tabanı.
    - code: makine tarafından okunabilir tür kodu
    - reason: aynı tür içindeki alt neden (örn. already-claimed)
    - status_code: HTTP karşılığı
    """
    code = "internal"
    status_code = 500

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.reason = reason

    def to_dict(self) -> dict:
        return {"code": self.code, "reason": self.reason, "message": self.message}


class Unauthenticated(RewardError):
    code = "unauthenticated"
    status_code = 401


class InvalidArgument(RewardError):
    code = "invalid-argument"
    status_code = 400


class PermissionDenied(RewardError):
    code = "permission-denied"
    status_code = 403


class FailedPrecondition(RewardError):
    code = "failed-precondition"
    status_code = 412


class TransientError(RewardError):
    """Depolama çakışması tekrar denemeleri tükendi; istemci güvenle tekrar deneyebilir."""
    code = "unavailable"
    status_code = 503
