"""
errors.py - 계산기 오류 정의
잘못된 입력(ValidationError)과 내부 실패(CalculationError)를 구분
"""

from typing import Dict, Optional


class GeneticsError(Exception):
    """유전자형 계산 오류 기본 클래스"""

    kind = "error"
    default_user_message = "Error calculating genetic probabilities."

    def __init__(
        self,
        message: str,
        code: str = "error",
        details: Optional[Dict] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.user_message = user_message or self.default_user_message

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind,
            'code': self.code,
            'message': self.message,
            'user_message': self.user_message,
            'details': self.details
        }


class ValidationError(GeneticsError):
    """입력 유전자형 오류 (입력을 고쳐야 해결됨)"""

    kind = "validation"
    default_user_message = "Please check the parent genotypes and try again."


class CalculationError(GeneticsError):
    """계산 중 예기치 못한 내부 오류"""

    kind = "calculation"
    default_user_message = (
        "Error calculating genetic probabilities. "
        "Please check your inputs and try again."
    )

    def __init__(self, message: str, cause: Optional[BaseException] = None, **kwargs):
        super().__init__(message, code=kwargs.pop('code', 'internal_error'), **kwargs)
        self.cause = cause
        if cause is not None:
            self.details.setdefault('cause', f"{type(cause).__name__}: {cause}")
