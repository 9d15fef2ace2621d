"""
validator.py - 입력 검증 모듈
부모 유전자형 쌍이 계산 가능한지 검증
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field
from enum import Enum

from .models import ParsedGenotype, ParseMode
from .errors import ValidationError


class ValidationLevel(Enum):
    """검증 레벨"""
    ERROR = "ERROR"      # 계산 불가
    WARNING = "WARNING"  # 계산은 하지만 입력 일부 무시
    INFO = "INFO"        # 정보


@dataclass
class ValidationResult:
    """검증 결과"""
    is_valid: bool
    level: ValidationLevel
    message: str
    code: str = ""
    user_message: str = ""
    details: Dict = field(default_factory=dict)

    def to_error(self) -> ValidationError:
        return ValidationError(
            self.message,
            code=self.code,
            details=dict(self.details),
            user_message=self.user_message or None
        )

    def __str__(self):
        return f"[{self.level.value}] {self.message}"


@dataclass
class ValidationReport:
    """전체 검증 보고서"""
    results: List[ValidationResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """에러가 없으면 유효"""
        return not any(
            r.level == ValidationLevel.ERROR and not r.is_valid
            for r in self.results
        )

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results
                   if r.level == ValidationLevel.ERROR and not r.is_valid)

    @property
    def warning_count(self) -> int:
        return sum(1 for r in self.results
                   if r.level == ValidationLevel.WARNING and not r.is_valid)

    def add_result(self, result: ValidationResult):
        self.results.append(result)

    def get_errors(self) -> List[ValidationResult]:
        return [r for r in self.results
                if r.level == ValidationLevel.ERROR and not r.is_valid]

    def get_warnings(self) -> List[ValidationResult]:
        return [r for r in self.results
                if r.level == ValidationLevel.WARNING and not r.is_valid]

    def first_error(self) -> Optional[ValidationError]:
        errors = self.get_errors()
        return errors[0].to_error() if errors else None

    def to_dict(self) -> Dict:
        return {
            'is_valid': self.is_valid,
            'error_count': self.error_count,
            'warning_count': self.warning_count,
            'results': [
                {
                    'valid': r.is_valid,
                    'level': r.level.value,
                    'code': r.code,
                    'message': r.message,
                    'details': r.details
                }
                for r in self.results
            ]
        }

    def __str__(self):
        lines = [
            "=== 입력 검증 보고서 ===",
            f"전체 결과: {'✓ 유효' if self.is_valid else '✗ 무효'}",
            f"오류: {self.error_count}, 경고: {self.warning_count}",
            ""
        ]

        if self.results:
            lines.append("상세 결과:")
            for r in self.results:
                status = "✓" if r.is_valid else "✗"
                lines.append(f"  {status} [{r.level.value}] {r.message}")

        return "\n".join(lines)


class GenotypeValidator:
    """
    부모 유전자형 검증 클래스

    검증 항목:
    1. 두 부모 유전자형 모두 입력됨
    2. 해석 불가능한 유전자좌 없음 (LOCI 모드)
    3. 대립유전자(또는 유전자좌) 수 일치
    4. 짝이 없는 마지막 대립유전자 (FLAT 모드)
    5. 참조 목록에 없는 대립유전자 기호
    """

    def __init__(self, parse_mode: ParseMode = ParseMode.FLAT, strict: bool = False):
        self.parse_mode = parse_mode
        self.strict = strict

    def validate(self, parent1: ParsedGenotype, parent2: ParsedGenotype) -> ValidationReport:
        report = ValidationReport()

        # 1. 입력 누락은 다른 검증보다 우선
        missing = self._validate_presence(parent1, parent2)
        for r in missing:
            report.add_result(r)
        if not report.is_valid:
            return report

        # 2. 유전자좌 해석
        for r in self._validate_tokens(parent1, parent2):
            report.add_result(r)

        # 3. 길이 일치
        for r in self._validate_lengths(parent1, parent2):
            report.add_result(r)

        # 4. 홀수 대립유전자
        for r in self._validate_trailing(parent1, parent2):
            report.add_result(r)

        # 5. 미등록 기호
        for r in self._validate_symbols(parent1, parent2):
            report.add_result(r)

        return report

    def _validate_presence(
        self,
        parent1: ParsedGenotype,
        parent2: ParsedGenotype
    ) -> List[ValidationResult]:
        results = []
        empty = [name for name, parsed in (('parent1', parent1), ('parent2', parent2))
                 if parsed.is_empty]
        if empty:
            results.append(ValidationResult(
                is_valid=False,
                level=ValidationLevel.ERROR,
                message="missing genotype",
                code="missing_genotype",
                user_message="Please enter both parent genotypes",
                details={'parents': empty}
            ))
        return results

    def _validate_tokens(
        self,
        parent1: ParsedGenotype,
        parent2: ParsedGenotype
    ) -> List[ValidationResult]:
        results = []
        for name, parsed in (('parent1', parent1), ('parent2', parent2)):
            if parsed.invalid_tokens:
                results.append(ValidationResult(
                    is_valid=False,
                    level=ValidationLevel.ERROR,
                    message="unparseable locus",
                    code="unparseable_locus",
                    user_message="Invalid genotype format",
                    details={'parent': name, 'tokens': list(parsed.invalid_tokens)}
                ))
        return results

    def _validate_lengths(
        self,
        parent1: ParsedGenotype,
        parent2: ParsedGenotype
    ) -> List[ValidationResult]:
        if self.parse_mode == ParseMode.LOCI:
            size1, size2 = parent1.locus_count, parent2.locus_count
            unit = 'loci'
        else:
            size1, size2 = len(parent1.alleles), len(parent2.alleles)
            unit = 'alleles'

        if size1 == size2:
            return []
        return [ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR,
            message="genotype length mismatch",
            code="length_mismatch",
            user_message="Parent genotypes must have the same number of alleles",
            details={'parent1': size1, 'parent2': size2, 'unit': unit}
        )]

    def _validate_trailing(
        self,
        parent1: ParsedGenotype,
        parent2: ParsedGenotype
    ) -> List[ValidationResult]:
        results = []
        if parent1.trailing is None and parent2.trailing is None:
            return results

        results.append(ValidationResult(
            is_valid=False,
            level=ValidationLevel.ERROR if self.strict else ValidationLevel.WARNING,
            message="odd allele count",
            code="odd_allele_count",
            user_message="Each locus needs exactly two alleles",
            details={'parent1': parent1.trailing, 'parent2': parent2.trailing}
        ))

        # 완전한 유전자좌가 하나도 없으면 계산할 조합이 없음
        if parent1.locus_count == 0 or parent2.locus_count == 0:
            results.append(ValidationResult(
                is_valid=False,
                level=ValidationLevel.ERROR,
                message="genotype has no complete locus",
                code="no_complete_locus",
                user_message="Invalid genotype format",
                details={'parent1': parent1.raw, 'parent2': parent2.raw}
            ))
        return results

    def _validate_symbols(
        self,
        parent1: ParsedGenotype,
        parent2: ParsedGenotype
    ) -> List[ValidationResult]:
        unknown = []
        for parsed in (parent1, parent2):
            for symbol in parsed.unknown_alleles:
                if symbol not in unknown:
                    unknown.append(symbol)
        if not unknown:
            return []
        return [ValidationResult(
            is_valid=False,
            level=ValidationLevel.INFO,
            message=f"참조 목록에 없는 대립유전자: {', '.join(unknown)}",
            code="unknown_allele",
            details={'alleles': unknown}
        )]


def validate_genotypes(
    parent1: ParsedGenotype,
    parent2: ParsedGenotype,
    parse_mode: ParseMode = ParseMode.FLAT,
    strict: bool = False
) -> ValidationReport:
    """
    편의 함수: 부모 유전자형 쌍 검증

    Args:
        parent1: 해석된 부모1 유전자형
        parent2: 해석된 부모2 유전자형
        parse_mode: 해석 방식
        strict: 홀수 대립유전자를 오류로 처리

    Returns:
        ValidationReport 객체
    """
    validator = GenotypeValidator(parse_mode=parse_mode, strict=strict)
    return validator.validate(parent1, parent2)
