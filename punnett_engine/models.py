"""
models.py - 핵심 데이터 모델 정의
ParsedGenotype, GenotypeProbability, PunnettSquare, CalculationResult 클래스
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Tuple

from .errors import GeneticsError, ValidationError, CalculationError


class ParseMode(Enum):
    """유전자형 문자열 해석 방식"""
    FLAT = "flat"    # 공백 제거 후 두 글자씩 (기존 동작)
    LOCI = "loci"    # 공백으로 구분된 유전자좌 단위 (kbr, ky 등 다문자 대립유전자 지원)


class AggregationMode(Enum):
    """다유전자좌 결과 집계 방식"""
    POOLED = "pooled"  # 모든 유전자좌 조합을 하나의 빈도표에 합산 (기존 동작)
    JOINT = "joint"    # 독립 유전자좌의 전체 곱집합 (완전한 퍼넷 사각형)


@dataclass
class ParsedGenotype:
    """
    해석된 부모 유전자형
    - raw: 입력 문자열
    - alleles: 대립유전자 목록 (순서 유지)
    - loci: 유전자좌별 (대립유전자1, 대립유전자2) 쌍
    - trailing: 짝이 없는 마지막 대립유전자 (FLAT 모드)
    - invalid_tokens: 두 대립유전자로 나눌 수 없는 토큰 (LOCI 모드)
    - unknown_alleles: 참조 목록에 없는 대립유전자 기호
    """
    raw: str
    alleles: List[str] = field(default_factory=list)
    loci: List[Tuple[str, str]] = field(default_factory=list)
    trailing: Optional[str] = None
    invalid_tokens: List[str] = field(default_factory=list)
    unknown_alleles: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.alleles and not self.invalid_tokens

    @property
    def locus_count(self) -> int:
        return len(self.loci)


@dataclass
class GenotypeProbability:
    """자손 유전자형 하나의 확률 (0~100 %)"""
    genotype: str
    probability: float
    phenotype: str = "Unknown"

    def to_dict(self) -> Dict:
        return {
            'genotype': self.genotype,
            'probability': self.probability,
            'phenotype': self.phenotype
        }


@dataclass
class PunnettSquare:
    """한 유전자좌의 2x2 퍼넷 사각형 (행: 부모1, 열: 부모2)"""
    locus_index: int
    row_alleles: Tuple[str, str]
    column_alleles: Tuple[str, str]
    cells: List[List[str]] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'locus_index': self.locus_index,
            'row_alleles': list(self.row_alleles),
            'column_alleles': list(self.column_alleles),
            'cells': self.cells
        }

    def __str__(self):
        width = max(len(c) for row in self.cells for c in row)
        header = " " * width + " | " + " | ".join(
            a.ljust(width) for a in self.column_alleles)
        lines = [header, "-" * len(header)]
        for allele, row in zip(self.row_alleles, self.cells):
            lines.append(allele.ljust(width) + " | " + " | ".join(
                c.ljust(width) for c in row))
        return "\n".join(lines)


@dataclass
class CalculationResult:
    """
    계산 결과 (성공 또는 오류 중 하나)
    오류일 때는 부분 결과를 포함하지 않음
    """
    probabilities: List[GenotypeProbability] = field(default_factory=list)
    error: Optional[GeneticsError] = None
    warnings: List[str] = field(default_factory=list)
    parse_mode: ParseMode = ParseMode.FLAT
    aggregation: AggregationMode = AggregationMode.POOLED

    @classmethod
    def failure(cls, error: GeneticsError, **kwargs) -> 'CalculationResult':
        return cls(probabilities=[], error=error, **kwargs)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_validation_error(self) -> bool:
        return isinstance(self.error, ValidationError)

    @property
    def is_calculation_error(self) -> bool:
        return isinstance(self.error, CalculationError)

    @property
    def total_probability(self) -> float:
        return sum(p.probability for p in self.probabilities)

    def unwrap(self) -> List[GenotypeProbability]:
        """성공이면 결과 목록, 실패면 오류를 발생"""
        if self.error is not None:
            raise self.error
        return self.probabilities

    def phenotype_summary(self) -> Dict[str, float]:
        """표현형별 확률 합계 (처음 등장한 순서)"""
        summary: Dict[str, float] = {}
        for p in self.probabilities:
            summary[p.phenotype] = summary.get(p.phenotype, 0.0) + p.probability
        return summary

    def to_dict(self) -> Dict:
        return {
            'success': self.is_success,
            'results': [p.to_dict() for p in self.probabilities],
            'error': self.error.to_dict() if self.error else None,
            'warnings': list(self.warnings),
            'parse_mode': self.parse_mode.value,
            'aggregation': self.aggregation.value
        }

    def __repr__(self):
        if self.error is not None:
            return f"CalculationResult(error={self.error.code!r})"
        return f"CalculationResult(genotypes={len(self.probabilities)})"
