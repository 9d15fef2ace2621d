"""
data_table.py - 자손 유전자형 확률 표 생성기
계산 결과를 표시용/마크다운 표 데이터로 변환
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field

from .models import CalculationResult, GenotypeProbability
from .reference import COMMON_TRAITS, ReferenceTrait


@dataclass
class ProbabilityRow:
    """확률 표의 한 행 (한 유전자형)"""
    genotype: str
    probability: float
    phenotype: str

    def display_probability(self, precision: int = 2) -> str:
        return f"{self.probability:.{precision}f}%"


@dataclass
class ProbabilityTable:
    """자손 유전자형 확률 표 전체"""
    rows: List[ProbabilityRow] = field(default_factory=list)
    title: str = "Offspring Probability Results"

    @classmethod
    def from_result(cls, result: CalculationResult, title: str = "") -> 'ProbabilityTable':
        table = cls(title=title) if title else cls()
        for p in result.probabilities:
            table.add_row(p)
        return table

    def add_row(self, probability: GenotypeProbability):
        self.rows.append(ProbabilityRow(
            genotype=probability.genotype,
            probability=probability.probability,
            phenotype=probability.phenotype
        ))

    def to_display_dict(self, precision: int = 2) -> List[Dict[str, Any]]:
        """표시용 데이터 반환"""
        return [
            {
                'genotype': row.genotype,
                'probability': row.display_probability(precision),
                'phenotype': row.phenotype
            }
            for row in self.rows
        ]

    def to_markdown(self, precision: int = 2) -> str:
        """마크다운 표 형식으로 변환"""
        if not self.rows:
            return ""

        headers = ["Genotype", "Probability", "Phenotype"]
        header_line = "| " + " | ".join(headers) + " |"
        separator = "|" + "|".join(["---"] * len(headers)) + "|"

        data_lines = [
            f"| {row.genotype} | {row.display_probability(precision)} | {row.phenotype} |"
            for row in self.rows
        ]

        return "\n".join([header_line, separator] + data_lines)


def reference_markdown(traits: List[ReferenceTrait] = COMMON_TRAITS) -> str:
    """대표 유전자좌 참조 표 (마크다운)"""
    lines = [
        "| Gene | Example | Description |",
        "|---|---|---|"
    ]
    for trait in traits:
        lines.append(f"| {trait.name} | {trait.value} | {trait.description} |")
    return "\n".join(lines)


def create_result_data(result: CalculationResult, precision: int = 2) -> Dict:
    """
    결과 데이터 패키지 생성

    Returns:
        {
            'table_display': 표시용 표 데이터,
            'table_markdown': 마크다운 표,
            'phenotype_summary': 표현형별 확률 합계,
            'warnings': 입력 경고
        }
    """
    table = ProbabilityTable.from_result(result)
    summary = {
        phenotype: round(probability, precision)
        for phenotype, probability in result.phenotype_summary().items()
    }

    return {
        'table_display': table.to_display_dict(precision),
        'table_markdown': table.to_markdown(precision),
        'phenotype_summary': summary,
        'warnings': list(result.warnings)
    }
