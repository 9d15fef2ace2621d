"""
genetics.py - 멘델 유전 법칙 구현
부모 유전자형에서 자손 유전자형 확률(퍼넷 사각형) 계산
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass
from itertools import product
from typing import List, Tuple, Dict, Optional, Sequence, Callable, Union

from .models import (
    ParseMode, AggregationMode,
    ParsedGenotype, GenotypeProbability, PunnettSquare, CalculationResult
)
from .errors import GeneticsError, ValidationError, CalculationError
from .reference import KNOWN_ALLELES
from .validator import GenotypeValidator


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')


@dataclass
class CalculatorConfig:
    """계산기 설정"""
    parse_mode: ParseMode = ParseMode.FLAT
    aggregation: AggregationMode = AggregationMode.POOLED
    strict: bool = False     # 짝이 없는 대립유전자를 오류로 처리
    precision: int = 2       # 표시용 소수점 자리수

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'CalculatorConfig':
        """CLI/API 옵션 딕셔너리에서 설정 생성 (잘못된 값은 ValueError)"""
        data = data or {}
        config = cls()

        if data.get('parse_mode') is not None:
            config.parse_mode = ParseMode(str(data['parse_mode']).lower())
        if data.get('aggregation') is not None:
            config.aggregation = AggregationMode(str(data['aggregation']).lower())
        if data.get('strict') is not None:
            strict = data['strict']
            if isinstance(strict, str):
                strict = strict.strip().lower() in ('1', 'true', 'yes', 'on')
            config.strict = bool(strict)
        if data.get('precision') is not None:
            precision = int(data['precision'])
            if precision < 0:
                raise ValueError(f"precision must be >= 0: {precision}")
            config.precision = precision

        return config


# ============================================================
# 표현형 규칙 (위에서부터 처음 일치하는 규칙 적용)
# ============================================================
PhenotypeRule = Tuple[Callable[[str], bool], str]

PHENOTYPE_RULES: List[PhenotypeRule] = [
    (lambda g: 'ee' in g, 'Red/Yellow (recessive red)'),
    (lambda g: 'K' in g, 'Solid Black (dominant black)'),
    (lambda g: 'kbr' in g, 'Brindle'),
    (lambda g: 'bb' in g, 'Brown/Liver/Chocolate'),
    (lambda g: 'B' in g, 'Black'),
]

UNKNOWN_PHENOTYPE = 'Unknown'


def allele_sort_key(allele: str) -> Tuple[str, bool]:
    """대문자(우성)를 같은 글자의 소문자보다 앞에, 그 외에는 대소문자 무시 사전순"""
    return (allele.upper(), allele != allele.upper())


class GenotypeParser:
    """유전자형 문자열 해석기"""

    def __init__(self, parse_mode: ParseMode = ParseMode.FLAT):
        self.parse_mode = parse_mode

    def parse(self, genotype: Optional[str]) -> ParsedGenotype:
        if genotype is None:
            return ParsedGenotype(raw="")
        if self.parse_mode == ParseMode.LOCI:
            return self._parse_loci(genotype)
        return self._parse_flat(genotype)

    def _parse_flat(self, genotype: str) -> ParsedGenotype:
        """공백 제거 후 한 글자 = 한 대립유전자, 두 개씩 한 유전자좌"""
        alleles = list(_WHITESPACE.sub('', genotype))
        loci = [
            (alleles[i], alleles[i + 1])
            for i in range(0, len(alleles) - 1, 2)
        ]
        trailing = alleles[-1] if len(alleles) % 2 == 1 else None

        return ParsedGenotype(
            raw=genotype,
            alleles=alleles,
            loci=loci,
            trailing=trailing,
            unknown_alleles=self._unknown(alleles)
        )

    def _parse_loci(self, genotype: str) -> ParsedGenotype:
        """공백으로 구분된 토큰 = 한 유전자좌"""
        alleles: List[str] = []
        loci: List[Tuple[str, str]] = []
        invalid: List[str] = []

        for token in genotype.split():
            pair = split_locus(token)
            if pair is None:
                invalid.append(token)
                continue
            loci.append(pair)
            alleles.extend(pair)

        return ParsedGenotype(
            raw=genotype,
            alleles=alleles,
            loci=loci,
            invalid_tokens=invalid,
            unknown_alleles=self._unknown(alleles)
        )

    @staticmethod
    def _unknown(alleles: Sequence[str]) -> List[str]:
        unknown = []
        for allele in alleles:
            if allele not in KNOWN_ALLELES and allele not in unknown:
                unknown.append(allele)
        return unknown


def split_locus(token: str) -> Optional[Tuple[str, str]]:
    """
    유전자좌 토큰을 두 대립유전자로 분리

    'Kky' -> ('K', 'ky'), 'kbrky' -> ('kbr', 'ky'), 'Bb' -> ('B', 'b')
    참조 목록 기호로 나눌 수 없으면 두 글자 토큰만 글자 단위로 분리
    """
    for i in range(1, len(token)):
        left, right = token[:i], token[i:]
        if left in KNOWN_ALLELES and right in KNOWN_ALLELES:
            return left, right

    if len(token) == 2:
        return token[0], token[1]
    return None


class GenotypeProbabilityEngine:
    """멘델 유전 확률 엔진 (상태 없음, 스레드 간 공유 가능)"""

    def __init__(self, config: Optional[CalculatorConfig] = None):
        self.config = config or CalculatorConfig()
        self.parser = GenotypeParser(self.config.parse_mode)
        self.validator = GenotypeValidator(
            parse_mode=self.config.parse_mode,
            strict=self.config.strict
        )

    # --------------------------------------------------------
    # 기본 연산
    # --------------------------------------------------------
    @staticmethod
    def canonicalize(pairing: Union[str, Sequence[str]]) -> str:
        """대립유전자 조합의 표준형 ('bB' -> 'Bb')"""
        return ''.join(sorted(pairing, key=allele_sort_key))

    @staticmethod
    def interpret_phenotype(genotype: str) -> str:
        """유전자형에서 단순화한 모색 표현형 결정"""
        for predicate, label in PHENOTYPE_RULES:
            if predicate(genotype):
                return label
        return UNKNOWN_PHENOTYPE

    @staticmethod
    def cross_locus(
        locus1: Tuple[str, str],
        locus2: Tuple[str, str]
    ) -> List[str]:
        """한 유전자좌의 네 가지 자손 조합 (a1b1, a1b2, a2b1, a2b2)"""
        a1, a2 = locus1
        b1, b2 = locus2
        return [
            GenotypeProbabilityEngine.canonicalize((x, y))
            for x, y in ((a1, b1), (a1, b2), (a2, b1), (a2, b2))
        ]

    def parse_genotype(self, genotype: Optional[str]) -> ParsedGenotype:
        return self.parser.parse(genotype)

    # --------------------------------------------------------
    # 계산
    # --------------------------------------------------------
    def calculate(self, parent1: Optional[str], parent2: Optional[str]) -> CalculationResult:
        """
        부모 유전자형에서 자손 유전자형 확률 분포 계산

        Args:
            parent1: 부모1 유전자형 (예: 'Bb Ee')
            parent2: 부모2 유전자형

        Returns:
            CalculationResult (확률 내림차순 목록 또는 오류)
        """
        meta = {
            'parse_mode': self.config.parse_mode,
            'aggregation': self.config.aggregation
        }

        try:
            parsed1 = self.parser.parse(parent1)
            parsed2 = self.parser.parse(parent2)

            report = self.validator.validate(parsed1, parsed2)
            if not report.is_valid:
                error = report.first_error()
                logger.debug("입력 검증 실패: %s (%s)", error.message, error.details)
                return CalculationResult.failure(error, **meta)

            warnings = [r.message for r in report.get_warnings()]
            for message in warnings:
                logger.warning("유전자형 입력 경고: %s", message)

            counts = self._aggregate(parsed1.loci, parsed2.loci)
            probabilities = self._to_probabilities(counts)

        except GeneticsError as e:
            return CalculationResult.failure(e, **meta)
        except Exception as e:
            logger.exception("유전자형 확률 계산 실패: %r x %r", parent1, parent2)
            return CalculationResult.failure(
                CalculationError("genotype calculation failed", cause=e),
                **meta
            )

        logger.debug("계산 완료: %d개 유전자형 (%s x %s)",
                     len(probabilities), parent1, parent2)
        return CalculationResult(probabilities=probabilities, warnings=warnings, **meta)

    def _aggregate(
        self,
        loci1: List[Tuple[str, str]],
        loci2: List[Tuple[str, str]]
    ) -> Dict[str, int]:
        if self.config.aggregation == AggregationMode.JOINT:
            return self._aggregate_joint(loci1, loci2)
        return self._aggregate_pooled(loci1, loci2)

    def _aggregate_pooled(
        self,
        loci1: List[Tuple[str, str]],
        loci2: List[Tuple[str, str]]
    ) -> Dict[str, int]:
        """모든 유전자좌의 조합을 하나의 빈도표에 합산"""
        # TODO: 유전자좌별 결과를 합산하면 다유전자좌 분포가 섞임. 제품 결정 후 JOINT 기본값 검토
        counts: Dict[str, int] = {}
        for locus1, locus2 in zip(loci1, loci2):
            for genotype in self.cross_locus(locus1, locus2):
                counts[genotype] = counts.get(genotype, 0) + 1
        return counts

    def _aggregate_joint(
        self,
        loci1: List[Tuple[str, str]],
        loci2: List[Tuple[str, str]]
    ) -> Dict[str, int]:
        """독립 유전자좌의 곱집합 (가중치 = 유전자좌별 빈도의 곱)"""
        per_locus = [
            Counter(self.cross_locus(locus1, locus2))
            for locus1, locus2 in zip(loci1, loci2)
        ]

        counts: Dict[str, int] = {}
        for combo in product(*(list(c.items()) for c in per_locus)):
            genotype = ' '.join(g for g, _ in combo)
            weight = 1
            for _, n in combo:
                weight *= n
            counts[genotype] = counts.get(genotype, 0) + weight
        return counts

    def _to_probabilities(self, counts: Dict[str, int]) -> List[GenotypeProbability]:
        total = sum(counts.values())
        if total == 0:
            raise ValidationError(
                "genotype has no complete locus",
                code="no_complete_locus",
                user_message="Invalid genotype format"
            )

        results = [
            GenotypeProbability(
                genotype=genotype,
                probability=count / total * 100,
                phenotype=self.interpret_phenotype(genotype)
            )
            for genotype, count in counts.items()
        ]
        # 안정 정렬: 확률이 같으면 처음 등장한 순서 유지
        results.sort(key=lambda r: r.probability, reverse=True)
        return results

    # --------------------------------------------------------
    # 퍼넷 사각형
    # --------------------------------------------------------
    def punnett_squares(self, parent1: str, parent2: str) -> List[PunnettSquare]:
        """유전자좌별 2x2 퍼넷 사각형 (입력 오류는 ValidationError, 내부 오류는 CalculationError)"""
        try:
            parsed1 = self.parser.parse(parent1)
            parsed2 = self.parser.parse(parent2)
        except Exception as e:
            logger.exception("퍼넷 사각형 입력 해석 실패: %r x %r", parent1, parent2)
            raise CalculationError("punnett square calculation failed", cause=e) from e

        report = self.validator.validate(parsed1, parsed2)
        if not report.is_valid:
            raise report.first_error()

        squares = []
        for index, (locus1, locus2) in enumerate(zip(parsed1.loci, parsed2.loci)):
            cells = [
                [self.canonicalize((row, column)) for column in locus2]
                for row in locus1
            ]
            squares.append(PunnettSquare(
                locus_index=index,
                row_alleles=locus1,
                column_alleles=locus2,
                cells=cells
            ))
        return squares


def calculate(
    parent1: Optional[str],
    parent2: Optional[str],
    config: Optional[CalculatorConfig] = None
) -> CalculationResult:
    """
    편의 함수: 자손 유전자형 확률 계산

    Args:
        parent1: 부모1 유전자형
        parent2: 부모2 유전자형
        config: 계산기 설정 (None이면 기본값)

    Returns:
        CalculationResult 객체
    """
    engine = GenotypeProbabilityEngine(config)
    return engine.calculate(parent1, parent2)
