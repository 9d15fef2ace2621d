"""
reference.py - 개 모색 유전자좌 참조 데이터
입력 칸 미리 채우기용 대표 유전자좌 표와 대립유전자 목록
"""

from dataclasses import dataclass
from typing import List, Dict, Optional, FrozenSet


@dataclass(frozen=True)
class ReferenceTrait:
    """
    대표 유전자좌
    - name: 표시 이름 (예: 'B Locus (Black/Brown)')
    - value: 대표 대립유전자 쌍 (예: 'Bb')
    - description: 설명
    """
    name: str
    value: str
    description: str

    @property
    def locus(self) -> str:
        """유전자좌 기호 ('B Locus (...)' -> 'B')"""
        return self.name.split(' ', 1)[0]

    def to_dict(self) -> Dict[str, str]:
        return {
            'locus': self.locus,
            'name': self.name,
            'value': self.value,
            'description': self.description
        }


@dataclass(frozen=True)
class AlleleInfo:
    """대립유전자 기호와 설명"""
    symbol: str
    label: str

    @property
    def is_dominant(self) -> bool:
        return self.symbol[:1].isupper()

    def to_dict(self) -> Dict:
        return {
            'symbol': self.symbol,
            'label': self.label,
            'dominant': self.is_dominant
        }


COMMON_TRAITS: List[ReferenceTrait] = [
    ReferenceTrait('B Locus (Black/Brown)', 'Bb',
                   'B = Black pigment (dominant), b = brown/liver pigment (recessive)'),
    ReferenceTrait('E Locus (Extension)', 'Ee',
                   'E = Extension allowing black pigment (dominant), '
                   'e = recessive red/yellow (recessive)'),
    ReferenceTrait('K Locus (Dominant Black)', 'Kky',
                   'K = Dominant black (dominant), ky = allows A locus expression (recessive)'),
    ReferenceTrait('A Locus (Agouti)', 'Aay',
                   'A = Wild type (agouti), ay = sable/fawn, aw = agouti, '
                   'as = saddle tan, at = tan points, a = recessive black'),
    ReferenceTrait('D Locus (Dilution)', 'Dd',
                   'D = Full pigment (dominant), d = diluted color (recessive)'),
    ReferenceTrait('M Locus (Merle)', 'Mm',
                   'M = Merle pattern (dominant), m = normal coloration (recessive)'),
    ReferenceTrait('S Locus (Spotting)', 'Ss',
                   'S = Solid color (dominant), s = white spotting (recessive)'),
]


ALLELE_CATALOGUE: List[AlleleInfo] = [
    AlleleInfo('B', 'Black (Dominant)'),
    AlleleInfo('b', 'Brown/Liver/Chocolate (Recessive)'),
    AlleleInfo('E', 'Extension (Allows black pigment)'),
    AlleleInfo('e', 'Recessive red (Prevents black pigment)'),
    AlleleInfo('K', 'Dominant Black'),
    AlleleInfo('kbr', 'Brindle'),
    AlleleInfo('ky', 'Allow Agouti expression'),
    AlleleInfo('A', 'Agouti (Wolf gray/Sable)'),
    AlleleInfo('ay', 'Sable/Fawn'),
    AlleleInfo('aw', 'Agouti/Wild'),
    AlleleInfo('as', 'Saddle tan'),
    AlleleInfo('at', 'Tan points/Bicolor'),
    AlleleInfo('a', 'Recessive black'),
    AlleleInfo('D', 'Dense pigment (Not diluted)'),
    AlleleInfo('d', 'Diluted pigment (Blue/Gray)'),
    AlleleInfo('M', 'Merle'),
    AlleleInfo('m', 'Non-merle'),
    AlleleInfo('S', 'No white spotting'),
    AlleleInfo('s', 'Irish spotting'),
    AlleleInfo('si', 'Irish spotting'),
    AlleleInfo('sp', 'Piebald spotting'),
    AlleleInfo('sw', 'Extreme white piebald'),
]


KNOWN_ALLELES: FrozenSet[str] = frozenset(a.symbol for a in ALLELE_CATALOGUE)


def find_trait(key: str) -> Optional[ReferenceTrait]:
    """유전자좌 기호('K') 또는 이름('K Locus (Dominant Black)')으로 조회"""
    if not key:
        return None
    key = key.strip()
    for trait in COMMON_TRAITS:
        if key.upper() == trait.locus.upper() or key == trait.name:
            return trait
    return None


def find_allele(symbol: str) -> Optional[AlleleInfo]:
    """대립유전자 기호로 조회 (대소문자 구분)"""
    for allele in ALLELE_CATALOGUE:
        if allele.symbol == symbol:
            return allele
    return None


def add_trait_to_genotype(current_genotype: str, trait: str) -> str:
    """
    기존 유전자형 뒤에 유전자좌 값을 공백으로 이어 붙임

    trait 은 대립유전자 쌍('Ee') 또는 유전자좌 기호('E')
    """
    reference = find_trait(trait) if len(trait.strip()) == 1 else None
    value = reference.value if reference else trait.strip()
    current_genotype = (current_genotype or "").strip()
    return f"{current_genotype} {value}" if current_genotype else value
