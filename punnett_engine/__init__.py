"""
Punnett Engine - 개 모색 유전자형 확률 계산기

부모 유전자형으로 자손 유전자형 확률(퍼넷 사각형)과 단순 표현형을 계산하는 엔진
"""

from .errors import (
    GeneticsError,
    ValidationError,
    CalculationError
)

from .models import (
    ParseMode,
    AggregationMode,
    ParsedGenotype,
    GenotypeProbability,
    PunnettSquare,
    CalculationResult
)

from .reference import (
    ReferenceTrait,
    AlleleInfo,
    COMMON_TRAITS,
    ALLELE_CATALOGUE,
    find_trait,
    find_allele,
    add_trait_to_genotype
)

from .genetics import (
    CalculatorConfig,
    GenotypeParser,
    GenotypeProbabilityEngine,
    calculate
)

from .validator import (
    GenotypeValidator,
    ValidationReport,
    validate_genotypes
)

from .data_table import (
    ProbabilityTable,
    create_result_data,
    reference_markdown
)

from .visualizer import (
    ChartConfig,
    ProbabilityVisualizer,
)


__version__ = "1.0.0"
__all__ = [
    # Errors
    "GeneticsError",
    "ValidationError",
    "CalculationError",

    # Models
    "ParseMode",
    "AggregationMode",
    "ParsedGenotype",
    "GenotypeProbability",
    "PunnettSquare",
    "CalculationResult",

    # Reference
    "ReferenceTrait",
    "AlleleInfo",
    "COMMON_TRAITS",
    "ALLELE_CATALOGUE",
    "find_trait",
    "find_allele",
    "add_trait_to_genotype",

    # Genetics
    "CalculatorConfig",
    "GenotypeParser",
    "GenotypeProbabilityEngine",
    "calculate",

    # Validator
    "GenotypeValidator",
    "ValidationReport",
    "validate_genotypes",

    # Data Table
    "ProbabilityTable",
    "create_result_data",
    "reference_markdown",

    # Visualizer
    "ChartConfig",
    "ProbabilityVisualizer",
]
