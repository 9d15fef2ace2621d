"""
Punnett Engine - 개 모색 유전자형 확률 계산기
메인 실행 파일

사용법:
    python main.py "Bb Ee" "Bb ee"                 # 기본 계산
    python main.py "Kky Bb" "kbrky bb" --parse loci # 다문자 대립유전자
    python main.py "Bb Ee" "Bb Ee" --aggregation joint
    python main.py --traits                         # 대표 유전자좌 표
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from typing import Optional, List

from punnett_engine import (
    CalculatorConfig,
    GenotypeProbabilityEngine,
    ProbabilityVisualizer,
    ValidationError,
    create_result_data,
    reference_markdown,
    COMMON_TRAITS
)


class PunnettCalculator:
    """
    Punnett Engine 메인 클래스
    확률 계산, 콘솔 출력, 파일 저장
    """

    def __init__(self, config: Optional[CalculatorConfig] = None):
        """
        Args:
            config: 계산기 설정
        """
        self.config = config or CalculatorConfig()
        self.engine = GenotypeProbabilityEngine(self.config)
        self.visualizer = ProbabilityVisualizer()

    def calculate(self, parent1: str, parent2: str, with_punnett: bool = False) -> dict:
        """
        자손 유전자형 확률 계산

        Args:
            parent1: 부모1 유전자형
            parent2: 부모2 유전자형
            with_punnett: 유전자좌별 퍼넷 사각형 포함 여부

        Returns:
            결과 데이터 딕셔너리
        """
        print(f"\n{'='*50}")
        print("🧬 Punnett Engine - 자손 유전자형 계산 중...")
        print(f"{'='*50}")
        print(f"부모1: {parent1}")
        print(f"부모2: {parent2}")
        print(f"해석 방식: {self.config.parse_mode.value}")
        print(f"집계 방식: {self.config.aggregation.value}")
        print()

        result = self.engine.calculate(parent1, parent2)
        if not result.is_success:
            return {
                'success': False,
                'error': result.error.to_dict()
            }

        print(f"✓ 계산 완료: {len(result.probabilities)}개 유전자형")

        data = {
            'success': True,
            'timestamp': datetime.now().isoformat(),
            'parents': {'parent1': parent1, 'parent2': parent2},
            'config': {
                'parse_mode': self.config.parse_mode.value,
                'aggregation': self.config.aggregation.value,
                'strict': self.config.strict,
                'precision': self.config.precision
            },
            'results': [p.to_dict() for p in result.probabilities],
            'table': create_result_data(result, self.config.precision),
            '_result': result
        }

        if with_punnett:
            squares = self.engine.punnett_squares(parent1, parent2)
            data['punnett'] = [sq.to_dict() for sq in squares]
            data['_squares'] = squares

        return data

    def display_result(self, data: dict):
        """결과를 콘솔에 표시"""
        if not data.get('success'):
            error = data.get('error', {})
            print(f"❌ 오류: {error.get('user_message')} ({error.get('message')})")
            return

        print("\n" + "="*60)
        print("📋 자손 유전자형 확률")
        print("="*60)
        print(data['table']['table_markdown'])

        print("\n【표현형 요약】")
        for phenotype, probability in data['table']['phenotype_summary'].items():
            print(f"  • {phenotype}: {probability}%")

        if data['table']['warnings']:
            print("\n【경고】")
            for warning in data['table']['warnings']:
                print(f"  ⚠️ {warning}")

        for square in data.get('_squares', []):
            print(f"\n【퍼넷 사각형 - 유전자좌 {square.locus_index + 1}】")
            print(square)

    def save_result(self, data: dict, output_dir: str = "output"):
        """결과를 파일로 저장"""
        if not data.get('success'):
            print("❌ 저장할 결과가 없습니다.")
            return

        os.makedirs(output_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_name = f"offspring_{timestamp}"

        # JSON 데이터 저장 (객체 제외)
        json_data = {k: v for k, v in data.items() if not k.startswith('_')}
        json_path = os.path.join(output_dir, f"{base_name}.json")
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, ensure_ascii=False, indent=2)
        print(f"✓ JSON 저장: {json_path}")

        # 그래프 저장
        chart_path = os.path.join(output_dir, f"{base_name}_chart.png")
        self.visualizer.save_to_file(data['_result'], chart_path,
                                     title="Offspring Genotype Probabilities")
        print(f"✓ 그래프 저장: {chart_path}")

        for square in data.get('_squares', []):
            square_path = os.path.join(
                output_dir, f"{base_name}_punnett_{square.locus_index + 1}.png")
            self.visualizer.draw_punnett(square, save_path=square_path)
            print(f"✓ 퍼넷 사각형 저장: {square_path}")


def display_traits():
    """대표 유전자좌 참조 표 출력"""
    print("\n【Common Dog Genetic Markers Reference】")
    print(reference_markdown(COMMON_TRAITS))


def parse_args(argv: Optional[List[str]] = None):
    """명령줄 인자 파싱"""
    parser = argparse.ArgumentParser(
        description="Punnett Engine - 개 모색 유전자형 확률 계산기"
    )

    parser.add_argument('parent1', nargs='?', help="부모1 유전자형 (예: 'Bb Ee')")
    parser.add_argument('parent2', nargs='?', help="부모2 유전자형 (예: 'Bb ee')")

    parser.add_argument(
        '--parse', '-p',
        type=str,
        default='flat',
        choices=['flat', 'loci'],
        help="해석 방식 (기본: flat)"
    )

    parser.add_argument(
        '--aggregation', '-a',
        type=str,
        default='pooled',
        choices=['pooled', 'joint'],
        help="다유전자좌 집계 방식 (기본: pooled)"
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help="짝이 없는 대립유전자를 오류로 처리"
    )

    parser.add_argument(
        '--precision',
        type=int,
        default=2,
        help="확률 표시 소수점 자리수 (기본: 2)"
    )

    parser.add_argument(
        '--traits', '-t',
        action='store_true',
        help="대표 유전자좌 참조 표 출력"
    )

    parser.add_argument(
        '--punnett',
        action='store_true',
        help="유전자좌별 퍼넷 사각형 출력"
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default='output',
        help="출력 디렉토리 (기본: output)"
    )

    parser.add_argument(
        '--save',
        action='store_true',
        help="결과를 파일로 저장"
    )

    parser.add_argument(
        '--no-display',
        action='store_true',
        help="콘솔 출력 생략"
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help="디버그 로그 출력"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """메인 함수"""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if args.traits:
        display_traits()
        if args.parent1 is None and args.parent2 is None:
            return 0

    try:
        config = CalculatorConfig.from_dict({
            'parse_mode': args.parse,
            'aggregation': args.aggregation,
            'strict': args.strict,
            'precision': args.precision
        })
    except ValueError as e:
        print(f"❌ 잘못된 옵션: {e}")
        return 2

    calculator = PunnettCalculator(config)

    try:
        data = calculator.calculate(args.parent1, args.parent2, with_punnett=args.punnett)
    except ValidationError as e:
        data = {'success': False, 'error': e.to_dict()}

    if not args.no_display:
        calculator.display_result(data)

    if args.save:
        calculator.save_result(data, args.output)

    return 0 if data.get('success') else 1


if __name__ == "__main__":
    sys.exit(main())
