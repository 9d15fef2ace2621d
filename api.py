"""
Punnett Engine - Flask REST API
웹 서비스용 API 엔드포인트

실행: flask --app api run --debug
또는: python api.py
"""

from flask import Flask, jsonify, request
from flask_cors import CORS

from punnett_engine import (
    CalculatorConfig,
    GenotypeProbabilityEngine,
    ProbabilityVisualizer,
    ValidationError,
    CalculationError,
    COMMON_TRAITS,
    ALLELE_CATALOGUE,
    create_result_data,
    __version__
)

app = Flask(__name__)
CORS(app)  # CORS 활성화

# 전역 객체 (엔진은 상태가 없어 요청 간 공유)
engine = GenotypeProbabilityEngine()
visualizer = ProbabilityVisualizer()

CONFIG_KEYS = ('parse_mode', 'aggregation', 'strict', 'precision')


def _engine_for(data: dict) -> GenotypeProbabilityEngine:
    """요청 옵션이 있으면 전용 엔진, 없으면 기본 엔진"""
    options = {k: data[k] for k in CONFIG_KEYS if k in data}
    if not options:
        return engine
    return GenotypeProbabilityEngine(CalculatorConfig.from_dict(options))


def _error_response(error, status: int):
    return jsonify({
        'success': False,
        'error': error.to_dict()
    }), status


@app.route('/')
def index():
    """API 정보"""
    return jsonify({
        'name': 'Punnett Engine API',
        'version': __version__,
        'description': '개 모색 유전자형 확률 계산 API',
        'endpoints': {
            '/calculate': 'POST - 자손 유전자형 확률 계산',
            '/punnett': 'POST - 유전자좌별 퍼넷 사각형',
            '/traits': 'GET - 대표 유전자좌 목록',
            '/alleles': 'GET - 대립유전자 목록'
        }
    })


@app.route('/traits', methods=['GET'])
def get_traits():
    """대표 유전자좌 목록 (입력 칸 미리 채우기용)"""
    return jsonify({'traits': [t.to_dict() for t in COMMON_TRAITS]})


@app.route('/alleles', methods=['GET'])
def get_alleles():
    """대립유전자 목록"""
    return jsonify({'alleles': [a.to_dict() for a in ALLELE_CATALOGUE]})


@app.route('/calculate', methods=['POST'])
def calculate():
    """
    자손 유전자형 확률 계산

    Request Body:
    {
        "parent1": "Bb Ee",          // 부모1 유전자형
        "parent2": "Bb ee",          // 부모2 유전자형
        "parse_mode": "flat",        // flat / loci (선택)
        "aggregation": "pooled",     // pooled / joint (선택)
        "strict": false,             // (선택)
        "precision": 2,              // (선택)
        "include_chart": false       // 확률 그래프 포함 (선택)
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    try:
        calc_engine = _engine_for(data)
    except (TypeError, ValueError) as e:
        return jsonify({'success': False, 'error': {
            'kind': 'validation', 'code': 'invalid_request', 'message': str(e)
        }}), 400

    result = calc_engine.calculate(data.get('parent1'), data.get('parent2'))

    if result.is_validation_error:
        return _error_response(result.error, 400)
    if result.is_calculation_error:
        app.logger.error("계산 실패: %s", result.error.details)
        return _error_response(result.error, 500)

    precision = calc_engine.config.precision
    response = result.to_dict()
    response['table'] = create_result_data(result, precision)

    if data.get('include_chart'):
        chart = visualizer.draw(result, title="Offspring Genotype Probabilities",
                                precision=precision)
        response['images'] = {'chart': f"data:image/png;base64,{chart}"}

    return jsonify(response)


@app.route('/punnett', methods=['POST'])
def punnett():
    """
    유전자좌별 퍼넷 사각형

    Request Body:
    {
        "parent1": "Bb Ee",
        "parent2": "Bb ee",
        "parse_mode": "flat",        // (선택)
        "include_images": false      // (선택)
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    try:
        calc_engine = _engine_for(data)
        squares = calc_engine.punnett_squares(data.get('parent1'), data.get('parent2'))
    except ValidationError as e:
        return _error_response(e, 400)
    except CalculationError as e:
        app.logger.error("퍼넷 사각형 계산 실패: %s", e.details)
        return _error_response(e, 500)
    except (TypeError, ValueError) as e:
        return jsonify({'success': False, 'error': {
            'kind': 'validation', 'code': 'invalid_request', 'message': str(e)
        }}), 400

    response = {
        'success': True,
        'squares': [sq.to_dict() for sq in squares]
    }
    if data.get('include_images'):
        response['images'] = [
            f"data:image/png;base64,{visualizer.draw_punnett(sq)}" for sq in squares
        ]
    return jsonify(response)


if __name__ == '__main__':
    print("=" * 50)
    print("Punnett Engine API Server")
    print("=" * 50)
    print("Server starting at http://localhost:5000")
    print()
    app.run(debug=True, host='0.0.0.0', port=5000)
