"""
visualizer.py - 자손 유전자형 확률 시각화
확률 막대 그래프와 퍼넷 사각형 이미지 (base64 PNG)
"""

import io
import base64
import numpy as np
from typing import Optional, Dict
from dataclasses import dataclass

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .models import CalculationResult, PunnettSquare


# ============================================================
# 설정값
# ============================================================
@dataclass
class ChartConfig:
    # 캔버스
    fig_width: float = 8.0
    fig_height: float = 4.5
    dpi: int = 150

    # 퍼넷 사각형 칸 크기
    cell_size: float = 1.0

    # 스타일
    line_width: float = 1.5
    edge_color: str = 'black'
    bar_color: str = '#2563EB'
    color_dominant: str = '#DBEAFE'   # 우성 동형접합
    color_hetero: str = 'white'       # 이형접합
    color_recessive: str = '#D3D3D3'  # 열성 동형접합

    font_size_label: int = 11
    font_size_cell: int = 14


# ============================================================
# 시각화 엔진 메인
# ============================================================
class ProbabilityVisualizer:
    def __init__(self, config: Optional[ChartConfig] = None):
        self.config = config or ChartConfig()

    def draw(self, result: CalculationResult, title: str = "",
             save_path: Optional[str] = None, precision: int = 2) -> str:
        """확률 막대 그래프 -> base64 PNG"""
        cfg = self.config
        fig, ax = plt.subplots(figsize=(cfg.fig_width, cfg.fig_height))

        labels = [p.genotype for p in result.probabilities]
        values = np.array([p.probability for p in result.probabilities], dtype=float)
        positions = np.arange(len(labels))

        bars = ax.bar(positions, values, color=cfg.bar_color,
                      edgecolor=cfg.edge_color, linewidth=cfg.line_width / 2)

        # 막대 위 확률 표시
        for bar, value in zip(bars, values):
            ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height() + 1,
                    f"{value:.{precision}f}%", ha='center', va='bottom',
                    fontsize=cfg.font_size_label - 2)

        ax.set_xticks(positions)
        ax.set_xticklabels(labels, fontsize=cfg.font_size_label, rotation=45 if len(labels) > 8 else 0)
        ax.set_ylabel("Probability (%)", fontsize=cfg.font_size_label)
        ax.set_ylim(0, max(100.0, float(values.max()) + 10) if len(values) else 100.0)
        if title:
            ax.set_title(title, fontsize=cfg.font_size_label + 2, fontweight='bold')

        ax.spines['top'].set_visible(False)
        ax.spines['right'].set_visible(False)
        plt.tight_layout()

        return self._export(fig, save_path)

    def draw_punnett(self, square: PunnettSquare, title: str = "",
                     save_path: Optional[str] = None) -> str:
        """2x2 퍼넷 사각형 -> base64 PNG"""
        cfg = self.config
        sz = cfg.cell_size
        fig, ax = plt.subplots(figsize=(4, 4))

        # 열 머리 (부모2)
        for j, allele in enumerate(square.column_alleles):
            ax.text((j + 1.5) * sz, 2.5 * sz, allele, ha='center', va='center',
                    fontsize=cfg.font_size_cell, fontweight='bold')

        # 행 머리 (부모1) + 칸
        for i, (allele, row) in enumerate(zip(square.row_alleles, square.cells)):
            y = (1 - i) * sz
            ax.text(0.5 * sz, y + sz / 2, allele, ha='center', va='center',
                    fontsize=cfg.font_size_cell, fontweight='bold')
            for j, genotype in enumerate(row):
                x = (j + 1) * sz
                ax.add_patch(Rectangle((x, y), sz, sz,
                                       facecolor=self._cell_color(genotype),
                                       edgecolor=cfg.edge_color,
                                       linewidth=cfg.line_width))
                ax.text(x + sz / 2, y + sz / 2, genotype, ha='center', va='center',
                        fontsize=cfg.font_size_cell)

        ax.set_xlim(0, 3 * sz)
        ax.set_ylim(0, 3 * sz)
        ax.set_aspect('equal')
        ax.axis('off')
        if title:
            ax.set_title(title, fontsize=cfg.font_size_label + 1, fontweight='bold')

        plt.tight_layout()
        return self._export(fig, save_path)

    def _cell_color(self, genotype: str) -> str:
        cfg = self.config
        if genotype == genotype.upper():
            return cfg.color_dominant
        if genotype == genotype.lower():
            return cfg.color_recessive
        return cfg.color_hetero

    def _export(self, fig, save_path: Optional[str]) -> str:
        cfg = self.config

        try:
            # 파일 저장
            if save_path:
                fig.savefig(save_path, dpi=cfg.dpi, bbox_inches='tight', facecolor='white')

            # 이미지 반환
            buf = io.BytesIO()
            fig.savefig(buf, format='png', dpi=cfg.dpi, bbox_inches='tight', facecolor='white')
            buf.seek(0)
            return base64.b64encode(buf.read()).decode('utf-8')
        finally:
            plt.close(fig)

    # --------------------------------------------------------
    # 유틸리티 메서드
    # --------------------------------------------------------
    def save_to_file(self, result: CalculationResult, filepath: str, title: str = ""):
        """파일로 저장"""
        self.draw(result, title=title, save_path=filepath)

    def get_base64_images(self, result: CalculationResult, squares=None,
                          title: str = "") -> Dict[str, object]:
        """확률 그래프와 퍼넷 사각형을 함께 반환"""
        images: Dict[str, object] = {'chart': self.draw(result, title=title)}
        if squares:
            images['punnett'] = [self.draw_punnett(sq, title=f"Locus {sq.locus_index + 1}")
                                 for sq in squares]
        return images
