"""ChartGenerator — headless matplotlib dual-axis 랭킹 차트.

Liquidity (왼쪽 축, 빨간 선)과 Volatility (오른쪽 축, 검은 마커)를
한 figure에 그려 PNG bytes로 반환합니다.

Rules Applied:
    - matplotlib.use("agg") 최상단 호출 (headless)
    - plt.close(fig) 필수
    - 디스크 I/O 없음 (BytesIO 출력)
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

import matplotlib

matplotlib.use("agg")

import matplotlib.pyplot as plt

if TYPE_CHECKING:
    from lvrank.models.ranking import RankingResult

_FIGSIZE = (16, 7)
_DPI = 150
_COLOR_LIQUIDITY = "#EC2625"
_COLOR_VOLATILITY = "#000000"
_PNG_FORMAT = "png"


def _fig_to_bytes(fig: Any) -> bytes:
    """Figure → PNG bytes, 자원 해제."""
    buf = io.BytesIO()
    fig.savefig(buf, format=_PNG_FORMAT, dpi=_DPI, bbox_inches="tight")
    plt.close(fig)
    buf.seek(0)
    return buf.read()


class ChartGenerator:
    """Headless matplotlib 차트 생성기 (Agg backend)."""

    def generate_dual_axis(self, result: RankingResult) -> bytes:
        """두 랭킹을 dual-axis 차트로 렌더링.

        x축 카테고리 순서는 liquidity 랭킹 순서를 따르고, volatility 마커는
        같은 심볼 위치에 찍힙니다.

        Args:
            result: RankingResult

        Returns:
            PNG bytes (빈 결과면 빈 bytes)
        """
        liquidity = result.liquidity
        volatility = result.volatility
        if len(liquidity) == 0 and len(volatility) == 0:
            return b""

        fig, ax_liq = plt.subplots(figsize=_FIGSIZE)
        ax_liq.plot(
            list(liquidity.symbols),
            list(liquidity.values),
            color=_COLOR_LIQUIDITY,
            linewidth=1.8,
            label="LIQUIDITY",
        )
        ax_liq.set_xlabel("USDT PAIRINGS")
        ax_liq.set_ylabel("LOW LIQUIDITY SCALE", color=_COLOR_LIQUIDITY)
        ax_liq.tick_params(axis="x", labelrotation=90, labelsize=8)
        ax_liq.grid(alpha=0.3)

        ax_vol = ax_liq.twinx()
        ax_vol.scatter(
            list(volatility.symbols),
            list(volatility.values),
            color=_COLOR_VOLATILITY,
            s=40,
            label="VOLATILITY",
        )
        ax_vol.set_ylabel("LOW VOLATILITY SCALE", color=_COLOR_VOLATILITY)

        handles = ax_liq.get_legend_handles_labels()[0] + ax_vol.get_legend_handles_labels()[0]
        ax_liq.legend(handles=handles, loc="upper left")
        ax_liq.set_title("Relative Liquidity / Volatility", fontsize=14, fontweight="bold")
        return _fig_to_bytes(fig)
