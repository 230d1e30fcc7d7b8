"""lvrank - Entry Point.

Runs the liquidity / volatility ranking once against a fresh Binance snapshot.

Usage:
    python main.py run
    python main.py run --chart ranking.png
    python main.py symbols
"""

from lvrank.cli.rank import app

if __name__ == "__main__":
    app()
