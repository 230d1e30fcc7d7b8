"""lvrank - relative liquidity / volatility ranking of Binance USDT pairs."""

__version__ = "0.1.0"
