"""Qt views and the Qt-free presenter behind them."""
