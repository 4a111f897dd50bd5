"""Storage helpers for chessdb."""
