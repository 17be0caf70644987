"""Qt integration for embedding an analysis board in a PyQt6 window."""

from pgntree.ui.qt_bridge import AnalysisBridge

__all__ = ["AnalysisBridge"]
