"""
Graph package for monthly trend visualization.

This package contains:
- GraphService: Public orchestration layer for generating trend pages
- PlotlyBuilder: Plotly-specific figure construction

Usage:
    from services.graph import GraphService

    service = GraphService()
    html = service.generate_html_graph(records, month="2024-05", patient_name="Li Wei")
"""

from services.graph.graph_service import GraphService
from services.graph.plotly_builder import PlotlyBuilder

__all__ = [
    'GraphService',
    'PlotlyBuilder',
]
