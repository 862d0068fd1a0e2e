"""
Service layer for generating monthly trend charts.

This module orchestrates record selection and Plotly figure construction.
Figure construction is delegated to PlotlyBuilder.
"""

import logging
from html import escape
from typing import List, Optional

import plotly.io as pio

from models import HealthRecord
from services.clinical import blood_pressure_limits
from services.graph.plotly_builder import PlotlyBuilder

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Dialysis Trends"


# =============================================================================
# GRAPH SERVICE
# =============================================================================

class GraphService:
    """
    Service for generating the weight and blood pressure trend page.

    Records are expected in chronological order (RecordService returns
    them that way). Blood pressure reference lines follow the same
    age-dependent limits as the threshold evaluator.
    """

    def __init__(self, plotly_builder: Optional[PlotlyBuilder] = None):
        """
        Args:
            plotly_builder: Optional builder for Plotly figure construction.
                            If not provided, a default instance is created.
        """
        self._builder = plotly_builder or PlotlyBuilder()

    def generate_html_graph(
        self,
        records: List[HealthRecord],
        month: Optional[str] = None,
        patient_name: Optional[str] = None,
        patient_age: Optional[int] = None,
    ) -> str:
        """Generate complete HTML with the interactive two-panel chart."""
        # title text is Plotly markup; the name is user input
        name = escape(patient_name) if patient_name else None
        subtitle = " · ".join(part for part in (name, month) if part) or "All records"
        if not records:
            return self._generate_empty_graph(subtitle)

        logger.info(f"Rendering trend chart for {len(records)} records", extra={"month": month})

        fig = self._builder.create_figure()
        self._builder.add_weight_traces(fig, records)
        self._builder.add_blood_pressure_traces(fig, records)
        self._builder.add_reference_lines(fig, blood_pressure_limits(patient_age))
        self._builder.apply_layout(fig, DEFAULT_TITLE, subtitle)

        html_content = pio.to_html(
            fig,
            include_plotlyjs='cdn',
            config=self._builder.get_mobile_config(),
            div_id="trend-graph"
        )
        return self._builder.inject_mobile_css(html_content)

    def _generate_empty_graph(self, subtitle: str) -> str:
        """Generate styled placeholder when the month has no records."""
        fig = self._builder.create_empty_figure()
        self._builder.apply_empty_layout(fig, DEFAULT_TITLE, subtitle)

        html = pio.to_html(
            fig,
            include_plotlyjs='cdn',
            config=self._builder.get_mobile_config(),
            div_id="trend-graph"
        )
        return self._builder.inject_mobile_css(html)
