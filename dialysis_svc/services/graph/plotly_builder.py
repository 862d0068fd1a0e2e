"""
Plotly figure builder for monthly dialysis trend charts.

Responsibilities:
- Two stacked panels: weight vs dry weight, and blood pressure
- Reference lines at the age-appropriate blood pressure limits
- Placeholder layout for a month without records
- Mobile-friendly config and CSS

This module encapsulates all Plotly-specific figure construction logic,
allowing GraphService to focus on orchestration.
"""

import logging
from typing import Any, Dict, List

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from models import HealthRecord
from services.clinical import (
    HYPOTENSION_SYSTOLIC,
    BloodPressureLimits,
)

logger = logging.getLogger(__name__)

WEIGHT_COLOR = '#3B82F6'
DRY_WEIGHT_COLOR = '#10B981'
SYSTOLIC_COLOR = '#EF4444'
DIASTOLIC_COLOR = '#F97316'
LIMIT_COLOR = '#D32F2F'
FLOOR_COLOR = '#7B1FA2'

BP_AXIS_RANGE = [40, 200]


class PlotlyBuilder:
    """
    Builder for the two-panel trend figure.

    Usage:
        builder = PlotlyBuilder()
        fig = builder.create_figure()
        builder.add_weight_traces(fig, records)
        builder.add_blood_pressure_traces(fig, records)
        builder.add_reference_lines(fig, limits)
        builder.apply_layout(fig, title, subtitle)
    """

    def create_figure(self) -> go.Figure:
        """Create a figure with weight on top and blood pressure below."""
        return make_subplots(
            rows=2, cols=1,
            shared_xaxes=True,
            vertical_spacing=0.12,
            subplot_titles=("Weight trend (with dry weight)", "Blood pressure trend"),
        )

    def create_empty_figure(self) -> go.Figure:
        return go.Figure()

    def add_weight_traces(self, fig: go.Figure, records: List[HealthRecord]) -> None:
        dates = [r.date for r in records]

        fig.add_trace(go.Scatter(
            x=dates, y=[r.weight for r in records],
            name="Weight",
            mode='lines+markers',
            line=dict(color=WEIGHT_COLOR, width=3),
            marker=dict(size=8, color=WEIGHT_COLOR, line=dict(width=1.5, color='white')),
            hovertemplate="%{x|%b %d, %Y}<br><b>Weight: %{y} kg</b><extra></extra>",
        ), row=1, col=1)

        # Dry weight only changes when the clinician resets it, hence the step shape
        fig.add_trace(go.Scatter(
            x=dates, y=[r.dry_weight for r in records],
            name="Dry weight",
            mode='lines',
            line=dict(color=DRY_WEIGHT_COLOR, width=2, dash='dash', shape='hv'),
            hovertemplate="%{x|%b %d, %Y}<br><b>Dry weight: %{y} kg</b><extra></extra>",
        ), row=1, col=1)

    def add_blood_pressure_traces(self, fig: go.Figure, records: List[HealthRecord]) -> None:
        dates = [r.date for r in records]

        fig.add_trace(go.Scatter(
            x=dates, y=[r.systolic for r in records],
            name="Systolic",
            mode='lines+markers',
            line=dict(color=SYSTOLIC_COLOR, width=3),
            marker=dict(size=8, color=SYSTOLIC_COLOR, symbol='triangle-up'),
            hovertemplate="%{x|%b %d, %Y}<br><b>Systolic: %{y} mmHg</b><extra></extra>",
        ), row=2, col=1)

        fig.add_trace(go.Scatter(
            x=dates, y=[r.diastolic for r in records],
            name="Diastolic",
            mode='lines+markers',
            line=dict(color=DIASTOLIC_COLOR, width=3),
            marker=dict(size=8, color=DIASTOLIC_COLOR, symbol='triangle-down'),
            hovertemplate="%{x|%b %d, %Y}<br><b>Diastolic: %{y} mmHg</b><extra></extra>",
        ), row=2, col=1)

    def add_reference_lines(self, fig: go.Figure, limits: BloodPressureLimits) -> None:
        """Dotted lines at the hypertension limits and the hypotension floor."""
        fig.add_hline(
            y=limits.systolic, row=2, col=1,
            line=dict(color=LIMIT_COLOR, width=1, dash='dot'),
            annotation_text=f"Systolic limit {limits.systolic}",
            annotation_position="top left",
            annotation_font=dict(size=10, color=LIMIT_COLOR),
        )
        fig.add_hline(
            y=limits.diastolic, row=2, col=1,
            line=dict(color=LIMIT_COLOR, width=1, dash='dot'),
            annotation_text=f"Diastolic limit {limits.diastolic}",
            annotation_position="bottom left",
            annotation_font=dict(size=10, color=LIMIT_COLOR),
        )
        fig.add_hline(
            y=HYPOTENSION_SYSTOLIC, row=2, col=1,
            line=dict(color=FLOOR_COLOR, width=1, dash='dot'),
            annotation_text=f"Low pressure {HYPOTENSION_SYSTOLIC}",
            annotation_position="bottom right",
            annotation_font=dict(size=10, color=FLOOR_COLOR),
        )

    def apply_layout(self, fig: go.Figure, title: str, subtitle: str) -> None:
        fig.update_layout(
            title=dict(
                text=f"<b>{title}</b><br><sup style='color:#757575'>{subtitle}</sup>",
                font=dict(size=18),
                x=0.5, xanchor="center"
            ),
            hovermode='x unified',
            legend=dict(
                orientation="h",
                x=0.5, xanchor="center",
                y=-0.08, yanchor="top",
                font=dict(size=11, color='#424242'),
            ),
            height=760,
            margin=dict(l=50, r=30, t=100, b=80),
            template="plotly_white",
            paper_bgcolor='#FAFAFA',
            plot_bgcolor='#FFFFFF',
            dragmode='pan',
        )
        fig.update_xaxes(type="date", tickformat='%b %d', showgrid=True, gridcolor='rgba(0,0,0,0.06)')
        fig.update_yaxes(title_text="kg", row=1, col=1, gridcolor='rgba(0,0,0,0.06)')
        fig.update_yaxes(title_text="mmHg", range=BP_AXIS_RANGE, row=2, col=1, gridcolor='rgba(0,0,0,0.06)')

        fig.add_annotation(
            text="<i>Weight far above dry weight may mean fluid is being retained.</i>",
            xref="paper", yref="paper",
            x=0.5, y=-0.14,
            showarrow=False,
            font=dict(size=10, color='#9E9E9E'),
            xanchor='center'
        )

    def apply_empty_layout(self, fig: go.Figure, title: str, subtitle: str) -> None:
        """Apply layout for a month with no records."""
        fig.update_layout(
            title=dict(
                text=f"<b>{title}</b><br><sup>{subtitle}</sup>",
                font=dict(size=20),
                x=0.5, xanchor='center'
            ),
            xaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
            yaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
            height=450,
            template="plotly_white",
            paper_bgcolor='#FAFAFA',
            plot_bgcolor='#FFFFFF',
            annotations=[
                dict(text='<b>No records for this month</b>', xref='paper', yref='paper',
                     x=0.5, y=0.55, showarrow=False, font=dict(size=18, color='#424242')),
                dict(text='Add an entry on the records page to see your trends',
                     xref='paper', yref='paper', x=0.5, y=0.42,
                     showarrow=False, font=dict(size=14, color='#757575')),
            ]
        )

    def get_mobile_config(self) -> Dict[str, Any]:
        """Mobile-optimized Plotly config."""
        return {
            'displayModeBar': True,
            'displaylogo': False,
            'modeBarButtonsToRemove': ['lasso2d', 'select2d', 'autoScale2d'],
            'responsive': True,
            'scrollZoom': True,
            'doubleClick': 'reset',
            'toImageButtonOptions': {
                'format': 'png',
                'filename': 'dialysis_trends',
                'height': 900,
                'width': 1200,
                'scale': 2
            },
        }

    def inject_mobile_css(self, html_content: str) -> str:
        """Inject responsive page styling into the generated HTML."""
        mobile_css = """
        <style>
            * { box-sizing: border-box; }
            body {
                margin: 0;
                padding: 8px;
                background: #FAFAFA;
                font-family: -apple-system, system-ui, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            }
            #trend-graph {
                width: 100% !important;
                border-radius: 10px;
                box-shadow: 0 1px 4px rgba(0,0,0,0.06);
                background: white;
            }
            .js-plotly-plot { width: 100% !important; }
            @media (max-width: 768px) {
                body { padding: 4px; }
                .modebar { display: none !important; }
                .legend .legendtext { font-size: 10px !important; }
            }
        </style>
        """
        return html_content.replace('<body>', f'<body>{mobile_css}')
