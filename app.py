"""
Web application for Spline Rider hill friction analysis

Interactive dashboard to visualize and compare simulated runs.
"""

from typing import Any, Dict, List

import dash
from dash import dcc, html, Input, Output, State
from dash.exceptions import PreventUpdate
import plotly.express as px
import plotly.graph_objs as go

from rider import ConfigurationError, RiderParams, run_friction_sweep
from rider.simulator import POSITION, SLOPE, VELOCITY


# Initialize Dash app
app = dash.Dash(__name__)
app.title = "Spline Rider Hill Friction Analysis"

# Define app layout
app.layout = html.Div([
    html.Div([
        html.H1("Spline Rider Hill Friction Analysis",
                style={'textAlign': 'center', 'marginBottom': '30px'}),

        html.Div([
            html.Div([
                html.Label("Hill Friction Values (comma-separated):",
                          style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Input(
                    id='friction-input',
                    type='text',
                    value='0.5,1,2,4,8',
                    style={'width': '100%', 'padding': '8px'}
                ),
            ], style={'width': '30%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Div([
                html.Label("Simulation Duration (s):",
                          style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Input(
                    id='duration-input',
                    type='number',
                    value=20.0,
                    min=1.0,
                    max=120.0,
                    step=0.5,
                    style={'width': '100%', 'padding': '8px'}
                ),
            ], style={'width': '20%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Div([
                html.Label("Acceleration Rate:",
                          style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                dcc.Input(
                    id='acceleration-input',
                    type='number',
                    value=1.4,
                    min=0.0,
                    max=20.0,
                    step=0.1,
                    style={'width': '100%', 'padding': '8px'}
                ),
            ], style={'width': '20%', 'display': 'inline-block', 'marginRight': '20px'}),

            html.Button('Run Simulation', id='run-button',
                       style={'width': '20%', 'padding': '10px', 'fontSize': '16px',
                              'backgroundColor': '#4CAF50', 'color': 'white',
                              'border': 'none', 'borderRadius': '5px', 'cursor': 'pointer'})
        ], style={'marginBottom': '30px', 'padding': '20px', 'backgroundColor': '#f5f5f5',
                  'borderRadius': '10px'}),

        html.Div(id='status-message', style={'marginBottom': '20px', 'fontSize': '14px'}),

        dcc.Loading(
            id="loading",
            type="default",
            children=[
                html.Div(id='results-container')
            ]
        )
    ], style={'maxWidth': '1400px', 'margin': '0 auto', 'padding': '20px'})
])


@app.callback(
    [Output("results-container", "children"), Output("status-message", "children")],
    [Input("run-button", "n_clicks")],
    [State("friction-input", "value"), State("duration-input", "value"), State("acceleration-input", "value")],
)
def update_results(
    n_clicks: int | None, friction_str: str, duration: float, acceleration_rate: float
) -> tuple[Any, Any]:
    """Run simulation and update results"""
    if n_clicks is None:
        raise PreventUpdate

    try:
        frictions = sorted([float(s.strip()) for s in friction_str.split(",")])
    except ValueError:
        return [], html.Div("Error: Hill friction values must be numbers.", style={"color": "red"})

    if duration is None or duration <= 0 or duration > 120:
        return [], html.Div(
            "Error: Duration must be between 1 and 120 seconds.",
            style={"color": "red"},
        )

    if acceleration_rate is None:
        return [], html.Div("Error: Acceleration rate is required.", style={"color": "red"})

    try:
        params = RiderParams(acceleration_rate=acceleration_rate)
        results = run_friction_sweep(frictions, duration=duration, params=params)
    except ConfigurationError as e:
        return [], html.Div(f"Error: {e}", style={"color": "red"})

    status_msg = html.Div(
        f"Simulation complete! Analyzed {len(frictions)} hill friction values.",
        style={"color": "green"},
    )

    return create_results_layout(results, frictions), status_msg


def _line_figure(
    results: Dict[float, Dict[str, Any]], frictions: List[float], column: int, title: str, y_title: str
) -> go.Figure:
    """One trace per run of a state history column over time"""
    fig = go.Figure()
    colors = px.colors.qualitative.Set1
    for i, friction in enumerate(frictions):
        t = results[friction]["time"]
        values = results[friction]["state"][:, column]

        fig.add_trace(
            go.Scatter(
                x=t,
                y=values,
                mode="lines",
                name=f"friction {friction}",
                line=dict(color=colors[i % len(colors)], width=2),
                hovertemplate=f"Friction: {friction}<br>Time: %{{x:.2f}}s<br>{y_title}: %{{y:.4f}}<extra></extra>",
            )
        )

    fig.update_layout(
        title=title,
        xaxis_title="Time (s)",
        yaxis_title=y_title,
        hovermode="closest",
        height=400,
        template="plotly_white",
    )
    return fig


def create_results_layout(
    results: Dict[float, Dict[str, Any]], frictions: List[float]
) -> html.Div:
    """Create the results visualization layout"""
    # Summary table
    summary_data: List[Dict[str, Any]] = []
    for friction in frictions:
        analysis = results[friction]["analysis"]
        summary_data.append({
            "Hill Friction": friction,
            "Final Position": f"{analysis['final_position']:.4f}",
            "Mean Velocity": f"{analysis['mean_velocity']:.4f}",
            "Time at Max (%)": f"{analysis['time_at_max_fraction']*100:.1f}",
            "Time at Min (%)": f"{analysis['time_at_min_fraction']*100:.1f}",
            "In Bounds": "Yes" if analysis["velocity_in_bounds"] else "No",
        })

    # 1-3. State histories over time
    fig1 = _line_figure(results, frictions, VELOCITY, "Velocity Over Time", "Velocity")
    fig2 = _line_figure(results, frictions, POSITION, "Track Position Over Time", "Curve Parameter")
    fig3 = _line_figure(results, frictions, SLOPE, "Slope Signal Over Time", "Slope")

    # 4. Ground follower path (x/y of the ground position)
    fig4 = go.Figure()
    colors = px.colors.qualitative.Set1
    for i, friction in enumerate(frictions):
        poses = results[friction]["poses"]
        fig4.add_trace(
            go.Scatter(
                x=poses[:, 0],
                y=poses[:, 1],
                mode="lines",
                name=f"friction {friction}",
                line=dict(color=colors[i % len(colors)], width=2),
                hovertemplate="X: %{x:.2f}<br>Y: %{y:.2f}<extra></extra>",
            )
        )

    fig4.update_layout(
        title="Ground Follower Path",
        xaxis_title="X",
        yaxis_title="Y",
        hovermode="closest",
        height=400,
        template="plotly_white",
    )

    # 5. Mean velocity bar chart
    fig5 = go.Figure()
    friction_labels = [f"{f}" for f in frictions]
    mean_velocities = [results[f]["analysis"]["mean_velocity"] for f in frictions]
    colors_bar = [
        "green" if results[f]["analysis"]["velocity_in_bounds"] else "red" for f in frictions
    ]

    fig5.add_trace(
        go.Bar(
            x=friction_labels,
            y=mean_velocities,
            marker_color=colors_bar,
            text=[f"{v:.4f}" for v in mean_velocities],
            textposition="outside",
            hovertemplate="Friction: %{x}<br>Mean Velocity: %{y:.4f}<extra></extra>",
        )
    )

    fig5.update_layout(
        title="Mean Velocity by Hill Friction",
        xaxis_title="Hill Friction",
        yaxis_title="Mean Velocity",
        height=400,
        template="plotly_white",
    )

    # Create summary table HTML
    table_rows = [
        html.Tr([html.Th(column) for column in summary_data[0]]) if summary_data else html.Tr([])
    ]

    for row in summary_data:
        bounds_color = "green" if row["In Bounds"] == "Yes" else "red"
        table_rows.append(
            html.Tr([
                html.Td(row["Hill Friction"]),
                html.Td(row["Final Position"]),
                html.Td(row["Mean Velocity"]),
                html.Td(row["Time at Max (%)"]),
                html.Td(row["Time at Min (%)"]),
                html.Td(
                    row["In Bounds"],
                    style={"color": bounds_color, "fontWeight": "bold"},
                ),
            ])
        )

    return html.Div([
        html.H2("Simulation Results", style={"marginTop": "30px", "marginBottom": "20px"}),
        html.Div([
            html.H3("Summary Table", style={"marginBottom": "15px"}),
            html.Table(
                table_rows,
                style={
                    "width": "100%",
                    "borderCollapse": "collapse",
                    "marginBottom": "30px",
                    "fontSize": "14px",
                },
            ),
        ], style={"marginBottom": "30px"}),
        html.Div([
            html.Div([dcc.Graph(figure=fig1)], style={"marginBottom": "30px"}),
            html.Div([dcc.Graph(figure=fig2)], style={"marginBottom": "30px"}),
            html.Div([dcc.Graph(figure=fig3)], style={"marginBottom": "30px"}),
            html.Div([
                html.Div(
                    [dcc.Graph(figure=fig4)],
                    style={"width": "48%", "display": "inline-block", "marginRight": "2%"},
                ),
                html.Div(
                    [dcc.Graph(figure=fig5)],
                    style={"width": "48%", "display": "inline-block"},
                ),
            ], style={"marginBottom": "30px"}),
        ]),
    ])


if __name__ == "__main__":
    app.run(debug=True, port=8050)
