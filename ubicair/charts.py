"""Plotly figures for the statistics dashboard."""

import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

DEP_COLOR = "#ff7300"
ARR_COLOR = "#387908"
PRIMARY = "#8884d8"
SECONDARY = "#82ca9d"


# =========================
# FLIGHT STATS
# =========================
def average_delays(summary):
    fig = px.bar(
        x=["Departure delay", "Arrival delay"],
        y=[summary["avg_dep_delay"], summary["avg_arr_delay"]],
    )
    fig.update_traces(marker_color=PRIMARY, texttemplate="%{y:.1f} min", textposition="outside")
    fig.update_layout(
        title="Average Delays",
        xaxis_title="",
        yaxis_title="Minutes",
        showlegend=False,
    )
    return fig


# =========================
# DELAY ANALYSIS
# =========================
def monthly_delays(monthly):
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=monthly["month"], y=monthly["dep_delay"],
        mode="lines+markers", name="Departure delay",
        line=dict(color=DEP_COLOR, width=2),
    ))
    fig.add_trace(go.Scatter(
        x=monthly["month"], y=monthly["arr_delay"],
        mode="lines+markers", name="Arrival delay",
        line=dict(color=ARR_COLOR, width=2),
    ))
    fig.update_layout(
        title="Average Delay by Month",
        xaxis_title="",
        yaxis_title="Minutes",
    )
    return fig


def delay_distribution(distribution):
    fig = px.bar(distribution, x="range", y="count")
    fig.update_traces(marker_color=PRIMARY)
    fig.update_layout(
        title="Delay Distribution",
        xaxis_title="Delay range",
        yaxis_title="Flights",
        showlegend=False,
    )
    return fig


# =========================
# AIRLINE COMPARISON
# =========================
def airline_punctuality(airlines):
    fig = go.Figure()
    fig.add_trace(go.Bar(x=airlines["airline"], y=airlines["on_time"], name="On-time (%)", marker_color=SECONDARY))
    fig.add_trace(go.Bar(x=airlines["airline"], y=airlines["avg_delay"], name="Avg delay (min)", marker_color=DEP_COLOR))
    fig.update_layout(
        barmode="group",
        title="Punctuality by Airline",
        xaxis_title="",
        xaxis_tickangle=-45,
    )
    return fig


def airline_performance(performance):
    metrics = ["punctuality", "efficiency", "volume", "satisfaction"]
    fig = go.Figure()
    for _, row in performance.iterrows():
        fig.add_trace(go.Scatterpolar(
            r=[row[m] for m in metrics] + [row[metrics[0]]],
            theta=[m.capitalize() for m in metrics] + [metrics[0].capitalize()],
            fill="toself",
            opacity=0.6,
            name=row["airline"],
        ))
    fig.update_layout(
        title="Airline Performance",
        polar=dict(radialaxis=dict(visible=True)),
    )
    return fig


# =========================
# POPULAR ROUTES
# =========================
def top_routes(routes):
    ordered = routes.sort_values("flights")
    fig = px.bar(ordered, x="flights", y="route", orientation="h")
    fig.update_traces(marker_color=PRIMARY, hoverinfo="skip")
    fig.update_layout(
        title="Most Popular Routes",
        xaxis_title="Flights",
        yaxis_title="",
        showlegend=False,
    )
    return fig


def distance_categories(categories):
    fig = px.pie(categories, names="category", values="value")
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(title="Routes by Distance", showlegend=False)
    return fig


# =========================
# TIME ANALYSIS
# =========================
def hourly_traffic(hourly):
    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(go.Scatter(
        x=hourly["hour"], y=hourly["departures"], name="Departures",
        fill="tozeroy", line=dict(color=PRIMARY),
    ), secondary_y=False)
    fig.add_trace(go.Scatter(
        x=hourly["hour"], y=hourly["arrivals"], name="Arrivals",
        fill="tozeroy", line=dict(color=SECONDARY),
    ), secondary_y=False)
    fig.add_trace(go.Scatter(
        x=hourly["hour"], y=hourly["delay"], name="Avg delay (min)",
        mode="lines+markers", line=dict(color=DEP_COLOR, width=3),
    ), secondary_y=True)
    fig.update_layout(title_text="Traffic and Delay by Hour")
    fig.update_yaxes(title_text="Flights", secondary_y=False)
    fig.update_yaxes(title_text="Average Delay (Minutes)", secondary_y=True)
    return fig


def weekly_traffic(weekly):
    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(go.Bar(x=weekly["day"], y=weekly["flights"], name="Flights", marker_color=PRIMARY), secondary_y=False)
    fig.add_trace(go.Scatter(
        x=weekly["day"], y=weekly["on_time"], name="On-time (%)",
        mode="lines+markers", line=dict(color=SECONDARY, width=3),
    ), secondary_y=True)
    fig.update_layout(title_text="Flights and Punctuality by Weekday")
    fig.update_yaxes(title_text="Flights", secondary_y=False)
    fig.update_yaxes(title_text="On-time (%)", secondary_y=True)
    return fig
