#!/usr/bin/env python3
"""
Mall Customer Segmentation Dashboard - Streamlit

Interactive view of the K-Means segmentation served by the API.

Run:
    uvicorn mall_segmentation.main:app
    streamlit run dashboard.py

Then open: http://localhost:8501
"""

from datetime import datetime

import httpx
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from mall_segmentation.core.config import get_settings
from mall_segmentation.models.customer import Customer
from mall_segmentation.segmentation.aggregation import summarize_clusters
from mall_segmentation.segmentation.catalog import cluster_color, cluster_label
from mall_segmentation.segmentation.model_performance import CHOSEN_K

AGE_GROUPS = ["all", "18-30", "31-45", "46-60", "60+"]
GENDERS = ["all", "male", "female"]

# Page config
st.set_page_config(
    page_title="Customer Segmentation Dashboard",
    page_icon="🛍️",
    layout="wide"
)


@st.cache_resource
def get_client() -> httpx.Client:
    settings = get_settings()
    return httpx.Client(base_url=settings.api_base_url + settings.api_prefix, timeout=10.0)


@st.cache_data(ttl=60)
def fetch(path: str, params: tuple = ()):
    """GET a JSON resource from the API. ``params`` is a tuple of pairs so it can be cached."""
    response = get_client().get(path, params=dict(params))
    response.raise_for_status()
    return response.json()


@st.cache_data(ttl=60)
def fetch_csv(params: tuple = ()) -> bytes:
    response = get_client().get("/download-csv", params=dict(params))
    response.raise_for_status()
    return response.content


def customers_frame(customers: list) -> pd.DataFrame:
    df = pd.DataFrame(customers)
    if df.empty:
        return df
    df["segment"] = df["cluster"].apply(lambda c: cluster_label(c) if pd.notna(c) else "Unassigned")
    return df


def segment_colors(df: pd.DataFrame) -> dict:
    return {
        cluster_label(int(c)): cluster_color(int(c))
        for c in df["cluster"].dropna().unique()
    }


# Header
st.title("🛍️ Mall Customer Segmentation")
st.markdown("K-Means clustering of mall customers by age, annual income and spending score")
st.markdown("---")

# Sidebar filters
with st.sidebar:
    st.header("Filters")

    age_group = st.selectbox("Age Group", options=AGE_GROUPS, index=0)
    gender = st.selectbox("Gender", options=GENDERS, index=0, format_func=str.title)

    with st.spinner("Loading clusters..."):
        clusters = fetch("/clusters")
    cluster_options = [-1] + [c["cluster"] for c in clusters]
    cluster = st.selectbox(
        "Cluster",
        options=cluster_options,
        index=0,
        format_func=lambda c: "All clusters" if c == -1 else cluster_label(c),
    )

    st.markdown("---")
    st.markdown("### About")
    st.markdown("Segments were found with K-Means (k=5) on income, spending score and age.")

filter_params = tuple(
    (key, value)
    for key, value in (("ageGroup", age_group), ("gender", gender), ("cluster", str(cluster)))
    if value not in ("all", "-1")
)

with st.spinner("Loading customers..."):
    summary = fetch("/summary")
    customers = fetch("/customers/filtered", filter_params)
    performance = fetch("/model-performance")
    strategies = fetch("/marketing-strategies")

df = customers_frame(customers)

# Summary cards
st.header("📊 Overview")
col1, col2, col3, col4 = st.columns(4)

with col1:
    st.metric("Total Customers", f"{summary['totalCustomers']:,}")
with col2:
    st.metric("Avg Annual Income", f"${summary['avgIncome']:.1f}k")
with col3:
    st.metric("Avg Spending Score", f"{summary['avgSpending']:.1f}")
with col4:
    st.metric("Clusters", summary["totalClusters"])

st.caption(f"{len(df)} customers match the current filters")
st.markdown("---")

if df.empty:
    st.warning("No customers match the selected filters")
else:
    colors = segment_colors(df)

    # Cluster scatter
    st.header("🎯 Customer Segments")
    col1, col2 = st.columns(2)

    with col1:
        fig = px.scatter(
            df,
            x="annualIncome",
            y="spendingScore",
            color="segment",
            color_discrete_map=colors,
            hover_data=["customerId", "age", "gender"],
            title="Annual Income vs Spending Score",
            labels={"annualIncome": "Annual Income (k$)", "spendingScore": "Spending Score (1-100)"}
        )
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        fig = px.scatter_3d(
            df,
            x="age",
            y="annualIncome",
            z="spendingScore",
            color="segment",
            color_discrete_map=colors,
            title="Age, Income and Spending",
            labels={"annualIncome": "Income (k$)", "spendingScore": "Spending"}
        )
        fig.update_traces(marker={"size": 4})
        st.plotly_chart(fig, use_container_width=True)

    # Cluster statistics recomputed for the filtered customers
    stats = pd.DataFrame(
        s.model_dump(by_alias=True)
        for s in summarize_clusters(Customer.model_validate(c) for c in customers)
    )

    col1, col2 = st.columns(2)

    with col1:
        fig = go.Figure(data=go.Pie(
            labels=stats["label"],
            values=stats["size"],
            hole=0.5,
            marker={"colors": stats["color"]},
        ))
        fig.update_layout(title="Cluster Distribution")
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        averages = stats.melt(
            id_vars=["cluster"],
            value_vars=["avgAge", "avgIncome", "avgSpending"],
            var_name="metric",
            value_name="value",
        )
        averages["segment"] = averages["cluster"].apply(cluster_label)
        fig = px.bar(
            averages,
            x="segment",
            y="value",
            color="metric",
            barmode="group",
            title="Cluster Averages",
            labels={"segment": "Segment", "value": "Average"}
        )
        st.plotly_chart(fig, use_container_width=True)

    # Cluster legend
    st.subheader("📋 Cluster Details")
    legend = stats[["cluster", "label", "size", "avgAge", "avgIncome", "avgSpending", "description"]]
    st.dataframe(legend, use_container_width=True, hide_index=True)

st.markdown("---")

# Model performance
st.header("📈 Model Performance")
col1, col2 = st.columns(2)

with col1:
    elbow = pd.DataFrame(performance["elbowData"])
    fig = px.line(elbow, x="k", y="sse", markers=True, title="Elbow Method",
                  labels={"k": "Number of Clusters (k)", "sse": "Within-cluster SSE"})
    fig.add_vline(x=CHOSEN_K, line_dash="dash", line_color="gray")
    st.plotly_chart(fig, use_container_width=True)

with col2:
    silhouette = pd.DataFrame(performance["silhouetteData"])
    fig = px.line(silhouette, x="k", y="score", markers=True, title="Silhouette Score",
                  labels={"k": "Number of Clusters (k)", "score": "Silhouette Score"})
    fig.add_vline(x=CHOSEN_K, line_dash="dash", line_color="gray")
    st.plotly_chart(fig, use_container_width=True)

st.markdown("---")

# Marketing strategies
st.header("💡 Marketing Strategies")
columns = st.columns(3)
for index, strategy in enumerate(strategies):
    with columns[index % 3]:
        st.markdown(f"#### {strategy['title']}")
        st.caption(strategy["description"])
        st.markdown("\n".join(f"- {item}" for item in strategy["strategies"]))

st.markdown("---")

# Export
col1, col2 = st.columns(2)
with col1:
    st.download_button(
        "⬇️ Download full dataset",
        data=fetch_csv(),
        file_name="Mall_Customers.csv",
        mime="text/csv",
    )
with col2:
    st.download_button(
        "⬇️ Download filtered customers",
        data=fetch_csv(filter_params),
        file_name="filtered-customer-data.csv",
        mime="text/csv",
        disabled=not filter_params,
    )

# Refresh button
if st.button("🔄 Refresh Dashboard"):
    st.cache_data.clear()
    st.rerun()

st.caption(f"Last updated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
