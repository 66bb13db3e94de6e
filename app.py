import os

import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px

from components.config import StoreConfig
from components.record import Record, RecordStoreError, parse_score
from components.record_store import RecordStore
from components.work_loads import WorkLoad

# Configure page
st.set_page_config(
    page_title="Record Index",
    page_icon="🗂️",
    layout="wide",
    initial_sidebar_state="expanded"
)


def get_store():
    if 'store' not in st.session_state:
        path = os.environ.get("RECORDS_FILE", "records.csv")
        st.session_state['store'] = RecordStore(StoreConfig(path=path))
    return st.session_state['store']


def records_frame(records):
    return pd.DataFrame(
        [r.as_row() for r in records],
        columns=["identifier", "name", "category", "score"]
    )


def show_record(record):
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Identifier", record.identifier)
    with col2:
        st.metric("Name", record.name)
    with col3:
        st.metric("Category", record.category or "-")
    with col4:
        st.metric("Score", f"{record.score:.2f}")


store = get_store()

# Main title
st.title("🗂️ Record Index")
if store.unsaved:
    st.warning(f"⚠️ Changes could not be written to {store.config.path}; they are kept for this session only.")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Records", "Search", "Manage", "Statistics"]
    )

    st.markdown("---")
    st.subheader("Quick Actions")
    if st.button("🔄 Reload from disk"):
        store.load()
        st.rerun()

    sample_n = st.number_input("Sample records", min_value=1, max_value=10_000, value=50)
    if st.button("🎲 Generate samples"):
        try:
            added = store.add_many(WorkLoad().records(int(sample_n), reserved=store.records.keys()))
            st.success(f"✅ Added {added} sample records")
        except ValueError as e:
            st.error(f"❌ {e}")

# Main content area
if page == "Records":
    st.header("📋 Records")

    records = store.list_records()
    if records:
        st.dataframe(records_frame(records), use_container_width=True)
    else:
        st.info("No records registered.")

    st.subheader("Add Record")
    with st.form("add_record", clear_on_submit=True):
        identifier = st.text_input("Identifier").strip()
        name = st.text_input("Name").strip()
        category = st.text_input("Category").strip()
        score_text = st.text_input("Score (e.g. 17.5)").strip()
        submitted = st.form_submit_button("Add")

    score = None
    if submitted:
        if not identifier:
            st.error("❌ Identifier cannot be empty.")
        elif not name:
            st.error("❌ Name cannot be empty.")
        else:
            try:
                score = parse_score(score_text)
            except ValueError:
                st.error("❌ Invalid score. Please enter a numeric value.")

    if score is not None:
        try:
            store.add(Record(identifier, name, category, score))
            st.success(f"✅ Record {identifier} added")
            st.rerun()
        except ValueError as e:
            st.error(f"❌ Record not added: {e}")
        except RecordStoreError as e:
            st.error(f"❌ {e}")

elif page == "Search":
    st.header("🔍 Search")

    text = st.text_input("Identifier (full or prefix)").strip()
    if text:
        result = store.resolve(text)
        if isinstance(result, Record):
            show_record(result)
        elif result:
            st.write(f"**{len(result)} matching identifiers:**")
            choice = st.selectbox("Did you mean one of the following?", result)
            if choice:
                show_record(store.get(choice))
        else:
            st.warning(f"⚠️ Record with identifier {text} does not exist.")

elif page == "Manage":
    st.header("✏️ Manage")

    prefix = st.text_input("Filter identifiers by prefix").strip()
    options = store.suggest(prefix) if prefix else [r.identifier for r in store.list_records()]
    if not options:
        st.info("No records match.")
    else:
        identifier = st.selectbox("Record", options)
        current = store.get(identifier)

        with st.form("update_record"):
            name = st.text_input("Name", placeholder=current.name)
            category = st.text_input("Category", placeholder=current.category)
            score_text = st.text_input("Score", placeholder=f"{current.score}")
            col1, col2 = st.columns(2)
            with col1:
                do_update = st.form_submit_button("Update")
            with col2:
                do_remove = st.form_submit_button("Remove")

        try:
            if do_update:
                store.update(identifier, name=name, category=category, score=score_text)
                st.success(f"✅ Record {identifier} updated")
                st.rerun()
            elif do_remove:
                store.remove(identifier)
                st.success(f"✅ Record {identifier} removed")
                st.rerun()
        except ValueError as e:
            st.error(f"❌ Record not updated: {e}")
        except RecordStoreError as e:
            st.error(f"❌ {e}")

elif page == "Statistics":
    st.header("📊 Statistics")

    df = records_frame(store.list_records())
    if df.empty:
        st.info("📁 Add or generate records first")
    else:
        scores = df["score"].to_numpy(dtype=float)
        shape = store.index.stats()
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Total Records", len(df))
        with col2:
            st.metric("Mean Score", f"{np.mean(scores):.2f}")
        with col3:
            st.metric("Index Nodes", shape["nodes"])
        with col4:
            st.metric("Avg Branch Factor", f"{shape['avg_branch_factor']:.2f}")

        tab1, tab2 = st.tabs(["Score Distribution", "Categories"])

        with tab1:
            fig = px.histogram(df, x="score", nbins=20, title="Distribution of scores")
            st.plotly_chart(fig, use_container_width=True)

        with tab2:
            counts = df["category"].replace("", "(none)").value_counts()
            fig_pie = px.pie(
                values=counts.values,
                names=counts.index,
                title="Records by category"
            )
            st.plotly_chart(fig_pie, use_container_width=True)
            st.dataframe(df.groupby("category")["score"].describe())

# Footer
st.markdown("---")
st.markdown(
    f"""
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Data file: {store.config.path}
    </div>
    """,
    unsafe_allow_html=True
)
