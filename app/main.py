import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd
import plotly.express as px

from core.config import load_settings
from core.domain import Category
from core.events import EventBus, TRANSACTION_ADDED, TRANSACTION_DELETED
from core.ledger import Ledger
from core.logging_setup import configure_logging, get_logger
from core.render import format_amount, summary_frame, transactions_frame

settings = load_settings()
configure_logging(settings.log_level)
logger = get_logger("dashboard")

st.set_page_config(page_title="Expense Tracker", layout="wide")


def record_event(event):
    t = event.payload["transaction"]
    st.session_state.tx_event_history.append({
        "time": event.ts,
        "event": event.name,
        "id": t.id,
        "date": t.date.strftime(settings.date_format),
        "category": str(t.category),
        "amount": format_amount(t.amount),
    })
    logger.debug("%s id=%s", event.name, t.id)


if "ledger" not in st.session_state:
    bus = EventBus()
    bus.subscribe(TRANSACTION_ADDED, record_event)
    bus.subscribe(TRANSACTION_DELETED, record_event)
    st.session_state.ledger = Ledger(bus)
    st.session_state.tx_event_history = []

ledger: Ledger = st.session_state.ledger


def show_table(df: pd.DataFrame, empty_message: str):
    if df.empty:
        st.info(empty_message)
        return
    disp = df.copy()
    disp["date"] = disp["date"].dt.strftime(settings.date_format)
    st.dataframe(disp, hide_index=True, use_container_width=True)


menu = st.sidebar.radio(
    "Menu",
    ["🏠 Overview", "🧾 Transactions", "🔎 Search", "📑 Summaries"]
)

if menu == "🏠 Overview":
    st.title("🏠 Overview")
    df = transactions_frame(ledger.all())
    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Transactions", len(ledger))
    with k2:
        st.metric("Months recorded", sum(1 for _ in ledger.monthly_summary()))
    with k3:
        st.metric("Net total", f"{df['amount'].sum():,.2f}" if not df.empty else "0.00")

    cat_df = summary_frame(ledger.category_summary(), "category")
    fig_cat = px.bar(
        cat_df,
        x="category",
        y="total",
        title="Totals by Category",
        template="plotly_dark"
    )
    st.plotly_chart(fig_cat, use_container_width=True)

    month_df = summary_frame(ledger.monthly_summary(), "month")
    if not month_df.empty:
        fig_month = px.bar(
            month_df,
            x="month",
            y="total",
            title="Totals by Month",
            template="plotly_dark"
        )
        st.plotly_chart(fig_month, use_container_width=True)
    else:
        st.info("Nothing recorded.")

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")

    with st.form("add_tx", clear_on_submit=True):
        c1, c2, c3 = st.columns(3)
        with c1:
            on = st.date_input("Date")
        with c2:
            amount = st.number_input("Amount", value=0.0, step=1.0, format="%.2f")
        with c3:
            category = st.selectbox("Category", options=list(Category), format_func=str)
        note = st.text_input("Description")
        if st.form_submit_button("Add transaction"):
            t = ledger.add(on, amount, category, note)
            st.success(f"Added transaction with id {t.id}")

    show_table(transactions_frame(ledger.all()), "No data yet.")

    with st.form("delete_tx"):
        tx_id = st.number_input("Transaction id", min_value=1, step=1)
        if st.form_submit_button("Delete"):
            result = ledger.delete_by_id(int(tx_id))
            if result.is_some():
                st.success(f"Deleted {int(tx_id)}")
            else:
                st.warning("Not found.")

    if st.session_state.tx_event_history:
        st.subheader("📜 Event history")
        st.table(pd.DataFrame(st.session_state.tx_event_history))

elif menu == "🔎 Search":
    st.title("🔎 Search")

    st.header("By category")
    picked = st.selectbox("Category", options=list(Category), format_func=str, key="search_cat")
    show_table(transactions_frame(ledger.by_category(picked)), f"No records for {picked}")

    st.header("By date range")
    date_range = st.date_input(
        "Date Range",
        value=(pd.Timestamp.today().date().replace(day=1), pd.Timestamp.today().date()),
        key="tx_date_range"
    )
    if len(date_range) == 2:
        start, end = date_range
        show_table(transactions_frame(ledger.by_date_range(start, end)), "No records in range.")

elif menu == "📑 Summaries":
    st.title("📑 Summaries")
    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Monthly")
        month_df = summary_frame(ledger.monthly_summary(), "month")
        if month_df.empty:
            st.info("Nothing recorded.")
        else:
            st.table(month_df)
    with col2:
        st.subheader("By category")
        st.table(summary_frame(ledger.category_summary(), "category"))
