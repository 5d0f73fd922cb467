"""
Streamlit Frontend for Expense Tracker

The five screens of the tracker: dashboard, analytics, add expense,
history and the AI assistant.

DESIGN PRINCIPLES:
1. Screens only render and report user actions
2. All state lives in one AppContext per browser session
3. Everything shown is re-derived from the expense list on each rerun
"""

import asyncio
from datetime import date

import pandas as pd
import plotly.express as px
import streamlit as st

from expense_tracker.agents import ChatRole
from expense_tracker.config import validate_all_settings
from expense_tracker.models.currency import Currency, format_amount, symbol
from expense_tracker.models.expense import Expense, ExpenseCategory
from expense_tracker.navigation import NavigationEvent, NavigationEventKind, View
from expense_tracker.orchestrator import AppContext, create_app_context


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
        color: #0f172a;
    }
    .muted {
        color: #64748b;
        font-size: 0.85em;
    }
</style>
""", unsafe_allow_html=True)

NAV_ICONS = {
    View.DASHBOARD: "🏠",
    View.ANALYTICS: "📊",
    View.ADD: "➕",
    View.HISTORY: "🕘",
    View.ASSISTANT: "🤖",
}

CHART_COLORS = [
    "#3b82f6", "#ef4444", "#22c55e", "#f59e0b",
    "#8b5cf6", "#ec4899", "#6366f1", "#64748b",
]


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def get_context() -> AppContext:
    """One AppContext per browser session."""
    if "context" not in st.session_state:
        st.session_state.context = create_app_context()
    return st.session_state.context


def main():
    """Main application entry point."""
    ctx = get_context()

    st.sidebar.title("💸 Expense Tracker")
    st.sidebar.markdown("---")

    views = list(View)
    choice = st.sidebar.radio(
        "Navigate to:",
        views,
        index=views.index(ctx.view),
        format_func=lambda v: f"{NAV_ICONS[v]} {v.label}",
    )
    if choice != ctx.view:
        ctx.select_view(choice)

    st.sidebar.markdown("---")
    render_status(st.sidebar)

    # Route to appropriate screen
    if ctx.view == View.DASHBOARD:
        render_dashboard(ctx)
    elif ctx.view == View.ANALYTICS:
        render_analytics(ctx)
    elif ctx.view == View.ADD:
        render_add_expense(ctx)
    elif ctx.view == View.HISTORY:
        render_history(ctx)
    elif ctx.view == View.ASSISTANT:
        render_assistant(ctx)


def render_status(container):
    """Show which configuration sections loaded."""
    status = validate_all_settings()

    with container.expander("⚙️ Connection Status"):
        for name, key in [("Gemini (AI)", "gemini"), ("Local storage", "storage")]:
            if status.get(key, False):
                st.success(f"✅ {name}")
            else:
                st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")
        st.caption(
            "Create a `.env` file to configure the app. "
            "See `.env.example` for the available variables."
        )


def render_expense_row(expense: Expense):
    st.markdown(
        f"**{expense.description}**  \n"
        f"<span class='muted'>{expense.date.isoformat()} • {expense.category.value}</span>",
        unsafe_allow_html=True,
    )


def render_dashboard(ctx: AppContext):
    """Render the dashboard screen."""
    currencies = list(Currency)
    col1, col2 = st.columns([3, 1])

    with col2:
        selected = st.selectbox(
            "Base currency",
            options=currencies,
            index=currencies.index(ctx.base_currency),
            format_func=lambda c: c.value,
        )
        if selected != ctx.base_currency:
            ctx.set_base_currency(selected)

    summary = ctx.dashboard()
    currency = summary.base_currency

    with col1:
        st.markdown("<span class='muted'>Total Balance</span>", unsafe_allow_html=True)
        st.markdown(
            f"<div class='big-number'>{format_amount(summary.total_spent, currency)}</div>",
            unsafe_allow_html=True,
        )

    col1, col2 = st.columns(2)
    with col1:
        st.metric("This Month", format_amount(summary.monthly_spent, currency))
    with col2:
        st.metric("Transactions", summary.transaction_count)

    st.markdown("---")
    header, link = st.columns([3, 1])
    with header:
        st.subheader("Recent Activity")
    with link:
        if st.button("See all ›"):
            ctx.navigate(NavigationEvent(kind=NavigationEventKind.SEE_ALL))
            st.rerun()

    if not summary.recent:
        st.info("No expenses yet")
        return

    for expense in summary.recent:
        left, right = st.columns([3, 1])
        with left:
            render_expense_row(expense)
        with right:
            st.markdown(f"**{symbol(expense.currency)}{expense.amount}**")


def render_analytics(ctx: AppContext):
    """Render the analytics screen."""
    st.title("📊 Analytics")
    st.markdown("Track your spending habits")

    currency = ctx.base_currency

    st.subheader("Spending by Category")
    breakdown = ctx.category_breakdown()
    if breakdown:
        df = pd.DataFrame(
            [
                {
                    "category": category.value,
                    "amount": float(amount),
                    "formatted": format_amount(amount, currency),
                }
                for category, amount in breakdown.items()
            ]
        )
        fig = px.pie(
            df,
            names="category",
            values="amount",
            hole=0.6,
            color_discrete_sequence=CHART_COLORS,
            hover_data=["formatted"],
        )
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("No expenses to chart yet")

    st.subheader("Monthly Trends")
    trend = ctx.trend()
    df = pd.DataFrame(
        [{"month": bar.label, "amount": float(bar.amount)} for bar in trend]
    )
    fig = px.bar(
        df,
        x="month",
        y="amount",
        labels={"month": "", "amount": f"Spent ({currency.value})"},
        color_discrete_sequence=[CHART_COLORS[0]],
    )
    st.plotly_chart(fig, use_container_width=True)


def render_add_expense(ctx: AppContext):
    """Render the add-expense screen."""
    st.title("➕ Add Expense")

    with st.form("add_expense"):
        col1, col2 = st.columns(2)
        with col1:
            currency = st.selectbox(
                "Currency",
                options=list(Currency),
                format_func=lambda c: f"{c.value} ({symbol(c)})",
            )
        with col2:
            expense_date = st.date_input("Date", value=date.today())

        amount = st.text_input("Amount", placeholder="0.00")

        category = st.radio(
            "Category",
            options=list(ExpenseCategory),
            index=list(ExpenseCategory).index(ExpenseCategory.OTHER),
            format_func=lambda c: c.value,
            horizontal=True,
        )

        description = st.text_input(
            "Description",
            placeholder="e.g. Coffee with friends",
        )

        submitted = st.form_submit_button("Save Expense", type="primary")

    if submitted:
        expense = ctx.submit_expense_form(
            amount=amount,
            description=description,
            currency=currency,
            category=category,
            expense_date=expense_date,
        )
        if expense is not None:
            st.rerun()

    if st.button("Cancel"):
        ctx.cancel_add()
        st.rerun()


def render_history(ctx: AppContext):
    """Render the history screen."""
    st.title("🕘 History")
    st.markdown("All transactions")

    expenses = ctx.history()
    if not expenses:
        st.info("No history available")
        return

    pending_delete = st.session_state.get("pending_delete")

    for expense in expenses:
        left, middle, right = st.columns([4, 2, 1])
        with left:
            render_expense_row(expense)
        with middle:
            st.markdown(f"**{symbol(expense.currency)}{expense.amount}**")
        with right:
            if st.button("🗑️", key=f"delete-{expense.id}"):
                st.session_state.pending_delete = str(expense.id)
                st.rerun()

        if pending_delete == str(expense.id):
            st.warning("Delete this transaction?")
            yes, no = st.columns(2)
            with yes:
                if st.button("Delete", key=f"confirm-{expense.id}", type="primary"):
                    ctx.delete_expense(expense.id)
                    st.session_state.pending_delete = None
                    st.rerun()
            with no:
                if st.button("Keep", key=f"keep-{expense.id}"):
                    st.session_state.pending_delete = None
                    st.rerun()


def render_assistant(ctx: AppContext):
    """Render the AI assistant screen."""
    st.title("🤖 AI Assistant")

    chat = ctx.chat
    for message in chat.messages:
        role = "user" if message.role == ChatRole.USER else "assistant"
        with st.chat_message(role):
            st.markdown(message.text)

    question = st.chat_input(
        "Ask about your spending...",
        disabled=chat.pending,
    )
    if question and chat.can_send(question):
        with st.chat_message("user"):
            st.markdown(question)
        with st.spinner("Thinking..."):
            run_async(ctx.ask(question))
        st.rerun()


if __name__ == "__main__":
    main()
