"""
Streamlit Frontend for Spend Tracker

Pages:
1. Home       - this month's stats and the most recent expenses
2. Add        - manual entry, or scan a receipt to pre-fill the form
3. History    - every expense, filtered by category and sorted
4. Analytics  - spending by category for this month
5. Profile    - sign in/out, clear data, upcoming features

The UI never computes anything itself: it asks the flows and shows
their messages.
"""

import asyncio
from datetime import date

import streamlit as st

from spend_tracker.analytics import ALL_CATEGORIES, SORT_BY_AMOUNT, SORT_BY_DATE
from spend_tracker.audit import create_correlation_id
from spend_tracker.config import get_settings, validate_all_settings
from spend_tracker.formatting import (
    category_icon,
    format_amount,
    format_expense_date,
    format_percentage,
)
from spend_tracker.models.expense import EXPENSE_CATEGORIES, Expense, ExpenseFormInput
from spend_tracker.orchestrator import (
    AppComponents,
    create_app_components,
    placeholder_message,
)
from spend_tracker.services.auth import AuthenticationError
from spend_tracker.services.storage import StorageError


# Page configuration
st.set_page_config(
    page_title="Spend Tracker",
    page_icon="💸",
    layout="centered",
    initial_sidebar_state="expanded",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> AppComponents:
    """Get or create application components (cached)."""
    components = create_app_components(use_file_storage=True)
    run_async(components.auth.load_user())
    return components


def money(amount) -> str:
    return format_amount(amount, get_settings().app.currency_symbol)


def render_expense_card(expense: Expense, deletable: bool = False):
    """One expense row."""
    left, right = st.columns([4, 1])
    with left:
        st.markdown(
            f"**{expense.display_merchant}**  \n"
            f"{category_icon(expense.category.value)} {expense.category.value} · "
            f"{format_expense_date(expense.date)}"
        )
        if expense.notes:
            st.caption(expense.notes)
    with right:
        st.markdown(f"**{money(expense.amount)}**")
        if deletable and st.button("🗑️", key=f"delete_{expense.id}", help="Delete expense"):
            st.session_state.pending_delete = expense.id
            st.rerun()


def main():
    """Main application entry point."""
    components = get_components()

    # Statistics are recomputed from storage on every render
    run_async(components.insights.refresh())

    st.sidebar.title("💸 Spend Tracker")
    user = components.auth.current_user
    if user:
        st.sidebar.caption(f"Signed in as {user.display_name}")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🏠 Home", "➕ Add Expense", "📜 History", "📊 Analytics", "👤 Profile"],
        index=0,
    )

    if page == "🏠 Home":
        render_home_page(components)
    elif page == "➕ Add Expense":
        render_add_page(components)
    elif page == "📜 History":
        render_history_page(components)
    elif page == "📊 Analytics":
        render_analytics_page(components)
    elif page == "👤 Profile":
        render_profile_page(components)


def render_home_page(components: AppComponents):
    st.title("Monthly Tracker")
    st.caption("Track your spending with ease")

    stats = components.insights.monthly_stats()

    col1, col2 = st.columns(2)
    col1.metric("Total Spent", money(stats.total_spent))
    col2.metric("Expenses", stats.expense_count)
    col3, col4 = st.columns(2)
    col3.metric("Top Category", stats.top_category)
    col4.metric("Daily Average", money(stats.average_per_day))

    st.subheader("Recent Expenses")
    recent = components.insights.recent_expenses()
    if not recent:
        st.info("No expenses yet. Add your first expense to get started.")
        return

    for expense in recent:
        render_expense_card(expense)


def render_add_page(components: AppComponents):
    """Manual entry or scan, then the shared form."""
    st.title("➕ Add Expense")

    if "expense_form" not in st.session_state:
        st.session_state.expense_form = None
    if "correlation_id" not in st.session_state:
        st.session_state.correlation_id = None

    if st.session_state.expense_form is None:
        manual_tab, scan_tab = st.tabs(["✍️ Manual Entry", "📷 Scan Receipt"])

        with manual_tab:
            st.markdown("Enter expense details manually for cash payments or other transactions.")
            if st.button("Add Manually", type="primary"):
                st.session_state.correlation_id = create_correlation_id()
                st.session_state.expense_form = components.add_flow.new_manual_form()
                st.rerun()

        with scan_tab:
            formats = get_settings().app.supported_formats_list
            photo = st.camera_input("Take a photo of your receipt")
            upload = st.file_uploader("...or choose a receipt photo", type=formats)
            image = photo or upload
            if image is not None and st.button("🔍 Scan Receipt", type="primary"):
                st.session_state.correlation_id = create_correlation_id()
                with st.spinner("Processing receipt..."):
                    form, can_proceed, message = run_async(
                        components.add_flow.scan_receipt(
                            image.name,
                            correlation_id=st.session_state.correlation_id,
                        )
                    )
                if can_proceed:
                    st.session_state.expense_form = form
                    st.session_state.scan_message = message
                    st.rerun()
                else:
                    st.error(message)
        return

    render_expense_form(components, st.session_state.expense_form)


def render_expense_form(components: AppComponents, initial: ExpenseFormInput):
    if initial.from_scan and st.session_state.get("scan_message"):
        st.success(st.session_state.scan_message)

    with st.form("expense_form"):
        amount = st.text_input("Amount", value=initial.amount, placeholder="0.00")
        merchant = st.text_input("Merchant", value=initial.merchant)
        category = st.selectbox(
            "Category",
            options=EXPENSE_CATEGORIES,
            index=EXPENSE_CATEGORIES.index(initial.category)
            if initial.category in EXPENSE_CATEGORIES else 0,
            format_func=lambda c: f"{category_icon(c)} {c}",
        )
        expense_date = st.text_input("Date (YYYY-MM-DD)", value=initial.date)
        notes = st.text_area("Notes", value=initial.notes)

        col1, col2 = st.columns(2)
        submitted = col1.form_submit_button("💾 Save Expense", type="primary")
        cancelled = col2.form_submit_button("Cancel")

    if cancelled:
        st.session_state.expense_form = None
        st.rerun()

    if submitted:
        form = ExpenseFormInput(
            amount=amount,
            merchant=merchant,
            category=category,
            date=expense_date,
            notes=notes,
            from_scan=initial.from_scan,
        )
        expense, message = run_async(
            components.add_flow.submit(
                form,
                correlation_id=st.session_state.correlation_id,
            )
        )
        if expense is None:
            st.error(message)
        else:
            st.session_state.expense_form = None
            st.session_state.scan_message = None
            st.success(message)
            st.balloons()


def render_history_page(components: AppComponents):
    st.title("📜 History")

    pending = st.session_state.get("pending_delete")
    if pending:
        st.warning("Are you sure you want to delete this expense?")
        col1, col2 = st.columns(2)
        if col1.button("Delete", type="primary"):
            deleted, message = run_async(components.insights.delete_expense(pending))
            st.session_state.pending_delete = None
            if not deleted:
                st.error(message)
            st.rerun()
        if col2.button("Cancel"):
            st.session_state.pending_delete = None
            st.rerun()

    col1, col2 = st.columns([3, 1])
    with col1:
        category = st.selectbox("Category", options=[ALL_CATEGORIES] + EXPENSE_CATEGORIES)
    with col2:
        sort_by = st.radio("Sort by", options=[SORT_BY_DATE, SORT_BY_AMOUNT], horizontal=True)

    expenses, total = components.insights.history(category, sort_by)
    st.caption(f"{len(expenses)} expenses • {money(total)}")

    if not expenses:
        if category == ALL_CATEGORIES:
            st.info("No expenses found. Add some expenses to see them here.")
        else:
            st.info(f"No expenses in {category} category")
        return

    for expense in expenses:
        render_expense_card(expense, deletable=True)


def render_analytics_page(components: AppComponents):
    st.title("📊 Analytics")
    st.caption(f"Your spending insights for {date.today().strftime('%B %Y')}")

    if not components.insights.has_expenses:
        st.info("No data yet. Start adding expenses to see your spending analytics.")
        return

    stats = components.insights.monthly_stats()
    col1, col2 = st.columns(2)
    col1.metric("Total Spent", money(stats.total_spent))
    col2.metric("Daily Average", money(stats.average_per_day))

    st.subheader("Spending by Category")
    breakdown = components.insights.category_breakdown()
    if not breakdown.ranked:
        st.info("No expenses this month.")
        return

    for row in breakdown.ranked:
        st.markdown(
            f"{category_icon(row.category)} **{row.category}** · "
            f"{money(row.amount)} ({format_percentage(row.percentage)})"
        )
        st.progress(min(float(row.percentage) / 100, 1.0))


def render_profile_page(components: AppComponents):
    st.title("👤 Profile")
    auth = components.auth

    if auth.is_signed_in:
        user = auth.current_user
        if user.avatar:
            st.image(user.avatar, width=80)
        st.markdown(f"**{user.display_name}**  \n{user.email}")
        if st.button("Sign Out"):
            try:
                run_async(auth.sign_out())
                st.rerun()
            except StorageError:
                st.error("Failed to sign out")
    else:
        sign_in_tab, sign_up_tab = st.tabs(["Sign In", "Sign Up"])
        with sign_in_tab:
            with st.form("sign_in"):
                email = st.text_input("Email")
                password = st.text_input("Password", type="password")
                if st.form_submit_button("Sign In", type="primary"):
                    try:
                        with st.spinner("Signing in..."):
                            run_async(auth.sign_in(email, password))
                        st.rerun()
                    except (AuthenticationError, StorageError) as e:
                        st.error(str(e))
            if st.button("Continue with Google"):
                try:
                    with st.spinner("Signing in with Google..."):
                        run_async(auth.sign_in_with_google())
                    st.rerun()
                except StorageError:
                    st.error("Google sign in failed")
        with sign_up_tab:
            with st.form("sign_up"):
                name = st.text_input("Name (optional)")
                email = st.text_input("Email")
                password = st.text_input("Password", type="password")
                if st.form_submit_button("Create Account", type="primary"):
                    try:
                        with st.spinner("Creating account..."):
                            run_async(auth.sign_up(email, password, name or None))
                        st.rerun()
                    except (AuthenticationError, StorageError) as e:
                        st.error(str(e))

    st.markdown("---")
    st.subheader("Settings")

    for feature, label in [
        ("export", "📤 Export Data"),
        ("backup", "☁️ Cloud Backup"),
        ("notifications", "🔔 Notifications"),
        ("privacy", "🔒 Privacy"),
        ("help", "❓ Help Center"),
    ]:
        if st.button(label):
            st.info(placeholder_message(feature))

    if st.button("🗑️ Clear All Data"):
        st.session_state.confirm_clear = True
    if st.session_state.get("confirm_clear"):
        st.warning(
            "This will permanently delete all your expenses. This action cannot be undone."
        )
        col1, col2 = st.columns(2)
        if col1.button("Clear", type="primary"):
            cleared, message = run_async(components.insights.clear_all_data())
            st.session_state.confirm_clear = False
            if cleared:
                st.success(message)
            else:
                st.error(message)
        if col2.button("Keep my data"):
            st.session_state.confirm_clear = False
            st.rerun()

    with st.expander("⚙️ Configuration status"):
        status = validate_all_settings()
        for name in ("storage", "scan", "auth", "app"):
            if status.get(name):
                st.markdown(f"✅ {name.title()}")
            else:
                st.markdown(f"❌ {name.title()}: {status.get(f'{name}_error', 'invalid')}")

    st.markdown("---")
    st.caption(
        "Spend Tracker v1.0.0 · Track your monthly expenses with ease. "
        "Scan receipts or add expenses manually. All data is stored on your device."
    )


if __name__ == "__main__":
    main()
