"""
Streamlit Frontend for Expense Tracker

Screens:
1. Splash (while saved data loads)
2. Sign in / Sign up
3. Dashboard with Home, Reports, Insights and Profile tabs

DESIGN PRINCIPLES:
1. The UI never touches storage; it only calls the flows
2. Every error is shown in plain language
3. Budget alerts appear as toasts right after the expense that caused them
"""

import asyncio
from datetime import datetime

import streamlit as st

from expense_tracker.audit import configure_logging
from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.insights import (
    category_percentages,
    filter_by_category,
    month_over_month_change,
    monthly_totals,
    recent_expenses,
    sorted_breakdown,
    top_category,
)
from expense_tracker.models import (
    ALL_CATEGORIES,
    ExpenseForm,
    ProfileForm,
    RegistrationForm,
    SignInForm,
)
from expense_tracker.orchestrator import AccountFlow, ExpenseFlow, create_app_components
from expense_tracker.services import BiometricError, CollectingNotifier
from expense_tracker.store import RecordStore, RecordStoreError
from expense_tracker.validation import ValidationFailedError


GENDERS = ["Male", "Female", "Other"]
MARITAL_STATUSES = ["Single", "Married", "Divorced", "Widowed"]
SUGGESTED_CATEGORIES = ["Food", "Rent", "Transport", "Shopping", "Bills", "Health", "Entertainment", "Other"]


st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
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
def get_components():
    """Get or create application components (cached)."""
    settings = get_settings()
    configure_logging(settings.app.log_level)
    notifier = CollectingNotifier()
    store, account_flow, expense_flow = create_app_components(settings, notifier=notifier)
    return store, account_flow, expense_flow, notifier


def money(amount) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{amount:,.2f}"


def show_alerts(notifier: CollectingNotifier):
    for alert in notifier.drain():
        st.toast(f"**{alert.title}**\n\n{alert.body}", icon="⚠️")


def main():
    """Main application entry point."""
    store, account_flow, expense_flow, notifier = get_components()

    if not store.is_ready:
        render_splash(store)

    show_alerts(notifier)

    if store.current_user is None:
        render_auth_page(account_flow)
    else:
        render_dashboard(store, account_flow, expense_flow)


def render_splash(store: RecordStore):
    """Show the splash screen while the saved data loads."""
    st.title("💸 Expense Tracker")
    with st.spinner("Loading your data..."):
        run_async(store.load())
    st.rerun()


def render_auth_page(account_flow: AccountFlow):
    """Render sign in / sign up."""
    st.title("💸 Expense Tracker")
    st.markdown("Track where your money goes.")

    sign_in_tab, sign_up_tab = st.tabs(["🔑 Sign In", "📝 Sign Up"])

    with sign_in_tab:
        with st.form("sign_in"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign In", type="primary")
        if submitted:
            try:
                account_flow.sign_in(SignInForm(email=email, password=password))
                st.rerun()
            except (ValidationFailedError, RecordStoreError) as e:
                st.error(str(e))

        if account_flow.biometric_available and st.button("🔒 Sign in with biometrics"):
            try:
                account_flow.biometric_sign_in()
                st.rerun()
            except (BiometricError, RecordStoreError) as e:
                st.error(str(e))

    with sign_up_tab:
        with st.form("sign_up"):
            name = st.text_input("Full name")
            col1, col2 = st.columns(2)
            with col1:
                age = st.text_input("Age")
                gender = st.selectbox("Gender", GENDERS)
                phone = st.text_input("Phone")
            with col2:
                monthly_salary = st.text_input("Monthly salary")
                marital_status = st.selectbox("Marital status", MARITAL_STATUSES)
                email = st.text_input("Email", key="sign_up_email")
            password = st.text_input("Password", type="password", key="sign_up_password")
            confirm_password = st.text_input("Confirm password", type="password")
            submitted = st.form_submit_button("Create Account", type="primary")
        if submitted:
            form = RegistrationForm(
                name=name,
                age=age,
                gender=gender,
                marital_status=marital_status,
                phone=phone,
                email=email,
                monthly_salary=monthly_salary,
                password=password,
                confirm_password=confirm_password,
            )
            try:
                account_flow.sign_up(form)
                st.rerun()
            except (ValidationFailedError, RecordStoreError) as e:
                st.error(str(e))


def render_dashboard(store: RecordStore, account_flow: AccountFlow, expense_flow: ExpenseFlow):
    """Render the tabbed dashboard for the signed-in user."""
    user = store.current_user

    st.sidebar.title(f"👋 {user.name}")
    st.sidebar.caption(user.email)
    if st.sidebar.button("Sign Out"):
        account_flow.sign_out()
        st.rerun()

    home, reports, insights, profile = st.tabs(
        ["🏠 Home", "📊 Reports", "💡 Insights", "👤 Profile"]
    )
    with home:
        render_home_tab(store, expense_flow)
    with reports:
        render_reports_tab(store)
    with insights:
        render_insights_tab(store)
    with profile:
        render_profile_tab(store, account_flow)


def render_home_tab(store: RecordStore, expense_flow: ExpenseFlow):
    summary = expense_flow.dashboard()

    col1, col2, col3 = st.columns(3)
    col1.metric("Income", money(summary.income))
    col2.metric("Spent", money(summary.total_expenses), f"{summary.spending_percentage:.1f}%", delta_color="inverse")
    col3.metric("Savings", money(summary.savings))

    if summary.budget_exceeded:
        st.warning("Your expenses have exceeded your monthly income.")

    st.markdown("### ➕ Add Expense")
    with st.form("add_expense", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            category = st.selectbox("Category", SUGGESTED_CATEGORIES, accept_new_options=True)
        with col2:
            amount = st.text_input("Amount")
        submitted = st.form_submit_button("Add", type="primary")
    if submitted:
        try:
            expense_flow.add_expense(ExpenseForm(category=category or "", amount=amount))
            st.rerun()
        except (ValidationFailedError, RecordStoreError) as e:
            st.error(str(e))

    st.markdown("### 🕒 Recent")
    limit = get_settings().app.recent_expense_limit
    recent = recent_expenses(store.current_user.expenses, limit=limit)
    if not recent:
        st.info("No expenses yet. Add your first one above.")
    for expense in recent:
        st.markdown(
            f"**{expense.category}** · {money(expense.amount)} "
            f"· {expense.timestamp.strftime('%d %b %Y %H:%M')}"
        )


def render_reports_tab(store: RecordStore):
    expenses = store.current_user.expenses
    if not expenses:
        st.info("Reports appear once you add expenses.")
        return

    categories = [ALL_CATEGORIES] + list(dict.fromkeys(e.category for e in expenses))
    selected = st.selectbox("Category", categories)
    filtered = filter_by_category(expenses, selected)

    st.markdown("### By category")
    st.bar_chart(
        [{"category": c, "amount": float(a)} for c, a in sorted_breakdown(filtered)],
        x="category",
        y="amount",
    )

    st.markdown("### By month")
    st.bar_chart(
        [{"month": m, "amount": float(a)} for m, a in monthly_totals(filtered).items()],
        x="month",
        y="amount",
    )

    st.dataframe(
        [
            {
                "Date": e.timestamp.strftime("%Y-%m-%d"),
                "Category": e.category,
                "Amount": float(e.amount),
            }
            for e in filtered
        ],
    )


def render_insights_tab(store: RecordStore):
    expenses = store.current_user.expenses
    top = top_category(expenses)
    if top is None:
        st.info("Insights appear once you add expenses.")
        return

    category, amount = top
    st.markdown(f"Your biggest spending category is **{category}** at {money(amount)}.")

    this_month = datetime.now().strftime("%Y-%m")
    change = month_over_month_change(expenses, this_month)
    if change is not None:
        direction = "more" if change > 0 else "less"
        st.markdown(f"You spent **{abs(change):.1f}% {direction}** this month than last month.")

    st.markdown("### Share of spending")
    for label, share in category_percentages(expenses).items():
        st.progress(min(max(float(share) / 100, 0.0), 1.0), text=f"{label}: {share:.1f}%")


def render_profile_tab(store: RecordStore, account_flow: AccountFlow):
    user = store.current_user

    with st.form("profile"):
        name = st.text_input("Full name", value=user.name)
        age = st.text_input("Age", value=str(user.age))
        gender = st.text_input("Gender", value=user.gender)
        marital_status = st.text_input("Marital status", value=user.marital_status)
        phone = st.text_input("Phone", value=user.phone)
        st.text_input("Email", value=user.email, disabled=True)
        monthly_salary = st.text_input("Monthly salary", value=str(user.monthly_salary))
        submitted = st.form_submit_button("Save Profile", type="primary")
    if submitted:
        form = ProfileForm(
            name=name,
            age=age,
            gender=gender,
            marital_status=marital_status,
            phone=phone,
            email=user.email,
            monthly_salary=monthly_salary,
        )
        try:
            account_flow.update_profile(form)
            st.success("Profile saved.")
        except (ValidationFailedError, RecordStoreError) as e:
            st.error(str(e))

    with st.expander("⚙️ Settings status"):
        for section, ok in validate_all_settings().items():
            if section.endswith("_error"):
                continue
            st.markdown(f"{'✅' if ok else '❌'} {section}")


if __name__ == "__main__":
    main()
